"""Word vector vocabulary: model file reader and nearest-neighbor queries."""

from .errors import VocabularyLoadError
from .reader import parse_word2vec_binary, read_word2vec_binary, write_word2vec_binary
from .vector_store import Neighbor, VectorStore, normalize_rows

__all__ = [
    "VocabularyLoadError",
    "parse_word2vec_binary",
    "read_word2vec_binary",
    "write_word2vec_binary",
    "Neighbor",
    "VectorStore",
    "normalize_rows",
]
