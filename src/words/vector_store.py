"""In-memory vocabulary of word embeddings.

The store is read-only once built: lookups, exact nearest-neighbor scans and
random term selection may run from any number of threads without locking.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .errors import VocabularyLoadError
from .reader import read_word2vec_binary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Neighbor:
    term: str
    similarity: float


def normalize_rows(vectors: NDArray[np.float32]) -> NDArray[np.float32]:
    norms = np.linalg.norm(vectors, axis=1, keepdims=True)
    norms = np.maximum(norms, 1e-8)
    return (vectors / norms).astype(np.float32)


class VectorStore:
    def __init__(
        self,
        terms: Sequence[str],
        vectors: ArrayLike,
        rng: Optional[random.Random] = None,
    ):
        matrix = np.array(vectors, dtype=np.float32)
        if matrix.ndim != 2 or matrix.shape[0] != len(terms):
            raise ValueError(
                f"expected a ({len(terms)}, dimension) matrix, got shape {matrix.shape}"
            )

        index: Dict[str, int] = {}
        keep: List[int] = []
        for i, term in enumerate(terms):
            if term in index:
                continue
            index[term] = len(keep)
            keep.append(i)

        dropped = len(terms) - len(keep)
        if dropped:
            logger.warning("Ignoring %d duplicate term(s) in vocabulary", dropped)
            matrix = matrix[keep]

        matrix.setflags(write=False)

        self._terms: List[str] = [terms[i] for i in keep]
        self._vectors = matrix
        self._index = index
        self._rng = rng or random.Random()

    @classmethod
    def load(
        cls,
        model_file: str | Path,
        normalize: bool = True,
        rng: Optional[random.Random] = None,
    ) -> "VectorStore":
        logger.info("Loading word model file %s, this may take some time", model_file)
        terms, vectors = read_word2vec_binary(model_file)
        if not terms:
            raise VocabularyLoadError(f"model file {model_file} has an empty vocabulary")

        if normalize:
            vectors = normalize_rows(vectors)

        store = cls(terms, vectors, rng=rng)
        logger.info(
            "Loaded %d terms of dimension %d from %s",
            store.size,
            store.dimension,
            model_file,
        )
        return store

    @property
    def size(self) -> int:
        return len(self._terms)

    @property
    def dimension(self) -> int:
        return int(self._vectors.shape[1])

    @property
    def terms(self) -> List[str]:
        return list(self._terms)

    def __len__(self) -> int:
        return self.size

    def __contains__(self, term: object) -> bool:
        return term in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._terms)

    def vector_of(self, term: str) -> Optional[NDArray[np.float32]]:
        """Embedding of an exact, case-sensitive term, or None."""
        i = self._index.get(term)
        if i is None:
            return None
        return self._vectors[i]

    def similarity(self, first: str, second: str) -> Optional[float]:
        """Dot product of two vocabulary terms, or None if either is unknown."""
        a = self.vector_of(first)
        b = self.vector_of(second)
        if a is None or b is None:
            return None
        return float(np.dot(a, b))

    def nearest_neighbors(self, term: str, count: int) -> Optional[List[Neighbor]]:
        """Top ``count`` terms by dot product with ``term``, excluding ``term``.

        Equal scores keep vocabulary order. Returns None when ``term`` is not
        in the vocabulary.
        """
        if count < 0:
            raise ValueError(f"count must not be negative, got {count}")

        anchor = self._index.get(term)
        if anchor is None:
            return None
        if count == 0:
            return []

        scores = self._vectors @ self._vectors[anchor]
        order = np.lexsort((np.arange(len(scores)), -scores))
        order = order[order != anchor][:count]

        return [Neighbor(self._terms[i], float(scores[i])) for i in order]

    def thesaurus(self, term: str, count: int) -> Optional[List[Neighbor]]:
        return self.nearest_neighbors(term, count)

    def random_term(self) -> str:
        if not self._terms:
            raise VocabularyLoadError("cannot pick a term from an empty vocabulary")
        return self._terms[self._rng.randrange(len(self._terms))]
