"""Reader for the word2vec binary model format.

The file starts with an ASCII header line ``"<vocab_size> <dimension>\\n"``.
Each entry follows as a UTF-8 term terminated by a single space, then
``dimension`` little-endian float32 values. Writers usually put a newline
after every vector; it is skipped before the next term.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Tuple

import numpy as np
from numpy.typing import NDArray

from .errors import VocabularyLoadError

logger = logging.getLogger(__name__)

FLOAT_DTYPE = np.dtype("<f4")


def _parse_header(data: bytes) -> Tuple[int, int, int]:
    end = data.find(b"\n")
    if end < 0:
        raise VocabularyLoadError("missing header line")

    fields = data[:end].split()
    if len(fields) != 2:
        raise VocabularyLoadError(f"invalid header: {data[:end]!r}")

    try:
        vocab_size, dimension = int(fields[0]), int(fields[1])
    except ValueError as exc:
        raise VocabularyLoadError(f"invalid header: {data[:end]!r}") from exc

    if vocab_size < 0 or dimension <= 0:
        raise VocabularyLoadError(
            f"invalid header values: vocab_size={vocab_size}, dimension={dimension}"
        )

    return vocab_size, dimension, end + 1


def parse_word2vec_binary(data: bytes) -> Tuple[List[str], NDArray[np.float32]]:
    """Parse an in-memory word2vec binary model.

    Returns the terms in file order and a ``(vocab_size, dimension)`` float32
    matrix whose row ``i`` belongs to ``terms[i]``.
    """
    vocab_size, dimension, pos = _parse_header(data)
    vector_bytes = dimension * FLOAT_DTYPE.itemsize

    terms: List[str] = []
    vectors = np.empty((vocab_size, dimension), dtype=np.float32)

    for i in range(vocab_size):
        while pos < len(data) and data[pos:pos + 1] in (b"\n", b"\r"):
            pos += 1

        space = data.find(b" ", pos)
        if space < 0:
            raise VocabularyLoadError(
                f"truncated file: expected {vocab_size} entries, found {i}"
            )

        raw_term = data[pos:space]
        if not raw_term:
            raise VocabularyLoadError(f"empty term at entry {i}")

        try:
            term = raw_term.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise VocabularyLoadError(f"term at entry {i} is not valid UTF-8") from exc

        start = space + 1
        if start + vector_bytes > len(data):
            raise VocabularyLoadError(f"truncated vector for term {term!r} at entry {i}")

        vectors[i] = np.frombuffer(data, dtype=FLOAT_DTYPE, count=dimension, offset=start)
        if not np.isfinite(vectors[i]).all():
            raise VocabularyLoadError(f"non-finite value in vector for term {term!r} at entry {i}")
        terms.append(term)
        pos = start + vector_bytes

    return terms, vectors


def read_word2vec_binary(path: str | Path) -> Tuple[List[str], NDArray[np.float32]]:
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise VocabularyLoadError(f"cannot read model file {path}: {exc}") from exc

    logger.debug("Read %d bytes from %s", len(data), path)
    return parse_word2vec_binary(data)


def write_word2vec_binary(path: str | Path, terms: List[str], vectors: NDArray) -> None:
    """Write terms and vectors in the format read by :func:`read_word2vec_binary`."""
    matrix = np.asarray(vectors, dtype=FLOAT_DTYPE)
    if matrix.ndim != 2 or matrix.shape[0] != len(terms):
        raise ValueError("vectors must be a (len(terms), dimension) matrix")

    with open(path, "wb") as f:
        f.write(f"{len(terms)} {matrix.shape[1]}\n".encode("ascii"))
        for term, row in zip(terms, matrix):
            f.write(term.encode("utf-8") + b" ")
            f.write(row.tobytes())
            f.write(b"\n")
