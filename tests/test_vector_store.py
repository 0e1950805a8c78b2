"""Tests for VectorStore lookups and nearest-neighbor queries."""

import random

import numpy as np
import pytest

from words import Neighbor, VectorStore, VocabularyLoadError, normalize_rows, write_word2vec_binary

from conftest import TERMS, VECTORS


class TestVectorStore:
    def test_size_and_dimension(self, words):
        assert words.size == 3
        assert len(words) == 3
        assert words.dimension == 2
        assert words.terms == TERMS

    def test_contains_is_case_sensitive(self, words):
        assert "cat" in words
        assert "Cat" not in words
        assert "xyzzy" not in words

    def test_vector_of(self, words):
        np.testing.assert_allclose(words.vector_of("dog"), [0.6, 0.8])
        assert words.vector_of("xyzzy") is None

    def test_vectors_are_read_only(self, words):
        with pytest.raises(ValueError):
            words.vector_of("cat")[0] = 5.0

    def test_similarity_is_dot_product(self, words):
        assert words.similarity("cat", "dog") == pytest.approx(0.6)
        assert words.similarity("dog", "fish") == pytest.approx(0.8)
        assert words.similarity("cat", "fish") == pytest.approx(0.0)
        assert words.similarity("cat", "xyzzy") is None

    def test_duplicate_terms_keep_first(self):
        store = VectorStore(["a", "b", "a"], [[1, 0], [0, 1], [5, 5]])

        assert store.terms == ["a", "b"]
        np.testing.assert_array_equal(store.vector_of("a"), [1, 0])

    def test_rejects_mismatched_matrix(self):
        with pytest.raises(ValueError):
            VectorStore(["a", "b"], [[1, 0]])

    def test_random_term_uses_rng(self):
        store = VectorStore(TERMS, VECTORS, rng=random.Random(7))
        picks = {store.random_term() for _ in range(50)}

        assert picks <= set(TERMS)

    def test_random_term_empty_vocabulary(self):
        store = VectorStore([], np.zeros((0, 2)))

        with pytest.raises(VocabularyLoadError):
            store.random_term()


class TestNearestNeighbors:
    def test_sorted_by_similarity_excluding_term(self, words):
        neighbors = words.nearest_neighbors("dog", 2)

        assert [n.term for n in neighbors] == ["fish", "cat"]
        assert neighbors[0].similarity == pytest.approx(0.8)
        assert neighbors[1].similarity == pytest.approx(0.6)

    def test_count_limits_result(self, words):
        neighbors = words.nearest_neighbors("cat", 1)

        assert neighbors == [Neighbor("dog", pytest.approx(0.6))]

    def test_count_larger_than_vocabulary(self, words):
        neighbors = words.nearest_neighbors("cat", 10)

        assert [n.term for n in neighbors] == ["dog", "fish"]

    def test_zero_count(self, words):
        assert words.nearest_neighbors("cat", 0) == []

    def test_unknown_term(self, words):
        assert words.nearest_neighbors("xyzzy", 3) is None

    def test_negative_count(self, words):
        with pytest.raises(ValueError):
            words.nearest_neighbors("cat", -1)

    def test_ties_keep_vocabulary_order(self):
        store = VectorStore(["anchor", "b", "a", "c"], [[1, 0], [0.5, 0], [0.5, 0], [0.9, 0]])

        neighbors = store.thesaurus("anchor", 3)

        assert [n.term for n in neighbors] == ["c", "b", "a"]

    def test_identical_vectors_still_exclude_anchor(self):
        store = VectorStore(["x", "y"], [[1, 0], [1, 0]])

        assert [n.term for n in store.nearest_neighbors("y", 5)] == ["x"]


class TestLoad:
    def test_load_normalizes_rows(self, tmp_path):
        path = tmp_path / "model.bin"
        write_word2vec_binary(path, ["long", "short"], np.array([[3, 4], [0, 0.5]], dtype=np.float32))

        store = VectorStore.load(path)

        np.testing.assert_allclose(store.vector_of("long"), [0.6, 0.8], rtol=1e-6)
        np.testing.assert_allclose(store.vector_of("short"), [0, 1], rtol=1e-6)

    def test_load_without_normalizing(self, tmp_path):
        path = tmp_path / "model.bin"
        write_word2vec_binary(path, ["long"], np.array([[3, 4]], dtype=np.float32))

        store = VectorStore.load(path, normalize=False)

        np.testing.assert_array_equal(store.vector_of("long"), [3, 4])

    def test_load_empty_vocabulary(self, tmp_path):
        path = tmp_path / "empty.bin"
        path.write_bytes(b"0 2\n")

        with pytest.raises(VocabularyLoadError, match="empty vocabulary"):
            VectorStore.load(path)

    def test_load_fixture_model(self, model_file):
        store = VectorStore.load(model_file)

        assert store.terms == TERMS


def test_normalize_rows_handles_zero_vector():
    normalized = normalize_rows(np.array([[0, 0], [2, 0]], dtype=np.float32))

    np.testing.assert_array_equal(normalized[0], [0, 0])
    np.testing.assert_allclose(normalized[1], [1, 0])
