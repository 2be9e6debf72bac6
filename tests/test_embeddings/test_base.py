"""Tests for embedding base class."""

import math

import pytest

from activity_digest.embeddings.base import BaseEmbedder, cosine_similarity


class FakeEmbedder(BaseEmbedder):
    def embed(self, text):
        return [float(len(text)), 1.0]

    def embed_query(self, text):
        return [1.0, 0.0]


def test_base_embedder_is_abstract():
    with pytest.raises(TypeError):
        BaseEmbedder()


def test_embed_batch_uses_embed():
    assert FakeEmbedder().embed_batch(["ab", "abcd"]) == [[2.0, 1.0], [4.0, 1.0]]


def test_cosine_similarity():
    assert cosine_similarity([1.0, 0.0], [1.0, 0.0]) == pytest.approx(1.0)
    assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)
    assert cosine_similarity([1.0, 1.0], [1.0, 0.0]) == pytest.approx(1 / math.sqrt(2))


def test_cosine_similarity_degenerate():
    assert cosine_similarity([], []) == 0.0
    assert cosine_similarity([1.0], [1.0, 2.0]) == 0.0
    assert cosine_similarity([0.0, 0.0], [1.0, 1.0]) == 0.0
