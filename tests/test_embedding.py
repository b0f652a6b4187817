import math

import pytest

from llmrig.embeddings.embedding import Embedding, EmbeddingError, EmbeddingModel


class _FakeModel(EmbeddingModel):
    MAX_DOCUMENTS = 16

    def __init__(self, empty=False):
        self.empty = empty
        self.calls = []

    def ndims(self):
        return 2

    async def embed_texts(self, texts):
        texts = list(texts)
        self.calls.append(texts)
        if self.empty:
            return []
        return [Embedding(document=t, vec=[float(len(t)), 1.0]) for t in texts]


def test_equality_uses_document_only():
    assert Embedding("doc", [1.0, 2.0]) == Embedding("doc", [3.0])
    assert not Embedding("doc", [1.0]) == Embedding("other", [1.0])


def test_hash_consistent_with_equality():
    a = Embedding("doc", [1.0])
    b = Embedding("doc", [2.0])
    assert hash(a) == hash(b)
    assert len({a, b}) == 1


def test_default_embedding():
    embedding = Embedding()
    assert embedding.document == ""
    assert embedding.vec == []


def test_distance_is_symmetric():
    a = Embedding("a", [1.0, 2.0, 3.0])
    b = Embedding("b", [4.0, -5.0, 6.0])
    assert a.distance(b) == b.distance(a)


def test_distance_pinned_value():
    a = Embedding("a", [1.0, 0.0])
    assert a.distance(a) == 0.25


def test_distance_orthogonal_is_zero():
    a = Embedding("a", [1.0, 0.0])
    b = Embedding("b", [0.0, 1.0])
    assert a.distance(b) == 0.0


def test_distance_empty_is_nan():
    result = Embedding("a", []).distance(Embedding("b", []))
    assert str(result) == "nan"
    assert math.isnan(result) is True


def test_error_message_format():
    error = EmbeddingError("ProviderError", "boom")
    assert str(error) == "ProviderError: boom"
    assert error.kind == "ProviderError"


def test_error_unknown_kind():
    with pytest.raises(ValueError):
        EmbeddingError("Nope", "boom")


@pytest.mark.asyncio
async def test_embed_text_uses_embed_texts():
    model = _FakeModel()
    embedding = await EmbeddingModel.embed_text(model, "hello")
    assert embedding == Embedding("hello", [5.0, 1.0])
    assert embedding.vec == [5.0, 1.0]
    assert model.calls == [["hello"]]


@pytest.mark.asyncio
async def test_embed_text_without_result_raises():
    model = _FakeModel(empty=True)
    with pytest.raises(EmbeddingError) as info:
        await EmbeddingModel.embed_text(model, "hello")
    assert info.value.kind == "ResponseError"