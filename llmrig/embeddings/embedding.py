"""Embedding vectors and the interface of embedding models."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar, Iterable

_ERROR_KINDS = frozenset(
    {"HttpError", "JsonError", "DocumentError", "ResponseError", "ProviderError"}
)


class EmbeddingError(Exception):
    """Error raised while generating or processing embeddings.

    ``kind`` is one of ``HttpError``, ``JsonError``, ``DocumentError``,
    ``ResponseError`` or ``ProviderError``.
    """

    def __init__(self, kind: str, message: object) -> None:
        if kind not in _ERROR_KINDS:
            raise ValueError(f"unknown embedding error kind: {kind!r}")
        self.kind = kind
        self.message = str(message)
        super().__init__(f"{kind}: {self.message}")


@dataclass(eq=False)
class Embedding:
    """A document together with its embedding vector.

    Two embeddings compare equal when their documents are equal.
    """

    document: str = ""
    vec: list[float] = field(default_factory=list)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Embedding):
            return NotImplemented
        return self.document == other.document

    def __hash__(self) -> int:
        return hash(self.document)

    def distance(self, other: Embedding) -> float:
        """Dot product of the vectors divided by the product of their lengths."""
        dot_product = math.fsum(x * y for x, y in zip(self.vec, other.vec))
        product_of_lengths = len(self.vec) * len(other.vec)
        if product_of_lengths == 0:
            return math.nan
        return dot_product / product_of_lengths


class EmbeddingModel(ABC):
    """A model that turns text documents into embeddings."""

    #: Maximum number of documents that can be embedded in a single request.
    MAX_DOCUMENTS: ClassVar[int]

    @abstractmethod
    def ndims(self) -> int:
        """Number of dimensions of the embedding vectors."""

    @abstractmethod
    async def embed_texts(self, texts: Iterable[str]) -> list[Embedding]:
        """Embed several text documents in a single request."""

    async def embed_text(self, text: str) -> Embedding:
        """Embed a single text document."""
        embeddings = await self.embed_texts([text])
        if not embeddings:
            raise EmbeddingError("ResponseError", "no embedding was returned")
        return embeddings[-1]