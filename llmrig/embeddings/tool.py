"""An embeddable description of a tool, used when tools are retrieved by search."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Protocol

from .embed import Embed, EmbedError, TextEmbedder


class _EmbeddableTool(Protocol):
    def name(self) -> str: ...

    def context(self) -> Any: ...

    def embedding_docs(self) -> list[str]: ...


@dataclass
class ToolSchema(Embed):
    """A tool's name, JSON context and the documents its embeddings are made from."""

    name: str = ""
    context: Any = None
    embedding_docs: list[str] = field(default_factory=list)

    def embed(self, embedder: TextEmbedder) -> None:
        """Add every embedding document to ``embedder``."""
        for doc in self.embedding_docs:
            embedder.embed(doc)

    @classmethod
    def from_tool(cls, tool: _EmbeddableTool) -> ToolSchema:
        """Build a schema from a tool exposing ``name``, ``context`` and ``embedding_docs``.

        Raises :class:`EmbedError` if the tool's context cannot be represented as JSON.
        """
        try:
            context = tool.context()
            json.dumps(context, allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise EmbedError(str(exc)) from exc
        return cls(
            name=tool.name(),
            context=context,
            embedding_docs=list(tool.embedding_docs()),
        )