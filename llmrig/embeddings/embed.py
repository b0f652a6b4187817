"""Turning values into the texts that an embedding model should embed.

Implement :class:`Embed` by hand, or decorate a dataclass with
:func:`embeddable` and mark the fields to embed with :func:`embed_field`.
"""

from __future__ import annotations

import dataclasses
import json
import math
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Callable, TypeVar

_EMBED_METADATA_KEY = "llmrig.embed"

C = TypeVar("C", bound=type)


class EmbedError(Exception):
    """Raised when a value cannot be turned into texts to embed."""


class TextEmbedder:
    """Accumulates the texts that need to be embedded."""

    def __init__(self) -> None:
        self.texts: list[str] = []

    def embed(self, text: str) -> None:
        """Add ``text`` to the texts to embed."""
        self.texts.append(text)


class Embed(ABC):
    """A value that can hand its texts to a :class:`TextEmbedder`."""

    @abstractmethod
    def embed(self, embedder: TextEmbedder) -> None:
        """Add this value's texts to ``embedder``; raise :class:`EmbedError` on failure."""


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _format_json(value: Any) -> str:
    try:
        return json.dumps(
            value, separators=(",", ":"), sort_keys=True, ensure_ascii=False, allow_nan=False
        )
    except (TypeError, ValueError) as exc:
        raise EmbedError(str(exc)) from exc


def embed_value(value: Any, embedder: TextEmbedder) -> None:
    """Add the texts of ``value`` to ``embedder``.

    :class:`Embed` instances embed themselves; strings, numbers and booleans are
    embedded as their text; ``None`` and dictionaries as compact JSON; lists and
    tuples embed each of their items in turn.
    """
    if isinstance(value, Embed):
        value.embed(embedder)
    elif isinstance(value, str):
        embedder.embed(value)
    elif isinstance(value, bool):
        embedder.embed("true" if value else "false")
    elif isinstance(value, int):
        embedder.embed(str(value))
    elif isinstance(value, float):
        embedder.embed(_format_float(value))
    elif value is None or isinstance(value, dict):
        embedder.embed(_format_json(value))
    elif isinstance(value, (list, tuple)):
        for item in value:
            embed_value(item, embedder)
    else:
        raise EmbedError(f"cannot embed a value of type {type(value).__name__}")


def to_texts(item: Any) -> list[str]:
    """Return the texts that need to be embedded for ``item``."""
    embedder = TextEmbedder()
    embed_value(item, embedder)
    return embedder.texts


@dataclasses.dataclass(frozen=True)
class _EmbedMarker:
    embed_with: Callable[[TextEmbedder, Any], None] | None


def embed_field(*, embed_with: Callable[[TextEmbedder, Any], None] | None = None, **kwargs: Any) -> Any:
    """A dataclass field whose value is embedded by :func:`embeddable` classes.

    Without ``embed_with`` the value is embedded with :func:`embed_value`;
    otherwise ``embed_with(embedder, value)`` is called. Other keyword arguments
    are passed to :func:`dataclasses.field`.
    """
    if embed_with is not None and not callable(embed_with):
        raise TypeError("embed_with must be a callable taking (embedder, value)")
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[_EMBED_METADATA_KEY] = _EmbedMarker(embed_with)
    return dataclasses.field(metadata=metadata, **kwargs)


def embeddable(cls: C) -> C:
    """Give a dataclass an ``embed`` method built from its :func:`embed_field` fields.

    Plain embedded fields come first, then fields with a custom ``embed_with``,
    each group in declaration order.
    """
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise TypeError("embeddable should only be used on dataclasses")

    basic: list[str] = []
    custom: list[tuple[str, Callable[[TextEmbedder, Any], None]]] = []
    for f in dataclasses.fields(cls):
        marker = f.metadata.get(_EMBED_METADATA_KEY)
        if marker is None:
            continue
        if marker.embed_with is None:
            basic.append(f.name)
        else:
            custom.append((f.name, marker.embed_with))

    if not basic and not custom:
        raise TypeError(
            f"{cls.__name__}: add at least one field declared with embed_field()"
        )

    def embed(self: Any, embedder: TextEmbedder) -> None:
        for name in basic:
            embed_value(getattr(self, name), embedder)
        for name, function in custom:
            function(embedder, getattr(self, name))

    embed.__doc__ = "Add the texts of the embedded fields to ``embedder``."
    embed.__qualname__ = f"{cls.__qualname__}.embed"
    cls.embed = embed  # type: ignore[attr-defined]
    Embed.register(cls)
    return cls