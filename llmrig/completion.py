"""Completion requests and responses, and the interfaces of completion models.

:class:`Prompt` and :class:`Chat` are the high-level interfaces that users call.
:class:`Completion` returns a request builder that can be adjusted before it is
sent. :class:`CompletionModel` is the interface that model providers implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, TypeVar, Union

from .json_utils import merge

R = TypeVar("R")

_COMPLETION_ERROR_KINDS = frozenset(
    {"HttpError", "JsonError", "RequestError", "ResponseError", "ProviderError"}
)
_PROMPT_ERROR_KINDS = frozenset({"CompletionError", "ToolCallError"})


class CompletionError(Exception):
    """Error raised while building, sending or parsing a completion.

    ``kind`` is one of ``HttpError``, ``JsonError``, ``RequestError``,
    ``ResponseError`` or ``ProviderError``.
    """

    def __init__(self, kind: str, message: object) -> None:
        if kind not in _COMPLETION_ERROR_KINDS:
            raise ValueError(f"unknown completion error kind: {kind!r}")
        self.kind = kind
        self.message = str(message)
        super().__init__(f"{kind}: {self.message}")


class PromptError(Exception):
    """Error raised by :class:`Prompt` and :class:`Chat` implementations.

    ``kind`` is ``CompletionError`` or ``ToolCallError``.
    """

    def __init__(self, kind: str, message: object) -> None:
        if kind not in _PROMPT_ERROR_KINDS:
            raise ValueError(f"unknown prompt error kind: {kind!r}")
        self.kind = kind
        self.message = str(message)
        super().__init__(f"{kind}: {self.message}")


# ----------------------------------------------------------------
# Request models
# ----------------------------------------------------------------


@dataclass
class Message:
    """A chat message; ``role`` is "system", "user" or "assistant"."""

    role: str
    content: str


_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t", "\0": "\\0"}


def _quoted(value: str) -> str:
    parts = []
    for char in value:
        if char in _ESCAPES:
            parts.append(_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            parts.append(f"\\u{{{ord(char):x}}}")
        else:
            parts.append(char)
    return '"' + "".join(parts) + '"'


@dataclass
class Document:
    """A context document sent along with a prompt."""

    id: str
    text: str
    additional_props: dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        if self.additional_props:
            metadata = " ".join(
                f"{key}: {_quoted(value)}"
                for key, value in sorted(self.additional_props.items())
            )
            body = f"<metadata {metadata} />\n{self.text}"
        else:
            body = self.text
        return f"<file id: {self.id}>\n{body}\n</file>\n"


@dataclass
class ToolDefinition:
    """Name, description and JSON-schema parameters of a tool."""

    name: str
    description: str
    parameters: Any


# ----------------------------------------------------------------
# Responses
# ----------------------------------------------------------------


@dataclass
class TextChoice:
    """A completion answered with a plain message."""

    text: str


@dataclass
class ToolCall:
    """A completion answered with a call to the tool ``name``."""

    name: str
    arguments: Any


@dataclass
class CompletionResponse(Generic[R]):
    """The choice made by the model together with the provider's raw response."""

    choice: Union[TextChoice, ToolCall]
    raw_response: R


@dataclass
class CompletionRequest:
    """A provider-independent completion request."""

    prompt: str
    preamble: str | None = None
    chat_history: list[Message] = field(default_factory=list)
    documents: list[Document] = field(default_factory=list)
    tools: list[ToolDefinition] = field(default_factory=list)
    temperature: float | None = None
    max_tokens: int | None = None
    additional_params: Any = None

    def prompt_with_context(self) -> str:
        """The prompt preceded by the documents as attachments, if there are any."""
        if not self.documents:
            return self.prompt
        attachments = "".join(str(doc) for doc in self.documents)
        return f"<attachments>\n{attachments}</attachments>\n\n{self.prompt}"


# ----------------------------------------------------------------
# Interfaces
# ----------------------------------------------------------------


class CompletionModel(ABC):
    """A model that turns completion requests into completion responses."""

    @abstractmethod
    async def completion(self, request: CompletionRequest) -> CompletionResponse[Any]:
        """Generate a completion response for ``request``."""

    def completion_request(self, prompt: str) -> CompletionRequestBuilder:
        """Start a request builder for ``prompt`` bound to this model."""
        return CompletionRequestBuilder(self, prompt)


class Prompt(ABC):
    """One-shot prompt interface: prompt in, response out."""

    @abstractmethod
    async def prompt(self, prompt: str) -> str:
        """Send ``prompt`` and return the response text or the tool result."""


class Chat(ABC):
    """Chat interface: prompt and history in, response out."""

    @abstractmethod
    async def chat(self, prompt: str, chat_history: list[Message]) -> str:
        """Send ``prompt`` with ``chat_history`` and return the response."""


class Completion(ABC):
    """Low-level interface returning a request builder that can still be changed."""

    @abstractmethod
    async def completion(
        self, prompt: str, chat_history: list[Message]
    ) -> CompletionRequestBuilder:
        """Return a request builder for ``prompt`` and ``chat_history``."""


class CompletionRequestBuilder:
    """Fluent builder for a :class:`CompletionRequest` bound to a model."""

    def __init__(self, model: CompletionModel, prompt: str) -> None:
        self._model = model
        self._prompt = prompt
        self._preamble: str | None = None
        self._chat_history: list[Message] = []
        self._documents: list[Document] = []
        self._tools: list[ToolDefinition] = []
        self._temperature: float | None = None
        self._max_tokens: int | None = None
        self._additional_params: Any = None

    def preamble(self, preamble: str) -> CompletionRequestBuilder:
        """Set the system prompt."""
        self._preamble = preamble
        return self

    def message(self, message: Message) -> CompletionRequestBuilder:
        """Append a message to the chat history."""
        self._chat_history.append(message)
        return self

    def messages(self, messages: Iterable[Message]) -> CompletionRequestBuilder:
        """Append several messages to the chat history."""
        self._chat_history.extend(messages)
        return self

    def document(self, document: Document) -> CompletionRequestBuilder:
        """Add a context document."""
        self._documents.append(document)
        return self

    def documents(self, documents: Iterable[Document]) -> CompletionRequestBuilder:
        """Add several context documents."""
        self._documents.extend(documents)
        return self

    def tool(self, tool: ToolDefinition) -> CompletionRequestBuilder:
        """Add a tool definition."""
        self._tools.append(tool)
        return self

    def tools(self, tools: Iterable[ToolDefinition]) -> CompletionRequestBuilder:
        """Add several tool definitions."""
        self._tools.extend(tools)
        return self

    def additional_params(self, params: Any) -> CompletionRequestBuilder:
        """Merge provider-specific parameters into those already set."""
        if self._additional_params is None:
            self._additional_params = params
        else:
            self._additional_params = merge(self._additional_params, params)
        return self

    def additional_params_opt(self, params: Any) -> CompletionRequestBuilder:
        """Replace the provider-specific parameters (``None`` clears them)."""
        self._additional_params = params
        return self

    def temperature(self, temperature: float) -> CompletionRequestBuilder:
        """Set the sampling temperature."""
        self._temperature = temperature
        return self

    def temperature_opt(self, temperature: float | None) -> CompletionRequestBuilder:
        """Set or clear the sampling temperature."""
        self._temperature = temperature
        return self

    def max_tokens(self, max_tokens: int) -> CompletionRequestBuilder:
        """Set the maximum number of tokens to generate."""
        self._max_tokens = max_tokens
        return self

    def max_tokens_opt(self, max_tokens: int | None) -> CompletionRequestBuilder:
        """Set or clear the maximum number of tokens to generate."""
        self._max_tokens = max_tokens
        return self

    def build(self) -> CompletionRequest:
        """Return the request built so far."""
        return CompletionRequest(
            prompt=self._prompt,
            preamble=self._preamble,
            chat_history=list(self._chat_history),
            documents=list(self._documents),
            tools=list(self._tools),
            temperature=self._temperature,
            max_tokens=self._max_tokens,
            additional_params=self._additional_params,
        )

    async def send(self) -> CompletionResponse[Any]:
        """Build the request and send it to the model."""
        return await self._model.completion(self.build())