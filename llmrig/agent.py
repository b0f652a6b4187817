"""LLM agents: a completion model with a preamble, context documents and tools.

Context documents and tools can be static, always sent with every prompt, or
dynamic, looked up in a vector index at prompt time.

An index used for dynamic context provides ``async top_n(query, n)``, which
returns ``(score, id, document)`` triples. An index used for dynamic tools
provides ``async top_n_ids(query, n)``, which returns ``(score, id)`` pairs.

A tool has a ``name`` (a string or a method returning one), an
``async definition(prompt)`` returning a
:class:`~llmrig.completion.ToolDefinition`, and an ``async call(arguments)``
whose result is returned to the caller as JSON text.
"""

from __future__ import annotations

import copy
import json
import logging
from typing import Any, Iterable, Mapping

from .completion import (
    Chat,
    Completion,
    CompletionError,
    CompletionModel,
    CompletionRequestBuilder,
    Document,
    Message,
    Prompt,
    PromptError,
    TextChoice,
    ToolCall,
    ToolDefinition,
)

logger = logging.getLogger(__name__)


class ToolNotFoundError(PromptError):
    """Raised when the model calls a tool the agent does not know."""

    def __init__(self, name: str) -> None:
        self.tool_name = name
        super().__init__("ToolCallError", f"ToolNotFoundError: {name}")


def _tool_name(tool: Any) -> str:
    name = tool.name
    return name() if callable(name) else name


def _pretty(doc: Any) -> str:
    try:
        return json.dumps(doc, indent=2, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(doc)


class Agent(Completion, Prompt, Chat):
    """A completion model combined with a preamble, context documents and tools."""

    def __init__(
        self,
        model: CompletionModel,
        preamble: str,
        static_context: list[Document],
        static_tools: list[str],
        temperature: float | None,
        max_tokens: int | None,
        additional_params: Any,
        dynamic_context: list[tuple[int, Any]],
        dynamic_tools: list[tuple[int, Any]],
        tools: dict[str, Any],
    ) -> None:
        self.model = model
        self.preamble = preamble
        self.static_context = static_context
        self.static_tools = static_tools
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.additional_params = additional_params
        self.dynamic_context = dynamic_context
        self.dynamic_tools = dynamic_tools
        self.tools = tools

    async def _definitions(self, names: Iterable[str], prompt: str) -> list[ToolDefinition]:
        definitions = []
        for name in names:
            tool = self.tools.get(name)
            if tool is None:
                logger.warning("Tool implementation not found in toolset: %s", name)
                continue
            definitions.append(await tool.definition(prompt))
        return definitions

    async def completion(
        self, prompt: str, chat_history: list[Message]
    ) -> CompletionRequestBuilder:
        """Return a request builder holding the agent's whole configuration."""
        dynamic_documents: list[Document] = []
        for sample, index in self.dynamic_context:
            try:
                results = await index.top_n(prompt, sample)
            except Exception as exc:
                raise CompletionError("RequestError", exc) from exc
            dynamic_documents.extend(
                Document(id=doc_id, text=_pretty(doc)) for _, doc_id, doc in results
            )

        dynamic_tool_names: list[str] = []
        for sample, index in self.dynamic_tools:
            try:
                results = await index.top_n_ids(prompt, sample)
            except Exception as exc:
                raise CompletionError("RequestError", exc) from exc
            dynamic_tool_names.extend(tool_id for _, tool_id in results)
        dynamic_definitions = await self._definitions(dynamic_tool_names, prompt)

        static_definitions = await self._definitions(self.static_tools, prompt)

        return (
            self.model.completion_request(prompt)
            .preamble(self.preamble)
            .messages(list(chat_history))
            .documents([*self.static_context, *dynamic_documents])
            .tools([*static_definitions, *dynamic_definitions])
            .temperature_opt(self.temperature)
            .max_tokens_opt(self.max_tokens)
            .additional_params_opt(copy.deepcopy(self.additional_params))
        )

    async def prompt(self, prompt: str) -> str:
        """Send ``prompt`` with an empty chat history."""
        return await self.chat(prompt, [])

    async def chat(self, prompt: str, chat_history: list[Message]) -> str:
        """Send ``prompt`` and return the message, or the called tool's JSON result."""
        try:
            builder = await self.completion(prompt, chat_history)
            response = await builder.send()
        except CompletionError as exc:
            raise PromptError("CompletionError", exc) from exc

        choice = response.choice
        if isinstance(choice, TextChoice):
            return choice.text
        if isinstance(choice, ToolCall):
            return await self._call_tool(choice.name, choice.arguments)
        raise PromptError("CompletionError", f"unexpected model choice: {choice!r}")

    async def _call_tool(self, name: str, arguments: Any) -> str:
        tool = self.tools.get(name)
        if tool is None:
            raise ToolNotFoundError(name)
        try:
            result = await tool.call(arguments)
        except PromptError:
            raise
        except Exception as exc:
            raise PromptError("ToolCallError", exc) from exc
        try:
            return json.dumps(result, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise PromptError("ToolCallError", f"JsonError: {exc}") from exc


class AgentBuilder:
    """Fluent builder for an :class:`Agent`."""

    def __init__(self, model: CompletionModel) -> None:
        self._model = model
        self._preamble: str | None = None
        self._static_context: list[Document] = []
        self._static_tools: list[str] = []
        self._temperature: float | None = None
        self._max_tokens: int | None = None
        self._additional_params: Any = None
        self._dynamic_context: list[tuple[int, Any]] = []
        self._dynamic_tools: list[tuple[int, Any]] = []
        self._tools: dict[str, Any] = {}

    def preamble(self, preamble: str) -> AgentBuilder:
        """Set the system prompt."""
        self._preamble = preamble
        return self

    def append_preamble(self, doc: str) -> AgentBuilder:
        """Append a line to the system prompt."""
        self._preamble = f"{self._preamble or ''}\n{doc}"
        return self

    def context(self, doc: str) -> AgentBuilder:
        """Add a context document sent with every prompt."""
        self._static_context.append(
            Document(id=f"static_doc_{len(self._static_context)}", text=doc)
        )
        return self

    def tool(self, tool: Any) -> AgentBuilder:
        """Add a tool offered with every prompt."""
        name = _tool_name(tool)
        self._tools[name] = tool
        self._static_tools.append(name)
        return self

    def dynamic_context(self, sample: int, index: Any) -> AgentBuilder:
        """On each prompt, add the ``sample`` closest documents found in ``index``."""
        self._dynamic_context.append((sample, index))
        return self

    def dynamic_tools(
        self, sample: int, index: Any, tools: Iterable[Any] | Mapping[str, Any]
    ) -> AgentBuilder:
        """On each prompt, offer the ``sample`` tools of ``tools`` closest in ``index``."""
        self._dynamic_tools.append((sample, index))
        values = tools.values() if isinstance(tools, Mapping) else tools
        for tool in values:
            self._tools[_tool_name(tool)] = tool
        return self

    def temperature(self, temperature: float) -> AgentBuilder:
        """Set the sampling temperature."""
        self._temperature = temperature
        return self

    def max_tokens(self, max_tokens: int) -> AgentBuilder:
        """Set the maximum number of tokens to generate."""
        self._max_tokens = max_tokens
        return self

    def additional_params(self, params: Any) -> AgentBuilder:
        """Set provider-specific parameters."""
        self._additional_params = params
        return self

    def build(self) -> Agent:
        """Return the configured agent."""
        return Agent(
            model=self._model,
            preamble=self._preamble or "",
            static_context=list(self._static_context),
            static_tools=list(self._static_tools),
            temperature=self._temperature,
            max_tokens=self._max_tokens,
            additional_params=self._additional_params,
            dynamic_context=list(self._dynamic_context),
            dynamic_tools=list(self._dynamic_tools),
            tools=dict(self._tools),
        )