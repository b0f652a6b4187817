# llmrig

Small, composable building blocks for applications built on large language
models. You bring a completion or embedding model; llmrig gives you the
pieces around it.

## What is inside

- **Completion requests** (`llmrig.completion`): `Message`, `Document`,
  `ToolDefinition`, `CompletionRequest`, the response types `TextChoice`,
  `ToolCall` and `CompletionResponse`, and a chainable
  `CompletionRequestBuilder`. Subclass `CompletionModel` to plug in any
  provider or local model. `Prompt`, `Chat` and `Completion` are the abstract
  interfaces that agents implement.
- **Agents** (`llmrig.agent`): `AgentBuilder` combines a model with a
  preamble, static context documents, tools, and dynamic context or tools
  looked up in a vector index at prompt time. The resulting `Agent` supports
  `prompt`, `chat` and `completion`.
- **Embeddings** (`llmrig.embeddings`): the `Embed` abstract base class,
  `TextEmbedder`, `embed_value`, `to_texts`, the `embeddable` class decorator
  with `embed_field`, `Embedding` with its `distance`, the `EmbeddingModel`
  base class, and `ToolSchema` for embedding descriptions of tools.
- **File loading** (`llmrig.loaders.file`): `FileLoader` reads files matched
  by a glob pattern or found in a directory, lazily, with optional error
  skipping.
- **Utilities**: `OneOrMany`, a list that is never empty, and
  `json_utils.merge` / `json_utils.merge_inplace` for shallow merging of JSON
  objects.
- **A terminal chat loop** (`llmrig.cli_chatbot.cli_chatbot`) for anything
  that implements `Chat`.

## A quick tour

### Agents

```python
from llmrig.agent import AgentBuilder


async def main(model):
    agent = (
        AgentBuilder(model)
        .preamble("You are a dictionary assistant.")
        .context("Definition of a *flurbo*: a green alien that lives on cold planets.")
        .temperature(0.5)
        .max_tokens(1024)
        .build()
    )
    print(await agent.prompt("What is a flurbo?"))
```

`model` is an instance of your own `CompletionModel` subclass. Context
documents are given ids `static_doc_0`, `static_doc_1`, … and are carried on
the request; `CompletionRequest.prompt_with_context()` renders them as
`<attachments>` ahead of the prompt.

A tool has a `name` (a string, or a method returning one), an
`async definition(prompt)` returning a `ToolDefinition`, and an
`async call(arguments)`. When the model answers with a `ToolCall`, the agent
runs the named tool and returns its result encoded as JSON text. A call to an
unknown tool raises `ToolNotFoundError`.

For dynamic context, pass `dynamic_context(sample, index)` an object with
`async top_n(query, n)` returning `(score, id, document)` triples. For
dynamic tools, pass `dynamic_tools(sample, index, tools)` an object with
`async top_n_ids(query, n)` returning `(score, id)` pairs, along with the
tools themselves (an iterable or a mapping).

`Agent.completion(prompt, chat_history)` returns a `CompletionRequestBuilder`
already holding the agent's configuration, which you can still change
before calling `send()`.

### Building a request by hand

```python
from llmrig.completion import CompletionRequestBuilder, Document

request = (
    CompletionRequestBuilder(model, "What is the capital of France?")
    .preamble("Be concise.")
    .document(Document(id="doc1", text="France is a country in Europe."))
    .temperature(0.2)
    .build()
)
print(request.prompt_with_context())
```

Call `send()` on the builder instead of `build()` to hand the request straight
to the model. `additional_params(...)` merges new keys into any parameters
already set; `additional_params_opt(...)` replaces them.

### Embeddable types

```python
from dataclasses import dataclass

from llmrig.embeddings.embed import embeddable, embed_field, to_texts


def words(embedder, value):
    for word in value.split():
        embedder.embed(word)


@embeddable
@dataclass
class Greeting:
    message: str = embed_field()
    tags: str = embed_field(embed_with=words, default="")


to_texts(Greeting("Hello, world!", "friendly short"))
# ['Hello, world!', 'friendly', 'short']
```

Fields declared with plain `embed_field()` are embedded first, then fields
with an `embed_with` function, each in declaration order. `to_texts` also
accepts strings, numbers, booleans, `None`, dictionaries (as compact JSON)
and lists or tuples of these.

### Loading files

```python
from llmrig.loaders.file import FileLoader

for text in FileLoader.with_glob("notes/*.txt").read().ignore_errors():
    print(text)
```

`read_with_path()` yields `(path, text)` pairs instead, and
`FileLoader.with_dir("notes")` covers every regular file directly inside a
directory. Files that cannot be read appear in the sequence as
`FileLoaderError` instances until `ignore_errors()` drops them.

### A chat loop in the terminal

```python
import asyncio

from llmrig.cli_chatbot import cli_chatbot

asyncio.run(cli_chatbot(agent))
```

The loop reads lines until `exit` or the end of input, keeping the chat
history between turns. `stdin` and `stdout` can be passed in to use other
streams.

### OneOrMany

```python
from llmrig.one_or_many import OneOrMany

items = OneOrMany.merge([OneOrMany.many(["hello", "word"]), OneOrMany.one("sup")])
assert list(items) == ["hello", "word", "sup"]
```

`OneOrMany.many([])` raises `EmptyListError`.

## Errors

Failures are raised as exceptions: `CompletionError` and `PromptError` for
completions, `EmbeddingError` and `EmbedError` for embeddings,
`FileLoaderError` for file loading and `ToolNotFoundError` when an agent is
asked to call a tool it does not have.

## What llmrig does not do

- It ships no clients for model providers: there is no HTTP code, and every
  `CompletionModel` and `EmbeddingModel` is yours to write.
- It ships no vector store. Dynamic context and dynamic tools work with any
  object that offers the `top_n` / `top_n_ids` coroutines described above.
- It has no helper for extracting structured data into typed records; build
  that on an agent with a tool of your own if you need it.
- It installs no command; the chat loop is a coroutine you start yourself.

## Requirements

Python 3.10 or later. The package has no runtime dependencies; the test suite
uses pytest and pytest-asyncio (`pip install llmrig[test]`).