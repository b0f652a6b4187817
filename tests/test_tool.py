import pytest

from llmrig.embeddings.embed import Embed, EmbedError, to_texts
from llmrig.embeddings.tool import ToolSchema


class Nothing:
    def __init__(self, context=None):
        self._context = context

    def name(self):
        return "nothing"

    def context(self):
        return self._context

    def embedding_docs(self):
        return ["Do nothing."]


class FailingContext(Nothing):
    def context(self):
        raise ValueError("context failure")


def test_from_tool_copies_name_and_docs():
    schema = ToolSchema.from_tool(Nothing())
    assert schema.name == "nothing"
    assert schema.embedding_docs == ["Do nothing."]
    assert schema.context is None


def test_from_tool_keeps_context():
    context = {"kind": "noop", "level": [1, 2]}
    schema = ToolSchema.from_tool(Nothing(context))
    assert schema.context == context


def test_schema_embeds_its_documents():
    schema = ToolSchema(name="t", context=None, embedding_docs=["first", "second"])
    assert to_texts(schema) == ["first", "second"]
    assert isinstance(schema, Embed)


def test_schema_without_docs_embeds_nothing():
    assert to_texts(ToolSchema()) == []


def test_unserializable_context_raises():
    with pytest.raises(EmbedError):
        ToolSchema.from_tool(Nothing(object()))


def test_failing_context_raises_embed_error():
    with pytest.raises(EmbedError, match="context failure"):
        ToolSchema.from_tool(FailingContext())


def test_schemas_compare_by_value():
    a = ToolSchema.from_tool(Nothing({"x": 1}))
    b = ToolSchema(name="nothing", context={"x": 1}, embedding_docs=["Do nothing."])
    assert a == b
    assert a != ToolSchema(name="nothing", context={"x": 2}, embedding_docs=["Do nothing."])