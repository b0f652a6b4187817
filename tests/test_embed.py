import json
from dataclasses import dataclass

import pytest

from llmrig.embeddings.embed import (
    Embed,
    EmbedError,
    TextEmbedder,
    embed_field,
    embed_value,
    embeddable,
    to_texts,
)


class WordDefinition(Embed):
    def __init__(self, id_, word, definitions):
        self.id = id_
        self.word = word
        self.definitions = definitions

    def embed(self, embedder):
        for part in self.definitions.split(","):
            embedder.embed(part)


def test_text_embedder_accumulates_in_order():
    embedder = TextEmbedder()
    embedder.embed("one")
    embedder.embed("two")
    assert embedder.texts == ["one", "two"]


def test_manual_embed_implementation():
    item = WordDefinition("1", "apple", "a fruit, a tech company")
    assert to_texts(item) == ["a fruit", " a tech company"]


def test_string_is_embedded_as_is():
    assert to_texts("Hello, world!") == ["Hello, world!"]


def test_int_is_embedded_as_text():
    assert to_texts(42) == [str(42)]
    assert to_texts(-7) == [str(-7)]


def test_bool_uses_lowercase_text():
    assert to_texts(True) == ["true"]


def test_integral_float_has_no_fraction():
    assert to_texts(1.0) == ["1"]


def test_fractional_float_round_trips():
    for value in (0.5, 3.25, -2.75, 1e-7, 1e21):
        (text,) = to_texts(value)
        assert float(text) == value
        assert "e" not in text.lower()


def test_dict_is_embedded_as_compact_json():
    assert to_texts({"a": 1}) == ['{"a":1}']


def test_nested_json_round_trips():
    value = {"b": [1, 2, {"c": None}], "a": "x"}
    (text,) = to_texts(value)
    assert json.loads(text) == value
    assert " " not in text


def test_list_embeds_each_item():
    assert to_texts(["x", "y", "z"]) == ["x", "y", "z"]
    assert to_texts([]) == []


def test_embed_value_appends_to_existing_embedder():
    embedder = TextEmbedder()
    embedder.embed("before")
    embed_value(["after"], embedder)
    assert embedder.texts == ["before", "after"]


def test_unsupported_type_raises():
    with pytest.raises(EmbedError):
        to_texts(object())


def test_unserializable_dict_raises():
    with pytest.raises(EmbedError):
        to_texts({"key": object()})


@embeddable
@dataclass
class Greetings:
    message: str = embed_field()


def test_embeddable_basic_field():
    assert to_texts(Greetings(message="Goodbye, world!")) == ["Goodbye, world!"]
    assert isinstance(Greetings("x"), Embed)


def _split_commas(embedder, value):
    for part in value.split(","):
        embedder.embed(part.strip())


@embeddable
@dataclass
class Entry:
    id: str
    definitions: str = embed_field(embed_with=_split_commas)
    word: str = embed_field(default="")


def test_basic_fields_come_before_custom_fields():
    entry = Entry(id="0", definitions="red,round", word="apple")
    assert to_texts(entry) == ["apple", "red", "round"]


def test_unmarked_fields_are_not_embedded():
    entry = Entry(id="identifier", definitions="one", word="w")
    assert "identifier" not in to_texts(entry)


def test_embed_field_keeps_dataclass_options():
    entry = Entry(id="0", definitions="only")
    assert entry.word == ""
    assert to_texts(entry) == ["", "only"]


def test_embeddable_requires_marked_field():
    class Plain:
        value: str

    plain = dataclass(Plain)
    with pytest.raises(TypeError):
        embeddable(plain)


def test_embeddable_requires_dataclass():
    class NotData:
        pass

    with pytest.raises(TypeError):
        embeddable(NotData)


def test_embed_with_must_be_callable():
    with pytest.raises(TypeError):
        embed_field(embed_with="not callable")


def test_custom_function_errors_propagate():
    def failing(embedder, value):
        raise EmbedError("bad value")

    @embeddable
    @dataclass
    class Broken:
        value: str = embed_field(embed_with=failing)

    with pytest.raises(EmbedError, match="bad value"):
        to_texts(Broken("x"))