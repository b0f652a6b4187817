from llmrig.json_utils import merge, merge_inplace


def test_merge_objects_overrides_and_adds_keys():
    a = {"foo": "bar", "keep": 1}
    b = {"foo": "baz", "extra": True}
    result = merge(a, b)
    assert result == {"foo": "baz", "keep": 1, "extra": True}


def test_merge_does_not_modify_inputs():
    a = {"foo": "bar"}
    b = {"x": 1}
    merge(a, b)
    assert a == {"foo": "bar"}
    assert b == {"x": 1}


def test_merge_non_object_first_returns_first():
    assert merge([1, 2], {"a": 1}) == [1, 2]
    assert merge("text", {"a": 1}) == "text"


def test_merge_non_object_second_returns_first():
    a = {"foo": "bar"}
    assert merge(a, 42) == {"foo": "bar"}


def test_merge_with_empty_object_is_identity():
    a = {"foo": {"nested": 1}}
    assert merge(a, {}) == a
    assert merge({}, a) == a


def test_merge_inplace_updates_first():
    a = {"foo": "bar", "keep": 1}
    merge_inplace(a, {"foo": "baz", "new": None})
    assert a == {"foo": "baz", "keep": 1, "new": None}


def test_merge_inplace_ignores_non_objects():
    a = {"foo": "bar"}
    merge_inplace(a, ["not", "an", "object"])
    assert a == {"foo": "bar"}

    b = [1, 2]
    merge_inplace(b, {"foo": "bar"})
    assert b == [1, 2]