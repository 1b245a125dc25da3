from stache.context import ContextStack
from stache.values import StringValue


def test_innermost_frame_wins():
    stack = ContextStack([{"x": "outer", "y": "y"}, {"x": "inner"}])
    assert stack.resolve("x") == StringValue("inner")
    assert stack.resolve("y") == StringValue("y")
    assert stack.resolve("z") is None


def test_dot_is_top_of_stack():
    stack = ContextStack([{"a": 1}, "top"])
    assert stack.resolve(".") == StringValue("top")
    assert ContextStack().resolve(".") is None


def test_dotted_path():
    stack = ContextStack([{"a": {"b": "ab"}}])
    assert stack.resolve("a.b") == StringValue("ab")
    assert stack.resolve("a.c") is None
    assert stack.resolve("x.b") is None


def test_literal_dotted_key_first():
    stack = ContextStack([{"a.b": "literal", "a": {"b": "nested"}}])
    assert stack.resolve("a.b") == StringValue("literal")


def test_later_segments_do_not_search_the_stack():
    # "b" resolves to the inner empty map, and "c" is not looked up further out
    stack = ContextStack([{"b": {"c": "ERROR"}}, {"b": {}}])
    assert stack.resolve("b.c") is None


def test_first_segment_searches_every_frame():
    stack = ContextStack([{"a": {"b": {"c": "deep"}}}, {"other": 1}])
    assert stack.resolve("a.b.c") == StringValue("deep")


def test_push_and_pop():
    stack = ContextStack([{"x": "1"}])
    with stack.pushed({"x": "2"}):
        assert stack.resolve("x") == StringValue("2")
        assert len(stack) == 2
    assert stack.resolve("x") == StringValue("1")
    assert len(stack) == 1


def test_resolve_does_not_mutate_context():
    data = {"a": {"b": "ab"}}
    stack = ContextStack([data])
    stack.resolve("a.b")
    stack.resolve("a.zzz")
    assert data == {"a": {"b": "ab"}}
