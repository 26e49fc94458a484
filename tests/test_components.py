import pytest

from journal_editor.markup import (
    Component,
    ComponentParseError,
    ComponentRegistry,
    find_component_blocks,
    get_block_at_position,
    is_position_in_block,
    parse_component,
    serialize_block,
    serialize_component,
    try_parse_component,
)
from journal_editor.markup.components import parse_value


def test_parse_self_closing_with_props() -> None:
    component = parse_component(
        '<Card title="Hi" count={3} done={true} tags={["a", "b"]} open />'
    )

    assert component.name == "Card"
    assert dict(component.props) == {
        "title": "Hi",
        "count": 3,
        "done": True,
        "tags": ["a", "b"],
        "open": True,
    }
    assert component.children == ()


def test_parse_children() -> None:
    component = parse_component('<List><Item label="a" /><Item label="b" /></List>')

    assert [child.props["label"] for child in component.children] == ["a", "b"]


def test_parse_nested_same_name() -> None:
    component = parse_component("<Box><Box><Box /></Box></Box>")

    assert component.children[0].children[0].name == "Box"


def test_missing_closing_tag_raises() -> None:
    with pytest.raises(ComponentParseError):
        parse_component("<Box>")


def test_lowercase_tag_is_rejected() -> None:
    component, error = try_parse_component("<box />")

    assert component is None
    assert error == "Invalid JSX: missing opening tag"


def test_trailing_content_after_self_closing_tag() -> None:
    with pytest.raises(ComponentParseError):
        parse_component("<A /> extra")


def test_parse_value_literals() -> None:
    assert parse_value("1.5") == 1.5
    assert parse_value("-2") == -2
    assert parse_value("null") is None
    assert parse_value("false") is False
    assert parse_value("'x'") == "x"
    assert parse_value('{"k": 1}') == {"k": 1}
    assert parse_value("someVar") == "someVar"


def test_serialize_component() -> None:
    assert serialize_component(Component("Timer", {"duration": 60})) == (
        "<Timer duration={60} />"
    )
    assert serialize_component(Component("Quote", {"text": 'say "hi"'})) == (
        "<Quote text='say \"hi\"' />"
    )


def test_serialize_children_then_parse_back() -> None:
    tree = Component("List", {"ordered": True}, (Component("Item", {"n": 1}),))

    text = serialize_component(tree)

    assert text == "<List ordered><Item n={1} /></List>"
    assert parse_component(text) == tree


def test_serialize_block_wraps_markup() -> None:
    assert serialize_block(Component("Dot")) == "{{{JSX:<Dot />}}}"


def test_component_with_props_copies() -> None:
    original = Component("Timer", {"duration": 60})

    updated = original.with_props(duration=90, paused=True)

    assert original.props["duration"] == 60
    assert dict(updated.props) == {"duration": 90, "paused": True}


def test_find_blocks_spanning_lines() -> None:
    lines = ["before {{{JSX:<Note", 'text="x" />}}} after']

    [block] = find_component_blocks(lines)

    assert (block.start_line, block.start_col) == (0, 7)
    assert (block.end_line, block.end_col) == (1, 14)
    assert block.component is not None
    assert block.component.props["text"] == "x"


def test_find_blocks_records_errors() -> None:
    [block] = find_component_blocks(["{{{JSX:nope}}}"])

    assert block.component is None
    assert block.error


def test_position_lookup() -> None:
    blocks = find_component_blocks(["ab {{{JSX:<A />}}} cd"])

    assert is_position_in_block(0, 3, blocks[0])
    assert not is_position_in_block(0, 2, blocks[0])
    assert get_block_at_position(0, 10, blocks) is blocks[0]
    assert get_block_at_position(1, 0, blocks) is None


def test_registry_register_and_lookup() -> None:
    registry = ComponentRegistry()
    renderer = object()

    registry.register("Timer", renderer)
    registry.register("Alpha", object())

    assert registry.get("Timer") is renderer
    assert registry.has("Alpha")
    assert registry.names() == ("Alpha", "Timer")
    with pytest.raises(ValueError):
        registry.register("Timer", object())
    with pytest.raises(ValueError):
        registry.register("timer", object())


def test_mixed_quote_string_survives_round_trip() -> None:
    first = parse_component('<Note text={"it\'s \\"x\\""} />')

    again = parse_component(serialize_component(first))

    assert first.props["text"] == 'it\'s "x"'
    assert again == first
    assert parse_component(serialize_component(again)) == first


def test_parse_value_decodes_json_strings() -> None:
    assert parse_value('"caf\\u00e9"') == "café"
    assert parse_value('"a\\"b"') == 'a"b'
