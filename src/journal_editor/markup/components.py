"""Inline component blocks: ``{{{JSX:<Name prop="v" flag />}}}``.

The reader is a small hand-written scanner. Nesting is tracked with an
explicit work stack rather than recursion, so adversarial input cannot
exhaust the interpreter stack. Parse failures raise ``ComponentParseError``,
which the segment parser and block finder capture as error strings.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

BLOCK_PATTERN = re.compile(r"\{\{\{JSX:(.*?)\}\}\}", re.DOTALL)
BLOCK_OPEN = "{{{JSX:"
BLOCK_CLOSE = "}}}"

_TAG_NAME = re.compile(r"[A-Z][a-zA-Z0-9]*")
_PROP_NAME = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")
_NUMBER = re.compile(r"^-?\d+(\.\d+)?$")


class ComponentParseError(RuntimeError):
    """Raised for malformed component markup."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


@dataclass(frozen=True, slots=True)
class Component:
    """A parsed component: name, read-only props and child components."""

    name: str
    props: Mapping[str, Any] = field(default_factory=dict)
    children: Tuple["Component", ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "props", MappingProxyType(dict(self.props)))
        object.__setattr__(self, "children", tuple(self.children))

    def with_props(self, **changes: Any) -> "Component":
        return Component(self.name, {**self.props, **changes}, self.children)


@dataclass(frozen=True, slots=True)
class ComponentBlock:
    """A block located in a buffer; may span several lines."""

    start_line: int
    start_col: int
    end_line: int
    end_col: int
    raw: str
    component: Optional[Component] = None
    error: Optional[str] = None


@dataclass(slots=True)
class _Node:
    name: str
    props: Dict[str, Any]
    children: List["_Node"] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class _Tag:
    name: str
    props: Dict[str, Any]
    self_closing: bool
    end: int


def parse_value(raw: str) -> Any:
    """Interpret the inside of a ``prop={...}`` expression."""

    value = raw.strip()
    if value == "true":
        return True
    if value == "false":
        return False
    if value in ("null", "undefined"):
        return None
    if _NUMBER.match(value):
        return float(value) if "." in value else int(value)
    if len(value) >= 2 and value[0] == value[-1] == '"':
        try:
            return json.loads(value)
        except ValueError:
            return value[1:-1]
    if len(value) >= 2 and value[0] == value[-1] == "'":
        return value[1:-1]
    if (value.startswith("[") and value.endswith("]")) or (
        value.startswith("{") and value.endswith("}")
    ):
        try:
            return json.loads(value)
        except ValueError:
            return value
    return value


def _scan_braced(text: str, start: int) -> int:
    """Index just past the ``}`` balancing ``text[start] == "{"``, or -1."""

    depth = 0
    quote: Optional[str] = None
    i = start
    while i < len(text):
        ch = text[i]
        if quote is not None:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return -1


def _read_props(text: str, pos: int) -> Tuple[Dict[str, Any], int, bool]:
    """Scan attributes up to ``>`` or ``/>``; end is -1 if the tag never closes."""

    props: Dict[str, Any] = {}
    i = pos
    while i < len(text):
        if text[i].isspace():
            i += 1
            continue
        if text.startswith("/>", i):
            return props, i + 2, True
        if text[i] == ">":
            return props, i + 1, False
        match = _PROP_NAME.match(text, i)
        if match is None:
            i += 1
            continue
        key = match.group()
        i = match.end()
        if i >= len(text) or text[i] != "=":
            props[key] = True
            continue
        opener = text[i + 1] if i + 1 < len(text) else ""
        if opener == "{":
            close = _scan_braced(text, i + 1)
            if close < 0:
                props[key] = True
                i += 1
                continue
            props[key] = parse_value(text[i + 2 : close - 1])
            i = close
        elif opener in ("\"", "'"):
            close = text.find(opener, i + 2)
            if close < 0:
                props[key] = True
                i += 1
                continue
            props[key] = text[i + 2 : close]
            i = close + 1
        else:
            props[key] = True
            i += 1
    return props, -1, False


def _read_open_tag(text: str, pos: int) -> Optional[_Tag]:
    if not text.startswith("<", pos):
        return None
    name = _TAG_NAME.match(text, pos + 1)
    if name is None:
        return None
    props, end, self_closing = _read_props(text, name.end())
    if end < 0:
        return None
    return _Tag(name.group(), props, self_closing, end)


def _find_matching_close(text: str, start: int, name: str) -> int:
    """Offset of the ``</name>`` closing the tag whose body begins at ``start``."""

    opener = f"<{name}"
    closer = f"</{name}>"
    depth = 1
    i = start
    while i < len(text):
        if text.startswith(closer, i):
            depth -= 1
            if depth == 0:
                return i
            i += len(closer)
            continue
        if text.startswith(opener, i):
            tag = _read_open_tag(text, i)
            if tag is not None and tag.name == name:
                if not tag.self_closing:
                    depth += 1
                i = tag.end
                continue
        i += 1
    return -1


def _skip_space(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def _parse_children(body: str) -> List[_Node]:
    roots: List[_Node] = []
    work: List[Tuple[str, List[_Node]]] = [(body, roots)]
    while work:
        text, siblings = work.pop()
        pos = _skip_space(text, 0)
        while pos < len(text):
            tag = _read_open_tag(text, pos)
            if tag is None:
                # Text children are not modelled.
                break
            node = _Node(tag.name, tag.props)
            siblings.append(node)
            if tag.self_closing:
                pos = _skip_space(text, tag.end)
                continue
            close = _find_matching_close(text, tag.end, tag.name)
            if close < 0:
                raise ComponentParseError(
                    f"Missing closing tag for {tag.name}", source=text
                )
            work.append((text[tag.end : close], node.children))
            pos = _skip_space(text, close + len(tag.name) + 3)
    return roots


def _freeze(nodes: Sequence[_Node]) -> Tuple[Component, ...]:
    built: Dict[int, Component] = {}
    stack: List[Tuple[_Node, bool]] = [(node, False) for node in nodes]
    while stack:
        node, expanded = stack.pop()
        if expanded:
            built[id(node)] = Component(
                node.name,
                node.props,
                tuple(built.pop(id(child)) for child in node.children),
            )
        else:
            stack.append((node, True))
            stack.extend((child, False) for child in node.children)
    return tuple(built.pop(id(node)) for node in nodes)


def parse_component(source: str) -> Component:
    """Parse ``<Name .../>`` or ``<Name ...>children</Name>``."""

    text = source.strip()
    tag = _read_open_tag(text, 0)
    if tag is None:
        raise ComponentParseError("Invalid JSX: missing opening tag", source=source)

    if tag.self_closing:
        if text[tag.end :].strip():
            raise ComponentParseError(
                f"Invalid JSX: unexpected content after <{tag.name} />",
                source=source,
            )
        return Component(tag.name, tag.props)

    closer = f"</{tag.name}>"
    if not text.endswith(closer) or len(text) - len(closer) < tag.end:
        raise ComponentParseError(
            f"Invalid JSX: missing closing tag {closer}", source=source
        )
    body = text[tag.end : len(text) - len(closer)]
    return Component(tag.name, tag.props, _freeze(_parse_children(body)))


def try_parse_component(source: str) -> Tuple[Optional[Component], Optional[str]]:
    """``(component, None)`` on success, ``(None, message)`` on failure."""

    try:
        return parse_component(source), None
    except ComponentParseError as exc:
        return None, str(exc)


def _serialize_prop(key: str, value: Any) -> str:
    if value is True:
        return key
    if isinstance(value, str):
        if '"' not in value:
            return f'{key}="{value}"'
        if "'" not in value:
            return f"{key}='{value}'"
    return f"{key}={{{json.dumps(value)}}}"


def serialize_component(component: Component) -> str:
    """Render tag syntax; children are emitted depth-first in order."""

    out: List[str] = []
    stack: List[Tuple[Component, bool]] = [(component, False)]
    while stack:
        node, closing = stack.pop()
        if closing:
            out.append(f"</{node.name}>")
            continue
        props = " ".join(_serialize_prop(k, v) for k, v in node.props.items())
        head = f"<{node.name}{' ' + props if props else ''}"
        if not node.children:
            out.append(f"{head} />")
            continue
        out.append(f"{head}>")
        stack.append((node, True))
        stack.extend((child, False) for child in reversed(node.children))
    return "".join(out)


def serialize_block(component: Component) -> str:
    return f"{BLOCK_OPEN}{serialize_component(component)}{BLOCK_CLOSE}"


def _offset_to_position(lines: Sequence[str], offset: int) -> Tuple[int, int]:
    remaining = offset
    for index, line in enumerate(lines):
        if remaining < len(line) + 1:
            return index, remaining
        remaining -= len(line) + 1
    return len(lines) - 1, len(lines[-1]) if lines else 0


def find_component_blocks(lines: Sequence[str]) -> List[ComponentBlock]:
    """Locate every block in the buffer, including ones spanning line breaks."""

    text = "\n".join(lines)
    blocks: List[ComponentBlock] = []
    for match in BLOCK_PATTERN.finditer(text):
        start_line, start_col = _offset_to_position(lines, match.start())
        end_line, end_col = _offset_to_position(lines, match.end())
        component, error = try_parse_component(match.group(1))
        blocks.append(
            ComponentBlock(
                start_line=start_line,
                start_col=start_col,
                end_line=end_line,
                end_col=end_col,
                raw=match.group(0),
                component=component,
                error=error,
            )
        )
    return blocks


def is_position_in_block(line: int, col: int, block: ComponentBlock) -> bool:
    if line < block.start_line or line > block.end_line:
        return False
    if line == block.start_line and col < block.start_col:
        return False
    if line == block.end_line and col > block.end_col:
        return False
    return True


def get_block_at_position(
    line: int, col: int, blocks: Sequence[ComponentBlock]
) -> Optional[ComponentBlock]:
    return next((b for b in blocks if is_position_in_block(line, col, b)), None)


class ComponentRegistry:
    """Maps component names to host renderers; never consulted by the parser."""

    def __init__(self) -> None:
        self._renderers: Dict[str, Any] = {}

    def register(self, name: str, renderer: Any, *, replace: bool = False) -> None:
        if not _TAG_NAME.fullmatch(name):
            raise ValueError(f"Component name '{name}' must start uppercase")
        if not replace and name in self._renderers:
            raise ValueError(f"Component '{name}' already registered")
        self._renderers[name] = renderer

    def get(self, name: str) -> Optional[Any]:
        return self._renderers.get(name)

    def has(self, name: str) -> bool:
        return name in self._renderers

    def names(self) -> Tuple[str, ...]:
        return tuple(sorted(self._renderers))


__all__ = [
    "BLOCK_PATTERN",
    "Component",
    "ComponentBlock",
    "ComponentParseError",
    "ComponentRegistry",
    "find_component_blocks",
    "get_block_at_position",
    "is_position_in_block",
    "parse_component",
    "parse_value",
    "serialize_block",
    "serialize_component",
    "try_parse_component",
]
