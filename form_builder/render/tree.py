"""Markup tree nodes and the single writer that serializes them."""

from __future__ import annotations

from dataclasses import dataclass, field
from html import escape

VOID_TAGS = frozenset({"br", "input", "meta"})


@dataclass(slots=True, eq=False)
class Node:
    """One element of the rendered form.

    ``attrs`` values of ``True`` are written as bare boolean attributes,
    ``False``/``None`` values are omitted. Children are nodes or text.
    """

    tag: str
    attrs: dict[str, str | bool | None] = field(default_factory=dict)
    children: list[Node | str] = field(default_factory=list)

    @property
    def classes(self) -> list[str]:
        value = self.attrs.get("class")
        return value.split() if isinstance(value, str) else []

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def text(self) -> str:
        parts: list[str] = []
        for child in self.children:
            parts.append(child if isinstance(child, str) else child.text())
        return "".join(parts)

    def iter(self):
        yield self
        for child in self.children:
            if isinstance(child, Node):
                yield from child.iter()

    def find_all(self, tag: str | None = None, class_name: str | None = None) -> list[Node]:
        return [
            node
            for node in self.iter()
            if (tag is None or node.tag == tag)
            and (class_name is None or node.has_class(class_name))
        ]


def element(tag: str, *children: Node | str, **attrs: str | bool | None) -> Node:
    # trailing underscore lets callers pass reserved words such as class_
    cleaned = {key.rstrip("_").replace("_", "-"): value for key, value in attrs.items()}
    return Node(tag=tag, attrs=cleaned, children=list(children))


def write_markup(node: Node | str, indent: int = 0, pretty: bool = True) -> str:
    if isinstance(node, str):
        return escape(node, quote=False)

    pad = "  " * indent if pretty else ""
    newline = "\n" if pretty else ""
    open_tag = f"<{node.tag}{_write_attrs(node.attrs)}>"
    if node.tag in VOID_TAGS:
        return f"{pad}{open_tag}{newline}"

    if all(isinstance(child, str) for child in node.children):
        inner = "".join(write_markup(child) for child in node.children)
        return f"{pad}{open_tag}{inner}</{node.tag}>{newline}"

    inner_parts = []
    for child in node.children:
        if isinstance(child, str):
            inner_parts.append(f"{'  ' * (indent + 1) if pretty else ''}{escape(child, quote=False)}{newline}")
        else:
            inner_parts.append(write_markup(child, indent + 1, pretty))
    return f"{pad}{open_tag}{newline}{''.join(inner_parts)}{pad}</{node.tag}>{newline}"


def write_document(root: Node, pretty: bool = True) -> str:
    return "<!DOCTYPE html>\n" + write_markup(root, pretty=pretty)


def _write_attrs(attrs: dict[str, str | bool | None]) -> str:
    parts = []
    for key, value in attrs.items():
        if value is None or value is False:
            continue
        if value is True:
            parts.append(f" {key}")
        else:
            parts.append(f' {key}="{escape(str(value), quote=True)}"')
    return "".join(parts)
