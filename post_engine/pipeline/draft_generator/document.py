"""Rich-text document tree in the editor's JSON format.

A node has ``type`` plus optional ``attrs``, ``content``, ``text`` and
``marks``. Serialization omits keys whose value is None, so a parsed document
compares equal to the tree it was written from.

Usage:
    body = doc([heading(2, "Intro"), paragraph([text("Hello")])])
    raw = to_json(body)
    assert from_json(raw) == body
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

NODE_TYPES = frozenset({
    "doc",
    "paragraph",
    "heading",
    "bulletList",
    "orderedList",
    "listItem",
    "image",
    "blockquote",
    "table",
    "tableRow",
    "tableHeader",
    "tableCell",
    "text",
    "hardBreak",
    "horizontalRule",
})

MARK_TYPES = frozenset({"bold", "italic", "link"})


@dataclass
class Mark:
    """Inline formatting applied to a text node."""
    type: str
    attrs: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type}
        if self.attrs is not None:
            data["attrs"] = dict(self.attrs)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Mark:
        attrs = data.get("attrs")
        return cls(type=data["type"], attrs=dict(attrs) if attrs is not None else None)


@dataclass
class DocNode:
    """One node of the document tree."""
    type: str
    attrs: dict[str, Any] | None = None
    content: list[DocNode] | None = None
    text: str | None = None
    marks: list[Mark] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type}
        if self.attrs is not None:
            data["attrs"] = dict(self.attrs)
        if self.content is not None:
            data["content"] = [child.to_dict() for child in self.content]
        if self.text is not None:
            data["text"] = self.text
        if self.marks is not None:
            data["marks"] = [mark.to_dict() for mark in self.marks]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DocNode:
        attrs = data.get("attrs")
        content = data.get("content")
        marks = data.get("marks")
        return cls(
            type=data["type"],
            attrs=dict(attrs) if attrs is not None else None,
            content=[cls.from_dict(child) for child in content] if content is not None else None,
            text=data.get("text"),
            marks=[Mark.from_dict(m) for m in marks] if marks is not None else None,
        )


# === Serialization ===

def to_json(node: DocNode) -> str:
    return json.dumps(node.to_dict(), ensure_ascii=False)


def from_json(raw: str) -> DocNode:
    return DocNode.from_dict(json.loads(raw))


# === Builders ===

def doc(nodes: list[DocNode]) -> DocNode:
    return DocNode("doc", content=list(nodes))


def text(value: str, marks: list[Mark] | None = None) -> DocNode:
    return DocNode("text", text=value, marks=list(marks) if marks else None)


def bold() -> Mark:
    return Mark("bold")


def italic() -> Mark:
    return Mark("italic")


def link(href: str) -> Mark:
    return Mark("link", attrs={"href": href})


def paragraph(children: list[DocNode] | str) -> DocNode:
    if isinstance(children, str):
        children = [text(children)]
    return DocNode("paragraph", content=list(children))


def heading(level: int, value: str) -> DocNode:
    return DocNode("heading", attrs={"level": level}, content=[text(value)])


def _list_items(items: list[str]) -> list[DocNode]:
    return [DocNode("listItem", content=[paragraph(item)]) for item in items]


def bullet_list(items: list[str]) -> DocNode:
    return DocNode("bulletList", content=_list_items(items))


def ordered_list(items: list[str]) -> DocNode:
    return DocNode("orderedList", attrs={"start": 1}, content=_list_items(items))


def image(src: str, alt: str) -> DocNode:
    return DocNode("image", attrs={"src": src, "alt": alt})


def blockquote(value: str) -> DocNode:
    return DocNode("blockquote", content=[paragraph([text(value, [italic()])])])


def table(header: list[str], rows: list[list[str]]) -> DocNode:
    """A table with one header row followed by body rows."""
    def row(cells: list[str], cell_type: str) -> DocNode:
        return DocNode(
            "tableRow",
            content=[DocNode(cell_type, content=[paragraph(cell)]) for cell in cells],
        )

    return DocNode(
        "table",
        content=[row(header, "tableHeader"), *(row(r, "tableCell") for r in rows)],
    )


def horizontal_rule() -> DocNode:
    return DocNode("horizontalRule")


# === Traversal ===

def iter_nodes(node: DocNode) -> Iterator[DocNode]:
    """Depth-first, pre-order walk over the tree."""
    yield node
    for child in node.content or []:
        yield from iter_nodes(child)


def extract_text(node: DocNode) -> str:
    """Concatenate textual leaf content only, one space between leaves."""
    return " ".join(n.text for n in iter_nodes(node) if n.type == "text" and n.text)


def count_words(node: DocNode) -> int:
    return len(extract_text(node).split())


def find_images(node: DocNode) -> list[DocNode]:
    return [n for n in iter_nodes(node) if n.type == "image"]


def find_links(node: DocNode) -> list[tuple[str, str]]:
    """(link text, href) for every text node carrying a link mark."""
    links = []
    for n in iter_nodes(node):
        for mark in n.marks or []:
            if mark.type == "link":
                links.append((n.text or "", (mark.attrs or {}).get("href", "")))
    return links


def replace_image_sources(node: DocNode, updates: dict[str, str]) -> int:
    """Rewrite ``attrs.src`` of images whose alt text is in ``updates``.

    Returns:
        Number of image nodes changed.
    """
    changed = 0
    for n in find_images(node):
        attrs = n.attrs or {}
        alt = attrs.get("alt")
        if alt in updates and attrs.get("src") != updates[alt]:
            attrs["src"] = updates[alt]
            changed += 1
    return changed


# === Structural validation ===

def validate_structure(document: DocNode | dict[str, Any] | Any) -> list[str]:
    """Check a serialized (or built) document against the editor schema.

    Returns:
        Error messages; empty when the document is well formed.
    """
    data = document.to_dict() if isinstance(document, DocNode) else document
    if (
        not isinstance(data, dict)
        or data.get("type") != "doc"
        or not isinstance(data.get("content"), list)
    ):
        return ["Invalid document structure: missing doc type or content array"]

    errors: list[str] = []
    for i, child in enumerate(data["content"]):
        _check_node(child, f"content[{i}]", errors)
    return errors


def _check_node(node: Any, path: str, errors: list[str]) -> None:
    if not isinstance(node, dict) or not isinstance(node.get("type"), str):
        errors.append(f"Malformed node at {path}")
        return

    node_type = node["type"]
    attrs = node.get("attrs") or {}
    if node_type not in NODE_TYPES or node_type == "doc":
        errors.append(f"Unknown node type '{node_type}' at {path}")
        return

    if node_type == "heading" and attrs.get("level") not in range(1, 7):
        errors.append(f"Invalid heading level {attrs.get('level')!r} at {path}")
    elif node_type == "image" and not attrs.get("src"):
        errors.append(f"Image without src at {path}")
    elif node_type == "text":
        if not isinstance(node.get("text"), str) or not node["text"]:
            errors.append(f"Text node without text at {path}")
        for mark in node.get("marks") or []:
            mark_type = mark.get("type") if isinstance(mark, dict) else None
            if mark_type not in MARK_TYPES:
                errors.append(f"Unknown mark type {mark_type!r} at {path}")
            elif mark_type == "link" and not (mark.get("attrs") or {}).get("href"):
                errors.append(f"Link without href at {path}")

    content = node.get("content")
    if content is None:
        return
    if not isinstance(content, list):
        errors.append(f"Content of {node_type} is not a list at {path}")
        return
    for i, child in enumerate(content):
        _check_node(child, f"{path}.content[{i}]", errors)
