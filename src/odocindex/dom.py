from __future__ import annotations

from dataclasses import dataclass, field
from html import escape
from typing import Iterator, Protocol, TypeVar, Union

VOID_TAGS = {"br", "hr", "input", "meta", "link", "img"}

NodeT = TypeVar("NodeT")


class RenderSubstrate(Protocol[NodeT]):
    """Element primitives the engine needs from whatever renders the page."""

    def create_element(self, tag: str) -> NodeT: ...

    def set_attribute(self, node: NodeT, name: str, value: str) -> None: ...

    def append_text(self, node: NodeT, text: str) -> None: ...

    def append_child(self, parent: NodeT, child: NodeT) -> None: ...

    def set_hidden(self, node: NodeT, hidden: bool) -> None: ...

    def is_hidden(self, node: NodeT) -> bool: ...


@dataclass(eq=False)
class Element:
    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    children: list[Union["Element", str]] = field(default_factory=list)
    hidden: bool = False

    @property
    def text(self) -> str:
        parts: list[str] = []
        for child in self.children:
            parts.append(child if isinstance(child, str) else child.text)
        return "".join(parts)

    def iter(self) -> Iterator["Element"]:
        yield self
        for child in self.children:
            if isinstance(child, Element):
                yield from child.iter()

    def find(self, tag: str) -> "Element | None":
        for el in self.iter():
            if el.tag == tag:
                return el
        return None

    def to_html(self) -> str:
        attrs = "".join(f' {k}="{escape(v, quote=True)}"' for k, v in self.attrs.items())
        if self.hidden:
            attrs += " hidden"
        if self.tag in VOID_TAGS:
            return f"<{self.tag}{attrs} />"
        return f"<{self.tag}{attrs}>{self.inner_html()}</{self.tag}>"

    def inner_html(self) -> str:
        return "".join(
            escape(child, quote=False) if isinstance(child, str) else child.to_html()
            for child in self.children
        )


class Document:
    """In-memory element tree implementing :class:`RenderSubstrate`."""

    def __init__(self):
        self.body = Element("body")
        self._ids: dict[str, Element] = {}

    @classmethod
    def index_skeleton(cls, query: str = "") -> "Document":
        """A body holding the ``search`` input and the empty ``data`` container."""
        doc = cls()
        search = doc.create_element("input")
        doc.set_attribute(search, "id", "search")
        doc.set_attribute(search, "type", "text")
        doc.set_attribute(search, "placeholder", "Search...")
        doc.set_attribute(search, "value", query)
        doc.append_child(doc.body, search)
        data = doc.create_element("div")
        doc.set_attribute(data, "id", "data")
        doc.append_child(doc.body, data)
        return doc

    def create_element(self, tag: str) -> Element:
        return Element(tag)

    def set_attribute(self, node: Element, name: str, value: str) -> None:
        node.attrs[name] = value
        if name == "id":
            self._ids.setdefault(value, node)

    def append_text(self, node: Element, text: str) -> None:
        if node.children and isinstance(node.children[-1], str):
            node.children[-1] += text
        else:
            node.children.append(text)

    def append_child(self, parent: Element, child: Element) -> None:
        parent.children.append(child)

    def set_hidden(self, node: Element, hidden: bool) -> None:
        node.hidden = hidden

    def is_hidden(self, node: Element) -> bool:
        return node.hidden

    def get_element_by_id(self, element_id: str) -> Element | None:
        return self._ids.get(element_id)

    def query_value(self) -> str:
        search = self.get_element_by_id("search")
        return search.attrs.get("value", "") if search is not None else ""

    def to_html(self) -> str:
        return self.body.inner_html()


__all__ = ["Document", "Element", "RenderSubstrate", "VOID_TAGS"]
