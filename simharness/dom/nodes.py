"""
Abstract rendered tree.

view(model) returns a fresh tree of Element and Text nodes on every call.
Trees are never mutated and never diffed.
"""

from dataclasses import dataclass, field
from html import escape
from typing import Any, Dict, Iterator, List, Tuple, Union


@dataclass(frozen=True)
class Handler:
    """
    Event registration on an element.

    Fields:
        event: Event name ("click", "input", "check", ...)
        decoder: Decoder from the raw payload to a message
        prevent_default: Whether the handler intercepts the default browser action
    """
    event: str
    decoder: Any
    prevent_default: bool = False


@dataclass(frozen=True)
class Attribute:
    name: str
    value: str


@dataclass(frozen=True)
class Text:
    content: str


@dataclass(frozen=True)
class Element:
    """
    Element node.

    Fields:
        tag: Lowercase tag name
        attributes: Attribute name -> value
        handlers: Event name -> Handler
        children: Child nodes in document order
    """
    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    handlers: Dict[str, Handler] = field(default_factory=dict)
    children: Tuple["Node", ...] = ()

    def attr(self, name: str) -> Any:
        return self.attributes.get(name)

    def classes(self) -> List[str]:
        return (self.attributes.get("class") or "").split()

    def handler(self, event: str) -> Any:
        return self.handlers.get(event)


Node = Union[Element, Text]


def iter_nodes(node: Node) -> Iterator[Node]:
    """Depth-first pre-order walk including node itself."""
    yield node
    if isinstance(node, Element):
        for child in node.children:
            yield from iter_nodes(child)


def visible_text(node: Node) -> str:
    if isinstance(node, Text):
        return node.content
    return "".join(visible_text(child) for child in node.children)


def describe(node: Node) -> str:
    """Opening tag with attributes and registered events, e.g. <button id="go" on:click>."""
    if isinstance(node, Text):
        return repr(node.content)
    parts = [node.tag]
    for name in sorted(node.attributes):
        parts.append(f'{name}="{escape(node.attributes[name])}"')
    for event in sorted(node.handlers):
        parts.append(f"on:{event}")
    return "<" + " ".join(parts) + ">"


def render_html(node: Node, indent: int = 0, max_depth: int = 50) -> str:
    """Indented HTML-like rendering for failure messages and the CLI."""
    pad = "  " * indent
    if isinstance(node, Text):
        return pad + escape(node.content)
    if not node.children:
        return f"{pad}{describe(node)}</{node.tag}>"
    if max_depth <= 0:
        return f"{pad}{describe(node)}...</{node.tag}>"
    lines = [pad + describe(node)]
    for child in node.children:
        lines.append(render_html(child, indent + 1, max_depth - 1))
    lines.append(f"{pad}</{node.tag}>")
    return "\n".join(lines)
