"""
Selectors: element predicates with a human-readable description.

Several selectors passed to one query are combined with AND.
"""

from dataclasses import dataclass
from typing import Callable, Sequence, Union

from .nodes import Element, iter_nodes, visible_text


@dataclass(frozen=True)
class Selector:
    description: str
    predicate: Callable[[Element], bool]

    def matches(self, element: Element) -> bool:
        return self.predicate(element)

    def __str__(self) -> str:
        return self.description


Selectors = Union[Selector, Sequence[Selector]]


def as_list(selectors: Selectors) -> list:
    if isinstance(selectors, Selector):
        return [selectors]
    return list(selectors)


def describe_all(selectors: Selectors) -> str:
    return "[" + ", ".join(s.description for s in as_list(selectors)) + "]"


def tag(name: str) -> Selector:
    return Selector(f"tag {name!r}", lambda el: el.tag == name)


def text(content: str) -> Selector:
    """Element whose visible text (all descendant text) contains content."""
    return Selector(f"text {content!r}", lambda el: content in visible_text(el))


def exact_text(content: str) -> Selector:
    return Selector(f"exact text {content!r}", lambda el: visible_text(el).strip() == content)


def id_(value: str) -> Selector:
    return Selector(f"id {value!r}", lambda el: el.attr("id") == value)


def class_(name: str) -> Selector:
    return Selector(f"class {name!r}", lambda el: name in el.classes())


def attribute(name: str, value: str) -> Selector:
    return Selector(f"attribute {name}={value!r}", lambda el: el.attr(name) == value)


def all_of(selectors: Selectors) -> Selector:
    items = as_list(selectors)
    return Selector(
        " and ".join(s.description for s in items),
        lambda el: all(s.matches(el) for s in items),
    )


def any_of(alternatives: Sequence[Selectors]) -> Selector:
    groups = [all_of(group) for group in alternatives]
    return Selector(
        "(" + " or ".join(g.description for g in groups) + ")",
        lambda el: any(g.matches(el) for g in groups),
    )


def containing(selectors: Selectors) -> Selector:
    """Element with a strict descendant matching all selectors."""
    inner = all_of(selectors)

    def predicate(el: Element) -> bool:
        return any(
            isinstance(n, Element) and n is not el and inner.matches(n)
            for n in iter_nodes(el)
        )

    return Selector(f"containing [{inner.description}]", predicate)
