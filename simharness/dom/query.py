"""
Tree query engine.

Every query walks the full subtree (root included, depth-first pre-order)
and collects all matches before deciding. Exactly one match succeeds.
"""

from typing import List, Tuple

from ..core.errors import Ambiguous, NotFound, QueryError
from .nodes import Element, Node, describe, render_html, visible_text
from .selectors import Selector, Selectors, all_of, describe_all

MAX_SEARCHED_LINES = 30

FIELD_TAGS = ("input", "textarea", "select")

Match = Tuple[Element, Tuple[Element, ...]]


def _searched(root: Node) -> str:
    lines = render_html(root).splitlines()
    if len(lines) > MAX_SEARCHED_LINES:
        lines = lines[:MAX_SEARCHED_LINES] + ["..."]
    return " ".join(line.strip() for line in lines)


def _walk(node: Node, ancestors: Tuple[Element, ...], selector: Selector, out: List[Match]) -> None:
    if not isinstance(node, Element):
        return
    if selector.matches(node):
        out.append((node, ancestors))
    for child in node.children:
        _walk(child, ancestors + (node,), selector, out)


def find_all_with_ancestors(root: Node, selectors: Selectors) -> List[Match]:
    """All matching elements in document order, each with its ancestors (outermost first)."""
    out: List[Match] = []
    _walk(root, (), all_of(selectors), out)
    return out


def find_all(root: Node, selectors: Selectors) -> List[Element]:
    return [el for el, _ in find_all_with_ancestors(root, selectors)]


def find_with_ancestors(root: Node, selectors: Selectors) -> Match:
    """
    Find the unique matching element and its ancestors.

    Raises:
        NotFound: If nothing matches
        Ambiguous: If more than one element matches
    """
    matches = find_all_with_ancestors(root, selectors)
    if not matches:
        raise NotFound(describe_all(selectors), _searched(root))
    if len(matches) > 1:
        candidates = ", ".join(describe(el) for el, _ in matches)
        raise Ambiguous(len(matches), describe_all(selectors), candidates)
    return matches[0]


def find(root: Node, selectors: Selectors) -> Element:
    return find_with_ancestors(root, selectors)[0]


def has(root: Node, selectors: Selectors) -> bool:
    return bool(find_all_with_ancestors(root, selectors))


def resolve_scope(root: Node, scope: Tuple[Selectors, ...]) -> Node:
    """
    Re-root at each scope level in turn.

    Raises:
        QueryError: If a level does not resolve to exactly one element
    """
    current = root
    for level in scope:
        try:
            current = find(current, level)
        except QueryError as e:
            raise QueryError(f"within {describe_all(level)}: {e}") from e
    return current


def _caption(node: Node) -> str:
    """Visible text of a label, leaving out any form field nested inside it."""
    if isinstance(node, Element):
        if node.tag in FIELD_TAGS:
            return ""
        return "".join(_caption(child) for child in node.children)
    return visible_text(node)


def _label(label_text: str) -> Selector:
    return Selector(
        f"label {label_text!r}",
        lambda el: el.tag == "label" and _caption(el).strip() == label_text,
    )


_FIELD = Selector("form field", lambda el: el.tag in FIELD_TAGS)


def resolve_labelled_field(root: Node, label_text: str) -> Element:
    """
    Find the form field associated with a visible label.

    A label with a for= attribute points at the field with that id. A label
    without one wraps its field.

    Raises:
        QueryError: If the label is missing or ambiguous, or no unique field is associated
    """
    label = find(root, [_label(label_text)])

    target_id = label.attr("for")
    if target_id:
        fields = [el for el in find_all(root, [_FIELD]) if el.attr("id") == target_id]
    else:
        fields = find_all(label, [_FIELD])

    if len(fields) != 1:
        how = f"for={target_id!r}" if target_id else "nested"
        raise QueryError(
            f"no field associated with label {label_text!r} ({how}, {len(fields)} candidates)"
        )
    return fields[0]
