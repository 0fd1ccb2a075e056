"""
Abstract tree, selectors, queries and event dispatch.
"""

from .nodes import Element, Text, Handler, Attribute, Node, iter_nodes, visible_text, describe, render_html
from .decode import Decoder
from .selectors import Selector
from .query import find, find_all, has, resolve_labelled_field
from .events import dispatch

__all__ = [
    "Element",
    "Text",
    "Handler",
    "Attribute",
    "Node",
    "iter_nodes",
    "visible_text",
    "describe",
    "render_html",
    "Decoder",
    "Selector",
    "find",
    "find_all",
    "has",
    "resolve_labelled_field",
    "dispatch",
]
