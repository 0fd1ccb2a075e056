"""
Builders for abstract trees.

Usage:
    def view(model):
        return div([id_("app")], [
            button([on_click("Inc")], [text("+")]),
            label([for_("name")], [text("Name")]),
            input_([id_("name"), on_input(lambda s: ("Name", s))], []),
        ])
"""

from typing import Any, Callable, Dict, Iterable, Union

from . import decode
from .nodes import Attribute, Element, Handler, Node, Text

Prop = Union[Attribute, Handler]


def node(tag: str, props: Iterable[Prop] = (), children: Iterable[Node] = ()) -> Element:
    """
    Build an element from a mixed list of attributes and handlers.

    Repeated "class" attributes are joined. For other attributes and for
    handlers the last one wins.
    """
    attributes: Dict[str, str] = {}
    handlers: Dict[str, Handler] = {}
    for prop in props:
        if isinstance(prop, Handler):
            handlers[prop.event] = prop
        elif prop.name == "class" and "class" in attributes:
            attributes["class"] = attributes["class"] + " " + prop.value
        else:
            attributes[prop.name] = prop.value
    return Element(tag=tag, attributes=attributes, handlers=handlers, children=tuple(children))


def text(content: str) -> Text:
    return Text(str(content))


def _tag(name: str) -> Callable[..., Element]:
    def build(props: Iterable[Prop] = (), children: Iterable[Node] = ()) -> Element:
        return node(name, props, children)
    build.__name__ = name
    return build


div = _tag("div")
span = _tag("span")
p = _tag("p")
h1 = _tag("h1")
h2 = _tag("h2")
ul = _tag("ul")
li = _tag("li")
a = _tag("a")
button = _tag("button")
form = _tag("form")
label = _tag("label")
input_ = _tag("input")
textarea = _tag("textarea")
select = _tag("select")
option = _tag("option")
section = _tag("section")
nav = _tag("nav")


# Attributes

def attribute(name: str, value: str) -> Attribute:
    return Attribute(name, value)


def id_(value: str) -> Attribute:
    return Attribute("id", value)


def class_(value: str) -> Attribute:
    return Attribute("class", value)


def href(value: str) -> Attribute:
    return Attribute("href", value)


def for_(value: str) -> Attribute:
    return Attribute("for", value)


def type_(value: str) -> Attribute:
    return Attribute("type", value)


def value_(value: str) -> Attribute:
    return Attribute("value", value)


def aria_label(value: str) -> Attribute:
    return Attribute("aria-label", value)


def disabled() -> Attribute:
    return Attribute("disabled", "")


# Events

def on(event: str, decoder: decode.Decoder) -> Handler:
    return Handler(event, decoder)


def prevent_default_on(event: str, decoder: decode.Decoder) -> Handler:
    return Handler(event, decoder, prevent_default=True)


def on_click(msg: Any) -> Handler:
    return Handler("click", decode.succeed(msg))


def on_input(tagger: Callable[[str], Any]) -> Handler:
    return Handler("input", decode.string.map(tagger))


def on_change(tagger: Callable[[str], Any]) -> Handler:
    return Handler("change", decode.string.map(tagger))


def on_check(tagger: Callable[[bool], Any]) -> Handler:
    return Handler("check", decode.boolean.map(tagger))


def on_submit(msg: Any) -> Handler:
    return Handler("submit", decode.succeed(msg), prevent_default=True)


def on_click_prevent_default_for_link(msg: Any) -> Handler:
    """
    Intercept plain left clicks on a link and turn them into msg.

    Clicks with a modifier key held or a non-primary button fail to decode,
    which leaves the default navigation to the browser.
    """
    modified = decode.map_n(
        lambda ctrl, meta, shift, alt, btn: ctrl or meta or shift or alt or btn != 0,
        decode.field("ctrlKey", decode.boolean),
        decode.field("metaKey", decode.boolean),
        decode.field("shiftKey", decode.boolean),
        decode.field("altKey", decode.boolean),
        decode.field("button", decode.integer),
    )
    return Handler(
        "click",
        modified.and_then(lambda held: decode.fail("modifier held") if held else decode.succeed(msg)),
        prevent_default=True,
    )
