"""
Event dispatch: turn (element, event name, raw payload) into a message.

Dispatch is a map lookup on the element's handlers plus a decoder call.
"""

from typing import Any

from ..core.errors import DecodeError, DecodeFailure, NoHandler
from .nodes import Element, describe

# Payload of a plain primary-button click on a link, as a browser reports it.
LINK_CLICK_PAYLOAD = {
    "ctrlKey": False,
    "metaKey": False,
    "shiftKey": False,
    "altKey": False,
    "button": 0,
}


def dispatch(element: Element, event_name: str, payload: Any) -> Any:
    """
    Decode payload with the element's handler for event_name.

    Args:
        element: Target element
        event_name: Registered event name
        payload: Raw payload already in the shape the decoder expects

    Returns:
        The decoded message

    Raises:
        NoHandler: If the element has no handler for event_name
        DecodeFailure: If the handler's decoder rejects the payload
    """
    handler = element.handler(event_name)
    if handler is None:
        raise NoHandler(event_name, describe(element))
    try:
        return handler.decoder.decode(payload)
    except DecodeError as e:
        raise DecodeFailure(event_name, str(e)) from e


def click(element: Element) -> Any:
    return dispatch(element, "click", None)


def input_text(element: Element, text: str) -> Any:
    return dispatch(element, "input", text)


def change(element: Element, value: str) -> Any:
    return dispatch(element, "change", value)


def check(element: Element, checked: bool) -> Any:
    return dispatch(element, "check", checked)


def submit(element: Element) -> Any:
    return dispatch(element, "submit", None)
