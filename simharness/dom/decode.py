"""
Decoders: values that turn raw event payloads or flags into typed values.

A decoder is a function wrapped in a Decoder. decode() returns the decoded
value or raises DecodeError. Decoders compose with map/and_then and the
module-level combinators below.

Usage:
    modifiers = map_n(
        lambda ctrl, meta: ctrl or meta,
        field("ctrlKey", boolean),
        field("metaKey", boolean),
    )
    link_click = modifiers.and_then(lambda held: fail("modifier held") if held else succeed(msg))
"""

import json
from typing import Any, Callable, Sequence, Union

from pydantic import ConfigDict, TypeAdapter, ValidationError

from ..core.errors import DecodeError

# Strict mode: no coercion, and bool is never accepted as int or float
STRICT = ConfigDict(strict=True)


class Decoder:
    """Wraps fn(value) -> decoded value (raising DecodeError on mismatch)."""

    def __init__(self, fn: Callable[[Any], Any], description: str = "decoder") -> None:
        self._fn = fn
        self.description = description

    def decode(self, value: Any) -> Any:
        return self._fn(value)

    def map(self, fn: Callable[[Any], Any]) -> "Decoder":
        return Decoder(lambda v: fn(self._fn(v)), self.description)

    def and_then(self, fn: Callable[[Any], "Decoder"]) -> "Decoder":
        return Decoder(lambda v: fn(self._fn(v)).decode(v), self.description)

    def __repr__(self) -> str:
        return f"<Decoder {self.description}>"


def succeed(result: Any) -> Decoder:
    return Decoder(lambda _: result, f"succeed {result!r}")


def fail(message: str) -> Decoder:
    """Always fails. Used to suppress a message for some inputs."""
    def run(_: Any) -> Any:
        raise DecodeError(message)
    return Decoder(run, f"fail {message!r}")


def _typed(expected: Any, name: str) -> Decoder:
    adapter = TypeAdapter(expected, config=STRICT)

    def run(v: Any) -> Any:
        try:
            return adapter.validate_python(v)
        except ValidationError as e:
            raise DecodeError(f"expected {name}, got {v!r}") from e
    return Decoder(run, name)


value = Decoder(lambda v: v, "value")
string = _typed(str, "string")
boolean = _typed(bool, "bool")
integer = _typed(int, "int")
number = _typed(Union[int, float], "number")


def field(name: str, decoder: Decoder) -> Decoder:
    def run(v: Any) -> Any:
        if not isinstance(v, dict):
            raise DecodeError(f"expected an object with field '{name}', got {v!r}")
        if name not in v:
            raise DecodeError(f"missing field '{name}'")
        try:
            return decoder.decode(v[name])
        except DecodeError as e:
            raise DecodeError(f"at field '{name}': {e}") from e
    return Decoder(run, f"field {name!r}")


def at(path: Sequence[str], decoder: Decoder) -> Decoder:
    for name in reversed(list(path)):
        decoder = field(name, decoder)
    return decoder


def nullable(decoder: Decoder) -> Decoder:
    return Decoder(lambda v: None if v is None else decoder.decode(v), f"nullable {decoder.description}")


def one_of(decoders: Sequence[Decoder]) -> Decoder:
    def run(v: Any) -> Any:
        errors = []
        for d in decoders:
            try:
                return d.decode(v)
            except DecodeError as e:
                errors.append(str(e))
        raise DecodeError("all of one_of failed: " + "; ".join(errors))
    return Decoder(run, "one_of")


def map_n(fn: Callable[..., Any], *decoders: Decoder) -> Decoder:
    return Decoder(lambda v: fn(*(d.decode(v) for d in decoders)), "map_n")


def decode_string(decoder: Decoder, raw: str) -> Any:
    """
    Parse raw as JSON and decode the result.

    Raises:
        DecodeError: If raw is not valid JSON or does not decode
    """
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"invalid JSON: {e}") from e
    return decoder.decode(parsed)
