"""
Expectations for harness assertions.

An expectation is any callable that takes the value under test (model, view
root, or last effect) and raises AssertionError on mismatch. Its message is
surfaced verbatim in the failure reason, so plain functions using assert work:

    def has_two_items(model):
        assert len(model.items) == 2, f"expected 2 items, got {len(model.items)}"

    test.expect_model(has_two_items)
"""

from typing import Any, Callable

from .dom import query
from .dom.nodes import render_html
from .dom.selectors import Selectors, describe_all

Expectation = Callable[[Any], None]


def equal(expected: Any) -> Expectation:
    def check(actual: Any) -> None:
        if actual != expected:
            raise AssertionError(f"expected {expected!r}, got {actual!r}")
    return check


def not_equal(unexpected: Any) -> Expectation:
    def check(actual: Any) -> None:
        if actual == unexpected:
            raise AssertionError(f"expected anything but {unexpected!r}")
    return check


def satisfies(predicate: Callable[[Any], bool], description: str) -> Expectation:
    def check(actual: Any) -> None:
        if not predicate(actual):
            raise AssertionError(f"expected value to satisfy {description}, got {actual!r}")
    return check


def has(selectors: Selectors) -> Expectation:
    """View contains at least one element matching all selectors."""
    def check(root: Any) -> None:
        if not query.has(root, selectors):
            raise AssertionError(
                f"expected view to have {describe_all(selectors)}, view was: "
                + " ".join(line.strip() for line in render_html(root).splitlines())
            )
    return check


def has_not(selectors: Selectors) -> Expectation:
    def check(root: Any) -> None:
        count = len(query.find_all(root, selectors))
        if count:
            raise AssertionError(
                f"expected view not to have {describe_all(selectors)}, found {count}"
            )
    return check


def all_of(*expectations: Expectation) -> Expectation:
    def check(actual: Any) -> None:
        for expectation in expectations:
            expectation(actual)
    return check
