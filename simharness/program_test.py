"""
ProgramTest: the chainable harness over a ProgramDefinition.

A ProgramTest is an immutable value. Every operation returns a new one:
- interactions locate a node, decode an event into a message and fold it
  through the program's update
- should_* assertions check model, view or effect and pass the harness on
- expect_* assertions and done() end the chain with an Outcome

Errors raised inside an operation never escape it. They move the harness to
Failed, after which every further operation is a no-op, so the Outcome
always reports the first failure.

Usage:
    outcome = (
        create(program)
        .click_button("Click Me")
        .fill_in("Name", "Ada")
        .expect_model(equal(expected))
    )
    outcome.assert_passed()
"""

from dataclasses import dataclass, replace
from typing import Any, Callable, Optional, Tuple

from . import expect as expectations
from .core import machine
from .core.errors import (
    ConstructionError,
    DecodeError,
    DecodeFailure,
    DispatchError,
    ExpectationError,
    ExplicitFailure,
    HarnessError,
    NavigationError,
    QueryError,
)
from .core.program import ProgramDefinition
from .core.state import Failed, HarnessState, Running
from .dom import events, query
from .dom import selectors as sel
from .dom.decode import Decoder, decode_string
from .dom.nodes import Element, Node
from .dom.selectors import Selectors
from .logging_config import get_logger
from .navigation.links import Internal, resolve_href
from .navigation.location import Location

OnUrlChange = Callable[[Location], Any]


@dataclass(frozen=True)
class Outcome:
    """
    Result of a finished chain.

    Fields:
        passed: Whether every step and the final expectation held
        reason: "<category>: <message>" of the first failure
        origin: Operation that produced the failure
    """
    passed: bool
    reason: Optional[str] = None
    origin: Optional[str] = None

    def __bool__(self) -> bool:
        return self.passed

    def assert_passed(self) -> None:
        """Raise AssertionError carrying the failure reason (for pytest)."""
        if not self.passed:
            raise AssertionError(f"{self.origin}: {self.reason}")


def _button(label: str) -> Selectors:
    return [
        sel.any_of([
            [sel.tag("button"), sel.text(label)],
            [sel.tag("button"), sel.attribute("aria-label", label)],
            [sel.attribute("role", "button"), sel.text(label)],
            [sel.tag("input"), sel.attribute("type", "submit"), sel.attribute("value", label)],
            [sel.tag("input"), sel.attribute("type", "button"), sel.attribute("value", label)],
        ])
    ]


def _enclosing_form(ancestors: Tuple[Element, ...]) -> Optional[Element]:
    for el in reversed(ancestors):
        if el.tag == "form":
            return el
    return None


@dataclass(frozen=True)
class ProgramTest:
    """
    Harness value.

    Fields:
        program: Program under test
        state: Running or Failed
        on_url_change: Location -> message mapping (navigation wiring), if any
        scope: Selector groups that re-root queries (innermost last)
    """
    program: ProgramDefinition
    state: HarnessState
    on_url_change: Optional[OnUrlChange] = None
    scope: Tuple[Selectors, ...] = ()

    @property
    def failure(self) -> Optional[Failed]:
        return self.state if isinstance(self.state, Failed) else None

    @property
    def _log(self):
        return get_logger(__name__, trace_id=self.program.name)

    # Plumbing

    def _step(self, origin: str, run: Callable[[Running], HarnessState]) -> "ProgramTest":
        if isinstance(self.state, Failed):
            return self
        try:
            new_state = run(self.state)
        except HarnessError as e:
            new_state = machine.fail_with(self.state, e, origin)
        except AssertionError as e:
            new_state = machine.fail(self.state, ExpectationError.category, str(e), origin)
        if isinstance(new_state, Failed):
            self._log.info("Harness failed in %s: %s", origin, new_state.reason)
        return replace(self, state=new_state)

    def _interaction(self, origin: str, run: Callable[[Running], HarnessState]) -> "ProgramTest":
        def guarded(state: Running) -> HarnessState:
            if state.page_change is not None:
                raise NavigationError(f"page has already changed to {state.page_change!r}")
            return run(state)
        return self._step(origin, guarded)

    def _apply(self, state: Running, msg: Any) -> HarnessState:
        self._log.debug("Applied message %r", msg)
        return machine.apply(self.program, state, msg)

    def _root(self, state: Running) -> Node:
        return query.resolve_scope(self.program.view(state.model), self.scope)

    def _check(self, origin: str, extract: Callable[[Running], Any], expectation: Callable[[Any], None]) -> "ProgramTest":
        def run(state: Running) -> HarnessState:
            expectation(extract(state))
            return state
        return self._step(origin, run)

    # Interactions

    def update(self, msg: Any) -> "ProgramTest":
        """Send msg straight to update, as if a subscription or effect produced it."""
        return self._interaction("update", lambda s: self._apply(s, msg))

    def click_button(self, label: str) -> "ProgramTest":
        """
        Click the unique button labelled label.

        A button without a click handler inside a form with a submit handler
        submits the form (unless it is type="button").
        """
        def run(s: Running) -> HarnessState:
            button, ancestors = query.find_with_ancestors(self._root(s), _button(label))
            if "disabled" in button.attributes:
                raise DispatchError(f"button {label!r} is disabled")
            if button.handler("click") is None and button.attr("type") != "button":
                form = _enclosing_form(ancestors)
                if form is not None and form.handler("submit") is not None:
                    return self._apply(s, events.submit(form))
            return self._apply(s, events.click(button))
        return self._interaction("click_button", run)

    def click_link(self, label: str, expected_href: str) -> "ProgramTest":
        """
        Click the unique link containing label, whose href must be expected_href.

        A link whose click handler prevents the default action dispatches its
        message. Otherwise the page navigates: see _follow_link.
        """
        def run(s: Running) -> HarnessState:
            link = query.find(self._root(s), [sel.tag("a"), sel.text(label)])
            actual = link.attr("href")
            if actual != expected_href:
                raise NavigationError(
                    f"link href did not match: expected {expected_href!r}, actual {actual!r}"
                )
            handler = link.handler("click")
            if handler is not None and handler.prevent_default:
                try:
                    msg = events.dispatch(link, "click", events.LINK_CLICK_PAYLOAD)
                except DecodeFailure:
                    # handler declined to intercept; the browser follows the link
                    return self._follow_link(s, actual)
                return self._apply(s, msg)
            return self._follow_link(s, actual)
        return self._interaction("click_link", run)

    def _follow_link(self, s: Running, href: str) -> HarnessState:
        resolved = resolve_href(s.location, href)
        if isinstance(resolved, Internal) and self.on_url_change is not None:
            raise NavigationError(
                f"link to internal URL {resolved.url!r} was not intercepted; "
                "a single-page program must handle the click with a message"
            )
        return s.with_page_change(resolved.url)

    def fill_in(self, label: str, text: str, field_id: Optional[str] = None) -> "ProgramTest":
        """Type text into the input or textarea associated with label."""
        def run(s: Running) -> HarnessState:
            field = query.resolve_labelled_field(self._root(s), label)
            if field_id is not None and field.attr("id") != field_id:
                raise QueryError(
                    f"label {label!r} is associated with id {field.attr('id')!r}, not {field_id!r}"
                )
            return self._apply(s, events.input_text(field, text))
        return self._interaction("fill_in", run)

    def fill_in_textarea(self, text: str) -> "ProgramTest":
        """Type text into the only textarea in scope."""
        def run(s: Running) -> HarnessState:
            area = query.find(self._root(s), [sel.tag("textarea")])
            return self._apply(s, events.input_text(area, text))
        return self._interaction("fill_in_textarea", run)

    def check(self, label: str, checked: bool) -> "ProgramTest":
        def run(s: Running) -> HarnessState:
            box = query.resolve_labelled_field(self._root(s), label)
            return self._apply(s, events.check(box, checked))
        return self._interaction("check", run)

    def select_option(self, label: str, option_text: str) -> "ProgramTest":
        """Choose the option with visible text option_text in the select associated with label."""
        def run(s: Running) -> HarnessState:
            select = query.resolve_labelled_field(self._root(s), label)
            if select.tag != "select":
                raise QueryError(f"label {label!r} is associated with <{select.tag}>, not <select>")
            option = query.find(select, [sel.tag("option"), sel.exact_text(option_text)])
            value = option.attr("value")
            if value is None:
                value = option_text
            return self._apply(s, events.change(select, value))
        return self._interaction("select_option", run)

    def simulate_dom_event(self, selectors: Selectors, event_name: str, payload: Any = None) -> "ProgramTest":
        """Fire event_name with a raw payload at the unique element matching selectors."""
        def run(s: Running) -> HarnessState:
            target = query.find(self._root(s), selectors)
            return self._apply(s, events.dispatch(target, event_name, payload))
        return self._interaction("simulate_dom_event", run)

    def route_change(self, url: str) -> "ProgramTest":
        """
        Move the simulated location to url (absolute or relative).

        Programs with navigation wiring receive on_url_change(new_location).
        """
        def run(s: Running) -> HarnessState:
            if s.location is None:
                raise NavigationError("route_change needs a program created with a URL")
            try:
                location = s.location.navigate(url)
            except ConstructionError as e:
                raise NavigationError(str(e)) from e
            s = s.with_location(location)
            if self.on_url_change is None:
                return s
            return self._apply(s, self.on_url_change(location))
        return self._interaction("route_change", run)

    def within(self, selectors: Selectors, operations: Callable[["ProgramTest"], "ProgramTest"]) -> "ProgramTest":
        """
        Run operations with queries re-rooted at the unique element matching selectors.

        The previous scope is restored afterwards; model and effect carry through.
        """
        if isinstance(self.state, Failed):
            return self
        inner = replace(self, scope=self.scope + (selectors,))

        def resolve(s: Running) -> HarnessState:
            inner._root(s)
            return s

        inner = inner._step("within", resolve)
        return replace(operations(inner), scope=self.scope)

    def fail(self, category: str, message: str) -> "ProgramTest":
        def run(s: Running) -> HarnessState:
            raise ExplicitFailure(message, category)
        return self._step("fail", run)

    # Non-terminal assertions

    def should_have_model(self, expectation: Callable[[Any], None]) -> "ProgramTest":
        return self._check("should_have_model", lambda s: s.model, expectation)

    def should_have_view(self, expectation: Callable[[Any], None]) -> "ProgramTest":
        return self._check("should_have_view", self._root, expectation)

    def should_have(self, selectors: Selectors) -> "ProgramTest":
        return self._check("should_have", self._root, expectations.has(selectors))

    def should_not_have(self, selectors: Selectors) -> "ProgramTest":
        return self._check("should_not_have", self._root, expectations.has_not(selectors))

    def should_have_last_effect(self, expectation: Callable[[Any], None]) -> "ProgramTest":
        return self._check("should_have_last_effect", lambda s: s.last_effect, expectation)

    # Terminal assertions

    def done(self) -> Outcome:
        if isinstance(self.state, Failed):
            return Outcome(passed=False, reason=self.state.reason, origin=self.state.origin)
        return Outcome(passed=True)

    def expect_model(self, expectation: Callable[[Any], None]) -> Outcome:
        return self._check("expect_model", lambda s: s.model, expectation).done()

    def expect_view(self, expectation: Callable[[Any], None]) -> Outcome:
        return self._check("expect_view", self._root, expectation).done()

    def expect_view_has(self, selectors: Selectors) -> Outcome:
        return self._check("expect_view_has", self._root, expectations.has(selectors)).done()

    def expect_last_effect(self, expectation: Callable[[Any], None]) -> Outcome:
        return self._check("expect_last_effect", lambda s: s.last_effect, expectation).done()

    def expect_page_change(self, expected_url: str) -> Outcome:
        def run(s: Running) -> HarnessState:
            if s.page_change is None:
                raise NavigationError(
                    f"expected page change to {expected_url!r}, but no page change happened"
                )
            if s.page_change != expected_url:
                raise NavigationError(
                    f"expected page change to {expected_url!r}, but page changed to {s.page_change!r}"
                )
            return s
        return self._step("expect_page_change", run).done()


# Construction

def _construct(
    program: ProgramDefinition,
    flags: Callable[[], Any],
    url: Optional[str] = None,
    on_url_change: Optional[OnUrlChange] = None,
    navigation: bool = False,
) -> ProgramTest:
    placeholder = Running(model=None)
    try:
        location = Location.parse(url) if url is not None else None
        try:
            resolved_flags = flags()
        except DecodeError as e:
            raise ConstructionError(f"flags did not decode: {e}") from e
        state: HarnessState = machine.initial(program, resolved_flags, location if navigation else None)
        if location is not None:
            state = state.with_location(location)
    except ConstructionError as e:
        state = machine.fail_with(placeholder, e, "create")
        get_logger(__name__, trace_id=program.name).info("Harness failed in create: %s", state.reason)
    return ProgramTest(program=program, state=state, on_url_change=on_url_change)


def _no_flags() -> Any:
    return None


def create(program: ProgramDefinition) -> ProgramTest:
    return _construct(program, _no_flags)


def create_with_flags(program: ProgramDefinition, flags: Any) -> ProgramTest:
    return _construct(program, lambda: flags)


def create_with_json_string_flags(program: ProgramDefinition, decoder: Decoder, raw_json: str) -> ProgramTest:
    """Decode raw_json with decoder and pass the result to init as flags."""
    return _construct(program, lambda: decode_string(decoder, raw_json))


def create_with_navigation(program: ProgramDefinition, on_url_change: OnUrlChange, url: str) -> ProgramTest:
    """Start at url; init receives the Location and route changes go through on_url_change."""
    return _construct(program, _no_flags, url, on_url_change, navigation=True)


def create_with_navigation_and_flags(
    program: ProgramDefinition, on_url_change: OnUrlChange, url: str, flags: Any
) -> ProgramTest:
    return _construct(program, lambda: flags, url, on_url_change, navigation=True)


def create_with_navigation_and_json_string_flags(
    program: ProgramDefinition, on_url_change: OnUrlChange, url: str, decoder: Decoder, raw_json: str
) -> ProgramTest:
    return _construct(program, lambda: decode_string(decoder, raw_json), url, on_url_change, navigation=True)


def create_with_base_url(program: ProgramDefinition, base_url: str) -> ProgramTest:
    """Resolve links against base_url; init gets no location and links are not intercepted."""
    return _construct(program, _no_flags, base_url)
