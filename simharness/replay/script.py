"""
Interaction scripts: a JSON list of harness steps.

Example:
    {
      "steps": [
        {"op": "click_button", "label": "Click Me"},
        {"op": "fill_in", "label": "Name", "text": "Ada"},
        {"op": "within", "selectors": [{"id": "second"}],
         "steps": [{"op": "click_button", "label": "Click Me"}]},
        {"op": "route_change", "url": "/settings"}
      ]
    }
"""

import json
from pathlib import Path
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ..dom import selectors as sel
from ..dom.selectors import Selector


class SelectorSpec(BaseModel):
    """One selector group; every field that is set must match (AND)."""
    model_config = ConfigDict(populate_by_name=True)

    tag: Optional[str] = None
    text: Optional[str] = None
    exact_text: Optional[str] = None
    id: Optional[str] = None
    class_: Optional[str] = Field(default=None, alias="class")
    attributes: Dict[str, str] = Field(default_factory=dict)

    def to_selectors(self) -> List[Selector]:
        out = []
        if self.tag is not None:
            out.append(sel.tag(self.tag))
        if self.text is not None:
            out.append(sel.text(self.text))
        if self.exact_text is not None:
            out.append(sel.exact_text(self.exact_text))
        if self.id is not None:
            out.append(sel.id_(self.id))
        if self.class_ is not None:
            out.append(sel.class_(self.class_))
        for name in sorted(self.attributes):
            out.append(sel.attribute(name, self.attributes[name]))
        return out


def _selectors(specs: List[SelectorSpec]) -> List[Selector]:
    return [s for spec in specs for s in spec.to_selectors()]


class UpdateStep(BaseModel):
    op: Literal["update"]
    msg: Any

    def apply(self, test):
        return test.update(self.msg)


class ClickButtonStep(BaseModel):
    op: Literal["click_button"]
    label: str

    def apply(self, test):
        return test.click_button(self.label)


class ClickLinkStep(BaseModel):
    op: Literal["click_link"]
    label: str
    href: str

    def apply(self, test):
        return test.click_link(self.label, self.href)


class FillInStep(BaseModel):
    op: Literal["fill_in"]
    label: str
    text: str
    field_id: Optional[str] = None

    def apply(self, test):
        return test.fill_in(self.label, self.text, field_id=self.field_id)


class FillInTextareaStep(BaseModel):
    op: Literal["fill_in_textarea"]
    text: str

    def apply(self, test):
        return test.fill_in_textarea(self.text)


class CheckStep(BaseModel):
    op: Literal["check"]
    label: str
    checked: bool = True

    def apply(self, test):
        return test.check(self.label, self.checked)


class SelectOptionStep(BaseModel):
    op: Literal["select_option"]
    label: str
    option: str

    def apply(self, test):
        return test.select_option(self.label, self.option)


class SimulateDomEventStep(BaseModel):
    op: Literal["simulate_dom_event"]
    selectors: List[SelectorSpec]
    event: str
    payload: Any = None

    def apply(self, test):
        return test.simulate_dom_event(_selectors(self.selectors), self.event, self.payload)


class RouteChangeStep(BaseModel):
    op: Literal["route_change"]
    url: str

    def apply(self, test):
        return test.route_change(self.url)


class ShouldHaveStep(BaseModel):
    op: Literal["should_have"]
    selectors: List[SelectorSpec]

    def apply(self, test):
        return test.should_have(_selectors(self.selectors))


class ShouldNotHaveStep(BaseModel):
    op: Literal["should_not_have"]
    selectors: List[SelectorSpec]

    def apply(self, test):
        return test.should_not_have(_selectors(self.selectors))


class WithinStep(BaseModel):
    op: Literal["within"]
    selectors: List[SelectorSpec]
    steps: List["Step"]

    def apply(self, test):
        def run(inner):
            for step in self.steps:
                inner = step.apply(inner)
            return inner
        return test.within(_selectors(self.selectors), run)


Step = Annotated[
    Union[
        UpdateStep,
        ClickButtonStep,
        ClickLinkStep,
        FillInStep,
        FillInTextareaStep,
        CheckStep,
        SelectOptionStep,
        SimulateDomEventStep,
        RouteChangeStep,
        ShouldHaveStep,
        ShouldNotHaveStep,
        WithinStep,
    ],
    Field(discriminator="op"),
]

WithinStep.model_rebuild()


class Script(BaseModel):
    steps: List[Step] = Field(default_factory=list)


def parse_script(data: Any) -> Script:
    """
    Validate a decoded script.

    Accepts either {"steps": [...]} or a bare list of steps.

    Raises:
        pydantic.ValidationError: If a step is malformed
    """
    if isinstance(data, list):
        data = {"steps": data}
    return Script.model_validate(data)


def load_script(path: Union[str, Path]) -> Script:
    with open(path, "r", encoding="utf-8") as f:
        return parse_script(json.load(f))
