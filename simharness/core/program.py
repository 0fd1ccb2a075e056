"""
Program definition: the three pure functions the harness drives.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

# init(flags, location) -> (model, effect)
Init = Callable[[Any, Any], Tuple[Any, Any]]
# update(msg, model) -> (model, effect)
Update = Callable[[Any, Any], Tuple[Any, Any]]
# view(model) -> Node
View = Callable[[Any], Any]


@dataclass(frozen=True)
class ProgramDefinition:
    """
    Immutable program definition.

    Fields:
        init: Called once per harness with (flags, location); either may be None
        update: Reducer (msg, model) -> (model, effect)
        view: Renderer model -> Node, called fresh before every query
        name: Label used as trace_id in harness logs
    """
    init: Init
    update: Update
    view: View
    name: str = "program"

    @staticmethod
    def sandbox(
        init_model: Any,
        update: Callable[[Any, Any], Any],
        view: View,
        name: str = "sandbox",
        no_effect: Optional[Any] = None,
    ) -> "ProgramDefinition":
        """
        Build a program whose update returns only a model.

        Effects are always `no_effect`. Useful for components without commands.
        """
        return ProgramDefinition(
            init=lambda flags, location: (init_model, no_effect),
            update=lambda msg, model: (update(msg, model), no_effect),
            view=view,
            name=name,
        )
