"""Model protocol and the Update pair returned by a transition."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, Union, runtime_checkable

from tuava.layout.elements import Element
from tuava.runtime.effect import NONE, Effect


@runtime_checkable
class Model(Protocol):
    """
    Immutable application state.

    ``update`` never mutates the model; it returns the next one (possibly
    itself) together with an effect. ``view`` returns either finished text
    or an element tree for the layout engine. A model may also define
    ``init() -> Effect``, interpreted once after the first render.
    """

    def update(self, message: Any) -> Update:
        ...

    def view(self) -> Union[str, Element]:
        ...


@dataclass(frozen=True)
class Update:
    """The next model and the effect to interpret after replacing it."""
    model: Any
    effect: Effect = NONE

    @classmethod
    def of(cls, model: Any, effect: Effect = NONE) -> Update:
        return cls(model, effect)
