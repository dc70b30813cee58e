"""Side effects requested by view controllers.

Controllers never navigate, touch browser history or scroll on their own.
They hand effect objects to the sink they were built with and the hosting
layer (the HTTP routes, or a test) decides how to carry them out.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Union


@dataclass(frozen=True, slots=True)
class Navigate:
    """Leave the current view for ``target``.

    ``external`` marks a full navigation away from the application, as used
    by the "feeling lucky" shortcut.
    """

    target: str
    external: bool = False


@dataclass(frozen=True, slots=True)
class UpdateAddress:
    """Rewrite the address bar to ``url`` without re-running the view.

    ``replace`` swaps the current history entry instead of pushing a new one.
    """

    url: str
    replace: bool = False


@dataclass(frozen=True, slots=True)
class ScrollToTop:
    pass


Effect = Union[Navigate, UpdateAddress, ScrollToTop]
EffectSink = Callable[[Effect], None]


class EffectRecorder:
    """Effect sink collecting effects in emission order."""

    def __init__(self) -> None:
        self.effects: List[Effect] = []

    def __call__(self, effect: Effect) -> None:
        self.effects.append(effect)

    def navigations(self) -> List[Navigate]:
        return [effect for effect in self.effects if isinstance(effect, Navigate)]

    def address_updates(self) -> List[UpdateAddress]:
        return [effect for effect in self.effects if isinstance(effect, UpdateAddress)]


__all__ = ["Effect", "EffectRecorder", "EffectSink", "Navigate", "ScrollToTop", "UpdateAddress"]
