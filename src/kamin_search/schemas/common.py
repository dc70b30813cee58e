"""Schema helpers shared by the view endpoints."""

from __future__ import annotations

from typing import Annotated, List, Literal, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

from kamin_search.config import Theme
from kamin_search.controllers.effects import Effect, Navigate, UpdateAddress
from kamin_search.controllers.notification import NotificationState, TransitionPhase


class NavigatePayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: Literal["navigate"] = "navigate"
    target: str = Field(..., description="Address to open.")
    external: bool = Field(False, description="Whether the target leaves the application.")


class UpdateAddressPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: Literal["update_address"] = "update_address"
    url: str = Field(..., description="New address bar content; the view is not reloaded.")
    replace: bool = Field(False, description="Replace the current history entry instead of pushing.")


class ScrollToTopPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: Literal["scroll_to_top"] = "scroll_to_top"


EffectPayload = Annotated[
    Union[NavigatePayload, UpdateAddressPayload, ScrollToTopPayload],
    Field(discriminator="type"),
]


def effect_payloads(effects: Sequence[Effect]) -> List[EffectPayload]:
    """Convert controller effects into their JSON models, preserving order."""
    payloads: List[EffectPayload] = []
    for effect in effects:
        if isinstance(effect, Navigate):
            payloads.append(NavigatePayload(target=effect.target, external=effect.external))
        elif isinstance(effect, UpdateAddress):
            payloads.append(UpdateAddressPayload(url=effect.url, replace=effect.replace))
        else:
            payloads.append(ScrollToTopPayload())
    return payloads


class NotificationPayload(BaseModel):
    """Snapshot of a view's transient notification."""

    model_config = ConfigDict(extra="forbid")

    visible: bool
    phase: TransitionPhase
    message: str
    auto_hide_after: float = Field(..., ge=0.0, description="Seconds before auto-dismissal.")
    anchor: str

    @classmethod
    def from_state(cls, state: NotificationState) -> "NotificationPayload":
        return cls(
            visible=state.visible,
            phase=state.phase,
            message=state.message,
            auto_hide_after=state.auto_hide_after,
            anchor=state.anchor,
        )


class ThemeResponse(BaseModel):
    theme: Theme


__all__ = [
    "EffectPayload",
    "NavigatePayload",
    "NotificationPayload",
    "ScrollToTopPayload",
    "ThemeResponse",
    "UpdateAddressPayload",
    "effect_payloads",
]
