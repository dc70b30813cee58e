"""Pydantic models for the landing view search box."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from kamin_search.schemas.common import EffectPayload, NotificationPayload


class SearchTextRequest(BaseModel):
    text: str = Field("", description="Raw content of the search box.")
    current_query: str | None = Field(
        default=None, description="Query already displayed when the box sits on the results view."
    )


class SubmitResponse(BaseModel):
    accepted: bool = Field(..., description="Whether the text was a valid query.")
    effects: List[EffectPayload] = Field(default_factory=list)
    notification: NotificationPayload


class LuckyResponse(BaseModel):
    target: str | None = Field(default=None, description="Best match, when there is one.")
    effects: List[EffectPayload] = Field(default_factory=list)
