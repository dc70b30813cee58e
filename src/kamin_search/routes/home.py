"""HTTP endpoints backing the search box of the landing view."""

from __future__ import annotations

from fastapi import APIRouter

from kamin_search.config import Settings
from kamin_search.controllers.effects import EffectRecorder
from kamin_search.controllers.entry import SearchEntryController
from kamin_search.controllers.notification import NotificationController
from kamin_search.routes.dependencies import ClientDep, SettingsDep
from kamin_search.schemas.common import NotificationPayload, effect_payloads
from kamin_search.schemas.home import LuckyResponse, SearchTextRequest, SubmitResponse
from kamin_search.utils.logging import log_stage, set_request_metadata

router = APIRouter(prefix="/api/v1/home", tags=["home"])


def _notifications(settings: Settings, view: str) -> NotificationController:
    return NotificationController(
        view=view,
        auto_hide_after=settings.notification_auto_hide_seconds,
        transition_duration=settings.notification_transition_seconds,
    )


@router.post(
    "/submit",
    response_model=SubmitResponse,
    summary="Validate the search box and navigate to the results view",
)
async def submit(
    body: SearchTextRequest, client: ClientDep, settings: SettingsDep
) -> SubmitResponse:
    """Blank text raises the notification; anything else yields a navigation."""
    recorder = EffectRecorder()
    notifications = _notifications(settings, "results" if body.current_query else "home")
    controller = SearchEntryController(
        client, notifications, on_effect=recorder, current_query=body.current_query
    )
    try:
        accepted = controller.submit(body.text)
        state = notifications.snapshot()
    finally:
        notifications.close()
    return SubmitResponse(
        accepted=accepted,
        effects=effect_payloads(recorder.effects),
        notification=NotificationPayload.from_state(state),
    )


@router.post(
    "/lucky",
    response_model=LuckyResponse,
    summary="Navigate straight to the best match",
)
async def lucky(body: SearchTextRequest, client: ClientDep, settings: SettingsDep) -> LuckyResponse:
    """Search once and point the client at the top result, if any."""
    recorder = EffectRecorder()
    notifications = _notifications(settings, "home")
    controller = SearchEntryController(client, notifications, on_effect=recorder)
    set_request_metadata(query=body.text)
    try:
        with log_stage("lucky"):
            target = await controller.feeling_lucky(body.text)
    finally:
        notifications.close()
    return LuckyResponse(target=target, effects=effect_payloads(recorder.effects))


__all__ = ["router", "submit", "lucky"]
