"""HTTP endpoint serving the paginated results view."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, Request

from kamin_search.controllers.address import RESULTS_PATH
from kamin_search.controllers.effects import EffectRecorder
from kamin_search.controllers.results import ResultsPageController
from kamin_search.routes.dependencies import ClientDep
from kamin_search.schemas.common import effect_payloads
from kamin_search.schemas.results import ResultsResponse, ResultsViewModel
from kamin_search.utils.logging import log_stage, set_request_metadata

router = APIRouter(prefix="/api/v1/results", tags=["results"])


@router.get(
    "",
    response_model=ResultsResponse,
    summary="Render the results view for an address",
    response_description="Visible page of results plus the effects the client must apply.",
)
async def results_view(
    request: Request,
    client: ClientDep,
    q: Annotated[str | None, Query(description="Search query; the view redirects home without it")] = None,
    page: Annotated[
        str | None,
        Query(description="1-based page; invalid or out of range values are corrected"),
    ] = None,
) -> ResultsResponse:
    """Mount a results controller on ``/search?<query string>``, load and render it."""
    query_string = request.url.query
    address = f"{RESULTS_PATH}?{query_string}" if query_string else RESULTS_PATH
    recorder = EffectRecorder()
    controller = ResultsPageController(client, on_effect=recorder)
    try:
        if not controller.mount(address):
            return ResultsResponse(effects=effect_payloads(recorder.effects))
        set_request_metadata(query=controller.query)
        with log_stage("search"):
            await controller.load()
        view = controller.render()
        set_request_metadata(page=view.page)
    finally:
        controller.dispose()
    return ResultsResponse(
        view=ResultsViewModel.from_view(view),
        address=controller.address,
        effects=effect_payloads(recorder.effects),
    )


__all__ = ["router", "results_view"]
