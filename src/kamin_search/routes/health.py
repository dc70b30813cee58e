"""Health endpoint reporting service status."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter

from kamin_search import __version__
from kamin_search.routes.dependencies import SettingsDep

_router_start = time.time()

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    summary="Report service health",
    response_description="Current status of the presentation service.",
)
def health(settings: SettingsDep) -> Dict[str, object]:
    """Return uptime, version and the configured search service."""
    return {
        "status": "ok",
        "version": __version__,
        "uptime": time.time() - _router_start,
        "search_api": settings.api_base_url,
        "checked_at": datetime.now(tz=timezone.utc).isoformat(),
    }
