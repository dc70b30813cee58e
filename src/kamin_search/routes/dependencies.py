"""FastAPI dependencies shared by the view routes."""

from __future__ import annotations

from typing import Annotated, cast

from fastapi import Depends, Request

from kamin_search.config import Settings, get_settings
from kamin_search.services.search import SearchClientProtocol
from kamin_search.utils.errors import BadRequest


def get_search_client(request: Request) -> SearchClientProtocol:
    """Return the search client stored on the application state."""
    client = getattr(request.app.state, "search_client", None)
    if client is None or not hasattr(client, "search"):
        raise BadRequest("Search service client is not configured")
    return cast(SearchClientProtocol, client)


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was built with."""
    settings = getattr(request.app.state, "settings", None)
    return settings if isinstance(settings, Settings) else get_settings()


ClientDep = Annotated[SearchClientProtocol, Depends(get_search_client)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]

__all__ = ["ClientDep", "SettingsDep", "get_app_settings", "get_search_client"]
