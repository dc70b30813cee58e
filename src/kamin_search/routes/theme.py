"""Light/dark preference stored in a cookie."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Cookie, Response

from kamin_search.config import Theme
from kamin_search.routes.dependencies import SettingsDep
from kamin_search.schemas.common import ThemeResponse

THEME_COOKIE = "theme"

router = APIRouter(prefix="/api/v1/theme", tags=["theme"])

ThemeCookie = Annotated[str | None, Cookie(alias=THEME_COOKIE)]


def _current(raw: str | None, default: Theme) -> Theme:
    try:
        return Theme(raw) if raw else default
    except ValueError:
        return default


@router.get("", response_model=ThemeResponse, summary="Return the selected theme")
def read_theme(settings: SettingsDep, theme: ThemeCookie = None) -> ThemeResponse:
    return ThemeResponse(theme=_current(theme, settings.default_theme))


@router.post("/toggle", response_model=ThemeResponse, summary="Switch between light and dark")
def toggle_theme(
    response: Response, settings: SettingsDep, theme: ThemeCookie = None
) -> ThemeResponse:
    """Flip the theme and remember the choice for ``THEME_COOKIE_DAYS``."""
    selected = _current(theme, settings.default_theme).toggled()
    response.set_cookie(
        THEME_COOKIE,
        selected.value,
        max_age=settings.theme_cookie_days * 24 * 3600,
        samesite="lax",
    )
    return ThemeResponse(theme=selected)


__all__ = ["THEME_COOKIE", "router", "read_theme", "toggle_theme"]
