"""Search box controller: input validation, navigation and "feeling lucky"."""

from __future__ import annotations

from loguru import logger

from kamin_search.controllers.address import results_address
from kamin_search.controllers.effects import EffectSink, Navigate
from kamin_search.controllers.notification import NotificationController
from kamin_search.services.search import SearchClientProtocol

EMPTY_QUERY_MESSAGE = "Please enter a search term."


class SearchEntryController:
    """Front door of the application.

    ``current_query`` is set when the box is embedded in the results view; a
    submission of the query already on screen is then ignored.
    """

    def __init__(
        self,
        client: SearchClientProtocol,
        notifications: NotificationController,
        *,
        on_effect: EffectSink,
        current_query: str | None = None,
    ) -> None:
        self._client = client
        self._notifications = notifications
        self._emit = on_effect
        self._current_query = current_query

    def submit(self, text: str) -> bool:
        """Navigate to the results for ``text``; notify and return ``False`` when blank."""
        if not text or not text.strip():
            self._notifications.show(EMPTY_QUERY_MESSAGE)
            return False
        if text == self._current_query:
            return True
        self._emit(Navigate(results_address(text)))
        return True

    async def feeling_lucky(self, text: str) -> str | None:
        """Jump straight to the best match for ``text``.

        Returns the target, or ``None`` when the text is blank or the search
        produced nothing (a failed search looks the same).
        """
        if not text or not text.strip():
            return None
        results = await self._client.search(text)
        if not results:
            logger.bind(query=text).info("entry.lucky_no_results")
            return None
        target = results[0].where
        self._emit(Navigate(target, external=True))
        return target


__all__ = ["EMPTY_QUERY_MESSAGE", "SearchEntryController"]
