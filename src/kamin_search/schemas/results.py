"""Pydantic models returned by the results view endpoint."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from kamin_search.controllers.results import ResultsView
from kamin_search.schemas.common import EffectPayload


class ResultItemModel(BaseModel):
    """One row of the results list."""

    title: str = Field(..., description="Readable title derived from the result address.")
    where: str = Field(..., description="Target address, also the identity of the result.")
    score: float = Field(..., ge=0.0, le=1.0, description="Relevance score.")
    score_label: str = Field(..., description="Score formatted as a percentage.")


class ResultsViewModel(BaseModel):
    query: str
    page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
    total_pages: int = Field(
        ...,
        ge=0,
        description="Pages offered by the pagination control (floor of results / page size).",
    )
    total_results: int = Field(..., ge=0)
    loading: bool
    items: List[ResultItemModel] = Field(default_factory=list)

    @classmethod
    def from_view(cls, view: ResultsView) -> "ResultsViewModel":
        return cls(
            query=view.query,
            page=view.page,
            page_size=view.page_size,
            total_pages=view.total_pages,
            total_results=view.total_results,
            loading=view.loading,
            items=[
                ResultItemModel(
                    title=item.title,
                    where=item.where,
                    score=item.score,
                    score_label=item.score_label,
                )
                for item in view.items
            ],
        )


class ResultsResponse(BaseModel):
    """Envelope returned by ``GET /api/v1/results``.

    ``view`` is ``None`` when the address carried no query; ``effects`` then
    holds the navigation back to the landing view.
    """

    view: ResultsViewModel | None = None
    address: str | None = Field(
        default=None, description="Canonical address of the view after clamping."
    )
    effects: List[EffectPayload] = Field(default_factory=list)
