from __future__ import annotations

from fastapi import APIRouter, Query
from pydantic import BaseModel

from aissist_core import catalog

router = APIRouter(prefix="/movies", tags=["movies"])


class Movie(BaseModel):
    id: int
    title: str
    rating: float


class MovieList(BaseModel):
    success: bool = True
    results: list[Movie]


class MovieSearchResult(MovieList):
    query: str


@router.get("/popular", response_model=MovieList)
async def popular() -> MovieList:
    return MovieList(results=[Movie.model_validate(m) for m in catalog.POPULAR_MOVIES])


@router.get("/search", response_model=MovieSearchResult)
async def search(query: str = Query(default="")) -> MovieSearchResult:
    results = [Movie.model_validate(m) for m in catalog.search_results(query)]
    return MovieSearchResult(query=query, results=results)
