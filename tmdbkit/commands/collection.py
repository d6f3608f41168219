"""
Collection endpoints.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import Field

from tmdbkit.commands.base import Command
from tmdbkit.schemas import (
    CollectionBase,
    Count,
    Flag,
    IntList,
    MediaType,
    OptionalDate,
    Score,
    TMDBModel,
)


class CollectionPart(TMDBModel):
    """A movie belonging to a collection."""

    id: int
    title: str
    original_title: str
    original_language: str
    media_type: MediaType = MediaType.MOVIE
    overview: Optional[str] = None
    release_date: OptionalDate = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    genre_ids: IntList = Field(default_factory=list)
    adult: Flag = False
    video: Flag = False
    popularity: Score = 0.0
    vote_average: Score = 0.0
    vote_count: Count = 0


class CollectionDetailsResult(CollectionBase):
    parts: List[CollectionPart] = Field(default_factory=list)


@dataclass
class CollectionDetails(Command):
    """Get collection details by ID."""

    collection_id: int
    language: Optional[str] = None

    output = CollectionDetailsResult

    def path(self) -> str:
        return f"/collection/{self.collection_id}"

    def params(self) -> Dict[str, Any]:
        return {"language": self.language}
