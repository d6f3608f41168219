"""
Multi search: movies, TV shows and people in a single request.
"""

from dataclasses import dataclass
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import Field

from tmdbkit.commands.base import Command
from tmdbkit.schemas import MovieShort, PaginatedResult, PersonShort, TVShowShort


class MultiSearchMovie(MovieShort):
    media_type: Literal["movie"]


class MultiSearchTVShow(TVShowShort):
    media_type: Literal["tv"]


class MultiSearchPerson(PersonShort):
    media_type: Literal["person"]
    adult: bool = False
    known_for_department: Optional[str] = None
    popularity: float = 0.0
    known_for: List[Union[MovieShort, TVShowShort]] = Field(default_factory=list)


MultiSearchResult = Annotated[
    Union[MultiSearchMovie, MultiSearchTVShow, MultiSearchPerson],
    Field(discriminator="media_type"),
]


@dataclass
class MultiSearch(Command):
    """
    Search for movies, TV shows and people at once.

    Each result carries a ``media_type`` which decides the record it is read
    into.
    """

    query: str
    language: Optional[str] = None
    page: Optional[int] = None
    include_adult: bool = False

    output = PaginatedResult[MultiSearchResult]

    def path(self) -> str:
        return "/search/multi"

    def params(self) -> Dict[str, Any]:
        return {
            "query": self.query,
            "language": self.language,
            "page": self.page,
            "include_adult": self.include_adult,
        }
