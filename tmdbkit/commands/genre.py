"""
Genre endpoints.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from tmdbkit.commands.base import Command
from tmdbkit.schemas import Genre, TMDBModel


class GenreListResult(TMDBModel):
    genres: List[Genre]


@dataclass
class GenreList(Command):
    """
    Get the list of official genres for movies or TV shows.

    Use ``GenreList.movie()`` or ``GenreList.tv()``.
    """

    kind: str
    language: Optional[str] = None

    output = GenreListResult

    @classmethod
    def movie(cls, language: Optional[str] = None) -> "GenreList":
        return cls("movie", language)

    @classmethod
    def tv(cls, language: Optional[str] = None) -> "GenreList":
        return cls("tv", language)

    def path(self) -> str:
        return f"/genre/{self.kind}/list"

    def params(self) -> Dict[str, Any]:
        return {"language": self.language}

    def unwrap(self, result: GenreListResult) -> List[Genre]:
        return result.genres
