"""
Global change lists.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from tmdbkit.commands.base import Command
from tmdbkit.schemas import Change, PaginatedResult


@dataclass
class ChangeList(Command):
    """
    Get the IDs of the movies, TV shows or people changed in the last 24 hours.

    The range can span up to 14 days with ``start_date`` and ``end_date``.
    """

    kind: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    page: Optional[int] = None

    output = PaginatedResult[Change]

    @classmethod
    def movie(cls, start_date: Optional[date] = None, end_date: Optional[date] = None,
              page: Optional[int] = None) -> "ChangeList":
        return cls("movie", start_date, end_date, page)

    @classmethod
    def tvshow(cls, start_date: Optional[date] = None, end_date: Optional[date] = None,
               page: Optional[int] = None) -> "ChangeList":
        return cls("tv", start_date, end_date, page)

    @classmethod
    def person(cls, start_date: Optional[date] = None, end_date: Optional[date] = None,
               page: Optional[int] = None) -> "ChangeList":
        return cls("person", start_date, end_date, page)

    def path(self) -> str:
        return f"/{self.kind}/changes"

    def params(self) -> Dict[str, Any]:
        return {"start_date": self.start_date, "end_date": self.end_date, "page": self.page}
