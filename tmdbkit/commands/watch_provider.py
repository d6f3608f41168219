"""
Watch provider reference lists.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import Field

from tmdbkit.commands.base import Command
from tmdbkit.schemas import Results, WatchProvider


class WatchProviderDetail(WatchProvider):
    # Display priority per ISO 3166-1 country
    display_priorities: Dict[str, int] = Field(default_factory=dict)


@dataclass
class WatchProviderList(Command):
    """
    Get the list of streaming providers TMDB has watch provider data for.

    Use ``WatchProviderList.movie()`` or ``WatchProviderList.tv()``.
    """

    kind: str
    watch_region: Optional[str] = None
    language: Optional[str] = None

    output = Results[List[WatchProviderDetail]]

    @classmethod
    def movie(cls, watch_region: Optional[str] = None,
              language: Optional[str] = None) -> "WatchProviderList":
        return cls("movie", watch_region, language)

    @classmethod
    def tv(cls, watch_region: Optional[str] = None,
           language: Optional[str] = None) -> "WatchProviderList":
        return cls("tv", watch_region, language)

    def path(self) -> str:
        return f"/watch/providers/{self.kind}"

    def params(self) -> Dict[str, Any]:
        return {"watch_region": self.watch_region, "language": self.language}
