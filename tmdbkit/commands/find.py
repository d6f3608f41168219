"""
Find by external ID.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union
from urllib.parse import quote

from pydantic import Field

from tmdbkit.commands.base import Command
from tmdbkit.schemas import (
    EpisodeShort,
    MovieShort,
    PersonShort,
    SeasonBase,
    TMDBModel,
    TVShowShort,
)


class ExternalIdSource(str, Enum):
    IMDB = "imdb_id"
    FACEBOOK = "facebook_id"
    INSTAGRAM = "instagram_id"
    TVDB = "tvdb_id"
    TIKTOK = "tiktok_id"
    TWITTER = "twitter_id"
    WIKIDATA = "wikidata_id"
    YOUTUBE = "youtube_id"


class FoundPerson(PersonShort):
    known_for_department: Optional[str] = None
    known_for: List[Union[MovieShort, TVShowShort]] = Field(default_factory=list)


class FoundSeason(SeasonBase):
    show_id: Optional[int] = None
    episode_count: Optional[int] = None


class FindResults(TMDBModel):
    movie_results: List[MovieShort] = Field(default_factory=list)
    person_results: List[FoundPerson] = Field(default_factory=list)
    tv_results: List[TVShowShort] = Field(default_factory=list)
    tv_episode_results: List[EpisodeShort] = Field(default_factory=list)
    tv_season_results: List[FoundSeason] = Field(default_factory=list)


@dataclass
class FindById(Command):
    """
    Find data by one of the supported external IDs.

    Example:
        FindById("tt0137523", ExternalIdSource.IMDB)
    """

    external_id: str
    external_source: ExternalIdSource
    language: Optional[str] = None

    output = FindResults

    def path(self) -> str:
        return f"/find/{quote(self.external_id, safe='')}"

    def params(self) -> Dict[str, Any]:
        return {"external_source": self.external_source, "language": self.language}
