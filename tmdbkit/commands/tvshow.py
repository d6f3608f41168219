"""
TV show, season and episode endpoints.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import Field

from tmdbkit.commands.base import Command
from tmdbkit.schemas import (
    Count,
    Credit,
    EmptyStr,
    Episode,
    Image,
    Keyword,
    PaginatedResult,
    Results,
    Season,
    StrList,
    TMDBModel,
    TVShow,
    TVShowShort,
    WatchProviderResult,
)


class Role(TMDBModel):
    credit_id: str
    character: EmptyStr = None
    episode_count: Count = 0


class Job(TMDBModel):
    credit_id: str
    job: str
    episode_count: Count = 0


class AggregateCast(Credit):
    """Cast member aggregated over every season; roles replace ``character``."""

    credit_id: Optional[str] = None
    roles: List[Role] = Field(default_factory=list)
    total_episode_count: Count = 0
    order: Count = 0


class AggregateCrew(Credit):
    credit_id: Optional[str] = None
    department: str
    jobs: List[Job] = Field(default_factory=list)
    total_episode_count: Count = 0


class TVShowAggregateCreditsResult(TMDBModel):
    id: int
    cast: List[AggregateCast] = Field(default_factory=list)
    crew: List[AggregateCrew] = Field(default_factory=list)


class ContentRating(TMDBModel):
    iso_3166_1: str
    rating: EmptyStr = None
    descriptors: StrList = Field(default_factory=list)


class TVShowExternalIdsResult(TMDBModel):
    id: int
    imdb_id: EmptyStr = None
    freebase_mid: EmptyStr = None
    freebase_id: EmptyStr = None
    tvdb_id: Optional[int] = None
    tvrage_id: Optional[int] = None
    wikidata_id: EmptyStr = None
    facebook_id: EmptyStr = None
    instagram_id: EmptyStr = None
    twitter_id: EmptyStr = None


class TVShowImagesResult(TMDBModel):
    id: int
    backdrops: List[Image] = Field(default_factory=list)
    posters: List[Image] = Field(default_factory=list)
    logos: List[Image] = Field(default_factory=list)


@dataclass
class TVShowDetails(Command):
    """Get the details of a TV show."""

    series_id: int
    language: Optional[str] = None

    output = TVShow

    def path(self) -> str:
        return f"/tv/{self.series_id}"

    def params(self) -> Dict[str, Any]:
        return {"language": self.language}


@dataclass
class TVShowAggregateCredits(Command):
    """
    Get the aggregate credits (cast and crew) that have been added to a TV
    show. Unlike the per-season credits, a person appears once with all of
    their roles or jobs.
    """

    series_id: int
    language: Optional[str] = None

    output = TVShowAggregateCreditsResult

    def path(self) -> str:
        return f"/tv/{self.series_id}/aggregate_credits"

    def params(self) -> Dict[str, Any]:
        return {"language": self.language}


@dataclass
class TVShowContentRatings(Command):
    series_id: int

    output = Results[List[ContentRating]]

    def path(self) -> str:
        return f"/tv/{self.series_id}/content_ratings"

    def unwrap(self, result: Results[List[ContentRating]]) -> List[ContentRating]:
        return result.results


@dataclass
class TVShowExternalIds(Command):
    series_id: int

    output = TVShowExternalIdsResult

    def path(self) -> str:
        return f"/tv/{self.series_id}/external_ids"


@dataclass
class TVShowImages(Command):
    series_id: int
    language: Optional[str] = None

    output = TVShowImagesResult

    def path(self) -> str:
        return f"/tv/{self.series_id}/images"

    def params(self) -> Dict[str, Any]:
        return {"language": self.language}


@dataclass
class TVShowKeywords(Command):
    series_id: int

    output = Results[List[Keyword]]

    def path(self) -> str:
        return f"/tv/{self.series_id}/keywords"

    def unwrap(self, result: Results[List[Keyword]]) -> List[Keyword]:
        return result.results


@dataclass
class TVShowLatest(Command):
    """Get the newest TV show ID."""

    language: Optional[str] = None

    output = TVShow

    def path(self) -> str:
        return "/tv/latest"

    def params(self) -> Dict[str, Any]:
        return {"language": self.language}


@dataclass
class TVShowSearch(Command):
    """Search for TV shows by their original, translated and also known as names."""

    query: str
    language: Optional[str] = None
    page: Optional[int] = None
    include_adult: bool = False
    # Matches any air date, including episodes
    year: Optional[int] = None
    first_air_date_year: Optional[int] = None

    output = PaginatedResult[TVShowShort]

    def path(self) -> str:
        return "/search/tv"

    def params(self) -> Dict[str, Any]:
        return {
            "query": self.query,
            "language": self.language,
            "page": self.page,
            "include_adult": self.include_adult,
            "year": self.year,
            "first_air_date_year": self.first_air_date_year,
        }


@dataclass
class TVShowSimilar(Command):
    series_id: int
    language: Optional[str] = None
    page: Optional[int] = None

    output = PaginatedResult[TVShowShort]

    def path(self) -> str:
        return f"/tv/{self.series_id}/similar"

    def params(self) -> Dict[str, Any]:
        return {"language": self.language, "page": self.page}


@dataclass
class TVShowWatchProviders(Command):
    series_id: int

    output = WatchProviderResult

    def path(self) -> str:
        return f"/tv/{self.series_id}/watch/providers"


@dataclass
class TVShowSeasonDetails(Command):
    """Query the details of a TV season, episodes included."""

    series_id: int
    season_number: int
    language: Optional[str] = None

    output = Season

    def path(self) -> str:
        return f"/tv/{self.series_id}/season/{self.season_number}"

    def params(self) -> Dict[str, Any]:
        return {"language": self.language}


@dataclass
class TVShowEpisodeDetails(Command):
    series_id: int
    season_number: int
    episode_number: int
    language: Optional[str] = None

    output = Episode

    def path(self) -> str:
        return f"/tv/{self.series_id}/season/{self.season_number}/episode/{self.episode_number}"

    def params(self) -> Dict[str, Any]:
        return {"language": self.language}
