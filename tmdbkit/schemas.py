"""
Data schemas for TMDB records.

This module defines Pydantic models for the nouns shared across TMDB
endpoints (movies, TV shows, people, companies, ...). Endpoint-specific
result wrappers live next to their commands in ``tmdbkit.commands``.

The upstream API is inconsistent about missing values: the same field can be
absent, ``null`` or ``""`` depending on the endpoint. The annotated types below
normalise those cases on the way in.
"""

from datetime import date, datetime
from enum import Enum, IntEnum
from typing import Annotated, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from tmdbkit.utils import (
    empty_string_to_none,
    null_to_empty_list,
    null_to_false,
    null_to_zero,
    parse_optional_date,
    parse_utc_datetime,
)

T = TypeVar("T")

# "" and null both become None
EmptyStr = Annotated[Optional[str], BeforeValidator(empty_string_to_none)]
# "" and null both become None, "YYYY-MM-DD" becomes a date
OptionalDate = Annotated[Optional[date], BeforeValidator(parse_optional_date)]
# null becomes the empty value
IntList = Annotated[List[int], BeforeValidator(null_to_empty_list)]
StrList = Annotated[List[str], BeforeValidator(null_to_empty_list)]
Count = Annotated[int, BeforeValidator(null_to_zero)]
Score = Annotated[float, BeforeValidator(null_to_zero)]
Flag = Annotated[bool, BeforeValidator(null_to_false)]
# "2024-05-01 12:30:04 UTC" as well as ISO 8601
UTCDateTime = Annotated[datetime, BeforeValidator(parse_utc_datetime)]


class TMDBModel(BaseModel):
    """Base class for every TMDB record. Unknown upstream fields are ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# =============================================================================
# Enumerations
# =============================================================================


class Status(str, Enum):
    """Production status of a movie."""
    RUMORED = "Rumored"
    PLANNED = "Planned"
    IN_PRODUCTION = "In Production"
    POST_PRODUCTION = "Post Production"
    RELEASED = "Released"
    CANCELED = "Canceled"


class ReleaseDateKind(IntEnum):
    PREMIERE = 1
    THEATRICAL_LIMITED = 2
    THEATRICAL = 3
    DIGITAL = 4
    PHYSICAL = 5
    TV = 6


class MediaType(str, Enum):
    MOVIE = "movie"
    TV = "tv"
    COLLECTION = "collection"
    PERSON = "person"


# =============================================================================
# Generic wrappers
# =============================================================================


class PaginatedResult(TMDBModel, Generic[T]):
    """One page of a list endpoint."""

    page: int
    total_results: Count = 0
    total_pages: Count = 0
    results: List[T] = Field(default_factory=list)

    @property
    def has_more(self) -> bool:
        """Check if there are more pages after this one."""
        return self.page < self.total_pages


class EntityResults(TMDBModel, Generic[T]):
    """``{"id": ..., "results": ...}`` envelope."""

    id: int
    results: T


class Results(TMDBModel, Generic[T]):
    """``{"results": ...}`` envelope."""

    results: T


# =============================================================================
# Small shared records
# =============================================================================


class Country(TMDBModel):
    iso_3166_1: str
    name: str


class Language(TMDBModel):
    iso_639_1: str
    name: str
    english_name: Optional[str] = None


class Genre(TMDBModel):
    id: int
    name: str

    model_config = ConfigDict(
        json_schema_extra={"example": {"id": 18, "name": "Drama"}}
    )


class Keyword(TMDBModel):
    id: int
    name: str


class Image(TMDBModel):
    aspect_ratio: float
    file_path: str
    height: int
    width: int
    iso_639_1: EmptyStr = None
    vote_average: Score = 0.0
    vote_count: Count = 0


class Video(TMDBModel):
    id: str
    name: str
    kind: str = Field(alias="type")
    site: str
    key: str
    published_at: Optional[datetime] = None
    size: Count = 0
    official: Flag = False
    iso_639_1: EmptyStr = None
    iso_3166_1: EmptyStr = None


class Certification(TMDBModel):
    certification: str
    meaning: str
    order: int


class Change(TMDBModel):
    """Entry of a global change list (movie, tv or person)."""

    id: Optional[int] = None
    adult: Optional[bool] = None


# =============================================================================
# Companies & collections
# =============================================================================


class CompanyShort(TMDBModel):
    id: int
    name: str
    logo_path: Optional[str] = None
    origin_country: EmptyStr = None


class Company(CompanyShort):
    description: EmptyStr = None
    headquarters: EmptyStr = None
    homepage: EmptyStr = None
    parent_company: Optional[CompanyShort] = None


class CollectionBase(TMDBModel):
    id: int
    name: str
    overview: EmptyStr = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None


# =============================================================================
# People & credits
# =============================================================================


class PersonShort(TMDBModel):
    id: int
    credit_id: Optional[str] = None
    name: str
    gender: Optional[int] = None
    profile_path: Optional[str] = None


class Person(PersonShort):
    """Full person record, as returned by ``/person/{id}``."""

    adult: Flag = False
    also_known_as: StrList = Field(default_factory=list)
    biography: EmptyStr = None
    birthday: OptionalDate = None
    deathday: OptionalDate = None
    homepage: EmptyStr = None
    imdb_id: EmptyStr = None
    known_for_department: EmptyStr = None
    place_of_birth: EmptyStr = None
    popularity: Score = 0.0


class Credit(PersonShort):
    """Fields shared by cast and crew entries."""

    credit_id: str
    adult: Flag = False
    known_for_department: EmptyStr = None
    original_name: Optional[str] = None
    popularity: Score = 0.0


class Cast(Credit):
    cast_id: Optional[int] = None
    character: EmptyStr = None
    order: Count = 0


class Crew(Credit):
    department: str
    job: str


# =============================================================================
# Release dates & watch providers
# =============================================================================


class ReleaseDate(TMDBModel):
    certification: EmptyStr = None
    iso_639_1: EmptyStr = None
    note: EmptyStr = None
    release_date: datetime
    kind: ReleaseDateKind = Field(alias="type")
    descriptors: StrList = Field(default_factory=list)


class LocatedReleaseDates(TMDBModel):
    iso_3166_1: str
    release_dates: List[ReleaseDate]


class WatchProvider(TMDBModel):
    provider_id: int
    provider_name: str
    display_priority: Count = 0
    logo_path: Optional[str] = None


ProviderList = Annotated[List[WatchProvider], BeforeValidator(null_to_empty_list)]


class LocatedWatchProvider(TMDBModel):
    """Offers available in one country."""

    link: Optional[str] = None
    flatrate: ProviderList = Field(default_factory=list)
    rent: ProviderList = Field(default_factory=list)
    buy: ProviderList = Field(default_factory=list)
    free: ProviderList = Field(default_factory=list)
    ads: ProviderList = Field(default_factory=list)


class WatchProviderResult(TMDBModel):
    """Watch providers of a movie or TV show, keyed by ISO 3166-1 country."""

    id: int
    results: Dict[str, LocatedWatchProvider] = Field(default_factory=dict)


# =============================================================================
# Movies
# =============================================================================


class MovieBase(TMDBModel):
    id: int
    title: str
    original_title: str
    original_language: str
    overview: EmptyStr = None
    release_date: OptionalDate = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    adult: Flag = False
    popularity: Score = 0.0
    vote_count: Count = 0
    vote_average: Score = 0.0
    video: Flag = False


class MovieShort(MovieBase):
    """Movie as it appears in list and search results."""

    genre_ids: IntList = Field(default_factory=list)


class Movie(MovieBase):
    """
    Full movie record, as returned by ``/movie/{id}`` and ``/movie/latest``.
    """

    budget: Count = 0
    genres: List[Genre] = Field(default_factory=list)
    homepage: EmptyStr = None
    imdb_id: EmptyStr = None
    production_companies: List[CompanyShort] = Field(default_factory=list)
    production_countries: List[Country] = Field(default_factory=list)
    revenue: Count = 0
    runtime: Optional[int] = None
    spoken_languages: List[Language] = Field(default_factory=list)
    status: Optional[Status] = None
    tagline: EmptyStr = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 550,
                "title": "Fight Club",
                "original_title": "Fight Club",
                "original_language": "en",
                "release_date": "1999-10-15",
                "budget": 63000000,
                "revenue": 100853753,
                "runtime": 139,
                "status": "Released",
                "imdb_id": "tt0137523",
            }
        }
    )


# =============================================================================
# TV shows
# =============================================================================


class TVShowBase(TMDBModel):
    id: int
    name: str
    original_name: str
    original_language: str
    origin_country: StrList = Field(default_factory=list)
    overview: EmptyStr = None
    first_air_date: OptionalDate = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    popularity: Score = 0.0
    vote_count: Count = 0
    vote_average: Score = 0.0
    adult: Flag = False


class TVShowShort(TVShowBase):
    genre_ids: IntList = Field(default_factory=list)


class EpisodeShort(TMDBModel):
    id: int
    name: str
    air_date: OptionalDate = None
    episode_number: int
    season_number: int
    overview: EmptyStr = None
    production_code: EmptyStr = None
    runtime: Optional[int] = None
    show_id: Optional[int] = None
    still_path: Optional[str] = None
    vote_average: Score = 0.0
    vote_count: Count = 0


class Episode(EpisodeShort):
    """Full episode record with its crew and guest stars."""

    crew: List[Crew] = Field(default_factory=list)
    guest_stars: List[Cast] = Field(default_factory=list)


class SeasonBase(TMDBModel):
    id: int
    name: str
    air_date: OptionalDate = None
    overview: EmptyStr = None
    poster_path: Optional[str] = None
    season_number: int
    vote_average: Score = 0.0


class SeasonShort(SeasonBase):
    episode_count: Count = 0


class Season(SeasonBase):
    # The API exposes an internal object id as "_id"
    internal_id: Optional[str] = Field(None, alias="_id")
    episodes: List[Episode] = Field(default_factory=list)


class TVShow(TVShowBase):
    """Full TV show record, as returned by ``/tv/{id}`` and ``/tv/latest``."""

    created_by: List[PersonShort] = Field(default_factory=list)
    episode_run_time: IntList = Field(default_factory=list)
    genres: List[Genre] = Field(default_factory=list)
    homepage: EmptyStr = None
    in_production: Flag = False
    languages: StrList = Field(default_factory=list)
    last_air_date: OptionalDate = None
    last_episode_to_air: Optional[EpisodeShort] = None
    next_episode_to_air: Optional[EpisodeShort] = None
    networks: List[CompanyShort] = Field(default_factory=list)
    number_of_episodes: Optional[int] = None
    number_of_seasons: Optional[int] = None
    production_companies: List[CompanyShort] = Field(default_factory=list)
    production_countries: List[Country] = Field(default_factory=list)
    seasons: List[SeasonShort] = Field(default_factory=list)
    spoken_languages: List[Language] = Field(default_factory=list)
    status: EmptyStr = None
    tagline: EmptyStr = None
    kind: EmptyStr = Field(None, alias="type")
