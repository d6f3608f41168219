"""
Movie endpoints.

https://developer.themoviedb.org/reference/movie-details
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import Field

from tmdbkit.commands.base import Command
from tmdbkit.schemas import (
    Cast,
    Crew,
    EmptyStr,
    Image,
    Keyword,
    LocatedReleaseDates,
    Movie,
    MovieShort,
    OptionalDate,
    PaginatedResult,
    TMDBModel,
    UTCDateTime,
    Video,
    WatchProviderResult,
)


# =============================================================================
# Result records
# =============================================================================


class MovieAlternativeTitle(TMDBModel):
    iso_3166_1: str
    title: str
    kind: EmptyStr = Field(None, alias="type")


class MovieAlternativeTitlesResult(TMDBModel):
    id: int
    titles: List[MovieAlternativeTitle] = Field(default_factory=list)


class MovieChangeItem(TMDBModel):
    id: str
    action: str
    time: UTCDateTime
    iso_639_1: EmptyStr = None
    iso_3166_1: EmptyStr = None
    # Shape depends on the changed key (string, object, list...)
    value: Any = None
    original_value: Any = None


class MovieChange(TMDBModel):
    key: str
    items: List[MovieChangeItem] = Field(default_factory=list)


class MovieChangesResult(TMDBModel):
    changes: List[MovieChange] = Field(default_factory=list)


class MovieCreditsResult(TMDBModel):
    id: int
    cast: List[Cast] = Field(default_factory=list)
    crew: List[Crew] = Field(default_factory=list)


class MovieExternalIdsResult(TMDBModel):
    id: int
    imdb_id: EmptyStr = None
    wikidata_id: EmptyStr = None
    facebook_id: EmptyStr = None
    instagram_id: EmptyStr = None
    twitter_id: EmptyStr = None


class MovieImagesResult(TMDBModel):
    id: int
    backdrops: List[Image] = Field(default_factory=list)
    posters: List[Image] = Field(default_factory=list)
    logos: List[Image] = Field(default_factory=list)


class MovieKeywordsResult(TMDBModel):
    id: int
    keywords: List[Keyword] = Field(default_factory=list)


class MovieList(TMDBModel):
    """A user list containing the movie."""

    id: int
    name: str
    description: EmptyStr = None
    list_type: Optional[str] = None
    poster_path: EmptyStr = None
    iso_639_1: Optional[str] = None
    item_count: int = 0
    favorite_count: int = 0


class DateRange(TMDBModel):
    maximum: OptionalDate = None
    minimum: OptionalDate = None


class MovieNowPlayingResult(PaginatedResult[MovieShort]):
    dates: DateRange


class MovieReleaseDatesResult(TMDBModel):
    id: int
    results: List[LocatedReleaseDates] = Field(default_factory=list)


class AuthorDetails(TMDBModel):
    name: EmptyStr = None
    username: str
    avatar_path: Optional[str] = None
    rating: Optional[float] = None


class MovieReview(TMDBModel):
    id: str
    author: str
    author_details: AuthorDetails
    content: str
    url: str
    created_at: datetime
    updated_at: datetime


class TranslationData(TMDBModel):
    title: EmptyStr = None
    overview: EmptyStr = None
    homepage: EmptyStr = None
    tagline: EmptyStr = None
    runtime: Optional[int] = None


class Translation(TMDBModel):
    iso_3166_1: str
    iso_639_1: str
    name: EmptyStr = None
    english_name: str
    data: TranslationData


class MovieTranslationsResult(TMDBModel):
    id: int
    translations: List[Translation] = Field(default_factory=list)


class MovieVideosResult(TMDBModel):
    id: int
    results: List[Video] = Field(default_factory=list)


# =============================================================================
# Commands
# =============================================================================


@dataclass
class MovieDetails(Command):
    """Get the top level details of a movie by ID."""

    movie_id: int
    language: Optional[str] = None

    output = Movie

    def path(self) -> str:
        return f"/movie/{self.movie_id}"

    def params(self) -> Dict[str, Any]:
        return {"language": self.language}


@dataclass
class MovieAlternativeTitles(Command):
    movie_id: int
    country: Optional[str] = None

    output = MovieAlternativeTitlesResult

    def path(self) -> str:
        return f"/movie/{self.movie_id}/alternative_titles"

    def params(self) -> Dict[str, Any]:
        return {"country": self.country}


@dataclass
class MovieChanges(Command):
    """
    Get the recent changes for a movie.

    By default only the last 24 hours are returned; the range can span up to
    14 days with ``start_date`` and ``end_date``.
    """

    movie_id: int
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    page: Optional[int] = None

    output = MovieChangesResult

    def path(self) -> str:
        return f"/movie/{self.movie_id}/changes"

    def params(self) -> Dict[str, Any]:
        return {"start_date": self.start_date, "end_date": self.end_date, "page": self.page}


@dataclass
class MovieCredits(Command):
    movie_id: int
    language: Optional[str] = None

    output = MovieCreditsResult

    def path(self) -> str:
        return f"/movie/{self.movie_id}/credits"

    def params(self) -> Dict[str, Any]:
        return {"language": self.language}


@dataclass
class MovieExternalIds(Command):
    movie_id: int

    output = MovieExternalIdsResult

    def path(self) -> str:
        return f"/movie/{self.movie_id}/external_ids"


@dataclass
class MovieImages(Command):
    movie_id: int
    language: Optional[str] = None

    output = MovieImagesResult

    def path(self) -> str:
        return f"/movie/{self.movie_id}/images"

    def params(self) -> Dict[str, Any]:
        return {"language": self.language}


@dataclass
class MovieKeywords(Command):
    movie_id: int

    output = MovieKeywordsResult

    def path(self) -> str:
        return f"/movie/{self.movie_id}/keywords"


@dataclass
class MovieLatest(Command):
    """Get the newest movie ID. This is a live response and will continuously change."""

    language: Optional[str] = None

    output = Movie

    def path(self) -> str:
        return "/movie/latest"

    def params(self) -> Dict[str, Any]:
        return {"language": self.language}


@dataclass
class MovieLists(Command):
    movie_id: int
    language: Optional[str] = None
    page: Optional[int] = None

    output = PaginatedResult[MovieList]

    def path(self) -> str:
        return f"/movie/{self.movie_id}/lists"

    def params(self) -> Dict[str, Any]:
        return {"language": self.language, "page": self.page}


@dataclass
class _RegionalMovieList(Command):
    language: Optional[str] = None
    page: Optional[int] = None
    # ISO 3166-1 code, uppercase
    region: Optional[str] = None

    output = PaginatedResult[MovieShort]
    endpoint = ""

    def path(self) -> str:
        return self.endpoint

    def params(self) -> Dict[str, Any]:
        return {"language": self.language, "page": self.page, "region": self.region}


@dataclass
class MovieNowPlaying(_RegionalMovieList):
    """Get a list of movies that are currently in theatres."""

    output = MovieNowPlayingResult
    endpoint = "/movie/now_playing"


@dataclass
class MoviePopular(_RegionalMovieList):
    """Get a list of movies ordered by popularity. This list updates daily."""

    endpoint = "/movie/popular"


@dataclass
class MovieTopRated(_RegionalMovieList):
    endpoint = "/movie/top_rated"


@dataclass
class MovieUpcoming(_RegionalMovieList):
    endpoint = "/movie/upcoming"


@dataclass
class MovieRecommendations(Command):
    movie_id: int
    language: Optional[str] = None
    page: Optional[int] = None

    output = PaginatedResult[MovieShort]

    def path(self) -> str:
        return f"/movie/{self.movie_id}/recommendations"

    def params(self) -> Dict[str, Any]:
        return {"language": self.language, "page": self.page}


@dataclass
class MovieReleaseDates(Command):
    """Get the release dates and certifications for a movie, per country."""

    movie_id: int

    output = MovieReleaseDatesResult

    def path(self) -> str:
        return f"/movie/{self.movie_id}/release_dates"


@dataclass
class MovieReviews(Command):
    movie_id: int
    language: Optional[str] = None
    page: Optional[int] = None

    output = PaginatedResult[MovieReview]

    def path(self) -> str:
        return f"/movie/{self.movie_id}/reviews"

    def params(self) -> Dict[str, Any]:
        return {"language": self.language, "page": self.page}


@dataclass
class MovieSearch(Command):
    """Search for movies by their original, translated and alternative titles."""

    query: str
    language: Optional[str] = None
    page: Optional[int] = None
    include_adult: bool = False
    # ISO 3166-1 code to filter release region, uppercase
    region: Optional[str] = None
    year: Optional[int] = None
    primary_release_year: Optional[int] = None

    output = PaginatedResult[MovieShort]

    def path(self) -> str:
        return "/search/movie"

    def params(self) -> Dict[str, Any]:
        return {
            "query": self.query,
            "language": self.language,
            "page": self.page,
            "include_adult": self.include_adult,
            "region": self.region,
            "year": self.year,
            "primary_release_year": self.primary_release_year,
        }


@dataclass
class MovieSimilar(Command):
    movie_id: int
    language: Optional[str] = None
    page: Optional[int] = None

    output = PaginatedResult[MovieShort]

    def path(self) -> str:
        return f"/movie/{self.movie_id}/similar"

    def params(self) -> Dict[str, Any]:
        return {"language": self.language, "page": self.page}


@dataclass
class MovieTranslations(Command):
    movie_id: int

    output = MovieTranslationsResult

    def path(self) -> str:
        return f"/movie/{self.movie_id}/translations"


@dataclass
class MovieVideos(Command):
    movie_id: int
    language: Optional[str] = None

    output = MovieVideosResult

    def path(self) -> str:
        return f"/movie/{self.movie_id}/videos"

    def params(self) -> Dict[str, Any]:
        return {"language": self.language}


@dataclass
class MovieWatchProviders(Command):
    """Get the streaming, rental and purchase offers of a movie (data from JustWatch)."""

    movie_id: int

    output = WatchProviderResult

    def path(self) -> str:
        return f"/movie/{self.movie_id}/watch/providers"
