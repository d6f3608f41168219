"""
TMDB API client.

``Client`` joins the base URL with a command's path, adds the API key, runs
the request through its executor and lets the command parse the payload.
The ``get_*``/``search_*`` helpers on ``EndpointsMixin`` build the matching
command and execute it, so the same helpers serve the async client.

Configuration via environment variables:
- TMDB_API_KEY: API key used when none is passed
- TMDB_BASE_URL: API root (default: https://api.themoviedb.org/3)
"""

import dataclasses
import os
from datetime import date
from typing import Any, Dict, Iterator, Optional

from tmdbkit.api_client import Executor, MissingApiKeyError, RequestsExecutor
from tmdbkit.commands import (
    CertificationList,
    ChangeList,
    CollectionDetails,
    Command,
    CompanyAlternativeNames,
    CompanyDetails,
    CompanyImages,
    ConfigurationCountries,
    ConfigurationJobs,
    ConfigurationLanguages,
    ExternalIdSource,
    FindById,
    GenreList,
    MovieAlternativeTitles,
    MovieChanges,
    MovieCredits,
    MovieDetails,
    MovieExternalIds,
    MovieImages,
    MovieKeywords,
    MovieLatest,
    MovieLists,
    MovieNowPlaying,
    MoviePopular,
    MovieRecommendations,
    MovieReleaseDates,
    MovieReviews,
    MovieSearch,
    MovieSimilar,
    MovieTopRated,
    MovieTranslations,
    MovieUpcoming,
    MovieVideos,
    MovieWatchProviders,
    MultiSearch,
    PersonDetails,
    TVShowAggregateCredits,
    TVShowContentRatings,
    TVShowDetails,
    TVShowEpisodeDetails,
    TVShowExternalIds,
    TVShowImages,
    TVShowKeywords,
    TVShowLatest,
    TVShowSearch,
    TVShowSeasonDetails,
    TVShowSimilar,
    TVShowWatchProviders,
    WatchProviderList,
)
from tmdbkit.logging_config import get_logger
from tmdbkit.schemas import PaginatedResult

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://api.themoviedb.org/3"


def resolve_api_key(api_key: Optional[str]) -> str:
    """
    Pick the explicit key or fall back to ``TMDB_API_KEY``.

    Raises:
        MissingApiKeyError: Neither is set
    """
    api_key = api_key or os.getenv("TMDB_API_KEY")
    if not api_key:
        raise MissingApiKeyError()
    return api_key


def resolve_base_url(base_url: Optional[str]) -> str:
    return (base_url or os.getenv("TMDB_BASE_URL") or DEFAULT_BASE_URL).rstrip("/")


def next_page(command: Command, page: int) -> Command:
    """Copy of a paginated command targeting another page."""
    output = command.output
    has_page = any(f.name == "page" for f in dataclasses.fields(command))
    if not (has_page and isinstance(output, type) and issubclass(output, PaginatedResult)):
        raise TypeError(f"{type(command).__name__} is not paginated")
    return dataclasses.replace(command, page=page)


class EndpointsMixin:
    """
    One helper per endpoint. Each returns ``self.execute(command)``, which is
    the parsed record for ``Client`` and an awaitable for ``AsyncClient``.
    """

    def execute(self, command: Command) -> Any:
        raise NotImplementedError

    # -- movies ---------------------------------------------------------------

    def get_movie_details(self, movie_id: int, language: Optional[str] = None):
        return self.execute(MovieDetails(movie_id, language))

    def get_movie_alternative_titles(self, movie_id: int, country: Optional[str] = None):
        return self.execute(MovieAlternativeTitles(movie_id, country))

    def get_movie_changes(self, movie_id: int, start_date: Optional[date] = None,
                          end_date: Optional[date] = None, page: Optional[int] = None):
        return self.execute(MovieChanges(movie_id, start_date, end_date, page))

    def get_movie_credits(self, movie_id: int, language: Optional[str] = None):
        return self.execute(MovieCredits(movie_id, language))

    def get_movie_external_ids(self, movie_id: int):
        return self.execute(MovieExternalIds(movie_id))

    def get_movie_images(self, movie_id: int, language: Optional[str] = None):
        return self.execute(MovieImages(movie_id, language))

    def get_movie_keywords(self, movie_id: int):
        return self.execute(MovieKeywords(movie_id))

    def get_latest_movie(self, language: Optional[str] = None):
        return self.execute(MovieLatest(language))

    def get_movie_lists(self, movie_id: int, language: Optional[str] = None,
                        page: Optional[int] = None):
        return self.execute(MovieLists(movie_id, language, page))

    def get_now_playing_movies(self, language: Optional[str] = None, page: Optional[int] = None,
                               region: Optional[str] = None):
        return self.execute(MovieNowPlaying(language, page, region))

    def get_popular_movies(self, language: Optional[str] = None, page: Optional[int] = None,
                           region: Optional[str] = None):
        return self.execute(MoviePopular(language, page, region))

    def get_top_rated_movies(self, language: Optional[str] = None, page: Optional[int] = None,
                             region: Optional[str] = None):
        return self.execute(MovieTopRated(language, page, region))

    def get_upcoming_movies(self, language: Optional[str] = None, page: Optional[int] = None,
                            region: Optional[str] = None):
        return self.execute(MovieUpcoming(language, page, region))

    def get_movie_recommendations(self, movie_id: int, language: Optional[str] = None,
                                  page: Optional[int] = None):
        return self.execute(MovieRecommendations(movie_id, language, page))

    def get_movie_release_dates(self, movie_id: int):
        return self.execute(MovieReleaseDates(movie_id))

    def get_movie_reviews(self, movie_id: int, language: Optional[str] = None,
                          page: Optional[int] = None):
        return self.execute(MovieReviews(movie_id, language, page))

    def search_movies(self, query: str, language: Optional[str] = None, page: Optional[int] = None,
                      include_adult: bool = False, region: Optional[str] = None,
                      year: Optional[int] = None, primary_release_year: Optional[int] = None):
        return self.execute(MovieSearch(
            query,
            language=language,
            page=page,
            include_adult=include_adult,
            region=region,
            year=year,
            primary_release_year=primary_release_year,
        ))

    def get_similar_movies(self, movie_id: int, language: Optional[str] = None,
                           page: Optional[int] = None):
        return self.execute(MovieSimilar(movie_id, language, page))

    def get_movie_translations(self, movie_id: int):
        return self.execute(MovieTranslations(movie_id))

    def get_movie_videos(self, movie_id: int, language: Optional[str] = None):
        return self.execute(MovieVideos(movie_id, language))

    def get_movie_watch_providers(self, movie_id: int):
        return self.execute(MovieWatchProviders(movie_id))

    # -- tv shows -------------------------------------------------------------

    def get_tv_show_details(self, series_id: int, language: Optional[str] = None):
        return self.execute(TVShowDetails(series_id, language))

    def get_tv_show_aggregate_credits(self, series_id: int, language: Optional[str] = None):
        return self.execute(TVShowAggregateCredits(series_id, language))

    def get_tv_show_content_ratings(self, series_id: int):
        return self.execute(TVShowContentRatings(series_id))

    def get_tv_show_external_ids(self, series_id: int):
        return self.execute(TVShowExternalIds(series_id))

    def get_tv_show_images(self, series_id: int, language: Optional[str] = None):
        return self.execute(TVShowImages(series_id, language))

    def get_tv_show_keywords(self, series_id: int):
        return self.execute(TVShowKeywords(series_id))

    def get_latest_tv_show(self, language: Optional[str] = None):
        return self.execute(TVShowLatest(language))

    def search_tv_shows(self, query: str, language: Optional[str] = None, page: Optional[int] = None,
                        include_adult: bool = False, year: Optional[int] = None,
                        first_air_date_year: Optional[int] = None):
        return self.execute(TVShowSearch(
            query,
            language=language,
            page=page,
            include_adult=include_adult,
            year=year,
            first_air_date_year=first_air_date_year,
        ))

    def get_similar_tv_shows(self, series_id: int, language: Optional[str] = None,
                             page: Optional[int] = None):
        return self.execute(TVShowSimilar(series_id, language, page))

    def get_tv_show_watch_providers(self, series_id: int):
        return self.execute(TVShowWatchProviders(series_id))

    def get_season_details(self, series_id: int, season_number: int, language: Optional[str] = None):
        return self.execute(TVShowSeasonDetails(series_id, season_number, language))

    def get_episode_details(self, series_id: int, season_number: int, episode_number: int,
                            language: Optional[str] = None):
        return self.execute(TVShowEpisodeDetails(series_id, season_number, episode_number, language))

    # -- people, companies, collections ---------------------------------------

    def get_person_details(self, person_id: int, language: Optional[str] = None):
        return self.execute(PersonDetails(person_id, language))

    def get_company_details(self, company_id: int):
        return self.execute(CompanyDetails(company_id))

    def get_company_alternative_names(self, company_id: int):
        return self.execute(CompanyAlternativeNames(company_id))

    def get_company_images(self, company_id: int):
        return self.execute(CompanyImages(company_id))

    def get_collection_details(self, collection_id: int, language: Optional[str] = None):
        return self.execute(CollectionDetails(collection_id, language))

    # -- reference lists ------------------------------------------------------

    def get_movie_genres(self, language: Optional[str] = None):
        return self.execute(GenreList.movie(language))

    def get_tv_genres(self, language: Optional[str] = None):
        return self.execute(GenreList.tv(language))

    def get_movie_certifications(self):
        return self.execute(CertificationList.movie())

    def get_tv_certifications(self):
        return self.execute(CertificationList.tv())

    def get_changed_movies(self, start_date: Optional[date] = None, end_date: Optional[date] = None,
                           page: Optional[int] = None):
        return self.execute(ChangeList.movie(start_date, end_date, page))

    def get_changed_tv_shows(self, start_date: Optional[date] = None, end_date: Optional[date] = None,
                             page: Optional[int] = None):
        return self.execute(ChangeList.tvshow(start_date, end_date, page))

    def get_changed_people(self, start_date: Optional[date] = None, end_date: Optional[date] = None,
                           page: Optional[int] = None):
        return self.execute(ChangeList.person(start_date, end_date, page))

    def get_countries(self, language: Optional[str] = None):
        return self.execute(ConfigurationCountries(language))

    def get_jobs(self):
        return self.execute(ConfigurationJobs())

    def get_languages(self):
        return self.execute(ConfigurationLanguages())

    def get_movie_watch_provider_list(self, watch_region: Optional[str] = None,
                                      language: Optional[str] = None):
        return self.execute(WatchProviderList.movie(watch_region, language))

    def get_tv_watch_provider_list(self, watch_region: Optional[str] = None,
                                   language: Optional[str] = None):
        return self.execute(WatchProviderList.tv(watch_region, language))

    # -- find & search --------------------------------------------------------

    def find_by_id(self, external_id: str, external_source: ExternalIdSource,
                   language: Optional[str] = None):
        return self.execute(FindById(external_id, ExternalIdSource(external_source), language))

    def search_multi(self, query: str, language: Optional[str] = None, page: Optional[int] = None,
                     include_adult: bool = False):
        return self.execute(MultiSearch(query, language, page, include_adult))


class BaseClient(EndpointsMixin):
    """Settings shared by the sync and async clients."""

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None):
        self.api_key = resolve_api_key(api_key)
        self.base_url = resolve_base_url(base_url)

    def build_request(self, command: Command) -> tuple:
        """
        Build the URL and query parameters for a command.

        The API key is always the last query parameter.
        """
        url = f"{self.base_url}{command.path()}"
        params: Dict[str, str] = command.query_params()
        params["api_key"] = self.api_key
        return url, params

    def __repr__(self):
        return (
            f"{type(self).__name__}(api_key='REDACTED', base_url={self.base_url!r}, "
            f"executor={self.executor!r})"
        )


class Client(BaseClient):
    """
    Synchronous TMDB client.

    Example:
        with Client() as client:
            movie = client.get_movie_details(550)
            for page in client.paginate(MoviePopular()):
                ...
    """

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None,
                 executor: Optional[Executor] = None):
        """
        Initialize the client.

        Args:
            api_key: TMDB v3 API key (default: TMDB_API_KEY)
            base_url: API root (default: TMDB_BASE_URL or the public endpoint)
            executor: HTTP transport (default: RequestsExecutor)

        Raises:
            MissingApiKeyError: No API key available
        """
        super().__init__(api_key, base_url)
        self.executor = executor or RequestsExecutor()

    def execute(self, command: Command) -> Any:
        """
        Run a command and return its parsed output.

        Raises:
            TMDBError: Any transport, status or deserialization failure
        """
        url, params = self.build_request(command)
        payload = self.executor.execute(url, params)
        return command.parse(payload)

    def paginate(self, command: Command, max_pages: Optional[int] = None) -> Iterator[Any]:
        """
        Yield every page of a paginated command, starting at ``command.page``
        (or 1).

        Args:
            command: Command with a ``page`` attribute
            max_pages: Stop after this many pages

        Raises:
            TypeError: Command is not paginated
        """
        page = next_page(command, getattr(command, "page", None) or 1)
        fetched = 0
        while True:
            result = self.execute(page)
            fetched += 1
            yield result
            if not result.has_more or (max_pages is not None and fetched >= max_pages):
                return
            page = next_page(page, result.page + 1)

    def close(self):
        self.executor.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
