"""
Endpoint descriptors, grouped by API section.
"""

from .base import Command
from .certification import CertificationList
from .changes import ChangeList
from .collection import CollectionDetails, CollectionDetailsResult, CollectionPart
from .company import (
    CompanyAlternativeName,
    CompanyAlternativeNames,
    CompanyDetails,
    CompanyImages,
    CompanyImagesResult,
    CompanyLogo,
)
from .configuration import (
    ConfigurationCountries,
    ConfigurationCountry,
    ConfigurationJobs,
    ConfigurationLanguage,
    ConfigurationLanguages,
)
from .find import ExternalIdSource, FindById, FindResults
from .genre import GenreList
from .movie import (
    MovieAlternativeTitles,
    MovieAlternativeTitlesResult,
    MovieChanges,
    MovieChangesResult,
    MovieCredits,
    MovieCreditsResult,
    MovieDetails,
    MovieExternalIds,
    MovieExternalIdsResult,
    MovieImages,
    MovieImagesResult,
    MovieKeywords,
    MovieKeywordsResult,
    MovieLatest,
    MovieList,
    MovieLists,
    MovieNowPlaying,
    MovieNowPlayingResult,
    MoviePopular,
    MovieRecommendations,
    MovieReleaseDates,
    MovieReleaseDatesResult,
    MovieReview,
    MovieReviews,
    MovieSearch,
    MovieSimilar,
    MovieTopRated,
    MovieTranslations,
    MovieTranslationsResult,
    MovieUpcoming,
    MovieVideos,
    MovieVideosResult,
    MovieWatchProviders,
)
from .people import PersonDetails
from .search import (
    MultiSearch,
    MultiSearchMovie,
    MultiSearchPerson,
    MultiSearchResult,
    MultiSearchTVShow,
)
from .tvshow import (
    ContentRating,
    TVShowAggregateCredits,
    TVShowAggregateCreditsResult,
    TVShowContentRatings,
    TVShowDetails,
    TVShowEpisodeDetails,
    TVShowExternalIds,
    TVShowExternalIdsResult,
    TVShowImages,
    TVShowImagesResult,
    TVShowKeywords,
    TVShowLatest,
    TVShowSearch,
    TVShowSeasonDetails,
    TVShowSimilar,
    TVShowWatchProviders,
)
from .watch_provider import WatchProviderDetail, WatchProviderList
