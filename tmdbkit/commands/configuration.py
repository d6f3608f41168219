"""
Configuration endpoints: reference lists used across the API.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import Field

from tmdbkit.commands.base import Command
from tmdbkit.schemas import StrList, TMDBModel


class ConfigurationCountry(TMDBModel):
    iso_3166_1: str
    english_name: str
    native_name: Optional[str] = None


class Job(TMDBModel):
    department: str
    jobs: StrList = Field(default_factory=list)


class ConfigurationLanguage(TMDBModel):
    iso_639_1: str
    english_name: str
    name: Optional[str] = None


@dataclass
class ConfigurationCountries(Command):
    """Get the list of countries (ISO 3166-1 tags) used throughout TMDB."""

    language: Optional[str] = None

    output = List[ConfigurationCountry]

    def path(self) -> str:
        return "/configuration/countries"

    def params(self) -> Dict[str, Any]:
        return {"language": self.language}


@dataclass
class ConfigurationJobs(Command):
    output = List[Job]

    def path(self) -> str:
        return "/configuration/jobs"


@dataclass
class ConfigurationLanguages(Command):
    output = List[ConfigurationLanguage]

    def path(self) -> str:
        return "/configuration/languages"
