"""
Company endpoints.
"""

from dataclasses import dataclass
from typing import List

from pydantic import Field

from tmdbkit.commands.base import Command
from tmdbkit.schemas import Company, EmptyStr, EntityResults, Score, Count, TMDBModel


class CompanyAlternativeName(TMDBModel):
    name: str
    kind: EmptyStr = Field(None, alias="type")


class CompanyLogo(TMDBModel):
    aspect_ratio: float
    file_path: str
    file_type: str
    height: int
    width: int
    id: str
    vote_average: Score = 0.0
    vote_count: Count = 0


class CompanyImagesResult(TMDBModel):
    id: int
    logos: List[CompanyLogo] = Field(default_factory=list)


@dataclass
class CompanyDetails(Command):
    company_id: int

    output = Company

    def path(self) -> str:
        return f"/company/{self.company_id}"


@dataclass
class CompanyAlternativeNames(Command):
    company_id: int

    output = EntityResults[List[CompanyAlternativeName]]

    def path(self) -> str:
        return f"/company/{self.company_id}/alternative_names"


@dataclass
class CompanyImages(Command):
    """Get the logos of a company. Logos come as SVG and PNG files."""

    company_id: int

    output = CompanyImagesResult

    def path(self) -> str:
        return f"/company/{self.company_id}/images"
