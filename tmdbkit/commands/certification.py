"""
Certification endpoints.
"""

from dataclasses import dataclass
from typing import Dict, List

from tmdbkit.commands.base import Command
from tmdbkit.schemas import Certification, TMDBModel


class CertificationListResult(TMDBModel):
    # Keyed by ISO 3166-1 country code
    certifications: Dict[str, List[Certification]]


@dataclass
class CertificationList(Command):
    """Get an up to date list of the officially supported certifications."""

    kind: str

    output = CertificationListResult

    @classmethod
    def movie(cls) -> "CertificationList":
        return cls("movie")

    @classmethod
    def tv(cls) -> "CertificationList":
        return cls("tv")

    def path(self) -> str:
        return f"/certification/{self.kind}/list"

    def unwrap(self, result: CertificationListResult) -> Dict[str, List[Certification]]:
        return result.certifications
