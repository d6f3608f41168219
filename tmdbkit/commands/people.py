"""
People endpoints.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from tmdbkit.commands.base import Command
from tmdbkit.schemas import Person


@dataclass
class PersonDetails(Command):
    """Query the top level details of a person."""

    person_id: int
    language: Optional[str] = None

    output = Person

    def path(self) -> str:
        return f"/person/{self.person_id}"

    def params(self) -> Dict[str, Any]:
        return {"language": self.language}
