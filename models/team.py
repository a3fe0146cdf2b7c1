"""Team data model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Team:
    team_id: str
    name: str
    country_code: str
    group_letter: str
    strength: float  # FIFA ranking points, only used as the last tie-break
    badge_url: str | None = None

    def __str__(self):
        return f"{self.name} ({self.country_code})"
