"""Team data classes."""

# Volley Pairing
# Copyright (C) 2025  Volley Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from volleypairing.constants import SKILL_KEYS
from volleypairing.models.player import Participant
from volleypairing.utils import generate_id


def round_tenth(value: float) -> float:
    """Round half-up to one decimal place (2.25 -> 2.3)."""
    return math.floor(value * 10 + 0.5) / 10


@dataclass
class TeamSkillAverages:
    """Per-dimension averages of raw skills, each rounded to one decimal.

    Attributes:
        skill_service: Average service rating
        skill_pass: Average pass rating
        skill_attack: Average attack rating
        skill_defense: Average defense rating
        overall: Mean of the four dimension averages
    """

    skill_service: float = 0.0
    skill_pass: float = 0.0
    skill_attack: float = 0.0
    skill_defense: float = 0.0
    overall: float = 0.0

    @classmethod
    def from_players(cls, players: Sequence[Participant]) -> "TeamSkillAverages":
        """Compute averages from raw (not gender-adjusted) skills."""
        if not players:
            return cls()
        averages = {
            key: sum(getattr(p, key) for p in players) / len(players)
            for key in SKILL_KEYS
        }
        overall = sum(averages.values()) / len(SKILL_KEYS)
        return cls(
            overall=round_tenth(overall),
            **{key: round_tenth(value) for key, value in averages.items()},
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            "skill_service": self.skill_service,
            "skill_pass": self.skill_pass,
            "skill_attack": self.skill_attack,
            "skill_defense": self.skill_defense,
            "overall": self.overall,
        }


@dataclass
class Team:
    """A team produced by the balancer.

    Teams are never mutated after generation; a new generation replaces them.

    Attributes:
        court_number: Court the team plays on (1-based)
        name: Display label ("Team A" / "Team B")
        players: Members of the team
        avg_skills: Raw skill averages of the members
        id: Unique identifier
    """

    court_number: int
    name: str
    players: List[Participant] = field(default_factory=list)
    avg_skills: TeamSkillAverages = field(default_factory=TeamSkillAverages)
    id: str = field(default_factory=lambda: generate_id("Team"))

    @property
    def size(self) -> int:
        return len(self.players)

    @property
    def player_ids(self) -> List[str]:
        return [p.id for p in self.players]

    @property
    def female_count(self) -> int:
        return sum(1 for p in self.players if p.is_female)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize team to dictionary."""
        return {
            "id": self.id,
            "court_number": self.court_number,
            "name": self.name,
            "players": [p.to_dict() for p in self.players],
            "avg_skills": self.avg_skills.to_dict(),
        }
