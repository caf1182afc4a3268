"""Match data class."""

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

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from volleypairing.utils import generate_id


class MatchStatus(str, Enum):
    """Lifecycle of a match.

    SCHEDULED -> IN_PROGRESS -> FINISHED; FINISHED is terminal.
    """

    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    FINISHED = "FINISHED"


@dataclass
class Match:
    """A match between two team slots of a contest.

    Attributes
    ----------
    contest_id : str
        Contest the match belongs to.
    team_a_id, team_b_id : str or None
        Team slots; ``None`` means "to be determined".
    round : str
        Pool label (``POOL_A``), bracket round name or ``ROUND_n``.
    court_number : int
        Court the match is played on.
    match_order : int
        Display order inside the contest.
    score_a, score_b : int or None
        Scores, unset until play begins.
    winner_id : str or None
        Winning slot's team ID once finished.
    status : MatchStatus
        Current lifecycle state.
    """

    contest_id: str
    team_a_id: Optional[str]
    team_b_id: Optional[str]
    round: str
    court_number: int
    match_order: int
    score_a: Optional[int] = None
    score_b: Optional[int] = None
    winner_id: Optional[str] = None
    status: MatchStatus = MatchStatus.SCHEDULED
    id: str = field(default_factory=lambda: generate_id("Match"))

    @property
    def is_finished(self) -> bool:
        return self.status == MatchStatus.FINISHED

    @property
    def has_both_teams(self) -> bool:
        return bool(self.team_a_id) and bool(self.team_b_id)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "contest_id": self.contest_id,
            "team_a_id": self.team_a_id,
            "team_b_id": self.team_b_id,
            "round": self.round,
            "court_number": self.court_number,
            "match_order": self.match_order,
            "score_a": self.score_a,
            "score_b": self.score_b,
            "winner_id": self.winner_id,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        return cls(
            id=data.get("id") or generate_id("Match"),
            contest_id=data.get("contest_id", ""),
            team_a_id=data.get("team_a_id"),
            team_b_id=data.get("team_b_id"),
            round=data["round"],
            court_number=data.get("court_number", 1),
            match_order=data.get("match_order", 0),
            score_a=data.get("score_a"),
            score_b=data.get("score_b"),
            winner_id=data.get("winner_id"),
            status=MatchStatus(data.get("status", MatchStatus.SCHEDULED.value)),
        )
