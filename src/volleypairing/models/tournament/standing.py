"""Standing data class."""

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

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass
class Standing:
    """One row of a contest's standings.

    Exactly one of ``team_id`` (Classic) or ``player_id`` (KOTH) is set.

    Attributes:
        team_id: Team the row belongs to
        player_id: Participant the row belongs to
        points: Accumulated standing points
        matches_played: Finished matches counted
        wins: Matches won
        losses: Matches lost
        points_diff: Signed sum of score differences
        rank: 1-based rank once sorted
        pool: Pool label when ranks are computed per pool
    """

    team_id: Optional[str] = None
    player_id: Optional[str] = None
    points: int = 0
    matches_played: int = 0
    wins: int = 0
    losses: int = 0
    points_diff: int = 0
    rank: Optional[int] = None
    pool: Optional[str] = None

    @property
    def subject_id(self) -> str:
        return self.team_id if self.team_id is not None else self.player_id

    @property
    def sort_key(self) -> Tuple[int, int, int]:
        """Ordering key: points, then differential, then wins."""
        return (self.points, self.points_diff, self.wins)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize standing to dictionary."""
        return {
            "team_id": self.team_id,
            "player_id": self.player_id,
            "points": self.points,
            "matches_played": self.matches_played,
            "wins": self.wins,
            "losses": self.losses,
            "points_diff": self.points_diff,
            "rank": self.rank,
            "pool": self.pool,
        }
