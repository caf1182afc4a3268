"""Data model for recent team-mate history."""

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
from datetime import date, datetime, time, timezone
from itertools import combinations
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from dateutil.parser import isoparse

from volleypairing.constants import RECENT_SESSIONS_WINDOW
from volleypairing.exceptions import InvalidConfigurationException
from volleypairing.utils import setup_logger

logger = setup_logger(__name__)

DateLike = Union[date, datetime, str]


def _to_naive_datetime(value: DateLike) -> datetime:
    """Normalize dates, datetimes and ISO-8601 strings to naive UTC datetimes."""
    if isinstance(value, str):
        try:
            value = isoparse(value)
        except ValueError as e:
            raise InvalidConfigurationException(
                f"Invalid session date {value!r}: {e}"
            ) from e
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    return datetime.combine(value, time())


@dataclass
class TeamRecord:
    """One past team: the session it belonged to and its members."""

    session_id: str
    session_date: DateLike
    member_ids: Sequence[str]


@dataclass
class PairingHistory:
    """
    Counts how often two participants recently shared a team.

    The relation is symmetric: ``count(a, b) == count(b, a)``.

    Attributes
    ----------
    cooccurrences : dict of frozenset to int
        Number of shared teams per unordered pair of participant IDs.
    """

    cooccurrences: Dict[frozenset, int] = field(default_factory=dict)

    def add_pairing(self, player1_id: str, player2_id: str, times: int = 1) -> None:
        """Record that two participants shared a team ``times`` more times."""
        if player1_id == player2_id:
            return
        pair = frozenset({player1_id, player2_id})
        self.cooccurrences[pair] = self.cooccurrences.get(pair, 0) + times

    def add_team(self, member_ids: Iterable[str]) -> None:
        """Record every intra-team pair of one team."""
        for a, b in combinations(list(member_ids), 2):
            self.add_pairing(a, b)

    def count(self, player1_id: str, player2_id: str) -> int:
        """How many times two participants shared a team."""
        return self.cooccurrences.get(frozenset({player1_id, player2_id}), 0)

    def team_familiarity(self, member_ids: Sequence[str]) -> int:
        """Sum of the counts over every pair inside one team."""
        return sum(self.count(a, b) for a, b in combinations(member_ids, 2))

    def __len__(self) -> int:
        return len(self.cooccurrences)

    @classmethod
    def from_past_teams(
        cls,
        past_teams: Iterable[TeamRecord],
        before: DateLike,
        present_ids: Optional[Iterable[str]] = None,
        window: int = RECENT_SESSIONS_WINDOW,
    ) -> "PairingHistory":
        """Build the history from the ``window`` most recent sessions.

        Only sessions dated strictly before ``before`` are considered. When
        ``present_ids`` is given, pairs involving anyone else are ignored.
        """
        if window < 1:
            raise InvalidConfigurationException(
                f"History window must be at least 1 session: {window}"
            )
        cutoff = _to_naive_datetime(before)
        present = set(present_ids) if present_ids is not None else None

        records: List[TeamRecord] = []
        session_dates: Dict[str, datetime] = {}
        for record in past_teams:
            when = _to_naive_datetime(record.session_date)
            if when >= cutoff:
                continue
            records.append(record)
            session_dates[record.session_id] = when

        recent = sorted(session_dates, key=lambda s: session_dates[s], reverse=True)
        kept_sessions = set(recent[:window])

        history = cls()
        for record in records:
            if record.session_id not in kept_sessions:
                continue
            members = [
                m for m in record.member_ids if present is None or m in present
            ]
            history.add_team(members)

        logger.debug(
            "Built pairing history from %d sessions: %d pairs",
            len(kept_sessions),
            len(history),
        )
        return history

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pairing history to dictionary."""
        return {
            "cooccurrences": [
                {"players": sorted(pair), "count": count}
                for pair, count in self.cooccurrences.items()
            ]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairingHistory":
        """Deserialize pairing history from dictionary."""
        history = cls()
        for entry in data.get("cooccurrences", []):
            a, b = (str(p) for p in entry["players"])
            history.add_pairing(a, b, int(entry.get("count", 1)))
        return history
