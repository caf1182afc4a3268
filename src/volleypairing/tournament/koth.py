"""King of the Hill round generation.

Every round reshuffles the present participants into fresh teams, two per
court. No skill or gender balancing happens here; standings are individual.
"""

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

import random
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from volleypairing.constants import KOTH_ROUND_PREFIX, MIN_PLAYERS_KOTH, TEAM_NAMES
from volleypairing.exceptions import (
    DuplicatePlayerException,
    InsufficientPlayersException,
    InvalidConfigurationException,
)
from volleypairing.models.tournament import Match
from volleypairing.utils import generate_id, setup_logger

logger = setup_logger(__name__)


@dataclass
class KothTeam:
    """A one-round team slot holding participant IDs."""

    court_number: int
    name: str
    player_ids: List[str] = field(default_factory=list)
    id: str = field(default_factory=lambda: generate_id("KothTeam"))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "court_number": self.court_number,
            "name": self.name,
            "player_ids": list(self.player_ids),
        }


@dataclass
class KothRound:
    """Teams and matches created for one KOTH round."""

    round_number: int
    teams: List[KothTeam]
    matches: List[Match]

    @property
    def team_membership(self) -> Dict[str, List[str]]:
        return {team.id: list(team.player_ids) for team in self.teams}


def koth_round_label(round_number: int) -> str:
    return f"{KOTH_ROUND_PREFIX}{round_number}"


def next_round_number(matches: Iterable[Match]) -> int:
    """One more than the highest ``ROUND_n`` label among ``matches``; 1 if none."""
    numbers = []
    for match in matches:
        if not match.round.startswith(KOTH_ROUND_PREFIX):
            continue
        try:
            numbers.append(int(match.round[len(KOTH_ROUND_PREFIX):]))
        except ValueError:
            continue
    return max(numbers) + 1 if numbers else 1


def generate_koth_round(
    participant_ids: Sequence[str],
    num_courts: int,
    round_number: int,
    contest_id: str = "",
    rng: Optional[random.Random] = None,
    starting_order: int = 0,
) -> KothRound:
    """Shuffle participants into ``2 x num_courts`` teams and pair them by court.

    Args:
        participant_ids: IDs of the participants present
        num_courts: Courts available; each hosts one match
        round_number: Number of the round being created (1-based)
        contest_id: Contest the matches belong to
        rng: Source of randomness for the shuffle
        starting_order: ``match_order`` of the first match

    Returns:
        The new team slots and one scheduled match per court

    Raises:
        InsufficientPlayersException: With fewer than 4 participants
        InvalidConfigurationException: If courts or round number are not positive
        DuplicatePlayerException: If a participant ID appears twice
    """
    if len(participant_ids) < MIN_PLAYERS_KOTH:
        raise InsufficientPlayersException(
            f"At least {MIN_PLAYERS_KOTH} participants are needed for a round, "
            f"got {len(participant_ids)}"
        )
    if num_courts < 1:
        raise InvalidConfigurationException(
            f"Court count must be positive: {num_courts}"
        )
    if round_number < 1:
        raise InvalidConfigurationException(
            f"Round number must be positive: {round_number}"
        )
    if len(set(participant_ids)) != len(participant_ids):
        raise DuplicatePlayerException("A participant appears more than once")

    rng = rng if rng is not None else random.Random()
    shuffled = list(participant_ids)
    rng.shuffle(shuffled)

    num_teams = num_courts * 2
    teams = [
        KothTeam(
            court_number=t // 2 + 1,
            name=f"R{round_number} {TEAM_NAMES[t % 2]}",
        )
        for t in range(num_teams)
    ]
    for i, participant_id in enumerate(shuffled):
        teams[i % num_teams].player_ids.append(participant_id)

    label = koth_round_label(round_number)
    matches = [
        Match(
            contest_id=contest_id,
            team_a_id=teams[court * 2].id,
            team_b_id=teams[court * 2 + 1].id,
            round=label,
            court_number=court + 1,
            match_order=starting_order + court,
        )
        for court in range(num_courts)
    ]

    if len(shuffled) < num_teams:
        logger.warning(
            "%s: %d participants for %d team slots, some teams are empty",
            label,
            len(shuffled),
            num_teams,
        )
    logger.info(
        "Generated %s: %d teams, %d matches", label, len(teams), len(matches)
    )
    return KothRound(round_number=round_number, teams=teams, matches=matches)
