"""Pool play scheduling.

Teams are dealt into pools by index and every pair inside a pool meets once.
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

import string
from itertools import combinations
from typing import List, Optional, Sequence

from volleypairing.constants import MIN_TEAMS, POOL_PREFIX
from volleypairing.exceptions import (
    InsufficientTeamsException,
    InvalidConfigurationException,
    InvalidPairingException,
)
from volleypairing.models.tournament import Match
from volleypairing.type_hints import TeamIdsByPool
from volleypairing.utils import setup_logger

logger = setup_logger(__name__)


def pool_label(index: int) -> str:
    """``0 -> "POOL_A"``, ``1 -> "POOL_B"``, ..."""
    if not 0 <= index < len(string.ascii_uppercase):
        raise InvalidConfigurationException(f"Pool index out of range: {index}")
    return f"{POOL_PREFIX}{string.ascii_uppercase[index]}"


def pool_index(label: str) -> Optional[int]:
    """Inverse of :func:`pool_label`; ``None`` for non-pool round labels."""
    if not label.startswith(POOL_PREFIX):
        return None
    letter = label[len(POOL_PREFIX):]
    if len(letter) != 1 or letter not in string.ascii_uppercase:
        return None
    return string.ascii_uppercase.index(letter)


def is_pool_round(label: str) -> bool:
    return pool_index(label) is not None


def distribute_teams_into_pools(
    team_ids: Sequence[str], num_pools: int
) -> List[List[str]]:
    """Deal teams into pools round-robin by list position.

    8 teams into 2 pools gives sizes [4, 4]; 7 teams gives [4, 3].
    """
    if num_pools < 1:
        raise InvalidConfigurationException(
            f"Number of pools must be positive: {num_pools}"
        )
    pools: List[List[str]] = [[] for _ in range(num_pools)]
    for i, team_id in enumerate(team_ids):
        pools[i % num_pools].append(team_id)
    return pools


def generate_pool_matches(
    team_ids_by_pool: TeamIdsByPool,
    contest_id: str = "",
    starting_court: int = 1,
) -> List[Match]:
    """Create the round-robin matches of every pool.

    Each pool plays on its own court (``starting_court + pool index``) and
    ``match_order`` keeps counting across pools from 0.

    Args:
        team_ids_by_pool: Team IDs, one list per pool
        contest_id: Contest the matches belong to
        starting_court: Court of the first pool

    Returns:
        Scheduled matches, n(n-1)/2 for a pool of n teams

    Raises:
        InsufficientTeamsException: If fewer than 2 teams are given in total
        InvalidPairingException: If a team appears more than once
    """
    all_ids = [team_id for pool in team_ids_by_pool for team_id in pool]
    if len(all_ids) < MIN_TEAMS:
        raise InsufficientTeamsException(
            f"At least {MIN_TEAMS} teams are needed to start pool play, got {len(all_ids)}"
        )
    if len(set(all_ids)) != len(all_ids):
        raise InvalidPairingException("A team appears more than once in the pools")

    matches: List[Match] = []
    order = 0
    for index, pool in enumerate(team_ids_by_pool):
        label = pool_label(index)
        court = starting_court + index
        for team_a, team_b in combinations(pool, 2):
            matches.append(
                Match(
                    contest_id=contest_id,
                    team_a_id=team_a,
                    team_b_id=team_b,
                    round=label,
                    court_number=court,
                    match_order=order,
                )
            )
            order += 1
        if len(pool) < 2:
            logger.warning("%s has %d team(s) and no matches", label, len(pool))

    logger.info(
        "Generated %d pool matches over %d pools", len(matches), len(team_ids_by_pool)
    )
    return matches
