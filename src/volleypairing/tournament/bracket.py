"""Elimination bracket generation."""

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
from typing import Dict, List, Sequence

from volleypairing.constants import BRACKET_COURTS, ROUND_NAMES
from volleypairing.exceptions import InvalidConfigurationException
from volleypairing.models.tournament import Match
from volleypairing.type_hints import TeamPairing
from volleypairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class PoolRanking:
    """Final rank of a team inside its pool.

    Attributes:
        pool_index: 0-based pool index (POOL_A is 0)
        team_id: Team ranked
        rank: 1-based rank in the pool
    """

    pool_index: int
    team_id: str
    rank: int


def round_label(match_count: int) -> str:
    """Name an elimination round after its number of matches.

    2 -> "final", 4 -> "semi-final", 8 -> "quarter-final",
    16 -> "round of 16", anything else -> "round of N".
    """
    return ROUND_NAMES.get(match_count, f"round of {match_count}")


def cross_pool_pairings(
    pool_rankings: Sequence[PoolRanking],
    num_pools: int,
    qualifiers_per_pool: int,
) -> List[TeamPairing]:
    """Pair qualified teams across pools.

    With two pools the rank ``r`` team of pool A meets the rank
    ``q - r + 1`` team of pool B (1A v 2B, 2A v 1B for two qualifiers).
    With any other pool count the qualifiers are sorted by rank then pool
    and paired first against last, working inward.

    Args:
        pool_rankings: Ranks of teams inside their pools
        num_pools: Number of pools played
        qualifiers_per_pool: Teams advancing from each pool

    Returns:
        (team_a_id, team_b_id) pairs; a pairing with a missing side is skipped
    """
    if qualifiers_per_pool < 1:
        raise InvalidConfigurationException(
            f"Qualifiers per pool must be positive: {qualifiers_per_pool}"
        )

    pairings: List[TeamPairing] = []

    if num_pools == 2:
        by_pool: Dict[int, Dict[int, str]] = {}
        for entry in pool_rankings:
            by_pool.setdefault(entry.pool_index, {})[entry.rank] = entry.team_id
        pool_a = by_pool.get(0, {})
        pool_b = by_pool.get(1, {})
        for rank in range(1, qualifiers_per_pool + 1):
            team_a = pool_a.get(rank)
            team_b = pool_b.get(qualifiers_per_pool - rank + 1)
            if team_a and team_b:
                pairings.append((team_a, team_b))
            else:
                logger.warning("No cross-pool opponent for rank %d", rank)
    else:
        qualified = [e for e in pool_rankings if e.rank <= qualifiers_per_pool]
        qualified.sort(key=lambda e: (e.rank, e.pool_index))
        for i in range(len(qualified) // 2):
            pairings.append((qualified[i].team_id, qualified[-1 - i].team_id))

    logger.info("Built %d cross-pool pairings from %d pools", len(pairings), num_pools)
    return pairings


def bracket_matches(
    pairings: Sequence[TeamPairing],
    label: str,
    contest_id: str = "",
    starting_court: int = 1,
    starting_order: int = 0,
) -> List[Match]:
    """Create scheduled matches for one elimination round.

    Matches rotate over four courts from ``starting_court`` and take
    consecutive ``match_order`` values from ``starting_order``.
    """
    return [
        Match(
            contest_id=contest_id,
            team_a_id=team_a,
            team_b_id=team_b,
            round=label,
            court_number=starting_court + (i % BRACKET_COURTS),
            match_order=starting_order + i,
        )
        for i, (team_a, team_b) in enumerate(pairings)
    ]
