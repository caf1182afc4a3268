"""Standings calculation for contests.

Standings are always recomputed from scratch from the finished matches of a
contest; the previous set is discarded by the caller and replaced.
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

from typing import Dict, Iterable, List, Optional, Sequence

from volleypairing.constants import WIN_POINTS
from volleypairing.models.tournament import Match, Standing
from volleypairing.tournament.pools import pool_index
from volleypairing.type_hints import TeamMembership
from volleypairing.utils import setup_logger

logger = setup_logger(__name__)


def _winner_side(match: Match) -> Optional[str]:
    """Return "a", "b" or None for a finished match."""
    if match.winner_id is not None:
        if match.winner_id == match.team_a_id:
            return "a"
        if match.winner_id == match.team_b_id:
            return "b"
        return None
    score_a, score_b = match.score_a or 0, match.score_b or 0
    if score_a > score_b:
        return "a"
    if score_b > score_a:
        return "b"
    return None


def rank_standings(standings: Iterable[Standing]) -> List[Standing]:
    """Sort by points, differential, then wins (all descending) and number ranks.

    The sort is stable, so rows that tie on all three keep their input order.
    """
    ordered = sorted(standings, key=lambda s: s.sort_key, reverse=True)
    for rank, standing in enumerate(ordered, start=1):
        standing.rank = rank
    return ordered


class StandingsCalculator:
    """Computes team (Classic) and individual (KOTH) standings.

    Scoring:
    - Classic: the winning team gets 3 points and a win, the loser a loss
    - KOTH: every winning participant gets 3 points plus the score margin
    - Both: each side accumulates its signed score difference
    """

    def __init__(self, win_points: int = WIN_POINTS):
        self.win_points = win_points

    def recompute_classic_standings(
        self, matches: Iterable[Match], team_ids: Sequence[str]
    ) -> List[Standing]:
        """Team standings from the finished matches between ``team_ids``.

        Args:
            matches: Matches of the contest (unfinished ones are ignored)
            team_ids: Every team to rank, including those without a result

        Returns:
            Ranked standings, one per team
        """
        stats: Dict[str, Standing] = {
            team_id: Standing(team_id=team_id) for team_id in team_ids
        }

        for match in matches:
            if not match.is_finished or not match.has_both_teams:
                continue
            a = stats.get(match.team_a_id)
            b = stats.get(match.team_b_id)
            if a is None or b is None:
                logger.debug("Skipping match %s: team outside the ranking", match.id)
                continue

            diff = (match.score_a or 0) - (match.score_b or 0)
            a.matches_played += 1
            b.matches_played += 1
            a.points_diff += diff
            b.points_diff -= diff

            side = _winner_side(match)
            if side == "a":
                a.wins += 1
                a.points += self.win_points
                b.losses += 1
            elif side == "b":
                b.wins += 1
                b.points += self.win_points
                a.losses += 1

        return rank_standings(stats.values())

    def recompute_koth_standings(
        self, matches: Iterable[Match], team_membership: TeamMembership
    ) -> List[Standing]:
        """Individual standings from the finished matches of a KOTH contest.

        Args:
            matches: Matches of the contest (unfinished ones are ignored)
            team_membership: Team ID -> participant IDs on that team

        Returns:
            Ranked standings, one per participant found in ``team_membership``
        """
        stats: Dict[str, Standing] = {}
        for player_ids in team_membership.values():
            for player_id in player_ids:
                if player_id not in stats:
                    stats[player_id] = Standing(player_id=player_id)

        for match in matches:
            if not match.is_finished or not match.has_both_teams:
                continue

            score_a, score_b = match.score_a or 0, match.score_b or 0
            margin = abs(score_a - score_b)
            side = _winner_side(match)

            for slot, team_id, diff in (
                ("a", match.team_a_id, score_a - score_b),
                ("b", match.team_b_id, score_b - score_a),
            ):
                for player_id in team_membership.get(team_id, ()):
                    standing = stats.get(player_id)
                    if standing is None:
                        continue
                    standing.matches_played += 1
                    standing.points_diff += diff
                    if side == slot:
                        standing.wins += 1
                        standing.points += self.win_points + margin
                    else:
                        standing.losses += 1

        return rank_standings(stats.values())

    def recompute_pool_standings(self, matches: Iterable[Match]) -> List[Standing]:
        """Classic standings ranked separately inside each pool.

        Teams of a pool are those appearing in its matches, in match order.
        Ranks restart at 1 in every pool and each row carries its pool label.
        """
        pools: Dict[str, List[Match]] = {}
        for match in sorted(matches, key=lambda m: m.match_order):
            if pool_index(match.round) is None:
                continue
            pools.setdefault(match.round, []).append(match)

        standings: List[Standing] = []
        for label in sorted(pools, key=pool_index):
            pool_matches = pools[label]
            team_ids: List[str] = []
            for match in pool_matches:
                for team_id in (match.team_a_id, match.team_b_id):
                    if team_id and team_id not in team_ids:
                        team_ids.append(team_id)
            for standing in self.recompute_classic_standings(pool_matches, team_ids):
                standing.pool = label
                standings.append(standing)
        return standings


def recompute_classic_standings(
    matches: Iterable[Match], team_ids: Sequence[str]
) -> List[Standing]:
    """See :meth:`StandingsCalculator.recompute_classic_standings`."""
    return StandingsCalculator().recompute_classic_standings(matches, team_ids)


def recompute_koth_standings(
    matches: Iterable[Match], team_membership: TeamMembership
) -> List[Standing]:
    """See :meth:`StandingsCalculator.recompute_koth_standings`."""
    return StandingsCalculator().recompute_koth_standings(matches, team_membership)
