"""Competition engine for Volley Pairing.

This package schedules pool play, elimination brackets and King of the Hill
rounds, records match scores and computes standings.
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

from volleypairing.tournament.bracket import (
    PoolRanking,
    bracket_matches,
    cross_pool_pairings,
    round_label,
)
from volleypairing.tournament.engine import CompetitionEngine
from volleypairing.tournament.koth import (
    KothRound,
    KothTeam,
    generate_koth_round,
    next_round_number,
)
from volleypairing.tournament.pools import (
    distribute_teams_into_pools,
    generate_pool_matches,
    pool_label,
)
from volleypairing.tournament.scoring import (
    finish_match,
    is_set_complete,
    save_score,
    start_match,
    validate_final_score,
)
from volleypairing.tournament.standings import (
    StandingsCalculator,
    recompute_classic_standings,
    recompute_koth_standings,
)

__all__ = [
    "CompetitionEngine",
    "PoolRanking",
    "KothRound",
    "KothTeam",
    "StandingsCalculator",
    "bracket_matches",
    "cross_pool_pairings",
    "distribute_teams_into_pools",
    "finish_match",
    "generate_koth_round",
    "generate_pool_matches",
    "is_set_complete",
    "next_round_number",
    "pool_label",
    "recompute_classic_standings",
    "recompute_koth_standings",
    "round_label",
    "save_score",
    "start_match",
    "validate_final_score",
]
