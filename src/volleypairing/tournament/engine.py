"""Competition engine for a single contest.

This module ties the schedule generators, score recording and standings
together and picks the Classic or King of the Hill code path from the
contest's tournament format.
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
from typing import List, Optional, Sequence, Tuple

from volleypairing.constants import MIN_TEAMS, MODE_CLASSIC, MODE_KOTH
from volleypairing.exceptions import (
    InsufficientTeamsException,
    NoPairingAvailableException,
    TournamentStateException,
)
from volleypairing.models.tournament import (
    KothFormat,
    Match,
    MatchConfig,
    Standing,
    TournamentFormat,
)
from volleypairing.tournament.bracket import (
    PoolRanking,
    bracket_matches,
    cross_pool_pairings,
    round_label,
)
from volleypairing.tournament.koth import (
    KothRound,
    generate_koth_round,
    next_round_number,
)
from volleypairing.tournament.pools import (
    distribute_teams_into_pools,
    generate_pool_matches,
    is_pool_round,
    pool_index,
)
from volleypairing.tournament.scoring import finish_match, save_score, start_match
from volleypairing.tournament.standings import StandingsCalculator
from volleypairing.type_hints import Mode, TeamMembership
from volleypairing.utils import setup_logger

logger = setup_logger(__name__)


class CompetitionEngine:
    """Schedules and scores one contest.

    The engine holds no match state of its own: every method takes the
    contest's current matches and returns new objects that the caller
    persists, replacing what it had before.
    """

    def __init__(
        self,
        tournament_format: TournamentFormat,
        contest_id: str = "",
        calculator: Optional[StandingsCalculator] = None,
    ):
        """Initialize the engine.

        Args:
            tournament_format: ClassicFormat or KothFormat of the contest
            contest_id: Contest stamped on every generated match
            calculator: Standings calculator to use
        """
        self.format = tournament_format
        self.contest_id = contest_id
        self.calculator = calculator or StandingsCalculator()

    @property
    def mode(self) -> Mode:
        return self.format.mode

    def _require_mode(self, mode: str, action: str) -> None:
        if self.mode != mode:
            raise TournamentStateException(
                f"Cannot {action}: contest {self.contest_id or '?'} is a "
                f"{self.mode} tournament, not {mode}"
            )

    # ---------------------------------------------------------- Classic mode

    def generate_pool_matches(
        self, team_ids: Sequence[str], starting_court: int = 1
    ) -> List[Match]:
        """Split teams into the format's pools and schedule every pool.

        Raises:
            TournamentStateException: If the contest is not Classic
            InsufficientTeamsException: With fewer than 2 teams
        """
        self._require_mode(MODE_CLASSIC, "generate pool matches")
        if len(team_ids) < MIN_TEAMS:
            raise InsufficientTeamsException(
                f"At least {MIN_TEAMS} teams are needed to start the tournament"
            )
        pools = distribute_teams_into_pools(team_ids, self.format.num_pools)
        return generate_pool_matches(pools, self.contest_id, starting_court)

    def generate_playoffs(self, matches: Sequence[Match]) -> List[Match]:
        """Create the first elimination round from the pool results.

        Args:
            matches: Every match of the contest so far

        Returns:
            New bracket matches, ordered after the existing ones

        Raises:
            TournamentStateException: If not Classic or no pool standings exist
            NoPairingAvailableException: If no cross-pool pairing can be made
        """
        self._require_mode(MODE_CLASSIC, "generate playoffs")

        unfinished = [m for m in matches if is_pool_round(m.round) and not m.is_finished]
        if unfinished:
            logger.warning(
                "Generating playoffs with %d pool matches unfinished", len(unfinished)
            )

        standings = self.calculator.recompute_pool_standings(matches)
        if not standings:
            raise TournamentStateException(
                "No standings available: finish the pool matches first"
            )

        rankings = [
            PoolRanking(pool_index=pool_index(s.pool), team_id=s.team_id, rank=s.rank)
            for s in standings
        ]
        num_pools = len({r.pool_index for r in rankings})
        pairings = cross_pool_pairings(
            rankings, num_pools, self.format.qualifiers_per_pool
        )
        if not pairings:
            raise NoPairingAvailableException("Unable to generate the playoffs")

        starting_order = max((m.match_order for m in matches), default=-1) + 1
        label = round_label(len(pairings))
        logger.info("Generating %s with %d matches", label, len(pairings))
        return bracket_matches(
            pairings, label, self.contest_id, starting_order=starting_order
        )

    # ------------------------------------------------------------- KOTH mode

    def generate_koth_round(
        self,
        participant_ids: Sequence[str],
        num_courts: int,
        existing_matches: Sequence[Match] = (),
        rng: Optional[random.Random] = None,
    ) -> KothRound:
        """Create the next reshuffled KOTH round.

        Raises:
            TournamentStateException: If the contest is not KOTH
            InsufficientPlayersException: With fewer than 4 participants
        """
        self._require_mode(MODE_KOTH, "generate a KOTH round")
        return generate_koth_round(
            participant_ids,
            num_courts,
            next_round_number(existing_matches),
            contest_id=self.contest_id,
            rng=rng,
            starting_order=len(existing_matches),
        )

    # ------------------------------------------------------- scores/standings

    def recompute_standings(
        self,
        matches: Sequence[Match],
        team_membership: Optional[TeamMembership] = None,
    ) -> List[Standing]:
        """Standings of the contest: per pool (Classic) or individual (KOTH).

        Raises:
            TournamentStateException: For KOTH without ``team_membership``
        """
        if self.mode == MODE_CLASSIC:
            return self.calculator.recompute_pool_standings(matches)
        if team_membership is None:
            raise TournamentStateException(
                "KOTH standings need the participants of every team"
            )
        return self.calculator.recompute_koth_standings(matches, team_membership)

    def match_config_for(self, match: Match) -> MatchConfig:
        """Match settings that apply to ``match`` under this format."""
        if isinstance(self.format, KothFormat):
            return self.format.match_config
        if is_pool_round(match.round):
            return self.format.pool_config
        return self.format.playoff_config

    def start_match(self, match: Match) -> Match:
        return start_match(match)

    def save_score(self, match: Match, score_a: int, score_b: int) -> Match:
        return save_score(match, score_a, score_b)

    def finish_match(
        self,
        match: Match,
        score_a: int,
        score_b: int,
        matches: Sequence[Match],
        team_membership: Optional[TeamMembership] = None,
        enforce_match_config: bool = False,
    ) -> Tuple[Match, List[Standing]]:
        """Finish a match and recompute the contest standings.

        Args:
            match: Match being finished
            score_a: Final score of slot A
            score_b: Final score of slot B
            matches: Every match of the contest (the old copy of ``match``
                is replaced by the finished one)
            team_membership: Team ID -> participant IDs, required for KOTH
            enforce_match_config: Also require the score to complete a set
                under the format's match settings

        Returns:
            Tuple of (finished match, new standings)
        """
        config = self.match_config_for(match) if enforce_match_config else None
        finished = finish_match(match, score_a, score_b, config)

        updated = [finished if m.id == match.id else m for m in matches]
        if not any(m.id == match.id for m in matches):
            updated.append(finished)

        return finished, self.recompute_standings(updated, team_membership)
