"""Balanced team generation.

Participants are dealt round-robin by gender and gender-adjusted strength,
then refined with a best-improvement swap search that evens out every skill
dimension and, when a pairing history is available, spreads out people who
recently played together.
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

import math
import random
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

from volleypairing.constants import (
    CONVERGENCE_THRESHOLD,
    FAMILIARITY_WEIGHT,
    GENDER_MULTIPLIERS,
    MAX_SWAP_ITERATIONS,
    MAX_TEAM_SIZE,
    MIN_TEAM_SIZE,
    SHORT_TEAM_DIVISOR,
    SKILL_KEYS,
    TEAM_NAMES,
)
from volleypairing.exceptions import (
    DuplicatePlayerException,
    InvalidConfigurationException,
    InvalidPlayerDataException,
)
from volleypairing.models.player import Participant
from volleypairing.models.team import Team, TeamSkillAverages
from volleypairing.models.tournament import PairingHistory
from volleypairing.type_hints import Buckets, TeamSlot
from volleypairing.utils import setup_logger

logger = setup_logger(__name__)

# Swap candidate: (team_a, index_a, team_b, index_b)
Swap = Tuple[int, int, int, int]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_team_count(
    num_participants: int,
    preferred_team_size: int,
    min_team_size: int = MIN_TEAM_SIZE,
    max_team_size: int = MAX_TEAM_SIZE,
) -> int:
    """Choose an even number of teams (at least 2) for a roster.

    Starts from the rounded ratio, moves to whichever neighbouring even
    count gives an average size closer to the preferred one, then keeps
    team sizes inside [min_team_size, max_team_size] where the roster allows.
    """
    num_teams = _round_half_up(num_participants / preferred_team_size)
    if num_teams % 2 != 0:
        lower = max(2, num_teams - 1)
        upper = num_teams + 1
        lower_gap = abs(num_participants / lower - preferred_team_size)
        upper_gap = abs(num_participants / upper - preferred_team_size)
        num_teams = lower if lower_gap <= upper_gap else upper
    num_teams = max(num_teams, 2)

    while num_teams > 2 and num_participants / num_teams < min_team_size:
        num_teams -= 2
    while (
        math.ceil(num_participants / num_teams) > max_team_size
        and num_teams < num_participants
    ):
        num_teams += 2
    return max(num_teams, 2)


@dataclass
class BalancerConfig:
    """Tuning knobs for the balancer.

    Attributes:
        gender_multipliers: Skill scale per gender code
        familiarity_weight: Weight of the recent team-mate term
        convergence_threshold: Minimum cost reduction worth a swap
        max_iterations: Upper bound on applied swaps
        min_team_size: Smallest team size the count guardrails allow
        max_team_size: Largest team size the count guardrails allow
    """

    gender_multipliers: Dict[str, float] = field(
        default_factory=lambda: dict(GENDER_MULTIPLIERS)
    )
    familiarity_weight: float = FAMILIARITY_WEIGHT
    convergence_threshold: float = CONVERGENCE_THRESHOLD
    max_iterations: int = MAX_SWAP_ITERATIONS
    min_team_size: int = MIN_TEAM_SIZE
    max_team_size: int = MAX_TEAM_SIZE

    def __post_init__(self) -> None:
        if self.max_iterations < 0:
            raise InvalidConfigurationException(
                f"max_iterations cannot be negative: {self.max_iterations}"
            )
        if not 1 <= self.min_team_size <= self.max_team_size:
            raise InvalidConfigurationException(
                f"Invalid team size bounds: {self.min_team_size}-{self.max_team_size}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gender_multipliers": dict(self.gender_multipliers),
            "familiarity_weight": self.familiarity_weight,
            "convergence_threshold": self.convergence_threshold,
            "max_iterations": self.max_iterations,
            "min_team_size": self.min_team_size,
            "max_team_size": self.max_team_size,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BalancerConfig":
        defaults = cls()
        return cls(
            gender_multipliers=data.get(
                "gender_multipliers", defaults.gender_multipliers
            ),
            familiarity_weight=data.get(
                "familiarity_weight", defaults.familiarity_weight
            ),
            convergence_threshold=data.get(
                "convergence_threshold", defaults.convergence_threshold
            ),
            max_iterations=data.get("max_iterations", defaults.max_iterations),
            min_team_size=data.get("min_team_size", defaults.min_team_size),
            max_team_size=data.get("max_team_size", defaults.max_team_size),
        )


class TeamBalancer:
    """Partitions a roster into an even number of balanced teams.

    The only source of randomness is the shuffle that breaks ties between
    equally rated participants; pass a seeded ``random.Random`` to make
    results reproducible.
    """

    def __init__(
        self,
        config: Optional[BalancerConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or BalancerConfig()
        self.random = rng if rng is not None else random.Random()
        self._effective: Dict[str, Tuple[float, ...]] = {}
        self._history: Optional[PairingHistory] = None
        self._familiarity_weight = 0.0

    def balance(
        self,
        participants: Sequence[Participant],
        num_courts: int,
        preferred_team_size: int,
        pairing_history: Optional[PairingHistory] = None,
    ) -> List[Team]:
        """Generate teams for one contest.

        Args:
            participants: Active participants present for the contest
            num_courts: Courts planned for the contest
            preferred_team_size: Target number of members per team
            pairing_history: Recent team-mate counts; ``None`` disables
                the familiarity term

        Returns:
            Non-empty teams, two per court, labelled "Team A" / "Team B"

        Raises:
            InvalidConfigurationException: If sizes or courts are not positive
            InvalidPlayerDataException: If an inactive participant is passed
            DuplicatePlayerException: If a participant appears twice
        """
        self._validate(participants, num_courts, preferred_team_size)
        if not participants:
            return []

        players = list(participants)
        num_teams = compute_team_count(
            len(players),
            preferred_team_size,
            self.config.min_team_size,
            self.config.max_team_size,
        )
        logger.info(
            "Balancing %d participants into %d teams (%d courts, preferred size %d)",
            len(players),
            num_teams,
            num_courts,
            preferred_team_size,
        )

        self._effective = {p.id: self._effective_skills(p) for p in players}
        self._history = pairing_history
        self._familiarity_weight = (
            self.config.familiarity_weight if pairing_history is not None else 0.0
        )

        buckets = self._seed_buckets(players, num_teams)
        self._optimize(buckets)
        return self._build_teams(buckets)

    def _validate(
        self,
        participants: Sequence[Participant],
        num_courts: int,
        preferred_team_size: int,
    ) -> None:
        if preferred_team_size < 1:
            raise InvalidConfigurationException(
                f"Preferred team size must be positive: {preferred_team_size}"
            )
        if num_courts < 1:
            raise InvalidConfigurationException(
                f"Court count must be positive: {num_courts}"
            )
        seen = set()
        for p in participants:
            if not p.is_active:
                raise InvalidPlayerDataException(
                    f"Participant {p.name} is inactive and cannot be placed on a team"
                )
            if p.id in seen:
                raise DuplicatePlayerException(
                    f"Participant {p.name} ({p.id}) appears more than once"
                )
            seen.add(p.id)

    def _effective_skills(self, player: Participant) -> Tuple[float, ...]:
        scaled = player.scaled_skills(self.config.gender_multipliers)
        return tuple(scaled[key] for key in SKILL_KEYS)

    def _composite(self, player: Participant) -> float:
        return sum(self._effective[player.id])

    # ---------------------------------------------------------------- seeding

    def _seed_buckets(self, players: List[Participant], num_teams: int) -> Buckets:
        women = [p for p in players if p.is_female]
        rest = [p for p in players if not p.is_female]

        # Shuffle first so equally rated participants do not always land together
        for group in (women, rest):
            self.random.shuffle(group)
            group.sort(key=self._composite, reverse=True)

        buckets: Buckets = [[] for _ in range(num_teams)]
        for i, player in enumerate(women):
            buckets[i % num_teams].append(player)

        # Teams with fewer women get the remaining players first
        team_order = sorted(range(num_teams), key=lambda t: len(buckets[t]))
        for i, player in enumerate(rest):
            buckets[team_order[i % num_teams]].append(player)

        logger.debug(
            "Seeded buckets: sizes %s, women %s",
            [len(b) for b in buckets],
            [sum(1 for p in b if p.is_female) for b in buckets],
        )
        return buckets

    # ----------------------------------------------------------- optimization

    def _normalized_scores(self, team: List[Participant]) -> List[float]:
        sums = [0.0] * len(SKILL_KEYS)
        for player in team:
            for k, value in enumerate(self._effective[player.id]):
                sums[k] += value
        divisor = SHORT_TEAM_DIVISOR if len(team) == MIN_TEAM_SIZE else len(team)
        return [s / divisor for s in sums]

    def imbalance(self, buckets: Buckets) -> float:
        """Largest spread of normalized team scores over the skill dimensions."""
        scores = [self._normalized_scores(t) for t in buckets if t]
        if len(scores) < 2:
            return 0.0
        spread = 0.0
        for k in range(len(SKILL_KEYS)):
            values = [s[k] for s in scores]
            spread = max(spread, max(values) - min(values))
        return spread

    def familiarity(self, buckets: Buckets) -> int:
        """Total recent team-mate count inside all teams."""
        if self._history is None:
            return 0
        return sum(
            self._history.team_familiarity([p.id for p in team]) for team in buckets
        )

    def cost(self, buckets: Buckets) -> float:
        total = self.imbalance(buckets)
        if self._familiarity_weight:
            total += self._familiarity_weight * self.familiarity(buckets)
        return total

    def _optimize(self, buckets: Buckets) -> int:
        """Apply the single best same-gender swap until no swap helps enough.

        Returns:
            Number of swaps applied
        """
        applied = 0
        while applied < self.config.max_iterations:
            best_swap, best_gain = self._find_best_swap(buckets)
            if best_swap is None or best_gain <= self.config.convergence_threshold:
                break
            ta, ia, tb, ib = best_swap
            buckets[ta][ia], buckets[tb][ib] = buckets[tb][ib], buckets[ta][ia]
            applied += 1
            logger.debug(
                "Swap %d: %s <-> %s (gain %.4f)",
                applied,
                buckets[tb][ib].name,
                buckets[ta][ia].name,
                best_gain,
            )
        else:
            if self.config.max_iterations > 0:
                logger.info(
                    "Swap search stopped at the iteration cap (%d)",
                    self.config.max_iterations,
                )
        logger.debug("Swap search finished after %d swaps", applied)
        return applied

    def _find_best_swap(self, buckets: Buckets) -> Tuple[Optional[Swap], float]:
        current = self.cost(buckets)
        best_swap: Optional[Swap] = None
        best_gain = 0.0
        num_teams = len(buckets)

        for ta in range(num_teams - 1):
            for tb in range(ta + 1, num_teams):
                team_a, team_b = buckets[ta], buckets[tb]
                for ia, player_a in enumerate(team_a):
                    for ib, player_b in enumerate(team_b):
                        if (player_a.gender or "X") != (player_b.gender or "X"):
                            continue
                        team_a[ia], team_b[ib] = player_b, player_a
                        gain = current - self.cost(buckets)
                        team_a[ia], team_b[ib] = player_a, player_b
                        if gain > best_gain:
                            best_gain = gain
                            best_swap = (ta, ia, tb, ib)
        return best_swap, best_gain

    # ----------------------------------------------------------------- output

    def _build_teams(self, buckets: Buckets) -> List[Team]:
        teams = []
        for i, members in enumerate(b for b in buckets if b):
            teams.append(
                Team(
                    court_number=i // 2 + 1,
                    name=TEAM_NAMES[i % 2],
                    players=list(members),
                    avg_skills=TeamSkillAverages.from_players(members),
                )
            )
        logger.info(
            "Generated %d teams with sizes %s", len(teams), [t.size for t in teams]
        )
        return teams


def balance_teams(
    participants: Sequence[Participant],
    num_courts: int,
    preferred_team_size: int,
    pairing_history: Optional[PairingHistory] = None,
    rng: Optional[random.Random] = None,
    config: Optional[BalancerConfig] = None,
) -> List[Team]:
    """Partition participants into balanced teams.

    Convenience wrapper around :class:`TeamBalancer`; see
    :meth:`TeamBalancer.balance` for the arguments.
    """
    return TeamBalancer(config=config, rng=rng).balance(
        participants, num_courts, preferred_team_size, pairing_history
    )


def _locate(teams: Sequence[Team], slot: TeamSlot) -> Tuple[int, int]:
    team_id, player_id = slot
    for t, team in enumerate(teams):
        if team.id != team_id:
            continue
        for p, player in enumerate(team.players):
            if player.id == player_id:
                return t, p
        break
    raise InvalidPlayerDataException(
        f"Participant {player_id} is not on team {team_id}"
    )


def swap_players(
    teams: Sequence[Team], first: TeamSlot, second: TeamSlot
) -> List[Team]:
    """Exchange two participants between generated teams.

    Args:
        teams: Teams of one contest
        first: (team_id, player_id) of the first participant
        second: (team_id, player_id) of the second participant

    Returns:
        New team list; the two affected teams get fresh skill averages and
        keep their IDs, courts and names

    Raises:
        InvalidPlayerDataException: If a participant is not on the named team,
            or both participants are on the same team
    """
    ta, pa = _locate(teams, first)
    tb, pb = _locate(teams, second)
    if ta == tb:
        raise InvalidPlayerDataException(
            f"Participants {first[1]} and {second[1]} are already team-mates"
        )

    players_a = list(teams[ta].players)
    players_b = list(teams[tb].players)
    players_a[pa], players_b[pb] = players_b[pb], players_a[pa]

    swapped = list(teams)
    swapped[ta] = replace(
        teams[ta],
        players=players_a,
        avg_skills=TeamSkillAverages.from_players(players_a),
    )
    swapped[tb] = replace(
        teams[tb],
        players=players_b,
        avg_skills=TeamSkillAverages.from_players(players_b),
    )
    logger.info(
        "Swapped %s (%s) with %s (%s)",
        players_b[pb].name,
        teams[ta].name,
        players_a[pa].name,
        teams[tb].name,
    )
    return swapped
