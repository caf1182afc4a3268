"""Random Roster Generator - internal testing system for the team balancer.

This module generates realistic, reproducible rosters and team histories
for exercising the balancer and the competition engine.
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
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import List, Optional

from volleypairing.constants import (
    GENDER_FEMALE,
    GENDER_MALE,
    GUEST_LEVELS,
    MAX_SKILL_RATING,
    MIN_SKILL_RATING,
    SKILL_KEYS,
)
from volleypairing.models.player import Participant
from volleypairing.models.tournament import TeamRecord
from volleypairing.utils import setup_logger

logger = setup_logger(__name__)


class SkillDistribution(Enum):
    """Skill distribution patterns for realistic rosters."""

    UNIFORM = "uniform"
    NORMAL = "normal"
    CLUB = "club"
    FLAT = "flat"


@dataclass
class RosterConfig:
    """Configuration for the Random Roster Generator."""

    num_participants: int
    female_ratio: float = 0.35
    unspecified_ratio: float = 0.0
    skill_distribution: SkillDistribution = SkillDistribution.NORMAL
    guest_rate: float = 0.0
    seed: Optional[int] = None


class RosterGenerator:
    """Factory for creating reproducible rosters."""

    def __init__(self, config: RosterConfig):
        self.config = config
        self.random = (
            random.Random(config.seed) if config.seed is not None else random.Random()
        )

    def create_participants(self) -> List[Participant]:
        """Create participants based on configuration."""
        participants = []
        for i in range(self.config.num_participants):
            gender = self._generate_gender()
            name = f"Player-{i + 1:03d}"
            if self.random.random() < self.config.guest_rate:
                level = self.random.choice(sorted(GUEST_LEVELS))
                participant = Participant.guest(
                    name, level, gender=gender, id=f"p{i + 1}"
                )
            else:
                skills = {key: self._generate_skill() for key in SKILL_KEYS}
                participant = Participant(
                    id=f"p{i + 1}", name=name, gender=gender, **skills
                )
            participants.append(participant)

        logger.info(
            "Created %d participants with %s distribution",
            len(participants),
            self.config.skill_distribution.value,
        )
        return participants

    def create_past_teams(
        self,
        participants: List[Participant],
        num_sessions: int,
        teams_per_session: int,
        last_session: date,
    ) -> List[TeamRecord]:
        """Random team history, one session per week ending at ``last_session``."""
        records = []
        ids = [p.id for p in participants]
        for s in range(num_sessions):
            session_date = last_session - timedelta(weeks=num_sessions - 1 - s)
            shuffled = list(ids)
            self.random.shuffle(shuffled)
            for t in range(teams_per_session):
                records.append(
                    TeamRecord(
                        session_id=f"s{s + 1}",
                        session_date=session_date,
                        member_ids=shuffled[t::teams_per_session],
                    )
                )
        return records

    def _generate_gender(self) -> Optional[str]:
        roll = self.random.random()
        if roll < self.config.female_ratio:
            return GENDER_FEMALE
        if roll < self.config.female_ratio + self.config.unspecified_ratio:
            return None
        return GENDER_MALE

    def _generate_skill(self) -> int:
        distribution = self.config.skill_distribution
        if distribution == SkillDistribution.UNIFORM:
            return self.random.randint(MIN_SKILL_RATING, MAX_SKILL_RATING)
        if distribution == SkillDistribution.NORMAL:
            value = int(round(self.random.gauss(5.5, 1.8)))
            return max(MIN_SKILL_RATING, min(MAX_SKILL_RATING, value))
        if distribution == SkillDistribution.CLUB:
            base = self.random.choice([3, 5, 7])
            return self.random.randint(base - 1, base + 1)
        return 5
