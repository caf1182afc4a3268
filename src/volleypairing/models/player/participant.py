"""Participant data class."""

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

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from volleypairing.constants import (
    DEFAULT_GENDER_MULTIPLIER,
    GENDER_FEMALE,
    GENDER_MULTIPLIERS,
    GUEST_LEVELS,
    SKILL_KEYS,
)
from volleypairing.exceptions import InvalidPlayerDataException
from volleypairing.type_hints import SkillScores
from volleypairing.utils import generate_id
from volleypairing.utils.validation import (
    validate_gender_strict,
    validate_skill_rating_strict,
)


@dataclass
class Participant:
    """A person who can be placed on a team.

    Attributes
    ----------
    name : str
        Display name.
    skill_service, skill_pass, skill_attack, skill_defense : int
        Skill ratings, each in [1, 10].
    gender : str or None
        ``"F"``, ``"M"`` or ``None`` when unspecified. Only used for
        balancing, never to exclude anyone.
    is_active : bool
        Inactive participants are not eligible for team generation.
    is_guest : bool
        Guests are one-off attendees, usually rated through a guest level.
    id : str
        Unique identifier; generated when not supplied.
    """

    name: str
    skill_service: int = 5
    skill_pass: int = 5
    skill_attack: int = 5
    skill_defense: int = 5
    gender: Optional[str] = None
    is_active: bool = True
    is_guest: bool = False
    id: str = field(default="")

    def __post_init__(self) -> None:
        if not self.id:
            self.id = generate_id(self.__class__.__name__)
        self.gender = validate_gender_strict(self.gender)
        for key in SKILL_KEYS:
            setattr(
                self, key, validate_skill_rating_strict(getattr(self, key), key)
            )

    @classmethod
    def guest(
        cls, name: str, level: str, gender: Optional[str] = None, **kwargs
    ) -> "Participant":
        """Create a guest whose every skill is set from a guest level.

        Raises:
            InvalidPlayerDataException: If the level is unknown
        """
        if level not in GUEST_LEVELS:
            raise InvalidPlayerDataException(
                f"Unknown guest level {level!r}; expected one of {', '.join(GUEST_LEVELS)}"
            )
        value = GUEST_LEVELS[level]
        skills = {key: value for key in SKILL_KEYS}
        return cls(name=name, gender=gender, is_guest=True, **skills, **kwargs)

    @property
    def is_female(self) -> bool:
        return self.gender == GENDER_FEMALE

    @property
    def skills(self) -> Dict[str, int]:
        """Raw skill ratings keyed by skill name."""
        return {key: getattr(self, key) for key in SKILL_KEYS}

    def gender_multiplier_from(
        self, multipliers: Optional[Mapping[str, float]] = None
    ) -> float:
        """Multiplier for this participant's gender; default table when omitted."""
        if multipliers is None:
            multipliers = GENDER_MULTIPLIERS
        return multipliers.get(self.gender, DEFAULT_GENDER_MULTIPLIER)

    def scaled_skills(
        self, multipliers: Optional[Mapping[str, float]] = None
    ) -> SkillScores:
        """Skills scaled by the gender multiplier found in ``multipliers``."""
        mult = self.gender_multiplier_from(multipliers)
        return {key: getattr(self, key) * mult for key in SKILL_KEYS}

    @property
    def gender_multiplier(self) -> float:
        return self.gender_multiplier_from()

    @property
    def effective_skills(self) -> SkillScores:
        """Skills scaled by the default gender multipliers."""
        return self.scaled_skills()

    @property
    def effective_composite(self) -> float:
        """Sum of the gender-adjusted skills."""
        return sum(self.effective_skills.values())

    def to_dict(self) -> Dict[str, Any]:
        """Serialize participant to dictionary."""
        data: Dict[str, Any] = {"id": self.id, "name": self.name, "gender": self.gender}
        data.update(self.skills)
        data["is_active"] = self.is_active
        data["is_guest"] = self.is_guest
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        """Deserialize participant from dictionary.

        Raises:
            InvalidPlayerDataException: If the name or a skill is missing
        """
        if not data.get("name"):
            raise InvalidPlayerDataException(f"Participant has no name: {data!r}")
        missing = [key for key in SKILL_KEYS if key not in data]
        if missing:
            raise InvalidPlayerDataException(
                f"Participant {data['name']!r} is missing {', '.join(missing)}"
            )
        return cls(
            id=str(data.get("id") or ""),
            name=data["name"],
            gender=data.get("gender"),
            is_active=data.get("is_active", True),
            is_guest=data.get("is_guest", False),
            **{key: data[key] for key in SKILL_KEYS},
        )

    def __str__(self) -> str:
        return self.name
