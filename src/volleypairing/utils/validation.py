"""Validation utilities for Volley Pairing.

This module provides reusable validation functions with consistent error handling.
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

from typing import Any, Optional

from volleypairing.constants import MAX_SKILL_RATING, MIN_SKILL_RATING, VALID_GENDERS
from volleypairing.exceptions import (
    InvalidPlayerDataException,
    InvalidResultException,
    RatingValidationException,
)


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


def _as_int(value: Any) -> Optional[int]:
    """Coerce ints, integral floats and digit strings; None for anything else."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


# ========== Skill Rating Validation ==========


def validate_skill_rating(
    rating: Any,
    min_rating: int = MIN_SKILL_RATING,
    max_rating: int = MAX_SKILL_RATING,
) -> ValidationResult:
    """Validate a skill rating.

    Args:
        rating: Rating value to validate
        min_rating: Minimum allowed rating
        max_rating: Maximum allowed rating

    Returns:
        ValidationResult with the rating as an int in ``sanitized_value``
    """
    rating_int = _as_int(rating)
    if rating_int is None:
        return ValidationResult(
            is_valid=False,
            error_message=f"Skill rating must be an integer: {rating!r}",
        )

    if rating_int < min_rating or rating_int > max_rating:
        return ValidationResult(
            is_valid=False,
            error_message=f"Skill rating must be between {min_rating} and {max_rating}: {rating_int}",
        )

    return ValidationResult(is_valid=True, sanitized_value=rating_int)


def validate_skill_rating_strict(rating: Any, field_name: str = "skill") -> int:
    """Validate rating and return integer or raise exception.

    Raises:
        RatingValidationException: If rating is invalid
    """
    result = validate_skill_rating(rating)
    if not result.is_valid:
        raise RatingValidationException(f"{field_name}: {result.error_message}")
    return result.sanitized_value


# ========== Gender Validation ==========


def validate_gender(gender: Optional[str]) -> ValidationResult:
    """Validate a gender code. ``None`` and blank mean "unspecified"."""
    if gender is None or not str(gender).strip():
        return ValidationResult(is_valid=True, sanitized_value=None)

    code = str(gender).strip().upper()
    if code not in VALID_GENDERS:
        return ValidationResult(
            is_valid=False,
            error_message=f"Gender must be one of {', '.join(VALID_GENDERS)}: {gender!r}",
        )
    return ValidationResult(is_valid=True, sanitized_value=code)


def validate_gender_strict(gender: Optional[str]) -> Optional[str]:
    """Raises:
    InvalidPlayerDataException: If the gender code is unknown
    """
    result = validate_gender(gender)
    if not result.is_valid:
        raise InvalidPlayerDataException(result.error_message)
    return result.sanitized_value


# ========== Score Validation ==========


def validate_score(score: Any) -> ValidationResult:
    """Validate a match score (a non-negative integer number of points).

    Args:
        score: Score to validate

    Returns:
        ValidationResult with validation status
    """
    score_int = _as_int(score)
    if score_int is None:
        return ValidationResult(
            is_valid=False,
            error_message=f"Score must be an integer: {score!r}",
        )
    if score_int < 0:
        return ValidationResult(
            is_valid=False,
            error_message=f"Score cannot be negative: {score_int}",
        )
    return ValidationResult(is_valid=True, sanitized_value=score_int)


def validate_score_strict(score: Any) -> int:
    """Raises:
    InvalidResultException: If the score is invalid
    """
    result = validate_score(score)
    if not result.is_valid:
        raise InvalidResultException(result.error_message)
    return result.sanitized_value
