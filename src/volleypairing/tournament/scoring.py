"""Match score recording.

This module handles match status transitions and score validation. Every
operation returns a new Match; the one passed in is left untouched.
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

from dataclasses import replace
from typing import Optional

from volleypairing.exceptions import InvalidResultException, MatchStateException
from volleypairing.models.tournament import Match, MatchConfig, MatchStatus
from volleypairing.utils import setup_logger
from volleypairing.utils.validation import validate_score_strict

logger = setup_logger(__name__)


def is_set_complete(score_a: int, score_b: int, config: MatchConfig) -> bool:
    """Whether a set with these scores is over under ``config``.

    The leader must have reached the target and, with ``win_by_two``,
    lead by at least two points.
    """
    high, low = max(score_a, score_b), min(score_a, score_b)
    if high < config.points:
        return False
    if config.win_by_two and high - low < 2:
        return False
    return True


def validate_final_score(score_a: int, score_b: int, config: MatchConfig) -> None:
    """Raises:
    InvalidResultException: If the scores cannot end a set under ``config``
    """
    if not is_set_complete(score_a, score_b, config):
        margin = " by two points" if config.win_by_two else ""
        raise InvalidResultException(
            f"Score {score_a}-{score_b} does not finish a set to "
            f"{config.points}{margin}"
        )


def _require_status(match: Match, expected: MatchStatus, action: str) -> None:
    if match.status != expected:
        raise MatchStateException(
            f"Cannot {action} match {match.id}: status is {match.status.value}, "
            f"expected {expected.value}"
        )


def _require_open(match: Match, action: str) -> None:
    # FINISHED is terminal; a scheduled match is started implicitly
    if match.status == MatchStatus.FINISHED:
        raise MatchStateException(
            f"Cannot {action} match {match.id}: it is already finished"
        )


def start_match(match: Match) -> Match:
    """SCHEDULED -> IN_PROGRESS.

    Raises:
        MatchStateException: If the match is not scheduled
    """
    _require_status(match, MatchStatus.SCHEDULED, "start")
    logger.debug("Starting match %s", match.id)
    return replace(match, status=MatchStatus.IN_PROGRESS)


def save_score(match: Match, score_a: int, score_b: int) -> Match:
    """Update the scores of a match without finishing it.

    A scheduled match moves to IN_PROGRESS; one in progress keeps its status.

    Raises:
        MatchStateException: If the match is already finished
        InvalidResultException: If a score is negative or not an integer
    """
    _require_open(match, "save the score of")
    score_a = validate_score_strict(score_a)
    score_b = validate_score_strict(score_b)
    return replace(
        match, score_a=score_a, score_b=score_b, status=MatchStatus.IN_PROGRESS
    )


def finish_match(
    match: Match,
    score_a: int,
    score_b: int,
    config: Optional[MatchConfig] = None,
) -> Match:
    """Record the final score; the higher score wins.

    Args:
        match: Match that is scheduled or in progress
        score_a: Final score of slot A
        score_b: Final score of slot B
        config: When given, the score must also complete a set under it

    Returns:
        The finished match with its winner set

    Raises:
        MatchStateException: If the match is already finished
        InvalidResultException: On a tie, a negative score, or a score that
            does not satisfy ``config``
    """
    _require_open(match, "finish")
    if not match.has_both_teams:
        raise MatchStateException(
            f"Cannot finish match {match.id}: a team slot is still to be determined"
        )
    score_a = validate_score_strict(score_a)
    score_b = validate_score_strict(score_b)
    if score_a == score_b:
        raise InvalidResultException(
            f"Match {match.id} cannot finish on a tie ({score_a}-{score_b})"
        )
    if config is not None:
        validate_final_score(score_a, score_b, config)

    winner_id = match.team_a_id if score_a > score_b else match.team_b_id
    logger.info(
        "Match %s finished %d-%d, winner %s", match.id, score_a, score_b, winner_id
    )
    return replace(
        match,
        score_a=score_a,
        score_b=score_b,
        winner_id=winner_id,
        status=MatchStatus.FINISHED,
    )
