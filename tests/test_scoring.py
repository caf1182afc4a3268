import pytest

from volleypairing.exceptions import InvalidResultException, MatchStateException
from volleypairing.models.tournament import Match, MatchConfig, MatchStatus
from volleypairing.tournament import (
    finish_match,
    is_set_complete,
    save_score,
    start_match,
    validate_final_score,
)


@pytest.fixture
def match():
    return Match(
        contest_id="c1",
        team_a_id="t1",
        team_b_id="t2",
        round="POOL_A",
        court_number=1,
        match_order=0,
        id="m1",
    )


def test_start_match(match):
    started = start_match(match)

    assert started.status is MatchStatus.IN_PROGRESS
    assert match.status is MatchStatus.SCHEDULED
    with pytest.raises(MatchStateException):
        start_match(started)


def test_save_score_keeps_the_match_open(match):
    saved = save_score(start_match(match), 12, 9)

    assert (saved.score_a, saved.score_b) == (12, 9)
    assert saved.status is MatchStatus.IN_PROGRESS
    assert saved.winner_id is None


def test_save_score_starts_a_scheduled_match(match):
    assert save_score(match, 0, 1).status is MatchStatus.IN_PROGRESS


def test_higher_score_wins(match):
    finished = finish_match(start_match(match), 25, 20)

    assert finished.status is MatchStatus.FINISHED
    assert finished.winner_id == "t1"
    assert (finished.score_a, finished.score_b) == (25, 20)
    assert finish_match(match, 18, 25).winner_id == "t2"


def test_tie_is_rejected_and_match_left_unchanged(match):
    started = start_match(match)

    with pytest.raises(InvalidResultException):
        finish_match(started, 20, 20)

    assert started.status is MatchStatus.IN_PROGRESS
    assert started.score_a is None
    assert started.winner_id is None


@pytest.mark.parametrize("score_a, score_b", [(-1, 25), (25, "x"), (2.5, 25)])
def test_invalid_scores_rejected(match, score_a, score_b):
    with pytest.raises(InvalidResultException):
        finish_match(match, score_a, score_b)
    with pytest.raises(InvalidResultException):
        save_score(match, score_a, score_b)


def test_finished_is_terminal(match):
    finished = finish_match(match, 25, 20)

    with pytest.raises(MatchStateException):
        finish_match(finished, 20, 25)
    with pytest.raises(MatchStateException):
        save_score(finished, 1, 0)
    with pytest.raises(MatchStateException):
        start_match(finished)


def test_cannot_finish_without_both_teams(match):
    match.team_b_id = None

    with pytest.raises(MatchStateException):
        finish_match(match, 25, 20)


@pytest.mark.parametrize(
    "score_a, score_b, win_by_two, complete",
    [
        (25, 20, True, True),
        (25, 24, True, False),
        (25, 24, False, True),
        (27, 25, True, True),
        (24, 20, True, False),
        (10, 25, True, True),
    ],
)
def test_set_completion(score_a, score_b, win_by_two, complete):
    config = MatchConfig(points=25, win_by_two=win_by_two)

    assert is_set_complete(score_a, score_b, config) is complete


def test_match_config_enforced_when_given(match):
    config = MatchConfig(points=21)

    with pytest.raises(InvalidResultException):
        finish_match(match, 21, 20, config)
    with pytest.raises(InvalidResultException):
        validate_final_score(15, 10, config)
    assert finish_match(match, 21, 19, config).winner_id == "t1"
