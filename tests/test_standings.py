from volleypairing.models.tournament import Match, MatchStatus
from volleypairing.tournament import (
    StandingsCalculator,
    recompute_classic_standings,
    recompute_koth_standings,
)


def _finished(team_a, team_b, score_a, score_b, round_label="POOL_A", order=0):
    winner = team_a if score_a > score_b else team_b
    return Match(
        contest_id="c1",
        team_a_id=team_a,
        team_b_id=team_b,
        round=round_label,
        court_number=1,
        match_order=order,
        score_a=score_a,
        score_b=score_b,
        winner_id=winner,
        status=MatchStatus.FINISHED,
    )


def _by_subject(standings):
    return {s.subject_id: s for s in standings}


def test_single_classic_result():
    standings = recompute_classic_standings([_finished("x", "y", 25, 20)], ["x", "y"])

    x, y = standings
    assert (x.team_id, x.points, x.wins, x.losses, x.points_diff) == ("x", 3, 1, 0, 5)
    assert (y.team_id, y.points, y.wins, y.losses, y.points_diff) == ("y", 0, 0, 1, -5)
    assert (x.rank, y.rank) == (1, 2)
    assert x.matches_played == y.matches_played == 1


def test_unfinished_matches_do_not_count():
    in_progress = Match("c1", "x", "y", "POOL_A", 1, 0, score_a=10, score_b=3)
    in_progress.status = MatchStatus.IN_PROGRESS

    standings = recompute_classic_standings([in_progress], ["x", "y", "z"])

    assert len(standings) == 3
    assert all(s.matches_played == 0 and s.points == 0 for s in standings)
    assert [s.rank for s in standings] == [1, 2, 3]


def test_classic_ordering_uses_points_then_diff_then_wins():
    matches = [
        _finished("a", "b", 25, 10),
        _finished("b", "c", 25, 23),
        _finished("c", "a", 25, 23),
        _finished("d", "a", 25, 24),
    ]

    standings = recompute_classic_standings(matches, ["a", "b", "c", "d"])

    keys = [(s.points, s.points_diff, s.wins) for s in standings]
    assert keys == sorted(keys, reverse=True)
    assert [s.rank for s in standings] == [1, 2, 3, 4]
    assert standings[0].team_id == "a"


def test_teams_outside_the_ranking_are_ignored():
    standings = recompute_classic_standings(
        [_finished("x", "ghost", 25, 20)], ["x", "y"]
    )

    assert all(s.matches_played == 0 for s in standings)


def test_koth_winners_get_the_margin_as_bonus():
    membership = {"t1": ["p1", "p2"], "t2": ["p3", "p4"]}

    standings = recompute_koth_standings([_finished("t1", "t2", 21, 15)], membership)

    rows = _by_subject(standings)
    assert rows["p1"].points == rows["p2"].points == 9
    assert rows["p1"].points_diff == 6
    assert rows["p3"].points == 0
    assert rows["p3"].losses == 1
    assert rows["p4"].points_diff == -6
    assert all(s.player_id is not None and s.team_id is None for s in standings)


def test_koth_standings_accumulate_over_rounds():
    membership = {
        "r1a": ["p1", "p2"],
        "r1b": ["p3", "p4"],
        "r2a": ["p1", "p3"],
        "r2b": ["p2", "p4"],
    }
    matches = [
        _finished("r1a", "r1b", 15, 10, "ROUND_1", 0),
        _finished("r2a", "r2b", 15, 13, "ROUND_2", 1),
    ]

    standings = recompute_koth_standings(matches, membership)

    rows = _by_subject(standings)
    assert rows["p1"].points == (3 + 5) + (3 + 2)
    assert rows["p1"].wins == 2
    assert rows["p4"].losses == 2
    assert standings[0].player_id == "p1"
    assert standings[-1].player_id == "p4"


def test_pool_standings_rank_each_pool_separately():
    matches = [
        _finished("a1", "a2", 25, 20, "POOL_A", 0),
        _finished("b1", "b2", 18, 25, "POOL_B", 1),
    ]

    standings = StandingsCalculator().recompute_pool_standings(matches)

    assert [(s.pool, s.team_id, s.rank) for s in standings] == [
        ("POOL_A", "a1", 1),
        ("POOL_A", "a2", 2),
        ("POOL_B", "b2", 1),
        ("POOL_B", "b1", 2),
    ]


def test_pool_standings_skip_bracket_matches():
    matches = [
        _finished("a1", "a2", 25, 20, "POOL_A", 0),
        _finished("a2", "a1", 25, 20, "final", 1),
    ]

    standings = StandingsCalculator().recompute_pool_standings(matches)

    assert _by_subject(standings)["a1"].wins == 1
    assert _by_subject(standings)["a2"].wins == 0


def test_custom_win_points():
    standings = StandingsCalculator(win_points=2).recompute_classic_standings(
        [_finished("x", "y", 25, 20)], ["x", "y"]
    )

    assert standings[0].points == 2
