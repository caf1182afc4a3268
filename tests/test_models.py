from datetime import date, timedelta

import pytest

from volleypairing.exceptions import (
    InvalidConfigurationException,
    InvalidPlayerDataException,
    RatingValidationException,
)
from volleypairing.models import Participant, Team, TeamSkillAverages
from volleypairing.models.team import round_tenth
from volleypairing.models.tournament import (
    ClassicFormat,
    KothFormat,
    Match,
    MatchConfig,
    MatchStatus,
    PairingHistory,
    PlayoffConfig,
    TeamRecord,
    format_from_dict,
)
from volleypairing.utils.validation import (
    validate_gender,
    validate_score,
    validate_skill_rating,
)

# ========== Participants ==========


def test_participant_defaults_and_generated_id():
    player = Participant(name="Alex")

    assert player.id
    assert player.skills == {
        "skill_service": 5,
        "skill_pass": 5,
        "skill_attack": 5,
        "skill_defense": 5,
    }
    assert player.gender is None
    assert player.is_active
    assert not player.is_guest


def test_gender_is_normalized():
    assert Participant(name="Sam", gender="f").gender == "F"
    assert Participant(name="Sam", gender=" ").gender is None
    with pytest.raises(InvalidPlayerDataException):
        Participant(name="Sam", gender="X")


@pytest.mark.parametrize("rating", [0, 11, 2.5, "high", True])
def test_out_of_range_skill_rejected(rating):
    with pytest.raises(RatingValidationException):
        Participant(name="Kim", skill_attack=rating)


def test_female_skills_are_scaled_for_balancing():
    player = Participant(
        name="Jo",
        gender="F",
        skill_service=10,
        skill_pass=10,
        skill_attack=10,
        skill_defense=10,
    )

    assert player.skill_attack == 10
    assert player.effective_skills["skill_attack"] == pytest.approx(8.5)
    assert player.effective_composite == pytest.approx(34.0)
    assert Participant(name="Max", gender="M").effective_composite == 20


@pytest.mark.parametrize(
    "level, value", [("beginner", 3), ("intermediate", 5), ("advanced", 7)]
)
def test_guest_levels(level, value):
    guest = Participant.guest("Visitor", level, gender="M")

    assert guest.is_guest
    assert set(guest.skills.values()) == {value}


def test_unknown_guest_level_rejected():
    with pytest.raises(InvalidPlayerDataException):
        Participant.guest("Visitor", "pro")


def test_participant_dict_round_trip():
    player = Participant(id="p1", name="Lee", gender="M", skill_pass=8, is_guest=True)

    assert Participant.from_dict(player.to_dict()) == player


def test_participant_from_dict_requires_every_skill():
    with pytest.raises(InvalidPlayerDataException):
        Participant.from_dict({"name": "Lee", "skill_service": 5})
    with pytest.raises(InvalidPlayerDataException):
        Participant.from_dict({"skill_service": 5})


# ========== Teams ==========


def test_round_tenth_rounds_half_up():
    assert round_tenth(2.25) == 2.3
    assert round_tenth(2.24) == 2.2
    assert round_tenth(7 / 3) == 2.3


def test_team_skill_averages():
    skills = {"skill_pass": 4, "skill_attack": 6, "skill_defense": 8}
    players = [
        Participant(name="A", skill_service=2, **skills),
        Participant(name="B", skill_service=3, **skills),
    ]

    averages = TeamSkillAverages.from_players(players)

    assert averages.skill_service == 2.5
    assert averages.skill_pass == 4.0
    assert averages.overall == 5.1
    assert TeamSkillAverages.from_players([]) == TeamSkillAverages()


def test_team_to_dict():
    player = Participant(id="p1", name="A", gender="F")
    team = Team(court_number=2, name="Team B", players=[player], id="t1")

    data = team.to_dict()

    assert data["id"] == "t1"
    assert data["court_number"] == 2
    assert data["players"][0]["id"] == "p1"
    assert team.female_count == 1
    assert team.player_ids == ["p1"]


# ========== Pairing history ==========


def _weekly_sessions(num_sessions, first, members=("a", "b")):
    return [
        TeamRecord(
            session_id=f"s{i}",
            session_date=(first + timedelta(weeks=i)).isoformat(),
            member_ids=list(members),
        )
        for i in range(num_sessions)
    ]


def test_history_is_symmetric_and_ignores_self_pairs():
    history = PairingHistory()
    history.add_team(["a", "b", "c"])
    history.add_pairing("a", "a")

    assert history.count("a", "b") == history.count("b", "a") == 1
    assert history.count("a", "a") == 0
    assert history.team_familiarity(["a", "b", "c"]) == 3
    assert len(history) == 3


def test_history_keeps_the_eight_most_recent_sessions():
    records = _weekly_sessions(10, date(2025, 1, 6))

    history = PairingHistory.from_past_teams(records, before=date(2025, 6, 1))

    assert history.count("a", "b") == 8


def test_history_ignores_sessions_on_or_after_the_contest():
    records = _weekly_sessions(3, date(2025, 1, 6))

    history = PairingHistory.from_past_teams(records, before="2025-01-13")

    assert history.count("a", "b") == 1


def test_history_only_counts_present_participants():
    records = _weekly_sessions(2, date(2025, 1, 6), members=("a", "b", "c"))

    history = PairingHistory.from_past_teams(
        records, before=date(2025, 2, 1), present_ids=["a", "c"]
    )

    assert history.count("a", "c") == 2
    assert history.count("a", "b") == 0


def test_history_rejects_bad_dates_and_windows():
    records = [TeamRecord("s1", "not a date", ["a", "b"])]

    with pytest.raises(InvalidConfigurationException):
        PairingHistory.from_past_teams(records, before=date(2025, 1, 1))
    with pytest.raises(InvalidConfigurationException):
        PairingHistory.from_past_teams([], before=date(2025, 1, 1), window=0)


def test_history_dict_round_trip():
    history = PairingHistory()
    history.add_pairing("a", "b", times=3)

    restored = PairingHistory.from_dict(history.to_dict())

    assert restored.count("b", "a") == 3


# ========== Matches and formats ==========


def test_match_dict_round_trip():
    match = Match(
        contest_id="c1",
        team_a_id="t1",
        team_b_id=None,
        round="semi-final",
        court_number=3,
        match_order=7,
    )

    restored = Match.from_dict(match.to_dict())

    assert restored == match
    assert restored.status is MatchStatus.SCHEDULED
    assert not restored.has_both_teams


def test_classic_format_defaults_for_missing_counts():
    fmt = format_from_dict({"mode": "CLASSIC", "num_pools": 0})

    assert isinstance(fmt, ClassicFormat)
    assert fmt.num_pools == 2
    assert fmt.qualifiers_per_pool == 2
    assert fmt.pool_config == MatchConfig()
    assert fmt.playoff_config == PlayoffConfig()


def test_format_round_trip():
    classic = ClassicFormat(
        num_pools=3,
        qualifiers_per_pool=1,
        pool_config=MatchConfig(sets=1, points=21, win_by_two=False),
        playoff_config=PlayoffConfig(sets=3, points=25, tie_break_points=15),
    )
    koth = KothFormat(match_config=MatchConfig(points=15))

    assert format_from_dict(classic.to_dict()) == classic
    assert format_from_dict(koth.to_dict()) == koth


@pytest.mark.parametrize("data", [{"mode": "SWISS"}, {}, ["CLASSIC"]])
def test_unknown_format_rejected(data):
    with pytest.raises(InvalidConfigurationException):
        format_from_dict(data)


def test_match_config_requires_positive_values():
    with pytest.raises(InvalidConfigurationException):
        MatchConfig(points=0)
    with pytest.raises(InvalidConfigurationException):
        ClassicFormat(num_pools=-1)


# ========== Validation helpers ==========


def test_validation_results():
    assert validate_skill_rating("7").sanitized_value == 7
    assert not validate_skill_rating(None)
    assert validate_gender("m").sanitized_value == "M"
    assert validate_score(0)
    assert not validate_score(-1)
    assert not validate_score(3.5)
