import json

import pytest

from volleypairing.cli import load_team_ids, main
from volleypairing.exceptions import InvalidConfigurationException
from volleypairing.testing import RosterConfig, RosterGenerator


def _write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def _roster_file(tmp_path, num_participants=12):
    roster = RosterGenerator(
        RosterConfig(num_participants=num_participants, seed=17)
    ).create_participants()
    return _write_json(tmp_path / "roster.json", [p.to_dict() for p in roster])


def test_balance_prints_teams(tmp_path, capsys):
    roster = _roster_file(tmp_path)

    code = main(
        ["balance", roster, "--courts", "2", "--team-size", "4", "--seed", "3"]
    )

    teams = json.loads(capsys.readouterr().out)
    assert code == 0
    assert len(teams) == 4
    assert [t["court_number"] for t in teams] == [1, 1, 2, 2]
    assert sum(len(t["players"]) for t in teams) == 12


def test_balance_is_reproducible_with_a_seed(tmp_path, capsys):
    roster = _roster_file(tmp_path)
    args = ["balance", roster, "--courts", "1", "--team-size", "6", "--seed", "8"]

    main(args)
    first = json.loads(capsys.readouterr().out)
    main(args)
    second = json.loads(capsys.readouterr().out)

    def members(teams):
        return [[p["id"] for p in t["players"]] for t in teams]

    assert members(first) == members(second)


def test_balance_with_history(tmp_path, capsys):
    roster = _roster_file(tmp_path, num_participants=8)
    history = _write_json(
        tmp_path / "history.json",
        {"cooccurrences": [{"players": ["p1", "p2"], "count": 4}]},
    )

    code = main(
        ["balance", roster, "--courts", "1", "--team-size", "4", "--history", history]
    )

    assert code == 0
    assert len(json.loads(capsys.readouterr().out)) == 2


def test_pools_prints_matches(tmp_path, capsys):
    teams = _write_json(tmp_path / "teams.json", ["t1", "t2", "t3", "t4"])

    code = main(["pools", teams, "--pools", "1", "--court", "3"])

    matches = json.loads(capsys.readouterr().out)
    assert code == 0
    assert len(matches) == 6
    assert {m["round"] for m in matches} == {"POOL_A"}
    assert {m["court_number"] for m in matches} == {3}
    assert {m["status"] for m in matches} == {"SCHEDULED"}


def test_team_ids_from_team_objects(tmp_path):
    path = _write_json(tmp_path / "teams.json", {"teams": [{"id": "a"}, {"id": "b"}]})

    assert load_team_ids(path) == ["a", "b"]


def test_team_objects_need_an_id(tmp_path):
    path = _write_json(tmp_path / "teams.json", [{"name": "Team A"}])

    with pytest.raises(InvalidConfigurationException):
        load_team_ids(path)


def test_library_errors_exit_with_one(tmp_path):
    roster = _write_json(tmp_path / "roster.json", [{"name": "Solo"}])
    teams = _write_json(tmp_path / "teams.json", ["t1"])

    assert main(["balance", roster, "--courts", "1", "--team-size", "4"]) == 1
    assert main(["pools", teams]) == 1
    assert main(["pools", str(tmp_path / "missing.json")]) == 1


def test_invalid_arguments_exit_with_usage_error(tmp_path):
    roster = _roster_file(tmp_path)

    with pytest.raises(SystemExit) as excinfo:
        main(["balance", roster, "--courts", "0", "--team-size", "4"])

    assert excinfo.value.code == 2
