import json

import pytest

from beachrank.exceptions import InvalidConfigurationException
from beachrank.testing import (
    LevelDistribution,
    RandomSessionGenerator,
    ResultPattern,
    RSGConfig,
)
from beachrank.testing.rsg import create_club_session, main


def test_generated_session_has_no_structural_violations():
    config = RSGConfig(
        num_players=14,
        num_rounds=8,
        courts=3,
        level_distribution=LevelDistribution.PYRAMID,
        result_pattern=ResultPattern.REALISTIC,
        seed=123,
        break_rate=0.2,
    )
    session_data = RandomSessionGenerator(config).generate_complete_session()

    assert len(session_data["rounds"]) == 8
    assert len(session_data["reports"]) == 8
    for report in session_data["reports"]:
        assert report.is_valid, report.summary
    for round_data in session_data["rounds"]:
        assert round_data.is_completed
        assert len(set(round_data.player_ids)) == 12


def test_leaderboard_totals_match_simulated_scores():
    config = RSGConfig(num_players=9, num_rounds=5, courts=2, seed=9)
    session_data = RandomSessionGenerator(config).generate_complete_session()

    rows = session_data["leaderboard"]
    assert len(rows) == 9
    assert sum(row.wins for row in rows) == 5 * 2 * 2
    assert sum(row.game_balance for row in rows) == 0
    assert [r.primary_key for r in rows] == sorted(
        (r.primary_key for r in rows), reverse=True
    )


def test_same_seed_same_session():
    def standings(seed):
        data = create_club_session(seed=seed).generate_complete_session()
        return [(row.name, row.points, row.game_balance) for row in data["leaderboard"]]

    assert standings(5) == standings(5)


def test_config_validation():
    with pytest.raises(InvalidConfigurationException):
        RSGConfig(num_players=7, num_rounds=3, courts=2)
    with pytest.raises(InvalidConfigurationException):
        RSGConfig(num_players=8, num_rounds=0)


def test_main_prints_leaderboard_and_writes_json(tmp_path, capsys):
    output = tmp_path / "session.json"

    exit_code = main(["--players", "10", "--rounds", "3", "--output", str(output)])

    assert exit_code == 0
    printed = capsys.readouterr().out
    assert "Rounds: 3" in printed
    assert "Structural violations: 0" in printed
    data = json.loads(output.read_text(encoding="utf-8"))
    assert len(data["rounds"]) == 3
    assert len(data["leaderboard"]) == 10
    assert {"P", "SV", "SG"} <= set(data["leaderboard"][0])


def test_main_rejects_impossible_configuration(capsys):
    assert main(["--players", "3", "--courts", "1"]) == 2
    assert "Invalid configuration" in capsys.readouterr().out
