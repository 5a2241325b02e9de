from datetime import timezone

import pytest

from beachrank.constants import get_level_label
from beachrank.exceptions import InvalidPlayerDataException, PlayerNotFoundException
from beachrank.models.tournament import Match, RoundData, SessionConfig
from beachrank.player import Player
from beachrank.utils import generate_id, setup_logger


def test_player_from_legacy_dict():
    player = Player.from_dict(
        {"id": "x1", "name": "Ana", "level": 4, "matchCount": 3, "active": False}
    )
    assert player.id == "x1"
    assert player.match_count == 3
    assert not player.is_active
    assert player.level_label == "A"
    assert str(player) == "Ana (A)"

    assert Player.from_dict({"name": "Ben", "level": 2}).is_active

    with pytest.raises(InvalidPlayerDataException):
        Player.from_dict({"name": "No level"})


def test_partner_history_add_and_remove():
    player = Player(name="Ana", level=3)
    player.add_partner("b")
    player.add_partner("b")
    player.remove_partner("b")
    assert player.partner_count("b") == 1
    player.remove_partner("b")
    player.remove_partner("b")
    assert player.partner_counts == {}


def test_level_labels():
    assert [get_level_label(level) for level in range(1, 6)] == [
        "C",
        "B",
        "BB",
        "A",
        "AA",
    ]
    assert get_level_label(9) == "N9"


def test_match_accessors_and_dict():
    a, b, c, d = (Player(name=n, level=2, player_id=n) for n in "abcd")
    match = Match(team_a=[a, b], team_b=[c, d], games_a=3, games_b=6, id="m1")

    assert match.winner == "B"
    assert match.side_of("c") == "B"
    assert match.side_of("z") is None
    assert match.team("A") == [a, b]
    assert match.to_dict() == {
        "id": "m1",
        "team_a": ["a", "b"],
        "team_b": ["c", "d"],
        "games_a": 3,
        "games_b": 6,
        "winner": "B",
    }

    lookup = {p.id: p for p in (a, b, c, d)}
    legacy = Match.from_dict(
        {"id": "m2", "teamA": [{"id": "a"}, "b"], "teamB": ["c", "d"], "gamesA": 6},
        lookup,
    )
    assert legacy.team_a == [a, b]
    assert legacy.games_a == 6 and legacy.games_b is None
    assert legacy.winner is None

    with pytest.raises(PlayerNotFoundException):
        Match.from_dict({"team_a": ["a", "q"], "team_b": ["c", "d"]}, lookup)


def test_round_data_round_trip_keeps_timestamp():
    a, b, c, d = (Player(name=n, level=2, player_id=n) for n in "abcd")
    round_data = RoundData(
        matches=[Match(team_a=[a, b], team_b=[c, d])], round_number=4
    )

    lookup = {p.id: p for p in (a, b, c, d)}
    restored = RoundData.from_dict(round_data.to_dict(), lookup)

    assert restored.created_at == round_data.created_at
    assert restored.created_at.tzinfo is not None
    assert restored.created_at.utcoffset() == timezone.utc.utcoffset(None)
    assert restored.round_number == 4
    assert not restored.is_completed


def test_session_config_round_trip():
    config = SessionConfig(name="Sunday", courts=3, seed=11)
    assert SessionConfig.from_dict(config.to_dict()) == config
    assert SessionConfig.from_dict({}).courts == 2


def test_setup_logger_adds_a_single_handler():
    logger = setup_logger("beachrank.tests.logger")
    again = setup_logger("beachrank.tests.logger")
    assert logger is again
    assert len(logger.handlers) == 1


def test_generate_id_is_prefixed_and_unique():
    first, second = generate_id("Match"), generate_id("Match")
    assert first.startswith("match_")
    assert first != second
