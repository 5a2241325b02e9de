import pytest

from beachrank.controllers import ResultRecorder, RoundManager
from beachrank.exceptions import (
    InsufficientPlayersException,
    InvalidResultException,
    MatchNotFoundException,
    PlayerNotFoundException,
)
from beachrank.player import Player


def _players(count, level=3):
    return [
        Player(name=f"Player {i}", level=level, player_id=f"p{i}")
        for i in range(count)
    ]


def _snapshot(players):
    return {p.id: (p.match_count, dict(p.partner_counts)) for p in players}


def test_rounds_are_numbered_in_order():
    manager = RoundManager()
    players = _players(8)

    first = manager.create_next_round(players, courts=1)
    second = manager.create_next_round(players, courts=2)

    assert (first.round_number, second.round_number) == (1, 2)
    assert manager.current_round_number == 2
    assert manager.get_round(2) is second
    assert manager.get_round(3) is None
    assert manager.get_round(0) is None


def test_find_match():
    manager = RoundManager()
    round_data = manager.create_next_round(_players(8), courts=2)
    match = round_data.matches[1]

    assert manager.find_match(match.id) == (round_data, match)
    assert manager.find_match("missing") is None


def test_undo_restores_statistics():
    manager = RoundManager()
    players = _players(6)
    manager.create_next_round(players, courts=1)
    before = _snapshot(players)

    manager.create_next_round(players, courts=1)
    assert manager.undo_last_round()

    assert manager.current_round_number == 1
    assert _snapshot(players) == before


def test_undo_refused_once_a_score_is_entered():
    manager = RoundManager()
    round_data = manager.create_next_round(_players(4), courts=1)
    round_data.matches[0].games_a = 3

    assert not manager.undo_last_round()
    assert manager.current_round_number == 1
    assert not RoundManager().undo_last_round()


def test_regenerate_replaces_the_last_round():
    manager = RoundManager()
    players = _players(8)
    old = manager.create_next_round(players, courts=1)

    new = manager.regenerate_last_round(players, courts=1)

    assert new is not None and new is not old
    assert new.round_number == 1
    assert manager.rounds == [new]
    assert sum(p.match_count for p in players) == 4


def test_failed_regeneration_keeps_the_undo():
    manager = RoundManager()
    players = _players(5)
    manager.create_next_round(players, courts=1)

    with pytest.raises(InsufficientPlayersException):
        manager.regenerate_last_round(players, courts=2)

    assert manager.rounds == []
    assert all(p.match_count == 0 for p in players)


def test_serialization_round_trip():
    manager = RoundManager()
    players = _players(8)
    round_data = manager.create_next_round(players, courts=2)
    round_data.matches[0].games_a, round_data.matches[0].games_b = 6, 4

    lookup = {p.id: p for p in players}
    restored = RoundManager.from_dict(manager.to_dict(), lookup)

    assert restored.to_dict() == manager.to_dict()
    assert restored.rounds[0].matches[0].winner == "A"

    with pytest.raises(PlayerNotFoundException):
        RoundManager.from_dict(manager.to_dict(), {})


def test_set_games_derives_winner():
    manager = RoundManager()
    round_data = manager.create_next_round(_players(4), courts=1)
    match = round_data.matches[0]
    recorder = ResultRecorder()

    recorder.set_games(round_data, match.id, "A", 4)
    assert match.winner is None
    recorder.set_games(round_data, match.id, "B", 6)
    assert match.winner == "B"
    recorder.set_games(round_data, match.id, "B", 4)
    assert match.winner is None
    recorder.set_games(round_data, match.id, "B", None)
    assert match.games_b is None


@pytest.mark.parametrize("side, games", [("C", 3), ("A", -1), ("A", 2.5), ("B", "6")])
def test_set_games_rejects_bad_input(side, games):
    manager = RoundManager()
    round_data = manager.create_next_round(_players(4), courts=1)

    with pytest.raises(InvalidResultException):
        ResultRecorder().set_games(round_data, round_data.matches[0].id, side, games)


def test_record_score():
    manager = RoundManager()
    round_data = manager.create_next_round(_players(4), courts=1)
    match = round_data.matches[0]
    recorder = ResultRecorder()

    with pytest.raises(InvalidResultException):
        recorder.record_score(round_data, match.id, 5, 5)
    with pytest.raises(InvalidResultException):
        recorder.record_score(round_data, match.id, 6, None)
    with pytest.raises(MatchNotFoundException):
        recorder.record_score(round_data, "missing", 6, 2)
    assert not round_data.has_scores

    recorder.record_score(round_data, match.id, 6, 2)
    assert match.winner == "A"
    assert round_data.is_completed

    recorder.clear_score(round_data, match.id)
    assert not match.is_scored
