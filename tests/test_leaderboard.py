from beachrank.models.tournament import Match, RoundData
from beachrank.player import Player
from beachrank.tournament import (
    LeaderboardCalculator,
    LeaderboardRow,
    MatchHistory,
    MiniLeague,
    PairwiseRecord,
    rank,
)


def _player(name, level=3):
    return Player(name=name, level=level, player_id=name.lower())


def _match(team_a, team_b, games_a, games_b):
    return Match(
        team_a=list(team_a), team_b=list(team_b), games_a=games_a, games_b=games_b
    )


def _fillers(count):
    return [_player(f"Filler {i:02d}") for i in range(count)]


def _names(rows):
    return [row.name for row in rows]


def test_single_match_totals():
    anna, bruno, carla, dario = (
        _player(n) for n in ("Anna", "Bruno", "Carla", "Dario")
    )
    rounds = [RoundData(matches=[_match((anna, bruno), (carla, dario), 6, 2)])]

    rows = rank([dario, carla, bruno, anna], rounds)

    assert _names(rows) == ["Anna", "Bruno", "Carla", "Dario"]
    top = rows[0]
    assert (top.points, top.set_balance, top.game_balance) == (3, 1, 4)
    assert (top.wins, top.losses, top.games_for, top.games_against) == (1, 0, 6, 2)
    bottom = rows[-1]
    assert (bottom.points, bottom.set_balance, bottom.game_balance) == (0, -1, -4)

    # Teammates never faced each other, so the mini-league leaves no trace
    data = top.to_dict()
    assert data["P"] == 3 and data["SV"] == 1 and data["SG"] == 4
    assert data["W"] == 1 and data["L"] == 0
    assert not any(key.startswith("mini") for key in data)
    assert "oppMini" not in data


def test_unscored_and_drawn_matches_do_not_count_in_totals():
    a, b, c, d = (_player(n) for n in ("Ada", "Bea", "Cyd", "Dee"))
    rounds = [
        RoundData(
            matches=[
                _match((a, b), (c, d), None, None),
                _match((a, c), (b, d), 4, None),
                _match((a, d), (b, c), 5, 5),
            ]
        )
    ]

    rows = rank([a, b, c, d], rounds)

    assert _names(rows) == ["Ada", "Bea", "Cyd", "Dee"]
    for row in rows:
        assert (row.wins, row.losses, row.games_for, row.games_against) == (0, 0, 0, 0)


def test_drawn_match_still_feeds_pairwise_records():
    a, b, c, d = (_player(n) for n in ("Ada", "Bea", "Cyd", "Dee"))
    rounds = [
        RoundData(
            matches=[
                _match((a, b), (c, d), None, None),
                _match((a, d), (b, c), 5, 5),
            ]
        )
    ]

    history = LeaderboardCalculator().aggregate(rounds)

    assert history.pairwise_record("ada", "bea") == PairwiseRecord(5, 5)
    assert history.pairwise_record("cyd", "dee") == PairwiseRecord(5, 5)
    assert history.pairwise_record("ada", "cyd") == PairwiseRecord(5, 5)
    # teammates in the draw, opponents only in the unscored match
    assert history.pairwise_record("ada", "dee") is None
    assert history.head_to_head == {}
    assert history.stats == {}


def test_tied_players_who_never_met_fall_back_to_name_order():
    zed, xia, yan = _player("Zed"), _player("Xia"), _player("Yan")
    f = _fillers(3)
    # Same partner and opponents each round, the three never share a court
    rounds = [
        RoundData(matches=[_match((player, f[0]), (f[1], f[2]), 6, 2)])
        for player in (zed, xia, yan)
    ]

    rows = rank([zed, yan, xia] + f, rounds)
    tied = [row for row in rows if row.name in ("Zed", "Xia", "Yan")]

    assert [row.primary_key for row in tied] == [(3, 1, 4)] * 3
    assert _names(tied) == ["Xia", "Yan", "Zed"]
    for row in tied:
        assert not row.in_mini_league
        assert not any(key.startswith("mini") for key in row.to_dict())
        assert not {"GPmini", "GCmini", "oppMini"} & set(row.to_dict())
        assert LeaderboardCalculator().explain(row) == ""


def test_head_to_head_breaks_a_two_way_tie():
    zed, amy = _player("Zed"), _player("Amy")
    f = _fillers(8)
    rounds = [
        RoundData(matches=[_match((zed, f[0]), (amy, f[1]), 6, 4)]),
        RoundData(
            matches=[
                _match((amy, f[2]), (f[3], f[4]), 6, 4),
                _match((zed, f[5]), (f[6], f[7]), 4, 6),
            ]
        ),
    ]

    rows = rank([amy, zed] + f, rounds)
    tied = [row for row in rows if row.name in ("Zed", "Amy")]

    assert tied[0].primary_key == tied[1].primary_key == (3, 0, 0)
    assert _names(tied) == ["Zed", "Amy"]
    assert not tied[0].in_mini_league
    assert not tied[1].in_mini_league


def _three_way_tie():
    paula, quentin, rosa = _player("Paula"), _player("Quentin"), _player("Rosa")
    f = _fillers(21)
    matches = [
        # Paula and Quentin split their meetings, Paula on games 11-6
        _match((paula, f[0]), (quentin, f[1]), 6, 0),
        _match((quentin, f[2]), (paula, f[3]), 6, 5),
        # Quentin and Rosa split 10-10
        _match((quentin, f[4]), (rosa, f[5]), 6, 4),
        _match((rosa, f[6]), (quentin, f[7]), 6, 4),
        # Rosa and Paula split, Rosa on games 10-7
        _match((rosa, f[8]), (paula, f[9]), 6, 1),
        _match((paula, f[10]), (rosa, f[11]), 6, 4),
        # Wins over the rest level the overall game balance at +8
        _match((paula, f[12]), (f[13], f[14]), 8, 2),
        _match((quentin, f[15]), (f[16], f[17]), 13, 0),
        _match((rosa, f[18]), (f[19], f[20]), 5, 0),
    ]
    rounds = [RoundData(matches=[m]) for m in matches]
    return [paula, quentin, rosa] + f, rounds


def test_mini_league_orders_three_way_tie_by_mini_game_balance():
    players, rounds = _three_way_tie()

    rows = rank(players, rounds)

    assert _names(rows[:3]) == ["Rosa", "Paula", "Quentin"]
    for row in rows[:3]:
        assert row.primary_key == (9, 1, 8)

    rosa, paula, quentin = rows[:3]
    assert rosa.mini_game_balance == 3
    assert (rosa.mini_games_for, rosa.mini_games_against) == (20, 17)
    assert (rosa.mini_wins, rosa.mini_losses, rosa.mini_set_balance) == (1, None, 1)
    assert rosa.mini_opponents == 2

    assert paula.mini_game_balance == 2
    assert (paula.mini_wins, paula.mini_losses) == (1, 1)
    assert paula.mini_set_balance is None

    assert quentin.mini_game_balance == -5
    assert (quentin.mini_wins, quentin.mini_losses) == (None, 1)
    assert quentin.mini_set_balance == -1

    data = rosa.to_dict()
    assert data["miniSG"] == 3
    assert data["GPmini"] == 20
    assert data["GCmini"] == 17
    assert data["miniW"] == 1
    assert data["miniSV"] == 1
    assert data["oppMini"] == 2
    assert "miniL" not in data


def test_ranking_is_pure_and_idempotent():
    players, rounds = _three_way_tie()
    counts = {p.id: p.match_count for p in players}

    first = [row.to_dict() for row in rank(players, rounds)]
    second = [row.to_dict() for row in rank(players, rounds)]

    assert first == second
    assert {p.id: p.match_count for p in players} == counts
    assert all(m.is_scored for r in rounds for m in r.matches)


def test_removed_players_get_no_row():
    anna, bruno, carla, dario = (
        _player(n) for n in ("Anna", "Bruno", "Carla", "Dario")
    )
    rounds = [RoundData(matches=[_match((anna, bruno), (carla, dario), 6, 3)])]

    rows = rank([anna, carla, dario], rounds)

    assert _names(rows) == ["Anna", "Carla", "Dario"]
    assert rows[0].games_for == 6


def test_every_pool_player_gets_a_row():
    anna, bruno = _player("anna"), _player("Bruno")
    rows = rank([bruno, anna], [])

    # Case-insensitive name order
    assert _names(rows) == ["anna", "Bruno"]
    assert all(row.points == 0 for row in rows)


def test_mini_set_balance_splits_equal_mini_game_balance():
    zoe, ben, cat, dan = (_player(n) for n in ("Zoe", "Ben", "Cat", "Dan"))
    history = MatchHistory(
        pairwise={
            ("zoe", "ben"): PairwiseRecord(6, 5),
            ("ben", "zoe"): PairwiseRecord(5, 6),
            ("zoe", "cat"): PairwiseRecord(6, 5),
            ("cat", "zoe"): PairwiseRecord(5, 6),
            ("zoe", "dan"): PairwiseRecord(3, 6),
            ("dan", "zoe"): PairwiseRecord(6, 3),
        }
    )
    rows = [LeaderboardRow(player=p) for p in (ben, cat, dan, zoe)]

    ordered = MiniLeague(rows, history).resolve()

    assert _names(ordered) == ["Dan", "Zoe", "Ben", "Cat"]
    assert ordered[1].mini_game_balance == -1
    assert ordered[1].mini_set_balance == 1
    assert ordered[2].mini_set_balance == -1


def test_find_tied_runs_requires_equal_head_to_head():
    calculator = LeaderboardCalculator()
    a, b, c = _player("A"), _player("B"), _player("C")
    rows = [LeaderboardRow(player=p, wins=1) for p in (a, b, c)]
    history = MatchHistory(head_to_head={("a", "b"): 1})

    assert calculator.find_tied_runs(rows, history) == [(1, 3)]
    assert calculator.find_tied_runs(rows, MatchHistory()) == [(0, 3)]


def test_explain_describes_mini_league_values():
    calculator = LeaderboardCalculator()
    players, rounds = _three_way_tie()
    rows = calculator.rank(players, rounds)

    text = calculator.explain(rows[0])
    assert "Mini-league" in text
    assert "20-17" in text
    assert calculator.explain(LeaderboardRow(player=_player("Solo"))) == ""
