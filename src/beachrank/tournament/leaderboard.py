"""Leaderboard calculation.

Standings are derived from the scored matches alone: points, set balance and
game balance, head-to-head between two players, and a one-level mini-league
for runs of players that are still level after all of that.
"""

# BeachRank
# Copyright (C) 2025  BeachRank developers
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

import functools
from typing import Iterable, List, Tuple

from beachrank.constants import SIDE_A, SIDE_B
from beachrank.models.tournament import RoundData
from beachrank.player import Player
from beachrank.tournament.mini_league import MiniLeague, name_key
from beachrank.tournament.models import (
    LeaderboardRow,
    MatchHistory,
    PairwiseRecord,
    PlayerStat,
)
from beachrank.utils import setup_logger

logger = setup_logger(__name__)


class LeaderboardCalculator:
    """Builds ranked leaderboard rows from a round history.

    Ordering:
    1. Points (3 per win)
    2. Set balance (wins minus losses)
    3. Game balance (games won minus games lost)
    4. Head-to-head between the two players compared
    5. Name, case-insensitive first

    Consecutive rows equal on 1-4 form a tied run that is reordered by a
    mini-league restricted to the run's members (see :class:`MiniLeague`).
    """

    def aggregate(self, rounds: Iterable[RoundData]) -> MatchHistory:
        """Collect totals, head-to-head tallies and pairwise game records.

        Unscored matches are skipped. Drawn matches only feed the pairwise
        game records.
        """
        history = MatchHistory()
        skipped = 0
        drawn = 0

        for round_data in rounds:
            for match in round_data.matches:
                if not match.is_scored:
                    skipped += 1
                    continue

                for a in match.team_a:
                    for b in match.team_b:
                        forward = history.pairwise.setdefault(
                            (a.id, b.id), PairwiseRecord()
                        )
                        forward.games_for += match.games_a
                        forward.games_against += match.games_b
                        backward = history.pairwise.setdefault(
                            (b.id, a.id), PairwiseRecord()
                        )
                        backward.games_for += match.games_b
                        backward.games_against += match.games_a

                winning_side = match.winner
                if winning_side is None:
                    drawn += 1
                    continue

                losing_side = SIDE_B if winning_side == SIDE_A else SIDE_A
                winners = match.team(winning_side)
                losers = match.team(losing_side)
                winner_games = match.games(winning_side)
                loser_games = match.games(losing_side)

                for player in winners:
                    stat = history.stats.setdefault(player.id, PlayerStat())
                    stat.wins += 1
                    stat.games_for += winner_games
                    stat.games_against += loser_games
                for player in losers:
                    stat = history.stats.setdefault(player.id, PlayerStat())
                    stat.losses += 1
                    stat.games_for += loser_games
                    stat.games_against += winner_games

                for winner in winners:
                    for loser in losers:
                        key = (winner.id, loser.id)
                        history.head_to_head[key] = (
                            history.head_to_head.get(key, 0) + 1
                        )

        if skipped or drawn:
            logger.debug(f"Skipped {skipped} unscored and {drawn} drawn match(es)")
        return history

    def rank(
        self, players: Iterable[Player], rounds: Iterable[RoundData]
    ) -> List[LeaderboardRow]:
        """Return one row per player, best first.

        Neither the players nor the rounds are modified.
        """
        history = self.aggregate(rounds)
        rows = [LeaderboardRow.from_stat(p, history.stat(p.id)) for p in players]

        rows.sort(
            key=functools.cmp_to_key(
                lambda r1, r2: self._compare_rows(r1, r2, history)
            ),
            reverse=True,
        )

        for start, end in self.find_tied_runs(rows, history):
            logger.debug(
                f"Mini-league for {end - start} tied players: "
                f"{', '.join(r.name for r in rows[start:end])}"
            )
            rows[start:end] = MiniLeague(rows[start:end], history).resolve()

        return rows

    def _compare_rows(
        self, r1: LeaderboardRow, r2: LeaderboardRow, history: MatchHistory
    ) -> int:
        """Compare two rows for standings order.

        Returns:
            1 if r1 ranks higher, -1 if r2 ranks higher, 0 if equal
        """
        if r1.primary_key != r2.primary_key:
            return 1 if r1.primary_key > r2.primary_key else -1

        r1_wins = history.head_to_head_wins(r1.id, r2.id)
        r2_wins = history.head_to_head_wins(r2.id, r1.id)
        if r1_wins != r2_wins:
            return 1 if r1_wins > r2_wins else -1

        # Sorted descending, so the smaller name ranks higher
        k1, k2 = name_key(r1), name_key(r2)
        if k1 != k2:
            return 1 if k1 < k2 else -1

        return 0

    def _is_tied(
        self, r1: LeaderboardRow, r2: LeaderboardRow, history: MatchHistory
    ) -> bool:
        return r1.primary_key == r2.primary_key and history.head_to_head_wins(
            r1.id, r2.id
        ) == history.head_to_head_wins(r2.id, r1.id)

    def find_tied_runs(
        self, rows: List[LeaderboardRow], history: MatchHistory
    ) -> List[Tuple[int, int]]:
        """Half-open ``(start, end)`` index ranges of tied runs of two or more rows."""
        runs: List[Tuple[int, int]] = []
        start = 0
        for index in range(1, len(rows) + 1):
            if index < len(rows) and self._is_tied(
                rows[index - 1], rows[index], history
            ):
                continue
            if index - start >= 2:
                runs.append((start, index))
            start = index
        return runs

    def explain(self, row: LeaderboardRow) -> str:
        """Tooltip text describing a row's mini-league values."""
        if not row.in_mini_league:
            return ""

        lines = ["Mini-league among tied players"]
        lines.append(
            f"Opponents faced: {row.mini_opponents or 0}, "
            f"won {row.mini_wins or 0}, lost {row.mini_losses or 0}"
        )
        lines.append(f"Mini set balance: {row.mini_set_balance or 0:+d}")
        lines.append(
            f"Games {row.mini_games_for or 0}-{row.mini_games_against or 0} "
            f"(balance {row.mini_game_balance or 0:+d})"
        )
        return "\n".join(lines)


def rank(
    players: Iterable[Player], rounds: Iterable[RoundData]
) -> List[LeaderboardRow]:
    """Rank ``players`` from the scored matches in ``rounds``."""
    return LeaderboardCalculator().rank(players, rounds)
