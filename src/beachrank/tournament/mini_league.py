"""Mini-league tie-break for runs of tied leaderboard rows."""

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

from dataclasses import dataclass
from itertools import groupby
from typing import List, Tuple

from beachrank.tournament.models import LeaderboardRow, MatchHistory


def name_key(row: LeaderboardRow) -> Tuple[str, str, str]:
    """Alphabetical order, case-insensitive first, id as the last resort."""
    return row.name.casefold(), row.name, row.id


@dataclass
class MiniStanding:
    """Record of one tied player against the other members of the run."""

    row: LeaderboardRow
    games_for: int = 0
    games_against: int = 0
    wins: int = 0
    losses: int = 0
    opponents: int = 0

    @property
    def game_balance(self) -> int:
        return self.games_for - self.games_against

    @property
    def set_balance(self) -> int:
        return self.wins - self.losses

    def annotate(self) -> None:
        """Copy the values onto the row, zero stored as None."""
        self.row.mini_set_balance = self.set_balance or None
        self.row.mini_game_balance = self.game_balance or None
        self.row.mini_games_for = self.games_for or None
        self.row.mini_games_against = self.games_against or None
        self.row.mini_wins = self.wins or None
        self.row.mini_losses = self.losses or None
        self.row.mini_opponents = self.opponents or None


class MiniLeague:
    """Reorders a tied run using only games among its members.

    Members are sorted by mini game balance, then, inside groups still
    level on it, by mini set balance. Mini set balance gives each member
    one win or one loss per other member faced, decided by the games
    exchanged between the two; an even record counts as neither. Members
    never faced contribute nothing. Remaining ties fall back to name.
    """

    def __init__(self, rows: List[LeaderboardRow], history: MatchHistory):
        self.rows = rows
        self.history = history

    def _standing(self, row: LeaderboardRow) -> MiniStanding:
        standing = MiniStanding(row=row)
        for other in self.rows:
            if other.id == row.id:
                continue
            record = self.history.pairwise_record(row.id, other.id)
            if record is None:
                continue
            standing.opponents += 1
            standing.games_for += record.games_for
            standing.games_against += record.games_against
            if record.balance > 0:
                standing.wins += 1
            elif record.balance < 0:
                standing.losses += 1
        return standing

    def resolve(self) -> List[LeaderboardRow]:
        """Return the run in mini-league order with annotations attached."""
        standings = [self._standing(row) for row in self.rows]
        standings.sort(key=lambda s: (-s.game_balance, name_key(s.row)))

        ordered: List[MiniStanding] = []
        for _, group in groupby(standings, key=lambda s: s.game_balance):
            members = list(group)
            if len(members) > 1:
                members.sort(key=lambda s: (-s.set_balance, name_key(s.row)))
            ordered.extend(members)

        for standing in ordered:
            standing.annotate()
        return [standing.row for standing in ordered]
