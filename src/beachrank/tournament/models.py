"""Derived leaderboard records.

Everything here is rebuilt from the round history on every ranking pass and
never stored.
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

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from beachrank.constants import (
    POINTS_PER_LOSS,
    POINTS_PER_WIN,
    ROW_GAME_BALANCE,
    ROW_LOSSES,
    ROW_MINI_GAME_BALANCE,
    ROW_MINI_GAMES_AGAINST,
    ROW_MINI_GAMES_FOR,
    ROW_MINI_LOSSES,
    ROW_MINI_OPPONENTS,
    ROW_MINI_SET_BALANCE,
    ROW_MINI_WINS,
    ROW_POINTS,
    ROW_SET_BALANCE,
    ROW_WINS,
)
from beachrank.player import Player


@dataclass
class PlayerStat:
    """Win/loss and game totals of one player over every scored match."""

    wins: int = 0
    losses: int = 0
    games_for: int = 0
    games_against: int = 0


@dataclass
class PairwiseRecord:
    """Games won and lost by one player while facing another."""

    games_for: int = 0
    games_against: int = 0

    @property
    def balance(self) -> int:
        return self.games_for - self.games_against


@dataclass
class MatchHistory:
    """Everything the ranker aggregates from the scored matches.

    Attributes:
        stats: Per player totals
        head_to_head: (winner id, loser id) -> matches won by the first over the second
        pairwise: (player id, opponent id) -> games exchanged across the net
    """

    stats: Dict[str, PlayerStat] = field(default_factory=dict)
    head_to_head: Dict[Tuple[str, str], int] = field(default_factory=dict)
    pairwise: Dict[Tuple[str, str], PairwiseRecord] = field(default_factory=dict)

    def stat(self, player_id: str) -> PlayerStat:
        return self.stats.get(player_id) or PlayerStat()

    def head_to_head_wins(self, player_id: str, opponent_id: str) -> int:
        """Matches ``player_id`` won against a team containing ``opponent_id``."""
        return self.head_to_head.get((player_id, opponent_id), 0)

    def pairwise_record(
        self, player_id: str, opponent_id: str
    ) -> Optional[PairwiseRecord]:
        """Games of ``player_id`` against ``opponent_id``, None if they never met."""
        return self.pairwise.get((player_id, opponent_id))


@dataclass
class LeaderboardRow:
    """A player with computed standings.

    The ``mini_*`` fields are only filled for members of a run that stayed
    tied after the primary sort, and are left as None when zero.
    """

    player: Player
    wins: int = 0
    losses: int = 0
    games_for: int = 0
    games_against: int = 0

    mini_set_balance: Optional[int] = None
    mini_game_balance: Optional[int] = None
    mini_games_for: Optional[int] = None
    mini_games_against: Optional[int] = None
    mini_wins: Optional[int] = None
    mini_losses: Optional[int] = None
    mini_opponents: Optional[int] = None

    @classmethod
    def from_stat(cls, player: Player, stat: PlayerStat) -> "LeaderboardRow":
        return cls(
            player=player,
            wins=stat.wins,
            losses=stat.losses,
            games_for=stat.games_for,
            games_against=stat.games_against,
        )

    @property
    def id(self) -> str:
        return self.player.id

    @property
    def name(self) -> str:
        return self.player.name

    @property
    def points(self) -> int:
        return self.wins * POINTS_PER_WIN + self.losses * POINTS_PER_LOSS

    @property
    def set_balance(self) -> int:
        return self.wins - self.losses

    @property
    def game_balance(self) -> int:
        return self.games_for - self.games_against

    @property
    def primary_key(self) -> Tuple[int, int, int]:
        """(points, set balance, game balance), the values a tie is judged on."""
        return self.points, self.set_balance, self.game_balance

    @property
    def in_mini_league(self) -> bool:
        return any(
            value is not None
            for value in (
                self.mini_set_balance,
                self.mini_game_balance,
                self.mini_games_for,
                self.mini_games_against,
                self.mini_wins,
                self.mini_losses,
                self.mini_opponents,
            )
        )

    def to_dict(self) -> Dict[str, Any]:
        """Player fields plus standings; mini-league keys only when set."""
        data = self.player.to_dict()
        data.update(
            {
                ROW_POINTS: self.points,
                ROW_SET_BALANCE: self.set_balance,
                ROW_GAME_BALANCE: self.game_balance,
                ROW_WINS: self.wins,
                ROW_LOSSES: self.losses,
            }
        )
        mini = {
            ROW_MINI_SET_BALANCE: self.mini_set_balance,
            ROW_MINI_GAME_BALANCE: self.mini_game_balance,
            ROW_MINI_GAMES_FOR: self.mini_games_for,
            ROW_MINI_GAMES_AGAINST: self.mini_games_against,
            ROW_MINI_WINS: self.mini_wins,
            ROW_MINI_LOSSES: self.mini_losses,
            ROW_MINI_OPPONENTS: self.mini_opponents,
        }
        data.update({key: value for key, value in mini.items() if value is not None})
        return data
