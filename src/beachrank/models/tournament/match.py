"""Match data class."""

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
from typing import Any, Dict, List, Optional

from beachrank.constants import SIDE_A, SIDE_B
from beachrank.exceptions import PlayerNotFoundException
from beachrank.player import Player
from beachrank.type_hints import MaybeSide, Team, TeamSide
from beachrank.utils import generate_id


@dataclass
class Match:
    """A single doubles match between two teams of two.

    Attributes
    ----------
    team_a : list of Player
        The two players of Team A.
    team_b : list of Player
        The two players of Team B.
    games_a : int or None
        Games won by Team A, None until recorded.
    games_b : int or None
        Games won by Team B, None until recorded.
    id : str
        Unique match identifier.
    """

    team_a: Team
    team_b: Team
    games_a: Optional[int] = None
    games_b: Optional[int] = None
    id: str = field(default_factory=lambda: generate_id("Match"))

    @property
    def is_scored(self) -> bool:
        """True once both game counts are present."""
        return self.games_a is not None and self.games_b is not None

    @property
    def winner(self) -> MaybeSide:
        """Winning side, or None while either count is missing or they are level."""
        if not self.is_scored or self.games_a == self.games_b:
            return None
        return SIDE_A if self.games_a > self.games_b else SIDE_B

    @property
    def players(self) -> List[Player]:
        """All four players, Team A first."""
        return list(self.team_a) + list(self.team_b)

    @property
    def player_ids(self) -> List[str]:
        return [p.id for p in self.players]

    def team(self, side: TeamSide) -> Team:
        """Return the players on ``side``."""
        return self.team_a if side == SIDE_A else self.team_b

    def side_of(self, player_id: str) -> MaybeSide:
        """Return which side ``player_id`` plays on, or None if absent."""
        if any(p.id == player_id for p in self.team_a):
            return SIDE_A
        if any(p.id == player_id for p in self.team_b):
            return SIDE_B
        return None

    def games(self, side: TeamSide) -> Optional[int]:
        return self.games_a if side == SIDE_A else self.games_b

    def set_games(self, side: TeamSide, games: Optional[int]) -> None:
        """Store the game count for one side. Validation is the caller's job."""
        if side == SIDE_A:
            self.games_a = games
        else:
            self.games_b = games

    def clear_score(self) -> None:
        self.games_a = None
        self.games_b = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary, players by id."""
        return {
            "id": self.id,
            "team_a": [p.id for p in self.team_a],
            "team_b": [p.id for p in self.team_b],
            "games_a": self.games_a,
            "games_b": self.games_b,
            "winner": self.winner,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], players: Dict[str, Player]) -> "Match":
        """Deserialize match from dictionary.

        Args:
            data: Serialized match
            players: Lookup of every player the match may reference

        Raises:
            PlayerNotFoundException: If a referenced player is not in ``players``
        """

        def resolve(entry: Any) -> Player:
            # older exports embedded whole player records
            player_id = entry["id"] if isinstance(entry, dict) else entry
            try:
                return players[player_id]
            except KeyError:
                raise PlayerNotFoundException(
                    f"Match {data.get('id')} references unknown player {player_id}"
                ) from None

        team_a = data.get("team_a", data.get("teamA", []))
        team_b = data.get("team_b", data.get("teamB", []))
        return cls(
            team_a=[resolve(p) for p in team_a],
            team_b=[resolve(p) for p in team_b],
            games_a=data.get("games_a", data.get("gamesA")),
            games_b=data.get("games_b", data.get("gamesB")),
            id=data.get("id") or generate_id("Match"),
        )
