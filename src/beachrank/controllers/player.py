"""Player pool controller for managing players across a session."""

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

from typing import Any, Dict, List, Optional

from beachrank.constants import PLAYER_SORT_MODES, SORT_ACTIVE, SORT_NAME
from beachrank.exceptions import (
    DuplicatePlayerException,
    InvalidConfigurationException,
    PlayerNotFoundException,
)
from beachrank.player import Player
from beachrank.type_hints import PlayerSortMode
from beachrank.utils import setup_logger

logger = setup_logger(__name__)


class PlayerPool:
    """Registered players of a session, keyed by id in insertion order.

    Players who join late or come back from a break start at the lowest
    match count among active players, so the round generator does not
    seat them ahead of everyone who has been waiting.
    """

    def __init__(self, players: Optional[List[Player]] = None):
        self._players: Dict[str, Player] = {}
        for player in players or []:
            self.add_player(player)

    def __len__(self) -> int:
        return len(self._players)

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._players

    @property
    def players(self) -> List[Player]:
        return list(self._players.values())

    @property
    def active_players(self) -> List[Player]:
        return [p for p in self._players.values() if p.is_active]

    @property
    def by_id(self) -> Dict[str, Player]:
        """Copy of the id -> Player lookup."""
        return dict(self._players)

    def min_active_match_count(self) -> int:
        """Lowest match count among active players, 0 when nobody is active."""
        counts = [p.match_count for p in self.active_players]
        return min(counts) if counts else 0

    def get(self, player_id: str) -> Player:
        try:
            return self._players[player_id]
        except KeyError:
            raise PlayerNotFoundException(f"No player with id {player_id}") from None

    def add(self, name: str, level: int) -> Player:
        """Create and register a new active player.

        Raises:
            InvalidPlayerDataException: If name or level is invalid
        """
        player = Player(name=name, level=level)
        player.match_count = self.min_active_match_count()
        self.add_player(player)
        return player

    def add_player(self, player: Player) -> None:
        """Register an existing Player as is.

        Raises:
            DuplicatePlayerException: If a player with the same id exists
        """
        if player.id in self._players:
            raise DuplicatePlayerException(
                f"Player {player.name} ({player.id}) is already registered"
            )
        self._players[player.id] = player
        logger.info(f"Added player {player} with {player.match_count} match(es)")

    def remove(self, player_id: str) -> Player:
        """Unregister a player. Past matches keep referring to them.

        Raises:
            PlayerNotFoundException: If the id is unknown
        """
        player = self.get(player_id)
        del self._players[player_id]
        logger.info(f"Removed player {player.name}")
        return player

    def toggle_active(self, player_id: str) -> Player:
        """Flip a player's availability.

        Raises:
            PlayerNotFoundException: If the id is unknown
        """
        player = self.get(player_id)
        if player.is_active:
            player.is_active = False
            logger.info(f"{player.name} is taking a break")
            return player

        floor = self.min_active_match_count()
        player.is_active = True
        if player.match_count < floor:
            logger.debug(
                f"Raising {player.name}'s match count from {player.match_count} "
                f"to {floor}"
            )
            player.match_count = floor
        logger.info(f"{player.name} is back in play")
        return player

    def sorted_players(self, sort_by: PlayerSortMode = SORT_ACTIVE) -> List[Player]:
        """Players ordered for display.

        Args:
            sort_by: ``"active"`` (active first, then name), ``"name"``
                (then level, strongest first) or ``"level"`` (strongest
                first, then name)

        Raises:
            InvalidConfigurationException: For an unknown sort mode
        """
        if sort_by not in PLAYER_SORT_MODES:
            raise InvalidConfigurationException(f"Unknown sort mode: {sort_by!r}")

        players = self.players
        if sort_by == SORT_ACTIVE:
            return sorted(players, key=lambda p: (not p.is_active, p.name.casefold()))
        if sort_by == SORT_NAME:
            return sorted(players, key=lambda p: (p.name.casefold(), -p.level))
        # SORT_LEVEL
        return sorted(players, key=lambda p: (-p.level, p.name.casefold()))

    def reset_statistics(self) -> None:
        """Zero every match count and partner history."""
        for player in self._players.values():
            player.reset_statistics()
        logger.info(f"Reset statistics for {len(self._players)} player(s)")

    def clear(self) -> None:
        self._players.clear()

    def to_dict(self) -> Dict[str, Any]:
        return {"players": [p.to_dict() for p in self._players.values()]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlayerPool":
        """Rebuild a pool; accepts ``{"players": [...]}`` or a bare list."""
        entries = data.get("players", []) if isinstance(data, dict) else data
        return cls([Player.from_dict(entry) for entry in entries])
