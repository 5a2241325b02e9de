"""A player in the doubles pool."""

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

from __future__ import annotations

from typing import Any, Dict, Optional

from beachrank.constants import get_level_label
from beachrank.exceptions import InvalidPlayerDataException, ValidationException
from beachrank.utils import generate_id, setup_logger
from beachrank.utils.validation import validate_level_strict, validate_name_strict

logger = setup_logger(__name__)


class Player:
    """Represents a player in the pool.

    Attributes:
        id: Unique identifier for the player
        name: Display name
        level: Skill level, a positive integer where higher is stronger
        is_active: Whether the player is available for the next round
        match_count: Number of generated matches the player has been placed in
        partner_counts: Times paired as teammates, keyed by the partner's id
    """

    def __init__(
        self,
        name: str,
        level: int,
        is_active: bool = True,
        match_count: int = 0,
        partner_counts: Optional[Dict[str, int]] = None,
        player_id: Optional[str] = None,
    ) -> None:
        try:
            self.name: str = validate_name_strict(name)
            self.level: int = validate_level_strict(level)
        except ValidationException as e:
            raise InvalidPlayerDataException(str(e)) from e

        self.id: str = player_id or generate_id(self.__class__.__name__)
        self.is_active: bool = bool(is_active)

        # Statistics owned by the round generator
        self.match_count: int = int(match_count)
        self.partner_counts: Dict[str, int] = dict(partner_counts or {})

    @property
    def level_label(self) -> str:
        """Display label for the player's level (e.g. "BB")."""
        return get_level_label(self.level)

    def partner_count(self, partner_id: str) -> int:
        """How many times this player has been teamed with ``partner_id``."""
        return self.partner_counts.get(partner_id, 0)

    def add_partner(self, partner_id: str) -> None:
        """Record one more round teamed with ``partner_id``."""
        self.partner_counts[partner_id] = self.partner_counts.get(partner_id, 0) + 1

    def remove_partner(self, partner_id: str) -> None:
        """Undo one :meth:`add_partner` call.

        The entry is dropped once it reaches zero so that a generated and then
        discarded round leaves no trace in the history.
        """
        count = self.partner_counts.get(partner_id, 0)
        if count <= 1:
            self.partner_counts.pop(partner_id, None)
            if count == 0:
                logger.debug(
                    f"{self.name} had no partner history with {partner_id} to remove"
                )
        else:
            self.partner_counts[partner_id] = count - 1

    def reset_statistics(self) -> None:
        """Forget all generated matches."""
        self.match_count = 0
        self.partner_counts = {}

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player data to dictionary format.

        Returns:
            Dictionary containing all player data
        """
        return {
            "id": self.id,
            "name": self.name,
            "level": self.level,
            "is_active": self.is_active,
            "match_count": self.match_count,
            "partner_counts": dict(self.partner_counts),
        }

    @classmethod
    def from_dict(cls, player_data: Dict[str, Any]) -> "Player":
        """Create a Player instance from serialized dictionary data.

        Args:
            player_data: Dictionary containing player data

        Returns:
            Player instance with restored state

        Note:
            Handles the camelCase keys written by older exports
            (``active``, ``matchCount``, ``partnerCounts``); missing
            statistics default to a fresh player.
        """
        if "name" not in player_data or "level" not in player_data:
            raise InvalidPlayerDataException(
                f"Player data needs a name and a level: {player_data!r}"
            )

        is_active = player_data.get("is_active", player_data.get("active"))
        match_count = player_data.get("match_count", player_data.get("matchCount"))
        partner_counts = player_data.get(
            "partner_counts", player_data.get("partnerCounts")
        )

        return cls(
            name=player_data["name"],
            level=player_data["level"],
            # older exports only stored inactive players explicitly
            is_active=is_active is not False,
            match_count=match_count or 0,
            partner_counts=partner_counts or {},
            player_id=player_data.get("id"),
        )

    def __repr__(self) -> str:
        """Return string representation for debugging.

        Returns:
            String representation showing name, level and id
        """
        return f"Player(name='{self.name}', level={self.level}, id='{self.id}')"

    def __str__(self) -> str:
        """Return human-readable string representation.

        Returns:
            Player name and level label
        """
        return f"{self.name} ({self.level_label})"
