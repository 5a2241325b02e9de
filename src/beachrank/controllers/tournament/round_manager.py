"""Round management for play sessions.

This module handles round generation, round history and the undo/regenerate
workflow used when a freshly generated round is discarded before play.
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

import random
from typing import Any, Dict, Iterable, List, Optional, Tuple

from beachrank.models.tournament import Match, RoundData
from beachrank.pairing import generate_round, revert_round_statistics
from beachrank.player import Player
from beachrank.utils import setup_logger

logger = setup_logger(__name__)


class RoundManager:
    """Stores generated rounds in order and manages round transitions.

    This class is responsible for:
    - Generating the next round from the current player pool
    - Numbering rounds and keeping the round history
    - Undoing or regenerating the last round while it is unscored
    """

    def __init__(self) -> None:
        self.rounds: List[RoundData] = []

    @property
    def current_round_number(self) -> int:
        """Get the current round number (1-indexed).

        Returns:
            The number of the last round, or 0 if no rounds have been created.
        """
        return len(self.rounds)

    def get_round(self, round_number: int) -> Optional[RoundData]:
        """Get data for a specific round.

        Args:
            round_number: The round number (1-indexed)

        Returns:
            RoundData for the specified round, or None if invalid round number
        """
        if 1 <= round_number <= len(self.rounds):
            return self.rounds[round_number - 1]
        return None

    def find_match(self, match_id: str) -> Optional[Tuple[RoundData, Match]]:
        """Locate a match by id in any round, newest round first."""
        for round_data in reversed(self.rounds):
            match = round_data.get_match(match_id)
            if match is not None:
                return round_data, match
        return None

    def create_next_round(
        self,
        players: Iterable[Player],
        courts: int,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> RoundData:
        """Generate, number and store the next round.

        Args:
            players: Player pool, inactive players are skipped
            courts: Number of matches to generate
            seed: Optional seed for reproducible tie ordering
            rng: Optional random generator, takes precedence over ``seed``

        Returns:
            The stored RoundData

        Raises:
            InsufficientPlayersException: If the active players cannot fill the courts
            InvalidCourtCountException: If courts is not a positive integer
        """
        round_number = len(self.rounds) + 1
        logger.info(f"Creating round {round_number} on {courts} court(s)")

        round_data = generate_round(players, courts, seed=seed, rng=rng)
        round_data.round_number = round_number
        self.rounds.append(round_data)
        return round_data

    def undo_last_round(self) -> bool:
        """Remove the last round if no score has been entered for it.

        Match counts and partner history of its players are reverted.

        Returns:
            True if successful, False if no rounds or the last round has scores
        """
        if not self.rounds:
            logger.warning("Cannot undo: no rounds exist")
            return False

        last_round = self.rounds[-1]
        if last_round.has_scores:
            logger.warning(
                f"Cannot undo round {last_round.round_number}: scores were entered"
            )
            return False

        revert_round_statistics(last_round)
        self.rounds.pop()
        logger.info(f"Undid round {last_round.round_number}")
        return True

    def regenerate_last_round(
        self,
        players: Iterable[Player],
        courts: int,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> Optional[RoundData]:
        """Replace the last unscored round with a freshly generated one.

        If generation fails the last round stays undone and the error
        propagates.

        Returns:
            The new RoundData, or None if the last round could not be undone
        """
        if not self.undo_last_round():
            return None
        return self.create_next_round(players, courts, seed=seed, rng=rng)

    def clear(self) -> None:
        """Forget every round. Player statistics are left to the caller."""
        self.rounds.clear()
        logger.info("Cleared all rounds")

    def to_dict(self) -> Dict[str, Any]:
        return {"rounds": [r.to_dict() for r in self.rounds]}

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], players_by_id: Dict[str, Player]
    ) -> "RoundManager":
        """Rebuild the round history.

        Args:
            data: Output of :meth:`to_dict`
            players_by_id: Every player the rounds reference

        Raises:
            PlayerNotFoundException: If a match references an unknown player
        """
        manager = cls()
        for index, entry in enumerate(data.get("rounds", []), start=1):
            round_data = RoundData.from_dict(entry, players_by_id)
            if round_data.round_number is None:
                round_data.round_number = index
            manager.rounds.append(round_data)
        return manager
