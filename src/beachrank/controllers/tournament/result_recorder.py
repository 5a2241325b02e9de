"""Score entry for generated matches."""

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

from typing import Any, Optional

from beachrank.constants import SIDES
from beachrank.exceptions import (
    GamesValidationException,
    InvalidResultException,
    MatchNotFoundException,
)
from beachrank.models.tournament import Match, RoundData
from beachrank.utils import setup_logger
from beachrank.utils.validation import validate_games_strict

logger = setup_logger(__name__)


class ResultRecorder:
    """Handles recording and validating match scores.

    This class is responsible for:
    - Locating the match a score belongs to
    - Validating game counts before they are stored
    - Rejecting finished scores without a winner

    The winner is never stored; it is derived from the game counts.
    """

    def _get_match(self, round_data: RoundData, match_id: str) -> Match:
        match = round_data.get_match(match_id)
        if match is None:
            raise MatchNotFoundException(
                f"Match {match_id} not found in round {round_data.round_number}"
            )
        return match

    def _validate_games(self, games: Any) -> Optional[int]:
        try:
            return validate_games_strict(games)
        except GamesValidationException as e:
            raise InvalidResultException(str(e)) from e

    def set_games(
        self, round_data: RoundData, match_id: str, side: str, games: Any
    ) -> Match:
        """Record one side's game count; ``None`` clears it.

        Raises:
            MatchNotFoundException: If the match is not in the round
            InvalidResultException: For an unknown side or invalid count
        """
        if side not in SIDES:
            raise InvalidResultException(f"Unknown side {side!r}, expected A or B")

        match = self._get_match(round_data, match_id)
        match.set_games(side, self._validate_games(games))

        logger.debug(
            f"Round {round_data.round_number} match {match_id}: "
            f"{match.games_a}-{match.games_b}, winner {match.winner}"
        )
        return match

    def record_score(
        self, round_data: RoundData, match_id: str, games_a: Any, games_b: Any
    ) -> Match:
        """Record a finished match score for both sides at once.

        Raises:
            MatchNotFoundException: If the match is not in the round
            InvalidResultException: If a count is invalid or both are equal
        """
        match = self._get_match(round_data, match_id)
        games_a = self._validate_games(games_a)
        games_b = self._validate_games(games_b)

        if games_a is None or games_b is None:
            raise InvalidResultException("A finished score needs both game counts")
        if games_a == games_b:
            raise InvalidResultException(
                f"Score {games_a}-{games_b} has no winner; matches cannot be drawn"
            )

        match.games_a = games_a
        match.games_b = games_b
        logger.info(
            f"Recorded {games_a}-{games_b} for match {match_id} "
            f"in round {round_data.round_number}"
        )
        return match

    def clear_score(self, round_data: RoundData, match_id: str) -> Match:
        """Remove any recorded score from a match.

        Raises:
            MatchNotFoundException: If the match is not in the round
        """
        match = self._get_match(round_data, match_id)
        match.clear_score()
        logger.info(f"Cleared score of match {match_id}")
        return match
