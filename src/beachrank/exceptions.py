"""Exceptions for use in BeachRank"""

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


# ========== Base Application Exception ==========


class BeachRankException(Exception):
    """Base exception for all BeachRank errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Pairing Exceptions ==========


class PairingException(BeachRankException):
    """Base exception for round generation errors."""

    pass


class InsufficientPlayersException(PairingException):
    """Raised when there are not enough active players to fill every court.

    Attributes:
        required: Number of active players needed (courts * 4)
        available: Number of active players supplied
    """

    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(
            f"Not enough active players: {available} available, "
            f"{required} needed to fill every court"
        )


class InvalidPairingException(PairingException):
    """Raised when a generated or supplied round breaks a pairing invariant."""

    pass


# ========== Session Exceptions ==========


class SessionException(BeachRankException):
    """Base exception for session-related errors."""

    pass


class MatchNotFoundException(SessionException):
    """Raised when a requested match does not exist."""

    pass


# ========== Player Exceptions ==========


class PlayerException(BeachRankException):
    """Base exception for player-related errors."""

    pass


class PlayerNotFoundException(PlayerException):
    """Raised when a requested player cannot be found."""

    pass


class DuplicatePlayerException(PlayerException):
    """Raised when attempting to add a player that already exists."""

    pass


class InvalidPlayerDataException(PlayerException):
    """Raised when player data is invalid or incomplete."""

    pass


# ========== Result Exceptions ==========


class ResultException(BeachRankException):
    """Base exception for score recording errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a score is invalid (e.g., negative games or a drawn match)."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(BeachRankException):
    """Base exception for validation errors."""

    pass


class NameValidationException(ValidationException):
    """Raised when a player name is invalid."""

    pass


class LevelValidationException(ValidationException):
    """Raised when a skill level is invalid."""

    pass


class GamesValidationException(ValidationException):
    """Raised when a game count is invalid."""

    pass


class InvalidCourtCountException(ValidationException):
    """Raised when the number of courts is not a positive integer."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(BeachRankException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
