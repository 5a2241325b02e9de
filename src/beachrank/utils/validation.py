"""Validation utilities for BeachRank.

This module provides reusable validation functions with consistent error handling.
"""

from typing import Any, Optional

from beachrank.constants import MIN_COURTS, MIN_LEVEL
from beachrank.exceptions import (
    GamesValidationException,
    InvalidCourtCountException,
    LevelValidationException,
    NameValidationException,
)


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


def _is_plain_int(value: Any) -> bool:
    # bool is a subclass of int but never a sensible count
    return isinstance(value, int) and not isinstance(value, bool)


# ========== Name Validation ==========


def validate_name(name: Optional[str]) -> ValidationResult:
    """Validate a player display name.

    Surrounding whitespace is stripped and inner runs of whitespace are
    collapsed to a single space.

    Args:
        name: Name to validate

    Returns:
        ValidationResult with validation status and cleaned name

    Example:
        >>> result = validate_name("  Ana   Souza ")
        >>> result.sanitized_value
        'Ana Souza'
    """
    if name is None or not str(name).strip():
        return ValidationResult(is_valid=False, error_message="Player name is required")

    cleaned = " ".join(str(name).split())
    return ValidationResult(is_valid=True, sanitized_value=cleaned)


def validate_name_strict(name: Optional[str]) -> str:
    """Validate a name and raise exception if invalid.

    Raises:
        NameValidationException: If name is empty
    """
    result = validate_name(name)
    if not result.is_valid:
        raise NameValidationException(result.error_message)
    return result.sanitized_value


# ========== Level Validation ==========


def validate_level(level: Any) -> ValidationResult:
    """Validate a skill level.

    Levels are positive integers, higher meaning stronger. Integral strings
    such as ``"3"`` are accepted and converted.

    Args:
        level: Level to validate

    Returns:
        ValidationResult with the level as an int
    """
    if level is None:
        return ValidationResult(is_valid=False, error_message="Level is required")

    if isinstance(level, str):
        try:
            level = int(level.strip())
        except ValueError:
            return ValidationResult(
                is_valid=False,
                error_message=f"Level must be a whole number: {level!r}",
            )

    if not _is_plain_int(level):
        return ValidationResult(
            is_valid=False,
            error_message=f"Level must be a whole number: {level!r}",
        )

    if level < MIN_LEVEL:
        return ValidationResult(
            is_valid=False,
            error_message=f"Level must be at least {MIN_LEVEL}: {level}",
        )

    return ValidationResult(is_valid=True, sanitized_value=level)


def validate_level_strict(level: Any) -> int:
    """Validate a level and raise exception if invalid.

    Raises:
        LevelValidationException: If level is not a positive integer
    """
    result = validate_level(level)
    if not result.is_valid:
        raise LevelValidationException(result.error_message)
    return result.sanitized_value


# ========== Games Validation ==========


def validate_games(games: Any) -> ValidationResult:
    """Validate a team's game count for a match.

    ``None`` is valid and means "not recorded yet".

    Args:
        games: Number of games won by one team

    Returns:
        ValidationResult with the count (or None)
    """
    if games is None:
        return ValidationResult(is_valid=True, sanitized_value=None)

    if not _is_plain_int(games):
        return ValidationResult(
            is_valid=False,
            error_message=f"Games must be a whole number: {games!r}",
        )

    if games < 0:
        return ValidationResult(
            is_valid=False,
            error_message=f"Games cannot be negative: {games}",
        )

    return ValidationResult(is_valid=True, sanitized_value=games)


def validate_games_strict(games: Any) -> Optional[int]:
    """Validate a game count and raise exception if invalid.

    Raises:
        GamesValidationException: If games is negative or not an integer
    """
    result = validate_games(games)
    if not result.is_valid:
        raise GamesValidationException(result.error_message)
    return result.sanitized_value


# ========== Court Validation ==========


def validate_courts(courts: Any) -> ValidationResult:
    """Validate the number of courts available for a round."""
    if not _is_plain_int(courts):
        return ValidationResult(
            is_valid=False,
            error_message=f"Courts must be a whole number: {courts!r}",
        )

    if courts < MIN_COURTS:
        return ValidationResult(
            is_valid=False,
            error_message=f"At least {MIN_COURTS} court is required, got {courts}",
        )

    return ValidationResult(is_valid=True, sanitized_value=courts)


def validate_courts_strict(courts: Any) -> int:
    """Validate a court count and raise exception if invalid.

    Raises:
        InvalidCourtCountException: If courts is not a positive integer
    """
    result = validate_courts(courts)
    if not result.is_valid:
        raise InvalidCourtCountException(result.error_message)
    return result.sanitized_value
