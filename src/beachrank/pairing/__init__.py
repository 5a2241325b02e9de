"""Round generation for doubles sessions."""

from beachrank.pairing.doubles import (
    apply_round_statistics,
    generate_round,
    level_composition,
    revert_round_statistics,
)

__all__ = [
    "generate_round",
    "apply_round_statistics",
    "revert_round_statistics",
    "level_composition",
]
