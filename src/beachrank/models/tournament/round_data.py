"""Data model for a round of concurrent matches."""

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
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from dateutil import parser as date_parser

from beachrank.models.tournament.match import Match
from beachrank.player import Player
from beachrank.utils import generate_id


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class RoundData:
    """Container for all matches of a single round.

    Attributes
    ----------
    matches : list of Match
        Matches played concurrently, one per court.
    round_number : int or None
        Position in the session (1-indexed), assigned when the round is stored.
    id : str
        Unique round identifier.
    created_at : datetime
        When the round was generated (UTC).
    """

    matches: List[Match] = field(default_factory=list)
    round_number: Optional[int] = None
    id: str = field(default_factory=lambda: generate_id("Round"))
    created_at: datetime = field(default_factory=_now)

    @property
    def player_ids(self) -> List[str]:
        """Ids of every player in the round, in match order."""
        return [pid for match in self.matches for pid in match.player_ids]

    @property
    def has_scores(self) -> bool:
        """True if any match has at least one game count recorded."""
        return any(
            m.games_a is not None or m.games_b is not None for m in self.matches
        )

    @property
    def is_completed(self) -> bool:
        """True once every match has both game counts."""
        return bool(self.matches) and all(m.is_scored for m in self.matches)

    def get_match(self, match_id: str) -> Optional[Match]:
        for match in self.matches:
            if match.id == match_id:
                return match
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round data to dictionary."""
        return {
            "id": self.id,
            "round_number": self.round_number,
            "created_at": self.created_at.isoformat(),
            "matches": [m.to_dict() for m in self.matches],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], players: Dict[str, Player]) -> "RoundData":
        """Deserialize round data from dictionary.

        Args:
            data: Serialized round
            players: Lookup of every player the round's matches reference
        """
        created_at = data.get("created_at")
        return cls(
            matches=[Match.from_dict(m, players) for m in data.get("matches", [])],
            round_number=data.get("round_number"),
            id=data.get("id") or generate_id("Round"),
            created_at=date_parser.isoparse(created_at) if created_at else _now(),
        )
