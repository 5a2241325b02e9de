"""SessionConfig data class."""

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

from dataclasses import dataclass
from typing import Any, Dict, Optional

from beachrank.constants import DEFAULT_COURTS
from beachrank.exceptions import InvalidConfigurationException
from beachrank.utils.validation import validate_courts


@dataclass
class SessionConfig:
    """Session configuration settings.

    Attributes
    ----------
    name : str
        Session name.
    courts : int
        Number of courts, i.e. matches per generated round.
    seed : int or None
        Seed for reproducible round generation. When None, players with the
        same match count at the same level are taken in registration order.
    """

    name: str = "Untitled Session"
    courts: int = DEFAULT_COURTS
    seed: Optional[int] = None

    def __post_init__(self):
        result = validate_courts(self.courts)
        if not result.is_valid:
            raise InvalidConfigurationException(result.error_message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "courts": self.courts,
            "seed": self.seed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            name=data.get("name", "Untitled Session"),
            courts=data.get("courts", DEFAULT_COURTS),
            seed=data.get("seed"),
        )
