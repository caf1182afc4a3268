"""Tournament format data classes."""

# Volley Pairing
# Copyright (C) 2025  Volley Pairing developers
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
from typing import Any, ClassVar, Dict, Union

from volleypairing.constants import (
    DEFAULT_NUM_POOLS,
    DEFAULT_POINTS,
    DEFAULT_QUALIFIERS_PER_POOL,
    DEFAULT_SETS,
    DEFAULT_TIE_BREAK_POINTS,
    MODE_CLASSIC,
    MODE_KOTH,
)
from volleypairing.exceptions import InvalidConfigurationException


def _require_positive(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidConfigurationException(
            f"{field_name} must be a positive integer: {value!r}"
        )
    return value


@dataclass
class MatchConfig:
    """Match length settings.

    Attributes
    ----------
    sets : int
        Number of sets played.
    points : int
        Points needed to win a set.
    win_by_two : bool
        Whether a set must be won by a margin of two or more.
    """

    sets: int = DEFAULT_SETS
    points: int = DEFAULT_POINTS
    win_by_two: bool = True

    def __post_init__(self) -> None:
        _require_positive(self.sets, "sets")
        _require_positive(self.points, "points")

    def to_dict(self) -> Dict[str, Any]:
        return {"sets": self.sets, "points": self.points, "win_by_two": self.win_by_two}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchConfig":
        return cls(
            sets=data.get("sets", DEFAULT_SETS),
            points=data.get("points", DEFAULT_POINTS),
            win_by_two=data.get("win_by_two", True),
        )


@dataclass
class PlayoffConfig(MatchConfig):
    """Match settings for elimination play, with a tie-break set target."""

    tie_break_points: int = DEFAULT_TIE_BREAK_POINTS

    def __post_init__(self) -> None:
        super().__post_init__()
        _require_positive(self.tie_break_points, "tie_break_points")

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["tie_break_points"] = self.tie_break_points
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlayoffConfig":
        return cls(
            sets=data.get("sets", DEFAULT_SETS),
            points=data.get("points", DEFAULT_POINTS),
            win_by_two=data.get("win_by_two", True),
            tie_break_points=data.get("tie_break_points", DEFAULT_TIE_BREAK_POINTS),
        )


@dataclass
class ClassicFormat:
    """Pools followed by an elimination bracket.

    Attributes:
        num_pools: Number of round-robin pools
        qualifiers_per_pool: Teams advancing from each pool
        pool_config: Match settings for pool play
        playoff_config: Match settings for elimination play
    """

    mode: ClassVar[str] = MODE_CLASSIC

    num_pools: int = DEFAULT_NUM_POOLS
    qualifiers_per_pool: int = DEFAULT_QUALIFIERS_PER_POOL
    pool_config: MatchConfig = field(default_factory=MatchConfig)
    playoff_config: PlayoffConfig = field(default_factory=PlayoffConfig)

    def __post_init__(self) -> None:
        _require_positive(self.num_pools, "num_pools")
        _require_positive(self.qualifiers_per_pool, "qualifiers_per_pool")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode,
            "num_pools": self.num_pools,
            "qualifiers_per_pool": self.qualifiers_per_pool,
            "pool_config": self.pool_config.to_dict(),
            "playoff_config": self.playoff_config.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClassicFormat":
        # A zero or missing count falls back to the default
        return cls(
            num_pools=data.get("num_pools") or DEFAULT_NUM_POOLS,
            qualifiers_per_pool=data.get("qualifiers_per_pool")
            or DEFAULT_QUALIFIERS_PER_POOL,
            pool_config=MatchConfig.from_dict(data.get("pool_config", {})),
            playoff_config=PlayoffConfig.from_dict(data.get("playoff_config", {})),
        )


@dataclass
class KothFormat:
    """King of the Hill: individual standings over reshuffled rounds."""

    mode: ClassVar[str] = MODE_KOTH

    match_config: MatchConfig = field(default_factory=MatchConfig)

    def to_dict(self) -> Dict[str, Any]:
        return {"mode": self.mode, "match_config": self.match_config.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KothFormat":
        return cls(match_config=MatchConfig.from_dict(data.get("match_config", {})))


TournamentFormat = Union[ClassicFormat, KothFormat]

_FORMATS = {MODE_CLASSIC: ClassicFormat, MODE_KOTH: KothFormat}


def format_from_dict(data: Dict[str, Any]) -> TournamentFormat:
    """Deserialize a tournament format, dispatching on its ``mode`` tag.

    Raises:
        InvalidConfigurationException: If the mode is missing or unknown
    """
    if not isinstance(data, dict):
        raise InvalidConfigurationException(
            f"Tournament format must be a mapping: {data!r}"
        )
    mode = data.get("mode")
    format_cls = _FORMATS.get(mode)
    if format_cls is None:
        raise InvalidConfigurationException(
            f"Unknown tournament mode {mode!r}; expected one of {', '.join(_FORMATS)}"
        )
    return format_cls.from_dict(data)
