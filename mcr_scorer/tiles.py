"""
MCR Mahjong Tiles

Defines the tile value type used by the scorer:
- 9 Characters (万, "m"), 9 Bamboos (条, "s"), 9 Dots (筒, "p")
- 4 Winds (东南西北) and 3 Dragons (中发白)
- 8 Flowers (花), scored as flat bonus points only

Every tile has a canonical description ("1m", "9p", "E", "RD", "F3").
Equality, hashing and ordering all go through that description.
"""

import logging
import re
from enum import IntEnum
from dataclasses import dataclass
from typing import Iterable, List
import numpy as np

logger = logging.getLogger(__name__)


class TileSuit(IntEnum):
    """Tile suits in MCR Mahjong"""
    CHARACTERS = 0  # 万 (Wan) - Numbers 1-9
    BAMBOOS = 1     # 条 (Tiao) - Numbers 1-9
    DOTS = 2        # 筒 (Tong) - Numbers 1-9
    WINDS = 3       # 风 (Feng) - East, South, West, North
    DRAGONS = 4     # 箭 (Jian) - Red, Green, White
    FLOWERS = 5     # 花 (Hua) - Bonus tiles 1-8


class WindType(IntEnum):
    """Wind tile types"""
    EAST = 0   # 东
    SOUTH = 1  # 南
    WEST = 2   # 西
    NORTH = 3  # 北


class DragonType(IntEnum):
    """Dragon tile types"""
    RED = 0    # 中 (Zhong)
    GREEN = 1  # 发 (Fa)
    WHITE = 2  # 白 (Bai)


NUMBERED_SUITS = (TileSuit.CHARACTERS, TileSuit.BAMBOOS, TileSuit.DOTS)

SUIT_LETTERS = {
    TileSuit.CHARACTERS: "m",
    TileSuit.BAMBOOS: "s",
    TileSuit.DOTS: "p",
}
WIND_LETTERS = ("E", "S", "W", "N")
DRAGON_CODES = ("RD", "GD", "WD")

# Number of distinct non-bonus tile kinds
NUM_TILE_TYPES = 34
NUM_FLOWERS = 8
COPIES_PER_TYPE = 4

# Tiles that look the same upside down (All Reversible / 推不倒)
_REVERSIBLE_DOTS = (1, 2, 3, 4, 5, 8, 9)
_REVERSIBLE_BAMBOOS = (2, 4, 5, 6, 8, 9)
_GREEN_BAMBOOS = (2, 3, 4, 6, 8)


class TileParseError(ValueError):
    """Raised when a tile token cannot be understood."""


@dataclass(frozen=True, eq=False)
class Tile:
    """
    Represents a single Mahjong tile kind.

    Attributes:
        suit: The suit of the tile (Characters, Bamboos, Dots, Winds, Dragons, Flowers)
        value: 1-9 for numbered suits, 0-3 for winds, 0-2 for dragons, 1-8 for flowers
    """
    suit: TileSuit
    value: int

    def __post_init__(self):
        """Validate tile values"""
        if self.suit in NUMBERED_SUITS:
            if not 1 <= self.value <= 9:
                raise ValueError(f"Numbered suits must have value 1-9, got {self.value}")
        elif self.suit == TileSuit.WINDS:
            if not 0 <= self.value <= 3:
                raise ValueError(f"Wind tiles must have value 0-3, got {self.value}")
        elif self.suit == TileSuit.DRAGONS:
            if not 0 <= self.value <= 2:
                raise ValueError(f"Dragon tiles must have value 0-2, got {self.value}")
        elif self.suit == TileSuit.FLOWERS:
            if not 1 <= self.value <= NUM_FLOWERS:
                raise ValueError(f"Flower tiles must have value 1-{NUM_FLOWERS}, got {self.value}")

    @property
    def description(self) -> str:
        """Canonical description: "5m", "E", "WD", "F2"."""
        if self.suit in NUMBERED_SUITS:
            return f"{self.value}{SUIT_LETTERS[self.suit]}"
        if self.suit == TileSuit.WINDS:
            return WIND_LETTERS[self.value]
        if self.suit == TileSuit.DRAGONS:
            return DRAGON_CODES[self.value]
        return f"F{self.value}"

    @property
    def is_suited(self) -> bool:
        return self.suit in NUMBERED_SUITS

    @property
    def is_bonus(self) -> bool:
        """Flowers are bonus tiles and never part of the hand structure"""
        return self.suit == TileSuit.FLOWERS

    @property
    def is_wind(self) -> bool:
        return self.suit == TileSuit.WINDS

    @property
    def is_dragon(self) -> bool:
        return self.suit == TileSuit.DRAGONS

    @property
    def is_honor(self) -> bool:
        """Check if tile is an honor tile (Wind or Dragon)"""
        return self.suit in (TileSuit.WINDS, TileSuit.DRAGONS)

    @property
    def is_terminal(self) -> bool:
        """Check if tile is a terminal (1 or 9 of numbered suits)"""
        return self.is_suited and self.value in (1, 9)

    @property
    def is_terminal_or_honor(self) -> bool:
        return self.is_terminal or self.is_honor

    @property
    def is_simple(self) -> bool:
        """Check if tile is a simple (2-8 of numbered suits)"""
        return self.is_suited and 2 <= self.value <= 8

    @property
    def is_green(self) -> bool:
        """Check if tile is a green tile (for All Green pattern)"""
        if self.suit == TileSuit.BAMBOOS:
            return self.value in _GREEN_BAMBOOS
        return self.suit == TileSuit.DRAGONS and self.value == DragonType.GREEN

    @property
    def is_reversible(self) -> bool:
        """Check if tile is point-symmetric (for Reversible Tiles pattern)"""
        if self.suit == TileSuit.DOTS:
            return self.value in _REVERSIBLE_DOTS
        if self.suit == TileSuit.BAMBOOS:
            return self.value in _REVERSIBLE_BAMBOOS
        return self.suit == TileSuit.DRAGONS and self.value == DragonType.WHITE

    @property
    def tile_index(self) -> int:
        """
        Get unique index for this tile type (0-33).
        Flowers have no index; they never enter a count array.
        """
        if self.suit == TileSuit.CHARACTERS:
            return self.value - 1  # 0-8
        elif self.suit == TileSuit.BAMBOOS:
            return 9 + self.value - 1  # 9-17
        elif self.suit == TileSuit.DOTS:
            return 18 + self.value - 1  # 18-26
        elif self.suit == TileSuit.WINDS:
            return 27 + self.value  # 27-30
        elif self.suit == TileSuit.DRAGONS:
            return 31 + self.value  # 31-33
        raise ValueError(f"Bonus tile {self.description} has no tile index")

    def __eq__(self, other) -> bool:
        if not isinstance(other, Tile):
            return NotImplemented
        return self.description == other.description

    def __hash__(self) -> int:
        return hash(self.description)

    def __lt__(self, other) -> bool:
        if not isinstance(other, Tile):
            return NotImplemented
        return self.description < other.description

    def __repr__(self) -> str:
        return f"Tile({self.description})"

    def __str__(self) -> str:
        """Human-readable string representation"""
        if self.suit == TileSuit.CHARACTERS:
            return f"{self.value}万"
        elif self.suit == TileSuit.BAMBOOS:
            return f"{self.value}条"
        elif self.suit == TileSuit.DOTS:
            return f"{self.value}筒"
        elif self.suit == TileSuit.WINDS:
            return "东南西北"[self.value]
        elif self.suit == TileSuit.DRAGONS:
            return "中发白"[self.value]
        return f"花{self.value}"

    @classmethod
    def from_index(cls, tile_index: int) -> 'Tile':
        """Create a tile from its type index (0-33)."""
        if not 0 <= tile_index < NUM_TILE_TYPES:
            raise ValueError(f"Tile index must be 0-{NUM_TILE_TYPES - 1}, got {tile_index}")
        if tile_index < 9:
            return cls(TileSuit.CHARACTERS, tile_index + 1)
        elif tile_index < 18:
            return cls(TileSuit.BAMBOOS, tile_index - 9 + 1)
        elif tile_index < 27:
            return cls(TileSuit.DOTS, tile_index - 18 + 1)
        elif tile_index < 31:
            return cls(TileSuit.WINDS, tile_index - 27)
        else:
            return cls(TileSuit.DRAGONS, tile_index - 31)

    @classmethod
    def from_string(cls, s: str) -> 'Tile':
        """
        Create tile from its description.

        Args:
            s: "1m".."9m", "1s".."9s", "1p".."9p", "E"/"S"/"W"/"N",
               "RD"/"GD"/"WD" or "F1".."F8" (case-insensitive)
        """
        token = s.strip()
        upper = token.upper()

        match = re.fullmatch(r"([1-9])([MSP])", upper)
        if match:
            value, letter = int(match.group(1)), match.group(2).lower()
            for suit, suit_letter in SUIT_LETTERS.items():
                if suit_letter == letter:
                    return cls(suit, value)

        if upper in WIND_LETTERS:
            return cls(TileSuit.WINDS, WIND_LETTERS.index(upper))
        if upper in DRAGON_CODES:
            return cls(TileSuit.DRAGONS, DRAGON_CODES.index(upper))

        match = re.fullmatch(r"F([1-9])", upper)
        if match and int(match.group(1)) <= NUM_FLOWERS:
            return cls(TileSuit.FLOWERS, int(match.group(1)))

        raise TileParseError(f"Cannot parse tile string: {s!r}")


def parse_tiles(text: str, strict: bool = False) -> List[Tile]:
    """
    Parse a whitespace/comma separated list of tile tokens.

    Unknown tokens are skipped with a warning unless ``strict`` is set,
    in which case the first bad token raises TileParseError.
    """
    tiles = []
    for token in re.split(r"[\s,]+", text.strip()):
        if not token:
            continue
        try:
            tiles.append(Tile.from_string(token))
        except TileParseError:
            if strict:
                raise
            logger.warning(f"Skipping unrecognised tile token: {token!r}")
    return tiles


def to_count_array(tiles: Iterable[Tile]) -> np.ndarray:
    """
    Convert tiles to a 34-element array counting each tile type.
    Bonus tiles are ignored.
    """
    counts = np.zeros(NUM_TILE_TYPES, dtype=np.int8)
    for tile in tiles:
        if not tile.is_bonus:
            counts[tile.tile_index] += 1
    return counts


# Convenience functions for creating specific tiles
def char(value: int) -> Tile:
    """Create a Characters tile (1-9万)"""
    return Tile(TileSuit.CHARACTERS, value)

def bam(value: int) -> Tile:
    """Create a Bamboos tile (1-9条)"""
    return Tile(TileSuit.BAMBOOS, value)

def dot(value: int) -> Tile:
    """Create a Dots tile (1-9筒)"""
    return Tile(TileSuit.DOTS, value)

def wind(wind_type: WindType) -> Tile:
    """Create a Wind tile (东南西北)"""
    return Tile(TileSuit.WINDS, wind_type)

def dragon(dragon_type: DragonType) -> Tile:
    """Create a Dragon tile (中发白)"""
    return Tile(TileSuit.DRAGONS, dragon_type)

def flower(value: int) -> Tile:
    """Create a Flower tile (花1-8)"""
    return Tile(TileSuit.FLOWERS, value)


# Named wind tiles
EAST = Tile(TileSuit.WINDS, WindType.EAST)
SOUTH = Tile(TileSuit.WINDS, WindType.SOUTH)
WEST = Tile(TileSuit.WINDS, WindType.WEST)
NORTH = Tile(TileSuit.WINDS, WindType.NORTH)

# Named dragon tiles
RED_DRAGON = Tile(TileSuit.DRAGONS, DragonType.RED)
GREEN_DRAGON = Tile(TileSuit.DRAGONS, DragonType.GREEN)
WHITE_DRAGON = Tile(TileSuit.DRAGONS, DragonType.WHITE)

# The thirteen terminal and honor kinds (Thirteen Orphans / 十三幺)
TERMINAL_HONOR_INDICES = (0, 8, 9, 17, 18, 26, 27, 28, 29, 30, 31, 32, 33)
HONOR_INDICES = tuple(range(27, NUM_TILE_TYPES))
