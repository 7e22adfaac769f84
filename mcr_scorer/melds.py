"""
MCR Mahjong Melds

A meld is a *description* of a tile group (chow, pung, kong, pair, or one
third of a knitted straight), not a reference to physical tile instances.
Two melds are equal iff their resolved tile multisets are equal.
"""

from enum import IntEnum
from dataclasses import dataclass
from typing import List, Optional, Tuple
import numpy as np

from .tiles import Tile, TileSuit, NUMBERED_SUITS, to_count_array


class MeldType(IntEnum):
    """Types of melds (combinations) a hand can be split into"""
    CHOW = 0     # 顺子 - Sequence of 3 consecutive tiles in same suit
    PUNG = 1     # 刻子 - 3 identical tiles
    KONG = 2     # 杠 - 4 identical tiles
    PAIR = 3     # 将 - 2 identical tiles
    KNITTED = 4  # 组合龙 part - ranks n, n+3, n+6 of one suit


MeldKey = Tuple[str, ...]


@dataclass(frozen=True, eq=False)
class Meld:
    """
    Represents a meld (combination) of tiles.

    Attributes:
        meld_type: Type of meld
        tile: The identical tile for pung/kong/pair, the lowest tile for chow/knitted
        is_concealed: Whether the meld was formed in hand (not claimed from a discard).
            Not part of the meld's identity.
    """
    meld_type: MeldType
    tile: Tile
    is_concealed: bool = True

    def __post_init__(self):
        """Validate meld"""
        if self.tile.is_bonus:
            raise ValueError("Bonus tiles cannot form melds")
        if self.meld_type == MeldType.CHOW:
            if not self.tile.is_suited or self.tile.value > 7:
                raise ValueError(f"Invalid Chow starting at {self.tile.description}")
        elif self.meld_type == MeldType.KNITTED:
            if not self.tile.is_suited or self.tile.value > 3:
                raise ValueError(f"Invalid knitted triple starting at {self.tile.description}")

    @property
    def tiles(self) -> Tuple[Tile, ...]:
        """Resolved tiles of this meld, lowest first"""
        t = self.tile
        if self.meld_type == MeldType.CHOW:
            return tuple(Tile(t.suit, t.value + i) for i in range(3))
        if self.meld_type == MeldType.KNITTED:
            return tuple(Tile(t.suit, t.value + 3 * i) for i in range(3))
        size = {MeldType.PUNG: 3, MeldType.KONG: 4, MeldType.PAIR: 2}[self.meld_type]
        return (t,) * size

    @property
    def key(self) -> MeldKey:
        """Sorted tile descriptions; the meld's identity"""
        return tuple(sorted(tile.description for tile in self.tiles))

    @property
    def suit(self) -> TileSuit:
        return self.tile.suit

    @property
    def base(self) -> int:
        """Rank of the lowest tile (chow base, pung rank)"""
        return self.tile.value

    @property
    def is_chow(self) -> bool:
        return self.meld_type == MeldType.CHOW

    @property
    def is_pung(self) -> bool:
        """Pung or kong: kongs count as pungs for every pung-based fan"""
        return self.meld_type in (MeldType.PUNG, MeldType.KONG)

    @property
    def is_kong(self) -> bool:
        return self.meld_type == MeldType.KONG

    @property
    def is_pair(self) -> bool:
        return self.meld_type == MeldType.PAIR

    @property
    def is_knitted(self) -> bool:
        return self.meld_type == MeldType.KNITTED

    @property
    def is_set(self) -> bool:
        """Chow, pung or kong"""
        return self.is_chow or self.is_pung

    def contains_terminal_or_honor(self) -> bool:
        return any(t.is_terminal_or_honor for t in self.tiles)

    def contains_value(self, value: int) -> bool:
        return any(t.is_suited and t.value == value for t in self.tiles)

    def to_count_array(self) -> np.ndarray:
        """Convert meld to 34-element count array"""
        return to_count_array(self.tiles)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Meld):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        return f"Meld({self.meld_type.name}, {'-'.join(self.key)})"

    def __str__(self) -> str:
        tiles_str = " ".join(t.description for t in self.tiles)
        concealed = "暗" if self.is_concealed else "明"
        return f"[{concealed}{self.meld_type.name}: {tiles_str}]"


def chow(tile: Tile, concealed: bool = True) -> Meld:
    """Chow starting at ``tile``"""
    return Meld(MeldType.CHOW, tile, concealed)

def pung(tile: Tile, concealed: bool = True) -> Meld:
    return Meld(MeldType.PUNG, tile, concealed)

def kong(tile: Tile, concealed: bool = False) -> Meld:
    """Kong; exposed unless declared concealed (暗杠)"""
    return Meld(MeldType.KONG, tile, concealed)

def pair(tile: Tile) -> Meld:
    return Meld(MeldType.PAIR, tile)

def knitted(suit: TileSuit, base: int) -> Meld:
    """Knitted triple base, base+3, base+6 of ``suit``"""
    return Meld(MeldType.KNITTED, Tile(suit, base))


# Declared-meld prefixes: meld type and whether the meld is concealed
MELD_PREFIXES = {
    "chow": (MeldType.CHOW, False),
    "pung": (MeldType.PUNG, False),
    "kong": (MeldType.KONG, False),
    "ckong": (MeldType.KONG, True),
}


def meld_from_string(s: str) -> Meld:
    """
    Parse a declared meld: "pung:E", "chow:2m" (lowest tile), "kong:5p",
    or "ckong:5p" for a concealed kong. Claimed melds are exposed.
    """
    prefix, _, token = s.strip().partition(":")
    if prefix.lower() not in MELD_PREFIXES or not token:
        raise ValueError(f"Cannot parse meld string: {s!r}")
    meld_type, concealed = MELD_PREFIXES[prefix.lower()]
    return Meld(meld_type, Tile.from_string(token), concealed)


@dataclass(frozen=True)
class Decomposition:
    """
    One reading of a standard hand: four sets followed by the pair.

    Declared melds come first, then the concealed sets in ascending
    tile order, then the pair.
    """
    melds: Tuple[Meld, ...]

    @property
    def sets(self) -> List[Meld]:
        return [m for m in self.melds if not m.is_pair]

    @property
    def pair(self) -> Optional[Meld]:
        for meld in self.melds:
            if meld.is_pair:
                return meld
        return None

    @property
    def chows(self) -> List[Meld]:
        return [m for m in self.melds if m.is_chow]

    @property
    def pungs(self) -> List[Meld]:
        """Pungs and kongs"""
        return [m for m in self.melds if m.is_pung]

    @property
    def kongs(self) -> List[Meld]:
        return [m for m in self.melds if m.is_kong]

    @property
    def knitted(self) -> List[Meld]:
        return [m for m in self.melds if m.is_knitted]

    @property
    def tiles(self) -> List[Tile]:
        return [t for meld in self.melds for t in meld.tiles]

    @property
    def suits(self) -> List[TileSuit]:
        return sorted({t.suit for t in self.tiles if t.suit in NUMBERED_SUITS})

    def __len__(self) -> int:
        return len(self.melds)

    def __iter__(self):
        return iter(self.melds)

    def __str__(self) -> str:
        return " ".join(str(m) for m in self.melds)
