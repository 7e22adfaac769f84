"""
MCR Mahjong Hand

A finished hand: the tiles still held (including the winning tile and any
flowers) plus the melds declared during play.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple
import numpy as np

from .tiles import Tile, parse_tiles, to_count_array
from .melds import Meld

# Sets + pair of a standard winning hand
HAND_SIZE = 14


@dataclass(frozen=True)
class Hand:
    """
    Immutable winning hand.

    Attributes:
        tiles: Tiles held in hand, including the winning tile and bonus tiles
        melds: Declared melds (claimed chows/pungs/kongs and concealed kongs)
    """
    tiles: Tuple[Tile, ...]
    melds: Tuple[Meld, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "tiles", tuple(self.tiles))
        object.__setattr__(self, "melds", tuple(self.melds))

    @classmethod
    def from_string(cls, text: str, melds: Sequence[Meld] = ()) -> 'Hand':
        """Build a hand from tile tokens, skipping anything unparseable."""
        return cls(tuple(parse_tiles(text)), tuple(melds))

    @property
    def concealed_tiles(self) -> List[Tile]:
        """Non-bonus tiles still held in hand"""
        return [t for t in self.tiles if not t.is_bonus]

    @property
    def non_bonus_tiles(self) -> List[Tile]:
        """Every structural tile: concealed tiles plus declared meld tiles"""
        tiles = self.concealed_tiles
        for meld in self.melds:
            tiles.extend(meld.tiles)
        return tiles

    @property
    def bonus_tiles(self) -> List[Tile]:
        return [t for t in self.tiles if t.is_bonus]

    @property
    def bonus_count(self) -> int:
        return len(self.bonus_tiles)

    @property
    def expected_size(self) -> int:
        """14 structural tiles, plus one for each declared kong"""
        return HAND_SIZE + sum(1 for m in self.melds if m.is_kong)

    @property
    def has_exposed_melds(self) -> bool:
        return any(not m.is_concealed for m in self.melds)

    def concealed_counts(self) -> np.ndarray:
        return to_count_array(self.concealed_tiles)

    def to_count_array(self) -> np.ndarray:
        """34-element count array over all structural tiles"""
        return to_count_array(self.non_bonus_tiles)

    def __len__(self) -> int:
        return len(self.non_bonus_tiles)

    def __str__(self) -> str:
        held = " ".join(t.description for t in sorted(self.concealed_tiles))
        declared = " ".join(str(m) for m in self.melds)
        flowers = " ".join(t.description for t in self.bonus_tiles)
        return " | ".join(part for part in (held, declared, flowers) if part)

