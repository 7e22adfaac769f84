"""
MCR Hand Decomposition

Splits a winning hand into every valid reading:
- special whole-hand shapes (Thirteen Orphans, Nine Gates, Seven Shifted
  Pairs, Seven Pairs, Greater/Lesser Honors and Knitted Tiles), checked first
- standard 4 sets + pair partitions, all of them, in ascending tile order
- knitted straight readings (three knitted triples + 1 set + pair)

Each recursive branch works on its own copy of the count array and returns
new tuples of melds, so no search state is shared between branches.
"""

import logging
from dataclasses import dataclass
from itertools import permutations
from typing import List, Optional, Tuple, Union
import numpy as np

from .tiles import (
    Tile, TileSuit, NUMBERED_SUITS, COPIES_PER_TYPE,
    TERMINAL_HONOR_INDICES, HONOR_INDICES,
)
from .melds import Meld, Decomposition, chow, pung, pair, knitted
from .hand import Hand
from .fans import FanId

logger = logging.getLogger(__name__)

SETS_PER_HAND = 4

# Nine Gates base profile: 1112345678999
_NINE_GATES_PROFILE = np.array([3, 1, 1, 1, 1, 1, 1, 1, 3], dtype=np.int8)

# The six ways to spread 147 / 258 / 369 over the three suits
KNITTED_ARRANGEMENTS: Tuple[Tuple[Tuple[TileSuit, int], ...], ...] = tuple(
    tuple(zip(suits, (1, 2, 3))) for suits in permutations(NUMBERED_SUITS)
)


@dataclass(frozen=True)
class Invalid:
    """The tiles do not form a winning hand"""
    reason: str

    @property
    def is_valid(self) -> bool:
        return False


@dataclass(frozen=True)
class Special:
    """A whole-hand shape scored standalone"""
    kind: FanId

    @property
    def is_valid(self) -> bool:
        return True


@dataclass(frozen=True)
class Standard:
    """All 4 sets + pair readings, in enumeration order"""
    decompositions: Tuple[Decomposition, ...]

    @property
    def is_valid(self) -> bool:
        return True


DecompositionResult = Union[Invalid, Special, Standard]


def decompose(hand: Hand) -> DecompositionResult:
    """
    Classify a hand and enumerate its decompositions.

    Args:
        hand: The finished hand (bonus tiles are ignored)

    Returns:
        Invalid(reason), Special(kind) or Standard(decompositions)
    """
    tiles = hand.non_bonus_tiles
    if len(tiles) != hand.expected_size:
        return Invalid("wrong tile count")

    if any(not m.is_set for m in hand.melds) or len(hand.melds) > SETS_PER_HAND:
        return Invalid("declared melds must be at most four chows, pungs or kongs")

    totals = hand.to_count_array()
    if totals.max() > COPIES_PER_TYPE:
        worst = Tile.from_index(int(np.argmax(totals)))
        return Invalid(f"more than {COPIES_PER_TYPE} copies of {worst.description}")

    counts = hand.concealed_counts()

    if not hand.melds:
        kind = find_special_hand(counts)
        if kind is not None:
            logger.debug(f"Special hand: {kind.value}")
            return Special(kind)

    declared = tuple(hand.melds)
    found = standard_decompositions(counts, declared) + knitted_decompositions(counts, declared)
    if not found:
        return Invalid("no valid sets")

    for decomposition in found:
        check_partition(decomposition, tiles)

    logger.debug(f"Found {len(found)} decomposition(s) for {hand}")
    return Standard(tuple(found))


def check_partition(decomposition: Decomposition, tiles: List[Tile]) -> None:
    """Fail loudly if a decomposition does not partition ``tiles`` exactly."""
    if len(decomposition.melds) != SETS_PER_HAND + 1:
        raise AssertionError(
            f"Decomposition has {len(decomposition.melds)} melds, expected {SETS_PER_HAND + 1}"
        )
    used = sorted(t.description for t in decomposition.tiles)
    held = sorted(t.description for t in tiles)
    if used != held:
        raise AssertionError(f"Decomposition {decomposition} does not partition {held}")


# ========== Standard Hands ==========

def standard_decompositions(counts: np.ndarray, declared: Tuple[Meld, ...] = ()) -> List[Decomposition]:
    """
    Every 4 sets + pair reading of the concealed tiles.

    Args:
        counts: 34-element count array of the concealed tiles
        declared: Melds already fixed by the player's calls
    """
    sets_needed = SETS_PER_HAND - len(declared)
    results = []
    for idx in np.flatnonzero(counts >= 2):
        rest = counts.copy()
        rest[idx] -= 2
        eye = pair(Tile.from_index(int(idx)))
        for sets in partition_sets(rest, sets_needed):
            results.append(Decomposition(declared + sets + (eye,)))
    return results


def partition_sets(counts: np.ndarray, sets_needed: int) -> List[Tuple[Meld, ...]]:
    """
    All ways to split ``counts`` into exactly ``sets_needed`` pungs/chows.

    The smallest remaining tile must start a set: either a pung of it or,
    for numbered tiles of rank 1-7, a chow beginning at it.
    """
    remaining = np.flatnonzero(counts)
    if sets_needed == 0:
        return [()] if len(remaining) == 0 else []
    if len(remaining) == 0:
        return []

    first = int(remaining[0])
    tile = Tile.from_index(first)
    results = []

    # Try pung
    if counts[first] >= 3:
        rest = counts.copy()
        rest[first] -= 3
        for tail in partition_sets(rest, sets_needed - 1):
            results.append((pung(tile),) + tail)

    # Try chow (numbered suits only)
    if tile.is_suited and tile.value <= 7:
        if counts[first + 1] >= 1 and counts[first + 2] >= 1:
            rest = counts.copy()
            rest[first:first + 3] -= 1
            for tail in partition_sets(rest, sets_needed - 1):
                results.append((chow(tile),) + tail)

    return results


def knitted_decompositions(counts: np.ndarray, declared: Tuple[Meld, ...] = ()) -> List[Decomposition]:
    """Readings as a knitted straight (组合龙) plus one set and a pair."""
    if len(declared) > 1:
        return []

    results = []
    for arrangement in KNITTED_ARRANGEMENTS:
        triples = tuple(knitted(suit, base) for suit, base in arrangement)
        needed = sum(m.to_count_array() for m in triples)
        if np.any(counts < needed):
            continue
        rest = counts - needed
        for idx in np.flatnonzero(rest >= 2):
            after_pair = rest.copy()
            after_pair[idx] -= 2
            eye = pair(Tile.from_index(int(idx)))
            for sets in partition_sets(after_pair, 1 - len(declared)):
                results.append(Decomposition(declared + triples + sets + (eye,)))
    return results


# ========== Special Hands ==========

def find_special_hand(counts: np.ndarray) -> Optional[FanId]:
    """
    Classify a fully concealed 14-tile hand as a special shape.

    The more specific shape wins: Seven Shifted Pairs before Seven Pairs,
    Greater before Lesser Honors and Knitted Tiles.
    """
    if is_thirteen_orphans(counts):
        return FanId.THIRTEEN_ORPHANS
    if is_nine_gates(counts):
        return FanId.NINE_GATES
    if is_seven_shifted_pairs(counts):
        return FanId.SEVEN_SHIFTED_PAIRS
    if is_seven_pairs(counts):
        return FanId.SEVEN_PAIRS
    if is_honors_and_knitted(counts):
        if all(counts[i] == 1 for i in HONOR_INDICES):
            return FanId.GREATER_HONORS_AND_KNITTED
        return FanId.LESSER_HONORS_AND_KNITTED
    return None


def is_thirteen_orphans(counts: np.ndarray) -> bool:
    """One of each terminal and honor, plus one duplicate of them"""
    orphans = counts[list(TERMINAL_HONOR_INDICES)]
    if counts.sum() != orphans.sum():
        return False
    return bool(np.all(orphans >= 1)) and int(np.count_nonzero(orphans == 2)) == 1 and orphans.max() == 2


def is_nine_gates(counts: np.ndarray) -> bool:
    """1112345678999 in one suit plus any tile of that suit"""
    for start in (0, 9, 18):
        block = counts[start:start + 9]
        if block.sum() != counts.sum():
            continue
        surplus = block - _NINE_GATES_PROFILE
        return bool(np.all(surplus >= 0)) and int(surplus.sum()) == 1
    return False


def is_seven_pairs(counts: np.ndarray) -> bool:
    """Seven pairs by count; four of a kind counts as two pairs"""
    present = counts[counts > 0]
    return int(counts.sum()) == 14 and bool(np.all(present % 2 == 0))


def is_seven_shifted_pairs(counts: np.ndarray) -> bool:
    """Seven pairs of consecutive ranks in one suit"""
    if not is_seven_pairs(counts):
        return False
    indices = np.flatnonzero(counts)
    if len(indices) != 7 or indices[-1] >= 27:
        return False
    same_suit = indices[0] // 9 == indices[-1] // 9
    return bool(same_suit) and int(indices[-1] - indices[0]) == 6


def is_honors_and_knitted(counts: np.ndarray) -> bool:
    """
    14 distinct tiles: honors plus numbered tiles from one knitted
    arrangement (147 / 258 / 369 each in a different suit).
    """
    if int(counts.sum()) != 14 or counts.max() > 1:
        return False
    suited = set(int(i) for i in np.flatnonzero(counts[:27]))
    return any(suited <= set(arrangement_indices(a)) for a in KNITTED_ARRANGEMENTS)


def arrangement_indices(arrangement) -> List[int]:
    """Count-array indices of the nine tiles of a knitted arrangement"""
    indices = []
    for suit, base in arrangement:
        start = NUMBERED_SUITS.index(suit) * 9
        indices.extend(start + base - 1 + 3 * k for k in range(3))
    return sorted(indices)

