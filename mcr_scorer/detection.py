"""
MCR Fan Detection

Finds every candidate fan for one decomposition of a hand. Detection runs in
fixed stages:

1. special hands (scored standalone)
2. chow-based fans
3. pung/kong-based fans
4. whole-hand composition fans
5. terminal/honor fans
6. going-out fans

Within the claiming stages (2, 3 and the honor pungs of 5), patterns are
tried from highest to lowest value. A pattern only sees melds that no
earlier pattern has claimed, and claims the melds it uses (Non-Repeat).

Prevalent and Seat Wind belong to a wind pung rather than to a set of
melds: they fire on their pung whether or not a larger wind fan already
claimed it, and record no melds of their own.
"""

import logging
from enum import IntEnum
from dataclasses import dataclass
from itertools import combinations
from typing import Callable, List, Optional, Sequence, Tuple, Union
import numpy as np

from .tiles import TileSuit, WindType, NUMBERED_SUITS
from .melds import Meld, Decomposition
from .hand import Hand
from .fans import FanId, Fan, FAN_CATALOG
from .tracker import MeldTracker
from .decomposition import Special

logger = logging.getLogger(__name__)


class WaitType(IntEnum):
    """How the winning tile completed the hand"""
    EDGE = 0    # 边张 - 3 on 12, or 7 on 89
    CLOSED = 1  # 嵌张 - middle of a chow
    SINGLE = 2  # 单钓将 - the pair


@dataclass
class DetectionContext:
    """
    Game-state flags for one win. Everything here is resolved by the caller;
    detection never derives it from the tiles.
    """
    is_concealed: bool = False
    is_self_draw: bool = False
    prevalent_wind_pung_present: bool = False
    seat_wind_pung_present: bool = False

    # When known, identify the wind pungs exactly instead of using the flags
    prevalent_wind: Optional[WindType] = None
    seat_wind: Optional[WindType] = None

    wait: Optional[WaitType] = None
    is_last_tile: bool = False          # 和绝张 - last copy of the winning tile
    is_last_wall_tile: bool = False     # 妙手回春 / 海底捞月
    is_replacement_tile: bool = False   # 杠上开花
    is_robbing_kong: bool = False       # 抢杠和

    # Identities, used only for payouts
    winner_id: Optional[str] = None
    discarder_id: Optional[str] = None
    other_player_ids: Tuple[str, ...] = ()


@dataclass(frozen=True)
class FanMatch:
    """A detected fan and the melds it uses (empty for whole-hand fans)"""
    fan_id: FanId
    melds: Tuple[Meld, ...] = ()

    @property
    def fan(self) -> Fan:
        return FAN_CATALOG[self.fan_id]

    def __str__(self) -> str:
        if not self.melds:
            return self.fan.name
        return f"{self.fan.name} {' '.join(str(m) for m in self.melds)}"


Finder = Callable[[], Optional[Sequence[Meld]]]
Check = Callable[[], bool]


def _same_suit(melds: Sequence[Meld]) -> bool:
    return len({m.suit for m in melds}) == 1 and melds[0].tile.is_suited

def _distinct_suits(melds: Sequence[Meld]) -> bool:
    return all(m.tile.is_suited for m in melds) and len({m.suit for m in melds}) == len(melds)

def _is_shifted(values: Sequence[int], steps: Tuple[int, ...]) -> bool:
    """Sorted values form an arithmetic run with one of the given steps"""
    ordered = sorted(values)
    diffs = {b - a for a, b in zip(ordered, ordered[1:])}
    return len(diffs) == 1 and diffs.pop() in steps

def _first_combination(melds: Sequence[Meld], size: int,
                       predicate: Callable[[Sequence[Meld]], bool]) -> Optional[Tuple[Meld, ...]]:
    """First ``size``-combination (in meld order) satisfying ``predicate``"""
    for combo in combinations(melds, size):
        if predicate(combo):
            return combo
    return None


class FanDetector:
    """
    Detects candidate fans for a single decomposition.

    One detector is one detection run: it owns the meld tracker, which is
    reset at the start of every call to detect_matches().
    """

    def __init__(
        self,
        hand: Hand,
        decomposition: Union[Decomposition, Special],
        context: Optional[DetectionContext] = None,
    ):
        self.hand = hand
        self.decomposition = decomposition
        self.context = context or DetectionContext()
        self.tracker = MeldTracker()
        self.matches: List[FanMatch] = []

        self._chow_stage: List[Tuple[FanId, Finder]] = [
            (FanId.KNITTED_STRAIGHT, self._find_knitted_straight),
            (FanId.PURE_TERMINAL_CHOWS, self._find_pure_terminal_chows),
            (FanId.QUADRUPLE_CHOW, self._find_quadruple_chow),
            (FanId.FOUR_SHIFTED_CHOWS, self._find_four_shifted_chows),
            (FanId.PURE_TRIPLE_CHOW, self._find_pure_triple_chow),
            (FanId.PURE_STRAIGHT, self._find_pure_straight),
            (FanId.THREE_SUITED_TERMINAL_CHOWS, self._find_three_suited_terminal_chows),
            (FanId.PURE_SHIFTED_CHOWS, self._find_pure_shifted_chows),
            (FanId.MIXED_STRAIGHT, self._find_mixed_straight),
            (FanId.MIXED_TRIPLE_CHOW, self._find_mixed_triple_chow),
            (FanId.MIXED_SHIFTED_CHOWS, self._find_mixed_shifted_chows),
            (FanId.PURE_DOUBLE_CHOW, self._find_pure_double_chow),
            (FanId.MIXED_DOUBLE_CHOW, self._find_mixed_double_chow),
            (FanId.SHORT_STRAIGHT, self._find_short_straight),
            (FanId.TWO_TERMINAL_CHOWS, self._find_two_terminal_chows),
        ]
        self._pung_stage: List[Tuple[FanId, Finder]] = [
            (FanId.FOUR_KONGS, self._find_four_kongs),
            (FanId.FOUR_CONCEALED_PUNGS, self._find_four_concealed_pungs),
            (FanId.FOUR_PURE_SHIFTED_PUNGS, self._find_four_pure_shifted_pungs),
            (FanId.THREE_KONGS, self._find_three_kongs),
            (FanId.PURE_SHIFTED_PUNGS, self._find_pure_shifted_pungs),
            (FanId.THREE_CONCEALED_PUNGS, self._find_three_concealed_pungs),
            (FanId.TRIPLE_PUNG, self._find_triple_pung),
            (FanId.MIXED_SHIFTED_PUNGS, self._find_mixed_shifted_pungs),
            (FanId.TWO_CONCEALED_KONGS, self._find_two_concealed_kongs),
            (FanId.TWO_KONGS, self._find_two_kongs),
            (FanId.DOUBLE_PUNG, self._find_double_pung),
            (FanId.TWO_CONCEALED_PUNGS, self._find_two_concealed_pungs),
            (FanId.CONCEALED_KONG, self._find_concealed_kong),
            (FanId.MELDED_KONG, self._find_melded_kong),
        ]
        self._composition_stage: List[Tuple[FanId, Check]] = [
            (FanId.ALL_GREEN, self._check_all_green),
            (FanId.ALL_EVEN_PUNGS, self._check_all_even_pungs),
            (FanId.FULL_FLUSH, self._check_full_flush),
            (FanId.UPPER_TILES, self._check_upper_tiles),
            (FanId.MIDDLE_TILES, self._check_middle_tiles),
            (FanId.LOWER_TILES, self._check_lower_tiles),
            (FanId.ALL_FIVES, self._check_all_fives),
            (FanId.UPPER_FOUR, self._check_upper_four),
            (FanId.LOWER_FOUR, self._check_lower_four),
            (FanId.REVERSIBLE_TILES, self._check_reversible_tiles),
            (FanId.ALL_PUNGS, self._check_all_pungs),
            (FanId.HALF_FLUSH, self._check_half_flush),
            (FanId.ALL_TYPES, self._check_all_types),
            (FanId.OUTSIDE_HAND, self._check_outside_hand),
            (FanId.ALL_CHOWS, self._check_all_chows),
            (FanId.TILE_HOG, self._check_tile_hog),
            (FanId.ALL_SIMPLES, self._check_all_simples),
            (FanId.ONE_VOIDED_SUIT, self._check_one_voided_suit),
            (FanId.NO_HONOR_TILES, self._check_no_honor_tiles),
        ]
        self._honor_stage: List[Tuple[FanId, Finder]] = [
            (FanId.BIG_FOUR_WINDS, self._find_big_four_winds),
            (FanId.BIG_THREE_DRAGONS, self._find_big_three_dragons),
            (FanId.LITTLE_FOUR_WINDS, self._find_little_four_winds),
            (FanId.LITTLE_THREE_DRAGONS, self._find_little_three_dragons),
            (FanId.BIG_THREE_WINDS, self._find_big_three_winds),
            (FanId.TWO_DRAGON_PUNGS, self._find_two_dragon_pungs),
            (FanId.DRAGON_PUNG, self._find_dragon_pung),
            (FanId.PREVALENT_WIND, self._find_prevalent_wind),
            (FanId.SEAT_WIND, self._find_seat_wind),
            (FanId.PUNG_OF_TERMINALS_OR_HONORS, self._find_pung_of_terminals_or_honors),
        ]
        self._terminal_stage: List[Tuple[FanId, Check]] = [
            (FanId.ALL_TERMINALS, self._check_all_terminals),
            (FanId.ALL_HONORS, self._check_all_honors),
            (FanId.ALL_TERMINALS_AND_HONORS, self._check_all_terminals_and_honors),
        ]
        self._going_out_stage: List[Tuple[FanId, Check]] = [
            (FanId.LAST_TILE_DRAW, self._check_last_tile_draw),
            (FanId.LAST_TILE_CLAIM, self._check_last_tile_claim),
            (FanId.OUT_WITH_REPLACEMENT_TILE, self._check_out_with_replacement_tile),
            (FanId.ROBBING_THE_KONG, self._check_robbing_the_kong),
            (FanId.MELDED_HAND, self._check_melded_hand),
            (FanId.FULLY_CONCEALED_HAND, self._check_fully_concealed_hand),
            (FanId.LAST_TILE, self._check_last_tile),
            (FanId.CONCEALED_HAND, self._check_concealed_hand),
            (FanId.EDGE_WAIT, self._check_edge_wait),
            (FanId.CLOSED_WAIT, self._check_closed_wait),
            (FanId.SINGLE_WAIT, self._check_single_wait),
            (FanId.SELF_DRAWN, self._check_self_drawn),
        ]

    # ========== Entry Points ==========

    def detect_matches(self) -> List[FanMatch]:
        """Run every stage and return the matches in detection order."""
        self.tracker.reset()
        self.matches = []

        if isinstance(self.decomposition, Special):
            self.matches.append(FanMatch(self.decomposition.kind))
            return list(self.matches)

        self._run_claiming_stage(self._chow_stage)
        self._run_claiming_stage(self._pung_stage)
        self._run_check_stage(self._composition_stage)
        self._run_claiming_stage(self._honor_stage)
        self._run_check_stage(self._terminal_stage)
        self._run_check_stage(self._going_out_stage)

        logger.debug(f"Detected {[m.fan_id.value for m in self.matches]} for {self.decomposition}")
        return list(self.matches)

    def detect(self) -> List[FanId]:
        return [m.fan_id for m in self.detect_matches()]

    def _run_claiming_stage(self, stage: List[Tuple[FanId, Finder]]) -> None:
        for fan_id, finder in stage:
            # A fan that can never be chosen must not claim melds
            if FAN_CATALOG[fan_id].requires_concealed and not self.context.is_concealed:
                continue
            melds = finder()
            if melds is None:
                continue
            if self.tracker.any_used(melds):
                continue
            self.tracker.mark_used_multiple(melds)
            self._add(FanMatch(fan_id, tuple(melds)))

    def _run_check_stage(self, stage: List[Tuple[FanId, Check]]) -> None:
        for fan_id, check in stage:
            if check():
                self._add(FanMatch(fan_id))

    def _add(self, match: FanMatch) -> None:
        if all(m.fan_id != match.fan_id for m in self.matches):
            self.matches.append(match)

    # ========== Meld Pools ==========

    @property
    def _tiles(self):
        return self.decomposition.tiles

    def _unused_chows(self) -> List[Meld]:
        return self.tracker.unused_of(self.decomposition.chows)

    def _unused_pungs(self) -> List[Meld]:
        """Unused pungs and kongs, numbered pungs before honor pungs"""
        pungs = self.tracker.unused_of(self.decomposition.pungs)
        return sorted(pungs, key=lambda m: m.tile.is_honor)

    def _unused_pair(self) -> Optional[Meld]:
        eye = self.decomposition.pair
        if eye is None or self.tracker.is_used(eye):
            return None
        return eye

    def _unused_honor_pungs(self, suit: TileSuit) -> List[Meld]:
        return [m for m in self.tracker.unused_of(self.decomposition.pungs) if m.suit == suit]

    # ========== Chow-Based ==========

    def _find_knitted_straight(self):
        """147, 258, 369 spread over the three suits"""
        triples = self.tracker.unused_of(self.decomposition.knitted)
        if len(triples) == 3:
            return triples
        return None

    def _find_pure_terminal_chows(self):
        """Two 123s and two 789s of one suit, with a pair of 5s in that suit"""
        chows = self._unused_chows()
        eye = self._unused_pair()
        if len(chows) != 4 or eye is None or not eye.tile.is_suited or eye.base != 5:
            return None
        if not _same_suit(chows) or chows[0].suit != eye.suit:
            return None
        if sorted(m.base for m in chows) != [1, 1, 7, 7]:
            return None
        return tuple(chows) + (eye,)

    def _find_quadruple_chow(self):
        """Four identical chows"""
        chows = self._unused_chows()
        if len(chows) == 4 and len({m.key for m in chows}) == 1:
            return chows
        return None

    def _find_four_shifted_chows(self):
        """Four chows of one suit, each shifted up by 1 or each by 2"""
        chows = self._unused_chows()
        if len(chows) == 4 and _same_suit(chows) and _is_shifted([m.base for m in chows], (1, 2)):
            return chows
        return None

    def _find_pure_triple_chow(self):
        """Three identical chows"""
        return _first_combination(self._unused_chows(), 3, lambda c: len({m.key for m in c}) == 1)

    def _find_pure_straight(self):
        """123, 456, 789 of one suit"""
        return _first_combination(
            self._unused_chows(), 3,
            lambda c: _same_suit(c) and sorted(m.base for m in c) == [1, 4, 7],
        )

    def _find_three_suited_terminal_chows(self):
        """123 and 789 in two suits, pair of 5s in the third"""
        chows = self._unused_chows()
        eye = self._unused_pair()
        if len(chows) != 4 or eye is None or not eye.tile.is_suited or eye.base != 5:
            return None
        suits = {m.suit for m in chows}
        if len(suits) != 2 or eye.suit in suits:
            return None
        for suit in suits:
            if sorted(m.base for m in chows if m.suit == suit) != [1, 7]:
                return None
        return tuple(chows) + (eye,)

    def _find_pure_shifted_chows(self):
        """Three chows of one suit shifted by 1 or by 2"""
        return _first_combination(
            self._unused_chows(), 3,
            lambda c: _same_suit(c) and _is_shifted([m.base for m in c], (1, 2)),
        )

    def _find_mixed_straight(self):
        """123, 456, 789 each in a different suit"""
        return _first_combination(
            self._unused_chows(), 3,
            lambda c: _distinct_suits(c) and sorted(m.base for m in c) == [1, 4, 7],
        )

    def _find_mixed_triple_chow(self):
        """The same chow in all three suits"""
        return _first_combination(
            self._unused_chows(), 3,
            lambda c: _distinct_suits(c) and len({m.base for m in c}) == 1,
        )

    def _find_mixed_shifted_chows(self):
        """Chows in three suits, each shifted up by one"""
        return _first_combination(
            self._unused_chows(), 3,
            lambda c: _distinct_suits(c) and _is_shifted([m.base for m in c], (1,)),
        )

    def _find_pure_double_chow(self):
        return _first_combination(self._unused_chows(), 2, lambda c: c[0].key == c[1].key)

    def _find_mixed_double_chow(self):
        return _first_combination(
            self._unused_chows(), 2,
            lambda c: _distinct_suits(c) and c[0].base == c[1].base,
        )

    def _find_short_straight(self):
        """Two chows of one suit six tiles long, e.g. 123 456"""
        return _first_combination(
            self._unused_chows(), 2,
            lambda c: _same_suit(c) and abs(c[0].base - c[1].base) == 3,
        )

    def _find_two_terminal_chows(self):
        """123 and 789 of one suit"""
        return _first_combination(
            self._unused_chows(), 2,
            lambda c: _same_suit(c) and sorted(m.base for m in c) == [1, 7],
        )

    # ========== Pung/Kong-Based ==========

    def _concealed_pungs(self) -> List[Meld]:
        return [m for m in self._unused_pungs() if m.is_concealed]

    def _kongs(self, concealed: Optional[bool] = None) -> List[Meld]:
        kongs = self.tracker.unused_of(self.decomposition.kongs)
        if concealed is None:
            return kongs
        return [m for m in kongs if m.is_concealed == concealed]

    def _suited_pungs(self) -> List[Meld]:
        return [m for m in self._unused_pungs() if m.tile.is_suited]

    def _find_four_kongs(self):
        kongs = self._kongs()
        return kongs if len(kongs) == 4 else None

    def _find_four_concealed_pungs(self):
        pungs = self._concealed_pungs()
        return pungs if len(pungs) == 4 else None

    def _find_four_pure_shifted_pungs(self):
        """Four pungs of one suit with consecutive ranks"""
        pungs = self._suited_pungs()
        if len(pungs) == 4 and _same_suit(pungs) and _is_shifted([m.base for m in pungs], (1,)):
            return pungs
        return None

    def _find_three_kongs(self):
        kongs = self._kongs()
        return kongs[:3] if len(kongs) >= 3 else None

    def _find_pure_shifted_pungs(self):
        """Three pungs of one suit with consecutive ranks"""
        return _first_combination(
            self._suited_pungs(), 3,
            lambda c: _same_suit(c) and _is_shifted([m.base for m in c], (1,)),
        )

    def _find_three_concealed_pungs(self):
        pungs = self._concealed_pungs()
        return pungs[:3] if len(pungs) >= 3 else None

    def _find_triple_pung(self):
        """Pungs of the same rank in all three suits"""
        return _first_combination(
            self._suited_pungs(), 3,
            lambda c: _distinct_suits(c) and len({m.base for m in c}) == 1,
        )

    def _find_mixed_shifted_pungs(self):
        """Pungs in three suits with consecutive ranks"""
        return _first_combination(
            self._suited_pungs(), 3,
            lambda c: _distinct_suits(c) and _is_shifted([m.base for m in c], (1,)),
        )

    def _find_two_concealed_kongs(self):
        kongs = self._kongs(concealed=True)
        return kongs[:2] if len(kongs) >= 2 else None

    def _find_two_kongs(self):
        kongs = self._kongs()
        return kongs[:2] if len(kongs) >= 2 else None

    def _find_double_pung(self):
        """Pungs of the same rank in two suits"""
        return _first_combination(
            self._suited_pungs(), 2,
            lambda c: _distinct_suits(c) and c[0].base == c[1].base,
        )

    def _find_two_concealed_pungs(self):
        pungs = self._concealed_pungs()
        return pungs[:2] if len(pungs) >= 2 else None

    def _find_concealed_kong(self):
        kongs = self._kongs(concealed=True)
        return kongs[:1] if kongs else None

    def _find_melded_kong(self):
        kongs = self._kongs(concealed=False)
        return kongs[:1] if kongs else None

    # ========== Whole-Hand Composition ==========

    def _suits_used(self) -> set:
        return {t.suit for t in self._tiles if t.suit in NUMBERED_SUITS}

    def _has_honors(self) -> bool:
        return any(t.is_honor for t in self._tiles)

    def _suited_values_within(self, low: int, high: int) -> bool:
        """No honors, every numbered tile ranked low..high"""
        return all(t.is_suited and low <= t.value <= high for t in self._tiles)

    def _check_all_green(self) -> bool:
        """Only 23468s and Green Dragons"""
        return all(t.is_green for t in self._tiles)

    def _check_all_even_pungs(self) -> bool:
        """Four pungs and a pair, all of even numbered tiles"""
        d = self.decomposition
        if len(d.pungs) != 4:
            return False
        return all(m.tile.is_suited and m.base % 2 == 0 for m in d.pungs + [d.pair])

    def _check_full_flush(self) -> bool:
        return not self._has_honors() and len(self._suits_used()) == 1

    def _check_upper_tiles(self) -> bool:
        return self._suited_values_within(7, 9)

    def _check_middle_tiles(self) -> bool:
        return self._suited_values_within(4, 6)

    def _check_lower_tiles(self) -> bool:
        return self._suited_values_within(1, 3)

    def _check_upper_four(self) -> bool:
        return self._suited_values_within(6, 9)

    def _check_lower_four(self) -> bool:
        return self._suited_values_within(1, 4)

    def _check_all_fives(self) -> bool:
        """Every set and the pair contain a 5"""
        return all(m.contains_value(5) for m in self.decomposition.melds)

    def _check_reversible_tiles(self) -> bool:
        return all(t.is_reversible for t in self._tiles)

    def _check_all_pungs(self) -> bool:
        return len(self.decomposition.pungs) == 4

    def _check_half_flush(self) -> bool:
        """One numbered suit plus honors"""
        return self._has_honors() and len(self._suits_used()) == 1

    def _check_all_types(self) -> bool:
        """All three suits, winds and dragons"""
        tiles = self._tiles
        return (
            len(self._suits_used()) == 3
            and any(t.is_wind for t in tiles)
            and any(t.is_dragon for t in tiles)
        )

    def _check_outside_hand(self) -> bool:
        """Every set and the pair include a terminal or honor"""
        return all(m.contains_terminal_or_honor() for m in self.decomposition.melds)

    def _check_all_chows(self) -> bool:
        """Four chows and a numbered pair"""
        d = self.decomposition
        return len(d.chows) == 4 and d.pair is not None and d.pair.tile.is_suited

    def _check_tile_hog(self) -> bool:
        """All four copies of a tile used without declaring a kong"""
        counts = self.hand.to_count_array()
        kong_indices = {m.tile.tile_index for m in self.decomposition.kongs}
        return any(int(i) not in kong_indices for i in np.flatnonzero(counts == 4))

    def _check_all_simples(self) -> bool:
        return all(t.is_simple for t in self._tiles)

    def _check_one_voided_suit(self) -> bool:
        """Exactly one of the three numbered suits missing"""
        return len(self._suits_used()) == 2

    def _check_no_honor_tiles(self) -> bool:
        return not self._has_honors()

    # ========== Terminals and Honors ==========

    def _wind_pung(self, wind: Optional[WindType], flagged: bool,
                   skip: Optional[Meld] = None) -> Optional[Meld]:
        """
        The pung of ``wind``, claimed or not. Without a wind identity a set
        flag picks the first wind pung other than ``skip``, falling back to
        ``skip`` itself (a double wind).
        """
        winds = [m for m in self.decomposition.pungs if m.tile.is_wind]
        if wind is not None:
            return next((m for m in winds if m.tile.value == wind), None)
        if not flagged or not winds:
            return None
        others = [m for m in winds if m != skip]
        return others[0] if others else winds[0]

    def _prevalent_pung(self) -> Optional[Meld]:
        return self._wind_pung(self.context.prevalent_wind, self.context.prevalent_wind_pung_present)

    def _seat_pung(self) -> Optional[Meld]:
        return self._wind_pung(
            self.context.seat_wind, self.context.seat_wind_pung_present, skip=self._prevalent_pung(),
        )

    def _find_big_four_winds(self):
        winds = self._unused_honor_pungs(TileSuit.WINDS)
        return winds if len(winds) == 4 else None

    def _find_big_three_dragons(self):
        dragons = self._unused_honor_pungs(TileSuit.DRAGONS)
        return dragons if len(dragons) == 3 else None

    def _find_little_four_winds(self):
        """Three wind pungs and a wind pair"""
        winds = self._unused_honor_pungs(TileSuit.WINDS)
        eye = self._unused_pair()
        if len(winds) == 3 and eye is not None and eye.tile.is_wind:
            return tuple(winds) + (eye,)
        return None

    def _find_little_three_dragons(self):
        """Two dragon pungs and a dragon pair"""
        dragons = self._unused_honor_pungs(TileSuit.DRAGONS)
        eye = self._unused_pair()
        if len(dragons) == 2 and eye is not None and eye.tile.is_dragon:
            return tuple(dragons) + (eye,)
        return None

    def _find_big_three_winds(self):
        winds = self._unused_honor_pungs(TileSuit.WINDS)
        return winds[:3] if len(winds) >= 3 else None

    def _find_two_dragon_pungs(self):
        dragons = self._unused_honor_pungs(TileSuit.DRAGONS)
        return dragons[:2] if len(dragons) >= 2 else None

    def _find_dragon_pung(self):
        dragons = self._unused_honor_pungs(TileSuit.DRAGONS)
        return dragons[:1] if dragons else None

    # The wind fans score their pung even when a larger wind fan claimed it
    def _find_prevalent_wind(self):
        return () if self._prevalent_pung() is not None else None

    def _find_seat_wind(self):
        return () if self._seat_pung() is not None else None

    def _find_pung_of_terminals_or_honors(self):
        """A terminal or wind pung other than the prevalent and seat wind pungs"""
        excluded = {m.key for m in (self._prevalent_pung(), self._seat_pung()) if m is not None}
        for meld in self._unused_pungs():
            if meld.key in excluded:
                continue
            if meld.tile.is_terminal or meld.tile.is_wind:
                return (meld,)
        return None

    def _check_all_terminals(self) -> bool:
        return all(t.is_terminal for t in self._tiles)

    def _check_all_honors(self) -> bool:
        return all(t.is_honor for t in self._tiles)

    def _check_all_terminals_and_honors(self) -> bool:
        """Only terminals and honors, with both present"""
        tiles = self._tiles
        return (
            all(t.is_terminal_or_honor for t in tiles)
            and any(t.is_terminal for t in tiles)
            and any(t.is_honor for t in tiles)
        )

    # ========== Going Out ==========

    def _check_last_tile_draw(self) -> bool:
        return self.context.is_last_wall_tile and self.context.is_self_draw

    def _check_last_tile_claim(self) -> bool:
        return self.context.is_last_wall_tile and not self.context.is_self_draw

    def _check_out_with_replacement_tile(self) -> bool:
        return self.context.is_replacement_tile and self.context.is_self_draw

    def _check_robbing_the_kong(self) -> bool:
        return self.context.is_robbing_kong and not self.context.is_self_draw

    def _check_melded_hand(self) -> bool:
        """Four exposed sets declared, won on a discard"""
        declared = self.hand.melds
        return (
            len(declared) == 4
            and all(not m.is_concealed for m in declared)
            and not self.context.is_self_draw
        )

    def _check_fully_concealed_hand(self) -> bool:
        return self.context.is_concealed and self.context.is_self_draw

    def _check_last_tile(self) -> bool:
        return self.context.is_last_tile

    def _check_concealed_hand(self) -> bool:
        return self.context.is_concealed and not self.context.is_self_draw

    def _check_edge_wait(self) -> bool:
        """Only possible when a 123 or 789 chow is present"""
        if self.context.wait != WaitType.EDGE:
            return False
        return any(m.base in (1, 7) for m in self.decomposition.chows)

    def _check_closed_wait(self) -> bool:
        if self.context.wait != WaitType.CLOSED:
            return False
        return bool(self.decomposition.chows)

    def _check_single_wait(self) -> bool:
        return self.context.wait == WaitType.SINGLE and self.decomposition.pair is not None

    def _check_self_drawn(self) -> bool:
        return self.context.is_self_draw


def detect_matches(
    hand: Hand,
    decomposition: Union[Decomposition, Special],
    context: Optional[DetectionContext] = None,
) -> List[FanMatch]:
    """Candidate fans of one decomposition, with the melds each claimed."""
    return FanDetector(hand, decomposition, context).detect_matches()


def detect(
    hand: Hand,
    decomposition: Union[Decomposition, Special],
    context: Optional[DetectionContext] = None,
) -> List[FanId]:
    """Candidate fan ids of one decomposition, de-duplicated, in detection order."""
    return FanDetector(hand, decomposition, context).detect()
