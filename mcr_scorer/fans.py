"""
MCR Mahjong Fan Catalog

All 80 scoring patterns (番) of Chinese Official Mahjong, organized by point
value from 88 down to 1. Fan ids and point values are fixed rule data.

MCR uses an exclusion principle where higher-scoring patterns suppress the
patterns they imply (e.g. Full Flush suppresses Half Flush). Those edges are
declared once in RELATIONS below and folded into a read-only catalog at
import time.
"""

from enum import Enum
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Tuple


class FanId(Enum):
    """Closed set of fan identifiers; values are the stable wire ids"""
    # 88
    BIG_FOUR_WINDS = "bigFourWinds"
    BIG_THREE_DRAGONS = "bigThreeDragons"
    ALL_GREEN = "allGreen"
    NINE_GATES = "nineGates"
    FOUR_KONGS = "fourKongs"
    SEVEN_SHIFTED_PAIRS = "sevenShiftedPairs"
    THIRTEEN_ORPHANS = "thirteenOrphans"
    # 64
    ALL_TERMINALS = "allTerminals"
    LITTLE_FOUR_WINDS = "littleFourWinds"
    LITTLE_THREE_DRAGONS = "littleThreeDragons"
    ALL_HONORS = "allHonors"
    FOUR_CONCEALED_PUNGS = "fourConcealedPungs"
    PURE_TERMINAL_CHOWS = "pureTerminalChows"
    # 48
    QUADRUPLE_CHOW = "quadrupleChow"
    FOUR_PURE_SHIFTED_PUNGS = "fourPureShiftedPungs"
    # 32
    FOUR_SHIFTED_CHOWS = "fourShiftedChows"
    THREE_KONGS = "threeKongs"
    ALL_TERMINALS_AND_HONORS = "allTerminalsHonors"
    # 24
    SEVEN_PAIRS = "sevenPairs"
    GREATER_HONORS_AND_KNITTED = "greaterHonorsKnitted"
    ALL_EVEN_PUNGS = "allEvenPungs"
    FULL_FLUSH = "fullFlush"
    PURE_TRIPLE_CHOW = "pureTripleChow"
    PURE_SHIFTED_PUNGS = "pureShiftedPungs"
    UPPER_TILES = "upperTiles"
    MIDDLE_TILES = "middleTiles"
    LOWER_TILES = "lowerTiles"
    # 16
    PURE_STRAIGHT = "pureStraight"
    THREE_SUITED_TERMINAL_CHOWS = "threeSuitedTerminalChows"
    PURE_SHIFTED_CHOWS = "pureShiftedChows"
    ALL_FIVES = "allFives"
    TRIPLE_PUNG = "triplePung"
    THREE_CONCEALED_PUNGS = "threeConcealedPungs"
    # 12
    LESSER_HONORS_AND_KNITTED = "lesserHonorsKnitted"
    KNITTED_STRAIGHT = "knittedStraight"
    UPPER_FOUR = "upperFour"
    LOWER_FOUR = "lowerFour"
    BIG_THREE_WINDS = "bigThreeWinds"
    # 8
    MIXED_STRAIGHT = "mixedStraight"
    REVERSIBLE_TILES = "reversibleTiles"
    MIXED_TRIPLE_CHOW = "mixedTripleChow"
    MIXED_SHIFTED_PUNGS = "mixedShiftedPungs"
    CHICKEN_HAND = "chickenHand"
    LAST_TILE_DRAW = "lastTileDraw"
    LAST_TILE_CLAIM = "lastTileClaim"
    OUT_WITH_REPLACEMENT_TILE = "outWithReplacementTile"
    ROBBING_THE_KONG = "robbingTheKong"
    TWO_CONCEALED_KONGS = "twoConcealedKongs"
    # 6
    ALL_PUNGS = "allPungs"
    HALF_FLUSH = "halfFlush"
    MIXED_SHIFTED_CHOWS = "mixedShiftedChows"
    ALL_TYPES = "allTypes"
    MELDED_HAND = "meldedHand"
    TWO_DRAGON_PUNGS = "twoDragonPungs"
    # 4
    OUTSIDE_HAND = "outsideHand"
    FULLY_CONCEALED_HAND = "fullyConcealedHand_selfDraw"
    TWO_KONGS = "twoKongs"
    LAST_TILE = "lastTile"
    # 2
    DRAGON_PUNG = "dragonPung"
    PREVALENT_WIND = "prevalentWindPung"
    SEAT_WIND = "seatWindPung"
    CONCEALED_HAND = "concealedHandWonByDiscard"
    ALL_CHOWS = "allChows"
    TILE_HOG = "tileHog"
    DOUBLE_PUNG = "doublePung"
    TWO_CONCEALED_PUNGS = "twoConcealedPungs"
    CONCEALED_KONG = "concealedKong"
    ALL_SIMPLES = "allSimples"
    # 1
    PURE_DOUBLE_CHOW = "pureDoubleChow"
    MIXED_DOUBLE_CHOW = "mixedDoubleChow"
    SHORT_STRAIGHT = "shortStraight"
    TWO_TERMINAL_CHOWS = "twoTerminalChows"
    PUNG_OF_TERMINALS_OR_HONORS = "pungTermOrHonor_nonSeatPrev"
    MELDED_KONG = "meldedKong"
    ONE_VOIDED_SUIT = "oneVoidedSuit"
    NO_HONOR_TILES = "noHonorTiles"
    EDGE_WAIT = "edgeWait"
    CLOSED_WAIT = "closedWait"
    SINGLE_WAIT = "singleWait"
    SELF_DRAWN = "selfDrawn"


class FanCategory(Enum):
    CHOW = "Chow-Based"
    PUNG = "Pung-Based"
    KONG = "Kong-Based"
    SUIT = "Suit-Based"
    TERMINALS_HONORS = "Terminals/Honors"
    GOING_OUT = "Going Out"
    SPECIAL = "Special"


@dataclass(frozen=True)
class Fan:
    """A catalog entry. Built once at import and never mutated."""
    fan_id: FanId
    name: str
    chinese_name: str
    points: int
    category: FanCategory
    requires_concealed: bool = False
    is_going_out: bool = False
    implied_by: FrozenSet[FanId] = frozenset()
    incompatible_with: FrozenSet[FanId] = frozenset()

    def excludes(self, other: 'Fan') -> bool:
        """True if this fan and ``other`` may not both be chosen"""
        return (
            other.fan_id in self.implied_by
            or self.fan_id in other.implied_by
            or other.fan_id in self.incompatible_with
            or self.fan_id in other.incompatible_with
        )

    def __str__(self) -> str:
        return f"{self.name} ({self.chinese_name}) {self.points}"


F = FanId
C = FanCategory

# (id, name, chinese name, points, category, requires concealed, going out)
_FAN_TABLE: Tuple[Tuple[FanId, str, str, int, FanCategory, bool, bool], ...] = (
    # ========== 88 Points ==========
    (F.BIG_FOUR_WINDS, "Big Four Winds", "大四喜", 88, C.TERMINALS_HONORS, False, False),
    (F.BIG_THREE_DRAGONS, "Big Three Dragons", "大三元", 88, C.TERMINALS_HONORS, False, False),
    (F.ALL_GREEN, "All Green", "绿一色", 88, C.SUIT, False, False),
    (F.NINE_GATES, "Nine Gates", "九莲宝灯", 88, C.SPECIAL, True, False),
    (F.FOUR_KONGS, "Four Kongs", "四杠", 88, C.KONG, False, False),
    (F.SEVEN_SHIFTED_PAIRS, "Seven Shifted Pairs", "连七对", 88, C.SPECIAL, True, False),
    (F.THIRTEEN_ORPHANS, "Thirteen Orphans", "十三幺", 88, C.SPECIAL, False, False),

    # ========== 64 Points ==========
    (F.ALL_TERMINALS, "All Terminals", "清幺九", 64, C.TERMINALS_HONORS, False, False),
    (F.LITTLE_FOUR_WINDS, "Little Four Winds", "小四喜", 64, C.TERMINALS_HONORS, False, False),
    (F.LITTLE_THREE_DRAGONS, "Little Three Dragons", "小三元", 64, C.TERMINALS_HONORS, False, False),
    (F.ALL_HONORS, "All Honors", "字一色", 64, C.TERMINALS_HONORS, False, False),
    (F.FOUR_CONCEALED_PUNGS, "Four Concealed Pungs", "四暗刻", 64, C.PUNG, True, False),
    (F.PURE_TERMINAL_CHOWS, "Pure Terminal Chows", "一色双龙会", 64, C.CHOW, False, False),

    # ========== 48 Points ==========
    (F.QUADRUPLE_CHOW, "Quadruple Chow", "一色四同顺", 48, C.CHOW, False, False),
    (F.FOUR_PURE_SHIFTED_PUNGS, "Four Pure Shifted Pungs", "一色四节高", 48, C.PUNG, False, False),

    # ========== 32 Points ==========
    (F.FOUR_SHIFTED_CHOWS, "Four Shifted Chows", "一色四步高", 32, C.CHOW, False, False),
    (F.THREE_KONGS, "Three Kongs", "三杠", 32, C.KONG, False, False),
    (F.ALL_TERMINALS_AND_HONORS, "All Terminals and Honors", "混幺九", 32, C.TERMINALS_HONORS, False, False),

    # ========== 24 Points ==========
    (F.SEVEN_PAIRS, "Seven Pairs", "七对", 24, C.SPECIAL, False, False),
    (F.GREATER_HONORS_AND_KNITTED, "Greater Honors and Knitted Tiles", "七星不靠", 24, C.SPECIAL, False, False),
    (F.ALL_EVEN_PUNGS, "All Even Pungs", "全双刻", 24, C.PUNG, False, False),
    (F.FULL_FLUSH, "Full Flush", "清一色", 24, C.SUIT, False, False),
    (F.PURE_TRIPLE_CHOW, "Pure Triple Chow", "一色三同顺", 24, C.CHOW, False, False),
    (F.PURE_SHIFTED_PUNGS, "Pure Shifted Pungs", "一色三节高", 24, C.PUNG, False, False),
    (F.UPPER_TILES, "Upper Tiles", "全大", 24, C.SUIT, False, False),
    (F.MIDDLE_TILES, "Middle Tiles", "全中", 24, C.SUIT, False, False),
    (F.LOWER_TILES, "Lower Tiles", "全小", 24, C.SUIT, False, False),

    # ========== 16 Points ==========
    (F.PURE_STRAIGHT, "Pure Straight", "清龙", 16, C.CHOW, False, False),
    (F.THREE_SUITED_TERMINAL_CHOWS, "Three-Suited Terminal Chows", "三色双龙会", 16, C.CHOW, False, False),
    (F.PURE_SHIFTED_CHOWS, "Pure Shifted Chows", "一色三步高", 16, C.CHOW, False, False),
    (F.ALL_FIVES, "All Fives", "全带五", 16, C.SUIT, False, False),
    (F.TRIPLE_PUNG, "Triple Pung", "三同刻", 16, C.PUNG, False, False),
    (F.THREE_CONCEALED_PUNGS, "Three Concealed Pungs", "三暗刻", 16, C.PUNG, True, False),

    # ========== 12 Points ==========
    (F.LESSER_HONORS_AND_KNITTED, "Lesser Honors and Knitted Tiles", "全不靠", 12, C.SPECIAL, False, False),
    (F.KNITTED_STRAIGHT, "Knitted Straight", "组合龙", 12, C.SPECIAL, False, False),
    (F.UPPER_FOUR, "Upper Four", "大于五", 12, C.SUIT, False, False),
    (F.LOWER_FOUR, "Lower Four", "小于五", 12, C.SUIT, False, False),
    (F.BIG_THREE_WINDS, "Big Three Winds", "三风刻", 12, C.TERMINALS_HONORS, False, False),

    # ========== 8 Points ==========
    (F.MIXED_STRAIGHT, "Mixed Straight", "花龙", 8, C.CHOW, False, False),
    (F.REVERSIBLE_TILES, "Reversible Tiles", "推不倒", 8, C.SUIT, False, False),
    (F.MIXED_TRIPLE_CHOW, "Mixed Triple Chow", "三色三同顺", 8, C.CHOW, False, False),
    (F.MIXED_SHIFTED_PUNGS, "Mixed Shifted Pungs", "三色三节高", 8, C.PUNG, False, False),
    (F.CHICKEN_HAND, "Chicken Hand", "无番和", 8, C.SPECIAL, False, False),
    (F.LAST_TILE_DRAW, "Last Tile Draw", "妙手回春", 8, C.GOING_OUT, False, True),
    (F.LAST_TILE_CLAIM, "Last Tile Claim", "海底捞月", 8, C.GOING_OUT, False, True),
    (F.OUT_WITH_REPLACEMENT_TILE, "Out with Replacement Tile", "杠上开花", 8, C.GOING_OUT, False, True),
    (F.ROBBING_THE_KONG, "Robbing the Kong", "抢杠和", 8, C.GOING_OUT, False, True),
    (F.TWO_CONCEALED_KONGS, "Two Concealed Kongs", "双暗杠", 8, C.KONG, True, False),

    # ========== 6 Points ==========
    (F.ALL_PUNGS, "All Pungs", "碰碰和", 6, C.PUNG, False, False),
    (F.HALF_FLUSH, "Half Flush", "混一色", 6, C.SUIT, False, False),
    (F.MIXED_SHIFTED_CHOWS, "Mixed Shifted Chows", "三色三步高", 6, C.CHOW, False, False),
    (F.ALL_TYPES, "All Types", "五门齐", 6, C.SUIT, False, False),
    (F.MELDED_HAND, "Melded Hand", "全求人", 6, C.GOING_OUT, False, True),
    (F.TWO_DRAGON_PUNGS, "Two Dragon Pungs", "双箭刻", 6, C.TERMINALS_HONORS, False, False),

    # ========== 4 Points ==========
    (F.OUTSIDE_HAND, "Outside Hand", "全带幺", 4, C.TERMINALS_HONORS, False, False),
    (F.FULLY_CONCEALED_HAND, "Fully Concealed Hand", "不求人", 4, C.GOING_OUT, True, True),
    (F.TWO_KONGS, "Two Kongs", "双明杠", 4, C.KONG, False, False),
    (F.LAST_TILE, "Last Tile", "和绝张", 4, C.GOING_OUT, False, True),

    # ========== 2 Points ==========
    (F.DRAGON_PUNG, "Dragon Pung", "箭刻", 2, C.TERMINALS_HONORS, False, False),
    (F.PREVALENT_WIND, "Prevalent Wind", "圈风刻", 2, C.TERMINALS_HONORS, False, False),
    (F.SEAT_WIND, "Seat Wind", "门风刻", 2, C.TERMINALS_HONORS, False, False),
    (F.CONCEALED_HAND, "Concealed Hand", "门前清", 2, C.GOING_OUT, True, True),
    (F.ALL_CHOWS, "All Chows", "平和", 2, C.CHOW, False, False),
    (F.TILE_HOG, "Tile Hog", "四归一", 2, C.SUIT, False, False),
    (F.DOUBLE_PUNG, "Double Pung", "双同刻", 2, C.PUNG, False, False),
    (F.TWO_CONCEALED_PUNGS, "Two Concealed Pungs", "双暗刻", 2, C.PUNG, True, False),
    (F.CONCEALED_KONG, "Concealed Kong", "暗杠", 2, C.KONG, True, False),
    (F.ALL_SIMPLES, "All Simples", "断幺", 2, C.SUIT, False, False),

    # ========== 1 Point ==========
    (F.PURE_DOUBLE_CHOW, "Pure Double Chow", "一般高", 1, C.CHOW, False, False),
    (F.MIXED_DOUBLE_CHOW, "Mixed Double Chow", "喜相逢", 1, C.CHOW, False, False),
    (F.SHORT_STRAIGHT, "Short Straight", "连六", 1, C.CHOW, False, False),
    (F.TWO_TERMINAL_CHOWS, "Two Terminal Chows", "老少副", 1, C.CHOW, False, False),
    (F.PUNG_OF_TERMINALS_OR_HONORS, "Pung of Terminals or Honors", "幺九刻", 1, C.PUNG, False, False),
    (F.MELDED_KONG, "Melded Kong", "明杠", 1, C.KONG, False, False),
    (F.ONE_VOIDED_SUIT, "One Voided Suit", "缺一门", 1, C.SUIT, False, False),
    (F.NO_HONOR_TILES, "No Honor Tiles", "无字", 1, C.SUIT, False, False),
    (F.EDGE_WAIT, "Edge Wait", "边张", 1, C.GOING_OUT, False, True),
    (F.CLOSED_WAIT, "Closed Wait", "嵌张", 1, C.GOING_OUT, False, True),
    (F.SINGLE_WAIT, "Single Wait", "单钓将", 1, C.GOING_OUT, False, True),
    (F.SELF_DRAWN, "Self-Drawn", "自摸", 1, C.GOING_OUT, False, True),
)


# fan -> (implied by, incompatible with)
RELATIONS: Dict[FanId, Tuple[Tuple[FanId, ...], Tuple[FanId, ...]]] = {
    # Honors
    F.BIG_FOUR_WINDS: ((), (F.LITTLE_FOUR_WINDS, F.BIG_THREE_WINDS)),
    F.BIG_THREE_DRAGONS: ((), (F.LITTLE_THREE_DRAGONS,)),
    F.LITTLE_FOUR_WINDS: ((F.BIG_FOUR_WINDS,), ()),
    F.LITTLE_THREE_DRAGONS: ((F.BIG_THREE_DRAGONS,), ()),
    F.BIG_THREE_WINDS: ((F.BIG_FOUR_WINDS, F.LITTLE_FOUR_WINDS), ()),
    F.TWO_DRAGON_PUNGS: ((F.BIG_THREE_DRAGONS, F.LITTLE_THREE_DRAGONS), ()),
    F.DRAGON_PUNG: ((F.BIG_THREE_DRAGONS, F.LITTLE_THREE_DRAGONS, F.TWO_DRAGON_PUNGS), ()),
    F.PREVALENT_WIND: ((F.BIG_FOUR_WINDS,), ()),
    F.SEAT_WIND: ((F.BIG_FOUR_WINDS,), ()),
    F.PUNG_OF_TERMINALS_OR_HONORS: (
        (F.BIG_FOUR_WINDS, F.LITTLE_FOUR_WINDS, F.NINE_GATES, F.ALL_TERMINALS,
         F.ALL_HONORS, F.ALL_TERMINALS_AND_HONORS),
        (),
    ),
    F.ALL_HONORS: ((), (F.FULL_FLUSH, F.HALF_FLUSH, F.ALL_SIMPLES, F.NO_HONOR_TILES)),
    F.ALL_TERMINALS: ((), (F.ALL_FIVES, F.FULL_FLUSH, F.HALF_FLUSH)),
    F.ALL_TERMINALS_AND_HONORS: ((F.ALL_TERMINALS, F.ALL_HONORS), ()),
    F.OUTSIDE_HAND: ((F.ALL_TERMINALS, F.ALL_HONORS, F.ALL_TERMINALS_AND_HONORS), ()),

    # Special hands
    F.SEVEN_PAIRS: (
        (F.SEVEN_SHIFTED_PAIRS,),
        (F.ALL_PUNGS, F.FOUR_CONCEALED_PUNGS, F.PURE_TRIPLE_CHOW, F.PURE_SHIFTED_PUNGS),
    ),
    F.SEVEN_SHIFTED_PAIRS: ((), (F.SEVEN_PAIRS,)),
    F.GREATER_HONORS_AND_KNITTED: ((), (F.LESSER_HONORS_AND_KNITTED,)),
    F.LESSER_HONORS_AND_KNITTED: ((F.GREATER_HONORS_AND_KNITTED,), (F.GREATER_HONORS_AND_KNITTED,)),
    F.ALL_TYPES: ((F.THIRTEEN_ORPHANS, F.GREATER_HONORS_AND_KNITTED, F.LESSER_HONORS_AND_KNITTED), ()),

    # Suits
    F.FULL_FLUSH: (
        (F.NINE_GATES, F.SEVEN_SHIFTED_PAIRS, F.PURE_TERMINAL_CHOWS),
        (F.ONE_VOIDED_SUIT, F.NO_HONOR_TILES, F.ALL_SIMPLES, F.HALF_FLUSH),
    ),
    F.HALF_FLUSH: ((F.FULL_FLUSH, F.ALL_GREEN), ()),
    F.ONE_VOIDED_SUIT: ((F.FULL_FLUSH, F.HALF_FLUSH, F.ALL_GREEN, F.REVERSIBLE_TILES), ()),
    F.NO_HONOR_TILES: (
        (F.FULL_FLUSH, F.NINE_GATES, F.ALL_TERMINALS, F.ALL_EVEN_PUNGS, F.UPPER_TILES,
         F.MIDDLE_TILES, F.LOWER_TILES, F.THREE_SUITED_TERMINAL_CHOWS, F.ALL_FIVES,
         F.UPPER_FOUR, F.LOWER_FOUR, F.ALL_CHOWS, F.ALL_SIMPLES),
        (),
    ),
    F.ALL_SIMPLES: ((F.ALL_EVEN_PUNGS, F.MIDDLE_TILES, F.ALL_FIVES), ()),
    F.UPPER_TILES: ((), (F.MIDDLE_TILES, F.LOWER_TILES, F.ALL_FIVES)),
    F.MIDDLE_TILES: ((), (F.UPPER_TILES, F.LOWER_TILES, F.ALL_FIVES)),
    F.LOWER_TILES: ((), (F.UPPER_TILES, F.MIDDLE_TILES, F.ALL_FIVES)),
    F.UPPER_FOUR: ((F.UPPER_TILES,), ()),
    F.LOWER_FOUR: ((F.LOWER_TILES,), ()),
    F.REVERSIBLE_TILES: ((), (F.ALL_TERMINALS, F.ALL_HONORS)),
    F.TILE_HOG: ((F.QUADRUPLE_CHOW,), ()),

    # Chows
    F.PURE_STRAIGHT: ((), (F.MIXED_STRAIGHT,)),
    F.MIXED_STRAIGHT: ((F.PURE_STRAIGHT,), ()),
    F.PURE_TRIPLE_CHOW: ((F.QUADRUPLE_CHOW,), (F.MIXED_TRIPLE_CHOW, F.MIXED_STRAIGHT)),
    F.MIXED_TRIPLE_CHOW: ((F.PURE_TRIPLE_CHOW,), ()),
    F.PURE_SHIFTED_CHOWS: ((F.FOUR_SHIFTED_CHOWS,), ()),
    F.ALL_CHOWS: ((F.PURE_TERMINAL_CHOWS, F.THREE_SUITED_TERMINAL_CHOWS), (F.ALL_PUNGS,)),
    F.PURE_DOUBLE_CHOW: ((F.PURE_TERMINAL_CHOWS, F.QUADRUPLE_CHOW, F.PURE_TRIPLE_CHOW), ()),
    F.MIXED_DOUBLE_CHOW: ((F.THREE_SUITED_TERMINAL_CHOWS, F.MIXED_TRIPLE_CHOW), ()),
    F.SHORT_STRAIGHT: ((F.FOUR_SHIFTED_CHOWS, F.PURE_STRAIGHT), ()),
    F.TWO_TERMINAL_CHOWS: (
        (F.PURE_TERMINAL_CHOWS, F.FOUR_SHIFTED_CHOWS, F.PURE_STRAIGHT, F.THREE_SUITED_TERMINAL_CHOWS),
        (),
    ),

    # Pungs and kongs
    F.ALL_PUNGS: (
        (F.BIG_FOUR_WINDS, F.FOUR_KONGS, F.ALL_TERMINALS, F.ALL_HONORS, F.FOUR_CONCEALED_PUNGS,
         F.FOUR_PURE_SHIFTED_PUNGS, F.ALL_TERMINALS_AND_HONORS, F.ALL_EVEN_PUNGS),
        (),
    ),
    F.PURE_SHIFTED_PUNGS: ((F.FOUR_PURE_SHIFTED_PUNGS,), ()),
    F.THREE_CONCEALED_PUNGS: ((F.FOUR_CONCEALED_PUNGS,), ()),
    F.TWO_CONCEALED_PUNGS: ((F.FOUR_CONCEALED_PUNGS, F.THREE_CONCEALED_PUNGS), ()),
    F.FOUR_KONGS: ((), (F.THREE_KONGS, F.TWO_KONGS)),
    F.THREE_KONGS: ((F.FOUR_KONGS,), ()),
    F.TWO_KONGS: ((F.FOUR_KONGS, F.THREE_KONGS), ()),
    F.TWO_CONCEALED_KONGS: ((F.FOUR_KONGS,), ()),
    F.CONCEALED_KONG: ((F.FOUR_KONGS, F.TWO_CONCEALED_KONGS), ()),
    F.MELDED_KONG: ((F.FOUR_KONGS, F.THREE_KONGS, F.TWO_KONGS), ()),

    # Going out
    F.SELF_DRAWN: ((F.FULLY_CONCEALED_HAND, F.LAST_TILE_DRAW, F.OUT_WITH_REPLACEMENT_TILE), ()),
    F.CONCEALED_HAND: (
        (F.FULLY_CONCEALED_HAND, F.FOUR_CONCEALED_PUNGS, F.NINE_GATES, F.SEVEN_PAIRS,
         F.SEVEN_SHIFTED_PAIRS, F.THIRTEEN_ORPHANS, F.GREATER_HONORS_AND_KNITTED,
         F.LESSER_HONORS_AND_KNITTED),
        (),
    ),
    F.SINGLE_WAIT: (
        (F.MELDED_HAND, F.FOUR_KONGS, F.SEVEN_PAIRS, F.SEVEN_SHIFTED_PAIRS, F.THIRTEEN_ORPHANS),
        (),
    ),
    F.LAST_TILE: ((F.ROBBING_THE_KONG,), ()),
}


def _build_catalog() -> Mapping[FanId, Fan]:
    unknown = set(RELATIONS) - set(FanId)
    if unknown:
        raise ValueError(f"Relations declared for unknown fans: {unknown}")

    catalog: Dict[FanId, Fan] = {}
    for fan_id, name, chinese, points, category, concealed, going_out in _FAN_TABLE:
        implied_by, incompatible = RELATIONS.get(fan_id, ((), ()))
        catalog[fan_id] = Fan(
            fan_id=fan_id,
            name=name,
            chinese_name=chinese,
            points=points,
            category=category,
            requires_concealed=concealed,
            is_going_out=going_out,
            implied_by=frozenset(implied_by),
            incompatible_with=frozenset(incompatible),
        )

    missing = set(FanId) - set(catalog)
    if missing:
        raise ValueError(f"Fans without a catalog entry: {missing}")
    return MappingProxyType(catalog)


FAN_CATALOG: Mapping[FanId, Fan] = _build_catalog()

# Point scale of the official table
POINT_VALUES = (1, 2, 4, 6, 8, 12, 16, 24, 32, 48, 64, 88)


def fans_for(fan_ids: Iterable[FanId]) -> List[Fan]:
    """Look up catalog entries, keeping order"""
    return [FAN_CATALOG[fan_id] for fan_id in fan_ids]


def fan_from_wire_id(wire_id: str) -> Fan:
    """Look up a fan by its string id, e.g. "fullFlush"."""
    try:
        return FAN_CATALOG[FanId(wire_id)]
    except ValueError:
        raise ValueError(f"Unknown fan id: {wire_id!r}") from None


del F, C
