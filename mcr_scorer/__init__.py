"""
MCR Mahjong Hand Scorer
Chinese Official Mahjong (Mahjong Competition Rules) fan detection and scoring
"""

from .tiles import Tile, TileSuit, WindType, DragonType, TileParseError, parse_tiles
from .melds import Meld, MeldType, Decomposition
from .hand import Hand
from .fans import Fan, FanId, FanCategory, FAN_CATALOG
from .decomposition import Invalid, Special, Standard, decompose
from .detection import DetectionContext, WaitType, FanDetector, detect
from .optimizer import Selection, select_best, select_manual
from .scoring import MCRScorer, ScoringResult
from .payout import calculate_payout
from .rules import ScoringRules, MCR_RULES, MCR_NO_CHICKEN_RULES

__version__ = "0.1.0"
__all__ = [
    "Tile",
    "TileSuit",
    "WindType",
    "DragonType",
    "TileParseError",
    "parse_tiles",
    "Meld",
    "MeldType",
    "Decomposition",
    "Hand",
    "Fan",
    "FanId",
    "FanCategory",
    "FAN_CATALOG",
    "Invalid",
    "Special",
    "Standard",
    "decompose",
    "DetectionContext",
    "WaitType",
    "FanDetector",
    "detect",
    "Selection",
    "select_best",
    "select_manual",
    "MCRScorer",
    "ScoringResult",
    "calculate_payout",
    "ScoringRules",
    "MCR_RULES",
    "MCR_NO_CHICKEN_RULES",
]
