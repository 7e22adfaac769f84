"""
MCR Scoring Rule Sets

Defines rule configurations for scoring Chinese Official Mahjong:
- MCR (Mahjong Competition Rules, the official tournament table)
- MCR without Chicken Hand (common in casual clubs)
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class ScoringRules:
    """
    Rule configuration for MCR scoring.

    The fan table itself is fixed; these settings only cover the
    thresholds and payment constants around it.
    """

    name: str = "Default"

    # Fan points (flowers excluded) needed to declare a win
    min_winning_points: int = 8

    # Flat amount every losing player pays on top of the hand value
    base_payment: int = 8

    # Bonus points per flower tile
    points_per_bonus_tile: int = 1

    # Score 无番和 when no other fan applies
    allow_chicken_hand: bool = True

    # Seat order; also the default player ids for payouts
    player_ids: Tuple[str, ...] = ("East", "South", "West", "North")

    @property
    def num_players(self) -> int:
        return len(self.player_ids)

    def __repr__(self) -> str:
        return f"ScoringRules({self.name})"


# Official competition rules
MCR_RULES = ScoringRules(
    name="MCR",
    min_winning_points=8,
    base_payment=8,
    points_per_bonus_tile=1,
    allow_chicken_hand=True,
)


# Chicken Hand not recognised
MCR_NO_CHICKEN_RULES = ScoringRules(
    name="MCR (no Chicken Hand)",
    min_winning_points=8,
    base_payment=8,
    points_per_bonus_tile=1,
    allow_chicken_hand=False,
)


RULE_SETS = {
    "mcr": MCR_RULES,
    "no-chicken": MCR_NO_CHICKEN_RULES,
}
