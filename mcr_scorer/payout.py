"""
MCR Payout Calculator

Every losing player pays the base amount (8). The player who pays for the
hand value on top of that depends on how the hand was won:

- self-draw: every other player pays total + 8
- discard: the discarder pays total + 8, everyone else pays 8

The winner collects the sum, so the deltas always add up to zero.
"""

import logging
from typing import Dict, List, Optional, Sequence

from .detection import DetectionContext
from .rules import ScoringRules, MCR_RULES

logger = logging.getLogger(__name__)


def calculate_payout(
    total_points: int,
    context: DetectionContext,
    rules: Optional[ScoringRules] = None,
) -> Dict[str, int]:
    """
    Score deltas for one won hand.

    Args:
        total_points: Hand value, flowers included
        context: Supplies is_self_draw, winner_id, discarder_id and
            other_player_ids (seat ids from the rules when empty)
        rules: Supplies base_payment and the default seat ids

    Returns:
        {player_id: delta}, negative for payers
    """
    rules = rules or MCR_RULES
    winner = context.winner_id or rules.player_ids[0]
    players = _seating(winner, context.other_player_ids, rules.player_ids)

    if not context.is_self_draw:
        if context.discarder_id is None:
            raise ValueError("A discard win needs a discarder")
        if context.discarder_id not in players or context.discarder_id == winner:
            raise ValueError(f"Discarder {context.discarder_id!r} is not one of the other players")

    base = rules.base_payment
    deltas: Dict[str, int] = {}
    for player in players:
        if player == winner:
            continue
        if context.is_self_draw or player == context.discarder_id:
            deltas[player] = -(total_points + base)
        else:
            deltas[player] = -base
    deltas[winner] = -sum(deltas.values())

    logger.debug(f"Payout for {total_points} points: {deltas}")
    return deltas


def _seating(winner: str, others: Sequence[str], seats: Sequence[str]) -> List[str]:
    """All players at the table, winner included"""
    if others:
        players = [winner] + [p for p in others if p != winner]
    else:
        players = list(seats)
        if winner not in players:
            raise ValueError(f"Winner {winner!r} is not seated at the table {players}")
    if len(players) < 2:
        raise ValueError("A payout needs at least two players")
    return players
