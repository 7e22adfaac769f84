"""
MCR Fan Combination Optimizer

Picks the highest-scoring legal subset of candidate fans. A subset is legal
when it respects concealment requirements and the catalog's implication and
incompatibility edges. The search is an include/exclude backtracking over a
few dozen candidates (a maximum-weight independent set), pruned when the
remaining points cannot beat the best subset found so far.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .fans import Fan, FanId, FAN_CATALOG
from .detection import DetectionContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Selection:
    """Chosen fans and their points"""
    chosen: Tuple[Fan, ...] = ()
    fan_points: int = 0
    bonus_points: int = 0

    @property
    def total_points(self) -> int:
        return self.fan_points + self.bonus_points

    @property
    def fan_ids(self) -> List[FanId]:
        return [fan.fan_id for fan in self.chosen]


@dataclass(frozen=True)
class ManualSelection:
    """Result of scoring a hand-picked list of fans"""
    accepted: Tuple[Fan, ...] = ()
    rejected: Tuple[Tuple[FanId, str], ...] = ()

    @property
    def fan_points(self) -> int:
        return sum(fan.points for fan in self.accepted)


def _ordered(candidates: Iterable[FanId]) -> List[Fan]:
    """Unique catalog entries, highest points first, ties in input order"""
    seen = set()
    fans = []
    for fan_id in candidates:
        if fan_id not in seen:
            seen.add(fan_id)
            fans.append(FAN_CATALOG[fan_id])
    return sorted(fans, key=lambda fan: -fan.points)


def rejection_reason(fan: Fan, chosen: Sequence[Fan], is_concealed: bool) -> Optional[str]:
    """Why ``fan`` cannot join ``chosen``, or None if it can"""
    if fan.requires_concealed and not is_concealed:
        return "requires a concealed hand"
    for other in chosen:
        if other.fan_id in fan.implied_by:
            return f"implied by {other.name}"
        if fan.fan_id in other.implied_by:
            return f"implies {other.name}"
        if other.fan_id in fan.incompatible_with or fan.fan_id in other.incompatible_with:
            return f"incompatible with {other.name}"
    return None


def select_best(
    candidates: Iterable[FanId],
    context: Optional[DetectionContext] = None,
    bonus_points: int = 0,
) -> Selection:
    """
    Find the maximum-point legal subset of ``candidates``.

    Args:
        candidates: Detected fan ids (duplicates are ignored)
        context: Supplies is_concealed
        bonus_points: Flower points added to the total, never excluded

    Returns:
        Selection; among equal totals the first subset found wins, so the
        result is deterministic for a given candidate order.
    """
    context = context or DetectionContext()
    fans = _ordered(candidates)

    # remaining[i] = points still available from fans[i:]
    remaining = [0] * (len(fans) + 1)
    for i in range(len(fans) - 1, -1, -1):
        remaining[i] = remaining[i + 1] + fans[i].points

    best_chosen: Tuple[Fan, ...] = ()
    best_points = -1

    def search(i: int, chosen: Tuple[Fan, ...], points: int) -> None:
        nonlocal best_chosen, best_points
        if points > best_points:
            best_chosen, best_points = chosen, points
        if i == len(fans) or points + remaining[i] <= best_points:
            return
        fan = fans[i]
        if rejection_reason(fan, chosen, context.is_concealed) is None:
            search(i + 1, chosen + (fan,), points + fan.points)
        search(i + 1, chosen, points)

    search(0, (), 0)

    selection = Selection(best_chosen, max(best_points, 0), bonus_points)
    logger.debug(
        f"Selected {selection.fan_ids} = {selection.fan_points} "
        f"from {[fan.fan_id.value for fan in fans]}"
    )
    return selection


def select_manual(fan_ids: Iterable[FanId], context: Optional[DetectionContext] = None) -> ManualSelection:
    """
    Score a user-picked list of fans.

    Fans are taken greedily from highest to lowest value; each one is kept
    only if it fits with those already kept and with how the hand was won.
    """
    context = context or DetectionContext()
    accepted: List[Fan] = []
    rejected: List[Tuple[FanId, str]] = []

    for fan in _ordered(fan_ids):
        reason = _going_out_conflict(fan.fan_id, context)
        if reason is None:
            reason = rejection_reason(fan, accepted, context.is_concealed)
        if reason is None:
            accepted.append(fan)
        else:
            rejected.append((fan.fan_id, reason))

    return ManualSelection(tuple(accepted), tuple(rejected))


_SELF_DRAW_ONLY = (
    FanId.SELF_DRAWN,
    FanId.FULLY_CONCEALED_HAND,
    FanId.LAST_TILE_DRAW,
    FanId.OUT_WITH_REPLACEMENT_TILE,
)
_DISCARD_ONLY = (
    FanId.CONCEALED_HAND,
    FanId.LAST_TILE_CLAIM,
    FanId.ROBBING_THE_KONG,
    FanId.MELDED_HAND,
)


def _going_out_conflict(fan_id: FanId, context: DetectionContext) -> Optional[str]:
    if fan_id in _SELF_DRAW_ONLY and not context.is_self_draw:
        return "needs a self-drawn win"
    if fan_id in _DISCARD_ONLY and context.is_self_draw:
        return "needs a win on a discard"
    return None
