"""
MCR Mahjong Scoring

Ties the pipeline together:

    Hand -> decompose -> (per decomposition) detect -> select_best
         -> best decomposition overall -> ScoringResult

Flowers add flat bonus points after the fans are chosen and do not count
toward the 8-point minimum.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional

from .hand import Hand
from .melds import Decomposition
from .fans import Fan, FanId, FAN_CATALOG
from .decomposition import Invalid, Special, decompose
from .detection import DetectionContext, FanMatch, detect_matches
from .optimizer import Selection, select_best, select_manual
from .rules import ScoringRules, MCR_RULES

logger = logging.getLogger(__name__)


@dataclass
class ScoringResult:
    """Result of scoring calculation"""
    is_valid: bool = False
    reason: str = ""
    special: Optional[FanId] = None
    decomposition: Optional[Decomposition] = None
    fans: List[Fan] = field(default_factory=list)
    matches: List[FanMatch] = field(default_factory=list)
    fan_points: int = 0
    bonus_points: int = 0
    meets_minimum: bool = False

    @property
    def total_points(self) -> int:
        return self.fan_points + self.bonus_points

    @property
    def fan_ids(self) -> List[FanId]:
        return [fan.fan_id for fan in self.fans]

    def summary(self) -> str:
        """Multi-line human-readable breakdown"""
        if not self.is_valid:
            return f"Invalid hand: {self.reason}"
        lines = []
        if self.special is not None:
            lines.append(f"Special hand: {FAN_CATALOG[self.special].name}")
        elif self.decomposition is not None:
            lines.append(f"Decomposition: {self.decomposition}")
        for fan in self.fans:
            lines.append(f"  {fan.points:>2}  {fan.name} ({fan.chinese_name})")
        lines.append(f"Fan points: {self.fan_points}")
        if self.bonus_points:
            lines.append(f"Flower points: {self.bonus_points}")
        lines.append(f"Total: {self.total_points}")
        if not self.meets_minimum:
            lines.append("Below the minimum to declare a win")
        return "\n".join(lines)


class MCRScorer:
    """
    MCR Mahjong Scorer

    Scores every decomposition of a hand and keeps the best one. Among
    equal totals the first decomposition in enumeration order wins.
    """

    def __init__(self, rules: Optional[ScoringRules] = None):
        self.rules = rules or MCR_RULES

    def score(self, hand: Hand, context: Optional[DetectionContext] = None) -> ScoringResult:
        """
        Score a finished hand.

        Args:
            hand: The winning hand, flowers included
            context: Resolved game-state flags

        Returns:
            ScoringResult (is_valid False with a reason for non-winning tiles)
        """
        context = context or DetectionContext()
        if context.is_concealed and hand.has_exposed_melds:
            logger.warning(f"Hand {hand} has exposed melds but is marked concealed")

        result = decompose(hand)
        if isinstance(result, Invalid):
            logger.debug(f"Invalid hand {hand}: {result.reason}")
            return ScoringResult(is_valid=False, reason=result.reason)

        bonus = hand.bonus_count * self.rules.points_per_bonus_tile

        if isinstance(result, Special):
            selection, matches = self.evaluate(hand, result, _concealed(context), bonus)
            return self._result(selection, matches, special=result.kind)

        best: Optional[ScoringResult] = None
        for decomposition in result.decompositions:
            selection, matches = self.evaluate(hand, decomposition, context, bonus)
            if best is None or selection.total_points > best.total_points:
                best = self._result(selection, matches, decomposition=decomposition)
        return best

    def evaluate(self, hand: Hand, decomposition, context: DetectionContext,
                 bonus_points: int = 0):
        """
        Detect and select fans for one decomposition.

        Returns:
            (Selection, matches of the chosen fans)
        """
        matches = detect_matches(hand, decomposition, context)
        selection = select_best([m.fan_id for m in matches], context, bonus_points)

        if not selection.chosen and self.rules.allow_chicken_hand:
            chicken = FAN_CATALOG[FanId.CHICKEN_HAND]
            selection = Selection((chicken,), chicken.points, bonus_points)
            return selection, [FanMatch(FanId.CHICKEN_HAND)]

        chosen_ids = set(selection.fan_ids)
        return selection, [m for m in matches if m.fan_id in chosen_ids]

    def score_manual(self, hand: Hand, fan_ids: Iterable[FanId],
                     context: Optional[DetectionContext] = None) -> ScoringResult:
        """
        Score a hand from fans picked by the user instead of detected ones.
        The tiles must still form a winning hand.
        """
        context = context or DetectionContext()
        result = decompose(hand)
        if isinstance(result, Invalid):
            return ScoringResult(is_valid=False, reason=result.reason)

        if isinstance(result, Special):
            context = _concealed(context)
        manual = select_manual(fan_ids, context)
        for fan_id, reason in manual.rejected:
            logger.debug(f"Dropped {FAN_CATALOG[fan_id].name}: {reason}")

        bonus = hand.bonus_count * self.rules.points_per_bonus_tile
        selection = Selection(manual.accepted, manual.fan_points, bonus)
        special = result.kind if isinstance(result, Special) else None
        return self._result(selection, [FanMatch(f.fan_id) for f in manual.accepted], special=special)

    def _result(self, selection: Selection, matches: List[FanMatch],
                special: Optional[FanId] = None,
                decomposition: Optional[Decomposition] = None) -> ScoringResult:
        return ScoringResult(
            is_valid=True,
            special=special,
            decomposition=decomposition,
            fans=list(selection.chosen),
            matches=list(matches),
            fan_points=selection.fan_points,
            bonus_points=selection.bonus_points,
            meets_minimum=selection.fan_points >= self.rules.min_winning_points,
        )


def _concealed(context: DetectionContext) -> DetectionContext:
    """Special shapes have no declared melds, so they are always concealed"""
    return replace(context, is_concealed=True)


def score_hand(hand: Hand, context: Optional[DetectionContext] = None,
               rules: Optional[ScoringRules] = None) -> ScoringResult:
    """Score ``hand`` with a one-off scorer"""
    return MCRScorer(rules).score(hand, context)
