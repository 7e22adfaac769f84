"""
Tests for MCR end-to-end scoring
"""

import logging
import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from mcr_scorer.tiles import EAST, WindType, char, bam, dot
from mcr_scorer.melds import chow, pung
from mcr_scorer.hand import Hand
from mcr_scorer.fans import FanId
from mcr_scorer.detection import DetectionContext, WaitType
from mcr_scorer.scoring import MCRScorer, ScoringResult, score_hand
from mcr_scorer.rules import MCR_RULES, MCR_NO_CHICKEN_RULES, RULE_SETS, ScoringRules


@pytest.fixture
def scorer():
    return MCRScorer()


class TestScenarios:
    """Test complete hands against the official table"""

    def test_full_flush(self, scorer):
        """Test a single-suit hand scores Full Flush without the fans it implies"""
        hand = Hand.from_string("2m 3m 4m 2m 3m 4m 5m 6m 7m 6m 7m 8m 8m 8m")
        result = scorer.score(hand)

        assert result.is_valid
        assert set(result.fan_ids) == {FanId.FULL_FLUSH, FanId.ALL_CHOWS, FanId.PURE_DOUBLE_CHOW}
        for excluded in (FanId.HALF_FLUSH, FanId.ONE_VOIDED_SUIT, FanId.NO_HONOR_TILES, FanId.ALL_SIMPLES):
            assert excluded not in result.fan_ids
        assert result.total_points == 27
        assert result.meets_minimum

    def test_bonus_tiles_added(self, scorer):
        """Test 10 fan points plus two flowers totals 12"""
        hand = Hand.from_string("2m 3m 4m 5m 6m 7m 3p 4p 5p 6s 7s 8s 5p 5p F1 F2")
        context = DetectionContext(is_concealed=True, is_self_draw=True, wait=WaitType.CLOSED)
        result = scorer.score(hand, context)

        assert set(result.fan_ids) == {
            FanId.SHORT_STRAIGHT, FanId.ALL_SIMPLES, FanId.ALL_CHOWS,
            FanId.FULLY_CONCEALED_HAND, FanId.CLOSED_WAIT,
        }
        assert result.fan_points == 10
        assert result.bonus_points == 2
        assert result.total_points == 12

    def test_four_shifted_chows(self, scorer):
        """Test Four Shifted Chows with the composition fans it allows"""
        hand = Hand.from_string("1m 2m 3m 2m 3m 4m 3m 4m 5m 4m 5m 6m 9p 9p")
        result = scorer.score(hand)

        assert FanId.FOUR_SHIFTED_CHOWS in result.fan_ids
        assert FanId.SHORT_STRAIGHT not in result.fan_ids
        assert set(result.fan_ids) == {FanId.FOUR_SHIFTED_CHOWS, FanId.ALL_CHOWS, FanId.ONE_VOIDED_SUIT}
        assert result.total_points == 35

        shifted = next(m for m in result.matches if m.fan_id == FanId.FOUR_SHIFTED_CHOWS)
        assert len(shifted.melds) == 4

    def test_thirteen_orphans(self, scorer):
        """Test Thirteen Orphans is scored alone at 88"""
        hand = Hand.from_string("1m 9m 1s 9s 1p 9p E S W N RD GD WD 1m")
        result = scorer.score(hand, DetectionContext(is_concealed=True, is_self_draw=True))

        assert result.special == FanId.THIRTEEN_ORPHANS
        assert result.fan_ids == [FanId.THIRTEEN_ORPHANS]
        assert result.fan_points == 88
        assert result.decomposition is None

    def test_seven_pairs(self, scorer):
        """Test Seven Pairs scores 24 standalone"""
        hand = Hand.from_string("1m 1m 3m 3m 5p 5p 7p 7p 9s 9s E E RD RD")
        result = scorer.score(hand, DetectionContext(is_concealed=True))

        assert result.special == FanId.SEVEN_PAIRS
        assert result.total_points == 24

    def test_seven_shifted_pairs(self, scorer):
        """Test consecutive single-suit pairs score Seven Shifted Pairs"""
        hand = Hand.from_string("1m 1m 2m 2m 3m 3m 4m 4m 5m 5m 6m 6m 7m 7m")
        result = scorer.score(hand, DetectionContext(is_concealed=True))

        assert result.fan_ids == [FanId.SEVEN_SHIFTED_PAIRS]
        assert result.fan_points == 88

    @pytest.mark.parametrize("context", [DetectionContext(), DetectionContext(discarder_id="South")])
    def test_special_hands_need_no_concealed_flag(self, scorer, context):
        """Test special shapes score in full when the context leaves is_concealed unset"""
        shifted = scorer.score(Hand.from_string("1m 1m 2m 2m 3m 3m 4m 4m 5m 5m 6m 6m 7m 7m"), context)
        assert shifted.fan_ids == [FanId.SEVEN_SHIFTED_PAIRS]
        assert shifted.fan_points == 88

        gates = scorer.score(Hand.from_string("1m 1m 1m 2m 3m 4m 5m 5m 6m 7m 8m 9m 9m 9m"), context)
        assert gates.special == FanId.NINE_GATES
        assert FanId.CHICKEN_HAND not in gates.fan_ids
        assert gates.fan_points >= 88

    def test_knitted_straight(self, scorer):
        """Test a knitted straight hand"""
        hand = Hand.from_string("1m 4m 7m 2s 5s 8s 3p 6p 9p 2m 3m 4m E E")
        result = scorer.score(hand)

        assert result.fan_ids == [FanId.KNITTED_STRAIGHT]
        assert result.total_points == 12
        assert len(result.decomposition.knitted) == 3

    def test_best_decomposition_chosen(self, scorer):
        """Test the higher-scoring reading wins over the other"""
        hand = Hand.from_string("1m 1m 1m 2m 2m 2m 3m 3m 3m 5p 5p 5p 9s 9s")
        result = scorer.score(hand)

        # Pungs: Pure Shifted Pungs + All Pungs + No Honors beats Pure Triple Chow
        assert len(result.decomposition.pungs) == 4
        assert set(result.fan_ids) == {FanId.PURE_SHIFTED_PUNGS, FanId.ALL_PUNGS, FanId.NO_HONOR_TILES}
        assert result.total_points == 31

    def test_concealed_pungs_and_dragons(self, scorer):
        """Test the concealed-pung fan and the dragon fans never share pungs"""
        hand = Hand.from_string("RD RD RD GD GD GD WD WD WD 1m 2m 3m 9p 9p")

        open_result = scorer.score(hand, DetectionContext(is_self_draw=True))
        assert FanId.BIG_THREE_DRAGONS in open_result.fan_ids

        result = scorer.score(hand, DetectionContext(is_concealed=True, is_self_draw=True))
        assert FanId.THREE_CONCEALED_PUNGS in result.fan_ids
        assert FanId.BIG_THREE_DRAGONS not in result.fan_ids
        assert FanId.TWO_CONCEALED_PUNGS not in result.fan_ids

    def test_big_three_winds_with_wind_fans(self, scorer):
        """Test Prevalent and Seat Wind add to Big Three Winds"""
        hand = Hand.from_string("E E E S S S W W W 1m 2m 3m 5p 5p")
        context = DetectionContext(prevalent_wind=WindType.EAST, seat_wind=WindType.SOUTH)
        result = scorer.score(hand, context)

        assert set(result.fan_ids) == {
            FanId.BIG_THREE_WINDS, FanId.PREVALENT_WIND, FanId.SEAT_WIND, FanId.ONE_VOIDED_SUIT,
        }
        assert result.total_points == 17

    def test_melded_hand(self, scorer):
        """Test an open hand with four declared sets"""
        declared = [
            chow(char(2), concealed=False),
            chow(dot(3), concealed=False),
            pung(bam(7), concealed=False),
            pung(EAST, concealed=False),
        ]
        hand = Hand.from_string("5p 5p", melds=declared)
        result = scorer.score(hand, DetectionContext(wait=WaitType.SINGLE))

        assert FanId.MELDED_HAND in result.fan_ids
        # Single wait is implied by Melded Hand
        assert FanId.SINGLE_WAIT not in result.fan_ids
        assert FanId.PUNG_OF_TERMINALS_OR_HONORS in result.fan_ids


class TestChickenHand:
    """Test hands with no other fan"""

    HAND = "2m 3m 4m 5p 6p 7p 5s 5s 5s 7s 8s 9s RD RD"

    def test_chicken_hand(self, scorer):
        """Test Chicken Hand is awarded when nothing else applies"""
        result = scorer.score(Hand.from_string(self.HAND))

        assert result.fan_ids == [FanId.CHICKEN_HAND]
        assert result.fan_points == 8
        assert result.meets_minimum

    def test_chicken_hand_disabled(self):
        """Test the no-chicken preset leaves the hand without fans"""
        result = MCRScorer(MCR_NO_CHICKEN_RULES).score(Hand.from_string(self.HAND))

        assert result.is_valid
        assert result.fans == []
        assert result.fan_points == 0
        assert not result.meets_minimum


class TestScoringResult:
    """Test result bookkeeping"""

    def test_invalid_hand(self, scorer):
        """Test non-winning tiles give an invalid result with a reason"""
        result = scorer.score(Hand.from_string("1m 2m 3m 4m 5m 6m 7m 8m 9m 1p 1p 1p 5s"))

        assert not result.is_valid
        assert result.reason == "wrong tile count"
        assert result.fans == []
        assert result.total_points == 0
        assert "Invalid" in result.summary()

    def test_flowers_do_not_reach_minimum(self):
        """Test bonus points are left out of the 8-point minimum"""
        rules = ScoringRules(name="Strict", min_winning_points=12)
        hand = Hand.from_string("2m 3m 4m 5m 6m 7m 3p 4p 5p 6s 7s 8s 5p 5p F1 F2")
        context = DetectionContext(is_concealed=True, is_self_draw=True, wait=WaitType.CLOSED)
        result = MCRScorer(rules).score(hand, context)

        assert result.total_points == 12
        assert not result.meets_minimum

    def test_deterministic(self, scorer):
        """Test repeated scoring gives the same fans and total"""
        hand = Hand.from_string("1m 1m 1m 2m 2m 2m 3m 3m 3m 4m 4m 5p 5p 5p")
        context = DetectionContext(is_concealed=True)
        first = scorer.score(hand, context)

        for _ in range(3):
            again = scorer.score(hand, context)
            assert again.fan_ids == first.fan_ids
            assert again.total_points == first.total_points

    def test_chosen_fans_respect_invariants(self, scorer):
        """Test chosen fans share no melds, exclude nothing and respect concealment"""
        hands = [
            ("2m 3m 4m 2m 3m 4m 5m 6m 7m 6m 7m 8m 8m 8m", DetectionContext()),
            ("1m 1m 1m 2m 2m 2m 3m 3m 3m 5p 5p 5p 9s 9s", DetectionContext(is_concealed=True)),
            ("1s 2s 3s 4s 5s 6s 7s 8s 9s 2s 3s 4s E E", DetectionContext(is_self_draw=True)),
            ("RD RD RD GD GD GD WD WD WD 1m 2m 3m 9p 9p", DetectionContext(is_concealed=True)),
        ]
        for text, context in hands:
            result = scorer.score(Hand.from_string(text), context)
            assert result.is_valid

            claimed = []
            for match in result.matches:
                keys = {m.key for m in match.melds}
                assert not keys & set(claimed)
                claimed.extend(keys)

            for i, a in enumerate(result.fans):
                if not context.is_concealed:
                    assert not a.requires_concealed
                for b in result.fans[i + 1:]:
                    assert not a.excludes(b)

    def test_exposed_but_concealed_warns(self, scorer, caplog):
        """Test a contradictory concealment flag is logged"""
        declared = [chow(dot(3), concealed=False)]
        hand = Hand.from_string("1m 1m 1m 2m 3m 4m 7s 8s 9s 5p 5p", melds=declared)

        with caplog.at_level(logging.WARNING, logger="mcr_scorer.scoring"):
            scorer.score(hand, DetectionContext(is_concealed=True))

        assert any("exposed" in record.getMessage() for record in caplog.records)

    def test_summary(self, scorer):
        """Test the printable breakdown"""
        hand = Hand.from_string("2m 3m 4m 5m 6m 7m 3p 4p 5p 6s 7s 8s 5p 5p F1 F2")
        context = DetectionContext(is_concealed=True, is_self_draw=True, wait=WaitType.CLOSED)
        text = scorer.score(hand, context).summary()

        assert "Short Straight" in text
        assert "Flower points: 2" in text
        assert "Total: 12" in text

    def test_score_hand_helper(self):
        """Test the one-off helper matches the scorer"""
        hand = Hand.from_string("1m 9m 1s 9s 1p 9p E S W N RD GD WD 1m")
        assert isinstance(score_hand(hand), ScoringResult)
        assert score_hand(hand).total_points == 88


class TestManualScoring:
    """Test scoring a user-picked fan list"""

    def test_score_manual(self, scorer):
        """Test accepted fans and flowers are totalled"""
        hand = Hand.from_string("2m 3m 4m 5m 6m 7m 3p 4p 5p 6s 7s 8s 5p 5p F1 F2")
        context = DetectionContext(is_concealed=True, is_self_draw=True)
        result = scorer.score_manual(
            hand, [FanId.SELF_DRAWN, FanId.CONCEALED_HAND, FanId.ALL_SIMPLES], context,
        )

        assert result.fan_ids == [FanId.ALL_SIMPLES, FanId.SELF_DRAWN]
        assert result.fan_points == 3
        assert result.total_points == 5
        assert not result.meets_minimum

    def test_score_manual_invalid_tiles(self, scorer):
        """Test manual scoring still needs a winning hand"""
        result = scorer.score_manual(Hand.from_string("1m 2m"), [FanId.ALL_SIMPLES])
        assert not result.is_valid


class TestRules:
    """Test rule presets"""

    def test_presets(self):
        """Test the official defaults"""
        assert MCR_RULES.min_winning_points == 8
        assert MCR_RULES.base_payment == 8
        assert MCR_RULES.allow_chicken_hand
        assert not MCR_NO_CHICKEN_RULES.allow_chicken_hand
        assert MCR_RULES.num_players == 4
        assert set(RULE_SETS) == {"mcr", "no-chicken"}

    def test_bonus_multiplier(self):
        """Test points per flower come from the rules"""
        rules = ScoringRules(name="Double flowers", points_per_bonus_tile=2)
        hand = Hand.from_string("1m 9m 1s 9s 1p 9p E S W N RD GD WD 1m F1 F2 F3")
        result = MCRScorer(rules).score(hand)

        assert result.bonus_points == 6
        assert result.total_points == 94


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
