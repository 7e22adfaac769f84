"""
Tests for MCR payouts
"""

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from mcr_scorer.detection import DetectionContext
from mcr_scorer.payout import calculate_payout
from mcr_scorer.rules import ScoringRules


class TestSelfDraw:
    """Test payouts for self-drawn wins"""

    def test_everyone_pays(self):
        """Test each other player pays total + 8"""
        deltas = calculate_payout(12, DetectionContext(is_self_draw=True))

        assert deltas == {"South": -20, "West": -20, "North": -20, "East": 60}

    def test_winner_from_context(self):
        """Test the winner id decides who collects"""
        context = DetectionContext(is_self_draw=True, winner_id="West")
        deltas = calculate_payout(8, context)

        assert deltas["West"] == 48
        assert deltas["East"] == -16


class TestDiscard:
    """Test payouts for wins on a discard"""

    def test_discarder_pays_hand(self):
        """Test the discarder pays total + 8 and the rest pay 8"""
        context = DetectionContext(discarder_id="South")
        deltas = calculate_payout(12, context)

        assert deltas == {"South": -20, "West": -8, "North": -8, "East": 36}

    def test_missing_discarder(self):
        """Test a discard win without a discarder is rejected"""
        with pytest.raises(ValueError):
            calculate_payout(12, DetectionContext())

    def test_discarder_is_winner(self):
        """Test the winner cannot pay for their own hand"""
        with pytest.raises(ValueError):
            calculate_payout(12, DetectionContext(winner_id="East", discarder_id="East"))

    def test_unknown_discarder(self):
        """Test the discarder must be at the table"""
        with pytest.raises(ValueError):
            calculate_payout(12, DetectionContext(discarder_id="Nobody"))


class TestTable:
    """Test player ids and rule constants"""

    @pytest.mark.parametrize("total,self_draw", [(8, True), (8, False), (27, True), (88, False)])
    def test_zero_sum(self, total, self_draw):
        """Test deltas always add up to zero"""
        context = DetectionContext(is_self_draw=self_draw, discarder_id=None if self_draw else "North")
        deltas = calculate_payout(total, context)

        assert sum(deltas.values()) == 0
        assert len(deltas) == 4

    def test_other_player_ids(self):
        """Test explicit player ids replace the default seats"""
        context = DetectionContext(
            winner_id="alice",
            discarder_id="bob",
            other_player_ids=("bob", "carol", "dave"),
        )
        deltas = calculate_payout(10, context)

        assert deltas == {"bob": -18, "carol": -8, "dave": -8, "alice": 34}

    def test_winner_not_seated(self):
        """Test a winner outside the default seats is rejected"""
        with pytest.raises(ValueError):
            calculate_payout(8, DetectionContext(is_self_draw=True, winner_id="alice"))

    def test_custom_rules(self):
        """Test base payment and seats come from the rules"""
        rules = ScoringRules(name="Three players", base_payment=5, player_ids=("A", "B", "C"))
        deltas = calculate_payout(10, DetectionContext(is_self_draw=True), rules)

        assert deltas == {"B": -15, "C": -15, "A": 30}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
