"""
Tests for MCR hand decomposition
"""

import pytest
import numpy as np

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from mcr_scorer.tiles import TileSuit, char, dot, EAST
from mcr_scorer.melds import MeldType, chow, pung, kong, pair, knitted
from mcr_scorer.hand import Hand
from mcr_scorer.fans import FanId
from mcr_scorer.decomposition import (
    Invalid, Special, Standard, decompose, partition_sets, find_special_hand,
    is_thirteen_orphans, is_nine_gates, KNITTED_ARRANGEMENTS,
)


def hand(text: str, melds=()) -> Hand:
    return Hand.from_string(text, melds=melds)


def assert_partitions(result: Standard, h: Hand):
    """Every decomposition has four sets and a pair covering the tiles exactly"""
    held = sorted(t.description for t in h.non_bonus_tiles)
    for d in result.decompositions:
        assert len(d) == 5
        assert d.pair is not None
        assert len(d.sets) == 4
        assert sorted(t.description for t in d.tiles) == held


class TestInvalidHands:
    """Test hands that cannot win"""

    def test_wrong_tile_count(self):
        """Test 13 tiles is not a finished hand"""
        result = decompose(hand("1m 2m 3m 4m 5m 6m 7m 8m 9m 1p 1p 1p 5s"))
        assert isinstance(result, Invalid)
        assert result.reason == "wrong tile count"
        assert not result.is_valid

    def test_flowers_do_not_count(self):
        """Test bonus tiles are not part of the tile count"""
        result = decompose(hand("1m 2m 3m 4m 5m 6m 7m 8m 9m 1p 1p 1p 5s F1 F2"))
        assert isinstance(result, Invalid)
        assert result.reason == "wrong tile count"

    def test_too_many_copies(self):
        """Test five copies of one tile is rejected"""
        result = decompose(hand("1m 1m 1m 1m 1m 2m 3m 4m 5m 6m 7m 8m 8m 9m"))
        assert isinstance(result, Invalid)
        assert "more than 4" in result.reason

    def test_no_valid_sets(self):
        """Test scattered tiles give no decomposition"""
        result = decompose(hand("1m 3m 5m 7m 9m 1p 3p 5p 7p 9p E S W N"))
        assert isinstance(result, Invalid)
        assert result.reason == "no valid sets"

    def test_declared_pair_rejected(self):
        """Test only sets may be declared"""
        h = hand("2m 3m 4m 5p 6p 7p 7s 8s 9s 1m 2m 3m", melds=[pair(EAST)])
        result = decompose(h)
        assert isinstance(result, Invalid)
        assert "declared melds" in result.reason


class TestSpecialHands:
    """Test whole-hand special shapes"""

    def test_thirteen_orphans(self):
        """Test thirteen terminals and honors plus a duplicate"""
        result = decompose(hand("1m 9m 1s 9s 1p 9p E S W N RD GD WD 1m"))
        assert isinstance(result, Special)
        assert result.kind == FanId.THIRTEEN_ORPHANS
        assert result.is_valid

    def test_thirteen_orphans_needs_duplicate(self):
        """Test a missing orphan is not Thirteen Orphans"""
        counts = hand("1m 9m 1s 9s 1p 9p E S W N RD GD 1m 2m").concealed_counts()
        assert not is_thirteen_orphans(counts)

    def test_nine_gates(self):
        """Test 1112345678999 plus one tile of the suit"""
        result = decompose(hand("1m 1m 1m 2m 3m 4m 5m 6m 7m 8m 9m 9m 9m 5m"))
        assert isinstance(result, Special)
        assert result.kind == FanId.NINE_GATES

    def test_nine_gates_single_suit_only(self):
        """Test a foreign tile breaks Nine Gates"""
        counts = hand("1m 1m 1m 2m 3m 4m 5m 6m 7m 8m 9m 9m 9m 5p").concealed_counts()
        assert not is_nine_gates(counts)

    def test_seven_pairs(self):
        """Test seven pairs of mixed tiles"""
        result = decompose(hand("1m 1m 3m 3m 5p 5p 7p 7p 9s 9s E E RD RD"))
        assert isinstance(result, Special)
        assert result.kind == FanId.SEVEN_PAIRS

    def test_seven_pairs_with_four_of_a_kind(self):
        """Test four identical tiles count as two pairs"""
        result = decompose(hand("1m 1m 1m 1m 3m 3m 5p 5p 7p 7p 9s 9s E E"))
        assert isinstance(result, Special)
        assert result.kind == FanId.SEVEN_PAIRS

    def test_seven_shifted_pairs_preferred(self):
        """Test consecutive single-suit pairs are Seven Shifted Pairs"""
        result = decompose(hand("1m 1m 2m 2m 3m 3m 4m 4m 5m 5m 6m 6m 7m 7m"))
        assert isinstance(result, Special)
        assert result.kind == FanId.SEVEN_SHIFTED_PAIRS

    def test_greater_honors_and_knitted(self):
        """Test all seven honors plus seven knitted tiles"""
        result = decompose(hand("1m 4m 7m 2s 5s 8s 3p E S W N RD GD WD"))
        assert isinstance(result, Special)
        assert result.kind == FanId.GREATER_HONORS_AND_KNITTED

    def test_lesser_honors_and_knitted(self):
        """Test a full knitted set plus five honors"""
        result = decompose(hand("1m 4m 7m 2s 5s 8s 3p 6p 9p E S W N RD"))
        assert isinstance(result, Special)
        assert result.kind == FanId.LESSER_HONORS_AND_KNITTED

    def test_special_needs_concealed_hand(self):
        """Test declared melds disable special-shape detection"""
        counts = np.zeros(34, dtype=np.int8)
        assert find_special_hand(counts) is None

        h = hand("1m 1m 1m 2m 3m 4m 5m 6m 7m 8m 9m", melds=[pung(char(9), concealed=False)])
        result = decompose(h)
        assert isinstance(result, Standard)

    def test_knitted_arrangements(self):
        """Test the six suit permutations of 147/258/369"""
        assert len(KNITTED_ARRANGEMENTS) == 6
        for arrangement in KNITTED_ARRANGEMENTS:
            assert sorted(suit for suit, _ in arrangement) == sorted(
                [TileSuit.CHARACTERS, TileSuit.BAMBOOS, TileSuit.DOTS]
            )
            assert [base for _, base in arrangement] == [1, 2, 3]


class TestStandardDecomposition:
    """Test 4 sets + pair enumeration"""

    def test_single_reading(self):
        """Test a hand with exactly one decomposition"""
        h = hand("2m 3m 4m 2m 3m 4m 5m 6m 7m 6m 7m 8m 8m 8m")
        result = decompose(h)

        assert isinstance(result, Standard)
        assert len(result.decompositions) == 1
        d = result.decompositions[0]
        assert d.pair == pair(char(8))
        assert sorted(m.base for m in d.chows) == [2, 2, 5, 6]
        assert_partitions(result, h)

    def test_multiple_readings(self):
        """Test triplets of consecutive tiles read as pungs or as chows"""
        h = hand("1m 1m 1m 2m 2m 2m 3m 3m 3m 5p 5p 5p 9s 9s")
        result = decompose(h)

        assert isinstance(result, Standard)
        assert len(result.decompositions) == 2
        pungs_first, chows_second = result.decompositions
        assert len(pungs_first.pungs) == 4
        assert len(chows_second.chows) == 3
        assert chows_second.chows[0] == chow(char(1))
        assert_partitions(result, h)

    def test_enumeration_is_deterministic(self):
        """Test repeated runs give the same decompositions in the same order"""
        h = hand("1m 1m 1m 2m 2m 2m 3m 3m 3m 4m 4m 5p 5p 5p")
        first = decompose(h)
        second = decompose(h)

        assert isinstance(first, Standard)
        assert [str(d) for d in first.decompositions] == [str(d) for d in second.decompositions]
        assert_partitions(first, h)

    def test_declared_melds_fixed(self):
        """Test declared melds lead every decomposition"""
        declared = [chow(dot(3), concealed=False)]
        h = hand("1m 1m 1m 2m 3m 4m 7s 8s 9s 5p 5p", melds=declared)
        result = decompose(h)

        assert isinstance(result, Standard)
        for d in result.decompositions:
            assert d.melds[0] == chow(dot(3))
            assert not d.melds[0].is_concealed
        assert_partitions(result, h)

    def test_declared_kong(self):
        """Test a declared kong adds one tile to the required count"""
        h = hand("2m 3m 4m 5p 6p 7p 7s 8s 9s 5m 5m")
        assert isinstance(decompose(h), Invalid)

        h = hand("2m 3m 4m 5p 6p 7p 7s 8s 9s 5m 5m", melds=[kong(EAST)])
        result = decompose(h)
        assert isinstance(result, Standard)
        assert result.decompositions[0].kongs == [kong(EAST)]

    def test_knitted_straight_reading(self):
        """Test knitted triples plus one set and a pair"""
        h = hand("1m 4m 7m 2s 5s 8s 3p 6p 9p 2m 3m 4m E E")
        result = decompose(h)

        assert isinstance(result, Standard)
        assert len(result.decompositions) == 1
        d = result.decompositions[0]
        assert len(d.knitted) == 3
        assert knitted(TileSuit.CHARACTERS, 1) in d.knitted
        assert d.chows == [chow(char(2))]
        assert d.pair == pair(EAST)
        assert sorted(t.description for t in d.tiles) == sorted(t.description for t in h.non_bonus_tiles)


class TestPartitionSets:
    """Test the recursive set partitioner"""

    def test_pung_tried_before_chow(self):
        """Test pung readings come before chow readings"""
        counts = hand("1m 1m 1m 2m 2m 2m 3m 3m 3m").concealed_counts()
        readings = partition_sets(counts, 3)

        assert len(readings) == 2
        assert all(m.meld_type == MeldType.PUNG for m in readings[0])
        assert all(m.meld_type == MeldType.CHOW for m in readings[1])

    def test_input_not_modified(self):
        """Test branches work on copies of the counts"""
        counts = hand("1m 2m 3m 4m 5m 6m").concealed_counts()
        before = counts.copy()
        partition_sets(counts, 2)
        assert np.array_equal(counts, before)

    def test_honors_only_pung(self):
        """Test honor tiles never form chows"""
        counts = hand("E S W").concealed_counts()
        assert partition_sets(counts, 1) == []

    def test_wrong_set_count(self):
        """Test leftover tiles fail the partition"""
        counts = hand("1m 2m 3m 4m").concealed_counts()
        assert partition_sets(counts, 1) == []
        assert partition_sets(counts, 2) == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
