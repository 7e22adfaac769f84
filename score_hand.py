#!/usr/bin/env python3
"""
Score a winning MCR Mahjong hand from the command line.

Usage:
    # Concealed self-drawn hand with two flowers
    python score_hand.py 2m 3m 4m 5m 6m 7m 3p 4p 5p 6s 7s 8s 5p 5p F1 F2 --self-draw --concealed

    # Win on a discard, with payouts
    python score_hand.py 1m 9m 1s 9s 1p 9p E S W N RD GD WD 1m --winner East --discarder South

    # Declared melds: the held tiles are given without them
    python score_hand.py 5p 5p --meld pung:E --meld chow:3p --meld kong:7s --meld ckong:RD --self-draw
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from mcr_scorer.tiles import WindType, parse_tiles
from mcr_scorer.melds import meld_from_string
from mcr_scorer.hand import Hand
from mcr_scorer.detection import DetectionContext, WaitType
from mcr_scorer.scoring import MCRScorer
from mcr_scorer.payout import calculate_payout
from mcr_scorer.rules import RULE_SETS

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

WINDS = {"E": WindType.EAST, "S": WindType.SOUTH, "W": WindType.WEST, "N": WindType.NORTH}
WAITS = {"edge": WaitType.EDGE, "closed": WaitType.CLOSED, "single": WaitType.SINGLE}


def build_context(args, rules) -> DetectionContext:
    """Turn command-line flags into resolved game-state flags."""
    winner = args.winner or rules.player_ids[0]
    return DetectionContext(
        is_concealed=args.concealed,
        is_self_draw=args.self_draw,
        prevalent_wind=WINDS[args.prevalent_wind] if args.prevalent_wind else None,
        seat_wind=WINDS[args.seat_wind] if args.seat_wind else None,
        wait=WAITS[args.wait] if args.wait else None,
        is_last_tile=args.last_tile,
        is_last_wall_tile=args.last_wall_tile,
        is_replacement_tile=args.replacement,
        is_robbing_kong=args.robbing_kong,
        winner_id=winner,
        discarder_id=args.discarder,
        other_player_ids=tuple(p for p in rules.player_ids if p != winner),
    )


def main():
    parser = argparse.ArgumentParser(
        description="Score a Chinese Official (MCR) Mahjong hand",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Tiles:
    1m-9m characters, 1s-9s bamboos, 1p-9p dots,
    E S W N winds, RD GD WD dragons, F1-F8 flowers

Examples:
    python score_hand.py 2m 3m 4m 2m 3m 4m 5m 6m 7m 6m 7m 8m 8m 8m
    python score_hand.py 1m 1m 1m 5p 5p 5p 7s 8s 9s E E E 2m 2m --seat-wind E --discarder North
    python score_hand.py 2m 3m 4m 9p 9p --meld pung:E --meld chow:5s --meld pung:1m --discarder West
        """
    )

    parser.add_argument("tiles", nargs="+",
                       help="Tiles held in hand, flowers included")
    parser.add_argument("--meld", action="append", default=[], type=meld_from_string,
                       help="Declared meld, e.g. pung:E, chow:2m, kong:5p, ckong:RD (repeatable)")
    parser.add_argument("--self-draw", action="store_true",
                       help="Won by drawing the tile from the wall")
    parser.add_argument("--concealed", action="store_true",
                       help="No tiles were claimed from discards")
    parser.add_argument("--prevalent-wind", type=str.upper, choices=list(WINDS),
                       help="Prevalent (round) wind")
    parser.add_argument("--seat-wind", type=str.upper, choices=list(WINDS),
                       help="Winner's seat wind")
    parser.add_argument("--wait", type=str, choices=list(WAITS),
                       help="How the winning tile completed the hand")
    parser.add_argument("--last-tile", action="store_true",
                       help="Winning tile was the last copy still unseen")
    parser.add_argument("--last-wall-tile", action="store_true",
                       help="Won on the last tile of the wall")
    parser.add_argument("--replacement", action="store_true",
                       help="Won on a kong replacement tile")
    parser.add_argument("--robbing-kong", action="store_true",
                       help="Won by robbing another player's kong")
    parser.add_argument("--rules", type=str, default="mcr", choices=list(RULE_SETS),
                       help="Rule preset")
    parser.add_argument("--winner", type=str, default=None,
                       help="Winning player id (default: first seat)")
    parser.add_argument("--discarder", type=str, default=None,
                       help="Player who discarded the winning tile")
    parser.add_argument("-v", "--verbose", action="store_true",
                       help="Show debug logging")

    args = parser.parse_args()
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    rules = RULE_SETS[args.rules]
    if args.winner is not None and args.winner not in rules.player_ids:
        parser.error(f"--winner must be one of {', '.join(rules.player_ids)}")

    hand = Hand(tuple(parse_tiles(" ".join(args.tiles))), tuple(args.meld))
    logger.info(f"Scoring {hand} under {rules.name}")

    context = build_context(args, rules)
    result = MCRScorer(rules).score(hand, context)
    print(result.summary())

    if not result.is_valid:
        sys.exit(1)

    if args.self_draw or args.discarder:
        try:
            payout = calculate_payout(result.total_points, context, rules)
        except ValueError as e:
            logger.error(f"Cannot compute payout: {e}")
            sys.exit(1)
        print("Payout:")
        for player, delta in payout.items():
            print(f"  {player:>8}: {delta:+d}")


if __name__ == "__main__":
    main()
