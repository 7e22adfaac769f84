"""
Meld usage tracking for one detection run.

Enforces the Non-Repeat principle: once a fan has claimed a meld, no other
fan in the same run may claim it. Melds are compared by their sorted tile
descriptions, so two separately built melds over the same tiles are the
same meld here.
"""

from typing import Iterable, List, Set

from .melds import Meld, MeldKey


class MeldTracker:
    """Records which melds have been claimed during one detection run"""

    def __init__(self):
        self._used: Set[MeldKey] = set()

    def is_used(self, meld: Meld) -> bool:
        return meld.key in self._used

    def mark_used(self, meld: Meld) -> None:
        """Claim a meld. Claiming it again is a no-op."""
        self._used.add(meld.key)

    def mark_used_multiple(self, melds: Iterable[Meld]) -> None:
        for meld in melds:
            self.mark_used(meld)

    def any_used(self, melds: Iterable[Meld]) -> bool:
        """True if at least one of ``melds`` is already claimed"""
        return any(self.is_used(meld) for meld in melds)

    def unused_of(self, melds: Iterable[Meld]) -> List[Meld]:
        """Filter out claimed melds, keeping order"""
        return [meld for meld in melds if not self.is_used(meld)]

    def reset(self) -> None:
        self._used.clear()

    @property
    def used_count(self) -> int:
        """Number of distinct claimed melds"""
        return len(self._used)

    def __contains__(self, meld: Meld) -> bool:
        return self.is_used(meld)

    def __repr__(self) -> str:
        return f"MeldTracker({sorted('-'.join(key) for key in self._used)})"
