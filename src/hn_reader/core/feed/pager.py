"""Cursor over the ordered id list of a feed."""

from collections.abc import Sequence


class FeedPager:
    """Hands out consecutive fixed-size slices of a feed's id list.

    The cursor only moves forward. Not safe for concurrent callers; the
    owning controller serializes access.
    """

    def __init__(self, ordered_ids: Sequence[int]) -> None:
        self.ordered_ids: tuple[int, ...] = tuple(ordered_ids)
        self.cursor = 0

    def __len__(self) -> int:
        return len(self.ordered_ids)

    @property
    def remaining(self) -> int:
        return len(self.ordered_ids) - self.cursor

    @property
    def exhausted(self) -> bool:
        return self.cursor >= len(self.ordered_ids)

    def next_batch(self, batch_size: int) -> list[int]:
        """Return the next ``batch_size`` ids (fewer at the end, none once exhausted)."""
        if batch_size <= 0:
            msg = f"batch_size must be positive, got {batch_size!r}"
            raise ValueError(msg)
        batch = list(self.ordered_ids[self.cursor : self.cursor + batch_size])
        self.cursor += len(batch)
        return batch
