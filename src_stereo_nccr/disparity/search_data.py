"""
Data structures shared by the disparity search components.

SearchParameters is the immutable per-invocation input of the engine and
SearchRegion describes the block of output pixels the engine writes.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any


@dataclass(frozen=True)
class SearchParameters:
    """
    Parameters of one disparity search.

    Offset ``k`` inside the search strip corresponds to the true disparity
    ``max_disparity - k``.
    """

    num_disparities: int = 64
    min_disparity: int = 0
    block_size: int = 21

    @property
    def half_block(self) -> int:
        return self.block_size // 2

    @property
    def max_disparity(self) -> int:
        return self.num_disparities + self.min_disparity

    @property
    def strip_width(self) -> int:
        return self.block_size + self.num_disparities

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SearchRegion:
    """Half-open row and column ranges of the pixels the engine writes."""

    row_start: int
    row_stop: int
    col_start: int
    col_stop: int

    @property
    def rows(self) -> range:
        return range(self.row_start, self.row_stop)

    @property
    def cols(self) -> range:
        return range(self.col_start, self.col_stop)

    @property
    def is_empty(self) -> bool:
        return self.row_stop <= self.row_start or self.col_stop <= self.col_start

    @property
    def pixel_count(self) -> int:
        if self.is_empty:
            return 0
        return (self.row_stop - self.row_start) * (self.col_stop - self.col_start)

    def as_slices(self):
        """Return ``(row_slice, col_slice)`` for indexing a map; empty regions give empty slices."""
        if self.is_empty:
            return slice(0, 0), slice(0, 0)
        return slice(self.row_start, self.row_stop), slice(self.col_start, self.col_stop)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'rows': [self.row_start, self.row_stop],
            'cols': [self.col_start, self.col_stop],
            'pixel_count': self.pixel_count
        }
