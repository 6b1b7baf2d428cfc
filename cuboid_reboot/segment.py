"""Closed integer intervals on a single axis.

A Segment covers the cells ``start, start+1, ..., start+len``. Both ends are
included, so a segment with ``len == 0`` is a single cell. All set operations
here are exact and return small owned lists, which the cube decomposition
walks in a fixed order.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from cuboid_reboot.errors import ValidationError
from cuboid_reboot.utils import check_i64, normalize_range, require_int

T = TypeVar("T")


@dataclass(frozen=True)
class Overlap(Generic[T]):
    """A piece of a decomposition, tagged with whether it lies inside the other operand."""

    value: T
    is_overlapping: bool

    @classmethod
    def overlap(cls, value: T) -> "Overlap[T]":
        return cls(value, True)

    @classmethod
    def non_overlap(cls, value: T) -> "Overlap[T]":
        return cls(value, False)


@dataclass(frozen=True, order=True)
class Segment:
    """The closed interval ``[start, start + len]`` on one axis.

    Segments are immutable values compared and ordered by ``(start, len)``.
    Both endpoints must fit a signed 64-bit integer.

    Raises:
        ValidationError: If ``start`` or ``len`` is not an integer, or ``len`` is negative
        SegmentOverflowError: If ``start`` or ``start + len`` leaves the signed 64-bit range
    """

    start: int
    len: int

    def __post_init__(self):
        start = require_int(self.start, "start")
        length = require_int(self.len, "len")
        if length < 0:
            raise ValidationError(f"Segment length must be non-negative, got {length}")
        check_i64(start, "segment start")
        check_i64(start + length, "segment end")
        # Unwrap numpy scalars so hashing and equality stay plain-int
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "len", length)

    @classmethod
    def from_ends(cls, start: int, end: int) -> "Segment":
        """Build a segment from two inclusive ends given in either order."""
        start = require_int(start, "start")
        end = require_int(end, "end")
        return cls(min(start, end), abs(start - end))

    @classmethod
    def from_slice(cls, idx: int | slice) -> "Segment":
        """Build a segment from a coordinate or a half-open unit-step slice."""
        start, end = normalize_range(idx)
        return cls.from_ends(start, end)

    @property
    def end(self) -> int:
        return self.start + self.len

    @property
    def cells(self) -> int:
        """Number of cells covered (``len + 1``)."""
        return self.len + 1

    def intersects(self, other: "Segment") -> bool:
        return other.end >= self.start and other.start <= self.end

    def overlapping(self, other: "Segment") -> Optional["Segment"]:
        """Return the exact intersection with ``other``, or None if they are disjoint.

        The four intersecting cases are distinguished by where ``other``'s
        bounds fall relative to ``self``:

        1. other's right edge inside self, left edge at or before self.start
        2. other strictly inside self
        3. other's left edge inside self, right edge at or after self.end
        4. other covers self entirely
        """
        if other.start <= self.start and other.end >= self.start and other.end < self.end:
            return Segment.from_ends(self.start, other.end)
        elif other.start > self.start and other.end < self.end:
            return other
        elif other.start > self.start and other.start <= self.end and other.end >= self.end:
            return Segment.from_ends(other.start, self.end)
        elif other.start <= self.start and other.end >= self.end:
            return self
        return None

    def non_overlapping(self, other: "Segment") -> list["Segment"]:
        """Return what is left of ``self`` after removing ``other``.

        The result holds at most two segments, always in the order left
        remainder then right remainder. When the segments do not intersect the
        result is ``[self]``; that case never combines with a left or right
        remainder.
        """
        pieces = []
        if other.start > self.start and other.start <= self.end:
            pieces.append(Segment.from_ends(self.start, other.start - 1))
        if other.end >= self.start and other.end < self.end:
            pieces.append(Segment.from_ends(other.end + 1, self.end))
        if other.end < self.start or other.start > self.end:
            pieces.append(self)
        return pieces

    def parts(self, other: "Segment") -> list[Overlap["Segment"]]:
        """Split ``self`` against ``other``: the overlap first, then the remainders."""
        parts = []
        overlap = self.overlapping(other)
        if overlap is not None:
            parts.append(Overlap.overlap(overlap))
        parts.extend(Overlap.non_overlap(piece) for piece in self.non_overlapping(other))
        return parts

    def try_adding(self, other: "Segment") -> Optional["Segment"]:
        """Merge with ``other`` when the two are directly adjacent, else None."""
        length = self.len + other.len + 1
        if self.end == other.start - 1:
            return Segment(self.start, length)
        elif other.end == self.start - 1:
            return Segment(other.start, length)
        return None

    def to_slice(self) -> slice:
        """Half-open Python slice covering the same cells."""
        return slice(self.start, self.end + 1)

    # --- Serialization helpers ---
    def to_dict(self) -> dict:
        return {'start': self.start, 'len': self.len}

    @classmethod
    def from_dict(cls, data: dict) -> "Segment":
        return cls(int(data['start']), int(data['len']))

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"
