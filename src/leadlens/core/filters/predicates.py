"""Predicate variants for record filtering.

Each predicate is configured with field accessors, so the same variants
serve both session summaries and lead records. A predicate whose parameter
is at its disabled value reports ``is_active == False`` and matches every
record.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from leadlens.core.dates import is_before
from leadlens.core.models import DateRange

R = TypeVar("R")
R_contra = TypeVar("R_contra", contravariant=True)

TextAccessor = Callable[[Any], Iterable[str]]
InstantAccessor = Callable[[Any], datetime]

ALL = "all"
WITH_MESSAGE = "with_message"
WITHOUT_MESSAGE = "without_message"

PRESENCE_MODES = frozenset({ALL, WITH_MESSAGE, WITHOUT_MESSAGE})


@runtime_checkable
class Predicate(Protocol[R_contra]):
    """A single filter criterion over one record type."""

    @property
    def is_active(self) -> bool:
        """Whether the predicate constrains anything."""
        ...

    def evaluate(self, record: R_contra) -> bool:
        """Return True if the record satisfies the criterion."""
        ...


@dataclass(frozen=True)
class SubstringPredicate(Generic[R]):
    """Case-insensitive containment against any of several text fields."""

    text: str
    fields: tuple[TextAccessor, ...]

    @property
    def is_active(self) -> bool:
        return bool(self.text)

    def evaluate(self, record: R) -> bool:
        if not self.is_active:
            return True
        needle = self.text.lower()
        return any(
            needle in value.lower()
            for accessor in self.fields
            for value in accessor(record)
        )


@dataclass(frozen=True)
class DateOverlapPredicate(Generic[R]):
    """Match records whose [start, end] interval intersects the range."""

    date_range: DateRange
    start_of: InstantAccessor
    end_of: InstantAccessor

    @property
    def is_active(self) -> bool:
        return not self.date_range.is_empty

    def evaluate(self, record: R) -> bool:
        start, end = self.date_range.start, self.date_range.end
        if start is not None and is_before(self.end_of(record), start):
            return False
        if end is not None and is_before(end, self.start_of(record)):
            return False
        return True


@dataclass(frozen=True)
class DateContainmentPredicate(Generic[R]):
    """Match records whose single instant falls inside the range, inclusive."""

    date_range: DateRange
    instant_of: InstantAccessor

    @property
    def is_active(self) -> bool:
        return not self.date_range.is_empty

    def evaluate(self, record: R) -> bool:
        instant = self.instant_of(record)
        start, end = self.date_range.start, self.date_range.end
        if start is not None and is_before(instant, start):
            return False
        if end is not None and is_before(end, instant):
            return False
        return True


@dataclass(frozen=True)
class MinimumPredicate(Generic[R]):
    """Match records whose numeric value is at least ``minimum``.

    A minimum of zero or below disables the predicate.
    """

    minimum: int
    value_of: Callable[[Any], int]

    @property
    def is_active(self) -> bool:
        return self.minimum > 0

    def evaluate(self, record: R) -> bool:
        if not self.is_active:
            return True
        return self.value_of(record) >= self.minimum


@dataclass(frozen=True)
class CategoricalPredicate(Generic[R]):
    """Match records where any categorical value equals ``selected``.

    ``selected`` equal to one of ``disabled_values`` disables the predicate.
    """

    selected: str
    values_of: TextAccessor
    disabled_values: frozenset[str] = frozenset({"", ALL})

    @property
    def is_active(self) -> bool:
        return self.selected not in self.disabled_values

    def evaluate(self, record: R) -> bool:
        if not self.is_active:
            return True
        return any(value == self.selected for value in self.values_of(record))


@dataclass(frozen=True)
class PresencePredicate(Generic[R]):
    """Match on whether a text field is non-blank.

    ``mode`` is one of "all", "with_message", "without_message"; anything
    else behaves like "all".
    """

    mode: str
    value_of: Callable[[Any], str]

    @property
    def is_active(self) -> bool:
        return self.mode in (WITH_MESSAGE, WITHOUT_MESSAGE)

    def evaluate(self, record: R) -> bool:
        if not self.is_active:
            return True
        present = bool(self.value_of(record).strip())
        return present if self.mode == WITH_MESSAGE else not present
