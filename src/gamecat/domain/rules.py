"""Cross-field rules: business invariants spanning more than one field.

Each rule is a pure function of the best-effort normalized record to a
list of Issues. Rules never mutate the record and never assume other
rules (or field validation) succeeded: a value of the wrong shape simply
makes the rule silent.

Every rule declares the field paths it reads in :attr:`inputs`.
:class:`~gamecat.domain.variants.VariantSchema` uses them twice:

- at construction time, to prove every input exists in the field tree;
- at validation time, to treat a rule as indeterminate (no issue) when
  one of its inputs already failed field-level validation.

Rule families:

- :class:`RequiredForCategories`: conditional requiredness by category
- :class:`MutuallyExclusive`: one-of pairing (exactly one, or at most one)
- :class:`LinkedNullability`: effect and value jointly null or present
- :class:`PositiveOnlyForCategory`: numeric gated on a category literal
- :class:`VocabularyByCategory`: subtype vocabulary chosen by category
- :class:`DerivedPathEquals`: field equals a template over siblings
- :class:`OrderedPair`: ``first <= second`` for a two-item tuple
- :class:`NotAllNull`: at least one member of a group is set
"""

from __future__ import annotations

import string
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from gamecat.domain.constraints import MISSING, is_number
from gamecat.domain.issues import FieldPath, Issue, format_path, parse_path
from gamecat.domain.types import ErrorKind

CATEGORY_FIELD = "category"


def resolve(record: Any, path: FieldPath) -> Any:
    """Follow *path* through nested mappings and sequences.

    Returns :data:`MISSING` as soon as a segment cannot be followed.
    """
    current = record
    for segment in path:
        if isinstance(segment, int):
            if isinstance(current, (str, bytes)) or not isinstance(current, Sequence):
                return MISSING
            if not 0 <= segment < len(current):
                return MISSING
            current = current[segment]
        else:
            if not isinstance(current, Mapping) or segment not in current:
                return MISSING
            current = current[segment]
    return current


def _is_set(value: Any) -> bool:
    return value is not None and value is not MISSING


class CrossFieldRule(ABC):
    """Abstract base class for cross-field business rules."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier used in logs and schema export."""
        ...

    @property
    @abstractmethod
    def inputs(self) -> tuple[FieldPath, ...]:
        """Field paths this rule reads."""
        ...

    @abstractmethod
    def evaluate(self, record: Mapping[str, Any]) -> list[Issue]:
        """Return the violations of this rule in *record* (possibly none)."""
        ...

    @abstractmethod
    def describe(self) -> str:
        """Human-readable statement of the invariant."""
        ...

    @staticmethod
    def violation(path: FieldPath, message: str) -> Issue:
        return Issue(path=path, code=ErrorKind.CROSS_FIELD_INVARIANT_VIOLATION, message=message)


class RequiredForCategories(CrossFieldRule):
    """*target* must be non-null when the category is in *categories*."""

    def __init__(self, target: str, categories: Iterable[str]) -> None:
        self._target = parse_path(target)
        self._categories = tuple(categories)

    @property
    def name(self) -> str:
        return f"required-for-categories:{format_path(self._target)}"

    @property
    def inputs(self) -> tuple[FieldPath, ...]:
        return ((CATEGORY_FIELD,), self._target)

    def evaluate(self, record: Mapping[str, Any]) -> list[Issue]:
        category = record.get(CATEGORY_FIELD)
        if category not in self._categories:
            return []
        if resolve(record, self._target) is not None:
            return []
        label = self._target[-1]
        return [self.violation(self._target, f"{label} cannot be null for {category}")]

    def describe(self) -> str:
        return (
            f"{format_path(self._target)} must not be null when category is one of: "
            f"{', '.join(self._categories)}"
        )


class MutuallyExclusive(CrossFieldRule):
    """At most one member of *parent* may be set; with *require_one*, exactly one.

    The issue is reported at *parent*, since both members are implicated.
    A null or absent parent object is not checked.
    """

    def __init__(self, parent: str, members: Sequence[str], *, require_one: bool = True) -> None:
        self._parent = parse_path(parent)
        self._members = tuple(members)
        self._require_one = require_one

    @property
    def name(self) -> str:
        return f"mutually-exclusive:{format_path(self._parent)}"

    @property
    def inputs(self) -> tuple[FieldPath, ...]:
        return tuple((*self._parent, member) for member in self._members)

    def evaluate(self, record: Mapping[str, Any]) -> list[Issue]:
        container = resolve(record, self._parent)
        if not isinstance(container, Mapping):
            return []
        present = [m for m in self._members if _is_set(container.get(m, MISSING))]
        joined = " and ".join(self._members)
        if len(present) > 1:
            return [
                self.violation(
                    self._parent,
                    f"{joined} are mutually exclusive: only one of them may have a value",
                )
            ]
        if self._require_one and not present:
            either = " or ".join(self._members)
            return [self.violation(self._parent, f"one of {either} must have a value")]
        return []

    def describe(self) -> str:
        quantity = "exactly one" if self._require_one else "at most one"
        return f"{quantity} of {', '.join(self._members)} in {format_path(self._parent)} is set"


class LinkedNullability(CrossFieldRule):
    """*trigger* and *companion* are jointly null or jointly present.

    Violations are reported at *companion*.
    """

    def __init__(self, trigger: str, companion: str) -> None:
        self._trigger = parse_path(trigger)
        self._companion = parse_path(companion)

    @property
    def name(self) -> str:
        return f"linked-nullability:{format_path(self._trigger)}"

    @property
    def inputs(self) -> tuple[FieldPath, ...]:
        return (self._trigger, self._companion)

    def evaluate(self, record: Mapping[str, Any]) -> list[Issue]:
        trigger = resolve(record, self._trigger)
        companion = resolve(record, self._companion)
        if trigger is MISSING or companion is MISSING:
            return []
        trigger_name = self._trigger[-1]
        companion_name = self._companion[-1]
        if trigger is None and companion is not None:
            return [
                self.violation(
                    self._companion,
                    f"{companion_name} must be null if {trigger_name} is null",
                )
            ]
        if trigger is not None and companion is None:
            return [
                self.violation(
                    self._companion,
                    f"{companion_name} is required when {trigger_name} is present",
                )
            ]
        return []

    def describe(self) -> str:
        return (
            f"{format_path(self._trigger)} and {format_path(self._companion)} "
            "are both null or both set"
        )


class PositiveOnlyForCategory(CrossFieldRule):
    """*target* is > 0 when the category equals *category*, and exactly 0 otherwise."""

    def __init__(self, target: str, category: str) -> None:
        self._target = parse_path(target)
        self._category = category

    @property
    def name(self) -> str:
        return f"positive-only-for-category:{format_path(self._target)}"

    @property
    def inputs(self) -> tuple[FieldPath, ...]:
        return ((CATEGORY_FIELD,), self._target)

    def evaluate(self, record: Mapping[str, Any]) -> list[Issue]:
        value = resolve(record, self._target)
        if not is_number(value):
            return []
        label = format_path(self._target[-2:])
        if record.get(CATEGORY_FIELD) == self._category:
            if value > 0:
                return []
            message = f"{label} must be greater than 0 for {self._category}"
        else:
            if value == 0:
                return []
            message = f"{label} must be 0 unless category is {self._category}"
        return [self.violation(self._target, message)]

    def describe(self) -> str:
        return (
            f"{format_path(self._target)} is positive for {self._category} "
            "and zero for every other category"
        )


class VocabularyByCategory(CrossFieldRule):
    """*target* must belong to the vocabulary selected by the category."""

    def __init__(self, target: str, vocabularies: Mapping[str, Sequence[str]]) -> None:
        self._target = parse_path(target)
        self._vocabularies = {key: tuple(words) for key, words in vocabularies.items()}

    @property
    def name(self) -> str:
        return f"vocabulary-by-category:{format_path(self._target)}"

    @property
    def inputs(self) -> tuple[FieldPath, ...]:
        return ((CATEGORY_FIELD,), self._target)

    def evaluate(self, record: Mapping[str, Any]) -> list[Issue]:
        category = record.get(CATEGORY_FIELD)
        vocabulary = self._vocabularies.get(category) if isinstance(category, str) else None
        if vocabulary is None:
            return []
        value = resolve(record, self._target)
        if value is MISSING or value in vocabulary:
            return []
        return [
            self.violation(
                self._target,
                f"Invalid {self._target[-1]} for {category}, "
                f"expected one of: {', '.join(vocabulary)}",
            )
        ]

    def describe(self) -> str:
        parts = [f"{cat}: {', '.join(words)}" for cat, words in self._vocabularies.items()]
        return f"{format_path(self._target)} vocabulary by category ({'; '.join(parts)})"


class DerivedPathEquals(CrossFieldRule):
    """*target* must equal *template* formatted with sibling top-level fields.

    Template placeholders name the source fields, e.g.
    ``"/media/games/{gameSlug}/assets/{slug}-{type}-{gameSlug}.webp"``.
    """

    def __init__(self, target: str, template: str) -> None:
        self._target = parse_path(target)
        self._template = template
        self._sources = tuple(
            dict.fromkeys(
                name for _, name, _, _ in string.Formatter().parse(template) if name
            )
        )

    @property
    def name(self) -> str:
        return f"derived-path:{format_path(self._target)}"

    @property
    def inputs(self) -> tuple[FieldPath, ...]:
        return (*(parse_path(source) for source in self._sources), self._target)

    def evaluate(self, record: Mapping[str, Any]) -> list[Issue]:
        values = {source: record.get(source) for source in self._sources}
        if not all(isinstance(v, str) for v in values.values()):
            return []
        expected = self._template.format(**values)
        if resolve(record, self._target) == expected:
            return []
        return [
            self.violation(
                self._target,
                f"{format_path(self._target)} must be exactly: {expected}",
            )
        ]

    def describe(self) -> str:
        return f"{format_path(self._target)} == {self._template}"


class OrderedPair(CrossFieldRule):
    """For a two-item tuple at *target*, ``first <= second``; reported at ``target.0``."""

    def __init__(self, target: str, labels: tuple[str, str] = ("first", "second")) -> None:
        self._target = parse_path(target)
        self._labels = labels

    @property
    def name(self) -> str:
        return f"ordered-pair:{format_path(self._target)}"

    @property
    def inputs(self) -> tuple[FieldPath, ...]:
        return (self._target,)

    def evaluate(self, record: Mapping[str, Any]) -> list[Issue]:
        pair = resolve(record, self._target)
        if isinstance(pair, (str, bytes)) or not isinstance(pair, Sequence) or len(pair) != 2:
            return []
        first, second = pair
        if not (is_number(first) and is_number(second)) or first <= second:
            return []
        low, high = self._labels
        return [
            self.violation(
                (*self._target, 0),
                f"{low} cannot exceed {high}: {second}",
            )
        ]

    def describe(self) -> str:
        low, high = self._labels
        return f"{format_path(self._target)}: {low} <= {high}"


class NotAllNull(CrossFieldRule):
    """At least one member of the *parent* object must be non-null."""

    def __init__(self, parent: str, members: Sequence[str]) -> None:
        self._parent = parse_path(parent)
        self._members = tuple(members)

    @property
    def name(self) -> str:
        return f"not-all-null:{format_path(self._parent)}"

    @property
    def inputs(self) -> tuple[FieldPath, ...]:
        return tuple((*self._parent, member) for member in self._members)

    def evaluate(self, record: Mapping[str, Any]) -> list[Issue]:
        container = resolve(record, self._parent)
        if not isinstance(container, Mapping):
            return []
        if any(_is_set(container.get(m, MISSING)) for m in self._members):
            return []
        return [
            self.violation(
                self._parent,
                f"{', '.join(self._members)} cannot all be null",
            )
        ]

    def describe(self) -> str:
        return f"at least one of {', '.join(self._members)} in {format_path(self._parent)} is set"
