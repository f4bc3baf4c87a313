"""Compatibility evaluation of a declared range against catalog entries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from catalog.catalog import CatalogEntry
from versioning.models import CompatibilityRange, compare


class EvaluationKind(Enum):
    """Outcome of comparing one target against a declared range."""
    IN_RANGE = "IN_RANGE"
    BELOW_RANGE = "BELOW_RANGE"
    ABOVE_RANGE = "ABOVE_RANGE"
    UNBOUNDED_ABOVE = "UNBOUNDED_ABOVE"


@dataclass(frozen=True)
class EvaluationResult:
    """Tagged evaluation outcome.

    ``distance`` is the number of branch increments separating the target
    from the violated bound; it is set only for BELOW_RANGE and ABOVE_RANGE.
    """
    kind: EvaluationKind
    distance: Optional[int] = None

    @classmethod
    def in_range(cls) -> "EvaluationResult":
        return cls(EvaluationKind.IN_RANGE)

    @classmethod
    def below(cls, distance: int) -> "EvaluationResult":
        return cls(EvaluationKind.BELOW_RANGE, distance)

    @classmethod
    def above(cls, distance: int) -> "EvaluationResult":
        return cls(EvaluationKind.ABOVE_RANGE, distance)

    @classmethod
    def unbounded_above(cls) -> "EvaluationResult":
        return cls(EvaluationKind.UNBOUNDED_ABOVE)

    @property
    def is_out_of_range(self) -> bool:
        return self.kind in (EvaluationKind.BELOW_RANGE, EvaluationKind.ABOVE_RANGE)

    def __str__(self) -> str:
        if self.distance is None:
            return self.kind.value
        return f"{self.kind.value}({self.distance})"


def evaluate(compat_range: CompatibilityRange, target: CatalogEntry) -> EvaluationResult:
    """Classify target against compat_range.

    Bounds are inclusive. An open-ended range never reports IN_RANGE for
    targets at or above its lower bound: unreleased IDE versions cannot be
    verified, so those targets are UNBOUNDED_ABOVE.
    """
    build = target.build_number
    if compare(build, compat_range.lower) < 0:
        return EvaluationResult.below(compat_range.lower.branch - build.branch)
    if compat_range.upper is None:
        return EvaluationResult.unbounded_above()
    if compare(build, compat_range.upper) > 0:
        return EvaluationResult.above(build.branch - compat_range.upper.branch)
    return EvaluationResult.in_range()


def evaluate_all(
    compat_range: CompatibilityRange,
    targets: Iterable[CatalogEntry],
) -> List[Tuple[CatalogEntry, EvaluationResult]]:
    """Evaluate each target, preserving input order."""
    return [(entry, evaluate(compat_range, entry)) for entry in targets]
