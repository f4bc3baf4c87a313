"""Diagnostic report assembly and rendering.

Turns evaluator output and externally supplied API usage issues into a
stable, sorted report. Inputs are never mutated; the report holds tuples.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from catalog.catalog import CatalogEntry
from versioning.models import CompatibilityRange

from .evaluator import EvaluationKind, EvaluationResult
from .issues import ApiUsageIssue


@dataclass(frozen=True)
class TargetResult:
    entry: CatalogEntry
    result: EvaluationResult

    def to_dict(self) -> Dict[str, Any]:
        data = self.entry.to_dict()
        data["outcome"] = self.result.kind.value
        data["distance"] = self.result.distance
        return data


@dataclass(frozen=True)
class SuggestedRange:
    """Minimal range adjustment bringing every requested target in range.

    A bound is None when it does not need to change.
    """
    since_build: Optional[str]
    until_build: Optional[str]
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"sinceBuild": self.since_build, "untilBuild": self.until_build, "text": self.text}


@dataclass(frozen=True)
class Report:
    summary: Dict[str, int]
    per_target: Tuple[TargetResult, ...]
    groups: Dict[str, Tuple[str, ...]]
    suggested_range: Optional[SuggestedRange]
    issues: Tuple[ApiUsageIssue, ...]
    unverified: Tuple[str, ...] = ()
    notes: Tuple[str, ...] = ()
    declared_range: Optional[CompatibilityRange] = None

    @property
    def has_incompatible(self) -> bool:
        return any(t.result.is_out_of_range for t in self.per_target)

    @property
    def has_warnings(self) -> bool:
        """Open-ended support, unverifiable targets, or flagged API usage."""
        return bool(
            self.summary.get(EvaluationKind.UNBOUNDED_ABOVE.value)
            or self.unverified
            or self.issues
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "declaredRange": self.declared_range.to_dict() if self.declared_range else None,
            "summary": dict(self.summary),
            "perTarget": [t.to_dict() for t in self.per_target],
            "groups": {k: list(v) for k, v in self.groups.items()},
            "suggestedRange": self.suggested_range.to_dict() if self.suggested_range else None,
            "issues": [i.to_dict() for i in self.issues],
            "unverified": list(self.unverified),
            "notes": list(self.notes),
        }


def _suggest_range(
    per_target: Sequence[TargetResult],
    declared_range: Optional[CompatibilityRange],
) -> Optional[SuggestedRange]:
    below = [t.entry.branch for t in per_target if t.result.kind == EvaluationKind.BELOW_RANGE]
    above = [t.entry.branch for t in per_target if t.result.kind == EvaluationKind.ABOVE_RANGE]
    unbounded = [t for t in per_target if t.result.kind == EvaluationKind.UNBOUNDED_ABOVE]
    if not below and not above and not unbounded:
        return None

    since = str(min(below)) if below else None
    if above:
        until = f"{max(above)}.*"
    elif unbounded or (declared_range is not None and declared_range.upper is None):
        # an open upper edge never evaluates IN_RANGE
        until = f"{max(t.entry.branch for t in per_target)}.*"
    else:
        until = None

    parts = []
    if since is not None:
        old = f" (currently {declared_range.since_build})" if declared_range else ""
        parts.append(f"sinceBuild to {since}{old}")
    if until is not None:
        old = ""
        if declared_range:
            old = f" (currently {declared_range.until_build or 'unset'})"
        parts.append(f"untilBuild to {until}{old}")
    text = "Set " + " and ".join(parts) + " to cover every requested target."
    return SuggestedRange(since_build=since, until_build=until, text=text)


def _range_notes(declared_range: Optional[CompatibilityRange]) -> Tuple[str, ...]:
    if declared_range is None:
        return ()
    upper = declared_range.upper
    if upper is None:
        return (
            "untilBuild is not set: compatibility with future IDE releases cannot be verified.",
        )
    if not upper.has_wildcard:
        return (
            f"untilBuild '{upper}' has no wildcard, so later builds of branch {upper.branch} "
            f"are excluded; consider '{upper.branch}.*'.",
        )
    return ()


def report(
    results: Iterable[Tuple[CatalogEntry, EvaluationResult]],
    issues: Iterable[ApiUsageIssue] = (),
    declared_range: Optional[CompatibilityRange] = None,
    unverified: Iterable[str] = (),
) -> Report:
    """Build a Report from (entry, result) pairs and API usage issues.

    Args:
        results: Evaluator output, in any order.
        issues: Issues from the external analysis step, passed through as-is.
        declared_range: The evaluated range, used for notes and suggestion text.
        unverified: Requested targets the catalog could not resolve.

    Returns:
        Report with per_target sorted by build number ascending.
    """
    per_target = tuple(
        sorted(
            (TargetResult(entry, result) for entry, result in results),
            key=lambda t: t.entry.build_number.sort_key(),
        )
    )

    summary = {kind.value: 0 for kind in EvaluationKind}
    grouped: Dict[str, List[str]] = {kind.value: [] for kind in EvaluationKind}
    for t in per_target:
        summary[t.result.kind.value] += 1
        grouped[t.result.kind.value].append(t.entry.marketing_version)

    return Report(
        summary=summary,
        per_target=per_target,
        groups={k: tuple(v) for k, v in grouped.items()},
        suggested_range=_suggest_range(per_target, declared_range),
        issues=tuple(issues),
        unverified=tuple(unverified),
        notes=_range_notes(declared_range),
        declared_range=declared_range,
    )


def render_text(rep: Report) -> str:
    """Human-readable rendering for console output."""
    lines = []
    if rep.declared_range is not None:
        lines.append(f"Declared range: {rep.declared_range}")
    for t in rep.per_target:
        lines.append(
            f"  {t.entry.marketing_version:<10} {str(t.entry.build_number):<18} "
            f"{t.result}  [{t.entry.recommended_toolchain}]"
        )
    lines.append("Summary: " + ", ".join(f"{k}={v}" for k, v in rep.summary.items()))
    if rep.unverified:
        lines.append("Cannot verify (not in catalog): " + ", ".join(rep.unverified))
    if rep.suggested_range is not None:
        lines.append("Suggestion: " + rep.suggested_range.text)
    for note in rep.notes:
        lines.append("Note: " + note)
    if rep.issues:
        lines.append(f"API usage issues ({len(rep.issues)}):")
        for issue in rep.issues:
            line = f"  [{issue.kind.value}] {issue.location}"
            if issue.message:
                line += f": {issue.message}"
            if issue.replacement:
                line += f" -> {issue.replacement}"
            lines.append(line)
    return "\n".join(lines)
