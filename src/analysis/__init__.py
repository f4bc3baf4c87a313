"""Compatibility analysis.

- evaluator.py: classify catalog entries against a declared range
- issues.py: externally supplied API usage issues
- reporter.py: structured report assembly and text rendering
"""

from .evaluator import EvaluationKind, EvaluationResult, evaluate, evaluate_all
from .issues import ApiUsageIssue, IssueKind, load_issues
from .reporter import Report, SuggestedRange, TargetResult, render_text, report

__all__ = [
    "EvaluationKind",
    "EvaluationResult",
    "evaluate",
    "evaluate_all",
    "ApiUsageIssue",
    "IssueKind",
    "load_issues",
    "Report",
    "SuggestedRange",
    "TargetResult",
    "render_text",
    "report",
]
