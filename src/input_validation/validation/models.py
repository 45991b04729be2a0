"""Validation data models.

This module defines the data structures shared by the registry and view models:
- ValidationEntry: A registered validator paired with its error message
- PropertyResult: Outcome of validating one property
- ValidationReport: Aggregated results for a whole view model
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional


@dataclass(frozen=True)
class ValidationEntry:
    """Validation rule for a single property.

    The validator takes no arguments; it reads whatever state it needs from
    the view model it closes over and is called again on every query.

    Attributes:
        validator: Zero-argument predicate, truthy when the property is valid.
        error_message: Message reported when ``validator`` fails.
    """

    validator: Callable[[], bool]
    error_message: str


@dataclass(frozen=True)
class PropertyResult:
    """Result of validating one property.

    Attributes:
        name: Property name.
        passed: True if the validator accepted the current state.
        message: Error message when failed, None when passed.
    """

    name: str
    passed: bool
    message: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate field constraints."""
        if self.passed and self.message is not None:
            raise ValueError("passed=True requires message=None")
        if not self.passed and not self.message:
            raise ValueError("passed=False requires an error message")


@dataclass
class ValidationReport:
    """Aggregated validation results for one view model.

    Attributes:
        model_name: Class name of the validated view model.
        results: One PropertyResult per registered property, in registration order.

    Examples:
        >>> report = vm.validate_all()
        >>> report.has_errors()
        True
        >>> report.get_error_count()
        1
    """

    model_name: str
    results: List[PropertyResult] = field(default_factory=list)

    def has_errors(self) -> bool:
        """Return True if any property failed validation."""
        return any(not r.passed for r in self.results)

    def get_error_count(self) -> int:
        """Count properties that failed validation."""
        return sum(1 for r in self.results if not r.passed)

    def get_failed(self) -> List[PropertyResult]:
        """Get all failed property results, in registration order."""
        return [r for r in self.results if not r.passed]

    def errors(self) -> Dict[str, str]:
        """Map each failed property name to its error message."""
        return {r.name: r.message for r in self.results if not r.passed and r.message}

    def summary(self) -> str:
        """Generate a concise text summary of validation results.

        Examples:
            >>> print(report.summary())
            Validation Summary:
              Model: LoginViewModel
              Properties: 3 validated (2 passed, 1 failed)
        """
        total = len(self.results)
        failed = self.get_error_count()
        return (
            f"Validation Summary:\n"
            f"  Model: {self.model_name}\n"
            f"  Properties: {total} validated ({total - failed} passed, {failed} failed)"
        )

    def to_markdown(self) -> str:
        """Generate a Markdown validation report.

        Returns:
            Markdown with a header, a summary section, passed properties and
            failed properties with their messages.
        """
        passed = [r for r in self.results if r.passed]
        failed = self.get_failed()

        lines = [
            f"# Validation Report: {self.model_name}",
            "",
            f"**Generated:** {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            "",
            "## Summary",
            "",
            f"- **Validated Properties:** {len(self.results)}",
            f"- **Passed:** {len(passed)} ✅",
            f"- **Failed:** {len(failed)} ❌" if failed else f"- **Failed:** {len(failed)}",
            "",
        ]

        if passed:
            lines.append("## ✅ Passed Properties")
            lines.append("")
            for result in passed:
                lines.append(f"- **{result.name}**")
            lines.append("")

        if not failed:
            lines.append("## ✅ All Properties Valid")
            lines.append("")
            lines.append("No validation issues found.")
            lines.append("")
        else:
            lines.append("## ❌ Errors")
            lines.append("")
            for result in failed:
                lines.append(f"- **{result.name}**: {result.message}")
            lines.append("")

        return "\n".join(lines)

    def to_json(self) -> str:
        """Generate a JSON validation report."""
        report_data = {
            "metadata": {
                "model": self.model_name,
                "generated_at": datetime.now().isoformat(),
            },
            "summary": {
                "validated": len(self.results),
                "passed": len(self.results) - self.get_error_count(),
                "failed": self.get_error_count(),
            },
            "results": [
                {"property": r.name, "passed": r.passed, "message": r.message}
                for r in self.results
            ],
        }
        return json.dumps(report_data, indent=2, ensure_ascii=False)

    def to_console_summary(self) -> str:
        """Generate the summary plus one line per failed property."""
        lines = [self.summary(), ""]

        failed = self.get_failed()
        if not failed:
            lines.append("✅ All properties are valid!")
        else:
            lines.append("Failed Properties:")
            for result in failed:
                lines.append(f"❌ {result.name}: {result.message}")

        return "\n".join(lines)
