#!/usr/bin/env python3
"""
lazyboot Verification Reporter
Re-probes every tool after installation and summarises the result
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Collection, Dict, List, Optional, Sequence

from rich.markup import escape

from lazyboot.console import Printer
from lazyboot.platform.probe import CommandProbe
from lazyboot.platform.tools import Tool


class Outcome(Enum):
    """Post-install state of one tool"""
    PRESENT = "present"
    INSTALLED = "installed"
    MISSING_REQUIRED = "missing-required"
    MISSING_OPTIONAL = "missing-optional"

    @property
    def is_missing(self) -> bool:
        return self in (Outcome.MISSING_REQUIRED, Outcome.MISSING_OPTIONAL)


OUTCOME_STYLES = {
    Outcome.PRESENT: "[green]✅ present[/green]",
    Outcome.INSTALLED: "[green]✅ installed[/green]",
    Outcome.MISSING_REQUIRED: "[red]❌ missing (required)[/red]",
    Outcome.MISSING_OPTIONAL: "[yellow]⚠ missing (optional)[/yellow]",
}


@dataclass
class ToolResult:
    tool: Tool
    outcome: Outcome
    location: Optional[str] = None
    version: Optional[str] = None


@dataclass
class Report:
    """One result per tool, in declaration order"""
    results: List[ToolResult] = field(default_factory=list)

    @property
    def all_required_satisfied(self) -> bool:
        return not any(r.outcome is Outcome.MISSING_REQUIRED for r in self.results)

    @property
    def exit_code(self) -> int:
        return 0 if self.all_required_satisfied else 1

    def missing(self, outcome: Outcome) -> List[Tool]:
        return [r.tool for r in self.results if r.outcome is outcome]

    def counts(self) -> Dict[Outcome, int]:
        counts = {outcome: 0 for outcome in Outcome}
        for result in self.results:
            counts[result.outcome] += 1
        return counts


class VerificationReporter:
    """
    Classify tools by re-probing the host

    Verification ignores what the install steps claimed and only trusts what
    is on PATH now.
    """

    def __init__(self, probe: Optional[CommandProbe] = None, printer: Optional[Printer] = None):
        self.probe = probe or CommandProbe()
        self.printer = printer or Printer()

    def verify(self, tools: Sequence[Tool], installed: Collection[str] = ()) -> Report:
        """
        Build the report

        Args:
            tools: Tools in declared order; each is classified exactly once
            installed: Names of tools an install action ran for this run

        Returns:
            Report
        """
        report = Report()
        seen = set()
        for tool in tools:
            if tool.name in seen:
                continue
            seen.add(tool.name)

            if self.probe.satisfies(tool):
                outcome = Outcome.INSTALLED if tool.name in installed else Outcome.PRESENT
                location = self.probe.found_at(tool)
                version = self.probe.version(*tool.commands) if tool.commands else None
            else:
                outcome = Outcome.MISSING_REQUIRED if tool.required else Outcome.MISSING_OPTIONAL
                location = None
                version = None

            report.results.append(ToolResult(tool, outcome, location, version))
        return report

    def render(self, report: Report):
        """Print the verification table and summary lines"""
        self.printer.info("Verifying installations...")
        rows = []
        for result in report.results:
            detail = result.version or result.location or ''
            if result.outcome.is_missing and result.tool.min_version:
                detail = f">= {result.tool.min_version} required"
            rows.append([
                escape(result.tool.label),
                OUTCOME_STYLES[result.outcome],
                escape(detail),
            ])
        self.printer.table("Verification", ["Tool", "Status", "Details"], rows)

        counts = report.counts()
        missing = counts[Outcome.MISSING_REQUIRED] + counts[Outcome.MISSING_OPTIONAL]
        self.printer.info(
            f"{counts[Outcome.PRESENT]} already present, "
            f"{counts[Outcome.INSTALLED]} installed, {missing} missing"
        )

        optional = report.missing(Outcome.MISSING_OPTIONAL)
        if optional:
            names = ', '.join(tool.display_name for tool in optional)
            self.printer.warning(f"Optional tools not found: {names}")

        if report.all_required_satisfied:
            self.printer.success("All required prerequisites are installed!")
        else:
            names = ', '.join(tool.display_name for tool in report.missing(Outcome.MISSING_REQUIRED))
            self.printer.error(f"Required prerequisites are missing: {names}")
