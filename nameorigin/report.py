#!/usr/bin/env python3
"""
Terminal Reports
================
Rich tables for scores, sibling matches and audit results.

Usage:
    from nameorigin.report import Reporter

    reporter = Reporter()
    reporter.duplication(report)
"""

from typing import Iterable, List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .audit import DuplicationReport, PageCheck
from .compatibility import CompatibilityResult, RankedName, SmoothnessResult
from .harmony import SiblingMatch

TIER_STYLES = {
    "Excellent Flow": "bold green",
    "Strong Flow": "green",
    "Neutral": "yellow",
    "Slight Friction": "dark_orange",
    "High Friction": "red",
}


def _mark(ok: bool) -> Text:
    return Text("PASS", style="green") if ok else Text("FAIL", style="bold red")


class Reporter:
    """Renders results to a rich Console. Quiet mode prints nothing."""

    def __init__(self, console: Optional[Console] = None, quiet: bool = False):
        self.console = console or Console()
        self.quiet = quiet

    def _emit(self, renderable):
        if not self.quiet:
            self.console.print(renderable)

    def table(self, headers: Sequence[str], rows: Iterable[Sequence], title: Optional[str] = None):
        """Plain table from header names and row tuples."""
        table = Table(title=title, box=box.SIMPLE_HEAVY)
        for header in headers:
            table.add_column(str(header))
        for row in rows:
            table.add_row(*(c if isinstance(c, Text) else str(c) for c in row))
        self._emit(table)

    def pairing(self, first: str, surname: str, result: CompatibilityResult,
                smoothness: SmoothnessResult, global_score: float):
        tier_style = TIER_STYLES.get(smoothness.tier, "")
        lines = Text()
        lines.append(f"Compatibility (explained): {result.score:+.2f}\n")
        lines.append(f"Compatibility (global):    {global_score:+.2f}\n")
        lines.append(f"Reasons: {', '.join(result.reasons) or 'none'}\n")
        lines.append("Smoothness: ")
        lines.append(f"{smoothness.score} ({smoothness.tier})", style=tier_style)
        self._emit(Panel(lines, title=f"{first} {surname}", expand=False))
        self.table(
            ["Component", "Effect"],
            [(c.label, f"{c.effect:+d}") for c in smoothness.components],
        )

    def ranked(self, surname: str, ranked: List[RankedName]):
        self.table(
            ["#", "Name", "Gender", "Score", "Reasons"],
            [(i + 1, r.record.name, r.record.gender, f"{r.score:+.2f}", ', '.join(r.reasons))
             for i, r in enumerate(ranked)],
            title=f"First names for {surname}",
        )

    def siblings(self, base: str, matches: List[SiblingMatch], clashing: Sequence = ()):
        self.table(
            ["#", "Candidate", "Harmony", "Shared Origin", "Style Match"],
            [(i + 1, m.record.name, m.score, m.shared_origin or '-', m.style_match or '-')
             for i, m in enumerate(matches)],
            title=f"Sibling names for {base}",
        )
        if clashing:
            self._emit(Text(f"Clashing: {', '.join(n.name for n in clashing)}", style="dim"))

    def page_checks(self, checks: List[PageCheck], only_failures: bool = False):
        shown = [c for c in checks if not (only_failures and c.passed)]
        self.table(
            ["URL", "Words", "Links", "Description", "Status"],
            [(c.url, c.words, c.internal_links, 'yes' if c.has_description else 'no',
              _mark(c.passed) if c.passed else Text('; '.join(c.failures), style="red"))
             for c in shown],
            title="Content floor",
        )

    def duplication(self, report: DuplicationReport):
        self.table(
            ["Metric", "Value", "Status"],
            [
                ("duplicate_count", report.duplicate_count, _mark(report.passed_duplicate_count)),
                ("risk_score", report.risk_score, _mark(report.passed_risk)),
                ("tier_repetition_ratio", f"{report.tier_repetition_ratio:.3f}", _mark(report.passed_tier)),
                ("flagged_urls", len(report.flagged_urls), _mark(report.passed_flagged_urls)),
                ("total_pages", report.total_pages, ''),
                ("total_blocks", report.total_blocks, ''),
            ],
            title="Duplication audit",
        )
        for url in report.flagged_urls:
            self._emit(Text(f"  flagged: {url}", style="yellow"))
        self._emit(_mark(report.passed))
