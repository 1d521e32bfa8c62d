"""
================================================================================
Report Listener
================================================================================

Pytest plugin that turns a run into one timestamped HTML report.

Features:
    - One report per run: <report_dir>/html/TestReport_YYYY-mm-dd_HH-MM-SS.html
      (unless --html was given explicitly)
    - Report title and environment info (application, base URL, browser,
      Local/Remote)
    - "Tags" and "Description" columns built from test markers/docstrings
    - Per-test log section: Loguru records bound with `test=<nodeid>` are
      attached to that test's report (explicit context, no thread-locals)
    - Pass/fail/skip tallies, overall and per tag, logged at session end

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import html
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import pytest
from loguru import logger

from .config import Settings


APPLICATION_NAME = "GetQuickResume"
REPORT_TITLE = "GetQuickResume E2E Test Report"
REPORT_FILE_FORMAT = "TestReport_%Y-%m-%d_%H-%M-%S.html"

# Markers that act as report categories
TAG_MARKERS = (
    "smoke",
    "regression",
    "landing",
    "navigation",
    "seo",
    "login",
    "blog",
    "responsive",
)

PASSED = "passed"
FAILED = "failed"
SKIPPED = "skipped"


def report_path(report_dir: str, now: Optional[datetime] = None) -> Path:
    """Timestamped HTML report path for a run started at `now`."""
    now = now or datetime.now()
    return Path(report_dir) / "html" / now.strftime(REPORT_FILE_FORMAT)


def tags_for(item: pytest.Item) -> List[str]:
    """Report categories of a test, in marker declaration order."""
    names = []
    for marker in item.iter_markers():
        if marker.name in TAG_MARKERS and marker.name not in names:
            names.append(marker.name)
    return names


def description_for(item: pytest.Item) -> str:
    """First docstring line of the test function."""
    function = getattr(item, "function", None)
    doc = (getattr(function, "__doc__", None) or "").strip()
    return doc.splitlines()[0] if doc else ""


@dataclass
class ResultRecord:
    """Outcome of one test; written once."""
    nodeid: str
    outcome: str
    tags: List[str] = field(default_factory=list)
    message: str = ""
    duration: float = 0.0


@dataclass
class RunSummary:
    """Aggregate of test records."""
    total: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    by_tag: Dict[str, Dict[str, int]] = field(default_factory=dict)

    @property
    def pass_rate(self) -> float:
        if self.total == 0:
            return 0.0
        return (self.passed / self.total) * 100

    @classmethod
    def from_records(cls, records: Iterable[ResultRecord]) -> "RunSummary":
        summary = cls()
        by_tag: Dict[str, Dict[str, int]] = defaultdict(
            lambda: {PASSED: 0, FAILED: 0, SKIPPED: 0}
        )
        for record in records:
            summary.total += 1
            setattr(summary, record.outcome, getattr(summary, record.outcome) + 1)
            for tag in record.tags or ["untagged"]:
                by_tag[tag][record.outcome] += 1
        summary.by_tag = dict(by_tag)
        return summary


class ReportListener:
    """
    Collects per-test outcomes and log lines and decorates the pytest-html
    report. Register once per run via `config.pluginmanager.register`.
    """

    LOG_SECTION = "Test log"

    def __init__(self, settings: Settings, html_path: Optional[Path] = None):
        self.settings = settings
        self.html_path = html_path
        self.records: Dict[str, ResultRecord] = {}
        self._logs: Dict[str, List[str]] = defaultdict(list)
        self._sink_id: Optional[int] = None

    # =========================================================================
    # Log capture
    # =========================================================================

    def start_capture(self) -> None:
        self._sink_id = logger.add(
            self._capture,
            level="DEBUG",
            format="{time:HH:mm:ss} | {level: <8} | {message}",
            filter=lambda record: "test" in record["extra"],
        )

    def stop_capture(self) -> None:
        if self._sink_id is not None:
            logger.remove(self._sink_id)
            self._sink_id = None

    def _capture(self, message: Any) -> None:
        nodeid = message.record["extra"]["test"]
        self._logs[nodeid].append(str(message).rstrip("\n"))

    def logs_for(self, nodeid: str) -> List[str]:
        return list(self._logs.get(nodeid, []))

    # =========================================================================
    # Outcome bookkeeping
    # =========================================================================

    def record(self, report: pytest.TestReport) -> Optional[ResultRecord]:
        """
        Fold a phase report into the test's record.

        The first non-passing phase decides the outcome; otherwise the call
        phase does. Later phases never overwrite a decided outcome.
        """
        existing = self.records.get(report.nodeid)
        if existing is not None and existing.outcome != PASSED:
            return existing

        if report.when == "call" or report.outcome != PASSED:
            outcome = report.outcome if report.outcome in (PASSED, FAILED, SKIPPED) else FAILED
            message = ""
            if report.failed:
                lines = (report.longreprtext or "").strip().splitlines()
                message = lines[-1] if lines else ""
            elif report.skipped and isinstance(report.longrepr, tuple):
                message = str(report.longrepr[2])
            record = ResultRecord(
                nodeid=report.nodeid,
                outcome=outcome,
                tags=list(getattr(report, "tags", []) or []),
                message=message,
                duration=(existing.duration if existing else 0.0) + report.duration,
            )
            self.records[report.nodeid] = record
            return record
        return existing

    def summary(self) -> RunSummary:
        return RunSummary.from_records(self.records.values())

    # =========================================================================
    # Pytest hooks
    # =========================================================================

    @pytest.hookimpl(hookwrapper=True)
    def pytest_runtest_makereport(self, item: pytest.Item, call):
        outcome = yield
        report = outcome.get_result()
        report.tags = tags_for(item)
        report.description = description_for(item)
        if report.when == "teardown":
            lines = self.logs_for(item.nodeid)
            if lines:
                report.sections.append((self.LOG_SECTION, "\n".join(lines)))

    def pytest_runtest_logreport(self, report: pytest.TestReport) -> None:
        self.record(report)

    def pytest_sessionfinish(self, session: pytest.Session, exitstatus: int) -> None:
        if hasattr(session.config, "workerinput"):
            return
        summary = self.summary()
        if summary.total == 0:
            return
        logger.info(
            f"Run summary: {summary.total} tests | {summary.passed} passed | "
            f"{summary.failed} failed | {summary.skipped} skipped | "
            f"pass rate {summary.pass_rate:.2f}%"
        )
        for tag, counts in sorted(summary.by_tag.items()):
            logger.info(
                f"  [{tag}] passed={counts[PASSED]} failed={counts[FAILED]} skipped={counts[SKIPPED]}"
            )
        if self.html_path:
            logger.info(f"HTML report: {self.html_path}")

    def pytest_unconfigure(self, config: pytest.Config) -> None:
        self.stop_capture()

    # pytest-html hooks

    @pytest.hookimpl(optionalhook=True)
    def pytest_html_report_title(self, report) -> None:
        report.title = REPORT_TITLE

    @pytest.hookimpl(optionalhook=True)
    def pytest_html_results_table_header(self, cells: List[str]) -> None:
        cells.insert(2, "<th>Tags</th>")
        cells.insert(3, "<th>Description</th>")

    @pytest.hookimpl(optionalhook=True)
    def pytest_html_results_table_row(self, report, cells: List[str]) -> None:
        tags = ", ".join(getattr(report, "tags", []) or [])
        description = getattr(report, "description", "") or ""
        cells.insert(2, f"<td>{html.escape(tags)}</td>")
        cells.insert(3, f"<td>{html.escape(description)}</td>")


def environment_info(settings: Settings) -> Dict[str, str]:
    """Environment rows shown at the top of the report."""
    return {
        "Application": APPLICATION_NAME,
        "Base URL": settings.base_url,
        "Browser": settings.browser,
        "Environment": settings.environment_label,
    }


__all__ = [
    "ReportListener",
    "RunSummary",
    "ResultRecord",
    "TAG_MARKERS",
    "description_for",
    "environment_info",
    "report_path",
    "tags_for",
]
