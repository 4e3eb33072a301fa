# ABOUTME: pytest plugin writing HTML and JSON run reports
# ABOUTME: Collects per-test outcomes and renders timestamped artifacts at session end

import json
import logging
import re
import time
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from jinja2 import Environment, PackageLoader, select_autoescape

from .config import ReporterOptions, RunnerConfig

logger = logging.getLogger(__name__)

REPORTER_NAME = "sandbox-report"

# dateformat tokens understood in the ``timestamp`` reporter option
_TIMESTAMP_TOKENS = {
    "yyyy": "%Y",
    "yy": "%y",
    "mm": "%m",
    "dd": "%d",
    "HH": "%H",
    "hh": "%I",
    "MM": "%M",
    "ss": "%S",
    "TT": "%p",
    "%": "%%",
}
_TIMESTAMP_PATTERN = re.compile("|".join(_TIMESTAMP_TOKENS))


def to_strftime(timestamp_format: str) -> str:
    """Convert a dateformat mask such as ``mmddyyyy_HHMMss`` to strftime syntax."""
    return _TIMESTAMP_PATTERN.sub(
        lambda m: _TIMESTAMP_TOKENS[m.group(0)], timestamp_format
    )


@dataclass
class ReportEntry:
    """Result of one collected test"""

    name: str
    result: str = "pass"
    message: str = ""
    duration_ms: float = 0
    longrepr: str = ""


@dataclass
class RunSummary:
    total: int = 0
    passed: int = 0
    failed: int = 0
    errors: int = 0
    skipped: int = 0
    duration_seconds: float = 0


class SandboxReporter:
    """
    pytest plugin emitting report artifacts in the configured report directory.

    Registered from the test harness with ``config.pluginmanager.register``.
    """

    def __init__(self, options: ReporterOptions, base_url: str = ""):
        self.options = options
        self.base_url = base_url
        self.entries: Dict[str, ReportEntry] = {}
        self.start_time: float = 0
        self.end_time: float = 0
        self.written: List[Path] = []

    # -------------------------------------------------------------------------
    # pytest hooks
    # -------------------------------------------------------------------------

    def pytest_sessionstart(self, session):
        self.start_time = time.time()

    def pytest_runtest_logreport(self, report):
        entry = self.entries.setdefault(report.nodeid, ReportEntry(name=report.nodeid))
        entry.duration_ms += report.duration * 1000

        if report.when == "call":
            if report.passed:
                entry.result = "pass"
            elif report.skipped:
                entry.result = "skip"
                entry.message = _skip_reason(report)
            else:
                entry.result = "fail"
                entry.message = _first_line(report.longreprtext)
                entry.longrepr = report.longreprtext
        elif report.skipped:
            entry.result = "skip"
            entry.message = _skip_reason(report)
        elif report.failed and entry.result in ("pass", "skip"):
            # Failing fixture setup or teardown
            entry.result = "error"
            entry.message = f"{report.when}: {_first_line(report.longreprtext)}"
            entry.longrepr = report.longreprtext

    def pytest_sessionfinish(self, session, exitstatus):
        self.end_time = time.time()
        if not self.entries:
            logger.info("No tests ran, skipping report generation")
            return
        self.write_reports()

    def pytest_terminal_summary(self, terminalreporter):
        for path in self.written:
            terminalreporter.write_line(f"Report saved: {path}")

    # -------------------------------------------------------------------------
    # Report generation
    # -------------------------------------------------------------------------

    def summary(self) -> RunSummary:
        results = [e.result for e in self.entries.values()]
        return RunSummary(
            total=len(results),
            passed=results.count("pass"),
            failed=results.count("fail"),
            errors=results.count("error"),
            skipped=results.count("skip"),
            duration_seconds=max(self.end_time - self.start_time, 0),
        )

    def build_report(self, generated_at: Optional[datetime] = None) -> Dict[str, Any]:
        """Build the report payload shared by the JSON and HTML outputs."""
        generated_at = generated_at or datetime.now()
        return {
            "generated_at": generated_at.isoformat(),
            "config": {"base_url": self.base_url},
            "summary": asdict(self.summary()),
            "tests": [asdict(e) for e in self.entries.values()],
        }

    def report_stem(self, now: Optional[datetime] = None) -> Path:
        """
        Path of the report files without extension.

        The timestamp suffix is omitted when the format is empty. With
        ``overwrite`` disabled, a counter is appended until none of the
        enabled output files already exists.
        """
        now = now or datetime.now()
        report_dir = Path(self.options.report_dir)
        name = self.options.report_filename
        if self.options.timestamp:
            name = f"{name}_{now.strftime(to_strftime(self.options.timestamp))}"

        stem = report_dir / name
        if self.options.overwrite:
            return stem

        counter = 0
        while any(
            stem.with_name(f"{stem.name}{ext}").exists() for ext in self._extensions()
        ):
            counter += 1
            stem = report_dir / f"{name}_{counter:03d}"
        return stem

    def write_reports(self, now: Optional[datetime] = None) -> List[Path]:
        """Write the enabled report formats and return their paths."""
        if not self._extensions():
            logger.info("Both html and json reports are disabled")
            return []

        now = now or datetime.now()
        Path(self.options.report_dir).mkdir(parents=True, exist_ok=True)
        stem = self.report_stem(now)
        report = self.build_report(now)

        if self.options.json:
            json_path = stem.with_name(f"{stem.name}.json")
            with open(json_path, "w", encoding="utf-8") as f:
                json.dump(report, f, indent=2)
            self.written.append(json_path)
            logger.info(f"JSON report saved: {json_path}")

        if self.options.html:
            html_path = stem.with_name(f"{stem.name}.html")
            html_path.write_text(render_html(report), encoding="utf-8")
            self.written.append(html_path)
            logger.info(f"HTML report saved: {html_path}")

        return self.written

    def _extensions(self) -> List[str]:
        extensions = []
        if self.options.json:
            extensions.append(".json")
        if self.options.html:
            extensions.append(".html")
        return extensions


def render_html(report: Dict[str, Any]) -> str:
    env = Environment(
        loader=PackageLoader("qa_sandbox", "templates"),
        autoescape=select_autoescape(["html"]),
    )
    return env.get_template("report.html").render(report=report)


def _first_line(text: str) -> str:
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    return ""


def _skip_reason(report) -> str:
    # Skipped reports carry (path, lineno, reason) as longrepr
    if isinstance(report.longrepr, tuple) and len(report.longrepr) == 3:
        return str(report.longrepr[2])
    return _first_line(report.longreprtext)


def create_reporter(config: RunnerConfig) -> Optional[SandboxReporter]:
    """Build the reporter named in the runner config, or None if it is unknown."""
    if config.reporter != REPORTER_NAME:
        logger.warning(
            f"Unknown reporter {config.reporter!r}, no report will be written (expected {REPORTER_NAME!r})"
        )
        return None
    return SandboxReporter(config.reporter_options, base_url=config.base_url)
