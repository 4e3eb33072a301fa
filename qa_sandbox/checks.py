# ABOUTME: Sequential pipeline of named verification steps
# ABOUTME: Runs checks in order, stops at the first failure and aggregates results

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from playwright.sync_api import Error as PlaywrightError

from .fixtures import FixtureNotFoundError

logger = logging.getLogger(__name__)

Check = Tuple[str, Callable[[], None]]

# expect() mismatches and driver timeouts, plus missing fixture data
CHECK_FAILURES = (AssertionError, PlaywrightError, FixtureNotFoundError, KeyError)


class CheckStatus(Enum):
    """Check result status"""

    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"


@dataclass
class CheckResult:
    """Outcome of a single named check"""

    name: str
    status: CheckStatus = CheckStatus.PASS
    message: str = ""
    duration_ms: float = 0
    error: Optional[BaseException] = field(default=None, repr=False)


@dataclass
class VerificationResult:
    """Aggregated outcome of a check pipeline run"""

    checks: List[CheckResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.status == CheckStatus.PASS for c in self.checks)

    @property
    def passed_count(self) -> int:
        return sum(1 for c in self.checks if c.status == CheckStatus.PASS)

    @property
    def failed_check(self) -> Optional[CheckResult]:
        for check in self.checks:
            if check.status == CheckStatus.FAIL:
                return check
        return None

    def raise_for_failure(self) -> "VerificationResult":
        """Raise PageVerificationError if any check failed, else return self."""
        failed = self.failed_check
        if failed is not None:
            raise PageVerificationError(self) from failed.error
        return self


class PageVerificationError(AssertionError):
    """A check pipeline stopped on a failing step."""

    def __init__(self, result: VerificationResult):
        self.result = result
        failed = result.failed_check
        if failed is None:
            message = "Page verification failed"
        else:
            message = f"Check {failed.name!r} failed: {failed.message}"
        super().__init__(message)


def _summarize(error: BaseException) -> str:
    """First line of an error message, or the error type when it has none."""
    text = str(error).strip()
    if not text:
        return type(error).__name__
    return text.splitlines()[0]


def run_checks(checks: Sequence[Check]) -> VerificationResult:
    """
    Run checks in order until one fails.

    Steps after the first failure are not executed and are recorded as
    skipped, so the result always lists every step of the pipeline.

    Args:
        checks: Ordered (name, callable) pairs; a callable signals failure by raising

    Returns:
        VerificationResult with one CheckResult per step
    """
    result = VerificationResult()
    failed = False

    for name, check in checks:
        if failed:
            result.checks.append(
                CheckResult(name=name, status=CheckStatus.SKIP, message="Not run")
            )
            continue

        start = time.time()
        outcome = CheckResult(name=name)
        try:
            check()
            outcome.message = "ok"
        except CHECK_FAILURES as e:
            outcome.status = CheckStatus.FAIL
            outcome.message = _summarize(e)
            outcome.error = e
            failed = True
            logger.error(f"Check {name!r} failed: {outcome.message}")
        outcome.duration_ms = (time.time() - start) * 1000
        result.checks.append(outcome)

    return result
