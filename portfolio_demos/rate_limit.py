"""
Rate Limiting Module

Fixed-window request counters for the bot simulator, with an escalating
penalty for identifiers that keep tripping the limit and a separate,
slower window for bulk operations.
"""

import math
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .config import PortfolioConfig


@dataclass
class RateLimitResult:
    limited: bool
    retry_after: int = 0
    reason: str = ""


@dataclass
class _Window:
    count: int
    start: float


@dataclass
class _Violation:
    count: int
    first_violation: float
    penalty_until: float = 0.0


class FixedWindowCounter:
    """
    Counts hits per identifier inside a window that restarts once expired

    Expired windows are swept at most once per window length, so the map
    only holds identifiers seen recently.
    """

    def __init__(self, window_seconds: float, max_hits: int, clock: Callable[[], float] = time.time):
        self.window_seconds = window_seconds
        self.max_hits = max_hits
        self._clock = clock
        self._windows: Dict[str, _Window] = {}
        self._last_sweep = clock()

    def hit(self, identifier: str) -> Optional[int]:
        """
        Record a hit

        Returns:
            None while under the limit, otherwise seconds until the window resets
        """
        now = self._clock()
        self._sweep(now)
        window = self._windows.get(identifier)

        if window is None or now - window.start > self.window_seconds:
            self._windows[identifier] = _Window(count=1, start=now)
            return None

        window.count += 1
        if window.count > self.max_hits:
            return math.ceil(self.window_seconds - (now - window.start))
        return None

    def _sweep(self, now: float) -> None:
        if now - self._last_sweep < self.window_seconds:
            return
        self._last_sweep = now
        expired = [
            identifier for identifier, window in self._windows.items()
            if now - window.start > self.window_seconds
        ]
        for identifier in expired:
            del self._windows[identifier]

    def __len__(self) -> int:
        return len(self._windows)

    def reset(self) -> None:
        self._windows.clear()


class RateLimiter:
    """
    General per-identifier limiter

    Each time the limit is exceeded a violation is recorded; violations
    impose a penalty of 2^(n-1) minutes (capped) during which every
    request is rejected. Violation counts reset an hour after the first.
    Stale violations are dropped once both the penalty and the reset
    period have passed.
    """

    def __init__(self, window_seconds: float = 60, max_requests: int = 5,
                 violation_reset_seconds: float = 3600, max_penalty_minutes: int = 60,
                 clock: Callable[[], float] = time.time):
        self.max_requests = max_requests
        self.violation_reset_seconds = violation_reset_seconds
        self.max_penalty_minutes = max_penalty_minutes
        self._clock = clock
        self._counter = FixedWindowCounter(window_seconds, max_requests, clock)
        self._violations: Dict[str, _Violation] = {}
        self._sweep_interval = window_seconds
        self._last_sweep = clock()

    @classmethod
    def from_config(cls, config: PortfolioConfig,
                    clock: Callable[[], float] = time.time) -> 'RateLimiter':
        return cls(
            window_seconds=config.rate_limit_window_seconds,
            max_requests=config.rate_limit_max_requests,
            violation_reset_seconds=config.violation_reset_seconds,
            max_penalty_minutes=config.max_penalty_minutes,
            clock=clock
        )

    def check(self, identifier: str) -> RateLimitResult:
        now = self._clock()
        self._sweep_violations(now)

        violation = self._violations.get(identifier)
        if violation and now < violation.penalty_until:
            return RateLimitResult(
                limited=True,
                retry_after=math.ceil(violation.penalty_until - now),
                reason="Rate limit penalty active due to repeated violations"
            )

        retry_after = self._counter.hit(identifier)
        if retry_after is None:
            return RateLimitResult(limited=False)

        self._track_violation(identifier, now)
        return RateLimitResult(limited=True, retry_after=retry_after, reason="Too many requests")

    def _track_violation(self, identifier: str, now: float) -> None:
        violation = self._violations.get(identifier)

        if violation is None or now - violation.first_violation > self.violation_reset_seconds:
            violation = _Violation(count=1, first_violation=now)
        else:
            violation.count += 1

        penalty_minutes = min(2 ** (violation.count - 1), self.max_penalty_minutes)
        violation.penalty_until = now + penalty_minutes * 60
        self._violations[identifier] = violation

    def _sweep_violations(self, now: float) -> None:
        if now - self._last_sweep < self._sweep_interval:
            return
        self._last_sweep = now
        stale = [
            identifier for identifier, violation in self._violations.items()
            if now >= violation.penalty_until
            and now - violation.first_violation > self.violation_reset_seconds
        ]
        for identifier in stale:
            del self._violations[identifier]

    def violation_count(self, identifier: str) -> int:
        violation = self._violations.get(identifier)
        return violation.count if violation else 0

    def tracked_violations(self) -> int:
        return len(self._violations)

    def reset(self) -> None:
        self._counter.reset()
        self._violations.clear()


class BulkOperationLimiter:
    """Caps how many bulk operations an identifier may run per window"""

    def __init__(self, window_seconds: float = 300, max_operations: int = 3,
                 clock: Callable[[], float] = time.time):
        self.window_seconds = window_seconds
        self.max_operations = max_operations
        self._counter = FixedWindowCounter(window_seconds, max_operations, clock)

    @classmethod
    def from_config(cls, config: PortfolioConfig,
                    clock: Callable[[], float] = time.time) -> 'BulkOperationLimiter':
        return cls(
            window_seconds=config.bulk_window_seconds,
            max_operations=config.bulk_max_operations,
            clock=clock
        )

    def check(self, identifier: str) -> RateLimitResult:
        retry_after = self._counter.hit(identifier)
        if retry_after is None:
            return RateLimitResult(limited=False)

        minutes = math.ceil(self.window_seconds / 60)
        return RateLimitResult(
            limited=True,
            retry_after=retry_after,
            reason=f"Too many bulk operations (max {self.max_operations} per {minutes} minutes)"
        )

    def reset(self) -> None:
        self._counter.reset()


def validate_operation_limit(operation: str, count: int, limits: Dict[str, int]) -> Optional[str]:
    """
    Check the number of items in a single bulk request

    Returns:
        None when within the limit, otherwise the rejection message
    """
    limit = limits.get(operation)
    if limit is None or count <= limit:
        return None
    return f"Operation exceeds limit: {count} items (max {limit} per request)"
