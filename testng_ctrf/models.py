"""
Data models for TestNG to CTRF conversion.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class CtrfStatus(Enum):
    """Status of a test in the CTRF schema."""
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"
    PENDING = "pending"
    OTHER = "other"


@dataclass(frozen=True)
class RawMethodRecord:
    """A single reportable test-method extracted from a TestNG report."""
    name: str
    status: str
    duration_ms: int = 0
    start_time: int = 0
    end_time: int = 0
    message: Optional[str] = None
    trace: Optional[str] = None


@dataclass(frozen=True)
class SuiteStatistics:
    """Declared counts and timestamps of the processed suite."""
    total: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    ignored: int = 0
    start_time: int = 0
    end_time: int = 0
    suite_name: str = "Unknown Suite"


@dataclass(frozen=True)
class CtrfTest:
    """Represents a single test entry in a CTRF report."""
    name: str
    status: CtrfStatus
    duration: int = 0
    message: Optional[str] = None
    trace: Optional[str] = None

    def to_dict(self) -> dict:
        test = {
            "name": self.name,
            "status": self.status.value,
            "duration": self.duration,
        }
        if self.message:
            test["message"] = self.message
        if self.trace:
            test["trace"] = self.trace
        return test


class StepKind(Enum):
    """Outcome of a single traversal step."""
    SUCCESS = "success"
    SKIP = "skip"
    FATAL = "fatal"


@dataclass(frozen=True)
class StepResult:
    """Result of a traversal step: success(value), skip(reason) or fatal(reason)."""
    kind: StepKind
    value: Any = None
    reason: Optional[str] = None

    @classmethod
    def success(cls, value: Any) -> "StepResult":
        return cls(StepKind.SUCCESS, value=value)

    @classmethod
    def skip(cls, reason: str) -> "StepResult":
        return cls(StepKind.SKIP, reason=reason)

    @classmethod
    def fatal(cls, reason: str) -> "StepResult":
        return cls(StepKind.FATAL, reason=reason)

    @property
    def ok(self) -> bool:
        return self.kind is StepKind.SUCCESS
