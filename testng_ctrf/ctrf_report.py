"""
CTRF (Common Test Report Format) report assembly.

Maps TestNG statuses onto CTRF statuses, parses ``key=value`` environment
properties and builds the final report document.
"""

import json
import logging
from pathlib import Path
from typing import Iterable, Optional

from .models import CtrfStatus, CtrfTest, RawMethodRecord, SuiteStatistics

logger = logging.getLogger(__name__)

DEFAULT_TOOL_NAME = "TestNG"

_STATUS_MAP = {
    "pass": CtrfStatus.PASSED,
    "fail": CtrfStatus.FAILED,
    "skip": CtrfStatus.SKIPPED,
}


def map_status(raw_status: str) -> CtrfStatus:
    """Map a lower-cased TestNG status to its CTRF status."""
    return _STATUS_MAP.get(raw_status, CtrfStatus.OTHER)


def process_environment_properties(env_props: Optional[Iterable[str]]) -> dict[str, str]:
    """
    Parse ``key=value`` strings into a mapping.

    Only the first ``=`` separates key from value, so ``"KEY=a=b"`` gives
    ``{"KEY": "a=b"}``. Entries with an empty key or value are skipped.
    """
    if not env_props:
        return {}

    result = {}
    for prop in env_props:
        key, _, value = prop.partition("=")
        if key and value:
            result[key] = value
        else:
            logger.warning(f"Skipping invalid environment property: {prop}")
    return result


def convert_to_ctrf_test(record: RawMethodRecord) -> CtrfTest:
    """Convert a TestNG method record to a CTRF test."""
    status = map_status(record.status)
    # error details are only reported for failed tests
    if status is CtrfStatus.FAILED:
        return CtrfTest(record.name, status, record.duration_ms, record.message, record.trace)
    return CtrfTest(record.name, status, record.duration_ms)


def create_ctrf_report(
    records: list[RawMethodRecord],
    stats: SuiteStatistics,
    tool_name: Optional[str] = None,
    env_props: Optional[dict[str, str]] = None
) -> dict:
    """
    Build a CTRF report from TestNG method records and suite statistics.

    Summary counts come from the declared suite statistics, not from the
    number of records, since TestNG totals may include configuration methods.
    """
    summary = {
        "tests": stats.total,
        "passed": stats.passed,
        "failed": stats.failed,
        "pending": 0,
        "skipped": stats.skipped,
        "other": stats.ignored,
        "start": stats.start_time,
        "stop": stats.end_time,
    }

    return {
        "results": {
            "tool": {"name": tool_name or DEFAULT_TOOL_NAME},
            "summary": summary,
            "tests": [convert_to_ctrf_test(r).to_dict() for r in records],
            "environment": dict(env_props or {}),
        }
    }


def dump_report(report: dict) -> str:
    """Serialize a report as indented JSON."""
    return json.dumps(report, indent=2, ensure_ascii=False) + "\n"


def write_report(report: dict, output_path: Path) -> Path:
    """Write a report to ``output_path``, creating parent directories."""
    output_path = Path(output_path).resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info(f"Writing CTRF report to: {output_path}")
    output_path.write_text(dump_report(report), encoding="utf-8")
    return output_path
