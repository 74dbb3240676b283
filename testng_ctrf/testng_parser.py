"""
TestNG results parser.

Walks ``testng-results -> suite -> test -> class -> test-method`` and
produces one RawMethodRecord per reportable method together with the
suite statistics. Only the first ``suite`` element is processed.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .dates import parse_date
from .errors import StructureError
from .models import RawMethodRecord, StepKind, StepResult, SuiteStatistics
from .xml_tree import Element, int_attr, parse_xml_file, parse_xml_string, str_attr

logger = logging.getLogger(__name__)

DEFAULT_SUITE_NAME = "Unknown Suite"
DEFAULT_TEST_NAME = "Unknown Test"
DEFAULT_METHOD_NAME = "Unknown Method"
DEFAULT_STATUS = "other"
NAME_SEPARATOR = ": "
CONFIG_METHOD = "configuration method"
BEFORE_SUITE_METHOD = "beforeSuite"


@dataclass
class _MethodGroup:
    """Test-method nodes of one class, with their owning test."""
    test: Element
    test_index: int
    class_index: int
    methods: list[Element]


def _count(node: Element, name: str) -> int:
    return max(int_attr(node, name, 0), 0)


def _unwrap(result: StepResult):
    if result.kind is StepKind.FATAL:
        logger.error(f"Invalid XML structure: {result.reason}")
        raise StructureError(f"Invalid TestNG report format: {result.reason}")
    return result.value


def _find_results(document: Element) -> StepResult:
    results = document.first("testng-results")
    if results is None:
        return StepResult.fatal("missing testng-results")
    return StepResult.success(results)


def _find_suite(results: Element) -> StepResult:
    suite = results.first("suite")
    if suite is None:
        return StepResult.fatal("missing suite")
    return StepResult.success(suite)


def _find_tests(suite: Element) -> StepResult:
    tests = suite.get_all("test")
    if not tests:
        return StepResult.fatal("missing or invalid test array")
    return StepResult.success(tests)


def _find_classes(test: Element, test_index: int) -> StepResult:
    classes = test.get_all("class")
    if not classes:
        name = str_attr(test, "name", "unnamed test")
        return StepResult.skip(
            f"Invalid test structure at index {test_index} ({name}): missing or invalid class array"
        )
    return StepResult.success(classes)


def _find_methods(class_node: Element, test_index: int, class_index: int) -> StepResult:
    methods = class_node.get_all("test-method")
    if not methods:
        name = str_attr(class_node, "name", "unnamed class")
        return StepResult.skip(
            f"Invalid class structure at test {test_index}, class {class_index} ({name}): "
            f"missing or invalid test-method array"
        )
    return StepResult.success(methods)


def _extract_method(test: Element, method: Element) -> StepResult:
    if not method.attributes or method.attributes.get("is_config") == "true":
        return StepResult.skip(CONFIG_METHOD)

    test_name = str_attr(test, "name", DEFAULT_TEST_NAME)
    method_name = str_attr(method, "name", DEFAULT_METHOD_NAME)

    message = None
    trace = None
    exception = method.first("exception")
    if exception is not None:
        message = exception.first_text("message")
        trace = exception.first_text("full-stacktrace")

    return StepResult.success(RawMethodRecord(
        name=f"{test_name}{NAME_SEPARATOR}{method_name}",
        status=str_attr(method, "status", DEFAULT_STATUS).lower(),
        duration_ms=max(int_attr(method, "duration-ms", 0), 0),
        start_time=parse_date(str_attr(method, "started-at")),
        end_time=parse_date(str_attr(method, "finished-at")),
        message=message,
        trace=trace,
    ))


class TestNGParser:
    """Parser for TestNG ``testng-results.xml`` reports."""

    def parse_file(self, path) -> tuple[list[RawMethodRecord], SuiteStatistics]:
        """Parse a TestNG XML file."""
        return self.parse_tree(parse_xml_file(Path(path)))

    def parse_string(self, text: str) -> tuple[list[RawMethodRecord], SuiteStatistics]:
        """Parse TestNG XML content."""
        return self.parse_tree(parse_xml_string(text))

    def parse_tree(self, document: Element) -> tuple[list[RawMethodRecord], SuiteStatistics]:
        """
        Validate a parsed document and extract its method records.

        Raises:
            StructureError: if ``testng-results``, its first ``suite`` or the
                suite's ``test`` elements are missing.
        """
        results = _unwrap(_find_results(document))
        suite = _unwrap(_find_suite(results))
        tests = _unwrap(_find_tests(suite))

        groups = self._collect_method_groups(tests)
        stats = self._build_statistics(results, suite, groups)
        logger.info(
            f"Parsed test results: total={stats.total}, passed={stats.passed}, "
            f"failed={stats.failed}, skipped={stats.skipped}, ignored={stats.ignored}"
        )

        records = []
        for group in groups:
            for method_index, method in enumerate(group.methods):
                outcome = self._safe_extract(group, method_index, method)
                if outcome.ok:
                    records.append(outcome.value)
                elif outcome.reason != CONFIG_METHOD:
                    logger.warning(outcome.reason)

        logger.info(f"Successfully parsed {len(records)} test cases")
        return records, stats

    def _collect_method_groups(self, tests: list[Element]) -> list[_MethodGroup]:
        groups = []
        for test_index, test in enumerate(tests):
            classes = _find_classes(test, test_index)
            if not classes.ok:
                logger.warning(classes.reason)
                continue
            for class_index, class_node in enumerate(classes.value):
                methods = _find_methods(class_node, test_index, class_index)
                if not methods.ok:
                    logger.warning(methods.reason)
                    continue
                groups.append(_MethodGroup(test, test_index, class_index, methods.value))
        return groups

    def _safe_extract(self, group: _MethodGroup, method_index: int, method: Element) -> StepResult:
        try:
            return _extract_method(group.test, method)
        except Exception as e:
            logger.error(
                f"Error processing test method at test {group.test_index}, "
                f"class {group.class_index}, method {method_index}: {e}",
                exc_info=True,
            )
            return StepResult.skip(
                f"Skipped malformed test method at test {group.test_index}, "
                f"class {group.class_index}, method {method_index}"
            )

    def _find_before_suite(self, groups: list[_MethodGroup]) -> Optional[Element]:
        for group in groups:
            for method in group.methods:
                if method.attributes.get("name") == BEFORE_SUITE_METHOD:
                    return method
        return None

    def _build_statistics(self, results: Element, suite: Element,
                          groups: list[_MethodGroup]) -> SuiteStatistics:
        started_at = str_attr(suite, "started-at")
        finished_at = str_attr(suite, "finished-at")

        if not started_at or not finished_at:
            logger.warning(
                f"Missing timestamp attributes in suite: "
                f"started-at={started_at or 'MISSING'}, finished-at={finished_at or 'MISSING'}"
            )

        before_suite = self._find_before_suite(groups)
        before_suite_start = str_attr(before_suite, "started-at")
        if before_suite_start:
            logger.info(f"Using beforeSuite method start time: {before_suite_start}")
            started_at = before_suite_start

        return SuiteStatistics(
            total=_count(results, "total"),
            passed=_count(results, "passed"),
            failed=_count(results, "failed"),
            skipped=_count(results, "skipped"),
            ignored=_count(results, "ignored"),
            start_time=parse_date(started_at),
            end_time=parse_date(finished_at),
            suite_name=str_attr(suite, "name", DEFAULT_SUITE_NAME),
        )
