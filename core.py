#!/usr/bin/env python3
"""
Core operations shared between MCP server and CLI.
Contains the TestNG to CTRF conversion pipeline.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

from testng_ctrf.config import get_default_output_path, get_default_tool_name
from testng_ctrf.ctrf_report import create_ctrf_report, process_environment_properties, write_report
from testng_ctrf.testng_parser import TestNGParser
from testng_ctrf.xml_tree import parse_xml_file

logger = logging.getLogger(__name__)


async def build_ctrf_report(
    testng_path: str,
    tool_name: Optional[str] = None,
    env_props: Optional[list[str]] = None
) -> dict:
    """
    Parse a TestNG XML report and build the CTRF report in memory.

    Args:
        testng_path: Path to the TestNG XML report
        tool_name: Tool name for the report (uses configured default if not specified)
        env_props: Environment properties in "key=value" format

    Returns:
        CTRF report dict

    Raises:
        StructureError: if the report cannot be parsed or lacks required elements
    """
    document = await asyncio.to_thread(parse_xml_file, Path(testng_path))
    records, stats = TestNGParser().parse_tree(document)
    environment = process_environment_properties(env_props)
    return create_ctrf_report(
        records,
        stats,
        tool_name or get_default_tool_name(),
        environment,
    )


async def convert_testng_to_ctrf(
    testng_path: str,
    output_path: Optional[str] = None,
    tool_name: Optional[str] = None,
    env_props: Optional[list[str]] = None
) -> Path:
    """
    Convert a TestNG XML report to a CTRF JSON report.

    The report is written only after it has been fully assembled, so a
    failed conversion never leaves a partial output file.

    Args:
        testng_path: Path to the TestNG XML report
        output_path: Where to write the CTRF report (default: ctrf/ctrf-report.json)
        tool_name: Tool name for the report (default: TestNG)
        env_props: Environment properties in "key=value" format

    Returns:
        Absolute path of the written report
    """
    report = await build_ctrf_report(testng_path, tool_name, env_props)
    target = Path(output_path) if output_path else get_default_output_path()
    return write_report(report, target)
