#!/usr/bin/env python3
"""
MCP Server for testng-to-ctrf.
Provides tools for converting TestNG XML reports to CTRF JSON.
"""

import asyncio
import json
import logging

from fastmcp import FastMCP

import core
from testng_ctrf.config import get_log_level, get_server_port

# Configure logging
logging.basicConfig(
    level=get_log_level(),
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# FastMCP server
mcp = FastMCP("testng-to-ctrf")


@mcp.tool(
    name="convert_testng_report",
    description="""Convert a TestNG XML report to a CTRF JSON report on disk.
        Args:
            path: Path to the testng-results.xml file
            output: Output file path (default: ctrf/ctrf-report.json)
            tool: Tool name recorded in the report (default: TestNG)
            env: Environment properties in "key=value" format
    """
)
async def convert_testng_report(
    path: str,
    output: str = None,
    tool: str = None,
    env: list[str] = None
) -> str:
    try:
        output_path = await core.convert_testng_to_ctrf(path, output, tool, env)
        report = json.loads(output_path.read_text(encoding="utf-8"))
        results = report["results"]
        return json.dumps({
            "output_path": str(output_path),
            "summary": results["summary"],
            "tests": len(results["tests"]),
        }, indent=2)
    except Exception as e:
        logger.error(f"Error in convert_testng_report: {str(e)}")
        return json.dumps({"error": str(e)})


@mcp.tool(
    name="preview_ctrf_report",
    description="""Convert a TestNG XML report and return the CTRF JSON without writing it.
        Args:
            path: Path to the testng-results.xml file
            tool: Tool name recorded in the report (default: TestNG)
            env: Environment properties in "key=value" format
    """
)
async def preview_ctrf_report(path: str, tool: str = None, env: list[str] = None) -> str:
    try:
        report = await core.build_ctrf_report(path, tool, env)
        return json.dumps(report, indent=2)
    except Exception as e:
        logger.error(f"Error in preview_ctrf_report: {str(e)}")
        return json.dumps({"error": str(e)})


async def main():
    port = get_server_port()
    logger.info(f"Starting testng-to-ctrf MCP server on port {port}")
    await mcp.run_async(transport="sse", host="0.0.0.0", port=port)


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
