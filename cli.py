#!/usr/bin/env python3
"""CLI for converting TestNG XML reports to CTRF."""

import argparse
import asyncio
import json
import logging
import sys

import core
from testng_ctrf.ctrf_report import dump_report


def setup_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(levelname)s: %(message)s'
    )


def _run_async(coro):
    """Helper to run async functions from sync CLI."""
    return asyncio.run(coro)


def _print_summary(report: dict, output_path=None):
    """Print human-readable summary."""
    results = report.get("results", {})
    summary = results.get("summary", {})
    tests = results.get("tests", [])

    print(f"\n{'='*60}")
    print(f"Tool: {results.get('tool', {}).get('name', 'N/A')}")
    print(f"\nTest Results:")
    print(f"  Total:   {summary.get('tests', 0)}")
    print(f"  Passed:  {summary.get('passed', 0)}")
    print(f"  Failed:  {summary.get('failed', 0)}")
    print(f"  Skipped: {summary.get('skipped', 0)}")
    print(f"  Other:   {summary.get('other', 0)}")
    print(f"  Entries: {len(tests)}")

    failed_tests = [t for t in tests if t.get("status") == "failed"]
    if failed_tests:
        print(f"\nFailed Tests ({len(failed_tests)}):")
        for t in failed_tests[:10]:
            name = t.get("name", "")[:70]
            print(f"  - {name}")
        if len(failed_tests) > 10:
            print(f"  ... and {len(failed_tests) - 10} more")

    environment = results.get("environment", {})
    if environment:
        print(f"\nEnvironment:")
        for key, value in environment.items():
            print(f"  {key}={value}")

    if output_path:
        print(f"\nReport: {output_path}")
    print(f"{'='*60}\n")


def cmd_convert(args):
    """Convert a TestNG report (mirrors MCP convert_testng_report tool)."""
    async def _convert():
        if args.dry_run:
            report = await core.build_ctrf_report(args.path, args.tool, args.env)
            sys.stdout.write(dump_report(report))
            return 0

        output_path = await core.convert_testng_to_ctrf(args.path, args.output, args.tool, args.env)
        if args.print_summary:
            report = json.loads(output_path.read_text(encoding="utf-8"))
            _print_summary(report, output_path)
        print("Conversion completed successfully.")
        return 0

    try:
        return _run_async(_convert())
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Convert TestNG XML report to CTRF',
        usage='%(prog)s <testng-results.xml> [options]'
    )
    parser.add_argument('path', help='Path to the TestNG XML file')
    parser.add_argument('-o', '--output', help='Output directory and filename for the CTRF report')
    parser.add_argument('-t', '--tool', help='Tool name')
    parser.add_argument('-e', '--env', nargs='*', metavar='KEY=VALUE',
                        help='Environment properties')
    parser.add_argument('--print-summary', action='store_true',
                        help='Print a summary of the converted report')
    parser.add_argument('--dry-run', action='store_true',
                        help='Print the CTRF report to stdout without writing a file')
    parser.add_argument('-v', '--verbose', action='store_true')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    return cmd_convert(args)


if __name__ == '__main__':
    sys.exit(main())
