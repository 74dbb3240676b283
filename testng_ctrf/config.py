"""Configuration for the TestNG to CTRF converter."""

import logging
import os
from pathlib import Path

from .ctrf_report import DEFAULT_TOOL_NAME

DEFAULT_OUTPUT_PATH = "ctrf/ctrf-report.json"
DEFAULT_SERVER_PORT = 8978

CONFIG_KEYS = ['CTRF_TOOL_NAME', 'CTRF_OUTPUT_PATH', 'FASTMCP_PORT', 'LOG_LEVEL']


def load_config() -> dict:
    """Load config from environment variables and .env file.

    Environment variables take precedence over .env file values.
    """
    paths = [
        os.environ.get('TESTNG_CTRF_CONFIG'),
        Path.cwd() / '.env',
        Path(__file__).parent.parent / '.env',
    ]
    config = {}
    for p in paths:
        if p and Path(p).is_file():
            for line in Path(p).read_text(encoding='utf-8').splitlines():
                line = line.strip()
                if line and not line.startswith('#') and '=' in line:
                    key, value = line.split('=', 1)
                    config[key.strip()] = value.strip()
            break

    for key in CONFIG_KEYS:
        env_value = os.environ.get(key)
        if env_value is not None:
            config[key] = env_value

    return config


def get_default_tool_name() -> str:
    return load_config().get('CTRF_TOOL_NAME') or DEFAULT_TOOL_NAME


def get_default_output_path() -> Path:
    return Path(load_config().get('CTRF_OUTPUT_PATH') or DEFAULT_OUTPUT_PATH)


def get_server_port() -> int:
    try:
        return int(load_config().get('FASTMCP_PORT', DEFAULT_SERVER_PORT))
    except ValueError:
        return DEFAULT_SERVER_PORT


def get_log_level() -> str:
    level = load_config().get('LOG_LEVEL', 'INFO').upper()
    if level not in logging.getLevelNamesMapping():
        return 'INFO'
    return level
