"""Fixtures for end-to-end CLI tests.

`log-demo` is a test-only subcommand that logs a fixed script of records on
a project logger and a third-party logger, so the tests can check which of
them reach the console and the flight recorder.
"""

import logging

import click
import pytest
from click.testing import CliRunner

from escaper.entrypoints.cli.main import escaper

# pylint: disable=redefined-outer-name

PROJECT_LOGGER = "escaper.demo"
THIRD_PARTY_LOGGER = "some.thirdparty"

# (logger, level, message) in emission order. The last record is a DEBUG
# logged after the final WARNING, so only a forced flush writes it out.
DEMO_SCRIPT = (
    (PROJECT_LOGGER, logging.DEBUG, "This is a debug-level test message."),
    (PROJECT_LOGGER, logging.INFO, "This is an info-level test message."),
    (PROJECT_LOGGER, logging.WARNING, "This is a warning-level test message."),
    (PROJECT_LOGGER, logging.ERROR, "This is an error-level test message."),
    (PROJECT_LOGGER, logging.CRITICAL, "This is a critical-level test message."),
    (THIRD_PARTY_LOGGER, logging.DEBUG, "This is a debug-level third-party test message."),
    (THIRD_PARTY_LOGGER, logging.INFO, "This is an info-level third-party test message."),
    (
        THIRD_PARTY_LOGGER,
        logging.WARNING,
        "This is a warning-level third-party test message.",
    ),
    (PROJECT_LOGGER, logging.DEBUG, "This is a final debug-level test message."),
)


@click.command("log-demo")
def log_demo():
    """Replay DEMO_SCRIPT through the logging system."""
    for name, level, message in DEMO_SCRIPT:
        logging.getLogger(name).log(level, message)


@pytest.fixture
def registered_log_demo():
    """Make `escaper log-demo` available for the duration of one test."""
    escaper.add_command(log_demo)
    try:
        yield
    finally:
        escaper.commands.pop(log_demo.name, None)
        for section in getattr(escaper, "_section_set", []):
            getattr(section, "commands", {}).pop(log_demo.name, None)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside a fresh temporary working directory."""
    with runner.isolated_filesystem():
        yield
