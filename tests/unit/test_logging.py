"""Unit tests for logging setup."""

import io
import json
import logging

import pytest

from fluxgraph.utils.logging import (
    LOGGER_NAME,
    FluxGraphLogger,
    LogMode,
    configure_from_cli,
    get_logger,
    setup_logging,
)


def test_get_logger_returns_custom_class() -> None:
    assert isinstance(get_logger(), FluxGraphLogger)
    assert isinstance(get_logger("fluxgraph.collector"), FluxGraphLogger)


def test_human_format() -> None:
    stream = io.StringIO()
    setup_logging(LogMode.HUMAN, stream=stream)

    get_logger().info("Scanning manifests")

    assert stream.getvalue() == "[INFO] Scanning manifests\n"


def test_verbose_format_has_timestamp() -> None:
    stream = io.StringIO()
    setup_logging(LogMode.VERBOSE, level=logging.DEBUG, stream=stream)

    get_logger().debug("Scanning a.yaml")

    line = stream.getvalue()
    assert line.startswith("[DEBUG][")
    assert line.endswith("] Scanning a.yaml\n")


def test_json_structured_fields() -> None:
    stream = io.StringIO()
    setup_logging(LogMode.JSON, stream=stream)

    get_logger().structured(logging.INFO, "Collected kustomizations", files=2, kustomizations=3)

    entry = json.loads(stream.getvalue())
    assert entry["level"] == "INFO"
    assert entry["msg"] == "Collected kustomizations"
    assert entry["files"] == 2
    assert entry["kustomizations"] == 3
    assert "ts" in entry


def test_structured_human_appends_pairs() -> None:
    stream = io.StringIO()
    setup_logging(LogMode.HUMAN, stream=stream)

    get_logger("fluxgraph.collector").structured(logging.INFO, "Collected", files=1)

    assert stream.getvalue() == "[INFO] Collected (files=1)\n"


def test_structured_respects_level() -> None:
    stream = io.StringIO()
    setup_logging(LogMode.HUMAN, level=logging.WARNING, stream=stream)

    get_logger().structured(logging.INFO, "Collected", files=1)

    assert stream.getvalue() == ""


@pytest.mark.parametrize(
    ("flags", "expected_level"),
    [
        ({}, logging.INFO),
        ({"verbose": True}, logging.DEBUG),
        ({"quiet": True}, logging.WARNING),
        ({"ci": True}, logging.INFO),
    ],
)
def test_configure_from_cli_levels(flags: dict[str, bool], expected_level: int) -> None:
    configure_from_cli(**flags)

    assert logging.getLogger(LOGGER_NAME).level == expected_level
