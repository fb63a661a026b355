# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

import base64
import logging

import pytest

from domview.cli.errors import CLIError
from domview.cli.utils import decode_data_uri, print_styling_report
from domview.mapping import MappedSelection, MappingStrategy
from domview.viewer import DomainOutcome, StylingReport


def test_decode_base64_data_uri():
    encoded = base64.b64encode(b"<svg></svg>").decode("ascii")
    assert decode_data_uri(f"data:image/svg+xml;base64,{encoded}") == "<svg></svg>"


def test_decode_plain_data_uri():
    assert decode_data_uri("data:text/plain,hello") == "hello"


@pytest.mark.parametrize("value", ["<svg></svg>", "data:image/svg+xml;base64,"])
def test_decode_rejects_non_data_uri(value):
    with pytest.raises(CLIError):
        decode_data_uri(value)


def test_print_styling_report(caplog):
    report = StylingReport(
        [
            DomainOutcome(
                0,
                "d1",
                MappedSelection("d1", "A", "20-69", MappingStrategy.OFFSET),
                "#f00",
            ),
            DomainOutcome(1, "far", reason="does not fit"),
        ]
    )
    with caplog.at_level(logging.INFO, logger="domview"):
        print_styling_report("2uub", "A", report)

    assert "d1: A:20-69 (#f00)" in caplog.text
    assert "does not fit" in caplog.text
    assert "1 styled, 1 skipped" in caplog.text
