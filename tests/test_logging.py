"""Tests for debug logging of curve construction."""

from __future__ import annotations

import logging

import pytest

from bsplinecurve import BsplineCurve


def test_unsorted_knots_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    """Sorting unsorted knots emits a debug record."""
    with caplog.at_level(logging.DEBUG, logger="bsplinecurve.curve"):
        BsplineCurve(1, [0.0, 1.0], [1.0, 0.0, 0.0, 1.0])
    assert any("not sorted" in r.getMessage() for r in caplog.records)


def test_sorted_knots_are_not_reported(caplog: pytest.LogCaptureFixture) -> None:
    """Sorted knots are stored without a sorting record."""
    with caplog.at_level(logging.DEBUG, logger="bsplinecurve.curve"):
        BsplineCurve(1, [0.0, 1.0], [0.0, 0.0, 1.0, 1.0])
    messages = [r.getMessage() for r in caplog.records]
    assert not any("not sorted" in m for m in messages)
    assert any("Created numeric curve of degree 1" in m for m in messages)
