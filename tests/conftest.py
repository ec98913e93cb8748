from __future__ import annotations

import logging

import pytest


@pytest.fixture()
def test_logger(caplog: pytest.LogCaptureFixture) -> logging.Logger:
    """Logger that propagates to caplog, isolated from the CLI's file logger."""
    caplog.set_level(logging.INFO, logger="tests.breeders")
    return logging.getLogger("tests.breeders")
