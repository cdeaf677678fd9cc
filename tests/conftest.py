"""Pytest fixtures shared by the test modules."""

from __future__ import annotations

import logging

import pytest


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("appx_fetch.tests")
