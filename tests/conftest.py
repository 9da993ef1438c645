# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterator
from typing import Any

import pytest

from safe_decoder import JSONDecoder, SafeDecoder
from safe_decoder.logging import LOGGER_NAME


@pytest.fixture
def encode() -> Callable[[Any], bytes]:
    """Return a helper serialising payloads into JSON bytes."""

    def _encode(payload: Any) -> bytes:
        return json.dumps(payload).encode("utf-8")

    return _encode


@pytest.fixture
def safe_decoder() -> SafeDecoder:
    """Return a safe decoder with default settings."""
    return SafeDecoder()


@pytest.fixture
def native_decoder() -> JSONDecoder:
    """Return a strict native decoder with default settings."""
    return JSONDecoder()


@pytest.fixture
def restore_package_logger() -> Iterator[logging.Logger]:
    """Yield the package logger and undo any verbose configuration afterwards."""

    logger = logging.getLogger(LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    state = dict(vars(logger))
    try:
        yield logger
    finally:
        logger.handlers = handlers
        logger.setLevel(level)
        logger.propagate = propagate
        for name in set(vars(logger)) - set(state):
            delattr(logger, name)
