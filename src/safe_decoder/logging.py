# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Logging helpers for surfacing substituted defaults."""

from __future__ import annotations

import logging
import sys
from typing import Final, TextIO

LOGGER_NAME: Final[str] = "safe_decoder"
_CONFIGURED_FLAG: Final[str] = "_safe_decoder_verbose_configured"


def enable_verbose_logging(stream: TextIO | None = None) -> logging.Logger:
    """Stream debug messages from every ``safe_decoder`` module to ``stream``.

    Repeated calls are no-ops so the handler is attached at most once.

    Args:
        stream: Destination stream; defaults to ``sys.stderr``.

    Returns:
        logging.Logger: The package logger.
    """

    logger = logging.getLogger(LOGGER_NAME)
    if getattr(logger, _CONFIGURED_FLAG, False):
        return logger
    handler = logging.StreamHandler(stream=stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    setattr(logger, _CONFIGURED_FLAG, True)
    return logger


__all__ = ["LOGGER_NAME", "enable_verbose_logging"]
