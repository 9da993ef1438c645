# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for decoder settings and key strategies."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from safe_decoder import DecoderSettings, KeyDecodingStrategy
from safe_decoder.settings import camel_to_snake


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("routeUri", "route_uri"),
        ("recommendInfo", "recommend_info"),
        ("newsID", "news_id"),
        ("HTTPStatusCode", "http_status_code"),
        ("dataid", "dataid"),
        ("already_snake", "already_snake"),
    ],
)
def test_camel_to_snake(key: str, expected: str) -> None:
    assert camel_to_snake(key) == expected


def test_default_keys_are_left_untouched() -> None:
    assert KeyDecodingStrategy.USE_DEFAULT_KEYS.convert("routeUri") == "routeUri"
    assert KeyDecodingStrategy.CONVERT_FROM_CAMEL_CASE.convert("routeUri") == "route_uri"


def test_settings_are_frozen() -> None:
    settings = DecoderSettings()

    assert settings.key_strategy is KeyDecodingStrategy.USE_DEFAULT_KEYS
    assert settings.user_info == {}
    with pytest.raises(ValidationError):
        settings.key_strategy = KeyDecodingStrategy.CONVERT_FROM_CAMEL_CASE


def test_strategy_accepts_its_string_value() -> None:
    settings = DecoderSettings.model_validate({"key_strategy": "convert_from_camel_case"})

    assert settings.key_strategy is KeyDecodingStrategy.CONVERT_FROM_CAMEL_CASE
