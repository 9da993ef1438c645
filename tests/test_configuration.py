# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the type-keyed default registry."""

from __future__ import annotations

from typing import Annotated, List

import pytest

from safe_decoder import (
    BASELINE,
    BOOL,
    DOUBLE,
    FLOAT,
    INT,
    INT8,
    STRING,
    UINT64,
    Configuration,
    ConfigurationError,
    ConfigurationProvider,
)
from tests.fixtures.models import CustomDefaults, Epidemic, Status


def test_baseline_registers_zero_for_every_scalar_kind() -> None:
    baseline = Configuration.default()

    assert baseline is BASELINE
    assert len(baseline) == 14
    assert baseline.lookup(bool) is False
    assert baseline.lookup(int) == 0
    assert baseline.lookup(float) == 0.0
    assert baseline.lookup(str) == ""
    assert baseline.lookup(FLOAT) == 0.0
    assert baseline.lookup(UINT64) == 0


def test_annotated_width_selects_its_own_entry() -> None:
    configuration = Configuration.builder().register(INT8, 7).build()

    assert configuration.lookup(Annotated[int, INT8]) == 7
    assert configuration.lookup(int) == 0


def test_register_overwrites_previous_entry() -> None:
    configuration = Configuration.builder().register(int, 1).register(int, 2).build()

    assert configuration.lookup(INT) == 2


def test_builder_never_mutates_the_baseline() -> None:
    Configuration.builder().register(str, "n/a").register(Status, Status.ACTIVE).build()

    assert BASELINE.lookup(STRING) == ""
    assert Status not in BASELINE


def test_unregistered_type_has_no_default() -> None:
    assert BASELINE.lookup(Epidemic) is None
    assert BASELINE.lookup(list[int]) is None


@pytest.mark.parametrize(
    ("type_", "value"),
    [
        pytest.param(int, "x", id="string-for-int"),
        pytest.param(INT8, 300, id="out-of-range"),
        pytest.param(bool, 0, id="int-for-bool"),
        pytest.param(int, True, id="bool-for-int"),
        pytest.param(str, None, id="none"),
        pytest.param(list[int], [1, "2"], id="bad-element"),
        pytest.param(dict[str, int], {1: 1}, id="bad-key"),
    ],
)
def test_register_rejects_values_of_the_wrong_type(type_: object, value: object) -> None:
    with pytest.raises(ConfigurationError):
        Configuration.builder().register(type_, value)


def test_register_rejects_unhashable_tokens() -> None:
    with pytest.raises(ConfigurationError):
        Configuration.builder().register([int], [1])


def test_typing_aliases_share_an_entry_with_builtin_generics() -> None:
    configuration = Configuration.builder().register(List[int], [1, 2]).build()

    assert configuration.lookup(list[int]) == [1, 2]
    assert list[int] in configuration


def test_lookup_returns_independent_copies() -> None:
    configuration = Configuration.builder().register(list[int], [1, 2]).build()

    first = configuration.lookup(list[int])
    first.append(3)

    assert configuration.lookup(list[int]) == [1, 2]


def test_registered_value_is_copied_on_register() -> None:
    value = [1]
    configuration = Configuration.builder().register(list[int], value).build()
    value.append(2)

    assert configuration.lookup(list[int]) == [1]


def test_builder_changes_after_build_do_not_leak() -> None:
    builder = Configuration.builder().register(int, 5)
    configuration = builder.build()
    builder.register(int, 6)

    assert configuration.lookup(int) == 5
    assert builder.lookup(int) == 6


def test_merged_prefers_entries_from_the_argument() -> None:
    left = Configuration.builder().register(int, 1).build()
    right = Configuration().merged(Configuration.builder().register(DOUBLE, 2.5).build())
    combined = left.merged(Configuration({INT: 9}))

    assert combined.lookup(int) == 9
    assert combined.lookup(BOOL) is False
    assert right.lookup(float) == 2.5


def test_tokens_preserve_registration_order() -> None:
    configuration = Configuration.builder().register(Epidemic, Epidemic("a", 1, "test://a")).build()

    assert configuration.tokens()[-1] is Epidemic
    assert list(configuration)[:2] == [BOOL, INT]


def test_empty_configuration_never_substitutes() -> None:
    configuration = Configuration()

    assert len(configuration) == 0
    assert configuration.lookup(int) is None


def test_provider_protocol_matches_declaring_classes() -> None:
    assert isinstance(CustomDefaults, ConfigurationProvider)
    assert CustomDefaults.configuration.lookup(list[Epidemic]) == [Epidemic("aaa", 20, "test://url")]
