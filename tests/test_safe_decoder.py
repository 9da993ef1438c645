# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""End-to-end behaviour of the fallback-aware entry API."""

from __future__ import annotations

import copy
from collections.abc import Callable
from dataclasses import dataclass, make_dataclass
from typing import Annotated, Any

import pytest

from safe_decoder import (
    Configuration,
    ConfigurationError,
    DataCorruptedError,
    DecoderSettings,
    JSONDecoder,
    KeyNotFoundError,
    SafeDecoder,
    ScalarKind,
    TypeMismatchError,
    decode,
)
from safe_decoder.kinds import SCALAR_KINDS
from tests.fixtures.models import (
    NORMAL_PAYLOAD,
    SPARSE_PAYLOAD,
    CustomDefaults,
    Device,
    Epidemic,
    Feed,
    News,
    Profile,
    Status,
    StrictDefaults,
    Tool,
)

Encode = Callable[[Any], bytes]


@dataclass(frozen=True)
class Reading:
    value: float
    label: str = "sensor"


def test_complete_payload_decodes_without_defaults(safe_decoder: SafeDecoder, encode: Encode) -> None:
    model = safe_decoder.decode(Feed, encode(NORMAL_PAYLOAD))

    assert model == Feed(
        epidemics=[Epidemic(title="testNCoV", num=1, route_uri="test://url")],
        tools=[Tool(title="button", img="", route_uri="test://url")],
        news=News(news_id="newsId", dataid="dataid", title="news", route_uri="test://url", recommend_info=""),
    )


def test_missing_fields_fall_back_to_baseline(safe_decoder: SafeDecoder, encode: Encode) -> None:
    model = safe_decoder.decode(Feed, encode(SPARSE_PAYLOAD))

    assert model == Feed(
        epidemics=[Epidemic(title="testNCoV", num=0, route_uri="")],
        tools=[Tool(title="button", img="", route_uri="")],
        news=News(news_id="newsId", dataid="", title="news", route_uri="", recommend_info=""),
    )


def test_provider_default_replaces_missing_section(safe_decoder: SafeDecoder, encode: Encode) -> None:
    payload = copy.deepcopy(SPARSE_PAYLOAD)
    del payload["epidemic"]

    model = safe_decoder.decode(Feed, CustomDefaults, encode(payload))

    assert model == Feed(
        epidemics=[Epidemic(title="aaa", num=20, route_uri="test://url")],
        tools=[Tool(title="button", img="", route_uri="")],
        news=News(news_id="newsId", dataid="", title="news", route_uri="", recommend_info=""),
    )


def test_missing_section_without_default_raises(safe_decoder: SafeDecoder, encode: Encode) -> None:
    payload = copy.deepcopy(SPARSE_PAYLOAD)
    del payload["epidemic"]

    with pytest.raises(KeyNotFoundError) as excinfo:
        safe_decoder.decode(Feed, encode(payload))

    assert excinfo.value.key == "epidemic"


def test_single_malformed_leaf_is_the_only_default(safe_decoder: SafeDecoder, encode: Encode) -> None:
    payload = {"title": "flu", "num": "twenty", "routeUri": "test://flu"}

    assert safe_decoder.decode(Epidemic, encode(payload)) == Epidemic(title="flu", num=0, route_uri="test://flu")


def test_decoding_is_deterministic(safe_decoder: SafeDecoder, encode: Encode) -> None:
    data = encode(SPARSE_PAYLOAD)

    assert safe_decoder.decode(Feed, data) == safe_decoder.decode(Feed, data)


def test_module_level_decode_supports_both_call_shapes(encode: Encode) -> None:
    payload = copy.deepcopy(SPARSE_PAYLOAD)
    del payload["epidemic"]
    data = encode(payload)

    assert decode(Feed, CustomDefaults, data).epidemics[0].num == 20
    with pytest.raises(KeyNotFoundError):
        decode(Feed, data)


def test_empty_provider_surfaces_native_error(safe_decoder: SafeDecoder, encode: Encode) -> None:
    with pytest.raises(KeyNotFoundError) as excinfo:
        safe_decoder.decode(Feed, StrictDefaults, encode(SPARSE_PAYLOAD))

    assert excinfo.value.key == "num"
    assert excinfo.value.coding_path == ("epidemic", 0)


def test_container_shape_mismatch_is_never_masked(safe_decoder: SafeDecoder, encode: Encode) -> None:
    payload = copy.deepcopy(NORMAL_PAYLOAD)
    payload["button"] = [{"title": "button"}]

    with pytest.raises(TypeMismatchError) as excinfo:
        safe_decoder.decode(Feed, encode(payload))

    assert excinfo.value.coding_path == ("button",)


def test_root_compound_failure_is_not_masked(safe_decoder: SafeDecoder, encode: Encode) -> None:
    class EpidemicDefaults:
        configuration = Configuration.builder().register(Epidemic, Epidemic(title="", num=0, route_uri="")).build()

    with pytest.raises(TypeMismatchError):
        safe_decoder.decode(Epidemic, EpidemicDefaults, encode([]))


def test_root_scalar_falls_back(safe_decoder: SafeDecoder, encode: Encode) -> None:
    assert safe_decoder.decode(int, encode("not a number")) == 0
    assert safe_decoder.decode(list[str], encode(["a", 1, None])) == ["a", "", ""]


def test_enum_field_uses_registered_default(safe_decoder: SafeDecoder, encode: Encode) -> None:
    class DeviceDefaults:
        configuration = Configuration.builder().register(Status, Status.RETIRED).build()

    payload = {"name": "probe", "status": "exploded", "battery": 512}

    device = safe_decoder.decode(Device, DeviceDefaults, encode(payload))

    assert device == Device(name="probe", status=Status.RETIRED, battery=0)


def test_enum_field_without_default_raises(safe_decoder: SafeDecoder, encode: Encode) -> None:
    payload = {"name": "probe", "status": "exploded", "battery": 12}

    with pytest.raises(DataCorruptedError) as excinfo:
        safe_decoder.decode(Device, encode(payload))

    assert excinfo.value.coding_path == ("status",)


def test_provider_instance_is_accepted(safe_decoder: SafeDecoder, encode: Encode) -> None:
    payload = copy.deepcopy(SPARSE_PAYLOAD)
    del payload["epidemic"]

    model = safe_decoder.decode(Feed, CustomDefaults(), encode(payload))

    assert model.epidemics == [Epidemic(title="aaa", num=20, route_uri="test://url")]


def test_provider_without_configuration_is_rejected(safe_decoder: SafeDecoder, encode: Encode) -> None:
    class NotAProvider:
        configuration = {"int": 1}

    with pytest.raises(ConfigurationError):
        safe_decoder.decode(Feed, NotAProvider, encode(NORMAL_PAYLOAD))


def test_invalid_json_is_reported_as_corrupted(safe_decoder: SafeDecoder) -> None:
    with pytest.raises(DataCorruptedError) as excinfo:
        safe_decoder.decode(Feed, b"{not json")

    assert excinfo.value.coding_path == ()
    assert excinfo.value.__cause__ is not None


def test_decode_rejects_wrong_arity(safe_decoder: SafeDecoder) -> None:
    with pytest.raises(TypeError):
        safe_decoder.decode(Feed)


def test_decode_object_accepts_parsed_payload(safe_decoder: SafeDecoder) -> None:
    model = safe_decoder.decode_object(Epidemic, {"title": "flu"})

    assert model == Epidemic(title="flu", num=0, route_uri="")


def test_settings_and_decoder_are_mutually_exclusive() -> None:
    with pytest.raises(ValueError):
        SafeDecoder(JSONDecoder(), settings=DecoderSettings())


def test_whole_type_default_only_applies_when_field_recovery_fails(
    safe_decoder: SafeDecoder,
    encode: Encode,
) -> None:
    placeholder = News(news_id="none", dataid="", title="", route_uri="", recommend_info="")

    class NewsDefaults:
        configuration = Configuration.builder().register(News, placeholder).build()

    payload = [
        "not an object",
        {"newsId": "n1", "dataid": "d1", "title": "t1", "routeUri": "r1"},
    ]

    items = safe_decoder.decode(list[News], NewsDefaults, encode(payload))

    assert items == [
        placeholder,
        News(news_id="n1", dataid="d1", title="t1", route_uri="r1", recommend_info=""),
    ]


def test_pydantic_model_fields_fall_back(safe_decoder: SafeDecoder, encode: Encode) -> None:
    profile = safe_decoder.decode(Profile, encode({"userName": "ada", "age": 300}))

    assert profile == Profile(userName="ada", age=0)
    assert profile.nickname is None


def test_dataclass_defaults_cover_absent_keys(safe_decoder: SafeDecoder, encode: Encode) -> None:
    device = safe_decoder.decode(Device, encode({"name": "probe", "status": "active", "battery": 80}))

    assert device == Device(name="probe", status=Status.ACTIVE, battery=80)


def test_present_collections_decode_with_element_fallbacks(safe_decoder: SafeDecoder, encode: Encode) -> None:
    payload = {"name": "probe", "status": "active", "battery": 80, "tags": ["a", 2], "note": None}

    device = safe_decoder.decode(Device, encode(payload))

    assert device.tags == ["a", ""]
    assert device.note is None


@pytest.mark.parametrize("kind", SCALAR_KINDS, ids=repr)
def test_missing_scalar_field_decodes_to_baseline_default(safe_decoder: SafeDecoder, kind: ScalarKind) -> None:
    holder = make_dataclass("Holder", [("value", Annotated[kind.python_type, kind])])

    result = safe_decoder.decode_object(holder, {})

    assert result.value == kind.zero
    assert type(result.value) is kind.python_type


def test_number_too_large_for_a_float_falls_back(safe_decoder: SafeDecoder) -> None:
    data = b'{"value": 1' + b"0" * 400 + b"}"

    assert safe_decoder.decode(Reading, data) == Reading(value=0.0)


def test_null_for_defaulted_field_keeps_the_declared_default(safe_decoder: SafeDecoder, encode: Encode) -> None:
    payload = {"name": "probe", "status": "active", "battery": 80, "tags": None}

    device = safe_decoder.decode(Device, StrictDefaults, encode(payload))

    assert device.tags == []


def test_null_scalar_with_declared_default_keeps_it(safe_decoder: SafeDecoder) -> None:
    assert safe_decoder.decode_object(Reading, {"value": 1.5, "label": None}) == Reading(value=1.5, label="sensor")
