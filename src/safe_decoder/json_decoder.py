# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Native JSON backend implementing the decoding protocols.

The backend is strict: a missing key, a null where a value is required or a
value of the wrong JSON type raises immediately. Unkeyed containers only move
their cursor after a successful decode, except :meth:`super_decoder`, which
always consumes the current element.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any, Final, TypeVar, overload

from .codable import decode_value
from .errors import DataCorruptedError, KeyNotFoundError, TypeMismatchError, ValueNotFoundError
from .introspection import normalize_token
from .kinds import ScalarKind, json_type_name
from .settings import DecoderSettings
from .types import ROOT_PATH, CodingKey, CodingPath, JSONValue, TypeToken, UserInfo

T = TypeVar("T")


class _Absent:
    """Marker for a value requested under a key the object does not contain."""

    def __repr__(self) -> str:
        return "<absent>"


ABSENT: Final = _Absent()


class JSONDecoder:
    """Decode JSON documents into typed values without any fallbacks."""

    def __init__(self, settings: DecoderSettings | None = None) -> None:
        self.settings = settings if settings is not None else DecoderSettings()

    @overload
    def decode(self, type_: type[T], data: bytes | bytearray | str) -> T: ...

    @overload
    def decode(self, type_: TypeToken, data: bytes | bytearray | str) -> Any: ...

    def decode(self, type_: TypeToken, data: bytes | bytearray | str) -> Any:
        """Parse ``data`` and decode it as ``type_``.

        Args:
            type_: Target annotation.
            data: Encoded JSON document.

        Returns:
            Any: Decoded value.

        Raises:
            DecodingError: If ``data`` is not valid JSON or does not match ``type_``.
        """

        return self.decode_object(type_, self.parse(data))

    def decode_object(self, type_: TypeToken, payload: JSONValue) -> Any:
        """Decode an already parsed JSON value as ``type_``."""

        return decode_value(type_, self.decoder_for(payload))

    def decoder_for(self, payload: JSONValue) -> JSONDecodingContext:
        """Return the top-level decoding context for ``payload``."""

        return JSONDecodingContext(payload, ROOT_PATH, self.settings)

    @staticmethod
    def parse(data: bytes | bytearray | str) -> JSONValue:
        """Parse ``data`` into JSON values.

        Args:
            data: Encoded JSON document.

        Returns:
            JSONValue: Parsed document.

        Raises:
            DataCorruptedError: If ``data`` is not valid UTF-8 JSON.
        """

        # JSONDecodeError, UnicodeDecodeError and the integer digit limit are all ValueErrors.
        try:
            return json.loads(data)
        except ValueError as exc:
            raise DataCorruptedError("The given data was not valid JSON.") from exc


class JSONDecodingContext:
    """Decoding position over one parsed JSON value."""

    __slots__ = ("_path", "_settings", "_value")

    def __init__(self, value: JSONValue | _Absent, coding_path: CodingPath, settings: DecoderSettings) -> None:
        self._value = value
        self._path = coding_path
        self._settings = settings

    @property
    def coding_path(self) -> CodingPath:
        return self._path

    @property
    def user_info(self) -> UserInfo:
        return self._settings.user_info

    def keyed_container(self) -> JSONKeyedContainer:
        value = _require_present(self._value, dict, "keyed decoding container", self._path)
        if not isinstance(value, Mapping):
            raise TypeMismatchError(
                dict,
                f"Expected to decode a dictionary but found {json_type_name(value)} instead.",
                coding_path=self._path,
            )
        return JSONKeyedContainer(value, self._path, self._settings)

    def unkeyed_container(self) -> JSONUnkeyedContainer:
        value = _require_present(self._value, list, "unkeyed decoding container", self._path)
        if not isinstance(value, Sequence) or isinstance(value, str):
            raise TypeMismatchError(
                list,
                f"Expected to decode an array but found {json_type_name(value)} instead.",
                coding_path=self._path,
            )
        return JSONUnkeyedContainer(value, self._path, self._settings)

    def single_value_container(self) -> JSONSingleValueContainer:
        return JSONSingleValueContainer(self._value, self._path, self._settings)


class JSONSingleValueContainer:
    """Single-value view over one parsed JSON value."""

    __slots__ = ("_path", "_settings", "_value")

    def __init__(self, value: JSONValue | _Absent, coding_path: CodingPath, settings: DecoderSettings) -> None:
        self._value = value
        self._path = coding_path
        self._settings = settings

    @property
    def coding_path(self) -> CodingPath:
        return self._path

    def decode_nil(self) -> bool:
        return self._value is None or self._value is ABSENT

    def decode(self, type_: TypeToken) -> Any:
        token = normalize_token(type_)
        if self._value is ABSENT:
            raise _key_not_found(self._path)
        if isinstance(token, ScalarKind):
            return token.coerce(self._value, coding_path=self._path)
        return decode_value(token, JSONDecodingContext(self._value, self._path, self._settings))


class JSONKeyedContainer:
    """Keyed view over a JSON object, applying the configured key strategy."""

    __slots__ = ("_mapping", "_path", "_settings")

    def __init__(self, mapping: Mapping[str, JSONValue], coding_path: CodingPath, settings: DecoderSettings) -> None:
        strategy = settings.key_strategy
        self._mapping = {strategy.convert(key): value for key, value in mapping.items()}
        self._path = coding_path
        self._settings = settings

    @property
    def coding_path(self) -> CodingPath:
        return self._path

    @property
    def all_keys(self) -> tuple[str, ...]:
        return tuple(self._mapping)

    def contains(self, key: str) -> bool:
        return key in self._mapping

    def decode_nil(self, key: str) -> bool:
        return self._require(key) is None

    def decode(self, type_: TypeToken, key: str) -> Any:
        token = normalize_token(type_)
        if isinstance(token, ScalarKind):
            return token.coerce(self._require(key), coding_path=(*self._path, key))
        return decode_value(token, self.super_decoder(key))

    def decode_if_present(self, type_: TypeToken, key: str) -> Any:
        if self._mapping.get(key) is None:
            return None
        return self.decode(type_, key)

    def nested_keyed_container(self, key: str) -> JSONKeyedContainer:
        return JSONDecodingContext(self._require(key), (*self._path, key), self._settings).keyed_container()

    def nested_unkeyed_container(self, key: str) -> JSONUnkeyedContainer:
        return JSONDecodingContext(self._require(key), (*self._path, key), self._settings).unkeyed_container()

    def super_decoder(self, key: CodingKey) -> JSONDecodingContext:
        value = self._mapping.get(key, ABSENT) if isinstance(key, str) else ABSENT
        return JSONDecodingContext(value, (*self._path, key), self._settings)

    def _require(self, key: str) -> JSONValue:
        try:
            return self._mapping[key]
        except KeyError:
            raise KeyNotFoundError(
                key,
                f"No value associated with key '{key}'.",
                coding_path=self._path,
            ) from None


class JSONUnkeyedContainer:
    """Ordered view over a JSON array with a forward-only cursor."""

    __slots__ = ("_index", "_items", "_path", "_settings")

    def __init__(self, items: Sequence[JSONValue], coding_path: CodingPath, settings: DecoderSettings) -> None:
        self._items = items
        self._path = coding_path
        self._settings = settings
        self._index = 0

    @property
    def coding_path(self) -> CodingPath:
        return self._path

    @property
    def count(self) -> int | None:
        return len(self._items)

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def is_at_end(self) -> bool:
        return self._index >= len(self._items)

    def decode_nil(self) -> bool:
        self._ensure_not_at_end(None)
        if self._items[self._index] is None:
            self._index += 1
            return True
        return False

    def decode(self, type_: TypeToken) -> Any:
        token = normalize_token(type_)
        self._ensure_not_at_end(token)
        element_path = (*self._path, self._index)
        raw = self._items[self._index]
        if isinstance(token, ScalarKind):
            value = token.coerce(raw, coding_path=element_path)
        else:
            value = decode_value(token, JSONDecodingContext(raw, element_path, self._settings))
        self._index += 1
        return value

    def nested_keyed_container(self) -> JSONKeyedContainer:
        container = self._element_context(dict).keyed_container()
        self._index += 1
        return container

    def nested_unkeyed_container(self) -> JSONUnkeyedContainer:
        container = self._element_context(list).unkeyed_container()
        self._index += 1
        return container

    def super_decoder(self) -> JSONDecodingContext:
        context = self._element_context(None)
        self._index += 1
        return context

    def _element_context(self, expected: TypeToken) -> JSONDecodingContext:
        self._ensure_not_at_end(expected)
        return JSONDecodingContext(self._items[self._index], (*self._path, self._index), self._settings)

    def _ensure_not_at_end(self, expected: TypeToken) -> None:
        if self.is_at_end:
            raise ValueNotFoundError(
                expected,
                "Unkeyed container is at end.",
                coding_path=(*self._path, self._index),
            )


def _require_present(value: JSONValue | _Absent, expected: type, description: str, path: CodingPath) -> JSONValue:
    """Return ``value`` unless it is absent or null, raising the matching error."""

    if value is ABSENT:
        raise _key_not_found(path)
    if value is None:
        raise ValueNotFoundError(
            expected,
            f"Cannot get {description} -- found null value instead.",
            coding_path=path,
        )
    return value


def _key_not_found(path: CodingPath) -> KeyNotFoundError:
    key = path[-1] if path else ""
    return KeyNotFoundError(key, f"No value associated with key '{key}'.", coding_path=path[:-1])


__all__ = [
    "ABSENT",
    "JSONDecoder",
    "JSONDecodingContext",
    "JSONKeyedContainer",
    "JSONSingleValueContainer",
    "JSONUnkeyedContainer",
]
