# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Decoding context contracts shared by native backends and the safe proxies.

A backend implements these protocols once; the generic reconstruction logic in
:mod:`safe_decoder.codable` only ever talks to them, which is what allows the
proxy layer to interpose at every container boundary.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from .types import CodingKey, CodingPath, TypeToken, UserInfo


@runtime_checkable
class Decoder(Protocol):
    """Define a decoding position that hands out container views."""

    @property
    @abstractmethod
    def coding_path(self) -> CodingPath:
        """Return the path of keys and indices leading to this position."""

    @property
    @abstractmethod
    def user_info(self) -> UserInfo:
        """Return caller supplied contextual information."""

    @abstractmethod
    def keyed_container(self) -> KeyedContainer:
        """Return a keyed view over the value at this position.

        Raises:
            TypeMismatchError: If the value is not an object.
            ValueNotFoundError: If the value is null.
        """

    @abstractmethod
    def unkeyed_container(self) -> UnkeyedContainer:
        """Return an ordered view over the value at this position.

        Raises:
            TypeMismatchError: If the value is not an array.
            ValueNotFoundError: If the value is null.
        """

    @abstractmethod
    def single_value_container(self) -> SingleValueContainer:
        """Return a single-value view over the value at this position."""


@runtime_checkable
class SingleValueContainer(Protocol):
    """Define a view over exactly one encoded value."""

    @property
    @abstractmethod
    def coding_path(self) -> CodingPath:
        """Return the path of the wrapped value."""

    @abstractmethod
    def decode_nil(self) -> bool:
        """Return ``True`` when the value is null or absent."""

    @abstractmethod
    def decode(self, type_: TypeToken) -> Any:
        """Return the wrapped value decoded as ``type_``."""


@runtime_checkable
class KeyedContainer(Protocol):
    """Define a map-like view over named fields."""

    @property
    @abstractmethod
    def coding_path(self) -> CodingPath:
        """Return the path of the container itself."""

    @property
    @abstractmethod
    def all_keys(self) -> Sequence[str]:
        """Return every key present in the container."""

    @abstractmethod
    def contains(self, key: str) -> bool:
        """Return ``True`` when ``key`` is present, even if its value is null."""

    @abstractmethod
    def decode_nil(self, key: str) -> bool:
        """Return ``True`` when the value at ``key`` is null.

        Raises:
            KeyNotFoundError: If ``key`` is absent.
        """

    @abstractmethod
    def decode(self, type_: TypeToken, key: str) -> Any:
        """Return the value at ``key`` decoded as ``type_``."""

    @abstractmethod
    def decode_if_present(self, type_: TypeToken, key: str) -> Any:
        """Return the value at ``key`` or ``None`` when absent or null."""

    @abstractmethod
    def nested_keyed_container(self, key: str) -> KeyedContainer:
        """Return a keyed view over the object stored at ``key``."""

    @abstractmethod
    def nested_unkeyed_container(self, key: str) -> UnkeyedContainer:
        """Return an ordered view over the array stored at ``key``."""

    @abstractmethod
    def super_decoder(self, key: CodingKey) -> Decoder:
        """Return a decoder anchored at ``key``."""


@runtime_checkable
class UnkeyedContainer(Protocol):
    """Define an ordered view with a cursor over sequence elements."""

    @property
    @abstractmethod
    def coding_path(self) -> CodingPath:
        """Return the path of the container itself."""

    @property
    @abstractmethod
    def count(self) -> int | None:
        """Return the number of elements, when known."""

    @property
    @abstractmethod
    def current_index(self) -> int:
        """Return the index of the next element to decode."""

    @property
    @abstractmethod
    def is_at_end(self) -> bool:
        """Return ``True`` once every element has been consumed."""

    @abstractmethod
    def decode_nil(self) -> bool:
        """Consume the current element and return ``True`` when it is null.

        Non-null elements are left in place.
        """

    @abstractmethod
    def decode(self, type_: TypeToken) -> Any:
        """Decode the current element as ``type_`` and advance the cursor."""

    @abstractmethod
    def nested_keyed_container(self) -> KeyedContainer:
        """Return a keyed view over the current element and advance."""

    @abstractmethod
    def nested_unkeyed_container(self) -> UnkeyedContainer:
        """Return an ordered view over the current element and advance."""

    @abstractmethod
    def super_decoder(self) -> Decoder:
        """Return a decoder anchored at the current element and advance exactly once."""


__all__ = [
    "Decoder",
    "KeyedContainer",
    "SingleValueContainer",
    "UnkeyedContainer",
]
