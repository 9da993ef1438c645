# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Fallback-aware proxies wrapping every level of a native decoder.

Each proxy forwards shape and metadata queries (``contains``, ``decode_nil``,
``all_keys``, ``count``, ``is_at_end``, ``coding_path``, ``user_info``) to the
wrapped native object untouched. Value extraction is intercepted: the native
decode runs first and, when it raises :class:`DecodingError`, the default
registered for exactly the requested type is substituted. A miss re-raises the
native error unchanged.

Compound values are reconstructed through a nested :class:`DecodingProxy`
anchored at the same position, so field-level fallbacks inside the nested type
fire before a default registered for the compound type as a whole is
considered. Requests for nested containers are never masked.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from functools import partial
from typing import Any, TypeVar, cast

from .codable import decode_value
from .configuration import Configuration
from .errors import DecodingError
from .introspection import normalize_token
from .kinds import ScalarKind
from .protocols import Decoder, KeyedContainer, SingleValueContainer, UnkeyedContainer
from .types import CodingKey, CodingPath, TypeToken, UserInfo, render_path

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


def decode_with_fallback(
    token: TypeToken,
    configuration: Configuration,
    coding_path: CodingPath,
    attempt: Callable[[], T],
) -> T:
    """Run ``attempt`` and substitute the registered default when it fails.

    Args:
        token: Normalised type token requested by the caller.
        configuration: Registry consulted on failure.
        coding_path: Path of the value, used for logging.
        attempt: Callable performing the native decode.

    Returns:
        T: Decoded value or the registered default.

    Raises:
        DecodingError: The original native error when no default is registered.
    """

    try:
        return attempt()
    except DecodingError as exc:
        fallback = configuration.lookup(token)
        if fallback is None:
            LOGGER.debug("no default for %r at %s: %s", token, render_path(coding_path), exc.debug_description)
            raise
        LOGGER.debug("substituted default for %r at %s: %s", token, render_path(coding_path), exc.debug_description)
        return cast(T, fallback)


class DecodingProxy:
    """Pair one native decoding position with the active configuration."""

    __slots__ = ("_configuration", "_decoder")

    def __init__(self, decoder: Decoder, configuration: Configuration) -> None:
        self._decoder = decoder
        self._configuration = configuration

    @property
    def coding_path(self) -> CodingPath:
        return self._decoder.coding_path

    @property
    def user_info(self) -> UserInfo:
        return self._decoder.user_info

    @property
    def configuration(self) -> Configuration:
        """Return the configuration shared by every view of this proxy."""

        return self._configuration

    def keyed_container(self) -> KeyedContainerProxy:
        return KeyedContainerProxy(self._decoder.keyed_container(), self._configuration)

    def unkeyed_container(self) -> UnkeyedContainerProxy:
        return UnkeyedContainerProxy(self._decoder.unkeyed_container(), self._configuration)

    def single_value_container(self) -> SingleValueProxy:
        return SingleValueProxy(self._decoder, self._configuration)


class SingleValueProxy:
    """Single-value view implementing the central leaf-or-compound decode."""

    __slots__ = ("_configuration", "_container", "_decoder")

    def __init__(self, decoder: Decoder, configuration: Configuration) -> None:
        self._decoder = decoder
        self._container: SingleValueContainer = decoder.single_value_container()
        self._configuration = configuration

    @property
    def coding_path(self) -> CodingPath:
        return self._container.coding_path

    def decode_nil(self) -> bool:
        return self._container.decode_nil()

    def decode(self, type_: TypeToken) -> Any:
        """Decode the wrapped value as ``type_``, falling back on failure.

        Scalar kinds are read natively. Compound types are rebuilt through a
        nested :class:`DecodingProxy` over the same position, so only a failure
        that survives field-level recovery reaches the whole-type default.
        """

        token = normalize_token(type_)
        attempt: Callable[[], Any]
        if isinstance(token, ScalarKind):
            attempt = partial(self._container.decode, token)
        else:
            attempt = partial(decode_value, token, DecodingProxy(self._decoder, self._configuration))
        return decode_with_fallback(token, self._configuration, self.coding_path, attempt)


class KeyedContainerProxy:
    """Keyed view substituting defaults for values that fail to decode."""

    __slots__ = ("_configuration", "_container")

    def __init__(self, container: KeyedContainer, configuration: Configuration) -> None:
        self._container = container
        self._configuration = configuration

    @property
    def coding_path(self) -> CodingPath:
        return self._container.coding_path

    @property
    def all_keys(self) -> Sequence[str]:
        return self._container.all_keys

    def contains(self, key: str) -> bool:
        return self._container.contains(key)

    def decode_nil(self, key: str) -> bool:
        return self._container.decode_nil(key)

    def decode(self, type_: TypeToken, key: str) -> Any:
        """Decode the value at ``key``; absent, null or malformed values fall back.

        Args:
            type_: Requested type.
            key: Key of the value inside this container.

        Returns:
            Any: Decoded value or the default registered for ``type_``.
        """

        token = normalize_token(type_)
        attempt: Callable[[], Any]
        if isinstance(token, ScalarKind):
            attempt = partial(self._container.decode, token, key)
        else:
            attempt = partial(self._decode_compound, token, key)
        return decode_with_fallback(token, self._configuration, (*self.coding_path, key), attempt)

    def _decode_compound(self, token: TypeToken, key: str) -> Any:
        return decode_value(token, self.super_decoder(key))

    def decode_if_present(self, type_: TypeToken, key: str) -> Any:
        if not self._container.contains(key) or self._container.decode_nil(key):
            return None
        return self.decode(type_, key)

    def nested_keyed_container(self, key: str) -> KeyedContainerProxy:
        return KeyedContainerProxy(self._container.nested_keyed_container(key), self._configuration)

    def nested_unkeyed_container(self, key: str) -> UnkeyedContainerProxy:
        return UnkeyedContainerProxy(self._container.nested_unkeyed_container(key), self._configuration)

    def super_decoder(self, key: CodingKey) -> DecodingProxy:
        return DecodingProxy(self._container.super_decoder(key), self._configuration)


class UnkeyedContainerProxy:
    """Ordered view substituting defaults for elements that fail to decode.

    Every element decode claims exactly one slot from the native container
    through :meth:`UnkeyedContainer.super_decoder` before any decoding is
    attempted, so success, substitution and failure all advance the cursor by
    one. Native containers leave the cursor in place on failure, which would
    otherwise re-read the same element forever once its error is masked.
    """

    __slots__ = ("_configuration", "_container")

    def __init__(self, container: UnkeyedContainer, configuration: Configuration) -> None:
        self._container = container
        self._configuration = configuration

    @property
    def coding_path(self) -> CodingPath:
        return self._container.coding_path

    @property
    def count(self) -> int | None:
        return self._container.count

    @property
    def current_index(self) -> int:
        return self._container.current_index

    @property
    def is_at_end(self) -> bool:
        return self._container.is_at_end

    def decode_nil(self) -> bool:
        return self._container.decode_nil()

    def decode(self, type_: TypeToken) -> Any:
        """Decode the current element as ``type_`` and advance exactly once.

        Raises:
            ValueNotFoundError: If the container is already at its end.
        """

        token = normalize_token(type_)
        if self._container.is_at_end:
            return self._container.decode(token)
        element = self._container.super_decoder()
        return SingleValueProxy(element, self._configuration).decode(token)

    def nested_keyed_container(self) -> KeyedContainerProxy:
        return KeyedContainerProxy(self._container.nested_keyed_container(), self._configuration)

    def nested_unkeyed_container(self) -> UnkeyedContainerProxy:
        return UnkeyedContainerProxy(self._container.nested_unkeyed_container(), self._configuration)

    def super_decoder(self) -> DecodingProxy:
        return DecodingProxy(self._container.super_decoder(), self._configuration)


__all__ = [
    "DecodingProxy",
    "KeyedContainerProxy",
    "SingleValueProxy",
    "UnkeyedContainerProxy",
    "decode_with_fallback",
]
