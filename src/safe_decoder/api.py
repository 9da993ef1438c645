# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Entry points that drive a fallback-aware decode."""

from __future__ import annotations

import logging
from typing import Any, Final, TypeAlias, TypeVar, overload

from .codable import decode_value
from .configuration import Configuration, ConfigurationProvider
from .errors import ConfigurationError
from .json_decoder import JSONDecoder
from .proxy import DecodingProxy
from .settings import DecoderSettings
from .types import JSONValue, TypeToken

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

EncodedData: TypeAlias = bytes | bytearray | str
_DECODE_ARITY: Final[tuple[int, int]] = (1, 2)


def resolve_configuration(provider: ConfigurationProvider | type[ConfigurationProvider] | None) -> Configuration:
    """Return the configuration exposed by ``provider``.

    Args:
        provider: Class or instance exposing a ``configuration`` attribute, or
            ``None`` to select the baseline.

    Returns:
        Configuration: Configuration used for the decode call.

    Raises:
        ConfigurationError: If ``provider`` does not expose a :class:`Configuration`.
    """

    if provider is None:
        return Configuration.default()
    configuration = getattr(provider, "configuration", None)
    if not isinstance(configuration, Configuration):
        name = getattr(provider, "__qualname__", type(provider).__qualname__)
        raise ConfigurationError(f"{name} does not expose a Configuration as 'configuration'")
    return configuration


class SafeDecoder:
    """Decode payloads, substituting registered defaults for broken values.

    Example:
        >>> SafeDecoder().decode(Model, payload)
        >>> SafeDecoder().decode(Model, CustomDefaults, payload)
    """

    def __init__(self, decoder: JSONDecoder | None = None, *, settings: DecoderSettings | None = None) -> None:
        """Create the decoder around a native JSON backend.

        Args:
            decoder: Native decoder to wrap; built from ``settings`` when omitted.
            settings: Settings used when ``decoder`` is not supplied.

        Raises:
            ValueError: If both ``decoder`` and ``settings`` are supplied.
        """

        if decoder is not None and settings is not None:
            raise ValueError("pass either a decoder or settings, not both")
        self._decoder = decoder if decoder is not None else JSONDecoder(settings)

    @property
    def native(self) -> JSONDecoder:
        """Return the wrapped native decoder."""

        return self._decoder

    @overload
    def decode(self, type_: type[T], data: EncodedData, /) -> T: ...

    @overload
    def decode(
        self,
        type_: type[T],
        provider: ConfigurationProvider | type[ConfigurationProvider],
        data: EncodedData,
        /,
    ) -> T: ...

    @overload
    def decode(self, type_: TypeToken, *args: Any) -> Any: ...

    def decode(self, type_: TypeToken, *args: Any) -> Any:
        """Decode ``data`` as ``type_`` using the baseline or a provider's configuration.

        Call as ``decode(type_, data)`` or ``decode(type_, provider, data)``.

        Returns:
            Any: Decoded value mixing payload values and substituted defaults.

        Raises:
            DecodingError: The first native error no registered default could resolve.
            TypeError: If called with the wrong number of arguments.
        """

        if len(args) not in _DECODE_ARITY:
            raise TypeError(f"decode() takes a type, an optional provider and data ({len(args) + 1} given)")
        provider = args[0] if len(args) == 2 else None
        payload = self._decoder.parse(args[-1])
        return self.decode_object(type_, payload, provider)

    def decode_object(
        self,
        type_: TypeToken,
        payload: JSONValue,
        provider: ConfigurationProvider | type[ConfigurationProvider] | None = None,
    ) -> Any:
        """Decode an already parsed JSON value as ``type_``.

        Args:
            type_: Target annotation.
            payload: Parsed JSON value.
            provider: Optional configuration provider replacing the baseline.

        Returns:
            Any: Decoded value.
        """

        configuration = resolve_configuration(provider)
        LOGGER.debug("decoding %r with %d registered default(s)", type_, len(configuration))
        proxy = DecodingProxy(self._decoder.decoder_for(payload), configuration)
        return decode_value(type_, proxy)


_DEFAULT_DECODER: Final[SafeDecoder] = SafeDecoder()


@overload
def decode(type_: type[T], data: EncodedData, /) -> T: ...


@overload
def decode(
    type_: type[T],
    provider: ConfigurationProvider | type[ConfigurationProvider],
    data: EncodedData,
    /,
) -> T: ...


@overload
def decode(type_: TypeToken, *args: Any) -> Any: ...


def decode(type_: TypeToken, *args: Any) -> Any:
    """Decode with a shared :class:`SafeDecoder` using default settings."""

    return _DEFAULT_DECODER.decode(type_, *args)


__all__ = [
    "SafeDecoder",
    "decode",
    "resolve_configuration",
]
