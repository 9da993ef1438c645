# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Type-keyed registry of default values consulted when decoding fails."""

from __future__ import annotations

import copy
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import ClassVar, Protocol, Self, TypeVar, overload, runtime_checkable

from .errors import ConfigurationError
from .introspection import conforms, normalize_token
from .kinds import SCALAR_KINDS
from .types import TypeToken

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Configuration:
    """Immutable mapping from type token to the default substituted on failure.

    Instances are produced by :class:`ConfigurationBuilder` and never change
    afterwards, which makes a single configuration safe to share between
    recursive decodes and across threads. Lookups hand out deep copies so a
    caller mutating a defaulted list cannot affect any other decode.
    """

    _defaults: Mapping[TypeToken, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Freeze the backing mapping."""

        object.__setattr__(self, "_defaults", MappingProxyType(dict(self._defaults)))

    @classmethod
    def default(cls) -> Configuration:
        """Return the process-wide baseline configuration.

        Returns:
            Configuration: Configuration registering the zero value of every scalar kind.
        """

        return BASELINE

    @classmethod
    def builder(cls) -> ConfigurationBuilder:
        """Return a builder seeded with the baseline defaults."""

        return ConfigurationBuilder.from_configuration(BASELINE)

    @overload
    def lookup(self, type_: type[T]) -> T | None: ...

    @overload
    def lookup(self, type_: TypeToken) -> object | None: ...

    def lookup(self, type_: TypeToken) -> object | None:
        """Return a copy of the default registered for exactly ``type_``.

        Args:
            type_: Type annotation or scalar kind to look up.

        Returns:
            object | None: Registered default, or ``None`` when no fallback exists.
        """

        token = normalize_token(type_)
        try:
            value = self._defaults[token]
        except (KeyError, TypeError):
            return None
        if not conforms(value, token):
            return None
        return copy.deepcopy(value)

    def merged(self, other: Configuration) -> Configuration:
        """Return a configuration where entries from ``other`` win on conflicts.

        Args:
            other: Configuration layered on top of ``self``.

        Returns:
            Configuration: New configuration combining both registries.
        """

        return Configuration({**self._defaults, **other._defaults})

    def tokens(self) -> tuple[TypeToken, ...]:
        """Return the registered type tokens in registration order."""

        return tuple(self._defaults)

    def __contains__(self, type_: object) -> bool:
        try:
            return normalize_token(type_) in self._defaults
        except TypeError:
            return False

    def __len__(self) -> int:
        return len(self._defaults)

    def __iter__(self) -> Iterator[TypeToken]:
        return iter(self._defaults)


class ConfigurationBuilder:
    """Mutable staging area used to assemble a :class:`Configuration`."""

    def __init__(self) -> None:
        self._defaults: dict[TypeToken, object] = {}

    @classmethod
    def from_configuration(cls, configuration: Configuration) -> ConfigurationBuilder:
        """Return a builder pre-populated with the entries of ``configuration``.

        Args:
            configuration: Finalised configuration to copy.

        Returns:
            ConfigurationBuilder: Builder holding a copy of every entry.
        """

        builder = cls()
        for token in configuration.tokens():
            builder._defaults[token] = configuration.lookup(token)
        return builder

    def register(self, type_: TypeToken, value: object) -> Self:
        """Register ``value`` as the default for exactly ``type_``.

        A prior entry for the same type is overwritten.

        Args:
            type_: Type annotation, class, or scalar kind the default applies to.
            value: Default substituted when decoding ``type_`` fails.

        Returns:
            ConfigurationBuilder: ``self`` to allow chained registrations.

        Raises:
            ConfigurationError: If ``value`` is ``None`` or does not satisfy ``type_``.
        """

        token = normalize_token(type_)
        try:
            hash(token)
        except TypeError as exc:
            raise ConfigurationError(f"{type_!r} cannot be used as a registry key") from exc
        if value is None:
            raise ConfigurationError(f"None cannot be registered as the default for {type_!r}")
        if not conforms(value, token):
            raise ConfigurationError(f"default {value!r} is not a valid {type_!r}")
        self._defaults[token] = copy.deepcopy(value)
        return self

    def lookup(self, type_: TypeToken) -> object | None:
        """Return the default currently staged for ``type_``, if any."""

        return self.build().lookup(type_)

    def build(self) -> Configuration:
        """Finalise the staged entries into an immutable configuration."""

        return Configuration(self._defaults)


@runtime_checkable
class ConfigurationProvider(Protocol):
    """Named source of one fixed configuration, selected at the call site.

    Providers are usually plain classes declaring a ``configuration`` class
    attribute, which lets different call sites pick different defaults for the
    same target type without changing the type itself.
    """

    configuration: ClassVar[Configuration]


BASELINE = Configuration({kind: kind.zero for kind in SCALAR_KINDS})


__all__ = [
    "BASELINE",
    "Configuration",
    "ConfigurationBuilder",
    "ConfigurationProvider",
]
