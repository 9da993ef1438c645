# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Generic reconstruction of typed values from any :class:`Decoder`.

:func:`decode_value` is the single entry point used by native containers and by
the safe proxies alike. It only ever talks to the decoding protocols, so the
same reconstruction logic runs whether or not fallbacks are active.

Supported targets:

* scalar kinds and the builtins ``bool``, ``int``, ``float`` and ``str``;
* ``X | None``;
* ``list``, ``set``, ``frozenset`` and ``tuple`` (homogeneous or fixed);
* ``dict[str, X]``;
* :class:`enum.Enum` subclasses with string or integer values;
* classes implementing :class:`Decodable`;
* dataclasses and pydantic models.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from collections.abc import Set as AbstractSet
from typing import Any, Final, Protocol, Self, get_args, get_origin, runtime_checkable

from pydantic import BaseModel, ValidationError

from .errors import DataCorruptedError, UnsupportedTypeError
from .introspection import is_enum_type, is_union, normalize_token, optional_inner, resolve_field_hints
from .kinds import INT, STRING, ScalarKind
from .protocols import Decoder, KeyedContainer
from .types import TypeToken

CODING_KEY: Final[str] = "key"

_SEQUENCE_ORIGINS: Final[frozenset[Any]] = frozenset({list, Sequence, MutableSequence})
_SET_ORIGINS: Final[frozenset[Any]] = frozenset({set, frozenset, AbstractSet})
_MAPPING_ORIGINS: Final[frozenset[Any]] = frozenset({dict, Mapping, MutableMapping})
_BARE_CONTAINERS: Final[frozenset[type]] = frozenset({list, set, frozenset, tuple, dict})


@runtime_checkable
class Decodable(Protocol):
    """Protocol for classes that reconstruct themselves from a decoder."""

    @classmethod
    def from_decoder(cls, decoder: Decoder) -> Self:
        """Return a new instance read from ``decoder``.

        Args:
            decoder: Decoding position holding the encoded instance.

        Returns:
            Self: Reconstructed instance.
        """
        ...


def decode_value(type_: TypeToken, decoder: Decoder) -> Any:
    """Return the value at ``decoder`` reconstructed as ``type_``.

    Args:
        type_: Target annotation.
        decoder: Decoding position holding the encoded value.

    Returns:
        Any: Reconstructed value.

    Raises:
        DecodingError: If the encoded value cannot be read as ``type_``.
        UnsupportedTypeError: If ``type_`` is not a supported target.
    """

    token = normalize_token(type_)
    if isinstance(token, ScalarKind):
        return decoder.single_value_container().decode(token)

    inner = optional_inner(token)
    if inner is not None:
        if decoder.single_value_container().decode_nil():
            return None
        return decode_value(inner, decoder)
    if is_union(token):
        raise UnsupportedTypeError(f"cannot decode union {token!r}; only X | None is supported")

    origin = get_origin(token)
    if origin is not None:
        return _decode_generic(token, origin, get_args(token), decoder)
    if not isinstance(token, type):
        raise UnsupportedTypeError(f"cannot decode {token!r}")
    if token in _BARE_CONTAINERS:
        raise _unparameterised(token)
    if is_enum_type(token):
        return _decode_enum(token, decoder)
    if isinstance(token, Decodable):
        return token.from_decoder(decoder)
    if issubclass(token, BaseModel):
        return _decode_model(token, decoder)
    if dataclasses.is_dataclass(token):
        return _decode_dataclass(token, decoder)
    raise UnsupportedTypeError(f"cannot decode {token.__qualname__}")


def _decode_generic(token: TypeToken, origin: Any, args: tuple[Any, ...], decoder: Decoder) -> Any:
    """Decode parameterised containers such as ``list[int]`` or ``dict[str, X]``."""

    if not args:
        raise _unparameterised(origin)
    if origin in _SEQUENCE_ORIGINS or origin in _SET_ORIGINS:
        element_type = args[0]
        container = decoder.unkeyed_container()
        items: list[Any] = []
        while not container.is_at_end:
            items.append(container.decode(element_type))
        if origin in _SET_ORIGINS:
            return frozenset(items) if origin is frozenset else set(items)
        return items
    if origin is tuple:
        container = decoder.unkeyed_container()
        if len(args) == 2 and args[1] is Ellipsis:
            elements: list[Any] = []
            while not container.is_at_end:
                elements.append(container.decode(args[0]))
            return tuple(elements)
        return tuple(container.decode(arg) for arg in args)
    if origin in _MAPPING_ORIGINS:
        key_type, value_type = args
        if normalize_token(key_type) is not STRING:
            raise UnsupportedTypeError(f"cannot decode {token!r}; mapping keys must be str")
        keyed = decoder.keyed_container()
        return {key: keyed.decode(value_type, key) for key in keyed.all_keys}
    raise UnsupportedTypeError(f"cannot decode {token!r}")


def _unparameterised(origin: Any) -> UnsupportedTypeError:
    name = getattr(origin, "__qualname__", repr(origin))
    return UnsupportedTypeError(f"cannot decode unparameterised {name}; declare its element types, e.g. {name}[str]")


def _decode_enum(token: type, decoder: Decoder) -> Any:
    """Decode an enum member from its raw string or integer value."""

    raw_values = [member.value for member in token]
    if all(isinstance(value, str) for value in raw_values):
        kind = STRING
    elif all(isinstance(value, int) and not isinstance(value, bool) for value in raw_values):
        kind = INT
    else:
        raise UnsupportedTypeError(f"cannot decode {token.__qualname__}; enum values must be all str or all int")
    container = decoder.single_value_container()
    raw = container.decode(kind)
    try:
        return token(raw)
    except ValueError as exc:
        raise DataCorruptedError(
            f"Cannot initialize {token.__qualname__} from invalid {kind.name} value {raw!r}",
            coding_path=container.coding_path,
        ) from exc


def _decode_field(container: KeyedContainer, annotation: TypeToken, key: str) -> Any:
    """Decode one named field, treating ``X | None`` fields as optional."""

    inner = optional_inner(normalize_token(annotation))
    if inner is not None:
        return container.decode_if_present(inner, key)
    return container.decode(annotation, key)


def _keeps_declared_default(container: KeyedContainer, annotation: TypeToken, key: str) -> bool:
    """Return whether a field with a declared default should keep it.

    The default is kept when the key is absent, or when it holds null and the
    field is not optional. Optional fields decode an explicit null as ``None``.
    """

    if not container.contains(key):
        return True
    return optional_inner(normalize_token(annotation)) is None and container.decode_nil(key)


def _decode_dataclass(token: type, decoder: Decoder) -> Any:
    """Decode a dataclass field by field through a keyed container.

    Fields are read from the key named in ``field(metadata={"key": ...})`` or
    from the attribute name. Fields declaring a default keep it when their key
    is absent, and also when it holds null unless the field is ``X | None``.
    """

    container = decoder.keyed_container()
    hints = resolve_field_hints(token)
    values: dict[str, Any] = {}
    for item in dataclasses.fields(token):
        if not item.init:
            continue
        key = item.metadata.get(CODING_KEY, item.name)
        annotation = hints[item.name]
        has_default = item.default is not dataclasses.MISSING or item.default_factory is not dataclasses.MISSING
        if has_default and _keeps_declared_default(container, annotation, key):
            continue
        values[item.name] = _decode_field(container, annotation, key)
    return token(**values)


def _decode_model(token: type[BaseModel], decoder: Decoder) -> BaseModel:
    """Decode a pydantic model field by field, keyed by alias when one is set."""

    container = decoder.keyed_container()
    values: dict[str, Any] = {}
    for name, info in token.model_fields.items():
        key = info.alias or name
        kind = next((item for item in info.metadata if isinstance(item, ScalarKind)), None)
        annotation = kind if kind is not None else info.annotation
        if not info.is_required() and _keeps_declared_default(container, annotation, key):
            continue
        values[key] = _decode_field(container, annotation, key)
    try:
        return token.model_validate(values)
    except ValidationError as exc:
        raise DataCorruptedError(
            f"Cannot initialize {token.__qualname__}: {exc.error_count()} validation error(s)",
            coding_path=container.coding_path,
        ) from exc


__all__ = [
    "CODING_KEY",
    "Decodable",
    "decode_value",
]
