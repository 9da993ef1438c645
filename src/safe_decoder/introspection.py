# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers for normalising type annotations into registry type tokens."""

from __future__ import annotations

import types
from collections.abc import Iterable, Mapping
from enum import Enum
from functools import lru_cache
from typing import Annotated, Any, Final, Literal, Union, cast, get_args, get_origin, get_type_hints

from .errors import ConfigurationError
from .kinds import BUILTIN_KINDS, ScalarKind
from .types import TypeToken

NONE_TYPE: Final[type[None]] = type(None)
_BUILTIN_GENERICS: Final[frozenset[type]] = frozenset({list, dict, tuple, set, frozenset})


def normalize_token(annotation: TypeToken) -> TypeToken:
    """Return the canonical registry token for ``annotation``.

    Builtin scalars and ``Annotated`` scalars collapse onto their
    :class:`ScalarKind`; ``typing`` container aliases such as ``List[int]``
    collapse onto their builtin generic equivalents so both spellings share
    one registry entry.

    Args:
        annotation: Type annotation, scalar kind, or class.

    Returns:
        TypeToken: Normalised token suitable for registry lookups.
    """

    if isinstance(annotation, ScalarKind):
        return annotation
    origin = get_origin(annotation)
    if origin is Annotated:
        base, *metadata = get_args(annotation)
        for item in metadata:
            if isinstance(item, ScalarKind):
                return item
        return normalize_token(base)
    if isinstance(annotation, type) and annotation in BUILTIN_KINDS:
        return BUILTIN_KINDS[annotation]
    if origin in _BUILTIN_GENERICS and not isinstance(annotation, types.GenericAlias):
        return types.GenericAlias(origin, get_args(annotation))
    return annotation


def is_union(annotation: TypeToken) -> bool:
    """Return ``True`` when ``annotation`` is a ``Union`` or ``X | Y`` expression."""

    return get_origin(annotation) in (Union, types.UnionType)


def optional_inner(annotation: TypeToken) -> TypeToken | None:
    """Return the wrapped type when ``annotation`` is ``X | None``.

    Args:
        annotation: Annotation to inspect.

    Returns:
        TypeToken | None: The non-``None`` member for optional annotations,
        otherwise ``None``.
    """

    if not is_union(annotation):
        return None
    members = get_args(annotation)
    if NONE_TYPE not in members:
        return None
    remaining = tuple(member for member in members if member is not NONE_TYPE)
    if len(remaining) == 1:
        return remaining[0]
    return Union[remaining]


def conforms(value: object, token: TypeToken) -> bool:
    """Return whether ``value`` is a valid instance of ``token``.

    Args:
        value: Candidate value, typically a default being registered.
        token: Normalised or raw type annotation.

    Returns:
        bool: ``True`` when ``value`` satisfies ``token``.

    Raises:
        ConfigurationError: If ``token`` cannot be checked at runtime.
    """

    token = normalize_token(token)
    if isinstance(token, ScalarKind):
        return token.accepts(value)
    if token is Any:
        return True
    if token is None or token is NONE_TYPE:
        return value is None
    if is_union(token):
        return any(conforms(value, member) for member in get_args(token))
    origin = get_origin(token)
    if origin is Literal:
        return value in get_args(token)
    if origin is not None:
        return _conforms_generic(value, origin, get_args(token))
    if isinstance(token, type):
        return isinstance(value, token)
    raise ConfigurationError(f"cannot check values against {token!r}")


def _conforms_generic(value: object, origin: Any, args: tuple[Any, ...]) -> bool:
    if not isinstance(value, origin):
        return False
    if not args:
        return True
    if origin is tuple:
        assert isinstance(value, tuple)
        if len(args) == 2 and args[1] is Ellipsis:
            return all(conforms(item, args[0]) for item in value)
        return len(value) == len(args) and all(conforms(item, arg) for item, arg in zip(value, args, strict=True))
    if isinstance(value, Mapping):
        key_type, value_type = args
        return all(conforms(key, key_type) and conforms(item, value_type) for key, item in value.items())
    return all(conforms(item, args[0]) for item in cast(Iterable[object], value))


def is_enum_type(token: TypeToken) -> bool:
    """Return ``True`` when ``token`` is an :class:`enum.Enum` subclass."""

    return isinstance(token, type) and issubclass(token, Enum)


@lru_cache(maxsize=256)
def resolve_field_hints(cls: type) -> dict[str, Any]:
    """Return evaluated field annotations for ``cls`` including ``Annotated`` metadata.

    Args:
        cls: Dataclass or model whose annotations should be resolved.

    Returns:
        dict[str, Any]: Mapping of attribute name to evaluated annotation.
    """

    return get_type_hints(cls, include_extras=True)


__all__ = [
    "NONE_TYPE",
    "conforms",
    "is_enum_type",
    "is_union",
    "normalize_token",
    "optional_inner",
    "resolve_field_hints",
]
