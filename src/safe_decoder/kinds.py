# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Primitive scalar kinds understood by every decoder backend.

Python exposes a single ``int`` and a single ``float`` type, whereas encoded
payloads frequently target fixed-width primitives. Each :class:`ScalarKind`
names one such primitive, knows the Python type it materialises as, the range
it accepts and the zero value registered for it in the baseline configuration.
Builtin annotations map onto kinds through :data:`BUILTIN_KINDS`; a width is
selected with ``Annotated[int, INT8]``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Final

from .errors import DataCorruptedError, TypeMismatchError, ValueNotFoundError
from .types import CodingPath

FLOAT32_MAX: Final[float] = 3.4028234663852886e38


@dataclass(frozen=True, slots=True)
class ScalarKind:
    """Describe a primitive scalar kind and how raw values are coerced into it."""

    name: str
    python_type: type
    zero: bool | int | float | str
    minimum: int | None = None
    maximum: int | float | None = None

    def __repr__(self) -> str:
        return self.name

    @property
    def is_integer(self) -> bool:
        """Return ``True`` when the kind materialises as ``int``."""

        return self.python_type is int

    @property
    def is_floating(self) -> bool:
        """Return ``True`` when the kind materialises as ``float``."""

        return self.python_type is float

    def accepts(self, value: object) -> bool:
        """Return whether ``value`` is a valid instance of this kind.

        Args:
            value: Python value to check, typically a registered default.

        Returns:
            bool: ``True`` when ``value`` has the right type and fits the range.
        """

        if self.python_type is bool:
            return isinstance(value, bool)
        if isinstance(value, bool):
            return False
        if self.is_integer:
            return isinstance(value, int) and self._in_range(value)
        if self.is_floating:
            if not isinstance(value, (int, float)):
                return False
            try:
                return self._in_range(float(value))
            except OverflowError:
                return False
        return isinstance(value, self.python_type)

    def coerce(self, raw: object, *, coding_path: CodingPath) -> bool | int | float | str:
        """Return ``raw`` converted into this kind or raise a decoding error.

        Args:
            raw: Value extracted from the parsed payload.
            coding_path: Path of the value, recorded on raised errors.

        Returns:
            bool | int | float | str: Value materialised as :attr:`python_type`.

        Raises:
            ValueNotFoundError: If ``raw`` is ``None``.
            TypeMismatchError: If ``raw`` has the wrong JSON type.
            DataCorruptedError: If ``raw`` is numeric but does not fit the kind.
        """

        if raw is None:
            raise ValueNotFoundError(self, f"Expected {self.name} value but found null instead.", coding_path=coding_path)
        if self.python_type is bool:
            if isinstance(raw, bool):
                return raw
            raise self._mismatch(raw, coding_path)
        if self.python_type is str:
            if isinstance(raw, str):
                return raw
            raise self._mismatch(raw, coding_path)
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise self._mismatch(raw, coding_path)
        if self.is_integer:
            return self._coerce_integer(raw, coding_path)
        try:
            value = float(raw)
        except OverflowError:
            raise self._does_not_fit(raw, coding_path) from None
        if not self._in_range(value):
            raise self._does_not_fit(raw, coding_path)
        return value

    def _coerce_integer(self, raw: int | float, coding_path: CodingPath) -> int:
        if isinstance(raw, float):
            if not math.isfinite(raw) or not raw.is_integer():
                raise self._does_not_fit(raw, coding_path)
            raw = int(raw)
        if not self._in_range(raw):
            raise self._does_not_fit(raw, coding_path)
        return raw

    def _in_range(self, value: int | float) -> bool:
        if self.is_floating:
            return self.maximum is None or not math.isfinite(value) or abs(value) <= self.maximum
        if self.minimum is not None and value < self.minimum:
            return False
        return self.maximum is None or value <= self.maximum

    def _does_not_fit(self, raw: int | float, coding_path: CodingPath) -> DataCorruptedError:
        return DataCorruptedError(f"Parsed JSON number <{raw}> does not fit in {self.name}.", coding_path=coding_path)

    def _mismatch(self, raw: object, coding_path: CodingPath) -> TypeMismatchError:
        return TypeMismatchError(
            self,
            f"Expected to decode {self.name} but found {json_type_name(raw)} instead.",
            coding_path=coding_path,
        )


def json_type_name(raw: object) -> str:
    """Return the JSON type name of a parsed value for error messages."""

    if raw is None:
        return "null"
    if isinstance(raw, bool):
        return "a boolean"
    if isinstance(raw, (int, float)):
        return "a number"
    if isinstance(raw, str):
        return "a string"
    if isinstance(raw, dict):
        return "a dictionary"
    if isinstance(raw, list):
        return "an array"
    return type(raw).__name__


BOOL: Final = ScalarKind("Bool", bool, False)
INT: Final = ScalarKind("Int", int, 0, -(2**63), 2**63 - 1)
INT8: Final = ScalarKind("Int8", int, 0, -(2**7), 2**7 - 1)
INT16: Final = ScalarKind("Int16", int, 0, -(2**15), 2**15 - 1)
INT32: Final = ScalarKind("Int32", int, 0, -(2**31), 2**31 - 1)
INT64: Final = ScalarKind("Int64", int, 0, -(2**63), 2**63 - 1)
UINT: Final = ScalarKind("UInt", int, 0, 0, 2**64 - 1)
UINT8: Final = ScalarKind("UInt8", int, 0, 0, 2**8 - 1)
UINT16: Final = ScalarKind("UInt16", int, 0, 0, 2**16 - 1)
UINT32: Final = ScalarKind("UInt32", int, 0, 0, 2**32 - 1)
UINT64: Final = ScalarKind("UInt64", int, 0, 0, 2**64 - 1)
FLOAT: Final = ScalarKind("Float", float, 0.0, None, FLOAT32_MAX)
DOUBLE: Final = ScalarKind("Double", float, 0.0)
STRING: Final = ScalarKind("String", str, "")

SCALAR_KINDS: Final[tuple[ScalarKind, ...]] = (
    BOOL,
    INT,
    INT8,
    INT16,
    INT32,
    INT64,
    UINT,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    FLOAT,
    DOUBLE,
    STRING,
)

BUILTIN_KINDS: Final[dict[type, ScalarKind]] = {
    bool: BOOL,
    int: INT,
    float: DOUBLE,
    str: STRING,
}


__all__ = [
    "BOOL",
    "BUILTIN_KINDS",
    "DOUBLE",
    "FLOAT",
    "INT",
    "INT8",
    "INT16",
    "INT32",
    "INT64",
    "SCALAR_KINDS",
    "STRING",
    "UINT",
    "UINT8",
    "UINT16",
    "UINT32",
    "UINT64",
    "ScalarKind",
    "json_type_name",
]
