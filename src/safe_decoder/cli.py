# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command-line interface for decoding JSON documents with fallbacks."""

from __future__ import annotations

from importlib import import_module
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.pretty import Pretty

from .api import SafeDecoder
from .errors import ConfigurationError, DecodingError, UnsupportedTypeError
from .logging import enable_verbose_logging
from .settings import DecoderSettings, KeyDecodingStrategy

app = typer.Typer(
    name="safe-decoder",
    help="Decode JSON documents into typed values, substituting defaults for broken fields.",
    add_completion=False,
    no_args_is_help=True,
)


@app.callback()
def main() -> None:
    """Decode JSON documents into typed values."""


def load_object(reference: str) -> Any:
    """Return the object named by ``reference``.

    Args:
        reference: Import path in ``package.module:Attribute.Nested`` form.

    Returns:
        Any: Resolved attribute.

    Raises:
        typer.BadParameter: If the module or attribute cannot be resolved.
    """

    module_name, separator, attribute_path = reference.partition(":")
    if not separator or not module_name or not attribute_path:
        raise typer.BadParameter(f"expected 'module:Attribute', got '{reference}'")
    try:
        target: Any = import_module(module_name)
    except ImportError as exc:
        raise typer.BadParameter(f"cannot import module '{module_name}': {exc}") from exc
    for attribute in attribute_path.split("."):
        try:
            target = getattr(target, attribute)
        except AttributeError as exc:
            raise typer.BadParameter(f"'{module_name}' has no attribute '{attribute_path}'") from exc
    return target


@app.command("decode")
def decode_command(
    target: str = typer.Argument(..., help="Target type as 'package.module:Type'."),
    payload: Path = typer.Argument(..., help="JSON document to decode.", exists=True, dir_okay=False),
    provider: str | None = typer.Option(
        None,
        "--provider",
        "-p",
        help="Configuration provider as 'package.module:Provider'.",
    ),
    camel_case: bool = typer.Option(
        False,
        "--camel-case",
        help="Convert camelCase keys in the document to snake_case.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log substituted defaults to stderr."),
) -> None:
    """Decode PAYLOAD as TARGET and pretty-print the result."""

    if verbose:
        enable_verbose_logging()
    target_type = load_object(target)
    provider_object = load_object(provider) if provider is not None else None
    strategy = KeyDecodingStrategy.CONVERT_FROM_CAMEL_CASE if camel_case else KeyDecodingStrategy.USE_DEFAULT_KEYS
    decoder = SafeDecoder(settings=DecoderSettings(key_strategy=strategy))
    data = payload.read_bytes()
    try:
        if provider_object is None:
            result = decoder.decode(target_type, data)
        else:
            result = decoder.decode(target_type, provider_object, data)
    except DecodingError as exc:
        typer.echo(f"❌ decoding failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    except (ConfigurationError, UnsupportedTypeError) as exc:
        raise typer.BadParameter(str(exc)) from exc
    Console().print(Pretty(result))


__all__ = ["app", "load_object"]
