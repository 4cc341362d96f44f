"""
propexpr.toml manifest loading.

A manifest declares the symbols expressions can see and tunes the
evaluator:

    [symbols]
    FOO = 2
    title = "Scene"
    origin = [0, 0]

    [evaluator]
    function_placeholder = "FUNCTION"

The CLI looks for the manifest named by ``PROPEXPR_MANIFEST``, then for
``propexpr.toml`` in the working directory.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from propexpr.core.errors import ManifestError
from propexpr.core.expression_lang.evaluator import (
    FUNCTION_PLACEHOLDER,
    CalleeResolver,
    make_placeholder_resolver,
)
from propexpr.core.ir.values import from_python
from propexpr.core.symbols import PropertyMap

logger = logging.getLogger(__name__)

MANIFEST_NAME = "propexpr.toml"
MANIFEST_ENV_VAR = "PROPEXPR_MANIFEST"


@dataclass
class EvaluatorConfig:
    """Evaluator options."""

    function_placeholder: str = FUNCTION_PLACEHOLDER  # Result of every call expression


@dataclass
class ExpressionManifest:
    path: Path | None = None
    symbols: dict[str, Any] = field(default_factory=dict)
    evaluator: EvaluatorConfig = field(default_factory=EvaluatorConfig)

    def symbol_context(self) -> PropertyMap:
        """A fresh, writable symbol table seeded with the manifest's symbols."""
        return PropertyMap(self.symbols)

    def callee_resolver(self) -> CalleeResolver:
        return make_placeholder_resolver(self.evaluator.function_placeholder)


def load_manifest(path: Path) -> ExpressionManifest:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ManifestError(f"{path}: cannot read manifest: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(f"{path}: invalid TOML: {e}") from e

    symbols_data = data.get("symbols", {})
    evaluator_data = data.get("evaluator", {})

    if not isinstance(symbols_data, dict):
        raise ManifestError(f"{path}: [symbols] must be a table")
    if not isinstance(evaluator_data, dict):
        raise ManifestError(f"{path}: [evaluator] must be a table")

    for name, value in symbols_data.items():
        try:
            from_python(value)
        except TypeError as e:
            raise ManifestError(f"{path}: symbol {name!r}: {e}") from e

    placeholder = evaluator_data.get("function_placeholder", FUNCTION_PLACEHOLDER)
    if not isinstance(placeholder, str):
        raise ManifestError(f"{path}: evaluator.function_placeholder must be a string")

    logger.debug("Loaded %d symbols from %s", len(symbols_data), path)
    return ExpressionManifest(
        path=path,
        symbols=dict(symbols_data),
        evaluator=EvaluatorConfig(function_placeholder=placeholder),
    )


def resolve_manifest_path(explicit: str | None = None) -> Path | None:
    """Locate the manifest to use.

    An explicit path wins, then ``PROPEXPR_MANIFEST``, then
    ``propexpr.toml`` in the working directory. Returns None when no
    manifest applies.
    """
    if explicit:
        return Path(explicit)
    from_env = os.environ.get(MANIFEST_ENV_VAR)
    if from_env:
        return Path(from_env)
    default = Path.cwd() / MANIFEST_NAME
    if default.exists():
        return default
    return None
