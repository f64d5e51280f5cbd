# cyselenium/config.py
"""
Conversion options.

Defaults live as module constants; a JSON config file (validated against
CONFIG_SCHEMA) may override them, and CLI flags override the file.

Example config:

    {
      "package": "e2e",
      "driverClass": "ShopDriver",
      "outputDir": "build/java",
      "headless": false
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

from jsonschema import Draft202012Validator

DEFAULT_PACKAGE = "test"
DEFAULT_DRIVER_CLASS = "OriginalWebDriver"
DEFAULT_OUTPUT_DIR = "output"
REGISTRY_FILENAME = "commands.txt"

_JAVA_IDENT = r"^[A-Za-z_$][A-Za-z0-9_$]*$"

CONFIG_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "package": {"type": "string", "pattern": r"^[A-Za-z_$][A-Za-z0-9_$]*(\.[A-Za-z_$][A-Za-z0-9_$]*)*$"},
        "driverClass": {"type": "string", "pattern": _JAVA_IDENT},
        "outputDir": {"type": "string", "minLength": 1},
        "registry": {"type": "string", "minLength": 1},
        "headless": {"type": "boolean"},
        "inlineDiagnostics": {"type": "boolean"},
        "strict": {"type": "boolean"},
    },
}

# config key -> ConvertOptions field
_FIELDS = {
    "package": "package",
    "driverClass": "driver_class",
    "outputDir": "output_dir",
    "registry": "registry",
    "headless": "headless",
    "inlineDiagnostics": "inline_diagnostics",
    "strict": "strict",
}


class ConfigError(Exception):
    pass


@dataclass
class ConvertOptions:
    package: str = DEFAULT_PACKAGE
    driver_class: str = DEFAULT_DRIVER_CLASS
    output_dir: str = DEFAULT_OUTPUT_DIR
    registry: Optional[str] = None       # defaults to <output_dir>/commands.txt
    headless: bool = True
    inline_diagnostics: bool = True
    strict: bool = False                 # any translation gap fails the run

    @property
    def registry_file(self) -> Path:
        if self.registry:
            return Path(self.registry)
        return Path(self.output_dir) / REGISTRY_FILENAME


def validate_config(data: Any) -> None:
    validator = Draft202012Validator(CONFIG_SCHEMA)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errors:
        first = errors[0]
        where = "/".join(str(p) for p in first.path) or "<root>"
        raise ConfigError(f"invalid config at {where}: {first.message}")


def load_config(path: str, base: Optional[ConvertOptions] = None) -> ConvertOptions:
    """Read a JSON config file and apply it on top of base (or the defaults)."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ConfigError(f"config file not found: {path}")
    except json.JSONDecodeError as e:
        raise ConfigError(f"config file is not valid JSON: {path}: {e}")
    validate_config(data)
    changes = {_FIELDS[key]: value for key, value in data.items()}
    return replace(base if base is not None else ConvertOptions(), **changes)
