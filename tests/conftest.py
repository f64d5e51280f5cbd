# tests/conftest.py
# Ensure the project root (the folder that contains 'cyselenium' and 'tests') is on sys.path
# so that `from cyselenium...` imports work without an editable install.

import sys
import pathlib

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
ROOT_STR = str(ROOT)

if ROOT_STR not in sys.path:
    sys.path.insert(0, ROOT_STR)

from cyselenium.context import TranslationContext  # noqa: E402
from cyselenium.registry import CommandRegistry  # noqa: E402


@pytest.fixture
def ctx_with_commands():
    return TranslationContext(CommandRegistry(["login", "seedDb"]))
