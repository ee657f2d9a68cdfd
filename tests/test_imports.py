"""Test that every module imports and is covered by the import smoke script."""

import importlib
import importlib.util
import pkgutil
from pathlib import Path

import pytest

import scrutinizer

SCRIPT = Path(__file__).parent.parent / "scripts" / "check_imports.py"


def _package_modules() -> list[str]:
    names = [scrutinizer.__name__]
    for module in pkgutil.walk_packages(scrutinizer.__path__, prefix="scrutinizer."):
        if not module.ispkg:
            names.append(module.name)
    return names


def _load_script():
    spec = importlib.util.spec_from_file_location("check_imports", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.mark.parametrize("module_name", _package_modules())
def test_module_imports(module_name):
    """Each module imports on its own."""
    importlib.import_module(module_name)


def test_smoke_script_lists_every_module():
    """scripts/check_imports.py checks every module of the package."""
    listed = set(_load_script().MODULES_TO_TEST)

    assert set(_package_modules()) - listed == set()
