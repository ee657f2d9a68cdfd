#!/usr/bin/env python3
"""
Import smoke test - checks that all modules can be imported without errors.

This catches circular imports and other import-time issues that static
type checkers might miss.
"""

import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

MODULES_TO_TEST = [
    "scrutinizer",
    "scrutinizer.cli",
    "scrutinizer.config",
    "scrutinizer.constants",
    "scrutinizer.core.errors",
    "scrutinizer.core.pipeline",
    "scrutinizer.core.registry",
    "scrutinizer.core.config_manager",
    "scrutinizer.core.command_runner",
    "scrutinizer.model.code_element",
    "scrutinizer.model.project",
    "scrutinizer.analyzers.protocol",
    "scrutinizer.analyzers.loc_analyzer",
    "scrutinizer.analyzers.custom_analyzer",
    "scrutinizer.analyzers.flake8_analyzer",
    "scrutinizer.renderers.base",
    "scrutinizer.renderers.cli_renderer",
    "scrutinizer.renderers.json_renderer",
    "scrutinizer.utils.logger",
]


def main():
    """Test importing all modules."""
    failed = []

    for module_name in MODULES_TO_TEST:
        try:
            __import__(module_name)
            print(f"✓ {module_name}")
        except Exception as e:
            print(f"✗ {module_name}: {e}")
            failed.append((module_name, e))

    if failed:
        print(f"\n❌ {len(failed)} module(s) failed to import:")
        for module_name, error in failed:
            print(f"  - {module_name}: {error}")
        sys.exit(1)
    else:
        print(f"\n✅ All {len(MODULES_TO_TEST)} modules imported successfully!")
        sys.exit(0)


if __name__ == "__main__":
    main()
