"""First-run setup: seed the package default preset in the current project."""
from __future__ import annotations

import sys

from mixfolders.config import ensure_default_preset_exists, load_tool_settings
from mixfolders.logging_utils import setup_logger
from mixfolders.paths import project_root
from mixfolders.storage import LocalStorage


def main(argv: list[str] | None = None) -> None:
    args = argv if argv is not None else sys.argv[1:]
    root = project_root(args[0] if args else None)
    settings = load_tool_settings(root)
    setup_logger("mixfolders")
    if ensure_default_preset_exists(LocalStorage(root), settings):
        print("Default preset created.")
    else:
        print("Default preset already exists.")

if __name__ == "__main__":
    main()
