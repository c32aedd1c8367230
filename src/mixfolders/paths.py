from __future__ import annotations

from pathlib import Path

SETTINGS_FILE = "mixfolders.yaml"
DEFAULT_ASSET_ROOT = "Assets"
DEFAULT_SETTINGS_PATH = "Assets/Resources/mixLib_FolderList.yaml"
DEFAULT_PRESETS_DIR = "Packages/com.mixlib.core/Resources"
DEFAULT_PRESET_NAME = "Preset_FolderList.yaml"


def project_root(root: str | Path | None = None) -> Path:
    # the project being scaffolded, not this package
    if root is None:
        return Path.cwd().resolve()
    return Path(root).expanduser().resolve()


def path_from_root(relative_path: str, root: str | Path | None = None) -> Path:
    return project_root(root) / relative_path
