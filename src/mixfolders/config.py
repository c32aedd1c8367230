from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import ConfigInvalid, ConfigNotFound, PresetNotFound
from .paths import SETTINGS_FILE, path_from_root
from .schemas import FolderList, ToolSettings
from .storage import Storage

logger = logging.getLogger(__name__)


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Missing config file: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return data


def load_tool_settings(root: str | Path | None = None) -> ToolSettings:
    """Read mixfolders.yaml from the project root; defaults when the file is absent."""
    path = path_from_root(SETTINGS_FILE, root)
    try:
        data = _load_yaml(path)
    except FileNotFoundError:
        return ToolSettings()
    except yaml.YAMLError as exc:
        raise ConfigInvalid(str(path), str(exc)) from exc
    try:
        return ToolSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigInvalid(str(path), str(exc)) from exc


def load_folder_list(storage: Storage, location: str) -> FolderList:
    """Raises ConfigNotFound when nothing is stored at location."""
    if not storage.exists(location):
        raise ConfigNotFound(location)
    return storage.load(location)


def load_or_default(storage: Storage, location: str, persist: bool = False) -> FolderList:
    try:
        return load_folder_list(storage, location)
    except ConfigNotFound:
        logger.info("No folder list at %s, using defaults", location)
        config = FolderList.create_default()
        if persist:
            save_folder_list(storage, location, config)
            logger.info("Default folder list saved to %s", location)
        return config


def save_folder_list(storage: Storage, location: str, config: FolderList) -> None:
    storage.save(location, config)


def list_presets(storage: Storage, presets_dir: str) -> dict[str, str]:
    """Preset name (file stem) -> storage path."""
    presets: dict[str, str] = {}
    for path in storage.list_resources(presets_dir):
        name = path.rsplit("/", 1)[-1].rsplit(".", 1)[0]
        presets.setdefault(name, path)
    return presets


def resolve_preset(storage: Storage, presets_dir: str, name: str) -> str:
    # accept either a preset name or a path to the resource itself
    if storage.exists(name) and not storage.is_directory(name):
        return name
    presets = list_presets(storage, presets_dir)
    if name in presets:
        return presets[name]
    raise PresetNotFound(name, presets_dir)


def ensure_default_preset_exists(storage: Storage, settings: ToolSettings | None = None) -> bool:
    """First-run step: write the default preset if the package preset is missing."""
    settings = settings or ToolSettings()
    location = settings.package_preset_path
    if storage.exists(location):
        return False
    save_folder_list(storage, location, FolderList.create_default())
    logger.info("Default folder preset created at %s", location)
    return True
