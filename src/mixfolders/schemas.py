from __future__ import annotations

from pydantic import BaseModel, Field

from .paths import (
    DEFAULT_ASSET_ROOT,
    DEFAULT_PRESET_NAME,
    DEFAULT_PRESETS_DIR,
    DEFAULT_SETTINGS_PATH,
)

# Conventional project layout seeded on first run
DEFAULT_FOLDERS: tuple[str, ...] = (
    "Audio",
    "Audio/BGM",
    "Audio/SE",
    "Sprites",
    "Prefabs",
    "Scenes",
    "Animations",
    "Materials",
    "Physics Materials",
    "Fonts",
    "Textures",
    "Resources",
    "Editor",
    "Plugins",
)


class FolderList(BaseModel):
    """Ordered list of folder paths, relative to the asset root, using '/' separators."""

    folders: list[str] = Field(default_factory=list)

    @classmethod
    def create_default(cls) -> "FolderList":
        return cls(folders=list(DEFAULT_FOLDERS))

    def replace_with(self, other: "FolderList") -> None:
        # full replace, the previous entries are dropped
        self.folders = list(other.folders)


class ToolSettings(BaseModel):
    asset_root: str = DEFAULT_ASSET_ROOT
    settings_path: str = DEFAULT_SETTINGS_PATH
    presets_dir: str = DEFAULT_PRESETS_DIR
    preset_name: str = DEFAULT_PRESET_NAME
    log_file: str | None = Field(default=None)

    @property
    def package_preset_path(self) -> str:
        return f"{self.presets_dir.rstrip('/')}/{self.preset_name}"
