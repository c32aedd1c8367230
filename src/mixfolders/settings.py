from __future__ import annotations

import logging

from .config import list_presets, load_or_default, resolve_preset, save_folder_list
from .materializer import MaterializationReport, materialize
from .schemas import FolderList, ToolSettings
from .storage import Storage

logger = logging.getLogger(__name__)


class FolderSettingsController:
    """
    Owns the active folder list for one settings session.

    Open it (or enter it as a context manager), edit the list, load presets,
    create folders; closing it saves pending edits and lets go of the list.
    """

    def __init__(self, storage: Storage, settings: ToolSettings | None = None):
        self.storage = storage
        self.settings = settings or ToolSettings()
        self._active: FolderList | None = None
        self.selected_preset: str | None = None
        self.changed = False

    def __enter__(self) -> "FolderSettingsController":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # edits made before an error are dropped, not saved
        self.close(save=exc_type is None)

    @property
    def is_open(self) -> bool:
        return self._active is not None

    @property
    def active(self) -> FolderList:
        if self._active is None:
            raise RuntimeError("Folder settings session is not open")
        return self._active

    def open(self) -> FolderList:
        if self._active is None:
            self._active = load_or_default(self.storage, self.settings.settings_path, persist=True)
            self.changed = False
        return self._active

    def close(self, save: bool = True) -> None:
        if self._active is None:
            return
        if save:
            self.apply_changes()
        self._active = None
        self.selected_preset = None
        self.changed = False

    # presets

    def available_presets(self) -> dict[str, str]:
        return list_presets(self.storage, self.settings.presets_dir)

    def select_preset(self, preset: str | None) -> None:
        self.selected_preset = preset

    def load_selected_preset(self) -> bool:
        """Replace the active list with the selected preset. No selection is a no-op."""
        if not self.selected_preset:
            return False
        location = resolve_preset(self.storage, self.settings.presets_dir, self.selected_preset)
        preset = self.storage.load(location)
        self.active.replace_with(preset)
        self.changed = True
        logger.info("Loaded preset from %s", location)
        return True

    # edits

    def set_folders(self, folders: list[str]) -> None:
        self.active.folders = list(folders)
        self.changed = True

    def add_folder(self, folder: str) -> bool:
        if folder in self.active.folders:
            return False
        self.active.folders.append(folder)
        self.changed = True
        return True

    def remove_folder(self, folder: str) -> bool:
        if folder not in self.active.folders:
            return False
        self.active.folders = [f for f in self.active.folders if f != folder]
        self.changed = True
        return True

    def apply_changes(self) -> bool:
        if not self.changed or self._active is None:
            return False
        save_folder_list(self.storage, self.settings.settings_path, self._active)
        self.changed = False
        logger.info("Folder list saved to %s", self.settings.settings_path)
        return True

    def create_folders(self) -> MaterializationReport:
        return materialize(self.active, self.settings.asset_root, self.storage)
