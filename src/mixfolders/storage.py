from __future__ import annotations

from pathlib import Path
from typing import Protocol

import yaml
from pydantic import ValidationError

from .errors import ConfigInvalid, ConfigNotFound
from .schemas import FolderList

RESOURCE_SUFFIXES = (".yaml", ".yml")


class Storage(Protocol):
    """
    Minimal storage surface the folder tooling needs.

    Paths are logical, '/'-separated and relative to the backend's base.
    create_directory creates a single level and raises FileExistsError when
    something is already there; other OSErrors mean the backend refused.
    """

    def exists(self, path: str) -> bool: ...

    def is_directory(self, path: str) -> bool: ...

    def create_directory(self, path: str) -> None: ...

    def load(self, path: str) -> FolderList: ...

    def save(self, path: str, config: FolderList) -> None: ...

    def list_resources(self, location: str) -> list[str]: ...


class LocalStorage:
    def __init__(self, base: str | Path | None = None):
        self.base = Path(base) if base is not None else Path(".")

    def __repr__(self) -> str:
        return f"LocalStorage(base={str(self.base)!r})"

    def resolve(self, path: str) -> Path:
        return self.base / path

    def exists(self, path: str) -> bool:
        return self.resolve(path).exists()

    def is_directory(self, path: str) -> bool:
        return self.resolve(path).is_dir()

    def create_directory(self, path: str) -> None:
        # one level only, missing parents are the caller's job
        self.resolve(path).mkdir()

    def load(self, path: str) -> FolderList:
        p = self.resolve(path)
        if not p.is_file():
            raise ConfigNotFound(path)
        try:
            with p.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
            return FolderList.model_validate(data or {})
        except (yaml.YAMLError, ValidationError) as exc:
            raise ConfigInvalid(path, str(exc)) from exc

    def save(self, path: str, config: FolderList) -> None:
        p = self.resolve(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        with p.open("w", encoding="utf-8") as f:
            yaml.safe_dump(config.model_dump(), f, sort_keys=False, allow_unicode=True)

    def list_resources(self, location: str) -> list[str]:
        directory = self.resolve(location)
        if not directory.is_dir():
            return []
        found = [
            fp for fp in directory.iterdir() if fp.is_file() and fp.suffix.lower() in RESOURCE_SUFFIXES
        ]
        prefix = location.rstrip("/")
        return [f"{prefix}/{fp.name}" if prefix else fp.name for fp in sorted(found)]
