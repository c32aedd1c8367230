from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .errors import DirectoryCreationFailure
from .schemas import FolderList
from .storage import LocalStorage, Storage

logger = logging.getLogger(__name__)

RELATIVE_SEGMENTS = (".", "..")


@dataclass
class SegmentResult:
    entry: str
    relative_path: str  # relative to the materialization root
    path: str  # storage path, root included
    created: bool


@dataclass
class MaterializationReport:
    root: str
    results: list[SegmentResult] = field(default_factory=list)
    failures: list[DirectoryCreationFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def created(self) -> list[str]:
        return _unique(r.relative_path for r in self.results if r.created)

    @property
    def already_present(self) -> list[str]:
        created = set(self.created)
        return _unique(r.relative_path for r in self.results if not r.created and r.relative_path not in created)

    def for_entry(self, entry: str) -> list[SegmentResult]:
        return [r for r in self.results if r.entry == entry]

    def raise_for_failures(self) -> None:
        if self.failures:
            raise self.failures[0]


def _unique(items) -> list[str]:
    seen: dict[str, None] = {}
    for item in items:
        seen.setdefault(item, None)
    return list(seen)


def _join(parent: str, child: str) -> str:
    if not parent:
        return child
    return f"{parent.rstrip('/')}/{child}"


def split_segments(entry: str) -> list[str]:
    """'/Audio//BGM/' -> ['Audio', 'BGM']; empty segments are skipped."""
    return [part for part in entry.split("/") if part]


def _ensure_directory(storage: Storage, path: str) -> bool:
    """Create one directory level. Returns True if created, False if it was already there."""
    if storage.is_directory(path):
        return False
    try:
        storage.create_directory(path)
    except FileExistsError:
        # lost a race with another creator; fine as long as it is a directory
        if storage.is_directory(path):
            return False
        raise
    return True


def _ensure_root(storage: Storage, root: str) -> None:
    # root may be nested or absolute, so walk it like an entry
    if not root or storage.is_directory(root):
        return
    current = "/" if root.startswith("/") else ""
    for segment in split_segments(root):
        current = _join(current, segment)
        try:
            created = _ensure_directory(storage, current)
        except OSError as exc:
            raise DirectoryCreationFailure(entry="", segment=segment, path=current, reason=str(exc)) from exc
        if created:
            logger.info("Created root folder: %s", current)


def _invalid_segment(entry: str, root: str) -> DirectoryCreationFailure | None:
    current = root
    for segment in split_segments(entry):
        current = _join(current, segment)
        if segment in RELATIVE_SEGMENTS:
            return DirectoryCreationFailure(
                entry=entry, segment=segment, path=current, reason="relative segments are not allowed"
            )
    return None


def materialize(config: FolderList, root: str = "Assets", storage: Storage | None = None) -> MaterializationReport:
    """
    Make sure every folder in config exists under root, creating only what is missing.

    Each entry is walked segment by segment (root/A, root/A/B, ...). Existing
    directories are left untouched and reported as already present. Nothing is
    ever removed or renamed, so running it again with the same list is a no-op.

    When the backend refuses to create a segment, the rest of that entry is
    skipped and the failure is logged and recorded on the report; the other
    entries are still processed. Entries containing "." or ".." segments are
    rejected the same way before anything is created for them, so nothing
    lands outside root.
    """
    storage = storage if storage is not None else LocalStorage()
    report = MaterializationReport(root=root)
    _ensure_root(storage, root)

    for entry in config.folders:
        invalid = _invalid_segment(entry, root)
        if invalid is not None:
            logger.error("%s", invalid)
            report.failures.append(invalid)
            continue

        relative = ""
        current = root
        for segment in split_segments(entry):
            relative = _join(relative, segment)
            current = _join(current, segment)
            try:
                created = _ensure_directory(storage, current)
            except OSError as exc:
                failure = DirectoryCreationFailure(entry=entry, segment=segment, path=current, reason=str(exc))
                logger.error("%s", failure)
                report.failures.append(failure)
                break

            report.results.append(SegmentResult(entry=entry, relative_path=relative, path=current, created=created))
            if created:
                logger.info("Created folder: %s", current)
            else:
                logger.info("Folder already exists: %s", current)

    logger.info(
        "Materialized %s entries under %s: %s created, %s already present, %s failed",
        len(config.folders),
        root or ".",
        len(report.created),
        len(report.already_present),
        len(report.failures),
    )
    return report
