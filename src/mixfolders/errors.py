from __future__ import annotations


class MixFoldersError(Exception):
    """Base class for errors raised by mixfolders."""


class ConfigNotFound(MixFoldersError):
    def __init__(self, location: str):
        super().__init__(f"No folder list found at: {location}")
        self.location = location


class PresetNotFound(MixFoldersError):
    def __init__(self, name: str, presets_dir: str):
        super().__init__(f"Preset '{name}' not found in {presets_dir}")
        self.name = name
        self.presets_dir = presets_dir


class DirectoryCreationFailure(MixFoldersError):
    """
    The storage backend refused to create a directory.

    Carries the entry being processed, the segment that failed and the
    accumulated path at the time of failure.
    """

    def __init__(self, entry: str, segment: str, path: str, reason: str = ""):
        message = f"Could not create folder '{segment}' at {path} (entry: '{entry}')"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.entry = entry
        self.segment = segment
        self.path = path
        self.reason = reason


class ConfigInvalid(MixFoldersError):
    def __init__(self, location: str, reason: str = ""):
        message = f"Invalid config at {location}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.location = location
        self.reason = reason
