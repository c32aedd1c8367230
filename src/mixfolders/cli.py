from __future__ import annotations

import json

from rich import print as rprint
from rich.markup import escape

from .config import ensure_default_preset_exists, load_tool_settings
from .errors import DirectoryCreationFailure, MixFoldersError, PresetNotFound
from .logging_utils import setup_logger
from .paths import project_root
from .schemas import ToolSettings
from .settings import FolderSettingsController
from .storage import LocalStorage


def init_cmd(storage: LocalStorage, settings: ToolSettings, args: list[str]) -> None:
    if ensure_default_preset_exists(storage, settings):
        rprint(f"[green]Default preset created:[/green] {settings.package_preset_path}")
    else:
        rprint(f"Default preset already present: {settings.package_preset_path}")
    with FolderSettingsController(storage, settings) as controller:
        rprint(f"[green]Folder list ready:[/green] {settings.settings_path} ({len(controller.active.folders)} folders)")


def show_config_cmd(storage: LocalStorage, settings: ToolSettings, args: list[str]) -> None:
    rprint("[bold cyan]Settings[/bold cyan]")
    rprint(json.dumps(settings.model_dump(), indent=2))
    with FolderSettingsController(storage, settings) as controller:
        rprint("[bold magenta]Folders[/bold magenta]")
        for folder in controller.active.folders:
            rprint(f"- {folder}")


def list_presets_cmd(storage: LocalStorage, settings: ToolSettings, args: list[str]) -> None:
    with FolderSettingsController(storage, settings) as controller:
        presets = controller.available_presets()
    if not presets:
        rprint(f"[yellow]No presets found in {settings.presets_dir}[/yellow]")
        return
    for name, path in presets.items():
        rprint(f"- [bold]{name}[/bold]: {path}")


def load_preset_cmd(storage: LocalStorage, settings: ToolSettings, args: list[str]) -> None:
    if not args:
        rprint("[red]Usage:[/red] load-preset NAME")
        raise SystemExit(1)
    with FolderSettingsController(storage, settings) as controller:
        controller.select_preset(args[0])
        try:
            controller.load_selected_preset()
        except PresetNotFound as exc:
            rprint(f"[red]{exc}[/red]")
            raise SystemExit(1) from exc
        rprint(f"[green]Loaded preset '{args[0]}':[/green] {len(controller.active.folders)} folders")


def add_folder_cmd(storage: LocalStorage, settings: ToolSettings, args: list[str]) -> None:
    if not args:
        rprint("[red]Usage:[/red] add-folder PATH")
        raise SystemExit(1)
    with FolderSettingsController(storage, settings) as controller:
        if controller.add_folder(args[0]):
            rprint(f"[green]Added:[/green] {args[0]}")
        else:
            rprint(f"Already listed: {args[0]}")


def remove_folder_cmd(storage: LocalStorage, settings: ToolSettings, args: list[str]) -> None:
    if not args:
        rprint("[red]Usage:[/red] remove-folder PATH")
        raise SystemExit(1)
    with FolderSettingsController(storage, settings) as controller:
        if controller.remove_folder(args[0]):
            rprint(f"[green]Removed:[/green] {args[0]}")
        else:
            rprint(f"[yellow]Not listed:[/yellow] {args[0]}")


def create_folders_cmd(storage: LocalStorage, settings: ToolSettings, args: list[str]) -> None:
    with FolderSettingsController(storage, settings) as controller:
        try:
            report = controller.create_folders()
        except DirectoryCreationFailure as exc:
            rprint(f"[red]Could not prepare {escape(settings.asset_root)}:[/red] {escape(str(exc))}")
            raise SystemExit(1) from exc

    rprint(f"[green]Created {len(report.created)} folders[/green] under {settings.asset_root}")
    for path in report.created:
        rprint(f"  + {path}")
    if report.already_present:
        rprint(f"{len(report.already_present)} already present")
    if not report.ok:
        rprint("[red]Some folders could not be created:[/red]")
        for failure in report.failures:
            rprint(f"  - {escape(str(failure))}")
        raise SystemExit(1)


def _pop_option(args: list[str], name: str) -> str | None:
    if name not in args:
        return None
    i = args.index(name)
    if i + 1 >= len(args):
        rprint(f"[red]Missing value for {name}[/red]")
        raise SystemExit(1)
    value = args[i + 1]
    del args[i : i + 2]
    return value


def main(argv: list[str] | None = None) -> None:
    import sys

    args = list(argv if argv is not None else sys.argv[1:])
    root = _pop_option(args, "--root")
    command = args[0] if args else "help"

    commands = {
        "init": init_cmd,
        "show-config": show_config_cmd,
        "list-presets": list_presets_cmd,
        "load-preset": load_preset_cmd,
        "add-folder": add_folder_cmd,
        "remove-folder": remove_folder_cmd,
        "create-folders": create_folders_cmd,
    }

    if command in ("help", "-h", "--help"):
        rprint(
            "[bold]mixfolders CLI[/bold]\n"
            "Usage: mixfolders [--root DIR] COMMAND [ARG]\n"
            "Commands:\n"
            "  init\n"
            "  show-config\n"
            "  list-presets\n"
            "  load-preset NAME\n"
            "  add-folder PATH\n"
            "  remove-folder PATH\n"
            "  create-folders"
        )
        return

    if command not in commands:
        rprint(f"[red]Unknown command:[/red] {command}")
        raise SystemExit(1)

    base = project_root(root)
    try:
        settings = load_tool_settings(base)
        log_file = base / settings.log_file if settings.log_file else None
        setup_logger("mixfolders", log_file=log_file)
        commands[command](LocalStorage(base), settings, args[1:])
    except MixFoldersError as exc:
        rprint(f"[red]{escape(str(exc))}[/red]")
        raise SystemExit(1) from exc
