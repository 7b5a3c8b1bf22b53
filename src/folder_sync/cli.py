"""Command-line interface for the folder sync application."""

import sys
from pathlib import Path
from typing import List

import click
from rich import print as rprint
from rich.console import Console
from rich.table import Table

from . import __version__
from .config.settings import SyncPair, SyncSettings, load_pairs
from .sync.sync_manager import (
    STATUS_COMPLETED,
    STATUS_NOTHING_TO_DO,
    STATUS_SKIPPED,
    PairResult,
    SyncManager,
)
from .utils.file_utils import FileHelper
from .utils.logging import setup_logging

console = Console()

DEFAULT_CONFIG = Path('folder_sync.yaml')


def _load_settings(config: Path) -> SyncSettings:
    settings = SyncSettings.load(config)
    setup_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        log_to_console=settings.log_to_console,
    )
    return settings


@click.group()
@click.version_option(version=__version__)
def cli():
    """Folder Sync Tool

    Packages files changed since the last run into size-capped zip volumes
    and delivers them to each configured target folder.
    """
    pass


@cli.command()
@click.argument('folder_list', required=False,
                type=click.Path(path_type=Path))
@click.option('--config', '-c',
              type=click.Path(path_type=Path),
              default=DEFAULT_CONFIG,
              help='Path to settings file (defaults are used if it does not exist)')
@click.option('--preview', '-p',
              is_flag=True,
              help='Show what would be synced without writing anything')
@click.option('--reset',
              is_flag=True,
              help='Clear the last sync time and exit')
@click.option('--lastsynctime',
              is_flag=True,
              help='Show the last sync time and exit')
def sync(folder_list: Path, config: Path, preview: bool, reset: bool, lastsynctime: bool):
    """Sync every pair listed in FOLDER_LIST.

    Each line of FOLDER_LIST reads source::::target[::::pattern1,pattern2].
    """
    try:
        settings = _load_settings(config)
        manager = SyncManager(settings, preview=preview)

        if reset:
            manager.reset_checkpoint()
            console.print("Last sync time has been reset.", style="green")
            return

        if lastsynctime:
            _display_last_sync_time(manager)
            return

        if folder_list is None:
            console.print("Usage: folder-sync sync FOLDER_LIST [--preview] [--reset] [--lastsynctime]")
            return

        if not folder_list.exists():
            console.print(f"File '{folder_list}' does not exist.", style="yellow")
            return

        pairs = load_pairs(folder_list, settings.load_default_patterns())
        if not pairs:
            console.print("Nothing to do.", style="yellow")
            return

        if preview:
            console.print("🔍 PREVIEW MODE - No archives will be written", style="yellow bold")

        results = manager.run_all(pairs)
        _display_sync_results(results, manager)

    except Exception as e:
        console.print(f"❌ Error: {e}", style="red bold")
        sys.exit(1)


def _display_last_sync_time(manager: SyncManager):
    if not manager.checkpoint_store.exists():
        console.print("Last sync time: never")
        return

    last_sync = manager.last_sync_time()
    if last_sync is None:
        console.print("Last sync time: never (stored value is unreadable)")
    else:
        console.print(f"Last sync time: {last_sync.strftime('%Y-%m-%d %H:%M:%S')}")


def _display_sync_results(results: List[PairResult], manager: SyncManager):
    """Display sync results in a table."""
    table = Table(title="Preview Results" if manager.preview else "Sync Results")
    table.add_column("Source", style="cyan")
    table.add_column("Target")
    table.add_column("Status", style="magenta")
    table.add_column("Files", justify="right", style="green")
    table.add_column("Excluded", justify="right", style="yellow")
    table.add_column("Volumes", justify="right")
    table.add_column("Data Added", justify="right")
    table.add_column("Errors", justify="right", style="red")

    status_styles = {
        STATUS_COMPLETED: "green",
        STATUS_NOTHING_TO_DO: "dim",
        STATUS_SKIPPED: "yellow",
    }

    for result in results:
        style = status_styles.get(result.status, "red")
        table.add_row(
            str(result.pair.source_path),
            str(result.pair.target_path),
            f"[{style}]{result.status}[/{style}]",
            str(result.stats.files_processed),
            f"{result.stats.files_excluded} / {result.stats.dirs_excluded}",
            str(len(result.delivered)),
            FileHelper.format_file_size(result.stats.bytes_added),
            str(len(result.stats.errors)),
        )

    console.print(table)

    summary = manager.get_sync_summary(results)
    processed_label = "Files that would be processed" if manager.preview else "Files processed"
    rprint("\n📊 [bold]Summary:[/bold]")
    rprint(f"   • Pairs: {summary.total_pairs} "
           f"([green]{summary.synced_pairs} synced[/green], "
           f"{summary.unchanged_pairs} unchanged, "
           f"[yellow]{summary.skipped_pairs} skipped[/yellow], "
           f"[red]{summary.failed_pairs} failed[/red])")
    rprint(f"   • {processed_label}: [green]{summary.files_processed}[/green]")
    rprint(f"   • Files excluded: {summary.files_excluded}")
    rprint(f"   • Directories excluded: {summary.dirs_excluded}")
    if not manager.preview:
        rprint(f"   • Volumes delivered: {summary.volumes_delivered}")

    if summary.files_processed == 0:
        rprint("\nNothing to do.")

    if summary.total_errors > 0:
        rprint(f"\n⚠️ [yellow]{summary.total_errors} errors occurred:[/yellow]")
        for result in results:
            for error in result.stats.errors:
                rprint(f"   • [red]{error}[/red]")


@cli.command()
@click.argument('folder_list', type=click.Path(exists=True, path_type=Path))
@click.option('--config', '-c',
              type=click.Path(path_type=Path),
              default=DEFAULT_CONFIG,
              help='Path to settings file')
def status(folder_list: Path, config: Path):
    """Show configured pairs and the last sync time."""
    try:
        settings = SyncSettings.load(config)
        pairs = load_pairs(folder_list, settings.load_default_patterns())
        manager = SyncManager(settings)

        _display_last_sync_time(manager)
        console.print("\n📋 [bold]Sync Pairs:[/bold]")
        _display_pairs(pairs)

    except Exception as e:
        console.print(f"❌ Error: {e}", style="red bold")
        sys.exit(1)


def _display_pairs(pairs: List[SyncPair]):
    table = Table()
    table.add_column("Source", style="cyan")
    table.add_column("Target", style="magenta")
    table.add_column("File Patterns", justify="right")
    table.add_column("Dir Patterns", justify="right")
    table.add_column("Source Exists")

    for pair in pairs:
        exists = "✅" if pair.source_path.is_dir() else "❌"
        table.add_row(
            str(pair.source_path),
            str(pair.target_path),
            str(len(pair.file_exclude_patterns)),
            str(len(pair.dir_exclude_patterns)),
            exists,
        )

    console.print(table)


@cli.command()
@click.option('--config', '-c',
              type=click.Path(path_type=Path),
              default=DEFAULT_CONFIG,
              help='Path to save settings file')
def init(config: Path):
    """Initialize a new settings file."""
    if config.exists():
        if not click.confirm(f"Settings file {config} already exists. Overwrite?"):
            return

    SyncSettings().to_yaml(config)

    console.print(f"✅ Settings saved to {config}", style="green")
    console.print("\n📝 Next steps:")
    console.print("1. Edit the settings file to match your setup")
    console.print("2. Create a folder list with lines like source::::target::::pattern1,pattern2")
    console.print("3. Run 'folder-sync sync <folder list> --preview' to check the selection")
    console.print("4. Run 'folder-sync sync <folder list>' to start syncing")


if __name__ == '__main__':
    cli()
