"""
qsshaskpass command line entry point.

Point SSH_ASKPASS / GIT_ASKPASS at the installed `qsshaskpass` script:

    export SSH_ASKPASS=qsshaskpass
    export GIT_ASKPASS=qsshaskpass
    ssh-add < /dev/null

Exit status is 0 when an answer was printed, 1 when the user cancelled.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .askpass.session import AskpassSession, EXIT_CANCELLED
from .config import AskpassSettings, SettingsManager
from .dialogs.base import Interaction
from .dialogs.console import ConsoleInteraction
from .store.keyring_store import KeyringStore

logger = logging.getLogger("qsshaskpass")


def setup_logging(level: str) -> None:
    """Log to stderr; stdout belongs to the askpass answer."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.WARNING),
        stream=sys.stderr,
        format="%(name)s: %(levelname)s: %(message)s",
    )


def has_display() -> bool:
    """
    Can Qt open a window? Without one QApplication aborts the process
    instead of raising, so this has to be checked up front.
    """
    if sys.platform in ("win32", "darwin"):
        return True
    return any(os.environ.get(var) for var in ("QT_QPA_PLATFORM", "DISPLAY", "WAYLAND_DISPLAY"))


def create_interaction(settings: AskpassSettings) -> Interaction:
    """Pick the prompt surface for the configured interface."""
    if settings.interface == "console":
        return ConsoleInteraction()

    if not has_display():
        logger.warning("No display available, prompting on the terminal")
        return ConsoleInteraction()

    # Imported lazily so console mode works without a display
    from .dialogs.qt import QtInteraction
    return QtInteraction(title=settings.window_title)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("prompt", required=False)
@click.option("--console", "force_console", is_flag=True,
              help="Prompt on the terminal instead of opening a dialog")
@click.option("--no-store", is_flag=True, help="Never read or write stored secrets")
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              default=None, help="Settings file (default ~/.qsshaskpass/config.yaml)")
@click.option("--init-config", is_flag=True, help="Write the current settings to the settings file and exit")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging on stderr")
@click.version_option(__version__, prog_name="qsshaskpass")
def main(prompt: Optional[str], force_console: bool, no_store: bool,
         config_path: Optional[Path], init_config: bool, verbose: bool) -> None:
    """Answer an ssh/git askpass PROMPT from the keyring or the user."""
    manager = SettingsManager(config_path)
    settings = manager.settings

    setup_logging("DEBUG" if verbose else settings.log_level)

    if init_config:
        if not manager.save():
            click.echo(f"Could not write {manager.config_path}", err=True)
            sys.exit(1)
        click.echo(f"Settings written to {manager.config_path}", err=True)
        sys.exit(0)

    if force_console:
        settings.interface = "console"
    if no_store:
        settings.use_store = False

    session = AskpassSession(
        prompt=prompt,
        interaction=create_interaction(settings),
        store_opener=KeyringStore.open if settings.use_store else None,
        folder=settings.folder,
        default_prompt=settings.default_prompt,
        logger=logger,
    )

    try:
        outcome = session.run()
    except Exception as e:
        logger.error(f"Askpass failed: {e}")
        sys.exit(EXIT_CANCELLED)

    if outcome.output is not None:
        sys.stdout.write(outcome.output)
        sys.stdout.flush()
    sys.exit(outcome.exit_code)


if __name__ == "__main__":
    main()
