import logging
import os

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Route log records to stderr through rich.

    LOG_LEVEL from the environment wins over the default; ``verbose`` forces INFO
    unless the environment asks for something chattier.
    """
    default_level = "INFO" if verbose else "WARNING"
    env_level = os.getenv("LOG_LEVEL", default_level).upper()
    log_level = getattr(logging, env_level, logging.WARNING)
    if verbose:
        log_level = min(log_level, logging.INFO)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=verbose,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger("agent_sync")
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(log_level)
    root.propagate = False
