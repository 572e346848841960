import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: int = logging.INFO) -> None:
    """Send log records through rich on stderr, keeping stdout for command output."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                rich_tracebacks=True,
            )
        ],
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
