# marketplace/log.py
import logging

from rich.logging import RichHandler

_configured = False

def configure_logging(level: str = "INFO") -> None:
    """Install a single rich console handler on the root logger."""
    global _configured
    root = logging.getLogger()
    root.setLevel(level.upper())
    if _configured:
        return
    handler = RichHandler(rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
    _configured = True

def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
