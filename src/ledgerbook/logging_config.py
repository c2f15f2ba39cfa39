import logging
from pathlib import Path
from typing import Optional


def configure_logging(level: str = "INFO", file_path: Optional[str] = None) -> None:
    """
    Console logging at `level`; the optional log file records at least INFO.

    The file doubles as the ledger's change history (entries added, edited, deleted, imported), so
    `LOG_LEVEL=WARNING` quiets the terminal without dropping those lines from the file.
    """
    console_level = getattr(logging, (level or "INFO").upper(), logging.INFO)

    console = logging.StreamHandler()
    console.setLevel(console_level)
    handlers: list[logging.Handler] = [console]
    root_level = console_level

    if file_path:
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setLevel(min(console_level, logging.INFO))
        handlers.append(file_handler)
        root_level = min(console_level, logging.INFO)

    logging.basicConfig(
        level=root_level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
        handlers=handlers,
        force=True,  # the CLI reconfigures once the config file is loaded
    )
