# core/utils/logging.py
import logging

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = "INFO") -> None:
    """Attach a single stream handler to the root logger.

    Safe to call more than once; the API startup hook and the CLI both call it.
    """
    root = logging.getLogger()
    if not any(getattr(h, "_shelfstream", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._shelfstream = True
        root.addHandler(handler)
    root.setLevel(level.upper())
