import logging
import sys
from tqdm import tqdm

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s:%(lineno)d  %(message)s"

# requests and Pillow log every connection and image plugin at DEBUG
DEFAULT_SILENCED = {"urllib3": "WARNING", "PIL": "WARNING"}


class LogWithTqdm(logging.Handler):
    """Writes records through `tqdm.write()` so they land above the progress bar."""

    def emit(self, record):
        try:
            tqdm.write(self.format(record), file=sys.stderr)
        except Exception:
            self.handleError(record)


def _to_level(level, fallback: int) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), fallback)
    return fallback if level is None else level


def configure_logger(general_level='WARNING', module_specific_levels=None, silenced_loggers=None):
    """
    Replaces every root handler with a single LogWithTqdm handler.

    `module_specific_levels` raises or lowers individual loggers, e.g.
    {"frontcheck.engine": "DEBUG"}; `silenced_loggers` extends DEFAULT_SILENCED.
    """
    handler = LogWithTqdm()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_to_level(general_level, logging.WARNING))

    levels = dict(module_specific_levels or {})
    for name, level in {**DEFAULT_SILENCED, **(silenced_loggers or {})}.items():
        levels.setdefault(name, level)
    for name, level in levels.items():
        logging.getLogger(name).setLevel(_to_level(level, logging.WARNING))
