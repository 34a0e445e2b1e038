import logging

from rich.logging import RichHandler

from utils import config


class CenteredFormatter(logging.Formatter):
    """Pads logger names to the widest one seen so far so messages line up."""

    widest_name = 12

    def format(self, record):
        CenteredFormatter.widest_name = max(
            CenteredFormatter.widest_name, len(record.name)
        )
        record.name = record.name.center(CenteredFormatter.widest_name)
        return super().format(record)


def get_logger(name=None) -> logging.Logger:
    """
    Return a logger writing through a single RichHandler.

    Level is DEBUG when STOREFRONT_DEBUG is set, INFO otherwise.
    """
    logger = logging.getLogger(name or "storefront")
    level = logging.DEBUG if config.DEBUG else logging.INFO
    logger.setLevel(level)

    if not logger.handlers:
        handler = RichHandler(
            show_time=True,
            show_level=True,
            show_path=False,
            rich_tracebacks=True,
            log_time_format="[%X]",
        )
        handler.setFormatter(CenteredFormatter("[%(name)s]  %(message)s"))
        handler.setLevel(level)
        logger.addHandler(handler)
        logger.propagate = False

    return logger
