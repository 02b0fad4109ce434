import logging

from rich.logging import RichHandler

from docoutline.logging_utils import configure_logging, get_logger


def test_configure_logging_installs_single_rich_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        configure_logging("DEBUG")
        configure_logging("WARNING")

        rich_handlers = [handler for handler in root.handlers if isinstance(handler, RichHandler)]
        assert len(rich_handlers) == 1
        assert root.level == logging.WARNING
        assert get_logger("docoutline.test").name == "docoutline.test"
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
