import io
import logging

from arcgeom.utils.logging_config import PACKAGE_LOGGER_NAME, get_logger, setup_logging


def test_package_logger_has_null_handler() -> None:
    handlers = logging.getLogger(PACKAGE_LOGGER_NAME).handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)


def test_get_logger_is_under_package() -> None:
    logger = get_logger("arcgeom.geometry.arc_length")
    assert logger.name == "arcgeom.geometry.arc_length"
    assert logger.parent.name in ("arcgeom.geometry", PACKAGE_LOGGER_NAME)


def test_setup_logging_sets_package_level() -> None:
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    previous = package_logger.level
    try:
        setup_logging(level=logging.WARNING, stream=io.StringIO())
        assert package_logger.level == logging.WARNING
    finally:
        package_logger.setLevel(previous)
