import logging
import sys

PACKAGE_LOGGER_NAME = "arcgeom"

# Stay silent unless the application configures logging
logging.getLogger(PACKAGE_LOGGER_NAME).addHandler(logging.NullHandler())


def setup_logging(level=logging.INFO, stream=None):
    """
    Configures basic logging for applications built on arcgeom.

    Args:
        level: The logging level (e.g., logging.INFO, logging.DEBUG).
        stream: Output stream, defaults to stdout.
    """
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - [%(levelname)s] - %(message)s',
        stream=stream if stream is not None else sys.stdout
    )
    logging.getLogger(PACKAGE_LOGGER_NAME).setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """
    Retrieves a logger for an arcgeom module.

    Args:
        name (str): The module name, typically __name__.

    Returns:
        A logging.Logger instance.
    """
    return logging.getLogger(name)
