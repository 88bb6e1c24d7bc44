from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
PACKAGE_LOGGERS = ("svgcharts", "charts", "chartcommon")


def configure_logging(level: str = "INFO") -> None:
    """Send the chart packages' records to stderr at ``level``; other libraries stay at WARNING."""
    logging.basicConfig(format=LOG_FORMAT)
    for name in PACKAGE_LOGGERS:
        logging.getLogger(name).setLevel(level.upper())
