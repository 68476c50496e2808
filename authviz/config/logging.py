"""
Logging configuration for the authorization analysis service.

This module provides centralized logging configuration with support for
structured logging, different log levels, and text or JSON output.
"""

import logging
import logging.config
import sys
from typing import Dict, Any, Optional


def get_logging_config(
    log_level: str = "INFO",
    log_format: str = "json",
    log_file: Optional[str] = None,
    enable_access_log: bool = True
) -> Dict[str, Any]:
    """
    Get logging configuration dictionary.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format ('json' or 'text')
        log_file: Optional log file path
        enable_access_log: Whether to enable HTTP access logging

    Returns:
        Logging configuration dictionary
    """
    formatters = {
        "default": {
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S"
        },
        "detailed": {
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S"
        },
        "json": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(name)s %(levelname)s %(module)s %(lineno)d %(message)s"
        }
    }

    formatter_name = "json" if log_format == "json" else "detailed"

    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "level": log_level,
            "formatter": formatter_name,
            "stream": sys.stdout
        }
    }

    if log_file:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": log_level,
            "formatter": formatter_name,
            "filename": log_file,
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5,
            "encoding": "utf8"
        }

    handler_names = list(handlers.keys())
    loggers = {
        "": {  # Root logger
            "level": log_level,
            "handlers": handler_names,
            "propagate": False
        },
        "uvicorn": {
            "level": log_level,
            "handlers": handler_names,
            "propagate": False
        },
        "uvicorn.error": {
            "level": log_level,
            "handlers": handler_names,
            "propagate": False
        },
        "httpx": {
            "level": "WARNING",
            "handlers": handler_names,
            "propagate": False
        },
        "authviz": {  # Application logger
            "level": log_level,
            "handlers": handler_names,
            "propagate": False
        }
    }

    if enable_access_log:
        loggers["uvicorn.access"] = {
            "level": "INFO",
            "handlers": handler_names,
            "propagate": False
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "handlers": handlers,
        "loggers": loggers
    }


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "text",
    log_file: Optional[str] = None,
    enable_access_log: bool = True
) -> None:
    """
    Setup logging configuration.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format ('json' or 'text')
        log_file: Optional log file path
        enable_access_log: Whether to enable HTTP access logging
    """
    config = get_logging_config(
        log_level=log_level,
        log_format=log_format,
        log_file=log_file,
        enable_access_log=enable_access_log
    )

    logging.config.dictConfig(config)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the specified name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


class StructuredLogger:
    """
    Structured logger for consistent log message formatting.

    Provides event-style helpers for remote fetches and cache activity of the
    authorization data services.
    """

    def __init__(self, name: str):
        """Initialize structured logger.

        Args:
            name: Logger name
        """
        self.logger = get_logger(name)

    def log_fetch(
        self,
        resource: str,
        url: str,
        status_code: int,
        response_time: float,
        **kwargs
    ):
        """Log a remote fetch.

        Args:
            resource: Name of the fetched resource (report, catalog, ...)
            url: Requested URL
            status_code: Response status code
            response_time: Response time in milliseconds
            **kwargs: Additional fields to log
        """
        log_data = {
            "event": "remote_fetch",
            "resource": resource,
            "url": url,
            "status_code": status_code,
            "response_time_ms": response_time,
        }
        log_data.update(kwargs)

        if status_code >= 400:
            self.logger.warning("Remote fetch failed", extra=log_data)
        else:
            self.logger.info("Remote fetch", extra=log_data)

    def log_refresh(self, source: str, max_depth: int, duration: float, **kwargs):
        """Log a data service refresh.

        Args:
            source: Data source that was refreshed
            max_depth: Maximum role depth handed to the analyzer
            duration: Refresh duration in milliseconds
            **kwargs: Additional fields to log
        """
        log_data = {
            "event": "data_refresh",
            "source": source,
            "max_depth": max_depth,
            "duration_ms": duration,
        }
        log_data.update(kwargs)
        self.logger.info("Authorization data refreshed", extra=log_data)
