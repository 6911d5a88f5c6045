"""
Pricefeed - Logging Utility
===========================

Logging setup using Loguru with:
- Console logging
- Optional rotating file and error-file logging
- Optional JSON logging
- Per-module bound loggers
"""

import os
import sys
from pathlib import Path
from typing import Optional

import yaml
from loguru import logger

DEFAULT_SETTINGS_PATH = Path(__file__).parent.parent / "config" / "settings.yaml"


class LoggerSetup:
    """Configure and manage application logging"""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize logger with configuration

        Args:
            config_path: Path to settings.yaml file
        """
        self.config = self._load_config(config_path)
        self._setup_logger()

    def _load_config(self, config_path: Optional[str] = None) -> dict:
        """Load logging configuration from YAML"""
        if config_path is None:
            config_path = os.getenv("PRICEFEED_SETTINGS") or DEFAULT_SETTINGS_PATH

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
                return config.get("logging") or self._default_config()
        except FileNotFoundError:
            return self._default_config()

    def _default_config(self) -> dict:
        """Default logging configuration"""
        return {
            "level": "INFO",
            "format": "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
            "console": {"enabled": True, "colorize": True},
            "file": {"enabled": False},
            "error_file": {"enabled": False},
            "json": {"enabled": False},
        }

    def _setup_logger(self):
        """Configure loguru logger"""
        logger.remove()

        log_level = os.getenv("LOG_LEVEL") or self.config.get("level", "INFO")
        log_format = self.config.get("format") or self._default_config()["format"]

        console_config = self.config.get("console", {})
        if console_config.get("enabled", True):
            logger.add(
                sys.stderr,
                format=log_format,
                level=log_level,
                colorize=console_config.get("colorize", True),
                backtrace=True,
                diagnose=False,
            )

        file_config = self.config.get("file", {})
        if file_config.get("enabled", False):
            log_path = Path(file_config.get("path", "./logs/pricefeed.log"))
            log_path.parent.mkdir(parents=True, exist_ok=True)

            logger.add(
                log_path,
                format=log_format,
                level=log_level,
                rotation=file_config.get("rotation", "50 MB"),
                retention=file_config.get("retention", "14 days"),
                compression=file_config.get("compression", "zip"),
                backtrace=True,
                diagnose=False,
            )

        error_config = self.config.get("error_file", {})
        if error_config.get("enabled", False):
            error_path = Path(error_config.get("path", "./logs/errors.log"))
            error_path.parent.mkdir(parents=True, exist_ok=True)

            logger.add(
                error_path,
                format=log_format,
                level=error_config.get("level", "ERROR"),
                rotation=error_config.get("rotation", "10 MB"),
                retention=error_config.get("retention", "30 days"),
                backtrace=True,
                diagnose=False,
            )

        # JSON lines for log aggregation
        json_config = self.config.get("json", {})
        if json_config.get("enabled", False):
            json_path = Path(json_config.get("path", "./logs/pricefeed.json"))
            json_path.parent.mkdir(parents=True, exist_ok=True)

            logger.add(
                json_path,
                format="{message}",
                level=log_level,
                serialize=True,
                rotation=file_config.get("rotation", "50 MB"),
                retention=file_config.get("retention", "14 days"),
            )

    def get_logger(self, name: Optional[str] = None):
        """
        Get a logger instance

        Args:
            name: Logger name (usually __name__)

        Returns:
            Configured logger instance
        """
        if name:
            return logger.bind(name=name)
        return logger


_logger_setup = None


def setup_logging(config_path: Optional[str] = None):
    """
    Initialize logging system

    Args:
        config_path: Path to settings.yaml file
    """
    global _logger_setup
    _logger_setup = LoggerSetup(config_path)
    logger.debug("Logging system initialized")


def get_logger(name: Optional[str] = None):
    """
    Get a logger instance

    Example:
        >>> from pricefeed.utils.logger import get_logger
        >>> log = get_logger(__name__)
        >>> log.info("Resolving prices")
    """
    if _logger_setup is None:
        setup_logging()
    return _logger_setup.get_logger(name)


def log_execution_time(func):
    """
    Decorator to log the execution time of a coroutine function

    Example:
        >>> @log_execution_time
        >>> async def build_snapshot():
        >>>     ...
    """
    from functools import wraps
    import time

    @wraps(func)
    async def wrapper(*args, **kwargs):
        log = get_logger(func.__module__)
        start_time = time.perf_counter()
        try:
            result = await func(*args, **kwargs)
            elapsed = time.perf_counter() - start_time
            log.info(f"{func.__name__} executed in {elapsed:.2f}s")
            return result
        except Exception as e:
            elapsed = time.perf_counter() - start_time
            log.error(f"{func.__name__} failed after {elapsed:.2f}s: {e}")
            raise

    return wrapper
