"""
Unified Logging System for javapad
==================================

Usage:
    from javapad.logging import get_logger

    logger = get_logger("Orchestrator")
    logger.info("Trying provider judge0_ce")
    logger.success("Run finished", elapsed=1.4)
"""

from .logger import (
    ConsoleFormatter,
    FileFormatter,
    Logger,
    LogLevel,
    configure_logging,
    get_logger,
    reset_logger,
    shutdown_logging,
)

__all__ = [
    "Logger",
    "LogLevel",
    "get_logger",
    "reset_logger",
    "configure_logging",
    "shutdown_logging",
    "ConsoleFormatter",
    "FileFormatter",
]
