"""Startup observability helpers.

This package emits deterministic, structured startup log lines through loguru.
"""

from .logger import StartupLogger

__all__ = ["StartupLogger"]
