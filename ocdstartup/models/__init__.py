"""Shared typed startup models.

This package holds the startup state written during option parsing and the
immutable plan handed to later subsystems.
"""

from .datatypes import CommandContext, StartupPlan, StartupState

__all__ = ["CommandContext", "StartupPlan", "StartupState"]
