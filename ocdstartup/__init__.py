"""Top-level package for ocdstartup.

This package resolves the executable location, installation prefix and
ordered script search directories at process start, and parses the
command-line options that feed them. The main entry point is
`parse_cmdline_args`.
"""

from .models import StartupPlan, StartupState
from .options import parse_cmdline_args

__all__ = ["StartupPlan", "StartupState", "parse_cmdline_args", "__version__"]

__version__ = "0.1.0"
