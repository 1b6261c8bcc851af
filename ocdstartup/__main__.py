"""Module entrypoint for running ocdstartup as ``python -m ocdstartup``."""

from __future__ import annotations

from ocdstartup.cli import main


if __name__ == "__main__":
    main()
