"""Run script.

Lets `python -m main` work from inside `src/` during development, next to the
installed `sysreboot` console script.
"""

from __future__ import annotations

import sys

# Windows consoles default to cp1252; broadcast messages may carry any text.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
