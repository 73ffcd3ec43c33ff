"""sysreboot from a source checkout.

    python main.py --poweroff --confirm --dry-run

Puts `src/` on `sys.path` so `cli`, `core` and `adapters` import without an
editable install, then hands off to the same `run()` the `sysreboot` console
script uses.
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
    src = Path(__file__).resolve().parent / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
