"""Development entry point (without an installed package).

Allows running the CLI with `python main.py ...`: the code lives in `src/`,
so it is not importable until the project is installed.
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
    src = Path(__file__).resolve().parent / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))

    from kontent_delivery.cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
