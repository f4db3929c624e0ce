"""Entry point for ``python -m lintbridge``."""

import sys

from lintbridge.cli import run


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
