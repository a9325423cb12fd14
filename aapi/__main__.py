"""Allow ``python -m aapi``."""

from aapi.cli import main

main()
