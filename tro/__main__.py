"""Allow ``python -m tro``."""

from tro.cli import main

main()
