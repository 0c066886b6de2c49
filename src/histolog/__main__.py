"""Allow ``python -m histolog``."""

from histolog.adapters.cli import main

main()
