"""Allow ``python -m buildwatch``."""

from buildwatch.cli.main import main

main()
