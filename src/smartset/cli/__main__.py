"""Main entry point for the smartset CLI when run as a module."""

from smartset.cli.main import main

if __name__ == "__main__":  # pragma: no cover
    main()
