"""Main entry point for ``python -m vzspawn``."""

from vzspawn.cli.main import main


if __name__ == "__main__":
    main()
