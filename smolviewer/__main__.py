"""Module entrypoint for ``python -m smolviewer``."""

from .cli import main


if __name__ == "__main__":
    main()
