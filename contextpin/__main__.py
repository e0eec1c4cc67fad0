"""Module entrypoint for ``python -m contextpin``."""

from .cli import main


if __name__ == "__main__":
    main()
