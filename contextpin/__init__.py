"""contextpin: pin the structural context of a position above a viewport.

``contextpin.extract`` computes context chains (indentation ancestors or
outline headings); ``contextpin.viewport`` turns host scroll events into an
annotation showing that chain. ``main`` runs the ``contextpin FILE LINE``
command.
"""

from __future__ import annotations


def main(argv: list[str] | None = None) -> None:
    """Run the command line, importing it only when called."""
    from .cli import main as cli_main

    cli_main(argv)


__all__ = ["main"]
