"""Command-line interface for segconv.

``cli`` and ``main`` are resolved on first access, so importing
``segconv.cli`` does not pull in click commands or configure logging.
"""

__all__ = ["cli", "main"]


def __getattr__(name):
    if name == "cli":
        from .main import cli

        return cli
    if name == "main":
        from .main import main

        return main
    raise AttributeError(name)
