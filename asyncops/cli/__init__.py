"""
asyncops command line interface.

The Typer application lives in ``asyncops.cli.app``; the ``asyncops``
console script calls ``asyncops.cli.app.main``.
"""
