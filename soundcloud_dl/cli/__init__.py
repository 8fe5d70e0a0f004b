"""
Command-line interface: the Typer application and its Rich output helpers.
"""
