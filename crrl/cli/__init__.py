"""
Command-line interface: the Typer app, the directory prompt and error output.
"""
