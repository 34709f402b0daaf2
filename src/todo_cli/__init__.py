"""A small command-line TODO list kept in a comma-delimited text file."""

__version__ = "0.1.0"
