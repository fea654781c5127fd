"""tro: a Trello client for the command line."""

__version__ = "1.30.0"
