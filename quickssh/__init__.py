"""quickssh - keep a list of SSH host shortcuts and connect from the terminal."""

__version__ = "0.2.0"
