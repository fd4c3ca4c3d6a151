"""StackIt question and answer service."""

__version__ = "0.1.0"
