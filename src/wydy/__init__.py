"""wydy — what do you do? Resolve loose phrases into commands and run them."""

__version__ = "0.3.0"
