"""prblame - attribute the lines a change touches to their previous authors."""

__version__ = "0.1.0"
