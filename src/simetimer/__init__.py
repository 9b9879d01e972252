"""SimeTimer — stopwatch and time tracking in the terminal."""

__version__ = "1.0.0"
