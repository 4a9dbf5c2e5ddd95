"""Project-course portal: assessment windows and evaluation scoring."""

__version__ = "0.1.0"
