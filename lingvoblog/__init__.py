"""Multilingual content marketing blog backend."""

__version__ = "0.1.0"
