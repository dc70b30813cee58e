"""Presentation layer of the Kamin web search application."""

__version__ = "0.1.0"
