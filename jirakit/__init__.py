"""Jira markup conversion, netrc lookup, editor prompts and a terminal text view."""

__version__ = "0.1.0"