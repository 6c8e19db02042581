"""Goldfish: simulate draws from a deck under agent-driven rules."""

__version__ = "0.1.0"
