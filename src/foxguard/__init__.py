"""foxguard - detect foxtrot merges in a git history."""

__version__ = "0.3.0"
