"""Utility modules for foxguard."""
