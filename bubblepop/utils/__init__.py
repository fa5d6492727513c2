"""
Utilities for Bubble Pop: configuration loading and logging setup.
"""
