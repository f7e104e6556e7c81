"""
Flow Lines

Animated field of flowing lines for use as a decorative Qt background.
"""

__version__ = "0.1.0"
