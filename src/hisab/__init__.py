"""Astronomical hisab and fasting-rule resolution."""

__version__ = "0.1.0"
