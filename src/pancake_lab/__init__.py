"""Pancake Lab: order coordination for customizable pancakes."""

__version__ = "0.1.0"
