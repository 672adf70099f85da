#!/usr/bin/python

"""
blockcrypt.lib

The library of blockcrypt.
"""

__all__ = [
    'cipher',
    'exceptions',
    'padding'
]
