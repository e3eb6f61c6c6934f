"""
Squirrito: scene jokes pinned to a map
"""
__version__ = "1.0.0"
