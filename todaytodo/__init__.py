"""
FILE: todaytodo/__init__.py
PURPOSE: Daily task tracker - tasks that expire at the end of the day
EXPORTS:
  - __version__
"""

__version__ = "0.1.0"
