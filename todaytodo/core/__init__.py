"""
FILE: todaytodo/core/__init__.py
PURPOSE: Task lifecycle core, its collaborators and the orchestrating service
NOTES:
  - logic, models and notifications are pure: no I/O, no wall-clock reads
  - store, scheduler and ports hold the swappable collaborators
"""
