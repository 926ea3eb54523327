"""
FILE: todaytodo/core/constants.py
PURPOSE: Constants used throughout the application
EXPORTS:
  - REMINDER_TITLE: Title of every task reminder
  - DEFAULT_DATA_DIR_NAME: Data directory name under the user's home
  - TASKS_FILE_NAME, REMINDERS_FILE_NAME, WIDGET_FILE_NAME, LOG_FILE_NAME
  - DEFAULT_WIDGET_REFRESH_MINUTES, DEFAULT_WIDGET_PREVIEW_LIMIT
  - MIN_ID_PREFIX_LENGTH: Shortest id prefix accepted as a task reference
DEPENDENCIES:
  - None (stdlib only)
"""

# Notification content
REMINDER_TITLE = "Task Reminder"

# Data files (all live in the data directory)
DEFAULT_DATA_DIR_NAME = ".todaytodo"
TASKS_FILE_NAME = "tasks.json"
REMINDERS_FILE_NAME = "reminders.json"
WIDGET_FILE_NAME = "widget.json"
LOG_FILE_NAME = "todaytodo.log"

# Widget timeline
DEFAULT_WIDGET_REFRESH_MINUTES = 15
DEFAULT_WIDGET_PREVIEW_LIMIT = 3

# Task references typed by the user
MIN_ID_PREFIX_LENGTH = 4
