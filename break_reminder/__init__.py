"""
Break Reminder – session/overlay lifecycle backend.
Start with: uvicorn break_reminder.main:app --reload
"""

__version__ = "0.1.0"
