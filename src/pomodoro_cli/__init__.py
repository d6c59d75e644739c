"""Pomodoro CLI - terminal focus timer with tagged session history."""

__version__ = "0.3.0"
