"""
Python client for the DayFlow API
"""

from .api import ApiError, DayflowClient
from .today import TodayBoard, plan_open_tasks

__all__ = ["ApiError", "DayflowClient", "TodayBoard", "plan_open_tasks"]
