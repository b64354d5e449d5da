"""
DayFlow backend package
Tasks, ideas, links and settings behind a JSON HTTP API
"""

__version__ = "0.1.0"
