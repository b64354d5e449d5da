"""
SQL statements module
Keeps table definitions and queries in one place
"""

from . import queries, schema

__all__ = ["schema", "queries"]
