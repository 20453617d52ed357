"""Table storage layer.

This module keeps typed in-memory tables and their JSON files.
It powers row access and persistence for queries and sessions.
"""
