"""Read-only analytical queries.

This module groups the fixed retail aggregate questions answered
over tables held by the table store.
"""
