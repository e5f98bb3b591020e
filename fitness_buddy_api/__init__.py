"""
Top‑level package for the FitnessBuddy API.

All functionality lives in the ``app`` subpackage; run the server
with ``python -m fitness_buddy_api``.
"""

__all__ = []
