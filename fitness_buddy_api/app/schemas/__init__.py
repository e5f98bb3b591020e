"""
Pydantic schema definitions for API payloads.

Records themselves are schemaless dictionaries; only responses with
a fixed shape get a model.
"""

from .common import HealthRead, MessageRead

__all__ = ["HealthRead", "MessageRead"]
