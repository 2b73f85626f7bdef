"""
Boss fight components - data-only pydantic models.
"""

from bossfight.components.character import Health

__all__ = [
    "Health",
]
