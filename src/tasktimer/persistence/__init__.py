"""File persistence helpers for tasktimer."""

from tasktimer.persistence._utils import atomic_write_json

__all__ = ["atomic_write_json"]
