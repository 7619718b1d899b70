"""
Change status data models.
"""

from enum import Enum

from pydantic import BaseModel, model_validator


class ChangeEventType(str, Enum):
    """Reasons a state change can be reported with."""

    FETCH = "fetch_with_changes"
    SAVE = "save_with_changes"
    RESET = "reset_with_changes"


class ChangeStatus(BaseModel):
    """
    Dirty/clean status of a monitored state.

    Exactly one of ``clean`` and ``dirty`` is true.
    """

    clean: bool
    dirty: bool

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {"clean": False, "dirty": True}
        }

    @model_validator(mode="after")
    def check_exclusive(self) -> "ChangeStatus":
        if self.dirty == self.clean:
            raise ValueError("clean and dirty must be mutually exclusive")
        return self

    @classmethod
    def from_clean(cls, is_clean: bool) -> "ChangeStatus":
        """Build a status from the result of a baseline comparison."""
        return cls(clean=is_clean, dirty=not is_clean)
