"""
Pydantic schemas for Task Service.
"""
from typing import Any, Optional
from pydantic import BaseModel, Field, model_validator

from ..core.exceptions import ValidationError


class TaskPayload(BaseModel):
    """
    Request body for creating or updating a task.

    Every field may be absent so that a missing title or status is reported
    by ``ensure_required`` rather than as a malformed body. Unknown keys,
    including a client-supplied ``id``, are ignored.
    """
    title: Optional[str] = Field(None, description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    status: Optional[str] = Field(None, description="Task status")

    @model_validator(mode="before")
    @classmethod
    def null_as_empty(cls, data: Any) -> Any:
        """A JSON null body decodes to a payload with every field unset"""
        return {} if data is None else data

    def ensure_required(self) -> None:
        """Raise ValidationError unless title and status are non-empty"""
        if not self.title or not self.status:
            raise ValidationError()


class TaskResponse(BaseModel):
    """Schema for task response"""
    id: int = Field(..., description="Task ID")
    title: str = Field(..., description="Task title")
    description: str = Field("", description="Task description")
    status: str = Field(..., description="Task status")
