from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from .models import ScheduleType


def _require_text(value: str, field: str) -> str:
    """
    Strip whitespace and reject empty strings for required text fields.
    """
    s = value.strip()
    if not s:
        raise ValueError(f"{field} must not be empty")
    return s


# PUBLIC_INTERFACE
class CategoryCreate(BaseModel):
    """Schema for creating a category."""

    model_config = ConfigDict(json_schema_extra={"example": {"name": "dsa"}})

    name: str = Field(..., description="Unique category name")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _require_text(v, "name")


# PUBLIC_INTERFACE
class CategoryOut(BaseModel):
    """Schema returned by the API for a category."""

    id: str = Field(..., description="Unique identifier of the category")
    name: str = Field(..., description="Category name")


# PUBLIC_INTERFACE
class TopicCreate(BaseModel):
    """
    Schema for creating a topic.
    Any `status` sent by the client is ignored; new topics always start as "Not Started".
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"title": "Binary search trees", "category": "dsa"}}
    )

    title: str = Field(..., description="Topic title")
    category: str = Field(..., description="Name of the category the topic belongs to")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _require_text(v, "title")

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: str) -> str:
        return _require_text(v, "category")


# PUBLIC_INTERFACE
class TopicStatusUpdate(BaseModel):
    """Schema for updating a topic's status. Any string is accepted."""

    model_config = ConfigDict(json_schema_extra={"example": {"status": "In Progress"}})

    status: str = Field(..., description="New study status")


# PUBLIC_INTERFACE
class TopicOut(BaseModel):
    """Schema returned by the API for a topic."""

    id: str = Field(..., description="Unique identifier of the topic")
    title: str = Field(..., description="Topic title")
    category: str = Field(..., description="Category name")
    status: str = Field(..., description="Study status")


# PUBLIC_INTERFACE
class ChecklistCompletedUpdate(BaseModel):
    """Schema for toggling a checklist item."""

    model_config = ConfigDict(json_schema_extra={"example": {"completed": True}})

    completed: bool = Field(..., description="Completion flag")


# PUBLIC_INTERFACE
class ChecklistItemOut(BaseModel):
    """Schema returned by the API for a checklist item."""

    id: str = Field(..., description="Unique identifier of the checklist item")
    text: str = Field(..., description="Task text")
    completed: bool = Field(..., description="Completion flag")


# PUBLIC_INTERFACE
class ScheduleItemIn(BaseModel):
    """
    One entry of a schedule replacement payload.

    `type` and `order` are not accepted from the client: the type comes from the
    path and the order from the entry's position in the submitted list.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "time": "5:15 AM - 7:15 AM (2h)",
                "description": "Study Block 1: DSA",
                "category": "dsa",
                "isWarning": False,
                "isSuccess": False,
            }
        },
    )

    time: str = Field(..., description="Time range label")
    description: str = Field(..., description="What happens in this block")
    category: str = Field(..., description="Category label used for colouring")
    is_warning: bool = Field(default=False, alias="isWarning", description="Highlight as a warning")
    is_success: bool = Field(default=False, alias="isSuccess", description="Highlight as a success")

    @field_validator("time", "description", "category")
    @classmethod
    def validate_text(cls, v: str, info: ValidationInfo) -> str:
        return _require_text(v, info.field_name)


# PUBLIC_INTERFACE
class ScheduleItemOut(BaseModel):
    """Schema returned by the API for a schedule item."""

    id: str = Field(..., description="Unique identifier of the schedule item")
    type: ScheduleType = Field(..., description="Schedule type: weekday or weekend")
    time: str
    description: str
    category: str
    is_warning: bool = Field(default=False, alias="isWarning")
    is_success: bool = Field(default=False, alias="isSuccess")
    order: int = Field(..., description="0-based display position within the type")


# PUBLIC_INTERFACE
class MessageOut(BaseModel):
    """Plain acknowledgement body."""

    message: str = Field(..., description="Human readable outcome")
