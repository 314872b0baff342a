"""Pydantic schemas for courses."""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


def _check_title(value):
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("Please add a course title")
    return value


class CourseCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    title: str
    description: str
    duration: str
    tuition: float = Field(ge=0, allow_inf_nan=False)
    difficulty: Difficulty
    available_job: bool = Field(default=False, alias="availableJob")

    check_title = field_validator("title")(_check_title)


class CourseUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    title: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[str] = None
    tuition: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    difficulty: Optional[Difficulty] = None
    available_job: Optional[bool] = Field(default=None, alias="availableJob")

    check_title = field_validator("title")(_check_title)


class CourseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    title: str
    description: str
    duration: str
    tuition: float
    difficulty: Difficulty
    available_job: bool = Field(alias="availableJob")
    created_at: datetime = Field(alias="createdAt")
    camp: str = Field(validation_alias="camp_id", serialization_alias="camp")
