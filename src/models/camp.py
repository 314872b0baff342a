"""Pydantic schemas for camps and their resolved location."""
import re
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.models.course import CourseOut

URL_PATTERN = re.compile(
    r"https?://(www\.)?[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b([-a-zA-Z0-9()@:%_+.~#?&/=]*)"
)
EMAIL_PATTERN = re.compile(r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$")

REMOTE_ADDRESS = "Remote"


class Career(str, Enum):
    ROBOTICS = "Robotics"
    MECHATRONICS = "Mechatronics"
    ARTIFICIAL_VISION = "Artificial Vision"
    DESKTOP_APPLICATIONS = "Desktop Applications"
    PLC = "Programmable Logic Controller"
    WEB_DEVELOPMENT = "Web Development"
    MOBILE_DEVELOPMENT = "Mobile Development"
    MACHINE_LEARNING = "Machine Learning"
    DATA_ANALYSIS = "Data Analysis"
    ARTIFICIAL_INTELLIGENCE = "Artificial Intelligence"
    NETWORKING_SECURITY = "Networking & Security"
    OPERATING_SYSTEMS = "Operating Systems"
    HARDWARE = "Hardware"
    WEB_DESIGN = "Web Design"
    GRAPHIC_DESIGN = "Graphic Design"


class Location(BaseModel):
    """
    Resolved location of a camp.
    A remote camp only carries formatted_address, everything else stays None
    and is left out of the persisted document.
    """
    model_config = ConfigDict(populate_by_name=True)

    type: Optional[str] = None
    coordinates: Optional[List[float]] = None
    formatted_address: str = Field(alias="formattedAddress")
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zipcode: Optional[str] = None
    country: Optional[str] = None

    @classmethod
    def remote(cls):
        return cls(formatted_address=REMOTE_ADDRESS)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class EnrolledUser(BaseModel):
    email: Optional[str] = None
    name: Optional[str] = None


def _check_name(value):
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("Please add a name")
    return value


def _check_website(value):
    if value and not URL_PATTERN.search(value):
        raise ValueError("Please use a valid URL with HTTP or HTTPS")
    return value


def _check_email(value):
    if value is not None and not EMAIL_PATTERN.match(value):
        raise ValueError("Please add a valid email")
    return value


def _check_careers(value):
    if value is not None and len(value) == 0:
        raise ValueError("Please select at least one relevant career")
    return value


class CampCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    name: str
    description: str = Field(max_length=1000)
    website: Optional[str] = None
    phone: Optional[str] = Field(default=None, max_length=20)
    email: str
    address: Optional[str] = None
    careers: List[Career]
    enrolled_users: List[EnrolledUser] = Field(default_factory=list, alias="enrolledUsers")
    average_rating: Optional[float] = Field(default=None, ge=1, le=5, alias="averageRating")
    image: str = "no-photo.jpg"
    job_assistance: bool = Field(default=False, alias="jobAssistance")
    start_date: Optional[datetime] = Field(default=None, alias="startDate")

    check_name = field_validator("name")(_check_name)
    check_website = field_validator("website")(_check_website)
    check_email = field_validator("email")(_check_email)
    check_careers = field_validator("careers")(_check_careers)


class CampUpdate(BaseModel):
    """Partial update. Only the fields a client actually sent are applied."""
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    name: Optional[str] = None
    description: Optional[str] = Field(default=None, max_length=1000)
    website: Optional[str] = None
    phone: Optional[str] = Field(default=None, max_length=20)
    email: Optional[str] = None
    address: Optional[str] = None
    careers: Optional[List[Career]] = None
    enrolled_users: Optional[List[EnrolledUser]] = Field(default=None, alias="enrolledUsers")
    average_rating: Optional[float] = Field(default=None, ge=1, le=5, alias="averageRating")
    image: Optional[str] = None
    job_assistance: Optional[bool] = Field(default=None, alias="jobAssistance")
    start_date: Optional[datetime] = Field(default=None, alias="startDate")

    check_name = field_validator("name")(_check_name)
    check_website = field_validator("website")(_check_website)
    check_email = field_validator("email")(_check_email)
    check_careers = field_validator("careers")(_check_careers)


class CampOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    name: str
    slug: Optional[str] = None
    description: str
    website: Optional[str] = None
    phone: Optional[str] = None
    email: str
    location: Optional[Dict[str, Any]] = None
    careers: List[str]
    enrolled_users: List[EnrolledUser] = Field(default_factory=list, alias="enrolledUsers")
    average_rating: Optional[float] = Field(default=None, alias="averageRating")
    average_cost: Optional[int] = Field(default=None, alias="averageCost")
    image: str
    job_assistance: bool = Field(alias="jobAssistance")
    created_at: datetime = Field(alias="createdAt")
    user: str
    start_date: Optional[datetime] = Field(default=None, alias="startDate")


class CampDetailOut(CampOut):
    """A camp with its courses populated."""
    courses: List[CourseOut] = Field(default_factory=list)
