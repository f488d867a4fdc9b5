"""Data models for field-operations contacts."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ContactKind(str, Enum):
    """Kinds of contacts held in the directory."""

    CLIENT = "client"
    FRAC = "frac"
    CUSTOM = "custom"


class ShiftType(str, Enum):
    """Shift rotation a contact works."""

    DAYS = "days"
    NIGHTS = "nights"
    OFF = "off"


class Contact(BaseModel):
    """A single contact record.

    Client, frac and custom contacts share one record type; the ``kind``
    discriminant tells them apart and every subtype-specific attribute
    (title, crew, shift) is optional.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, use_enum_values=False)

    id: str
    name: str
    company: str = ""
    job: str = ""
    kind: ContactKind = Field(default=ContactKind.CLIENT, alias="type")
    custom_type: Optional[str] = Field(default=None, alias="customType")
    title: Optional[str] = None
    crew: Optional[str] = None
    shift: Optional[ShiftType] = None
    email: Optional[str] = None
    phone: Optional[str] = Field(default=None, alias="phoneNumber")
    notes: Optional[str] = None
    last_updated: Optional[datetime] = Field(default=None, alias="lastUpdatedDate")

    @field_validator("id")
    @classmethod
    def id_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("contact id must not be blank")
        return v

    @field_validator(
        "custom_type", "title", "crew", "email", "phone", "notes", "shift", mode="before"
    )
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("company", "job", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @property
    def kind_label(self) -> str:
        """Kind used for grouping: custom contacts report their custom type."""
        if self.kind == ContactKind.CUSTOM:
            return self.custom_type or ContactKind.CUSTOM.value
        return self.kind.value
