"""Datenmodell für einen Fachbereich (Pydantic v2)."""

from typing import Optional

from pydantic import Field

from models.base import ApiModel


class Department(ApiModel):
    """Repräsentiert einen Fachbereich (z.B. "Computer Science")."""

    id: str = Field(alias="_id")
    name: str
    code: str = ""
    active: bool = True
    established_date: Optional[str] = None
    head_of_department: Optional[str] = None
    department_email: Optional[str] = None
    department_phone: Optional[str] = None
