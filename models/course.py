"""Datenmodell für einen Kurs (Pydantic v2)."""

from typing import Optional

from pydantic import Field

from models.base import ApiModel


class Course(ApiModel):
    """Repräsentiert einen Kurs eines Fachbereichs."""

    id: str = Field(alias="_id")
    name: str
    code: str = ""
    department_id: str = ""   # Fachbereichs-ID (immer als ID, nie eingebettet)
    semester: Optional[str] = None
    credits: Optional[int] = None
