"""Datenmodell für eine Lehrkraft (Pydantic v2)."""

from pydantic import Field, field_validator

from models.base import ApiModel


class Teacher(ApiModel):
    """Repräsentiert eine einzelne Lehrkraft."""

    id: str = Field(alias="_id")
    firstname: str
    lastname: str
    username: str = ""
    email: str = ""
    department: str = ""      # Fachbereichs-ID

    @field_validator("firstname", "lastname")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()

    @property
    def full_name(self) -> str:
        """Anzeigename "Vorname Nachname"."""
        return f"{self.firstname} {self.lastname}"
