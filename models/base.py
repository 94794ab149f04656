"""Gemeinsame Basis für alle Datensätze aus der REST-API (Pydantic v2)."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """REST-Datensätze kommen in camelCase mit "_id"; intern snake_case.

    Beide Schreibweisen werden beim Einlesen akzeptiert, unbekannte Felder
    der API ignoriert.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_api(self) -> dict:
        """Serialisiert im Format der REST-API (camelCase, "_id")."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
