"""
pydantic models for tool input schemas and the response envelope.

The passenger models declare the shapes advertised to MCP clients. Field names
are the wire names (camelCase) so that model_dump() yields the same mapping the
HTTP adapter receives as a raw JSON body.
"""

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

AdultTitle = Literal["Mr", "Mrs", "Ms"]
MinorTitle = Literal["Ms", "Master"]

DATE_FORMAT = {"format": "date"}


class AdultPassenger(BaseModel):
    """An adult traveller. Date of birth is optional."""
    model_config = ConfigDict(str_strip_whitespace=True)

    firstName: str = Field(..., description="First name of passenger")
    lastName: str = Field(..., description="Last name of passenger")
    title: AdultTitle = Field(..., description="Title (Mr, Mrs, Ms)")
    dob: Optional[str] = Field(
        default=None,
        description="Date of birth in YYYY-MM-DD format",
        json_schema_extra=DATE_FORMAT
    )


class MinorPassenger(BaseModel):
    """A child or infant traveller. Date of birth is required."""
    model_config = ConfigDict(str_strip_whitespace=True)

    firstName: str = Field(..., description="First name of passenger")
    lastName: str = Field(..., description="Last name of passenger")
    title: MinorTitle = Field(..., description="Title (Ms, Master)")
    dob: str = Field(
        ...,
        description="Date of birth in YYYY-MM-DD format",
        json_schema_extra=DATE_FORMAT
    )


class Passengers(BaseModel):
    """Travellers grouped by category."""
    adults: List[AdultPassenger] = Field(..., description="Adult passengers")
    children: Optional[List[MinorPassenger]] = Field(default=None, description="Child passengers")
    infants: Optional[List[MinorPassenger]] = Field(default=None, description="Infant passengers")


class ContactInfo(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: str = Field(..., description="Contact email", json_schema_extra={"format": "email"})
    phone: str = Field(..., description="Contact phone number")


class ResponseEnvelope(BaseModel):
    """Uniform {success, data | error} wrapper returned by both front-ends."""
    success: bool
    data: Any = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: Any) -> "ResponseEnvelope":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "ResponseEnvelope":
        return cls(success=False, error=error)

    def to_dict(self) -> dict:
        # Only the fields given to ok()/fail(); a null upstream body is kept.
        return self.model_dump(exclude_unset=True)
