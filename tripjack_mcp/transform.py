"""
Request Transformer

Pure functions that turn the simplified inbound request shapes into the
payloads the Tripjack API expects, and upstream failures into a message.
Validation is presence-only: fares, inventory and field formats are left to
the upstream API.
"""

from typing import Any, Dict, List, Mapping, Sequence

import httpx

from tripjack_mcp.errors import ValidationError

CABIN_CLASS = "ECONOMY"

SEARCH_REQUIRED_FIELDS = ("departureCity", "arrivalCity", "travelDate")
BOOK_REQUIRED_FIELDS = ("priceId", "passengers", "contactInfo")
TICKET_REQUIRED_FIELDS = ("bookingId",)
PASSENGERS_REQUIRED_FIELDS = ("adults",)
TRAVELLER_REQUIRED_FIELDS = ("firstName", "lastName", "title")
CONTACT_REQUIRED_FIELDS = ("email", "phone")

# Passenger category key in the request -> Tripjack passenger type
PASSENGER_CATEGORIES = (
    ("adults", "ADULT"),
    ("children", "CHILD"),
    ("infants", "INFANT"),
)


def require_fields(request: Any, fields: Sequence[str]) -> Mapping[str, Any]:
    """Raise ValidationError unless every field is present and truthy."""
    if not isinstance(request, Mapping) or not all(request.get(f) for f in fields):
        raise ValidationError(fields)
    return request


def build_search_payload(request: Any) -> Dict[str, Any]:
    """Build the air-search-all payload: economy, one segment, default 1/0/0 pax."""
    request = require_fields(request, SEARCH_REQUIRED_FIELDS)
    return {
        "searchQuery": {
            "cabinClass": CABIN_CLASS,
            "paxInfo": {
                "ADULT": request.get("adults") or 1,
                "CHILD": request.get("children") or 0,
                "INFANT": request.get("infants") or 0,
            },
            "routeInfos": [
                {
                    "fromCityOrAirport": {"code": request["departureCity"]},
                    "toCityOrAirport": {"code": request["arrivalCity"]},
                    "travelDate": request["travelDate"],
                }
            ],
        }
    }


def _traveller(passenger: Any, passenger_type: str) -> Dict[str, Any]:
    if not isinstance(passenger, Mapping):
        raise ValidationError(TRAVELLER_REQUIRED_FIELDS)
    record = {
        "ti": passenger.get("title"),
        "fN": passenger.get("firstName"),
        "lN": passenger.get("lastName"),
        "pt": passenger_type,
    }
    if passenger_type == "ADULT":
        if passenger.get("dob"):
            record["dob"] = passenger["dob"]
    elif "dob" in passenger:
        # Children and infants need a dob upstream; a missing one is not rejected here.
        record["dob"] = passenger["dob"]
    return record


def build_traveller_list(passengers: Any) -> List[Dict[str, Any]]:
    """
    Flatten grouped passengers into Tripjack travellerInfo records.

    Records are ordered adults, then children, then infants, keeping input
    order within each category. Upstream indexes travellers by this order.
    """
    if not isinstance(passengers, Mapping) or passengers.get("adults") is None:
        raise ValidationError(PASSENGERS_REQUIRED_FIELDS)

    travellers = []
    for key, passenger_type in PASSENGER_CATEGORIES:
        for passenger in passengers.get(key) or []:
            travellers.append(_traveller(passenger, passenger_type))
    return travellers


def build_delivery_info(contact_info: Any) -> Dict[str, List[Any]]:
    """Upstream expects lists; we always send exactly one email and one phone.

    Missing keys are forwarded as null; a contactInfo that is not an object is
    rejected like a missing one.
    """
    if not isinstance(contact_info, Mapping):
        raise ValidationError(CONTACT_REQUIRED_FIELDS)
    return {
        "emails": [contact_info.get("email")],
        "contacts": [contact_info.get("phone")],
    }


def _upstream_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return ""
    if not isinstance(body, dict):
        return ""
    if body.get("message"):
        return str(body["message"])
    errors = body.get("errors")
    if isinstance(errors, list) and errors and isinstance(errors[0], dict):
        return str(errors[0].get("message") or "")
    return ""


def map_upstream_error(error: Exception) -> str:
    """Prefer the upstream API's own message over the generic transport text."""
    if isinstance(error, httpx.HTTPStatusError):
        message = _upstream_message(error.response)
        if message:
            return message
    return str(error) or type(error).__name__
