"""Record form model — field values, live formatting and client-side validation.

Mirrors the server's rules so users see problems before submitting; the
server validates again on persistence.
"""

import logging
import re
from datetime import date, datetime, timezone
from typing import Any

from recordbook.client.api_client import ApiError, LocationApi

logger = logging.getLogger(__name__)

FORM_FIELDS: tuple[str, ...] = (
    "name",
    "phone",
    "email",
    "address",
    "state",
    "district",
    "city",
    "zipcode",
    "recordDate",
)

_NON_DIGITS = re.compile(r"\D")
_ZIPCODE = re.compile(r"^\d{6}$")


def format_phone_input(value: str) -> str:
    """Format a phone number as it is typed: ``DDD``, ``(DDD)-DDD``, ``(DDD)-DDD-DDDD``."""
    digits = _NON_DIGITS.sub("", value or "")
    if len(digits) <= 3:
        return digits
    if len(digits) <= 6:
        return f"({digits[:3]})-{digits[3:]}"
    return f"({digits[:3]})-{digits[3:6]}-{digits[6:10]}"


def _today() -> str:
    return date.today().isoformat()


class RecordForm:
    """State of a create/edit form for a single record."""

    def __init__(self, location_api: LocationApi, record: dict[str, Any] | None = None):
        self._location_api = location_api
        self.is_editing = record is not None
        self.values: dict[str, str] = {name: "" for name in FORM_FIELDS}
        self.values["recordDate"] = _today()
        self.errors: dict[str, str] = {}
        self.states: list[str] = []
        self.districts: list[str] = []
        if record:
            self._prefill(record)

    def _prefill(self, record: dict[str, Any]) -> None:
        for name in FORM_FIELDS:
            if name == "recordDate":
                continue
            self.values[name] = record.get(name) or ""
        raw_date = record.get("recordDate")
        if raw_date:
            self.values["recordDate"] = str(raw_date)[:10]

    async def load(self) -> None:
        """Load the state list and, when a state is already set, its districts."""
        await self.load_states()
        if self.values["state"]:
            await self._load_districts(self.values["state"])

    async def load_states(self) -> None:
        try:
            self.states = list(await self._location_api.get_states())
        except ApiError as exc:
            logger.error("Error fetching states: %s", exc.message)
            self.states = []

    async def select_state(self, state: str) -> None:
        """Set the state and reload districts; drops a district that no longer applies."""
        self.set_field("state", state)
        if not state:
            self.districts = []
            self.values["district"] = ""
            return
        await self._load_districts(state)

    async def _load_districts(self, state: str) -> None:
        try:
            self.districts = list(await self._location_api.get_districts(state))
        except ApiError as exc:
            logger.error("Error fetching districts for %s: %s", state, exc.message)
            self.districts = []
        if self.values["district"] and self.values["district"] not in self.districts:
            self.values["district"] = ""

    def set_field(self, name: str, value: str) -> None:
        """Update one field and clear its error; phone input is formatted live."""
        if name not in FORM_FIELDS:
            raise KeyError(name)
        self.values[name] = format_phone_input(value) if name == "phone" else value
        self.errors.pop(name, None)

    def validate(self) -> bool:
        v = self.values
        errors: dict[str, str] = {}

        if not v["name"].strip():
            errors["name"] = "Name is required"

        if not v["phone"].strip():
            errors["phone"] = "Phone is required"
        elif len(_NON_DIGITS.sub("", v["phone"])) != 10:
            errors["phone"] = "Phone must be exactly 10 digits"

        if not v["email"].strip():
            errors["email"] = "Email is required"
        elif "@" not in v["email"] or "." not in v["email"]:
            errors["email"] = "Email must contain @ and ."

        if not v["address"].strip():
            errors["address"] = "Address is required"
        if not v["state"]:
            errors["state"] = "State is required"
        if not v["district"]:
            errors["district"] = "District is required"
        if not v["city"].strip():
            errors["city"] = "City is required"

        if not v["zipcode"].strip():
            errors["zipcode"] = "Zipcode is required"
        elif not _ZIPCODE.match(v["zipcode"]):
            errors["zipcode"] = "Zipcode must be exactly 6 digits"

        if not v["recordDate"]:
            errors["recordDate"] = "Record date is required"
        else:
            try:
                date.fromisoformat(v["recordDate"])
            except ValueError:
                errors["recordDate"] = "Record date must be a valid date"

        self.errors = errors
        return not errors

    def submit_data(self) -> dict[str, Any] | None:
        """Validated payload ready for the API, or None when the form has errors."""
        if not self.validate():
            return None
        payload: dict[str, Any] = dict(self.values)
        record_date = date.fromisoformat(self.values["recordDate"])
        payload["recordDate"] = datetime(
            record_date.year, record_date.month, record_date.day, tzinfo=timezone.utc
        )
        return payload
