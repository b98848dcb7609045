# vRA Automation Helpers MCP Server
# File: models.py
# Version: v3

"""Domain models used by the vRA helpers."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Optional

SECURE_STRING_TYPE_ID = "SECURE_STRING"
REF_DATA_TYPE = "ref"

# Facet tags read when flattening a field.
FACET_DERIVED_VALUE = "derivedValue"
FACET_DEFAULT_VALUE = "defaultValue"
FACET_MANDATORY = "mandatory"
FACET_EDITABLE = "editable"

STATE_SUCCESSFUL = "SUCCESSFUL"

# Request states that keep the waiter polling.
IN_FLIGHT_STATES = frozenset(
    {
        "IN_PROGRESS",
        "SUBMITTED",
        "PROVIDER_COMPLETED",
        "POST_APPROVED",
        "PRE_APPROVED",
        "PENDING_PRE_APPROVAL",
    }
)


def unwrap_scalar(value: Any) -> Any:
    """Descend through nested ``{"value": ...}`` wrappers to the innermost value.

    vRA wraps facet values as e.g.
    ``{"type": "constant", "value": {"type": "string", "value": "abc"}}``.
    """
    while isinstance(value, dict) and "value" in value:
        value = value["value"]
    return value


def is_truthy(value: Any) -> bool:
    """Explicit truthiness for scalars found in vRA JSON payloads.

    Rules:
    - ``None`` is false
    - booleans are themselves
    - numbers are true when non-zero
    - strings are true when non-empty, whatever their content
    - containers are true when non-empty
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value != ""
    return bool(value)


@dataclass(frozen=True)
class Facet:
    """A tagged sub-attribute of a schema field (default value, mandatory, ...)."""

    type: str
    value: Any = None

    @property
    def scalar(self) -> Any:
        return unwrap_scalar(self.value)


def find_facet(facets: Iterable[Facet], facet_type: str) -> Optional[Facet]:
    """Return the first facet tagged ``facet_type``, or None."""
    for facet in facets:
        if facet.type == facet_type:
            return facet
    return None


@dataclass(frozen=True)
class DataType:
    type_id: Optional[str]
    type: Optional[str]


@dataclass(frozen=True)
class Field:
    """A single property declared by a software component schema."""

    label: str
    description: Optional[str]
    data_type: DataType
    facets: List[Facet] = field(default_factory=list)

    @property
    def is_ref(self) -> bool:
        return self.data_type.type == REF_DATA_TYPE


@dataclass
class SoftwareComponentSummary:
    """Listing entry returned by the software component type catalog."""

    id: str
    name: str

    # Raw JSON payload from the API, for debugging / advanced use.
    raw: Optional[Dict[str, Any]] = field(default=None, repr=False)


@dataclass
class SoftwareComponentSchema:
    """Full software component type definition with its ordered fields."""

    id: str
    name: str
    fields: List[Field] = field(default_factory=list)

    raw: Optional[Dict[str, Any]] = field(default=None, repr=False)


@dataclass(frozen=True)
class PropertyRecord:
    """One flattened row describing a software component property."""

    component_name: str
    component_id: str
    property_name: str
    description: Optional[str]
    type_id: Optional[str]
    value: Any
    encrypted: bool
    overrideable: bool
    required: bool
    computed: bool

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class RequestStatus:
    """Current state of a catalog request."""

    request_number: int
    state: str

    raw: Optional[Dict[str, Any]] = field(default=None, repr=False)

    @property
    def in_flight(self) -> bool:
        return self.state in IN_FLIGHT_STATES


@dataclass(frozen=True)
class RequestResult:
    """Final state reported for a waited-on request."""

    request_number: int
    completion_status: str

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
