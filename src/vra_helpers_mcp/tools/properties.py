# vRA Automation Helpers MCP Server
# File: tools/properties.py
# Version: v2

"""Flatten software component schemas into property rows."""

from __future__ import annotations

import logging
import re
from typing import Callable, Iterator

from ..client import VraClient
from ..exceptions import UpstreamRequestError
from ..models import (
    FACET_DEFAULT_VALUE,
    FACET_DERIVED_VALUE,
    FACET_EDITABLE,
    FACET_MANDATORY,
    SECURE_STRING_TYPE_ID,
    Field,
    PropertyRecord,
    SoftwareComponentSchema,
    find_facet,
    is_truthy,
)

logger = logging.getLogger(__name__)


def _label_matcher(property_filter: str, exact_match: bool) -> Callable[[str], bool]:
    """Build the label predicate for the given filter mode.

    An empty filter matches every label. Both modes ignore case.
    """
    if not property_filter:
        return lambda label: True

    if exact_match:
        wanted = property_filter.casefold()
        return lambda label: label.casefold() == wanted

    try:
        pattern = re.compile(property_filter, re.IGNORECASE)
    except re.error as exc:
        raise ValueError(f"Invalid property filter pattern {property_filter!r}: {exc}") from exc
    return lambda label: pattern.search(label) is not None


def build_property_record(schema: SoftwareComponentSchema, field: Field) -> PropertyRecord:
    """Derive a PropertyRecord from one schema field and its facets."""
    derived = find_facet(field.facets, FACET_DERIVED_VALUE)
    default = find_facet(field.facets, FACET_DEFAULT_VALUE)
    mandatory = find_facet(field.facets, FACET_MANDATORY)
    editable = find_facet(field.facets, FACET_EDITABLE)

    if derived is not None:
        value = derived.scalar
    elif default is not None:
        value = default.scalar
    else:
        value = None

    return PropertyRecord(
        component_name=schema.name,
        component_id=schema.id,
        property_name=field.label,
        description=field.description,
        type_id=field.data_type.type_id,
        value=value,
        encrypted=field.data_type.type_id == SECURE_STRING_TYPE_ID,
        overrideable=default is not None,
        required=mandatory is not None and is_truthy(mandatory.scalar),
        # Presence of the facet only; its value is not inspected.
        computed=editable is not None,
    )


def inspect_properties(
    client: VraClient,
    property_filter: str = "",
    exact_match: bool = False,
) -> Iterator[PropertyRecord]:
    """Yield one PropertyRecord per matching software component field.

    Components are visited in name order, fields in schema order. Reference
    fields (``dataType.type == "ref"``) are never emitted. The connection and
    the filter are validated here, before any HTTP call; the returned
    iterator performs the requests lazily.
    """
    client.require_connection()
    matches = _label_matcher(property_filter or "", exact_match)
    return _iter_properties(client, matches)


def _iter_properties(
    client: VraClient, matches: Callable[[str], bool]
) -> Iterator[PropertyRecord]:
    components = client.list_software_component_types(page=1)
    logger.info("Inspecting %d software component types", len(components))

    for summary in sorted(components, key=lambda c: c.name.casefold()):
        try:
            schema = client.get_software_component_type(summary.id)
        except UpstreamRequestError as exc:
            if exc.identifier is None:
                exc.identifier = summary.id
            raise

        for field in schema.fields:
            if field.is_ref:
                continue
            if not matches(field.label):
                continue
            yield build_property_record(schema, field)
