# vRA Automation Helpers MCP Server
# File: client.py
# Version: v5
"""Thin synchronous client for the vRealize Automation REST APIs we use.

Implements:

- list_software_component_types() via the software service
- get_software_component_type() for a single component schema
- get_request_status() via the catalog consumer request API
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx
from httpx import HTTPStatusError, RequestError

from .config import VraConfig
from .connection import Connection
from .exceptions import NotConnectedError, UpstreamRequestError
from .models import (
    DataType,
    Facet,
    Field,
    RequestStatus,
    SoftwareComponentSchema,
    SoftwareComponentSummary,
)

logger = logging.getLogger(__name__)

SOFTWARE_COMPONENT_TYPES_API = "/software-service/api/softwarecomponenttypes"
CONSUMER_REQUESTS_API = "/catalog-service/api/consumer/requests"


def _parse_field(item: Dict[str, Any]) -> Field:
    data_type = item.get("dataType")
    if not isinstance(data_type, dict):
        data_type = {}

    # Schema fields carry their facets under "state"; accept a top-level
    # "facets" list as well.
    state = item.get("state")
    if not isinstance(state, dict):
        state = {}
    raw_facets = state.get("facets") or item.get("facets") or []
    if not isinstance(raw_facets, list):
        raw_facets = []

    facets: List[Facet] = []
    for raw_facet in raw_facets:
        if not isinstance(raw_facet, dict):
            continue
        facets.append(Facet(type=str(raw_facet.get("type")), value=raw_facet.get("value")))

    return Field(
        label=str(item.get("label") or item.get("id") or ""),
        description=item.get("description"),
        data_type=DataType(
            type_id=data_type.get("typeId"),
            type=data_type.get("type"),
        ),
        facets=facets,
    )


@dataclass
class VraClient:
    """Wrapper around the vRA software service and catalog request APIs.

    ``connection`` may be None; every call then fails with
    NotConnectedError before touching the network.
    """

    config: VraConfig
    connection: Optional[Connection]

    # Test hook: lets callers route requests through httpx.MockTransport.
    transport: Optional[httpx.BaseTransport] = None

    def require_connection(self) -> Connection:
        if self.connection is None:
            raise NotConnectedError()
        return self.connection

    def _get_json(
        self,
        path: str,
        *,
        what: str,
        params: Optional[Dict[str, Any]] = None,
        identifier: Optional[str] = None,
    ) -> Dict[str, Any]:
        """GET ``path`` and return the decoded JSON object.

        Any transport failure, non-2xx status or non-object body becomes an
        UpstreamRequestError naming ``what`` and ``identifier``.
        """
        connection = self.require_connection()
        url = f"{connection.server_base_url}{path}"
        logger.debug("GET %s params=%s", url, params)

        with httpx.Client(
            timeout=float(self.config.http_timeout_seconds),
            verify=self.config.verify_tls,
            transport=self.transport,
        ) as http_client:
            try:
                response = http_client.get(
                    url, headers=connection.headers(), params=params
                )
            except RequestError as exc:
                raise UpstreamRequestError(
                    f"Error calling vRA API to {what} at '{url}': {exc}",
                    url=url,
                    identifier=identifier,
                ) from exc

            try:
                response.raise_for_status()
            except HTTPStatusError as exc:
                status = response.status_code
                body_preview = response.text[:500]
                raise UpstreamRequestError(
                    f"Failed to {what} from '{url}' (HTTP {status}). "
                    f"Response snippet: {body_preview}",
                    url=url,
                    status_code=status,
                    identifier=identifier,
                ) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamRequestError(
                f"Failed to {what}: response from '{url}' is not valid JSON.",
                url=url,
                status_code=response.status_code,
                identifier=identifier,
            ) from exc

        if not isinstance(data, dict):
            raise UpstreamRequestError(
                f"Unexpected response when trying to {what}: "
                f"expected JSON object, got {type(data).__name__}.",
                url=url,
                status_code=response.status_code,
                identifier=identifier,
            )

        return data

    # ------------------------------------------------------------------
    # Software service: component types
    # ------------------------------------------------------------------

    def list_software_component_types(
        self, page: int = 1, limit: Optional[int] = None
    ) -> List[SoftwareComponentSummary]:
        """List one page of software component types (id + name only)."""
        limit = limit if limit is not None else self.config.page_limit
        data = self._get_json(
            SOFTWARE_COMPONENT_TYPES_API,
            what="list software component types",
            params={"page": page, "limit": limit},
        )

        components: List[SoftwareComponentSummary] = []
        for item in data.get("content") or []:
            if not isinstance(item, dict):
                continue
            component_id = item.get("id")
            if component_id is None:
                continue
            components.append(
                SoftwareComponentSummary(
                    id=str(component_id),
                    name=str(item.get("name") or component_id),
                    raw=item,
                )
            )

        logger.debug("Listed %d software component types", len(components))
        return components

    def get_software_component_type(self, component_id: str) -> SoftwareComponentSchema:
        """Fetch the full schema of a single software component type."""
        data = self._get_json(
            f"{SOFTWARE_COMPONENT_TYPES_API}/{component_id}",
            what=f"fetch software component type '{component_id}'",
            identifier=component_id,
        )

        schema = data.get("schema")
        if not isinstance(schema, dict):
            schema = {}
        fields = [
            _parse_field(item)
            for item in schema.get("fields") or []
            if isinstance(item, dict)
        ]

        return SoftwareComponentSchema(
            id=str(data.get("id") or component_id),
            name=str(data.get("name") or component_id),
            fields=fields,
            raw=data,
        )

    # ------------------------------------------------------------------
    # Catalog service: requests
    # ------------------------------------------------------------------

    def get_request_status(self, request_number: int) -> RequestStatus:
        """Look up a catalog request by its number and return its state."""
        identifier = str(request_number)
        data = self._get_json(
            CONSUMER_REQUESTS_API,
            what=f"fetch status of request {request_number}",
            params={"$filter": f"requestNumber eq '{request_number}'"},
            identifier=identifier,
        )

        url = f"{self.require_connection().server_base_url}{CONSUMER_REQUESTS_API}"
        content = data.get("content")
        if not isinstance(content, list):
            content = []
        matches = [item for item in content if isinstance(item, dict)]
        if not matches:
            raise UpstreamRequestError(
                f"No request found with number {request_number} at '{url}'.",
                url=url,
                identifier=identifier,
            )

        item = matches[0]
        state = item.get("state")
        if not state:
            raise UpstreamRequestError(
                f"Request {request_number} response did not contain a 'state'.",
                url=url,
                identifier=identifier,
            )

        return RequestStatus(request_number=int(request_number), state=str(state), raw=item)
