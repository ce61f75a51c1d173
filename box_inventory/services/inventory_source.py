"""Client for the external inventory backend.

The backend is the source of truth for per-location stock totals and for
persisted boxes. ``InventorySource`` lists the operations the box allocation
core depends on; ``HttpInventorySource`` implements them against the
dashboard's REST API.
"""

import logging
import time
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any
from urllib.parse import quote

import requests
from prometheus_client import Counter, Histogram

from box_inventory.config import Settings
from box_inventory.exceptions import (
    InventorySourceUnavailableException,
    RecordNotFoundException,
    RemoteServiceException,
)
from box_inventory.models.box import Box, BoxItemEntry, BoxStatus
from box_inventory.models.item import InventoryRecord, Item

logger = logging.getLogger(__name__)

INVENTORY_API_REQUESTS_TOTAL = Counter(
    "inventory_api_requests_total",
    "Inventory backend requests by operation and status",
    ["operation", "status"],
)
INVENTORY_API_DURATION_SECONDS = Histogram(
    "inventory_api_duration_seconds",
    "Inventory backend request duration in seconds",
    ["operation"],
)

# Box fields accepted by update_box, mapped to the backend's field names
BOX_FIELD_NAMES = {
    "box_number": "boxNumber",
    "location": "location",
    "description": "description",
    "capacity": "capacity",
    "status": "status",
}


class InventorySource(ABC):
    """Operations required from the external inventory backend."""

    @abstractmethod
    def get_total_inventory(self, location: str) -> list[InventoryRecord]:
        """Return total stock per item held at a location."""

    @abstractmethod
    def list_boxes(self, location: str) -> list[Box]:
        """Return every box stored at a location."""

    @abstractmethod
    def get_box(self, box_id: str) -> Box:
        """Return a single box with its current contents."""

    @abstractmethod
    def create_box(
        self,
        location: str,
        box_number: str,
        description: str,
        capacity: int,
        status: BoxStatus,
    ) -> Box:
        """Persist a new, empty box."""

    @abstractmethod
    def update_box(self, box_id: str, fields: dict[str, Any]) -> Box:
        """Update box attributes; keys are ``BOX_FIELD_NAMES`` keys."""

    @abstractmethod
    def delete_box(self, box_id: str) -> None:
        """Delete a box permanently."""

    @abstractmethod
    def add_box_item(self, box_id: str, item_id: str, quantity: int, notes: str) -> Box:
        """Add an item entry to a box (the backend merges repeated items)."""

    @abstractmethod
    def update_box_item(self, box_id: str, item_id: str, quantity: int) -> Box:
        """Set the quantity of an existing box entry."""

    @abstractmethod
    def remove_box_item(self, box_id: str, item_id: str) -> Box:
        """Remove an item entry from a box."""

    @abstractmethod
    def search_boxes(self, query: str) -> list[Box]:
        """Free-text search over box numbers and item names."""


class HttpInventorySource(InventorySource):
    """InventorySource backed by the dashboard REST API."""

    def __init__(self, settings: Settings, session: requests.Session | None = None) -> None:
        """Initialize the client.

        Args:
            settings: Application settings holding the backend URL and token
            session: Optional requests session, mainly for tests
        """
        self.base_url = settings.INVENTORY_API_URL.rstrip("/")
        self.timeout = settings.INVENTORY_API_TIMEOUT
        self.location_paths = dict(settings.INVENTORY_LOCATION_PATHS)
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if settings.INVENTORY_API_TOKEN:
            self.session.headers.update({"Authorization": f"Bearer {settings.INVENTORY_API_TOKEN}"})

    def get_total_inventory(self, location: str) -> list[InventoryRecord]:
        path = self.location_paths.get(location)
        if path:
            data = self._request("GET", path, operation="get_total_inventory")
        else:
            data = self._request(
                "GET", "inventory", operation="get_total_inventory", params={"location": location}
            )
        return [_parse_inventory_record(row) for row in (data or [])]

    def list_boxes(self, location: str) -> list[Box]:
        data = self._request(
            "GET", "inventory-boxes", operation="list_boxes", params={"location": location}
        )
        boxes = [_parse_box(row) for row in (data or [])]
        return [box for box in boxes if box.location == location]

    def get_box(self, box_id: str) -> Box:
        data = self._request(
            "GET", f"inventory-boxes/{quote(box_id, safe='')}", operation="get_box", not_found=("Box", box_id)
        )
        return _parse_box(data)

    def create_box(
        self,
        location: str,
        box_number: str,
        description: str,
        capacity: int,
        status: BoxStatus,
    ) -> Box:
        payload = {
            "boxNumber": box_number,
            "location": location,
            "description": description,
            "capacity": capacity,
            "status": BoxStatus(status).value,
        }
        data = self._request("POST", "inventory-boxes", operation="create_box", json=payload)
        return _parse_box(data)

    def update_box(self, box_id: str, fields: dict[str, Any]) -> Box:
        payload: dict[str, Any] = {}
        for name, value in fields.items():
            if name not in BOX_FIELD_NAMES:
                raise ValueError(f"Unknown box field: {name}")
            payload[BOX_FIELD_NAMES[name]] = value.value if isinstance(value, BoxStatus) else value

        data = self._request(
            "PUT",
            f"inventory-boxes/{quote(box_id, safe='')}",
            operation="update_box",
            json=payload,
            not_found=("Box", box_id),
        )
        return _parse_box(data)

    def delete_box(self, box_id: str) -> None:
        self._request(
            "DELETE", f"inventory-boxes/{quote(box_id, safe='')}", operation="delete_box", not_found=("Box", box_id)
        )

    def add_box_item(self, box_id: str, item_id: str, quantity: int, notes: str) -> Box:
        data = self._request(
            "POST",
            f"inventory-boxes/{quote(box_id, safe='')}/items",
            operation="add_box_item",
            json={"itemId": item_id, "quantity": quantity, "notes": notes},
            not_found=("Box", box_id),
        )
        return _parse_box(data) if data else self.get_box(box_id)

    def update_box_item(self, box_id: str, item_id: str, quantity: int) -> Box:
        data = self._request(
            "PUT",
            f"inventory-boxes/{quote(box_id, safe='')}/items/{quote(item_id, safe='')}",
            operation="update_box_item",
            json={"quantity": quantity},
            not_found=("Box item", f"{item_id} in box {box_id}"),
        )
        return _parse_box(data) if data else self.get_box(box_id)

    def remove_box_item(self, box_id: str, item_id: str) -> Box:
        data = self._request(
            "DELETE",
            f"inventory-boxes/{quote(box_id, safe='')}/items/{quote(item_id, safe='')}",
            operation="remove_box_item",
            not_found=("Box", box_id),
        )
        return _parse_box(data) if data else self.get_box(box_id)

    def search_boxes(self, query: str) -> list[Box]:
        data = self._request(
            "GET", "inventory-boxes/search", operation="search_boxes", params={"query": query}
        )
        return [_parse_box(row) for row in (data or [])]

    def _request(
        self,
        method: str,
        path: str,
        operation: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        not_found: tuple[str, str] | None = None,
    ) -> Any:
        """Issue a request and return the decoded JSON body (None when empty).

        Raises:
            RecordNotFoundException: 404 on a request naming a resource
            InventorySourceUnavailableException: Connection failures and timeouts
            RemoteServiceException: Any other backend-reported failure
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        start_time = time.perf_counter()

        try:
            response = self.session.request(
                method, url, params=params, json=json, timeout=self.timeout
            )
        except (requests.ConnectionError, requests.Timeout) as e:
            self._record_request(operation, "unavailable", start_time)
            logger.error("Inventory backend unreachable during %s: %s", operation, e)
            raise InventorySourceUnavailableException(operation.replace("_", " ")) from e
        except requests.RequestException as e:
            self._record_request(operation, "error", start_time)
            logger.error("Inventory backend request failed during %s: %s", operation, e)
            raise RemoteServiceException(operation.replace("_", " "), str(e)) from e

        if response.status_code == 404 and not_found is not None:
            self._record_request(operation, "not_found", start_time)
            raise RecordNotFoundException(*not_found)

        if response.status_code >= 400:
            self._record_request(operation, "error", start_time)
            detail = _error_detail(response)
            logger.warning(
                "Inventory backend returned %s for %s %s: %s",
                response.status_code, method, path, detail,
            )
            raise RemoteServiceException(operation.replace("_", " "), detail, response.status_code)

        self._record_request(operation, "success", start_time)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise RemoteServiceException(
                operation.replace("_", " "), "response was not valid JSON", response.status_code
            ) from e

    def _record_request(self, operation: str, status: str, start_time: float) -> None:
        INVENTORY_API_REQUESTS_TOTAL.labels(operation=operation, status=status).inc()
        INVENTORY_API_DURATION_SECONDS.labels(operation=operation).observe(
            time.perf_counter() - start_time
        )


def _error_detail(response: requests.Response) -> str:
    """Extract the backend's error message, falling back to the HTTP reason."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ("error", "message", "detail"):
            if body.get(key):
                return str(body[key])
    return f"HTTP {response.status_code} {response.reason or ''}".strip()


def _record_id(data: dict[str, Any]) -> str:
    return str(data.get("_id") or data.get("id") or "")


def _parse_item(data: dict[str, Any] | str) -> Item:
    if not isinstance(data, dict):
        return Item(id=str(data), name="")

    category = data.get("category") or ""
    if isinstance(category, dict):
        category = category.get("name", "")

    return Item(
        id=_record_id(data),
        name=str(data.get("name") or ""),
        unit=str(data.get("unit") or ""),
        category=str(category),
    )


def _parse_inventory_record(data: dict[str, Any]) -> InventoryRecord:
    if "item" in data:
        item = _parse_item(data["item"])
    else:
        item = Item(
            id=str(data.get("itemId") or ""),
            name=str(data.get("itemName") or ""),
            unit=str(data.get("unit") or ""),
            category=str(data.get("category") or ""),
        )
    return InventoryRecord(item=item, quantity=int(data.get("quantity") or 0))


def _parse_entry(data: dict[str, Any]) -> BoxItemEntry:
    raw_item = data.get("item") if "item" in data else data.get("itemId")
    item = _parse_item(raw_item if raw_item is not None else "")
    return BoxItemEntry(
        item_id=item.id or str(data.get("itemId") or ""),
        item_name=item.name or str(data.get("itemName") or ""),
        quantity=int(data.get("quantity") or 0),
        notes=str(data.get("notes") or ""),
    )


def _parse_timestamp(value: Any) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        return None


def _parse_box(data: dict[str, Any]) -> Box:
    if isinstance(data, dict) and isinstance(data.get("box"), dict):
        data = data["box"]

    return Box(
        id=_record_id(data),
        box_number=str(data.get("boxNumber") or ""),
        location=str(data.get("location") or ""),
        capacity=int(data.get("capacity") or 0),
        status=BoxStatus(data.get("status") or BoxStatus.ACTIVE.value),
        description=str(data.get("description") or ""),
        items=[_parse_entry(entry) for entry in data.get("items") or []],
        created_at=_parse_timestamp(data.get("createdAt")),
        updated_at=_parse_timestamp(data.get("updatedAt")),
    )
