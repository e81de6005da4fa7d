"""
View logic of the catalog page.

The page state is an immutable snapshot (CatalogState); every controller operation
returns a new snapshot instead of changing the current one. The visible list is
always derived from (properties, filters), so it can be tested without rendering.
"""
import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from src.real_estate_catalog.client.api_client import ApiRequestError, PropertyApiClient
from src.real_estate_catalog.client.filters import PropertyFilters, filter_properties
from src.real_estate_catalog.schemas.property_schema import PropertySchema

logger = logging.getLogger(__name__)

DELETE_PROMPT = "Are you sure you want to delete this property?"

NUMERIC_FIELDS = {"price": float, "area": float, "bedrooms": int, "bathrooms": int}


@dataclass(frozen=True)
class CatalogState:
    properties: Tuple[PropertySchema, ...] = ()
    filters: PropertyFilters = field(default_factory=PropertyFilters)
    loading: bool = True
    show_form: bool = False

    @property
    def visible_properties(self) -> List[PropertySchema]:
        return filter_properties(self.properties, self.filters)


def show_empty_state(state: CatalogState) -> bool:
    """
    The "No properties found" message: only once loaded and nothing passes the filters.
    """
    return not state.loading and not state.visible_properties


def coerce_listing_form(form: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Converts the raw form values (all strings) into the API payload.
    Raises ValueError when a numeric field can't be converted.
    """
    payload = {key: value for key, value in form.items()}

    for name, cast in NUMERIC_FIELDS.items():
        raw = str(payload.get(name, "")).strip()
        try:
            value = float(raw)
        except ValueError:
            raise ValueError(f"{name} must be a number, got '{raw}'")

        if not math.isfinite(value):
            raise ValueError(f"{name} must be a number, got '{raw}'")

        if cast is int:
            # "3.0" is accepted as 3, "2.5" is not rounded
            if not value.is_integer():
                raise ValueError(f"{name} must be a whole number, got '{raw}'")
            value = int(value)

        payload[name] = value

    if not payload.get("imageUrl"):
        payload.pop("imageUrl", None)

    return payload


class CatalogController:
    """
    Runs the page actions against the API. Successes and failures are reported
    through 'notify'; on failure the previous snapshot is returned untouched.
    """

    def __init__(self, api: PropertyApiClient, notify: Optional[Callable[[str], None]] = None):
        self.api = api
        self.notify = notify or (lambda message: None)

    def _fail(self, action: str, error: Exception):
        logger.error(f"Error {action}: {error}")
        self.notify(f"Error {action}: {error}")

    def load(self, state: CatalogState) -> CatalogState:
        try:
            properties = self.api.list_properties()
        except ApiRequestError as e:
            self._fail("fetching properties", e)
            return replace(state, loading=False)

        return replace(state, properties=tuple(properties), loading=False)

    def update_filters(self, state: CatalogState, **changes) -> CatalogState:
        return replace(state, filters=replace(state.filters, **changes))

    def toggle_form(self, state: CatalogState) -> CatalogState:
        return replace(state, show_form=not state.show_form)

    def submit_listing(self, state: CatalogState, form: Mapping[str, Any]) -> CatalogState:
        try:
            self.api.create_property(coerce_listing_form(form))
        except (ApiRequestError, ValueError) as e:
            self._fail("adding property", e)
            return state

        self.notify("Property added successfully!")
        return self.load(replace(state, show_form=False))

    def delete_listing(
        self, state: CatalogState, property_id: str, confirm: Callable[[str], bool]
    ) -> CatalogState:
        if not confirm(DELETE_PROMPT):
            return state

        try:
            self.api.delete_property(property_id)
        except ApiRequestError as e:
            self._fail("deleting property", e)
            return state

        self.notify("Property deleted successfully!")
        return self.load(state)

    def change_status(self, state: CatalogState, property_id: str, status: str) -> CatalogState:
        try:
            self.api.update_status(property_id, status)
        except ApiRequestError as e:
            self._fail("updating status", e)
            return state

        self.notify("Status updated successfully!")
        return self.load(state)
