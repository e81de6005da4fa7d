import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from src.real_estate_catalog.core.exceptions import CatalogError
from src.real_estate_catalog.schemas.property_schema import PropertySchema

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


class ApiRequestError(CatalogError):
    """Raised when the API answers with an error status or can't be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class PropertyApiClient:
    """
    Thin HTTP client for the catalog API.

    'session' can be any object with the requests.Session verbs (get, post, put,
    delete), which is how the tests plug in FastAPI's TestClient.
    """

    def __init__(self, base_url: str, session=None, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None):
        url = f"{self.base_url}{path}"
        kwargs: Dict[str, Any] = {"timeout": self.timeout}
        if payload is not None:
            kwargs["json"] = payload

        try:
            response = getattr(self.session, method)(url, **kwargs)
        except requests.RequestException as e:
            logger.error(f"{method.upper()} {url} failed: {e}")
            raise ApiRequestError(str(e)) from e

        if response.status_code >= 400:
            message = self._error_message(response)
            logger.error(f"{method.upper()} {url} answered {response.status_code}: {message}")
            raise ApiRequestError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"{method.upper()} {url} answered a body that is not JSON: {e}")
            raise ApiRequestError(f"Invalid response from the API: {e}", status_code=response.status_code) from e

    @staticmethod
    def _parse_property(item) -> PropertySchema:
        try:
            return PropertySchema.model_validate(item)
        except ValidationError as e:
            logger.error(f"The API returned a malformed property: {e}")
            raise ApiRequestError(f"Malformed property in the API response: {e}") from e

    @staticmethod
    def _error_message(response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or f"Request failed with status code {response.status_code}"
        if isinstance(body, dict):
            return str(body.get("detail") or body.get("message") or body)
        return str(body)

    def health(self) -> str:
        return self._request("get", "")["message"]

    def list_properties(self) -> List[PropertySchema]:
        return [self._parse_property(item) for item in self._request("get", "/properties")]

    def create_property(self, payload: Dict[str, Any]) -> PropertySchema:
        return self._parse_property(self._request("post", "/properties", payload))

    def update_property(self, property_id: str, changes: Dict[str, Any]) -> PropertySchema:
        return self._parse_property(self._request("put", f"/properties/{property_id}", changes))

    def update_status(self, property_id: str, status: str) -> PropertySchema:
        return self.update_property(property_id, {"status": status})

    def delete_property(self, property_id: str) -> str:
        return self._request("delete", f"/properties/{property_id}")["message"]
