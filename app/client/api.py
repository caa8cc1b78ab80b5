from typing import Any, Dict, List, Optional

import requests

from app.core.config import ClientSettings
from app.logger_config import logger


class InventoryApiError(Exception):
    """The items API answered with an error status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class InventoryApi:
    """
    Thin wrapper over the items REST API.

    `session` is anything exposing requests-style get/post/put/delete
    (a `requests.Session`, or a test client).
    """

    def __init__(self, base_url: Optional[str] = None, session=None, timeout: Optional[float] = None):
        settings = ClientSettings()
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout if timeout is not None else settings.API_TIMEOUT_SECONDS

    def _check(self, response, fallback: str):
        if response.status_code >= 400:
            try:
                message = response.json().get("error") or fallback
            except ValueError:
                message = fallback
            logger.warning(f"API error {response.status_code}: {message}")
            raise InventoryApiError(message, response.status_code)
        return response

    def list_items(self, query: str = "") -> List[Dict[str, Any]]:
        params = {"q": query} if query else None
        response = self.session.get(f"{self.base_url}/items", params=params, timeout=self.timeout)
        return self._check(response, "Failed to fetch inventory data.").json()

    def create_item(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        response = self.session.post(f"{self.base_url}/items", json=payload, timeout=self.timeout)
        return self._check(response, "Failed to save item.").json()

    def update_item(self, item_id: int, payload: Dict[str, Any], fallback: str = "Failed to save item.") -> Dict[str, Any]:
        response = self.session.put(f"{self.base_url}/items/{item_id}", json=payload, timeout=self.timeout)
        return self._check(response, fallback).json()

    def delete_item(self, item_id: int) -> None:
        response = self.session.delete(f"{self.base_url}/items/{item_id}", timeout=self.timeout)
        self._check(response, "Failed to delete item.")

    def health(self) -> Dict[str, Any]:
        response = self.session.get(f"{self.base_url}/health", timeout=self.timeout)
        return self._check(response, "Service unavailable.").json()
