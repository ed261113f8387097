"""HTTP clients for the boxes API and the external image upload endpoint."""

from __future__ import annotations

from typing import Any, List, Optional

import requests
from pydantic import ValidationError

from boxtracker.client.state import PendingImage
from boxtracker.infra.logging_config import get_logger
from boxtracker.schemas.box import TOGGLE_HIDDEN_ACTION, BoxRead

logger = get_logger("client.api")

BOXES_PATH = "/api/boxes"
TIMEOUT_SECONDS = 30


class BoxesApiError(Exception):
    """Transport failure or non-2xx answer from the boxes API."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _parse_box(data: Any) -> BoxRead:
    try:
        return BoxRead.model_validate(data)
    except ValidationError as e:
        raise BoxesApiError(f"Malformed box in response: {e}") from e


class BoxesApiClient:
    """Thin wrapper over /api/boxes. `session` may be any requests-compatible client."""

    def __init__(
        self,
        base_url: str,
        session: Optional[Any] = None,
        timeout: float = TIMEOUT_SECONDS,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}{BOXES_PATH}"
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise BoxesApiError(str(e)) from e

        try:
            data = resp.json()
        except ValueError as e:
            raise BoxesApiError(
                f"Invalid JSON from {method} {url}", resp.status_code
            ) from e

        if resp.status_code >= 400:
            message = data.get("error") if isinstance(data, dict) else None
            raise BoxesApiError(
                message or f"HTTP {resp.status_code}", resp.status_code
            )
        return data

    def list_boxes(self, include_hidden: bool = True) -> List[BoxRead]:
        data = self._request(
            "GET", params={"includeHidden": "true" if include_hidden else "false"}
        )
        if not isinstance(data, list):
            raise BoxesApiError(f"Expected a list of boxes, got {type(data).__name__}")
        return [_parse_box(item) for item in data]

    def create_box(
        self,
        number: int,
        room: str,
        contents: str,
        image_url: Optional[str] = None,
    ) -> BoxRead:
        data = self._request(
            "POST",
            json={
                "number": number,
                "room": room,
                "contents": contents,
                "image_url": image_url,
            },
        )
        return _parse_box(data)

    def update_box(
        self,
        box_id: int,
        room: str,
        contents: str,
        image_url: Optional[str] = None,
    ) -> BoxRead:
        data = self._request(
            "PUT",
            json={
                "id": box_id,
                "room": room,
                "contents": contents,
                "image_url": image_url,
            },
        )
        return _parse_box(data)

    def set_hidden(self, box_id: int, hidden: bool) -> BoxRead:
        data = self._request(
            "PUT",
            json={"action": TOGGLE_HIDDEN_ACTION, "id": box_id, "hidden": hidden},
        )
        return _parse_box(data)

    def delete_box(self, box_id: int) -> None:
        self._request("DELETE", json={"id": box_id})


class ImageUploader:
    """Posts a photo as multipart field `file`; the endpoint answers {"url": ...}."""

    def __init__(
        self,
        upload_url: str,
        session: Optional[Any] = None,
        timeout: float = TIMEOUT_SECONDS,
    ) -> None:
        self.upload_url = upload_url
        self.session = session or requests.Session()
        self.timeout = timeout

    def upload(self, image: PendingImage) -> Optional[str]:
        """Return the stored photo URL, or None when the upload did not succeed."""
        files = {"file": (image.filename, image.content, image.content_type)}
        try:
            resp = self.session.post(self.upload_url, files=files, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("Error uploading image %s: %s", image.filename, e)
            return None

        if resp.status_code >= 400:
            logger.error(
                "Upload of %s failed with HTTP %s", image.filename, resp.status_code
            )
            return None

        try:
            data = resp.json()
        except ValueError as e:
            logger.error("Upload of %s returned invalid JSON: %s", image.filename, e)
            return None
        url = data.get("url") if isinstance(data, dict) else None
        return url or None
