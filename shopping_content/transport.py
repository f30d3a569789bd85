"""HTTP transport on top of requests."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

import requests

from .errors import TransportError

logger = logging.getLogger(__name__)

USER_AGENT = "scapi-python"
ATOM_CONTENT_TYPE = "application/atom+xml"


@dataclass(frozen=True)
class Response:
    code: int
    content_type: str
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.code < 300


class HttpTransport:
    """Issues blocking requests; one attempt per call, never retried."""

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = 30):
        self.session = session or requests.Session()
        self.timeout = timeout

    def _headers(self, auth: Optional[str], content_type: Optional[str] = None) -> Dict[str, str]:
        headers = {"User-Agent": USER_AGENT}
        if content_type:
            headers["Content-Type"] = content_type
        if auth:
            headers["Authorization"] = auth
        return headers

    def _send(self, method: str, uri: str, headers: Mapping[str, str], **kwargs) -> Response:
        logger.debug("%s %s", method, uri)
        try:
            resp = self.session.request(
                method,
                uri,
                headers=dict(headers),
                timeout=self.timeout,
                allow_redirects=True,
                **kwargs,
            )
        except requests.exceptions.Timeout as exc:
            logger.error("%s %s timed out", method, uri)
            raise TransportError(f"Request timed out: {method} {uri}") from exc
        except requests.exceptions.RequestException as exc:
            logger.error("%s %s failed: %s", method, uri, exc)
            raise TransportError(f"Request failed: {method} {uri}: {exc}") from exc

        response = Response(
            code=resp.status_code,
            content_type=resp.headers.get("Content-Type", ""),
            body=resp.text,
        )
        if not response.ok:
            logger.warning("%s %s returned HTTP %s", method, uri, response.code)
        else:
            logger.debug("%s %s returned HTTP %s", method, uri, response.code)
        return response

    def get(self, uri: str, auth: Optional[str]) -> Response:
        return self._send("GET", uri, self._headers(auth))

    def post(self, uri: str, body: str, auth: Optional[str]) -> Response:
        return self._send("POST", uri, self._headers(auth, ATOM_CONTENT_TYPE), data=body.encode("utf-8"))

    def put(self, uri: str, body: str, auth: Optional[str]) -> Response:
        return self._send("PUT", uri, self._headers(auth, ATOM_CONTENT_TYPE), data=body.encode("utf-8"))

    def delete(self, uri: str, auth: Optional[str]) -> Response:
        return self._send("DELETE", uri, self._headers(auth))

    def post_form(self, uri: str, fields: Mapping[str, str]) -> Response:
        return self._send("POST", uri, self._headers(None), data=dict(fields))
