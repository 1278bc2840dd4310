"""HTTP access to the Artifactory REST API."""

from __future__ import annotations

import itertools
import re
import time
from typing import Any

import requests

ENDPOINT_PATH = "artifactory/api/replications/"

_MERGE_ERROR = re.compile(r"Could not merge and save new descriptor")


class ApiError(Exception):
    """A request to Artifactory failed or returned an error status."""

    def __init__(self, message: str, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def is_merge_error(response: requests.Response | None) -> bool:
    """Tell whether a response reports a failed configuration descriptor merge."""
    if response is None:
        return False
    return bool(_MERGE_ERROR.search(response.text or ""))


class ArtifactoryClient:
    """A thin JSON client bound to one Artifactory base URL."""

    max_retries = 5
    retry_wait = 0.5

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") + "/"
        self.session = session if session is not None else requests.Session()
        self.session.headers["Accept"] = "application/json"
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def _url(self, path: str) -> str:
        return self.base_url + path.lstrip("/")

    def _request(
        self,
        method: str,
        path: str,
        body: Any = None,
        retry_on_merge: bool = False,
    ) -> requests.Response:
        url = self._url(path)
        for attempt in itertools.count():
            try:
                response = self.session.request(method, url, json=body)
            except requests.RequestException as exc:
                raise ApiError(f"{method} {url} failed: {exc}") from exc
            if retry_on_merge and attempt < self.max_retries and is_merge_error(response):
                time.sleep(self.retry_wait)
                continue
            break
        if response.status_code >= 400:
            raise ApiError(
                f"{method} {url} failed with status {response.status_code}: {response.text}",
                response.status_code,
                response.text,
            )
        return response

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(
                f"invalid JSON in response: {exc}", response.status_code, response.text
            ) from exc

    def get(self, path: str) -> Any:
        """GET a path and return the decoded JSON body, or None if it is empty."""
        return self._decode(self._request("GET", path))

    def put(self, path: str, body: Any, retry_on_merge: bool = False) -> Any:
        """PUT a JSON body and return the decoded response body."""
        return self._decode(self._request("PUT", path, body, retry_on_merge))

    def post(self, path: str, body: Any, retry_on_merge: bool = False) -> Any:
        """POST a JSON body and return the decoded response body."""
        return self._decode(self._request("POST", path, body, retry_on_merge))

    def delete(self, path: str, retry_on_merge: bool = False) -> None:
        """DELETE a path."""
        self._request("DELETE", path, retry_on_merge=retry_on_merge)

    def head(self, path: str) -> int:
        """HEAD a path and return the status code."""
        return self._request("HEAD", path).status_code

    def replication_exists(self, repo_key: str) -> bool:
        """Tell whether a replication configuration exists for a repository."""
        try:
            self.head(ENDPOINT_PATH + repo_key)
        except ApiError:
            return False
        return True