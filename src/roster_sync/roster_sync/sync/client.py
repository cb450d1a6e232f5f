from __future__ import annotations

from typing import Any, Optional

import requests
from loguru import logger

from ..core.constants import DEFAULT_API_URL, DEFAULT_REQUEST_TIMEOUT
from ..settings.model import RemoteConfig


class ContentStoreClient:
    """Thin wrapper over the GitHub contents API.

    Returns raw `requests.Response` objects; status handling belongs to the callers
    (gateway, discovery, group settings sync), which each apply their own policy.
    """

    def __init__(
        self,
        *,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    def contents_url(self, config: RemoteConfig, path: str = "") -> str:
        return f"{self._api_url}/repos/{config.owner}/{config.repo}/contents/{path}"

    @staticmethod
    def _headers(config: RemoteConfig, *, json_body: bool = False) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github.v3+json"}
        if config.has_credential:
            headers["Authorization"] = f"token {config.token}"
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def get_file(self, config: RemoteConfig, path: str) -> requests.Response:
        url = self.contents_url(config, path)
        logger.debug(f"GET {url} ref={config.branch}")
        return self._session.get(
            url,
            params={"ref": config.branch},
            headers=self._headers(config),
            timeout=self._timeout,
        )

    def list_root(self, config: RemoteConfig) -> requests.Response:
        url = self.contents_url(config)
        logger.debug(f"GET {url}")
        return self._session.get(url, headers=self._headers(config), timeout=self._timeout)

    def put_file(
        self,
        config: RemoteConfig,
        path: str,
        *,
        content: str,
        message: str,
        sha: Optional[str] = None,
    ) -> requests.Response:
        body: dict[str, Any] = {"message": message, "content": content, "branch": config.branch}
        if sha:
            body["sha"] = sha
        url = self.contents_url(config, path)
        logger.debug(f"PUT {url} branch={config.branch} precondition={'yes' if sha else 'no'}")
        return self._session.put(
            url,
            json=body,
            headers=self._headers(config, json_body=True),
            timeout=self._timeout,
        )
