from dataclasses import dataclass
from typing import Any, Optional

import requests

from .errors import parse_error_response


@dataclass
class ApiResult:
    data: Optional[Any]
    error: Optional[str]
    status_code: Optional[int]


class ApiClient:
    def __init__(self, base_url: str, timeout: int = 2):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _send(self, path: str, params: Optional[dict]):
        url = f"{self.base_url}{path}"
        try:
            resp = requests.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            return None, ApiResult(data=None, error=f"Could not reach the backend: {exc}", status_code=None)

        if resp.status_code >= 500:
            detail = parse_error_response(resp, "Backend internal error.")
            return None, ApiResult(data=None, error=detail, status_code=resp.status_code)

        if resp.status_code != 200:
            return None, ApiResult(data=None, error=None, status_code=resp.status_code)

        return resp, None

    def get(self, path: str, params: Optional[dict] = None) -> ApiResult:
        resp, failure = self._send(path, params)
        if failure is not None:
            return failure

        try:
            data = resp.json()
        except ValueError:
            return ApiResult(data=None, error="Invalid response from the backend.", status_code=resp.status_code)

        return ApiResult(data=data, error=None, status_code=resp.status_code)

    def get_bytes(self, path: str, params: Optional[dict] = None) -> ApiResult:
        resp, failure = self._send(path, params)
        if failure is not None:
            return failure
        return ApiResult(data=resp.content, error=None, status_code=resp.status_code)
