"""HTTP transport for the edge node's JSON API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pysmartfarmer._constants import USER_AGENT
from pysmartfarmer.config import NodeConfig
from pysmartfarmer.exceptions import SmartFarmerTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, endpoint: str) -> Any:
        ...

    async def post_form(self, endpoint: str, form: Mapping[str, str]) -> Any:
        ...


class HttpTransport:
    """Plain HTTP transport against the node's local web server."""

    def __init__(self, config: NodeConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def get_json(self, endpoint: str) -> Any:
        """GET *endpoint* and return the decoded JSON body."""
        return await self._request("GET", endpoint)

    async def post_form(self, endpoint: str, form: Mapping[str, str]) -> Any:
        """POST *form* url-encoded to *endpoint* and return the decoded JSON body."""
        return await self._request("POST", endpoint, form=form)

    async def _request(self, method: str, endpoint: str, *, form: Mapping[str, str] | None = None) -> Any:
        url = f"{self._config.base_url}{endpoint}"
        headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }

        _logger.debug("%s %s", method, url)

        try:
            async with self._http.request(
                method,
                url,
                data=dict(form) if form is not None else None,
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                body = await resp.read()
                if not 200 <= resp.status < 300:
                    raise SmartFarmerTransportError(
                        f"HTTP {resp.status} from {endpoint}: {body[:200].decode('utf-8', 'replace')}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except SmartFarmerTransportError:
            raise
        except TimeoutError as exc:
            raise SmartFarmerTransportError(
                f"Request to {endpoint} timed out",
                endpoint=endpoint,
            ) from exc
        except aiohttp.ClientError as exc:
            raise SmartFarmerTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        # UnicodeDecodeError and JSONDecodeError are both ValueError.
        try:
            return json.loads(body.decode("utf-8"))
        except (ValueError, RecursionError) as exc:
            raise SmartFarmerTransportError(
                f"Invalid JSON from {endpoint}: {body[:200].decode('utf-8', 'replace')}",
                endpoint=endpoint,
            ) from exc
