"""Client configuration for pysmartfarmer."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pysmartfarmer._constants import BASE_URL, DEFAULT_POLL_INTERVAL, DEFAULT_STALE_AFTER_FAILURES
from pysmartfarmer.exceptions import SmartFarmerConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_number(env_key: str, value: str, cast: type[int] | type[float]) -> int | float:
    try:
        return cast(value)
    except ValueError as exc:
        raise SmartFarmerConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class NodeConfig:
    """Dashboard configuration.

    Parameters
    ----------
    base_url : str
        Root URL of the edge node.  Defaults to the ESP32 soft-AP
        address.  A trailing slash is stripped.
    poll_interval : float
        Seconds between telemetry polls.  The first poll is issued
        immediately when polling starts.
    request_timeout : float or None
        Total timeout per HTTP request in seconds.  ``None`` disables
        the timeout, so a hung request simply never completes.
    discard_stale_responses : bool
        Drop responses that arrive after a newer response on the same
        channel has already been applied.  Disabled by default, which
        keeps last-arrived-wins behaviour.
    stale_after_failures : int
        Number of consecutive failed polls after which the link is
        reported as stale.
    """

    base_url: str = BASE_URL
    poll_interval: float = DEFAULT_POLL_INTERVAL
    request_timeout: float | None = None
    discard_stale_responses: bool = False
    stale_after_failures: int = DEFAULT_STALE_AFTER_FAILURES

    def __post_init__(self) -> None:
        base_url = self.base_url.strip().rstrip("/")
        if not base_url:
            raise SmartFarmerConfigError("base_url must be non-empty")
        object.__setattr__(self, "base_url", base_url)

        if self.poll_interval <= 0:
            raise SmartFarmerConfigError(f"poll_interval must be positive, got {self.poll_interval}")
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise SmartFarmerConfigError(f"request_timeout must be positive or None, got {self.request_timeout}")
        if self.stale_after_failures < 1:
            raise SmartFarmerConfigError(f"stale_after_failures must be >= 1, got {self.stale_after_failures}")

    @classmethod
    def from_env(cls, **overrides: Any) -> NodeConfig:
        """Create configuration from environment variables.

        Reads optional ``SMARTFARMER_*`` variables.  Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        NodeConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        base_url = env.get("SMARTFARMER_BASE_URL")
        if base_url is not None:
            config_kwargs["base_url"] = base_url

        interval_env = env.get("SMARTFARMER_POLL_INTERVAL")
        if interval_env is not None and "poll_interval" not in overrides:
            config_kwargs["poll_interval"] = _env_number("SMARTFARMER_POLL_INTERVAL", interval_env, float)

        # An empty value explicitly disables the timeout
        timeout_env = env.get("SMARTFARMER_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            config_kwargs["request_timeout"] = (
                _env_number("SMARTFARMER_REQUEST_TIMEOUT", timeout_env, float) if timeout_env.strip() else None
            )

        if "discard_stale_responses" not in overrides:
            config_kwargs["discard_stale_responses"] = _env_bool(
                env.get("SMARTFARMER_DISCARD_STALE_RESPONSES"),
                False,
            )

        stale_env = env.get("SMARTFARMER_STALE_AFTER_FAILURES")
        if stale_env is not None and "stale_after_failures" not in overrides:
            config_kwargs["stale_after_failures"] = _env_number("SMARTFARMER_STALE_AFTER_FAILURES", stale_env, int)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
