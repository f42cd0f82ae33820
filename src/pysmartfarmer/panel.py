"""High-level async dashboard for a SmartFarmer edge node."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable
from typing import Any

import aiohttp

from pysmartfarmer._tasks import RequestTracker
from pysmartfarmer._transport import HttpTransport, Transport
from pysmartfarmer.actuator import PumpController
from pysmartfarmer.config import NodeConfig
from pysmartfarmer.exceptions import SmartFarmerError
from pysmartfarmer.models.telemetry import TelemetrySnapshot
from pysmartfarmer.models.view import DashboardView
from pysmartfarmer.poller import ErrorCallback, TelemetryPoller
from pysmartfarmer.render import render_dashboard
from pysmartfarmer.state.store import DashboardState

_logger = logging.getLogger(__name__)


class DashboardPanel:
    """Polls a node, keeps its rendered view current and drives its pump.

    Usage::

        async with DashboardPanel(config, on_render=print) as panel:
            panel.start()
            ...
            await panel.toggle_pump()
    """

    def __init__(
        self,
        config: NodeConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        on_render: Callable[[DashboardView], None] | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._external_transport = transport is not None
        self._on_render = on_render
        self._on_error = on_error
        self._state = DashboardState.from_config(config)
        self._tracker = RequestTracker()
        self._poller: TelemetryPoller | None = None
        self._pump: PumpController | None = None
        self._poll_task: asyncio.Task[None] | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> DashboardPanel:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._http_session)
        self._poller = TelemetryPoller(
            self._transport,
            self._state,
            self._render,
            interval=self._config.poll_interval,
            tracker=self._tracker,
            on_error=self._on_error,
        )
        self._pump = PumpController(
            self._transport,
            self._state,
            self._render,
            tracker=self._tracker,
            on_error=self._on_error,
        )
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None
        self._poller = None
        self._pump = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def config(self) -> NodeConfig:
        return self._config

    @property
    def state(self) -> DashboardState:
        return self._state

    @property
    def view(self) -> DashboardView:
        """The last rendered view, or the initial placeholder view."""
        if self._state.view is None:
            return render_dashboard(self._state.snapshot, self._state.pump_intent)
        return self._state.view

    @property
    def tracker(self) -> RequestTracker:
        return self._tracker

    def _render(self) -> DashboardView:
        view = render_dashboard(self._state.snapshot, self._state.pump_intent)
        self._state.view = view
        if self._on_render is not None:
            try:
                self._on_render(view)
            except Exception:
                _logger.debug("on_render callback failed", exc_info=True)
        return view

    def _require_poller(self) -> TelemetryPoller:
        if self._poller is None:
            raise SmartFarmerError("Panel not initialized. Use 'async with DashboardPanel(...) as panel:'")
        return self._poller

    def _require_pump(self) -> PumpController:
        if self._pump is None:
            raise SmartFarmerError("Panel not initialized. Use 'async with DashboardPanel(...) as panel:'")
        return self._pump

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------

    @property
    def is_polling(self) -> bool:
        return self._poll_task is not None and not self._poll_task.done()

    def start(self) -> None:
        """Start the background poll loop; the first poll fires immediately."""
        poller = self._require_poller()
        if self.is_polling:
            return
        self._poll_task = asyncio.get_running_loop().create_task(poller.run(), name="pysmartfarmer-poll-loop")

    async def stop(self) -> None:
        """Stop polling and cancel every outstanding request."""
        task = self._poll_task
        self._poll_task = None
        if task is not None:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._tracker.cancel_all()
        await self._tracker.drain()

    async def refresh(self) -> TelemetrySnapshot | None:
        """Poll once and wait for the result."""
        return await self._require_poller().poll_once()

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------

    def toggle_pump(self) -> asyncio.Task[bool | None]:
        """Optimistically flip the pump and send the request.

        The view is updated before this returns.  Await the returned task
        to wait for the node's reply.
        """
        return self._require_pump().toggle()
