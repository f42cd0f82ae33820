"""State layer.

This package owns the only mutable data of the dashboard: the latest
telemetry snapshot, the local pump intent and the rendered view.  The
poller and the pump controller write to it exclusively through
:class:`pysmartfarmer.state.store.DashboardState`.
"""
