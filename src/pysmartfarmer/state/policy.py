"""Response ordering policy.

Requests on a channel are numbered in issue order.  Responses are applied
in arrival order unless stale discarding is enabled, in which case a
response that is not newer than the last applied one is dropped.
"""

from __future__ import annotations


def should_apply_response(
    *,
    sequence: int,
    last_applied: int | None,
    discard_stale: bool,
) -> bool:
    """Decide whether a response with *sequence* may be applied."""
    if not discard_stale or last_applied is None:
        return True
    return sequence > last_applied
