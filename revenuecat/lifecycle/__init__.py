from revenuecat.lifecycle.observability import (
    enable_tracing,
    disable_tracing,
    RequestEvent,
    add_listener,
    remove_listener,
    get_events,
    clear_events,
    track_request,
)

__all__ = [
    "enable_tracing",
    "disable_tracing",
    "RequestEvent",
    "add_listener",
    "remove_listener",
    "get_events",
    "clear_events",
    "track_request",
]
