"""HTTP layer — the request dispatcher and static file responses."""

from flowerstall.routes.assets import asset_response, check_readable, content_type_for
from flowerstall.routes.dispatcher import RequestDispatcher

__all__ = [
    "RequestDispatcher",
    "asset_response",
    "check_readable",
    "content_type_for",
]
