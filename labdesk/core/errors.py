# labdesk/core/errors.py
#
# Service-layer exceptions. Routers map them onto HTTP status codes
# (see labdesk.api.deps.to_http).


class NotFoundError(LookupError):
    """Row does not exist (404)."""


class ConflictError(ValueError):
    """Illegal state transition or clash with existing rows (409)."""
