# =============================================================================
# core/errors.py  —  Failure types raised by the Openverse client
# =============================================================================
#
# Two things can go wrong when we talk to Openverse:
#   - it answers, but not with a 2xx        → UpstreamError
#   - we never get a usable answer at all   → TransportError
# A 2xx whose body isn't JSON is reported as ResponseDecodeError.
#
# The tools/ layer catches OpenverseError (the common base) and turns it
# into an {"error": ...} payload.  Nothing here knows about MCP.
# =============================================================================


class OpenverseError(Exception):
    """Base class for every failure talking to the Openverse API."""


class UpstreamError(OpenverseError):
    """Openverse responded with a non-success HTTP status."""

    def __init__(self, status_code: int, reason: str = ""):
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"{status_code} {reason}".strip())


class TransportError(OpenverseError):
    """The request never completed (DNS, timeout, connection reset, ...)."""


class ResponseDecodeError(OpenverseError):
    """Openverse returned a success status with a body that isn't JSON."""
