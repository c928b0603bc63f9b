"""
Template provisioning — error types.

Remote failures are never wrapped: whatever botocore raised while talking to
MediaConvert reaches the caller untouched.  ``RemoteServiceError`` only names
that family so callers can write a single ``except`` clause for it.

The local exceptions below use preset messages so that callers never need to
compose them at the raise site.
"""
from botocore.exceptions import BotoCoreError, ClientError

RemoteServiceError = (ClientError, BotoCoreError)


class TemplateProvisioningError(Exception):
    """Base class for errors raised by this service itself."""


# ── Endpoint ─────────────────────────────────────────────────────────────────

class EndpointNotFound(TemplateProvisioningError):
    def __init__(self) -> None:
        super().__init__("MediaConvert returned no account endpoints.")


# ── Custom resource ──────────────────────────────────────────────────────────

class UnknownRequestType(TemplateProvisioningError):
    def __init__(self, request_type: str) -> None:
        super().__init__(f"Unsupported custom resource request type: {request_type}.")
        self.request_type = request_type
