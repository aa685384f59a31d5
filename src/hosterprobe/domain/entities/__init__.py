from .attempt import AttemptContext
from .link import LinkBatch, LinkRecord
from .outcome import LinkOutcome
from .provider import (
    CustomRequest,
    DefaultRequest,
    ProviderDescriptor,
    Redirect,
    RequestStrategy,
    RequestTemplate,
    Verdict,
    VerifyResult,
)
from .request import ProxyEndpoint, RequestSpec

__all__ = [
    "AttemptContext",
    "CustomRequest",
    "DefaultRequest",
    "LinkBatch",
    "LinkOutcome",
    "LinkRecord",
    "ProviderDescriptor",
    "ProxyEndpoint",
    "Redirect",
    "RequestSpec",
    "RequestStrategy",
    "RequestTemplate",
    "Verdict",
    "VerifyResult",
]
