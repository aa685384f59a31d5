"""Load-time contract checks for provider descriptors."""

from __future__ import annotations

import re
from typing import Any

from hosterprobe.domain.entities import (
    CustomRequest,
    DefaultRequest,
    ProviderDescriptor,
    RequestTemplate,
)
from hosterprobe.domain.exceptions import ProviderValidationError


def validate_provider(provider: Any) -> ProviderDescriptor:
    """Check that ``provider`` satisfies the provider contract.

    A valid provider is a ``ProviderDescriptor`` with a non-empty name, a
    callable ``verify``, at least one host name or host pattern, and a
    well-formed request strategy.

    Raises:
        ProviderValidationError: On the first violated rule.
    """
    if not isinstance(provider, ProviderDescriptor):
        raise ProviderValidationError(
            f"Provider must be a ProviderDescriptor, got {type(provider).__name__}"
        )
    if not isinstance(provider.name, str) or not provider.name:
        raise ProviderValidationError("Provider must have a non-empty 'name'")
    if not callable(provider.verify):
        raise ProviderValidationError(
            f"Provider '{provider.name}' must have a callable 'verify'"
        )

    if not provider.host_names and not provider.host_patterns:
        raise ProviderValidationError(
            f"Provider '{provider.name}' must declare host_names or host_patterns"
        )
    if any(not isinstance(h, str) or not h for h in provider.host_names):
        raise ProviderValidationError(
            f"Provider '{provider.name}' has an empty or non-string host name"
        )
    if any(not isinstance(p, re.Pattern) for p in provider.host_patterns):
        raise ProviderValidationError(
            f"Provider '{provider.name}' host_patterns must be compiled regexes"
        )

    request = provider.request
    if isinstance(request, CustomRequest):
        if not callable(request.build):
            raise ProviderValidationError(
                f"Provider '{provider.name}' custom request builder is not callable"
            )
    elif isinstance(request, DefaultRequest):
        if not isinstance(request.template, RequestTemplate):
            raise ProviderValidationError(
                f"Provider '{provider.name}' default request needs a RequestTemplate"
            )
    else:
        raise ProviderValidationError(
            f"Provider '{provider.name}' request must be DefaultRequest or CustomRequest"
        )

    return provider
