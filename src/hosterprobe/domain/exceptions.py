"""Exception hierarchy for hosterprobe."""

from __future__ import annotations


class HosterProbeError(Exception):
    """Base class for all hosterprobe errors."""


class PluginError(HosterProbeError):
    """Base class for provider plugin errors."""


class ProviderValidationError(PluginError):
    """Raised when a provider descriptor does not satisfy the plugin contract."""


class DuplicateProviderError(PluginError):
    """Raised when two providers are registered under the same name."""


class InputSourceError(HosterProbeError):
    """Raised when the input source cannot produce a batch of links."""


class ResultHandlerError(HosterProbeError):
    """Raised by a result handler when an outcome cannot be delivered."""
