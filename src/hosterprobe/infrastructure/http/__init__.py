from __future__ import annotations

from .transport import HttpxProbeTransport

__all__ = ["HttpxProbeTransport"]
