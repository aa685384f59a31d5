from .input_source import InputSourcePort
from .provider_registry import ProviderResolverPort, RequestBuilderPort
from .result_handler import ResultHandlerPort
from .transport import ProbeTransportPort

__all__ = [
    "InputSourcePort",
    "ProbeTransportPort",
    "ProviderResolverPort",
    "RequestBuilderPort",
    "ResultHandlerPort",
]
