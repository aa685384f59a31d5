from .batch_runner import BatchReport, BatchRunner, to_record
from .pipeline import NO_SUPPORT_MESSAGE, REDIRECT_LIMIT_MESSAGE, VerificationPipeline
from .unsupported_services import BatchSummary, UnsupportedServiceTracker

__all__ = [
    "NO_SUPPORT_MESSAGE",
    "REDIRECT_LIMIT_MESSAGE",
    "BatchReport",
    "BatchRunner",
    "BatchSummary",
    "UnsupportedServiceTracker",
    "VerificationPipeline",
    "to_record",
]
