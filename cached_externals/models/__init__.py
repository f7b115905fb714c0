"""Data models for cached-externals"""

from .external import ExternalModule, ExternalState
from .config import ExternalsConfig
from .result import (
    OperationStatus,
    ErrorDetail,
    Result,
    ExternalResult,
    ExternalsResult,
)

__all__ = [
    # External models
    "ExternalModule",
    "ExternalState",

    # Config models
    "ExternalsConfig",

    # Result models
    "OperationStatus",
    "ErrorDetail",
    "Result",
    "ExternalResult",
    "ExternalsResult",
]
