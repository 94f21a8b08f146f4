from . import models, safety
from .config_types import SigningIdentity
from .errors import (
    ConfigError,
    FatalError,
    InvalidTransition,
    NetworkProtocolError,
    ResignTransactionError,
    SubmissionError,
    SubmitterError,
)

__all__ = [
    "models",
    "safety",
    "SigningIdentity",
    "ConfigError",
    "FatalError",
    "InvalidTransition",
    "NetworkProtocolError",
    "ResignTransactionError",
    "SubmissionError",
    "SubmitterError",
]
