__version__ = "0.1.0"

__all__ = [
    # Configuration
    "Settings",
    # Errors
    "EpigraphError",
    "MetadataValidationError",
    "MissingParameterError",
    "SerializationError",
    # Action metadata
    "ACTION_PATH",
    "ActionDescriptor",
    "ActionSpec",
    "ParamSpec",
    "describe",
    "validate_metadata",
    # Transaction request
    "ExecutionResponse",
    "build_and_serialize",
    "message_offset",
    "optimized_timestamp",
    # Wire encoding
    "CallSpecification",
    "TransferSpecification",
    "DecodedTransaction",
    "serialize_transaction",
    "deserialize_transaction",
]

from .errors import (
    EpigraphError,
    MetadataValidationError,
    MissingParameterError,
    SerializationError,
)
from .settings import Settings
from .spec.models import ActionDescriptor, ActionSpec, ParamSpec
from .spec.metadata import ACTION_PATH, describe, validate_metadata
from .handler import ExecutionResponse, build_and_serialize, message_offset, optimized_timestamp
from .pneuma.tx import CallSpecification, TransferSpecification
from .pneuma.serialize import DecodedTransaction, deserialize_transaction, serialize_transaction
