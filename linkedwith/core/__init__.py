"""Core subpackage for LinkedWith primitives.

Exports receipts, schemas, outcome values and contract-violation errors.
"""
from .receipt import dual_hash, emit_receipt, StopRule
from .schemas import RECEIPT_SCHEMAS, REQUIRED_FIELDS, validate_receipt
from .status import Outcome, StatusCode
from .errors import (
    RequiredValueError,
    UninitializedObjectError,
    stoprule_required,
    stoprule_uninitialized,
)

__all__ = [
    # Receipt primitives
    "dual_hash",
    "emit_receipt",
    "StopRule",
    # Schemas
    "RECEIPT_SCHEMAS",
    "REQUIRED_FIELDS",
    "validate_receipt",
    # Outcomes
    "Outcome",
    "StatusCode",
    # Errors
    "RequiredValueError",
    "UninitializedObjectError",
    "stoprule_required",
    "stoprule_uninitialized",
]
