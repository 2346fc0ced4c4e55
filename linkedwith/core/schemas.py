"""Receipt schema definitions and validation.

Constants:
    RECEIPT_SCHEMAS: Schema dicts keyed by receipt_type
    REQUIRED_FIELDS: Fields required in all receipts

Functions:
    validate_receipt: Validate receipt against schema
"""
from .receipt import StopRule


# Required fields for all receipt types
REQUIRED_FIELDS = ["receipt_type", "ts", "tenant_id", "payload_hash"]


RECEIPT_SCHEMAS = {
    "identity_added": {
        "receipt_type": str,
        "ts": str,
        "tenant_id": str,
        "payload_hash": str,
        "identity_id": str,
    },
    "link_event": {
        "receipt_type": str,
        "ts": str,
        "tenant_id": str,
        "payload_hash": str,
        "action": str,  # assign | establish | tear_down
        "ids": list,
        "date": (str, type(None)),
        "status": str,
    },
    "graph_query": {
        "receipt_type": str,
        "ts": str,
        "tenant_id": str,
        "payload_hash": str,
        "query_type": str,  # neighborhood | trend
        "origin_id": str,
        "status": str,
        "result_size": int,
        "elapsed_ms": float,
    },
    "graph_slo_violation": {
        "receipt_type": str,
        "ts": str,
        "tenant_id": str,
        "payload_hash": str,
        "query_type": str,
        "elapsed_ms": float,
        "slo_ms": int,
    },
    "anomaly": {
        "receipt_type": str,
        "ts": str,
        "tenant_id": str,
        "payload_hash": str,
        "metric": str,
        "classification": str,
        "action": str,
    },
}


def validate_receipt(receipt: dict) -> bool:
    """Validate receipt has required fields and matches schema.

    Args:
        receipt: Receipt dict to validate

    Returns:
        True if valid

    Raises:
        StopRule: If validation fails (missing field, wrong type or unknown
            receipt_type)
    """
    if not isinstance(receipt, dict):
        raise StopRule("Receipt must be a dict")

    for field in REQUIRED_FIELDS:
        if field not in receipt:
            raise StopRule(f"Missing required field: {field}")

    receipt_type = receipt["receipt_type"]
    if receipt_type not in RECEIPT_SCHEMAS:
        raise StopRule(f"Unknown receipt_type: {receipt_type}")

    for field, expected in RECEIPT_SCHEMAS[receipt_type].items():
        if field not in receipt:
            raise StopRule(f"Missing {receipt_type} field: {field}")
        if not isinstance(receipt[field], expected):
            raise StopRule(f"Field {field} has type {type(receipt[field]).__name__}")

    return True
