"""Contract violations.

These are programmer errors, not outcomes. Each stoprule emits an anomaly
receipt and then raises; nothing in the library catches them.

Registry and query call sites pass the registry's tenant_id. Identity,
Timeline and Friend carry no tenant, so violations raised directly on them
are reported under DEFAULT_TENANT.
"""
from .constants import DEFAULT_TENANT
from .receipt import StopRule, emit_receipt


class UninitializedObjectError(StopRule):
    """An identity or link was used before it was initialized."""
    pass


class RequiredValueError(StopRule, ValueError):
    """A required argument was None or empty."""
    pass


def stoprule_uninitialized(entity: str, action: str,
                           tenant_id: str = DEFAULT_TENANT) -> None:
    """Emit anomaly receipt and raise UninitializedObjectError.

    Args:
        entity: Kind of object that was not initialized ("identity", "link")
        action: What the caller tried to do with it
        tenant_id: Tenant ID for the receipt

    Raises:
        UninitializedObjectError: Always raised after emitting anomaly receipt
    """
    emit_receipt("anomaly", {
        "tenant_id": tenant_id,
        "metric": f"{entity}_initialized",
        "classification": "violation",
        "action": "halt",
        "attempted": action,
    })
    raise UninitializedObjectError(f"Cannot {action} of an invalid {entity}")


def stoprule_required(name: str, tenant_id: str = DEFAULT_TENANT) -> None:
    """Emit anomaly receipt and raise RequiredValueError.

    Args:
        name: Name of the missing argument
        tenant_id: Tenant ID for the receipt

    Raises:
        RequiredValueError: Always raised after emitting anomaly receipt
    """
    emit_receipt("anomaly", {
        "tenant_id": tenant_id,
        "metric": "required_value",
        "classification": "violation",
        "action": "halt",
        "argument": name,
    })
    raise RequiredValueError(f"Required value missing: {name}")
