"""Context variables for structured logging."""

from contextvars import ContextVar
from typing import Dict, Optional

_execution_id: ContextVar[str] = ContextVar("execution_id", default="")
_node_name: ContextVar[str] = ContextVar("node_name", default="")
_resource: ContextVar[str] = ContextVar("resource", default="")
_operation: ContextVar[str] = ContextVar("operation", default="")
_item_index: ContextVar[Optional[int]] = ContextVar("item_index", default=None)


def set_log_context(
    execution_id: Optional[str] = None,
    node_name: Optional[str] = None,
    resource: Optional[str] = None,
    operation: Optional[str] = None,
    item_index: Optional[int] = None,
) -> None:
    if execution_id is not None:
        _execution_id.set(execution_id)
    if node_name is not None:
        _node_name.set(node_name)
    if resource is not None:
        _resource.set(resource)
    if operation is not None:
        _operation.set(operation)
    if item_index is not None:
        _item_index.set(item_index)


def get_log_context() -> Dict[str, object]:
    return {
        "execution_id": _execution_id.get(),
        "node_name": _node_name.get(),
        "resource": _resource.get(),
        "operation": _operation.get(),
        "item_index": _item_index.get(),
    }


def clear_log_context() -> None:
    _execution_id.set("")
    _node_name.set("")
    _resource.set("")
    _operation.set("")
    _item_index.set(None)


def restore_log_context(snapshot: Dict[str, object]) -> None:
    """Restore a snapshot taken with get_log_context(), including unset fields."""
    _execution_id.set(snapshot.get("execution_id") or "")
    _node_name.set(snapshot.get("node_name") or "")
    _resource.set(snapshot.get("resource") or "")
    _operation.set(snapshot.get("operation") or "")
    _item_index.set(snapshot.get("item_index"))
