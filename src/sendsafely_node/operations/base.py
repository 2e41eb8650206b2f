"""Resource and operation names and the operation handler registry."""

import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

from core.errors.exceptions import UnsupportedOperationError
from sendsafely_node.context import ItemContext
from sendsafely_node.host import ExecutionItem

logger = logging.getLogger(__name__)


class Resource(str, Enum):
    PACKAGE = "package"
    FILE = "file"
    RECIPIENT = "recipient"


class PackageOperation(str, Enum):
    CREATE = "create"
    GET = "get"
    FINALIZE = "finalize"
    DELETE = "delete"
    LIST = "list"
    UPDATE = "update"


class FileOperation(str, Enum):
    UPLOAD = "upload"
    DOWNLOAD = "download"
    DELETE = "delete"
    LIST = "list"


class RecipientOperation(str, Enum):
    ADD = "add"
    ADD_MULTIPLE = "addMultiple"
    REMOVE = "remove"
    LIST = "list"


OPERATIONS_BY_RESOURCE: dict[Resource, type[Enum]] = {
    Resource.PACKAGE: PackageOperation,
    Resource.FILE: FileOperation,
    Resource.RECIPIENT: RecipientOperation,
}

# A handler returns one mapping, a list of mappings, or a prebuilt output item
HandlerResult = dict[str, Any] | list[dict[str, Any]] | ExecutionItem
OperationHandler = Callable[[ItemContext], Awaitable[HandlerResult]]

# Module-level handler registry
_HANDLERS: dict[tuple[Resource, str], OperationHandler] = {}


def register_operation(resource: Resource, operation: Enum):
    """Decorator to register a handler coroutine for one resource operation."""

    def decorator(fn: OperationHandler) -> OperationHandler:
        key = (resource, operation.value)
        if key in _HANDLERS:
            logger.warning(
                "Overwriting operation registration",
                extra={
                    "resource": resource.value,
                    "sdk_call": operation.value,
                    "old_handler": _HANDLERS[key].__name__,
                    "new_handler": fn.__name__,
                },
            )
        _HANDLERS[key] = fn
        return fn

    return decorator


def resolve_resource(name: str) -> Resource:
    """
    Map a resource name to its enum member.

    Raises:
        UnsupportedOperationError: For an unknown resource name
    """
    try:
        return Resource(name)
    except ValueError:
        raise UnsupportedOperationError(str(name)) from None


def get_handler(resource: str, operation: str) -> OperationHandler:
    """
    Look up the handler for a (resource, operation) pair.

    Raises:
        UnsupportedOperationError: Naming the unknown resource or operation
    """
    resolved = resolve_resource(resource)
    handler = _HANDLERS.get((resolved, operation))
    if handler is None:
        raise UnsupportedOperationError(resolved.value, str(operation))
    return handler


def get_registered_operations() -> dict[str, list[str]]:
    registered: dict[str, list[str]] = {}
    for resource, operation in _HANDLERS:
        registered.setdefault(resource.value, []).append(operation)
    return registered


def assert_registry_complete() -> None:
    """
    Check that every declared operation has a handler and nothing else does.

    Raises:
        RuntimeError: Listing missing or unexpected registrations
    """
    expected = {
        (resource, operation.value)
        for resource, operations in OPERATIONS_BY_RESOURCE.items()
        for operation in operations
    }
    registered = set(_HANDLERS)
    missing = sorted(f"{r.value}.{o}" for r, o in expected - registered)
    unexpected = sorted(f"{r.value}.{o}" for r, o in registered - expected)
    if missing or unexpected:
        raise RuntimeError(
            f"Operation registry mismatch (missing: {missing or 'none'}, "
            f"unexpected: {unexpected or 'none'})"
        )


__all__ = [
    "FileOperation",
    "HandlerResult",
    "OPERATIONS_BY_RESOURCE",
    "OperationHandler",
    "PackageOperation",
    "RecipientOperation",
    "Resource",
    "assert_registry_complete",
    "get_handler",
    "get_registered_operations",
    "register_operation",
    "resolve_resource",
]
