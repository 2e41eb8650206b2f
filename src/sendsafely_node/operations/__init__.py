"""
SendSafely operation handlers.

Importing this package registers every handler with the operation registry.
"""

from sendsafely_node.operations import file, package, recipient  # noqa: F401
from sendsafely_node.operations.base import (
    FileOperation,
    PackageOperation,
    RecipientOperation,
    Resource,
    assert_registry_complete,
    get_handler,
    get_registered_operations,
    register_operation,
    resolve_resource,
)

__all__ = [
    "Resource",
    "PackageOperation",
    "FileOperation",
    "RecipientOperation",
    "register_operation",
    "get_handler",
    "get_registered_operations",
    "assert_registry_complete",
    "resolve_resource",
]
