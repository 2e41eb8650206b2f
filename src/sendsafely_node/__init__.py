"""
SendSafely workflow action.

Exposes SendSafely packages, files and recipients as workflow operations:

- package: create, get, finalize, delete, list, update
- file: upload, download, delete, list
- recipient: add, addMultiple, remove, list
"""

from sendsafely_node.client import SdkFactory, SendSafelySdk, get_sendsafely_client
from sendsafely_node.context import ItemContext
from sendsafely_node.credentials import (
    SendSafelyCredentials,
    resolve_credentials,
    verify_credentials,
)
from sendsafely_node.host import BinaryData, ExecutionHost, ExecutionItem, WorkItem
from sendsafely_node.node import SendSafelyNode

__all__ = [
    "SendSafelyNode",
    "ItemContext",
    # Host boundary
    "ExecutionHost",
    "WorkItem",
    "ExecutionItem",
    "BinaryData",
    # SDK boundary
    "SendSafelySdk",
    "SdkFactory",
    "get_sendsafely_client",
    # Credentials
    "SendSafelyCredentials",
    "resolve_credentials",
    "verify_credentials",
]
