"""
SendSafely SDK boundary.

The SDK performs encryption and transport. Every method reports its
outcome through a trailing ``callback(error, result)`` argument; callers
adapt those calls with core.utils.callbacks.wrap_sdk_callback.
"""

import logging
from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from core.errors.exceptions import CredentialsError
from core.security.redaction import sanitize_error
from core.utils.callbacks import SdkCallback
from sendsafely_node.credentials import SendSafelyCredentials

logger = logging.getLogger(__name__)


@runtime_checkable
class SendSafelySdk(Protocol):
    """Callback-style SendSafely client constructed from credentials."""

    def create_package(self, callback: SdkCallback, *, vdr: bool = False) -> Any: ...

    def get_package_information(self, package_id: str, callback: SdkCallback) -> Any: ...

    def finalize_package(
        self,
        package_id: str,
        callback: SdkCallback,
        *,
        undisclosed_recipients: bool = False,
    ) -> Any: ...

    def delete_package(self, package_id: str, callback: SdkCallback) -> Any: ...

    def get_packages(self, callback: SdkCallback) -> Any: ...

    def update_package_life(self, package_id: str, life: int, callback: SdkCallback) -> Any: ...

    def update_package_descriptor(
        self, package_id: str, label: str, callback: SdkCallback
    ) -> Any: ...

    def upload_file(
        self, package_id: str, file_name: str, data: bytes, callback: SdkCallback
    ) -> Any: ...

    def download_file(
        self,
        package_id: str,
        file_id: str,
        package_code: str,
        callback: SdkCallback,
    ) -> Any: ...

    def delete_file(self, package_id: str, file_id: str, callback: SdkCallback) -> Any: ...

    def add_recipient(self, package_id: str, email: str, callback: SdkCallback) -> Any: ...

    def remove_recipient(
        self, package_id: str, recipient_id: str, callback: SdkCallback
    ) -> Any: ...


# Builds an SDK client for one set of credentials
SdkFactory = Callable[[SendSafelyCredentials], SendSafelySdk]


def get_sendsafely_client(
    factory: SdkFactory,
    credentials: SendSafelyCredentials,
) -> SendSafelySdk:
    """
    Construct an SDK client for the given credentials.

    Raises:
        CredentialsError: If the factory rejects the credentials; the
            sanitized cause is carried in the message
    """
    try:
        client = factory(credentials)
    except Exception as e:
        reason = sanitize_error(e)
        logger.warning(
            "Failed to initialize SendSafely client",
            extra={"base_url": credentials.base_url, "error_message": reason},
        )
        raise CredentialsError(f"Failed to initialize SendSafely client: {reason}") from e

    logger.debug("SendSafely client initialized", extra={"base_url": credentials.base_url})
    return client


__all__ = ["SdkFactory", "SendSafelySdk", "get_sendsafely_client"]
