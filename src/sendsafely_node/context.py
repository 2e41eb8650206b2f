"""Per-item execution context handed to operation handlers."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from core.resilience.retry import DEFAULT_RETRY, RetryConfig, retry_async
from core.utils.callbacks import SdkCallback, wrap_sdk_callback
from sendsafely_node.client import SendSafelySdk
from sendsafely_node.credentials import SendSafelyCredentials
from sendsafely_node.host import BinaryData, ExecutionHost

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class ItemContext:
    """
    Everything a handler needs to process one input item.

    Handlers never reach into host state directly. Parameters, binary data,
    the SDK client and the logger all come through this object.
    """

    host: ExecutionHost
    item_index: int
    credentials: SendSafelyCredentials
    client: SendSafelySdk
    retry_config: RetryConfig = field(default_factory=lambda: DEFAULT_RETRY)
    logger: logging.Logger = field(default_factory=lambda: logger)

    def param(self, name: str, default: Any = None) -> Any:
        """Resolve a node parameter for this item."""
        return self.host.get_node_parameter(name, self.item_index, default)

    def str_param(self, name: str, default: str = "") -> str:
        value = self.param(name, default)
        return "" if value is None else str(value)

    def bool_param(self, name: str, default: bool = False) -> bool:
        return bool(self.param(name, default))

    async def call(self, name: str, fn: Callable[[SdkCallback], Any]) -> Any:
        """
        Invoke one callback-style SDK method with retries.

        Each attempt starts a fresh SDK call, so a retried request never
        shares a callback with the attempt that failed.

        Args:
            name: SDK method name used in log events
            fn: Starts the SDK call given the completion callback

        Returns:
            The result the SDK passed to its callback
        """
        return await retry_async(
            lambda: wrap_sdk_callback(fn),
            config=self.retry_config,
            operation_name=name,
        )

    def assert_binary_data(self, property_name: str) -> BinaryData:
        return self.host.assert_binary_data(self.item_index, property_name)

    async def get_binary_data_buffer(self, property_name: str) -> bytes:
        return await self.host.get_binary_data_buffer(self.item_index, property_name)

    async def prepare_binary_data(self, data: bytes, file_name: str) -> BinaryData:
        return await self.host.prepare_binary_data(data, file_name)


__all__ = ["ItemContext"]
