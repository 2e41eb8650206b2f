"""
SendSafely workflow action.

Dispatches each input item to the handler registered for the configured
resource and operation, and shapes handler results into output items.
"""

import logging
from collections.abc import Mapping
from typing import Any

from core.errors.exceptions import NodeOperationError, classify_exception
from core.logging.context_managers import LogContext, OperationContext
from core.resilience.retry import DEFAULT_RETRY, RetryConfig
from core.security.redaction import sanitize_error
from sendsafely_node.client import SdkFactory, get_sendsafely_client
from sendsafely_node.context import ItemContext
from sendsafely_node.credentials import resolve_credentials
from sendsafely_node.host import ExecutionHost, ExecutionItem
from sendsafely_node.operations import assert_registry_complete, get_handler

logger = logging.getLogger(__name__)

NODE_NAME = "sendSafely"
DEFAULT_RESOURCE = "package"


def _as_json(value: Any) -> dict[str, Any]:
    if isinstance(value, Mapping):
        return dict(value)
    return {"result": value}


def to_execution_items(result: Any, item_index: int) -> list[ExecutionItem]:
    """
    Shape a handler result into output items paired to ``item_index``.

    A prebuilt ExecutionItem is kept as-is, a list yields one item per
    element, anything else yields a single item.
    """
    if isinstance(result, ExecutionItem):
        return [result.model_copy(update={"paired_item": item_index})]
    if isinstance(result, list):
        return [ExecutionItem(json=_as_json(entry), paired_item=item_index) for entry in result]
    return [ExecutionItem(json=_as_json(result), paired_item=item_index)]


class SendSafelyNode:
    """
    Workflow action exposing SendSafely packages, files and recipients.

    Items are processed strictly in order. Without continue-on-fail the
    first failing item aborts the batch with a NodeOperationError; with it,
    the failure becomes an ``{"error": ...}`` output paired to that item.

    Usage:
        node = SendSafelyNode(sdk_factory=make_client)
        outputs = await node.execute(host)
    """

    name = NODE_NAME

    def __init__(
        self,
        sdk_factory: SdkFactory,
        retry_config: RetryConfig | None = None,
    ):
        assert_registry_complete()
        self.sdk_factory = sdk_factory
        self.retry_config = retry_config or DEFAULT_RETRY

    async def execute(self, host: ExecutionHost) -> list[ExecutionItem]:
        items = host.get_input_data()
        if not items:
            return []

        # Resource and operation come from the first item and apply to the whole batch
        resource = str(host.get_node_parameter("resource", 0, DEFAULT_RESOURCE))
        operation = str(host.get_node_parameter("operation", 0, ""))
        continue_on_fail = host.continue_on_fail()

        logger.debug(
            "Executing batch",
            extra={
                "batch_size": len(items),
                "continue_on_fail": continue_on_fail,
            },
        )

        results: list[ExecutionItem] = []
        failed = 0
        for item_index in range(len(items)):
            with LogContext(
                node_name=self.name,
                resource=resource,
                operation=operation,
                item_index=item_index,
            ):
                try:
                    result = await self._execute_item(host, resource, operation, item_index)
                except Exception as e:
                    message = sanitize_error(e)
                    if continue_on_fail:
                        failed += 1
                        logger.warning(
                            "Item failed, continuing",
                            extra={
                                "error_type": type(e).__name__,
                                "error_category": classify_exception(e).value,
                                "error_message": message,
                            },
                        )
                        results.append(
                            ExecutionItem(json={"error": message}, paired_item=item_index)
                        )
                        continue

                    logger.error(
                        "Item failed, aborting batch",
                        extra={
                            "error_type": type(e).__name__,
                            "error_category": classify_exception(e).value,
                            "error_message": message,
                        },
                    )
                    raise NodeOperationError(
                        message,
                        item_index=item_index,
                        category=classify_exception(e),
                    ) from e

                results.extend(to_execution_items(result, item_index))

        logger.info(
            "Batch complete",
            extra={
                "batch_size": len(items),
                "records_succeeded": len(items) - failed,
                "records_failed": failed,
                "result_count": len(results),
            },
        )
        return results

    async def _execute_item(
        self,
        host: ExecutionHost,
        resource: str,
        operation: str,
        item_index: int,
    ) -> Any:
        credentials = await resolve_credentials(host)
        client = get_sendsafely_client(self.sdk_factory, credentials)
        handler = get_handler(resource, operation)

        ctx = ItemContext(
            host=host,
            item_index=item_index,
            credentials=credentials,
            client=client,
            retry_config=self.retry_config,
            logger=logging.getLogger(handler.__module__),
        )
        with OperationContext(logger, f"{resource}.{operation}"):
            return await handler(ctx)


__all__ = ["NODE_NAME", "SendSafelyNode", "to_execution_items"]
