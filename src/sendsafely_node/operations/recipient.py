"""
Recipient operations.

Handles: add, addMultiple, remove, list
"""

from typing import Any

from core.security.input_validation import (
    parse_email_list,
    require_package_id,
    require_valid_emails,
)
from sendsafely_node.context import ItemContext
from sendsafely_node.formatting import as_output_list, format_api_response, package_field
from sendsafely_node.operations.base import (
    RecipientOperation,
    Resource,
    register_operation,
)


def _package_id(ctx: ItemContext) -> str:
    return require_package_id(ctx.str_param("packageId"))


async def _add_recipient(ctx: ItemContext, package_id: str, email: str) -> Any:
    return await ctx.call(
        "add_recipient",
        lambda callback: ctx.client.add_recipient(package_id, email, callback),
    )


@register_operation(Resource.RECIPIENT, RecipientOperation.ADD)
async def add_recipient(ctx: ItemContext) -> dict[str, Any]:
    package_id = _package_id(ctx)
    (email,) = require_valid_emails([ctx.str_param("email").strip()])
    response = await _add_recipient(ctx, package_id, email)
    ctx.logger.info("Recipient added", extra={"package_id": package_id})
    return format_api_response(response)


@register_operation(Resource.RECIPIENT, RecipientOperation.ADD_MULTIPLE)
async def add_multiple_recipients(ctx: ItemContext) -> dict[str, Any]:
    """
    Add every address from a comma or newline separated list.

    All addresses are validated before the first SDK call. Recipients are
    then added one at a time, in input order; the SDK does not accept
    concurrent recipient updates on one package.
    """
    package_id = _package_id(ctx)
    emails = require_valid_emails(parse_email_list(ctx.str_param("emails")))

    recipients = []
    for email in emails:
        recipients.append(format_api_response(await _add_recipient(ctx, package_id, email)))

    ctx.logger.info(
        "Recipients added",
        extra={"package_id": package_id, "recipient_count": len(recipients)},
    )
    return {"packageId": package_id, "recipients": recipients, "count": len(recipients)}


@register_operation(Resource.RECIPIENT, RecipientOperation.REMOVE)
async def remove_recipient(ctx: ItemContext) -> dict[str, Any]:
    package_id = _package_id(ctx)
    recipient_id = ctx.str_param("recipientId")
    response = await ctx.call(
        "remove_recipient",
        lambda callback: ctx.client.remove_recipient(package_id, recipient_id, callback),
    )
    ctx.logger.info(
        "Recipient removed",
        extra={"package_id": package_id, "recipient_id": recipient_id},
    )
    return format_api_response(response)


@register_operation(Resource.RECIPIENT, RecipientOperation.LIST)
async def list_recipients(ctx: ItemContext) -> list[dict[str, Any]]:
    package_id = _package_id(ctx)
    package_info = await ctx.call(
        "get_package_information",
        lambda callback: ctx.client.get_package_information(package_id, callback),
    )
    recipients = as_output_list(package_field(package_info, "recipients"))
    ctx.logger.debug(
        "Listed recipients",
        extra={"package_id": package_id, "result_count": len(recipients)},
    )
    return recipients
