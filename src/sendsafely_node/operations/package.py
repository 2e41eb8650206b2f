"""
Package operations.

Handles: create, get, finalize, delete, list, update
"""

from typing import Any

from core.errors.exceptions import ValidationError
from core.security.input_validation import require_package_id
from sendsafely_node.context import ItemContext
from sendsafely_node.formatting import (
    DEFAULT_PAGE_LIMIT,
    as_output_list,
    format_api_response,
    get_pagination_parameters,
)
from sendsafely_node.operations.base import (
    PackageOperation,
    Resource,
    register_operation,
)


def _package_id(ctx: ItemContext) -> str:
    return require_package_id(ctx.str_param("packageId"))


async def _get_package_information(ctx: ItemContext, package_id: str) -> Any:
    return await ctx.call(
        "get_package_information",
        lambda callback: ctx.client.get_package_information(package_id, callback),
    )


@register_operation(Resource.PACKAGE, PackageOperation.CREATE)
async def create_package(ctx: ItemContext) -> dict[str, Any]:
    vdr = ctx.bool_param("vdr", False)
    response = await ctx.call(
        "create_package",
        lambda callback: ctx.client.create_package(callback, vdr=vdr),
    )
    ctx.logger.info(
        "Package created",
        extra={"package_id": response.get("packageId") if isinstance(response, dict) else None},
    )
    return format_api_response(response)


@register_operation(Resource.PACKAGE, PackageOperation.GET)
async def get_package(ctx: ItemContext) -> dict[str, Any]:
    package_id = _package_id(ctx)
    return format_api_response(await _get_package_information(ctx, package_id))


@register_operation(Resource.PACKAGE, PackageOperation.FINALIZE)
async def finalize_package(ctx: ItemContext) -> dict[str, Any]:
    package_id = _package_id(ctx)
    undisclosed = ctx.bool_param("undisclosedRecipients", False)
    response = await ctx.call(
        "finalize_package",
        lambda callback: ctx.client.finalize_package(
            package_id, callback, undisclosed_recipients=undisclosed
        ),
    )
    ctx.logger.info("Package finalized", extra={"package_id": package_id})
    return format_api_response(response)


@register_operation(Resource.PACKAGE, PackageOperation.DELETE)
async def delete_package(ctx: ItemContext) -> dict[str, Any]:
    package_id = _package_id(ctx)
    response = await ctx.call(
        "delete_package",
        lambda callback: ctx.client.delete_package(package_id, callback),
    )
    ctx.logger.info("Package deleted", extra={"package_id": package_id})
    return format_api_response(response)


@register_operation(Resource.PACKAGE, PackageOperation.LIST)
async def list_packages(ctx: ItemContext) -> list[dict[str, Any]]:
    return_all = ctx.bool_param("returnAll", False)
    packages = as_output_list(
        await ctx.call("get_packages", lambda callback: ctx.client.get_packages(callback))
    )

    if not return_all:
        limit, _ = get_pagination_parameters(ctx.param("limit", DEFAULT_PAGE_LIMIT))
        packages = packages[:limit]

    ctx.logger.debug("Listed packages", extra={"result_count": len(packages)})
    return packages


def _package_life(value: Any) -> int | None:
    """Package life in days; None or 0 leaves the current life unchanged."""
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid package life: {value!r}") from None


@register_operation(Resource.PACKAGE, PackageOperation.UPDATE)
async def update_package(ctx: ItemContext) -> dict[str, Any]:
    """Apply life and label updates, then return the refreshed package."""
    package_id = _package_id(ctx)
    update_fields = ctx.param("updateFields", {}) or {}

    life = _package_life(update_fields.get("life"))
    if life:
        await ctx.call(
            "update_package_life",
            lambda callback: ctx.client.update_package_life(package_id, life, callback),
        )

    label = update_fields.get("label")
    if label:
        await ctx.call(
            "update_package_descriptor",
            lambda callback: ctx.client.update_package_descriptor(package_id, label, callback),
        )

    return format_api_response(await _get_package_information(ctx, package_id))
