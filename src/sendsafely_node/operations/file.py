"""
File operations.

Handles: upload, download, delete, list
"""

from typing import Any

from core.security.input_validation import require_package_id, sanitize_file_name
from sendsafely_node.context import ItemContext
from sendsafely_node.formatting import as_output_list, format_api_response, package_field
from sendsafely_node.host import ExecutionItem
from sendsafely_node.operations.base import (
    FileOperation,
    Resource,
    register_operation,
)

DEFAULT_BINARY_PROPERTY = "data"
DEFAULT_FILE_NAME = "file"


def _package_id(ctx: ItemContext) -> str:
    return require_package_id(ctx.str_param("packageId"))


@register_operation(Resource.FILE, FileOperation.UPLOAD)
async def upload_file(ctx: ItemContext) -> dict[str, Any]:
    """Encrypt and upload an item's binary property into a package."""
    package_id = _package_id(ctx)
    binary_property = ctx.str_param("binaryPropertyName", DEFAULT_BINARY_PROPERTY)

    binary_data = ctx.assert_binary_data(binary_property)
    buffer = await ctx.get_binary_data_buffer(binary_property)

    file_name = ctx.str_param("fileName") or binary_data.file_name or DEFAULT_FILE_NAME
    file_name = sanitize_file_name(file_name)

    response = await ctx.call(
        "upload_file",
        lambda callback: ctx.client.upload_file(package_id, file_name, buffer, callback),
    )
    ctx.logger.info(
        "File uploaded",
        extra={
            "package_id": package_id,
            "file_name": file_name,
            "binary_property": binary_property,
            "bytes_uploaded": len(buffer),
        },
    )
    return format_api_response(response)


@register_operation(Resource.FILE, FileOperation.DOWNLOAD)
async def download_file(ctx: ItemContext) -> ExecutionItem:
    """Download and decrypt a file, emitting it as binary output named after the file id."""
    package_id = _package_id(ctx)
    file_id = ctx.str_param("fileId")
    package_code = ctx.str_param("packageCode")

    file_data = await ctx.call(
        "download_file",
        lambda callback: ctx.client.download_file(package_id, file_id, package_code, callback),
    )
    if isinstance(file_data, (bytearray, memoryview)):
        file_data = bytes(file_data)

    binary_property = ctx.str_param("binaryPropertyName", DEFAULT_BINARY_PROPERTY)
    binary = await ctx.prepare_binary_data(file_data, file_id)

    ctx.logger.info(
        "File downloaded",
        extra={
            "package_id": package_id,
            "file_id": file_id,
            "binary_property": binary_property,
            "bytes_downloaded": len(file_data),
        },
    )
    return ExecutionItem(json={}, binary={binary_property: binary})


@register_operation(Resource.FILE, FileOperation.DELETE)
async def delete_file(ctx: ItemContext) -> dict[str, Any]:
    package_id = _package_id(ctx)
    file_id = ctx.str_param("fileId")
    response = await ctx.call(
        "delete_file",
        lambda callback: ctx.client.delete_file(package_id, file_id, callback),
    )
    ctx.logger.info("File deleted", extra={"package_id": package_id, "file_id": file_id})
    return format_api_response(response)


@register_operation(Resource.FILE, FileOperation.LIST)
async def list_files(ctx: ItemContext) -> list[dict[str, Any]]:
    package_id = _package_id(ctx)
    package_info = await ctx.call(
        "get_package_information",
        lambda callback: ctx.client.get_package_information(package_id, callback),
    )
    files = as_output_list(package_field(package_info, "files"))
    ctx.logger.debug("Listed files", extra={"package_id": package_id, "result_count": len(files)})
    return files
