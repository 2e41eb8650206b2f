"""Helpers shaping SDK output for workflow items."""

from collections.abc import Mapping
from typing import Any

DEFAULT_PAGE_LIMIT = 50
MAX_PAGE_LIMIT = 1000

# SDK bookkeeping keys that never belong in workflow output
INTERNAL_KEYS = ("__typename", "_raw")


def format_api_response(response: Any) -> Any:
    """Shallow copy of an SDK response mapping without internal keys."""
    if not isinstance(response, Mapping):
        return response
    return {key: value for key, value in response.items() if key not in INTERNAL_KEYS}


def get_package_url(base_url: str, package_id: str, package_code: str) -> str:
    """Recipient-facing link for a package."""
    base = base_url.rstrip("/")
    return f"{base}/receive/?packageCode={package_code}#packageCode={package_id}"


def get_pagination_parameters(
    limit: int = DEFAULT_PAGE_LIMIT,
    offset: int = 0,
    return_all: bool = False,
) -> tuple[int, int]:
    """
    Normalize list paging.

    Returns:
        (limit, offset): (1000, 0) when everything is requested, otherwise
        the limit capped at 1000 and a non-negative offset
    """
    if return_all:
        return MAX_PAGE_LIMIT, 0
    return min(int(limit), MAX_PAGE_LIMIT), max(int(offset), 0)


def package_field(package_info: Any, name: str) -> list[Any]:
    """List-valued field of a package record; empty when absent or not a mapping."""
    if not isinstance(package_info, Mapping):
        return []
    return package_info.get(name) or []


def as_output_list(response: Any) -> list[dict[str, Any]]:
    """Turn a list-shaped SDK response into a list of formatted mappings."""
    if response is None:
        return []
    if isinstance(response, Mapping):
        return [format_api_response(response)]
    return [format_api_response(entry) for entry in response]


__all__ = [
    "DEFAULT_PAGE_LIMIT",
    "MAX_PAGE_LIMIT",
    "as_output_list",
    "format_api_response",
    "get_package_url",
    "get_pagination_parameters",
    "package_field",
]
