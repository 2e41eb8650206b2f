"""
Host platform boundary.

The workflow host owns parameter resolution, credential storage, binary
data storage and item pairing. The action only sees it through the
ExecutionHost protocol and the item models below.
"""

from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


class BinaryData(BaseModel):
    """Binary payload attached to an item.

    Attributes:
        data: Base64 text or raw bytes held by the host
        file_name: Original file name, if known
        mime_type: Content type, if known
        file_size: Human-readable or byte size reported by the host
    """

    model_config = ConfigDict(populate_by_name=True)

    data: str | bytes = Field(..., description="Base64 text or raw bytes")
    file_name: str | None = Field(default=None, alias="fileName")
    mime_type: str | None = Field(default=None, alias="mimeType")
    file_size: str | int | None = Field(default=None, alias="fileSize")


class WorkItem(BaseModel):
    """One input item of a batch."""

    json_data: dict[str, Any] = Field(default_factory=dict, alias="json")
    binary: dict[str, BinaryData] | None = None

    model_config = ConfigDict(populate_by_name=True)


class ExecutionItem(BaseModel):
    """One output item, paired to the input item that produced it."""

    json_data: dict[str, Any] = Field(default_factory=dict, alias="json")
    binary: dict[str, BinaryData] | None = None
    paired_item: int | None = Field(default=None, alias="pairedItem")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def is_error(self) -> bool:
        return set(self.json_data) == {"error"}


@runtime_checkable
class ExecutionHost(Protocol):
    """Capabilities the workflow host exposes to the action for one execution."""

    def get_input_data(self) -> list[WorkItem]: ...

    def get_node_parameter(self, name: str, item_index: int, default: Any = None) -> Any: ...

    async def get_credentials(self, name: str) -> dict[str, Any] | None: ...

    def continue_on_fail(self) -> bool: ...

    def assert_binary_data(self, item_index: int, property_name: str) -> BinaryData: ...

    async def get_binary_data_buffer(self, item_index: int, property_name: str) -> bytes: ...

    async def prepare_binary_data(self, data: bytes, file_name: str) -> BinaryData: ...


__all__ = ["BinaryData", "ExecutionHost", "ExecutionItem", "WorkItem"]
