"""Fakes for the host platform and the SendSafely SDK."""

import base64
from collections import defaultdict, deque
from typing import Any

import pytest

from core.resilience.retry import RetryConfig
from sendsafely_node.host import BinaryData, WorkItem
from sendsafely_node.node import SendSafelyNode

VALID_CREDENTIALS = {
    "baseUrl": "https://demo.sendsafely.com/",
    "apiKey": "test-api-key",
    "apiSecret": "test-api-secret",
}

PACKAGE_INFO = {
    "packageId": "PKG1",
    "packageCode": "CODE1",
    "label": "Quarterly report",
    "files": [
        {"fileId": "F1", "fileName": "a.txt", "__typename": "File"},
        {"fileId": "F2", "fileName": "b.pdf"},
    ],
    "recipients": [
        {"recipientId": "R1", "email": "alice@example.com"},
    ],
    "_raw": {"response": "SUCCESS"},
}

DEFAULT_RESULTS: dict[str, Any] = {
    "create_package": {
        "packageId": "PKG1",
        "packageCode": "CODE1",
        "keyCode": "KEYCODE",
        "__typename": "Package",
    },
    "get_package_information": PACKAGE_INFO,
    "finalize_package": {"message": "Package finalized", "packageId": "PKG1"},
    "delete_package": {"response": "SUCCESS"},
    "get_packages": [{"packageId": f"PKG{i}"} for i in range(1, 6)],
    "update_package_life": {"response": "SUCCESS"},
    "update_package_descriptor": {"response": "SUCCESS"},
    "upload_file": {"fileId": "F9", "fileName": "uploaded.txt"},
    "download_file": b"decrypted file bytes",
    "delete_file": {"response": "SUCCESS"},
    "add_recipient": {"recipientId": "R9", "email": "added@example.com"},
    "remove_recipient": {"response": "SUCCESS"},
}


class FakeSendSafelySdk:
    """Callback-style SDK double recording every call."""

    def __init__(self):
        self.calls: list[tuple[str, tuple, dict]] = []
        self.credentials = []
        self._outcomes: dict[str, deque] = defaultdict(deque)
        self.results = dict(DEFAULT_RESULTS)

    def queue(self, method: str, *, error: Any = None, result: Any = None) -> None:
        """Queue one (error, result) outcome for the next call of ``method``."""
        self._outcomes[method].append((error, result))

    def calls_to(self, method: str) -> list[tuple[tuple, dict]]:
        return [(args, kwargs) for name, args, kwargs in self.calls if name == method]

    def _respond(self, method: str, callback, *args, **kwargs) -> None:
        self.calls.append((method, args, kwargs))
        if self._outcomes[method]:
            error, result = self._outcomes[method].popleft()
        else:
            error, result = None, self.results[method]
        callback(error, result)

    def create_package(self, callback, *, vdr=False):
        self._respond("create_package", callback, vdr=vdr)

    def get_package_information(self, package_id, callback):
        self._respond("get_package_information", callback, package_id)

    def finalize_package(self, package_id, callback, *, undisclosed_recipients=False):
        self._respond(
            "finalize_package",
            callback,
            package_id,
            undisclosed_recipients=undisclosed_recipients,
        )

    def delete_package(self, package_id, callback):
        self._respond("delete_package", callback, package_id)

    def get_packages(self, callback):
        self._respond("get_packages", callback)

    def update_package_life(self, package_id, life, callback):
        self._respond("update_package_life", callback, package_id, life)

    def update_package_descriptor(self, package_id, label, callback):
        self._respond("update_package_descriptor", callback, package_id, label)

    def upload_file(self, package_id, file_name, data, callback):
        self._respond("upload_file", callback, package_id, file_name, data)

    def download_file(self, package_id, file_id, package_code, callback):
        self._respond("download_file", callback, package_id, file_id, package_code)

    def delete_file(self, package_id, file_id, callback):
        self._respond("delete_file", callback, package_id, file_id)

    def add_recipient(self, package_id, email, callback):
        self._respond("add_recipient", callback, package_id, email)

    def remove_recipient(self, package_id, recipient_id, callback):
        self._respond("remove_recipient", callback, package_id, recipient_id)


class FakeHost:
    """In-memory ExecutionHost."""

    def __init__(
        self,
        items: list[WorkItem] | int = 1,
        params: dict[str, Any] | None = None,
        item_params: dict[int, dict[str, Any]] | None = None,
        credentials: dict[str, Any] | None = VALID_CREDENTIALS,
        continue_on_fail: bool = False,
    ):
        if isinstance(items, int):
            items = [WorkItem(json={"index": i}) for i in range(items)]
        self.items = items
        self.params = params or {}
        self.item_params = item_params or {}
        self.credentials = credentials
        self._continue_on_fail = continue_on_fail
        self.parameter_requests: list[tuple[str, int]] = []
        self.credential_requests: list[str] = []

    def get_input_data(self) -> list[WorkItem]:
        return self.items

    def get_node_parameter(self, name: str, item_index: int, default: Any = None) -> Any:
        self.parameter_requests.append((name, item_index))
        per_item = self.item_params.get(item_index, {})
        if name in per_item:
            return per_item[name]
        return self.params.get(name, default)

    async def get_credentials(self, name: str) -> dict[str, Any] | None:
        self.credential_requests.append(name)
        return self.credentials

    def continue_on_fail(self) -> bool:
        return self._continue_on_fail

    def assert_binary_data(self, item_index: int, property_name: str) -> BinaryData:
        binary = self.items[item_index].binary or {}
        if property_name not in binary:
            raise ValueError(f'No binary data property "{property_name}" exists on item!')
        return binary[property_name]

    async def get_binary_data_buffer(self, item_index: int, property_name: str) -> bytes:
        data = self.assert_binary_data(item_index, property_name).data
        if isinstance(data, bytes):
            return data
        return base64.b64decode(data)

    async def prepare_binary_data(self, data: bytes, file_name: str) -> BinaryData:
        return BinaryData(
            data=base64.b64encode(data).decode("ascii"),
            file_name=file_name,
            mime_type="application/octet-stream",
            file_size=len(data),
        )


def _binary_item(content: bytes, file_name: str | None = "report.txt", prop: str = "data"):
    return WorkItem(
        json={},
        binary={
            prop: BinaryData(
                data=base64.b64encode(content).decode("ascii"),
                file_name=file_name,
            )
        },
    )


# Zero-delay retries keep tests fast while exercising the retry path
FAST_RETRY = RetryConfig(max_retries=3, base_delay=0, max_jitter=0)


@pytest.fixture
def sdk():
    return FakeSendSafelySdk()


@pytest.fixture
def sdk_factory(sdk):
    def factory(credentials):
        sdk.credentials.append(credentials)
        return sdk

    return factory


@pytest.fixture
def node(sdk_factory):
    return SendSafelyNode(sdk_factory=sdk_factory, retry_config=FAST_RETRY)


@pytest.fixture
def make_host():
    """Factory for FakeHost instances."""
    return FakeHost


@pytest.fixture
def binary_item():
    """Factory for WorkItems carrying one base64 binary property."""
    return _binary_item


@pytest.fixture
def fast_retry():
    return FAST_RETRY
