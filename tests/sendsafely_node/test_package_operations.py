"""Tests for package operations."""

import pytest

from core.errors.exceptions import NodeOperationError


def package_host(make_host, operation, **params):
    return make_host(params={"resource": "package", "operation": operation, **params})


class TestCreatePackage:

    @pytest.mark.asyncio
    async def test_create_standard(self, node, sdk, make_host):
        await node.execute(package_host(make_host, "create"))
        assert sdk.calls_to("create_package") == [((), {"vdr": False})]

    @pytest.mark.asyncio
    async def test_create_vdr(self, node, sdk, make_host):
        await node.execute(package_host(make_host, "create", vdr=True))
        assert sdk.calls_to("create_package") == [((), {"vdr": True})]


class TestGetPackage:

    @pytest.mark.asyncio
    async def test_strips_internal_keys(self, node, make_host):
        outputs = await node.execute(package_host(make_host, "get", packageId="PKG1"))

        data = outputs[0].json_data
        assert data["packageId"] == "PKG1"
        assert "_raw" not in data
        assert len(data["files"]) == 2

    @pytest.mark.asyncio
    async def test_invalid_package_id_rejected_before_sdk(self, node, sdk, make_host):
        with pytest.raises(NodeOperationError, match="Invalid package ID"):
            await node.execute(package_host(make_host, "get", packageId="../PKG1"))
        assert sdk.calls == []


class TestFinalizePackage:

    @pytest.mark.asyncio
    async def test_finalize(self, node, sdk, make_host):
        outputs = await node.execute(package_host(make_host, "finalize", packageId="PKG1"))

        assert sdk.calls_to("finalize_package") == [(("PKG1",), {"undisclosed_recipients": False})]
        assert outputs[0].json_data["message"] == "Package finalized"

    @pytest.mark.asyncio
    async def test_finalize_undisclosed(self, node, sdk, make_host):
        await node.execute(
            package_host(make_host, "finalize", packageId="PKG1", undisclosedRecipients=True)
        )
        assert sdk.calls_to("finalize_package")[0][1] == {"undisclosed_recipients": True}


class TestDeletePackage:

    @pytest.mark.asyncio
    async def test_delete(self, node, sdk, make_host):
        outputs = await node.execute(package_host(make_host, "delete", packageId="PKG1"))

        assert sdk.calls_to("delete_package") == [(("PKG1",), {})]
        assert outputs[0].json_data == {"response": "SUCCESS"}


class TestListPackages:

    @pytest.mark.asyncio
    async def test_default_limit(self, node, sdk, make_host):
        sdk.results["get_packages"] = [{"packageId": f"P{i}"} for i in range(60)]

        outputs = await node.execute(package_host(make_host, "list"))

        assert len(outputs) == 50
        assert outputs[0].json_data == {"packageId": "P0"}

    @pytest.mark.asyncio
    async def test_explicit_limit(self, node, make_host):
        outputs = await node.execute(package_host(make_host, "list", limit=2))
        assert [o.json_data["packageId"] for o in outputs] == ["PKG1", "PKG2"]

    @pytest.mark.asyncio
    async def test_limit_capped(self, node, sdk, make_host):
        sdk.results["get_packages"] = [{"packageId": f"P{i}"} for i in range(1200)]

        outputs = await node.execute(package_host(make_host, "list", limit=5000))

        assert len(outputs) == 1000

    @pytest.mark.asyncio
    async def test_return_all(self, node, sdk, make_host):
        sdk.results["get_packages"] = [{"packageId": f"P{i}"} for i in range(1200)]

        outputs = await node.execute(package_host(make_host, "list", returnAll=True, limit=1))

        assert len(outputs) == 1200

    @pytest.mark.asyncio
    async def test_empty_list(self, node, sdk, make_host):
        sdk.results["get_packages"] = []
        assert await node.execute(package_host(make_host, "list")) == []


class TestUpdatePackage:

    @pytest.mark.asyncio
    async def test_life_and_label_then_refresh(self, node, sdk, make_host):
        outputs = await node.execute(
            package_host(
                make_host,
                "update",
                packageId="PKG1",
                updateFields={"life": 14, "label": "Contracts"},
            )
        )

        assert [name for name, _, _ in sdk.calls] == [
            "update_package_life",
            "update_package_descriptor",
            "get_package_information",
        ]
        assert sdk.calls_to("update_package_life") == [(("PKG1", 14), {})]
        assert sdk.calls_to("update_package_descriptor") == [(("PKG1", "Contracts"), {})]
        assert outputs[0].json_data["packageId"] == "PKG1"

    @pytest.mark.asyncio
    async def test_no_fields_only_refreshes(self, node, sdk, make_host):
        await node.execute(package_host(make_host, "update", packageId="PKG1"))
        assert [name for name, _, _ in sdk.calls] == ["get_package_information"]

    @pytest.mark.asyncio
    async def test_label_only(self, node, sdk, make_host):
        await node.execute(
            package_host(make_host, "update", packageId="PKG1", updateFields={"label": "X"})
        )
        assert sdk.calls_to("update_package_life") == []
        assert len(sdk.calls_to("update_package_descriptor")) == 1

    @pytest.mark.asyncio
    async def test_life_as_string(self, node, sdk, make_host):
        await node.execute(
            package_host(make_host, "update", packageId="PKG1", updateFields={"life": "30"})
        )
        assert sdk.calls_to("update_package_life") == [(("PKG1", 30), {})]

    @pytest.mark.parametrize("life", ["abc", "1.5", [7]])
    @pytest.mark.asyncio
    async def test_invalid_life_rejected_before_sdk(self, node, sdk, make_host, life):
        host = package_host(make_host, "update", packageId="PKG1", updateFields={"life": life})

        with pytest.raises(NodeOperationError, match="Invalid package life") as exc_info:
            await node.execute(host)

        assert exc_info.value.__cause__ is not None
        assert sdk.calls == []
