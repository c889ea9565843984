"""Tests for the tool argument models."""

import pytest
from pydantic import ValidationError

from spapi_mcp.schemas import (
    CancelOrderArgs,
    ConfirmShipmentArgs,
    CredentialToolArgs,
    MigrationAssistantArgs,
    SearchOrdersArgs,
    UpdateVerificationStatusArgs,
)


class TestSearchOrdersArgs:

    def test_defaults(self):
        args = SearchOrdersArgs()
        assert args.marketplaceIds is None
        assert args.maxResultsPerPage == 50
        assert args.createdAfter is None

    @pytest.mark.parametrize("value", [0, 101])
    def test_page_size_bounds(self, value):
        with pytest.raises(ValidationError):
            SearchOrdersArgs(maxResultsPerPage=value)

    def test_enum_values_are_plain_strings(self):
        args = SearchOrdersArgs(fulfillmentStatuses=["SHIPPED"], includedData=["BUYER"])
        assert args.fulfillmentStatuses == ["SHIPPED"]
        assert isinstance(args.includedData[0], str)

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            SearchOrdersArgs(fulfillmentStatuses=["LOST"])

    def test_extra_fields_ignored(self):
        assert not hasattr(SearchOrdersArgs(unexpected=1), "unexpected")


class TestOrderWriteArgs:

    def test_cancel_requires_reason(self):
        with pytest.raises(ValidationError):
            CancelOrderArgs(orderId="1")

    def test_cancel_reason_enum(self):
        with pytest.raises(ValidationError):
            CancelOrderArgs(orderId="1", cancelReasonCode="BORED")

    def test_verification_status_nested(self):
        args = UpdateVerificationStatusArgs(
            orderId="1", regulatedOrderVerificationStatus={"status": "Approved"}
        )
        assert args.marketplaceId is None
        assert args.regulatedOrderVerificationStatus.status == "Approved"

    def test_confirm_shipment_requires_package_fields(self):
        with pytest.raises(ValidationError):
            ConfirmShipmentArgs(orderId="1", packageDetail={"carrierCode": "UPS"})


class TestOtherArgs:

    def test_credentials_action_required(self):
        with pytest.raises(ValidationError):
            CredentialToolArgs()

    def test_credentials_action_enum(self):
        with pytest.raises(ValidationError):
            CredentialToolArgs(action="rotate")

    def test_migration_args(self):
        args = MigrationAssistantArgs(source_version="orders-v0", target_version="orders-2026-01-01")
        assert args.source_code is None
        assert args.analysis_only is False

    def test_migration_versions_required(self):
        with pytest.raises(ValidationError):
            MigrationAssistantArgs(source_version="orders-v0")

    def test_json_schema(self):
        schema = MigrationAssistantArgs.model_json_schema()
        assert schema["type"] == "object"
        assert set(schema["required"]) == {"source_version", "target_version"}
