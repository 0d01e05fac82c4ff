"""
Contract parameter schema tests.
"""

import pytest

from klever_client.codec.contracts import (
    CONTRACT_SCHEMAS,
    CREATE_ASSET,
    TRANSFER,
    decode_parameter,
    encode_parameter,
    schema_for,
    type_url,
)
from klever_client.runtime.errors import UnmarshalError


@pytest.mark.unit
class TestContractSchemas:
    """Test schema lookup and Any type URLs."""

    def test_registered_codes(self):
        assert sorted(CONTRACT_SCHEMAS) == [0, 1, 2, 4, 5, 6, 7, 8, 9, 14, 63]

    def test_schema_for(self):
        assert schema_for(0) is TRANSFER
        assert schema_for(1) is CREATE_ASSET
        assert schema_for(3) is None
        assert schema_for(99) is None

    @pytest.mark.parametrize("code,name", [
        (0, "TransferContract"),
        (1, "CreateAssetContract"),
        (2, "CreateValidatorContract"),
        (4, "FreezeContract"),
        (5, "UnfreezeContract"),
        (6, "DelegateContract"),
        (7, "UndelegateContract"),
        (8, "WithdrawContract"),
        (9, "ClaimContract"),
        (14, "VoteContract"),
        (63, "SmartContract"),
    ])
    def test_type_urls(self, code, name):
        assert type_url(schema_for(code)) == f"type.googleapis.com/proto.{name}"


@pytest.mark.unit
class TestParameterCodec:
    """Test encoding and decoding of contract parameters."""

    def test_transfer_bytes(self):
        """Test the exact layout of a KLV transfer."""
        url, value = encode_parameter(0, {"ToAddress": b"\x01" * 32, "Amount": 1000})
        assert url == "type.googleapis.com/proto.TransferContract"
        assert value == b"\x0a\x20" + b"\x01" * 32 + b"\x10\xe8\x07"

    def test_transfer_decode(self):
        url, value = encode_parameter(0, {"ToAddress": b"\x02" * 32, "Amount": 5, "AssetID": b"KFI"})
        decoded = decode_parameter(0, url, value)
        assert decoded["ToAddress"] == b"\x02" * 32
        assert decoded["Amount"] == 5
        assert decoded["AssetID"] == b"KFI"
        assert decoded["KDARoyalties"] == 0

    def test_create_asset_nested(self):
        """Test nested messages, maps and repeated sub-messages."""
        values = {
            "Type": 0,
            "Name": "Token",
            "Ticker": "TKN",
            "OwnerAddress": b"\x03" * 32,
            "URIs": {"web": "https://example.org"},
            "Precision": 6,
            "MaxSupply": 10 ** 12,
            "Properties": {"CanMint": True},
            "Roles": [{"Address": b"\x04" * 32, "HasRoleMint": True}],
        }
        url, value = encode_parameter(1, values)
        decoded = decode_parameter(1, url, value)
        assert decoded["Name"] == "Token"
        assert decoded["URIs"] == {"web": "https://example.org"}
        assert decoded["Properties"]["CanMint"] is True
        assert decoded["Properties"]["CanBurn"] is False
        assert decoded["Roles"][0]["HasRoleMint"] is True
        assert decoded["Attributes"] is None

    def test_empty_submessage_round_trip(self):
        url, value = encode_parameter(1, {"Properties": {}})
        assert value == b"\x52\x00"
        assert decode_parameter(1, url, value)["Properties"] == CREATE_ASSET.field(10).schema.default_values()

    def test_empty_url_accepted(self):
        _, value = encode_parameter(7, {"BucketID": b"b1"})
        assert decode_parameter(7, "", value)["BucketID"] == b"b1"

    def test_url_mismatch(self):
        _, value = encode_parameter(4, {"Amount": 1})
        with pytest.raises(UnmarshalError):
            decode_parameter(4, "type.googleapis.com/proto.TransferContract", value)

    def test_no_schema(self):
        with pytest.raises(UnmarshalError):
            decode_parameter(3, "", b"")

    def test_encode_unknown_code(self):
        with pytest.raises(KeyError):
            encode_parameter(3, {})
