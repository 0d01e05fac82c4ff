"""
Operation model tests: kind parsing, request entries and wire mapping.
"""

import pytest

from klever_client.runtime.errors import MarshalError, UnmarshalError, ValidationError
from klever_client.tx.operations import (
    OPERATION_TYPES,
    AssetType,
    AttributesInfo,
    ClaimType,
    ContractType,
    CreateAsset,
    CreateValidator,
    InterestType,
    OpaqueOperation,
    PropertiesInfo,
    RoyaltiesInfo,
    RoyaltyData,
    RoyaltySplitInfo,
    RolesInfo,
    SCType,
    SmartContract,
    StakingInfo,
    Transfer,
    Unfreeze,
    Vote,
    VoteType,
    Withdraw,
    WithdrawType,
    operation_from_parameter,
)
from klever_client.tx.validation import validate_model

BLS_KEY = "ab" * 96


@pytest.mark.unit
class TestContractTypeParse:
    """Test resolving contract kinds."""

    @pytest.mark.parametrize("kind", [
        ContractType.TRANSFER,
        0,
        "0",
        "Transfer",
        "TRANSFER",
        "transfer",
        "TransferContract",
        "TransferContractType",
        "transfer_contract",
    ])
    def test_transfer_spellings(self, kind):
        assert ContractType.parse(kind) is ContractType.TRANSFER

    @pytest.mark.parametrize("kind,expected", [
        ("CreateAssetContractType", ContractType.CREATE_ASSET),
        ("SmartContract", ContractType.SMART_CONTRACT),
        ("SMART_CONTRACT", ContractType.SMART_CONTRACT),
        ("UpdateAccountPermission", ContractType.UPDATE_ACCOUNT_PERMISSION),
        (63, ContractType.SMART_CONTRACT),
    ])
    def test_other_names(self, kind, expected):
        assert ContractType.parse(kind) is expected

    def test_unknown_code_passes_through(self):
        code = ContractType.parse(99)
        assert code == 99
        assert not isinstance(code, ContractType)

    @pytest.mark.parametrize("kind", [-1, "bogus", True, 3.5, None])
    def test_rejected(self, kind):
        with pytest.raises(ValidationError):
            ContractType.parse(kind)

    def test_every_model_registered(self):
        assert sorted(int(k) for k in OPERATION_TYPES) == [0, 1, 2, 4, 5, 6, 7, 8, 9, 14, 63]
        for kind, model in OPERATION_TYPES.items():
            assert model.CONTRACT_TYPE is kind


@pytest.mark.unit
class TestRequestEntries:
    """Test JSON request entries for the node build endpoint."""

    def test_transfer(self, receiver):
        op = Transfer(receiver=receiver, amount=5)
        assert op.to_request() == {"contractType": 0, "receiver": receiver, "amount": 5}

    def test_aliases_in_request(self, receiver):
        op = Transfer(receiver=receiver, amount=5, kda="KFI", kda_royalties=2)
        assert op.to_request()["kdaRoyalties"] == 2
        assert op.contract_type is ContractType.TRANSFER

    def test_enums_as_codes(self):
        assert Vote(vote_type=VoteType.NO, proposal_id=3).to_request() == {
            "contractType": 14, "type": 1, "proposalId": 3,
        }
        assert Withdraw(withdraw_type=WithdrawType.KDA_POOL).to_request() == {
            "contractType": 8, "withdrawType": 1,
        }

    def test_amount_outside_64_bits(self, receiver):
        with pytest.raises(MarshalError):
            Transfer(receiver=receiver, amount=2 ** 64).to_request()

    def test_opaque(self):
        op = OpaqueOperation(contract_type=22, params={"permissions": [{"id": 1}]})
        assert op.to_request() == {"contractType": 22, "permissions": [{"id": 1}]}

    def test_opaque_narrowing(self):
        with pytest.raises(MarshalError):
            OpaqueOperation(contract_type=99, params={"x": [-(2 ** 64)]}).to_request()

    def test_models_are_frozen(self, receiver):
        op = Transfer(receiver=receiver, amount=5)
        with pytest.raises(Exception):
            op.amount = 6


@pytest.mark.unit
class TestWireMapping:
    """Test encode_parameter/decode_parameter on operation models."""

    def test_transfer(self, receiver):
        op = Transfer(receiver=receiver, amount=1000, kda="KFI")
        url, value = op.encode_parameter()
        assert url == "type.googleapis.com/proto.TransferContract"
        assert Transfer.decode_parameter(url, value) == op

    def test_required_defaults_survive(self):
        """Test that required fields equal to their wire default decode back."""
        op = Vote(vote_type=VoteType.YES, proposal_id=0)
        url, value = op.encode_parameter()
        assert value == b""
        assert Vote.decode_parameter(url, value) == op

    def test_unfreeze(self):
        op = Unfreeze(kda="KLV", bucket_id="bucket-1")
        assert Unfreeze.decode_parameter(*op.encode_parameter()) == op

    def test_create_asset(self, receiver, other_address):
        op = validate_model(CreateAsset, {
            "type": AssetType.NON_FUNGIBLE,
            "name": "Collection",
            "ticker": "COLL",
            "ownerAddress": receiver,
            "adminAddress": other_address,
            "logo": "https://example.org/logo.png",
            "uris": {"website": "https://example.org", "docs": "https://docs.example.org"},
            "precision": 0,
            "maxSupply": 0,
            "properties": {"canMint": True, "limitTransfer": True},
            "attributes": {},
            "royalties": {
                "address": other_address,
                "transferPercentage": [{"amount": 10, "percentage": 2}],
                "marketPercentage": 5,
                "splitRoyalties": {receiver: {"percentTransferPercentage": 50}},
            },
            "staking": {
                "interestType": InterestType.FPR,
                "apr": 0,
                "minEpochsToClaim": 1,
                "minEpochsToUnstake": 2,
                "minEpochsToWithdraw": 3,
            },
            "roles": [{"address": other_address, "hasRoleMint": True}],
        })
        assert isinstance(op.properties, PropertiesInfo)
        assert op.attributes == AttributesInfo()
        assert op.royalties.transfer_percentage == (RoyaltyData(amount=10, percentage=2),)
        assert op.royalties.split_royalties[receiver] == RoyaltySplitInfo(percent_transfer_percentage=50)
        assert op.staking.interest_type is InterestType.FPR
        assert op.roles == (RolesInfo(address=other_address, has_role_mint=True),)

        decoded = CreateAsset.decode_parameter(*op.encode_parameter())
        assert decoded == op

    def test_create_asset_request_uses_aliases(self, receiver):
        op = CreateAsset(asset_type=AssetType.FUNGIBLE, name="T", ticker="T", owner_address=receiver,
                         precision=6, max_supply=100,
                         royalties=RoyaltiesInfo(address=receiver, ito_fixed=3))
        entry = op.to_request()
        assert entry["type"] == 0
        assert entry["ownerAddress"] == receiver
        assert entry["maxSupply"] == 100
        assert entry["royalties"] == {"address": receiver, "itoFixed": 3}
        assert "logo" not in entry

    def test_create_validator(self, receiver, other_address):
        op = CreateValidator(bls_public_key=BLS_KEY, owner_address=receiver, commission=10,
                             reward_address=other_address, can_delegate=True, name="node")
        decoded = CreateValidator.decode_parameter(*op.encode_parameter())
        assert decoded == op

    def test_create_validator_config_always_present(self, receiver):
        op = CreateValidator(bls_public_key="", owner_address=receiver, commission=0)
        assert op.to_wire()["Config"] == {"BLSPublicKey": b"", "Commission": 0}
        _, value = op.encode_parameter()
        assert value.endswith(b"\x12\x00")

    def test_create_validator_rejects_bad_hex(self, receiver):
        with pytest.raises(ValidationError):
            validate_model(CreateValidator, {"blsPublicKey": "zz", "ownerAddress": receiver, "commission": 1})

    def test_smart_contract(self, receiver):
        op = SmartContract(sc_type=SCType.INVOKE, address=receiver, call_value={"KLV": 5, "KFI": 2},
                           input="transfer@01")
        wire = op.to_wire()
        assert [item["AssetID"] for item in wire["CallValue"]] == [b"KFI", b"KLV"]
        assert SmartContract.decode_parameter(*op.encode_parameter()) == op

    def test_claim(self):
        op = validate_model(OPERATION_TYPES[ContractType.CLAIM], {"claimType": ClaimType.MARKET_CLAIM, "id": "x"})
        assert type(op).decode_parameter(*op.encode_parameter()) == op


@pytest.mark.unit
class TestOperationFromParameter:
    """Test decoding stored contracts into models."""

    def test_known(self, receiver):
        op = Transfer(receiver=receiver, amount=1)
        assert operation_from_parameter(0, *op.encode_parameter()) == op

    def test_unknown_kind_is_opaque(self):
        op = operation_from_parameter(3, "type.googleapis.com/proto.ValidatorConfigContract", b"\x01")
        assert op == OpaqueOperation(
            contract_type=3,
            params={"typeUrl": "type.googleapis.com/proto.ValidatorConfigContract", "value": b"\x01"},
        )

    def test_mismatched_url(self, receiver):
        _, value = Transfer(receiver=receiver, amount=1).encode_parameter()
        with pytest.raises(UnmarshalError):
            operation_from_parameter(0, "type.googleapis.com/proto.FreezeContract", value)
