"""
Operation helper and unit conversion tests.
"""

from decimal import Decimal

import pytest

from klever_client.runtime.errors import InvalidAmountError
from klever_client.tx.builder import TransactionBuilder
from klever_client.tx.helpers import (
    create_burn,
    create_claim,
    create_delegate,
    create_freeze,
    create_fungible_token,
    create_mint_nft,
    create_nft_collection,
    create_pause,
    create_proposal,
    create_resume,
    create_set_account_name,
    create_smart_contract_call,
    create_transfer,
    create_transfer_with_royalties,
    create_undelegate,
    create_unfreeze,
    create_validator,
    create_vote,
    create_wipe,
    create_withdraw,
    from_klv_units,
    from_units,
    to_klv_units,
    to_units,
)
from klever_client.tx.operations import (
    AssetTriggerType,
    AssetType,
    ClaimType,
    ContractType,
    CreateAsset,
    OpaqueOperation,
    SCType,
    Transfer,
    VoteType,
    WithdrawType,
)


@pytest.mark.unit
class TestCreateHelpers:
    """Test (kind, params) pairs produced by the helpers."""

    def test_transfer_leaves_out_unset(self, receiver):
        assert create_transfer(receiver, 5) == (ContractType.TRANSFER, {"receiver": receiver, "amount": 5})

    def test_transfer_camel_case(self, receiver):
        _, params = create_transfer(receiver, 5, kda="KFI", kda_royalties=1, klv_royalties=2)
        assert params == {"receiver": receiver, "amount": 5, "kda": "KFI", "kdaRoyalties": 1, "klvRoyalties": 2}

    def test_staking_helpers(self, receiver):
        assert create_freeze(10) == (ContractType.FREEZE, {"amount": 10})
        assert create_unfreeze("KLV", "b1") == (ContractType.UNFREEZE, {"kda": "KLV", "bucketId": "b1"})
        assert create_delegate(receiver) == (ContractType.DELEGATE, {"receiver": receiver})
        assert create_undelegate("b1") == (ContractType.UNDELEGATE, {"bucketId": "b1"})

    def test_withdraw_and_claim(self):
        assert create_withdraw(WithdrawType.STAKING_REWARD) == (ContractType.WITHDRAW, {"withdrawType": 0})
        assert create_claim(ClaimType.ALLOWANCE_CLAIM, "x") == (ContractType.CLAIM, {"claimType": 1, "id": "x"})

    def test_vote(self):
        assert create_vote(4, VoteType.ABSTAIN, 100) == (
            ContractType.VOTE, {"proposalId": 4, "type": 2, "amount": 100},
        )

    def test_fungible_token(self, receiver):
        kind, params = create_fungible_token("Token", "TKN", receiver, precision=6, max_supply=10 ** 9)
        assert kind is ContractType.CREATE_ASSET
        assert params["type"] == AssetType.FUNGIBLE
        assert "initialSupply" not in params

    def test_nft_collection(self, receiver):
        _, params = create_nft_collection("Coll", "COLL", receiver, uris={"web": "https://example.org"})
        assert params["type"] == AssetType.NON_FUNGIBLE
        assert params["precision"] == 0
        assert params["maxSupply"] == 0
        assert params["uris"] == {"web": "https://example.org"}

    def test_validator(self, receiver):
        _, params = create_validator("ab" * 96, receiver, 10, can_delegate=True)
        assert params == {"blsPublicKey": "ab" * 96, "ownerAddress": receiver, "commission": 10, "canDelegate": True}

    def test_smart_contract_call(self, receiver):
        assert create_smart_contract_call(receiver, SCType.INVOKE, {"KLV": 1}) == (
            ContractType.SMART_CONTRACT, {"address": receiver, "scType": 0, "callValue": {"KLV": 1}},
        )

    def test_helpers_feed_builder(self, receiver):
        """Test that every helper output is accepted by add_operation."""
        builder = TransactionBuilder()
        builder.add_operation(*create_transfer(receiver, to_units("1.5")))
        builder.add_operation(*create_freeze(1))
        builder.add_operation(*create_unfreeze("KLV"))
        builder.add_operation(*create_delegate(receiver, "b1"))
        builder.add_operation(*create_undelegate("b1"))
        builder.add_operation(*create_withdraw(WithdrawType.KDA_POOL, kda="KFI"))
        builder.add_operation(*create_claim(ClaimType.STAKING_CLAIM))
        builder.add_operation(*create_fungible_token("Token", "TKN", receiver, 6, 1000, initial_supply=10))
        builder.add_operation(*create_nft_collection("Coll", "COLL", receiver, properties={"canMint": True}))
        builder.add_operation(*create_validator("ab" * 96, receiver, 5))
        builder.add_operation(*create_vote(1, VoteType.YES))
        builder.add_operation(*create_smart_contract_call(receiver))
        assert len(builder) == 12
        assert builder.operations[0] == Transfer(receiver=receiver, amount=1_500_000)
        assert isinstance(builder.operations[7], CreateAsset)


@pytest.mark.unit
class TestNodeOnlyHelpers:
    """Test helpers for kinds that are built through the node."""

    def test_transfer_with_royalties(self, receiver):
        assert create_transfer_with_royalties(receiver, 5, kda="NFT-1/1", kda_royalties=2) == (
            ContractType.TRANSFER,
            {"receiver": receiver, "amount": 5, "kda": "NFT-1/1", "kdaRoyalties": 2},
        )

    @pytest.mark.parametrize("pair,trigger,extra", [
        (create_burn("TKN-1", 10), AssetTriggerType.BURN, {"amount": 10}),
        (create_pause("TKN-1"), AssetTriggerType.PAUSE, {}),
        (create_resume("TKN-1"), AssetTriggerType.RESUME, {}),
        (create_mint_nft("TKN-1"), AssetTriggerType.MINT, {}),
    ])
    def test_asset_triggers(self, pair, trigger, extra):
        kind, params = pair
        assert kind is ContractType.ASSET_TRIGGER
        assert params == {"triggerType": int(trigger), "assetId": "TKN-1", **extra}

    def test_mint_and_wipe_receivers(self, receiver):
        _, mint = create_mint_nft("COLL-1", receiver=receiver, uris={"img": "ipfs://x"}, mime="image/png")
        assert mint == {"triggerType": 0, "assetId": "COLL-1", "receiver": receiver,
                        "uris": {"img": "ipfs://x"}, "mime": "image/png"}
        _, wipe = create_wipe("TKN-1", receiver, 3)
        assert wipe == {"triggerType": 2, "assetId": "TKN-1", "receiver": receiver, "amount": 3}

    def test_proposal(self):
        assert create_proposal({3: 100}, description="raise fee", epochs_duration=10) == (
            ContractType.PROPOSAL,
            {"parameters": {3: "100"}, "description": "raise fee", "epochsDuration": 10},
        )

    def test_set_account_name(self):
        assert create_set_account_name("alice") == (ContractType.SET_ACCOUNT_NAME, {"name": "alice"})

    def test_kept_as_opaque(self):
        builder = TransactionBuilder()
        builder.add_operation(*create_burn("TKN-1", 10))
        builder.add_operation(*create_set_account_name("alice"))
        assert builder.operations[0] == OpaqueOperation(
            contract_type=11, params={"triggerType": 1, "assetId": "TKN-1", "amount": 10},
        )
        assert builder.operations[1].contract_type == 12

    @pytest.mark.asyncio
    async def test_sent_through_node(self, client_factory, sender):
        client = client_factory(response={"result": {"RawData": {"Nonce": 4}}})
        builder = TransactionBuilder(client).set_sender(sender).set_nonce(4)
        builder.add_operation(*create_pause("TKN-1"))
        builder.add_operation(*create_proposal({1: "5"}))
        tx = await builder.build()
        assert tx.raw_data.nonce == 4
        assert client.requests[0]["contracts"] == [
            {"contractType": 11, "triggerType": 3, "assetId": "TKN-1"},
            {"contractType": 13, "parameters": {1: "5"}},
        ]


@pytest.mark.unit
class TestUnits:
    """Test exact display/base unit conversion."""

    @pytest.mark.parametrize("amount,precision,expected", [
        ("1.5", 6, 1_500_000),
        ("0.000001", 6, 1),
        (1, 6, 1_000_000),
        (Decimal("2.25"), 2, 225),
        ("123456789.123456", 6, 123456789123456),
        ("7", 0, 7),
    ])
    def test_to_units(self, amount, precision, expected):
        assert to_units(amount, precision) == expected

    @pytest.mark.parametrize("amount", ["0.0000001", 1.5, True, "abc", "inf"])
    def test_to_units_rejected(self, amount):
        with pytest.raises(InvalidAmountError):
            to_units(amount)

    def test_from_units(self):
        assert from_units(1_500_000) == Decimal("1.5")
        assert from_units("1", 8) == Decimal("0.00000001")

    def test_klv_shortcuts(self):
        assert to_klv_units("1.5") == 1_500_000
        assert from_klv_units("1500000") == Decimal("1.5")
        assert from_klv_units(to_klv_units("0.000001")) == Decimal("0.000001")

    def test_from_units_rejects_fractions(self):
        with pytest.raises(InvalidAmountError):
            from_units("1.5")
