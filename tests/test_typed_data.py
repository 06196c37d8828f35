"""
Tests for EIP-712 typed-data derivation.
"""
import pytest
from eth_account import Account
from eth_account.messages import encode_typed_data
from hypothesis import given, settings, strategies as st

from vsc_client import codec
from vsc_client.envelope import HeaderShape, build_envelope
from vsc_client.exceptions import TypedDataError
from vsc_client.typed_data import (
    DEFAULT_PRIMARY_TYPE, derive_typed_data, hash_typed_data
)
from conftest import TEST_INTENT, TEST_PRIV_KEY


def test_flat_object():
    typed = derive_typed_data({"name": "alice", "amount": 5, "active": True})

    assert typed["primaryType"] == DEFAULT_PRIMARY_TYPE
    assert typed["domain"] == {"name": "vsc.network"}
    assert typed["types"]["EIP712Domain"] == [{"name": "name", "type": "string"}]
    assert typed["types"][DEFAULT_PRIMARY_TYPE] == [
        {"name": "name", "type": "string"},
        {"name": "amount", "type": "uint256"},
        {"name": "active", "type": "bool"},
    ]


def test_nested_objects_named_by_dotted_path():
    value = {"a": {"b": {"c": "deep"}, "n": 1}}
    typed = derive_typed_data(value, primary_type="root")

    assert typed["types"]["root"] == [{"name": "a", "type": "root.a"}]
    assert typed["types"]["root.a"] == [
        {"name": "b", "type": "root.a.b"},
        {"name": "n", "type": "uint256"},
    ]
    assert typed["types"]["root.a.b"] == [{"name": "c", "type": "string"}]


def test_message_is_original_value():
    value = {"k": "v"}
    assert derive_typed_data(value)["message"] is value


def test_array_type_from_first_element():
    typed = derive_typed_data({"auths": ["did:a", "did:b"], "nums": [1, 2], "grid": [[1], [2]]})
    fields = typed["types"][DEFAULT_PRIMARY_TYPE]

    assert fields == [
        {"name": "auths", "type": "string[]"},
        {"name": "nums", "type": "uint256[]"},
        {"name": "grid", "type": "uint256[][]"},
    ]


def test_array_of_objects_gets_struct_type():
    typed = derive_typed_data({"items": [{"id": 1}, {"id": 2}]}, primary_type="root")

    assert typed["types"]["root"] == [{"name": "items", "type": "root.items[]"}]
    assert typed["types"]["root.items"] == [{"name": "id", "type": "uint256"}]


@pytest.mark.parametrize("value, message", [
    ({"list": []}, "empty array"),
    ({"v": None}, "null"),
    ({"v": -1}, "negative"),
    ({"v": 1.5}, "non-integral"),
    ({"v": object()}, "unsupported"),
])
def test_unsupported_values(value, message):
    with pytest.raises(TypedDataError, match=message):
        derive_typed_data(value)


def test_root_must_be_object():
    with pytest.raises(TypedDataError, match="root must be an object"):
        derive_typed_data(["not", "an", "object"])


def test_transaction_container_schema():
    """A container normalized through the codec has a headers struct type"""
    container = build_envelope(TEST_INTENT, HeaderShape("did:pkh:eip155:1:0xabc", nonce=3))
    typed = derive_typed_data(codec.decode(codec.encode(container.to_wire())))
    types = typed["types"]

    root_fields = {f["name"]: f["type"] for f in types[DEFAULT_PRIMARY_TYPE]}
    assert root_fields["headers"] == "tx_container_v0.headers"
    assert root_fields["tx"] == "tx_container_v0.tx"
    assert root_fields["__v"] == "string"

    header_fields = {f["name"]: f["type"] for f in types["tx_container_v0.headers"]}
    assert header_fields == {"type": "uint256", "nonce": "uint256", "required_auths": "string[]"}
    assert {"name": "payload", "type": "tx_container_v0.tx.payload"} in types["tx_container_v0.tx"]


@settings(max_examples=50)
@given(value=st.dictionaries(
    st.text(min_size=1, max_size=8, alphabet="abcdefghij_"),
    st.one_of(st.text(max_size=10), st.integers(0, 10 ** 6), st.booleans()),
    min_size=1, max_size=6,
))
def test_derivation_is_deterministic(value):
    first = derive_typed_data(value)
    second = derive_typed_data(dict(value))
    assert first["types"] == second["types"]
    assert [f["name"] for f in first["types"][DEFAULT_PRIMARY_TYPE]] == list(value.keys())


def test_hash_matches_eth_account():
    typed = derive_typed_data({"from": "alice", "amount": 10, "meta": {"memo": "hi"}})
    digest = hash_typed_data(typed)

    signed = Account.from_key(TEST_PRIV_KEY).sign_message(encode_typed_data(full_message=typed))
    assert len(digest) == 32
    assert digest == bytes(signed.message_hash)


def test_hash_depends_on_field_order():
    a = hash_typed_data(derive_typed_data({"x": 1, "y": 2}))
    b = hash_typed_data(derive_typed_data({"y": 2, "x": 1}))
    assert a != b


def test_hash_is_deterministic():
    value = {"x": 1, "nested": {"y": "z"}}
    assert hash_typed_data(derive_typed_data(value)) == hash_typed_data(derive_typed_data(value))
