"""
EIP-712 typed-data derivation for arbitrary JSON-like values.

Every nested object becomes its own struct type, named by the dotted path
from the root type (``tx_container_v0.headers``, ``tx_container_v0.tx.payload``).
Field lists keep the key order of the input value; the hash depends on it.
"""
import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Tuple

from eth_account.messages import encode_typed_data
from eth_utils import keccak
from eth_utils.exceptions import ValidationError

from .exceptions import TypedDataError

logger = logging.getLogger(__name__)

DEFAULT_PRIMARY_TYPE = "tx_container_v0"
DOMAIN_NAME = "vsc.network"
EIP712_DOMAIN_TYPE = [{"name": "name", "type": "string"}]

TypeFields = List[Dict[str, str]]


def _primitive_type(value: Any, path: str) -> str:
    # bool is an int subclass, check it first
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        if value < 0:
            raise TypedDataError(f"negative number at {path} cannot be typed as uint256")
        return "uint256"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (bytes, bytearray)):
        return "bytes"
    if isinstance(value, float):
        raise TypedDataError(f"non-integral number at {path} cannot be typed as uint256")
    if value is None:
        raise TypedDataError(f"null value at {path} has no typed-data representation")
    raise TypedDataError(f"unsupported value of type {type(value).__name__} at {path}")


def _element_type(items: Any, path: str) -> Tuple[str, Dict[str, TypeFields]]:
    """Type of an array's elements, inferred from its first element."""
    if len(items) == 0:
        raise TypedDataError(f"cannot infer element type of empty array at {path}")

    first = items[0]
    if isinstance(first, Mapping):
        fields, types = _walk(first, path)
        types[path] = fields
        return path, types
    if isinstance(first, (list, tuple)):
        inner, types = _element_type(first, path)
        return f"{inner}[]", types
    return _primitive_type(first, path), {}


def _walk(value: Mapping, prefix: str) -> Tuple[TypeFields, Dict[str, TypeFields]]:
    fields: TypeFields = []
    types: Dict[str, TypeFields] = {}

    for key, item in value.items():
        path = f"{prefix}.{key}"
        if isinstance(item, Mapping):
            sub_fields, sub_types = _walk(item, path)
            types.update(sub_types)
            types[path] = sub_fields
            fields.append({"name": key, "type": path})
        elif isinstance(item, (list, tuple)):
            element, sub_types = _element_type(item, path)
            types.update(sub_types)
            fields.append({"name": key, "type": f"{element}[]"})
        else:
            fields.append({"name": key, "type": _primitive_type(item, path)})

    return fields, types


def derive_typed_data(value: Mapping, primary_type: str = DEFAULT_PRIMARY_TYPE) -> Dict[str, Any]:
    """
    Derive an EIP-712 typed-data structure describing ``value``.

    Args:
        value: JSON-like mapping to describe; used verbatim as the message
        primary_type: Name of the root struct type

    Returns:
        Dictionary with ``types``, ``primaryType``, ``domain`` and ``message``,
        accepted as-is by eth_account's ``encode_typed_data(full_message=...)``

    Raises:
        TypedDataError: If the value is not a mapping, or holds an empty array,
            a null, or a negative or non-integral number
    """
    if not isinstance(value, Mapping):
        raise TypedDataError(f"typed data root must be an object, got {type(value).__name__}")

    fields, subtypes = _walk(value, primary_type)

    types: Dict[str, TypeFields] = {"EIP712Domain": list(EIP712_DOMAIN_TYPE)}
    types.update(subtypes)
    types[primary_type] = fields

    return {
        "types": types,
        "primaryType": primary_type,
        "domain": {"name": DOMAIN_NAME},
        "message": value,
    }


def hash_typed_data(typed_data: Dict[str, Any]) -> bytes:
    """
    Compute the EIP-712 digest keccak256(0x19 0x01 || domainSeparator || hashStruct(message)).

    Raises:
        TypedDataError: If eth_account rejects the structure
    """
    try:
        signable = encode_typed_data(full_message=typed_data)
    except (TypeError, ValueError, KeyError, ValidationError) as e:
        raise TypedDataError(f"Typed data could not be encoded: {e}") from e
    return keccak(b"\x19" + signable.version + signable.header + signable.body)
