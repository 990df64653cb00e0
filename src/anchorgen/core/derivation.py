"""
Local PDA derivation.

Recomputes the addresses a generated client derives, from the same seed
rules and the same per-type encodings, using solders.
"""

import logging
from typing import Any, Dict, List, Sequence, Tuple, Union

from solders.pubkey import Pubkey

from ..analysis.models import (
    Idl,
    IdlArg,
    Seed,
    ConstSeed,
    AccountSeed,
    ArgSeed,
    UnknownSeed,
)
from ..codegen.seeds import (
    SeedEncoding,
    INTEGER_LAYOUTS,
    DEFAULT_ARG_TYPE,
    encoding_for_type,
)
from ..errors import InvalidSchemaError

logger = logging.getLogger(__name__)

PubkeyLike = Union[Pubkey, str, bytes]


def to_pubkey(value: PubkeyLike) -> Pubkey:
    """Accept a Pubkey, a base58 string or 32 raw bytes."""
    if isinstance(value, Pubkey):
        return value
    if isinstance(value, str):
        return Pubkey.from_string(value)
    if isinstance(value, (bytes, bytearray)):
        return Pubkey(bytes(value))
    raise TypeError(f"Cannot convert {type(value).__name__} to Pubkey")


def _raw_bytes(value: Any) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, list):
        return bytes(value)
    raise TypeError(f"Cannot use {type(value).__name__} as a raw seed")


def encode_value(value: Any, type_string: str) -> bytes:
    """Encode an argument value the way the generated client does."""
    encoding = encoding_for_type(type_string)

    if encoding is SeedEncoding.RAW:
        return _raw_bytes(value)
    if encoding is SeedEncoding.U8:
        return int(value).to_bytes(1, "little")
    if encoding is SeedEncoding.I8:
        value = int(value)
        return (value + 256 if value < 0 else value).to_bytes(1, "little")
    if encoding is SeedEncoding.BOOL:
        if isinstance(value, str):
            value = value.strip().lower() in ("1", "true", "yes")
        return b"\x01" if value else b"\x00"
    if encoding is SeedEncoding.PUBKEY:
        return bytes(to_pubkey(value))
    if encoding in INTEGER_LAYOUTS:
        width, signed = INTEGER_LAYOUTS[encoding]
        return int(value).to_bytes(width, "little", signed=signed)
    if encoding is SeedEncoding.UNVERIFIED:
        logger.warning("Unverified seed type '%s'; using raw bytes", type_string)
        return _raw_bytes(value)
    raise AssertionError(f"Unhandled seed encoding: {encoding}")


def seed_to_bytes(seed: Seed, values: Dict[str, Any], args: Sequence[IdlArg]) -> bytes:
    """
    Encode one seed from concrete values keyed by parameter name.

    Raises:
        InvalidSchemaError: On an unknown seed kind or missing seed payload
        KeyError: If a required parameter value is not supplied
    """
    if isinstance(seed, ConstSeed):
        return seed.as_bytes()

    if isinstance(seed, AccountSeed):
        if not seed.path:
            raise InvalidSchemaError("Account seed is missing its 'path'")
        return bytes(to_pubkey(values[seed.param_name]))

    if isinstance(seed, ArgSeed):
        if not seed.path:
            raise InvalidSchemaError("Arg seed is missing its 'path'")
        type_string = DEFAULT_ARG_TYPE
        for arg in args:
            if arg.name == seed.path:
                type_string = arg.type_string
                break
        return encode_value(values[seed.param_name], type_string)

    if isinstance(seed, UnknownSeed):
        raise InvalidSchemaError(f"Unknown seed kind: {seed.kind}")

    raise InvalidSchemaError(f"Unsupported seed: {seed!r}")


def derive_address(
    program_id: PubkeyLike,
    seeds: Sequence[Seed],
    values: Dict[str, Any],
    args: Sequence[IdlArg] = (),
) -> Tuple[Pubkey, int]:
    """Derive (address, bump) for a seed list."""
    seed_bytes: List[bytes] = [seed_to_bytes(seed, values, args) for seed in seeds]
    return Pubkey.find_program_address(seed_bytes, to_pubkey(program_id))


def derive_account_address(
    idl: Idl,
    account_name: str,
    program_id: PubkeyLike,
    values: Dict[str, Any],
) -> Tuple[Pubkey, int]:
    """
    Derive the PDA for a named account, using its first definition in the IDL
    (the same one the generated `get<Name>PDA` helper uses).
    """
    found = idl.find_pda_account(account_name)
    if found is None:
        raise InvalidSchemaError(f"No PDA account named '{account_name}' in IDL")
    instruction, account = found
    return derive_address(program_id, account.pda.seeds, values, instruction.args)
