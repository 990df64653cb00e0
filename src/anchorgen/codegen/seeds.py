"""
Seed resolution: turns a PDA seed list into function parameters and the
TypeScript buffer expressions that reproduce each seed's bytes.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

from ..errors import InvalidSchemaError, UnresolvableReferenceError
from ..analysis.models import (
    Seed,
    ConstSeed,
    AccountSeed,
    ArgSeed,
    UnknownSeed,
    IdlArg,
)

logger = logging.getLogger(__name__)


class SeedEncoding(Enum):
    """How an argument value is turned into seed bytes."""
    RAW = "raw"              # strings and byte vectors, passed through
    U8 = "u8"
    I8 = "i8"
    U16 = "u16"
    I16 = "i16"
    U32 = "u32"
    I32 = "i32"
    U64 = "u64"
    I64 = "i64"
    BOOL = "bool"
    PUBKEY = "pubkey"
    NUMERIC = "numeric"      # unrecognized integer type, encoded as u32
    UNVERIFIED = "unverified"


TYPE_ENCODINGS: Dict[str, SeedEncoding] = {
    "string": SeedEncoding.RAW,
    "bytes": SeedEncoding.RAW,
    "Vec<u8>": SeedEncoding.RAW,
    "u8": SeedEncoding.U8,
    "i8": SeedEncoding.I8,
    "u16": SeedEncoding.U16,
    "i16": SeedEncoding.I16,
    "u32": SeedEncoding.U32,
    "i32": SeedEncoding.I32,
    "u64": SeedEncoding.U64,
    "i64": SeedEncoding.I64,
    "bool": SeedEncoding.BOOL,
    "pubkey": SeedEncoding.PUBKEY,
    "publicKey": SeedEncoding.PUBKEY,
    "Pubkey": SeedEncoding.PUBKEY,
    "PublicKey": SeedEncoding.PUBKEY,
    "defined_Pubkey": SeedEncoding.PUBKEY,
    "defined_PublicKey": SeedEncoding.PUBKEY,
}

# (byte width, two's complement) for fixed-width little-endian integers
INTEGER_LAYOUTS = {
    SeedEncoding.U16: (2, False),
    SeedEncoding.I16: (2, True),
    SeedEncoding.U32: (4, False),
    SeedEncoding.I32: (4, True),
    SeedEncoding.U64: (8, False),
    SeedEncoding.I64: (8, True),
    SeedEncoding.NUMERIC: (4, False),
}

# Fallback type when an arg seed names no declared argument
DEFAULT_ARG_TYPE = "string"


def encoding_for_type(type_string: str) -> SeedEncoding:
    """Select the seed encoding for a collapsed IDL type string."""
    encoding = TYPE_ENCODINGS.get(type_string)
    if encoding is not None:
        return encoding
    if type_string.startswith(("u", "i")):
        return SeedEncoding.NUMERIC
    return SeedEncoding.UNVERIFIED


@dataclass(frozen=True)
class SeedBuffer:
    """One element of the seed array in a generated PDA function."""
    expression: str
    note: Optional[str] = None  # Rendered as a trailing comment

    def render(self) -> str:
        if self.note:
            return f"{self.expression}, // {self.note}"
        return f"{self.expression},"


@dataclass
class ResolvedSeeds:
    """Parameters a derivation needs and one buffer expression per seed."""
    params: List[str] = field(default_factory=list)
    buffers: List[SeedBuffer] = field(default_factory=list)

    def add_param(self, name: str):
        if name not in self.params:
            self.params.append(name)


def _js_string(text: str) -> str:
    escaped = (
        text.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f"'{escaped}'"


def const_buffer(value: bytes) -> SeedBuffer:
    """Buffer literal for a constant seed."""
    try:
        text = value.decode("utf-8")
    except UnicodeDecodeError:
        return SeedBuffer(f"Buffer.from('0x{value.hex()}'.slice(2), 'hex')")
    return SeedBuffer(f"Buffer.from({_js_string(text)})")


def arg_buffer(param: str, type_string: str) -> SeedBuffer:
    """Buffer expression for an argument seed of the given type."""
    encoding = encoding_for_type(type_string)

    if encoding is SeedEncoding.RAW:
        return SeedBuffer(f"Buffer.from({param})")
    if encoding is SeedEncoding.U8:
        return SeedBuffer(f"Buffer.from([{param}])")
    if encoding is SeedEncoding.I8:
        return SeedBuffer(f"Buffer.from([{param} < 0 ? {param} + 256 : {param}])")
    if encoding is SeedEncoding.BOOL:
        return SeedBuffer(f"Buffer.from([{param} ? 1 : 0])")
    if encoding is SeedEncoding.PUBKEY:
        return SeedBuffer(f"{param}.toBuffer()")
    if encoding in (SeedEncoding.U64, SeedEncoding.I64):
        twos = ".toTwos(64)" if encoding is SeedEncoding.I64 else ""
        return SeedBuffer(f"Buffer.from(new anchor.BN({param}){twos}.toArray('le', 8))")
    if encoding in INTEGER_LAYOUTS:
        width, signed = INTEGER_LAYOUTS[encoding]
        twos = f".toTwos({width * 8})" if signed else ""
        return SeedBuffer(f"new anchor.BN({param}){twos}.toArrayLike(Buffer, 'le', {width})")
    if encoding is SeedEncoding.UNVERIFIED:
        logger.warning("Unverified seed type '%s' for '%s'; emitting raw buffer", type_string, param)
        return SeedBuffer(
            f"Buffer.from({param})",
            note=f"TODO: Verify type handling for '{type_string}'",
        )
    raise AssertionError(f"Unhandled seed encoding: {encoding}")


def resolve_seeds(
    seeds: Sequence[Seed],
    args: Sequence[IdlArg],
    instruction: Optional[str] = None,
    strict: bool = False,
) -> ResolvedSeeds:
    """
    Resolve a PDA seed list against the enclosing instruction's arguments.

    Args:
        seeds: Seeds in derivation order
        args: The instruction's arguments (used to type `arg` seeds)
        instruction: Instruction name, for diagnostics
        strict: Raise instead of falling back when an `arg` seed is unresolvable

    Returns:
        ResolvedSeeds with first-seen parameters and one buffer per seed

    Raises:
        InvalidSchemaError: On an unknown seed kind or a seed missing its payload
        UnresolvableReferenceError: In strict mode, for an unknown `arg` path
    """
    resolved = ResolvedSeeds()
    arg_types = {arg.name: arg.type_string for arg in args}

    for seed in seeds:
        if isinstance(seed, ConstSeed):
            resolved.buffers.append(const_buffer(seed.as_bytes()))

        elif isinstance(seed, AccountSeed):
            if not seed.path:
                raise InvalidSchemaError("Account seed is missing its 'path'")
            param = seed.param_name
            resolved.add_param(param)
            # Account seeds are always addresses
            resolved.buffers.append(SeedBuffer(f"{param}.toBuffer()"))

        elif isinstance(seed, ArgSeed):
            if not seed.path:
                raise InvalidSchemaError("Arg seed is missing its 'path'")
            param = seed.param_name
            resolved.add_param(param)
            type_string = arg_types.get(param)
            if type_string is None:
                if strict:
                    raise UnresolvableReferenceError(param, instruction)
                logger.warning(
                    "Seed argument '%s' not declared by instruction '%s'; assuming %s",
                    param, instruction or "?", DEFAULT_ARG_TYPE,
                )
                type_string = DEFAULT_ARG_TYPE
            resolved.buffers.append(arg_buffer(param, type_string))

        elif isinstance(seed, UnknownSeed):
            raise InvalidSchemaError(f"Unknown seed kind: {seed.kind}")

        else:
            raise InvalidSchemaError(f"Unsupported seed: {seed!r}")

    return resolved
