"""
Analysis module for parsing Anchor IDL documents.
"""

from .models import (
    Idl,
    IdlInstruction,
    IdlAccount,
    IdlArg,
    IdlPda,
    Seed,
    ConstSeed,
    AccountSeed,
    ArgSeed,
    UnknownSeed,
    ProgramMetadata,
)
from .idl_parser import IDLParser

__all__ = [
    "Idl",
    "IdlInstruction",
    "IdlAccount",
    "IdlArg",
    "IdlPda",
    "Seed",
    "ConstSeed",
    "AccountSeed",
    "ArgSeed",
    "UnknownSeed",
    "ProgramMetadata",
    "IDLParser",
]
