"""
Data models for Anchor IDL documents.

These models represent the parts of a program's IDL that client generation
consumes: instructions, their accounts and arguments, and the seed rules of
program derived addresses.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Any, Union

from ..errors import InvalidSchemaError


@dataclass(frozen=True)
class ConstSeed:
    """A literal byte sequence embedded verbatim."""
    value: Any  # bytes once parsed; anything else is rejected by as_bytes()
    kind: str = "const"

    def as_bytes(self) -> bytes:
        if self.value is None:
            raise InvalidSchemaError("Const seed is missing its 'value'")
        if not isinstance(self.value, bytes):
            raise InvalidSchemaError(f"Const seed is not a byte array: {self.value!r}")
        return self.value


@dataclass(frozen=True)
class AccountSeed:
    """The address of another account, e.g. `feedback_board.creator`."""
    path: Optional[str]
    kind: str = "account"

    @property
    def param_name(self) -> Optional[str]:
        """Only the final path segment names the parameter."""
        if self.path is None:
            return None
        return self.path.split(".")[-1]


@dataclass(frozen=True)
class ArgSeed:
    """The encoded value of one of the instruction's arguments."""
    path: Optional[str]
    kind: str = "arg"

    @property
    def param_name(self) -> Optional[str]:
        return self.path


@dataclass(frozen=True)
class UnknownSeed:
    """A seed kind the generator does not understand (rejected on resolution)."""
    kind: str
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)


Seed = Union[ConstSeed, AccountSeed, ArgSeed, UnknownSeed]


@dataclass(frozen=True)
class IdlPda:
    """Derivation rule for a program derived address. Seed order is significant."""
    seeds: List[Seed] = field(default_factory=list)


@dataclass(frozen=True)
class IdlArg:
    """An instruction argument."""
    name: str
    arg_type: Any  # Raw type from IDL: string or object

    @property
    def type_string(self) -> str:
        """Collapse the raw type into a single string for encoding lookup."""
        if isinstance(self.arg_type, str):
            return self.arg_type
        if isinstance(self.arg_type, dict):
            if "option" in self.arg_type:
                return f"option_{_inner_name(self.arg_type['option'])}"
            if "defined" in self.arg_type:
                return f"defined_{_inner_name(self.arg_type['defined'])}"
        return "unknown"


def _inner_name(value: Any) -> str:
    if isinstance(value, str):
        return value
    # Anchor >= 0.30 wraps defined types as {"name": "MyType"}
    if isinstance(value, dict) and isinstance(value.get("name"), str):
        return value["name"]
    return "unknown"


@dataclass(frozen=True)
class IdlAccount:
    """An account slot required by an instruction."""
    name: str
    # New format
    writable: Optional[bool] = None
    signer: Optional[bool] = None
    # Old format
    is_mut: Optional[bool] = None
    is_signer_legacy: Optional[bool] = None

    address: Optional[str] = None  # Fixed address, if any
    pda: Optional[IdlPda] = None

    def is_writable(self) -> bool:
        if self.writable is not None:
            return self.writable
        if self.is_mut is not None:
            return self.is_mut
        return False

    def is_signer(self) -> bool:
        if self.signer is not None:
            return self.signer
        if self.is_signer_legacy is not None:
            return self.is_signer_legacy
        return False


@dataclass(frozen=True)
class IdlInstruction:
    """A single callable instruction."""
    name: str
    accounts: List[IdlAccount] = field(default_factory=list)
    args: List[IdlArg] = field(default_factory=list)

    def get_arg(self, name: str) -> Optional[IdlArg]:
        for arg in self.args:
            if arg.name == name:
                return arg
        return None

    @property
    def pda_accounts(self) -> List[IdlAccount]:
        return [acc for acc in self.accounts if acc.pda is not None]


@dataclass(frozen=True)
class Idl:
    """A parsed program IDL."""
    instructions: List[IdlInstruction] = field(default_factory=list)

    # Metadata
    name: Optional[str] = None
    version: Optional[str] = None
    address: Optional[str] = None

    # Carried through untouched
    accounts: Optional[List[Any]] = None
    events: Optional[List[Any]] = None
    errors: Optional[List[Any]] = None
    types: Optional[List[Any]] = None

    def get_instruction(self, name: str) -> Optional[IdlInstruction]:
        """Get instruction by name."""
        for ix in self.instructions:
            if ix.name == name:
                return ix
        return None

    def find_pda_account(self, name: str) -> Optional[tuple]:
        """Return the first (instruction, account) pair deriving `name`."""
        for ix in self.instructions:
            for acc in ix.accounts:
                if acc.name == name and acc.pda is not None:
                    return ix, acc
        return None

    def summary(self) -> str:
        """Return a human-readable summary."""
        lines = [
            f"Program: {self.name or 'Unknown'}",
            f"Instructions: {len(self.instructions)}",
        ]
        for ix in self.instructions:
            pdas = [acc.name for acc in ix.pda_accounts]
            pda_str = f" (PDAs: {', '.join(pdas)})" if pdas else ""
            lines.append(f"  • {ix.name}{pda_str}")
        return "\n".join(lines)


@dataclass
class ProgramMetadata:
    """A configured program dependency."""
    name: str
    program_id: str
    network: str = "devnet"
    version: Optional[str] = None
    idl_path: Optional[str] = None  # Custom IDL location
    dev: bool = False
