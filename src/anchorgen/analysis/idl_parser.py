"""
IDL Parser for Anchor programs.

Parses Anchor IDL JSON into the typed models used by client generation.
Both the legacy (`isMut`/`isSigner`) and current (`writable`/`signer`)
account conventions are accepted.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Any, Union

from ..errors import InvalidSchemaError
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
)

logger = logging.getLogger(__name__)


class IDLParser:
    """
    Parser for Anchor IDL files.

    Only structural requirements are checked here (instruction list, names,
    argument types). Seed kinds and argument types are interpreted later,
    when a seed is actually encoded.
    """

    def parse_file(self, path: Union[str, Path]) -> Idl:
        """Parse an IDL file from disk."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"IDL file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                content = f.read()
        except UnicodeDecodeError as e:
            raise InvalidSchemaError(f"IDL is not valid UTF-8 ({path}): {e}") from e

        return self.parse_json(content, source=str(path))

    def parse_json(self, content: str, source: str = "<string>") -> Idl:
        """Parse an IDL from a JSON string."""
        try:
            idl_data = json.loads(content)
        except json.JSONDecodeError as e:
            raise InvalidSchemaError(f"IDL is not valid JSON ({source}): {e}") from e

        return self.parse(idl_data)

    def parse(self, idl: Dict) -> Idl:
        """Parse an IDL dictionary."""
        if not isinstance(idl, dict):
            raise InvalidSchemaError("IDL document must be a JSON object")

        instructions = idl.get("instructions")
        if not isinstance(instructions, list):
            raise InvalidSchemaError("IDL is missing the 'instructions' list")

        metadata = idl.get("metadata") or {}
        if not isinstance(metadata, dict):
            metadata = {}

        parsed = [self._parse_instruction(ix_data) for ix_data in instructions]
        logger.debug("Parsed %d instructions", len(parsed))

        return Idl(
            instructions=parsed,
            name=idl.get("name") or metadata.get("name"),
            version=idl.get("version") or metadata.get("version"),
            address=idl.get("address") or metadata.get("address"),
            accounts=idl.get("accounts"),
            events=idl.get("events"),
            errors=idl.get("errors"),
            types=idl.get("types"),
        )

    def _parse_instruction(self, ix_data: Any) -> IdlInstruction:
        """Parse a single instruction from IDL."""
        if not isinstance(ix_data, dict):
            raise InvalidSchemaError("Instruction entries must be objects")

        name = ix_data.get("name")
        if not isinstance(name, str):
            raise InvalidSchemaError("Instruction is missing a 'name'")

        accounts = [
            self._parse_instruction_account(acc_data, name)
            for acc_data in _optional_list(ix_data.get("accounts"), f"'{name}' accounts")
        ]
        arguments = [
            self._parse_argument(arg_data, name)
            for arg_data in _optional_list(ix_data.get("args"), f"'{name}' args")
        ]

        return IdlInstruction(name=name, accounts=accounts, args=arguments)

    def _parse_instruction_account(self, acc_data: Any, ix_name: str) -> IdlAccount:
        """Parse an account from an instruction's account list."""
        if not isinstance(acc_data, dict) or not isinstance(acc_data.get("name"), str):
            raise InvalidSchemaError(f"Account in '{ix_name}' is missing a 'name'")

        pda = None
        pda_data = acc_data.get("pda")
        if isinstance(pda_data, dict):
            seeds = _optional_list(pda_data.get("seeds"), f"'{acc_data['name']}' seeds")
            pda = IdlPda(seeds=[self._parse_seed(s) for s in seeds])

        return IdlAccount(
            name=acc_data["name"],
            writable=_optional_bool(acc_data.get("writable")),
            signer=_optional_bool(acc_data.get("signer")),
            is_mut=_optional_bool(acc_data.get("isMut")),
            is_signer_legacy=_optional_bool(acc_data.get("isSigner")),
            address=acc_data.get("address"),
            pda=pda,
        )

    def _parse_argument(self, arg_data: Any, ix_name: str) -> IdlArg:
        """Parse an instruction argument."""
        if not isinstance(arg_data, dict) or not isinstance(arg_data.get("name"), str):
            raise InvalidSchemaError(f"Argument in '{ix_name}' is missing a 'name'")
        if "type" not in arg_data:
            raise InvalidSchemaError(
                f"Argument '{arg_data['name']}' in '{ix_name}' is missing a 'type'"
            )

        return IdlArg(name=arg_data["name"], arg_type=arg_data["type"])

    def _parse_seed(self, seed_data: Any) -> Seed:
        """Map a raw seed onto its variant. Unknown kinds are kept for later rejection."""
        if not isinstance(seed_data, dict):
            return UnknownSeed(kind=repr(seed_data))

        kind = seed_data.get("kind")
        if kind == "const":
            return ConstSeed(value=_seed_bytes(seed_data.get("value")))
        if kind == "account":
            return AccountSeed(path=_seed_path(seed_data.get("path")))
        if kind == "arg":
            return ArgSeed(path=_seed_path(seed_data.get("path")))
        return UnknownSeed(kind=str(kind), raw=seed_data)


def _optional_list(value: Any, what: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise InvalidSchemaError(f"Expected a list for {what}, got {type(value).__name__}")
    return value


def _optional_bool(value: Any) -> Optional[bool]:
    # Anything but a JSON boolean is ignored so a role flag is never guessed
    if isinstance(value, bool):
        return value
    if value is not None:
        logger.warning("Ignoring non-boolean account flag: %r", value)
    return None


def _seed_path(value: Any) -> Optional[str]:
    # A non-string path is treated like a missing one and rejected on resolution
    return value if isinstance(value, str) else None


def _seed_bytes(value: Any) -> Any:
    # Current IDLs store const seeds as byte arrays, older ones as strings.
    # Values that are neither are kept and rejected when the seed is encoded.
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, list):
        try:
            return bytes(value)
        except (TypeError, ValueError):
            return tuple(value)
    return value
