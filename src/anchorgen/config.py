"""
Generator configuration and the programs manifest.

The manifest (`SolanaPrograms.json`) lists program dependencies:

    {
      "programs": {"feedana": {"version": "0.1.0", "program_id": "...", "network": "devnet"}},
      "devPrograms": {}
    }
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .analysis.models import ProgramMetadata
from .constants import (
    SOLANA_PROGRAMS_FILE,
    PROGRAM_IDL_DIR,
    PROGRAM_CLIENT_DIR,
    MAINNET_RPC_URL,
    DEVNET_RPC_URL,
)
from .errors import ConfigNotFoundError

ENV_PREFIX = "ANCHORGEN_"


def load_env(start: Optional[Path] = None):
    """Load a .env file from the working directory or one of its parents."""
    current = start or Path.cwd()
    for _ in range(5):  # Check up to 5 parent dirs
        env_file = current / ".env"
        if env_file.exists():
            with open(env_file) as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith("#") and "=" in line:
                        key, value = line.split("=", 1)
                        os.environ.setdefault(key.strip(), value.strip())
            break
        current = current.parent


@dataclass
class GeneratorConfig:
    """Where to read programs and IDLs, where to write clients, which RPCs to use."""
    programs_file: str = SOLANA_PROGRAMS_FILE
    idl_dir: str = PROGRAM_IDL_DIR
    client_dir: str = PROGRAM_CLIENT_DIR
    mainnet_rpc_url: str = MAINNET_RPC_URL
    devnet_rpc_url: str = DEVNET_RPC_URL

    @classmethod
    def from_env(cls, load_dotenv: bool = True) -> "GeneratorConfig":
        """Build a config, letting ANCHORGEN_* environment variables override defaults."""
        if load_dotenv:
            load_env()

        def env(name: str, default: str) -> str:
            return os.environ.get(f"{ENV_PREFIX}{name}", default)

        return cls(
            programs_file=env("PROGRAMS_FILE", SOLANA_PROGRAMS_FILE),
            idl_dir=env("IDL_DIR", PROGRAM_IDL_DIR),
            client_dir=env("CLIENT_DIR", PROGRAM_CLIENT_DIR),
            mainnet_rpc_url=env("MAINNET_RPC_URL", MAINNET_RPC_URL),
            devnet_rpc_url=env("DEVNET_RPC_URL", DEVNET_RPC_URL),
        )

    def default_idl_path(self, program_name: str) -> str:
        return f"{self.idl_dir}/{program_name}.json"

    def idl_path_for(self, program: ProgramMetadata) -> str:
        return program.idl_path or self.default_idl_path(program.name)


def load_programs_manifest(path: str) -> List[ProgramMetadata]:
    """
    Read the programs manifest.

    Returns regular programs first, then dev programs, each in file order.

    Raises:
        ConfigNotFoundError: If the file is missing or not a valid manifest
    """
    if not os.path.exists(path):
        raise ConfigNotFoundError(f"{path} not found. Add a program first.")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigNotFoundError(f"{path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigNotFoundError(f"{path} must contain a JSON object")

    programs = []
    for section, dev in (("programs", False), ("devPrograms", True)):
        entries = data.get(section) or {}
        if not isinstance(entries, dict):
            raise ConfigNotFoundError(f"'{section}' in {path} must be an object")
        for name, info in entries.items():
            if not isinstance(info, dict) or "program_id" not in info:
                raise ConfigNotFoundError(f"Program '{name}' in {path} has no program_id")
            programs.append(ProgramMetadata(
                name=name,
                program_id=info["program_id"],
                network=info.get("network", "devnet"),
                version=info.get("version"),
                idl_path=info.get("idl_path"),
                dev=dev,
            ))

    return programs
