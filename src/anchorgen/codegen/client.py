"""
Client assembly: preamble, PDA helpers and instruction wrappers for one
program, concatenated into a single TypeScript module.
"""

import logging
from typing import Optional, Tuple

from ..analysis.models import Idl, ProgramMetadata
from ..config import GeneratorConfig
from .instructions import emit_instruction_function
from .pda import PdaRegistry, emit_pda_functions

logger = logging.getLogger(__name__)


def idl_import_path(program: ProgramMetadata) -> str:
    """IDL import path relative to the generated client directory."""
    custom = program.idl_path
    if not custom:
        return f"../idl/{program.name}.json"
    if custom.startswith("./"):
        return f"../../{custom[2:]}"
    if custom.startswith("/"):
        return custom
    return f"../../{custom}"


def network_endpoint(network: str, config: GeneratorConfig) -> Tuple[str, str]:
    """Return (comment, rpc url) for a network name; unknown names use devnet."""
    if network == "mainnet":
        return "// Mainnet connection", config.mainnet_rpc_url
    if network == "devnet":
        return "// Devnet connection", config.devnet_rpc_url
    logger.warning("Unknown network '%s', defaulting to devnet", network)
    return "// Unknown network, defaulting to devnet", config.devnet_rpc_url


def render_preamble(program: ProgramMetadata, config: GeneratorConfig) -> str:
    comment, rpc_url = network_endpoint(program.network, config)
    return (
        "import * as anchor from '@coral-xyz/anchor';\n"
        "import { Connection, PublicKey } from '@solana/web3.js';\n"
        f"import idl from '{idl_import_path(program)}';\n"
        "\n"
        "// Your deployed program ID\n"
        f"const PROGRAM_ID = new PublicKey('{program.program_id}');\n"
        "\n"
        f"{comment}\n"
        f"const connection = new Connection('{rpc_url}', 'confirmed');\n"
        "\n"
        "// Get program instance\n"
        "const getProgram = (wallet) => {\n"
        "  const provider = new anchor.AnchorProvider(connection, wallet, {\n"
        "    commitment: 'confirmed',\n"
        "  });\n"
        "\n"
        "  return new anchor.Program(idl, provider);\n"
        "};\n"
        "\n"
    )


def generate_client(
    idl: Idl,
    program: ProgramMetadata,
    config: Optional[GeneratorConfig] = None,
    registry: Optional[PdaRegistry] = None,
) -> str:
    """
    Generate the complete TypeScript client for one program.

    Raises:
        InvalidSchemaError: If any PDA seed cannot be resolved. Nothing is
            returned in that case, so no partial client is ever written.
    """
    config = config or GeneratorConfig()
    registry = registry if registry is not None else PdaRegistry()

    parts = [
        render_preamble(program, config),
        emit_pda_functions(idl, registry),
    ]
    for instruction in idl.instructions:
        parts.append(emit_instruction_function(instruction))

    logger.debug(
        "Generated client for %s: %d PDA helpers, %d instructions",
        program.name, len(registry), len(idl.instructions),
    )
    return "".join(parts)
