"""TypeScript client generation from Anchor IDLs."""

from .naming import (
    to_lower_camel,
    to_upper_camel,
    pda_function_name,
    pda_variable_name,
    client_file_name,
)
from .seeds import SeedEncoding, SeedBuffer, ResolvedSeeds, resolve_seeds, encoding_for_type
from .pda import PdaRegistry, PdaDefinition, emit_pda_functions
from .instructions import InstructionPlan, plan_instruction, emit_instruction_function
from .client import generate_client, idl_import_path

__all__ = [
    "to_lower_camel",
    "to_upper_camel",
    "pda_function_name",
    "pda_variable_name",
    "client_file_name",
    "SeedEncoding",
    "SeedBuffer",
    "ResolvedSeeds",
    "resolve_seeds",
    "encoding_for_type",
    "PdaRegistry",
    "PdaDefinition",
    "emit_pda_functions",
    "InstructionPlan",
    "plan_instruction",
    "emit_instruction_function",
    "generate_client",
    "idl_import_path",
]
