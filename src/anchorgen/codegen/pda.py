"""
PDA helper emission.

One `get<Name>PDA` function is emitted per distinct PDA account name across
all instructions. Accounts sharing a name are assumed to share a derivation.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..analysis.models import Idl, IdlInstruction, IdlAccount, Seed
from .naming import pda_function_name
from .seeds import ResolvedSeeds, resolve_seeds

logger = logging.getLogger(__name__)


@dataclass
class PdaDefinition:
    """A PDA helper that has been emitted for one account name."""
    account_name: str
    function_name: str
    instruction: str  # Instruction the derivation was taken from
    seeds: List[Seed]
    resolved: ResolvedSeeds


@dataclass
class PdaRegistry:
    """
    Per-program accumulator of emitted PDA helpers, keyed by account name.

    Create a fresh registry for every program so nothing leaks between runs.
    """
    definitions: Dict[str, PdaDefinition] = field(default_factory=dict)

    def __contains__(self, account_name: str) -> bool:
        return account_name in self.definitions

    def __len__(self) -> int:
        return len(self.definitions)

    def get(self, account_name: str) -> Optional[PdaDefinition]:
        return self.definitions.get(account_name)

    @property
    def function_names(self) -> List[str]:
        return [d.function_name for d in self.definitions.values()]

    def register(self, instruction: IdlInstruction, account: IdlAccount) -> Optional[PdaDefinition]:
        """
        Record the PDA for `account` unless its name is already known.

        Returns the new definition, or None when the name was seen before.
        """
        existing = self.definitions.get(account.name)
        if existing is not None:
            if list(account.pda.seeds) != list(existing.seeds):
                logger.warning(
                    "PDA '%s' in '%s' has different seeds than in '%s'; keeping the first",
                    account.name, instruction.name, existing.instruction,
                )
            return None

        resolved = resolve_seeds(account.pda.seeds, instruction.args, instruction=instruction.name)
        definition = PdaDefinition(
            account_name=account.name,
            function_name=pda_function_name(account.name),
            instruction=instruction.name,
            seeds=list(account.pda.seeds),
            resolved=resolved,
        )
        self.definitions[account.name] = definition
        return definition


def render_pda_function(definition: PdaDefinition) -> str:
    """Render one PDA helper."""
    lines = [
        f"// Get {definition.account_name} PDA",
        f"export const {definition.function_name} = ({', '.join(definition.resolved.params)}) => {{",
        "  return PublicKey.findProgramAddressSync(",
        "    [",
    ]
    for buffer in definition.resolved.buffers:
        lines.append(f"      {buffer.render()}")
    lines.extend([
        "    ],",
        "    PROGRAM_ID",
        "  );",
        "};",
        "",
        "",
    ])
    return "\n".join(lines)


def emit_pda_functions(idl: Idl, registry: Optional[PdaRegistry] = None) -> str:
    """Emit PDA helpers for every distinct PDA account in schema order."""
    registry = registry if registry is not None else PdaRegistry()
    code = []

    for instruction in idl.instructions:
        for account in instruction.accounts:
            if account.pda is None:
                continue
            definition = registry.register(instruction, account)
            if definition is not None:
                code.append(render_pda_function(definition))

    logger.debug("Emitted %d PDA helpers", len(registry))
    return "".join(code)
