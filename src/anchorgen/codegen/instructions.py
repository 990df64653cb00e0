"""
Instruction wrapper emission.

Each instruction becomes an async function that derives its PDAs, fills in
the accounts object and sends the transaction through `program.methods`.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from ..analysis.models import IdlInstruction, IdlAccount
from ..constants import CREATOR_PARAM, SYSTEM_PROGRAM_ID
from .naming import to_lower_camel, pda_function_name, pda_variable_name
from .seeds import ResolvedSeeds, resolve_seeds

WALLET_PUBKEY = "wallet.publicKey"


@dataclass
class InstructionPlan:
    """Everything needed to render one instruction wrapper."""
    instruction: IdlInstruction
    function_name: str
    params: List[str] = field(default_factory=list)
    # (account name, variable name, call arguments)
    pda_calls: List[Tuple[str, str, List[str]]] = field(default_factory=list)

    @property
    def primary_pda(self):
        """First derived PDA in schema order, returned alongside the signature."""
        return self.pda_calls[0][1] if self.pda_calls else None

    def pda_variable(self, account_name: str):
        for name, var, _ in self.pda_calls:
            if name == account_name:
                return var
        return None


def plan_instruction(instruction: IdlInstruction) -> InstructionPlan:
    """Compute the parameter list and PDA call sites for an instruction."""
    plan = InstructionPlan(
        instruction=instruction,
        function_name=to_lower_camel(instruction.name),
        params=[arg.name for arg in instruction.args],
    )

    for account in instruction.pda_accounts:
        resolved: ResolvedSeeds = resolve_seeds(
            account.pda.seeds, instruction.args, instruction=instruction.name
        )
        for param in resolved.params:
            if param not in plan.params and param != CREATOR_PARAM:
                plan.params.append(param)

        call_args = [WALLET_PUBKEY if p == CREATOR_PARAM else p for p in resolved.params]
        plan.pda_calls.append((account.name, pda_variable_name(account.name), call_args))

    return plan


def account_binding(account: IdlAccount, plan: InstructionPlan) -> str:
    """Render the `name: value,` entry for one account (first match wins)."""
    key = to_lower_camel(account.name)
    roles = ""
    if account.is_writable():
        roles += " // writable"
    if account.is_signer():
        roles += " // signer"

    pda_var = plan.pda_variable(account.name)
    if pda_var is not None:
        return f"{key}: {pda_var},{roles}"
    if account.is_signer():
        return f"{key}: {WALLET_PUBKEY},{roles}"
    if account.address == SYSTEM_PROGRAM_ID:
        return f"{key}: anchor.web3.SystemProgram.programId,{roles}"
    if account.address:
        return f"{key}: new PublicKey('{account.address}'),{roles}"
    return f"{key}: {key}, // TODO: Add proper account{roles}"


def emit_instruction_function(instruction: IdlInstruction) -> str:
    """Render the wrapper for a single instruction."""
    plan = plan_instruction(instruction)
    signature = ", ".join(["wallet"] + plan.params)

    lines = [
        f"// {plan.function_name} on-chain",
        f"export const {plan.function_name} = async ({signature}) => {{",
        "  const program = getProgram(wallet);",
    ]

    for account_name, var, call_args in plan.pda_calls:
        lines.append(
            f"  const [{var}] = {pda_function_name(account_name)}({', '.join(call_args)});"
        )

    method_args = ", ".join(arg.name for arg in instruction.args)
    lines.extend([
        "",
        "  const tx = await program.methods",
        f"    .{plan.function_name}({method_args})",
        "    .accounts({",
    ])
    for account in instruction.accounts:
        lines.append(f"      {account_binding(account, plan)}")
    lines.extend([
        "    })",
        "    .rpc();",
        "",
    ])

    if plan.primary_pda is None:
        lines.append("  return tx;")
    else:
        lines.append(f"  return {{ tx, pda: {plan.primary_pda} }};")

    lines.extend(["};", "", ""])
    return "\n".join(lines)
