"""
Identifier conversion from snake_case IDL names to generated symbols.
"""


def _upper_first(segment: str) -> str:
    return segment[:1].upper() + segment[1:]


def _lower_first(segment: str) -> str:
    return segment[:1].lower() + segment[1:]


def to_lower_camel(name: str) -> str:
    """`get_account` -> `getAccount`."""
    segments = name.split("_")
    return _lower_first(segments[0]) + "".join(_upper_first(s) for s in segments[1:])


def to_upper_camel(name: str) -> str:
    """`get_account` -> `GetAccount`."""
    return "".join(_upper_first(s) for s in name.split("_"))


def pda_function_name(account_name: str) -> str:
    return f"get{to_upper_camel(account_name)}PDA"


def pda_variable_name(account_name: str) -> str:
    return f"{to_lower_camel(account_name)}Pda"


def client_file_name(program_name: str) -> str:
    return f"{to_upper_camel(program_name)}Client.ts"
