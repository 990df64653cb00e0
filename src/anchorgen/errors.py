"""
Exception hierarchy for client generation.
"""


class AnchorgenError(Exception):
    """Base class for all generator errors."""


class InvalidSchemaError(AnchorgenError):
    """The IDL document is malformed or uses an unsupported construct."""


class UnresolvableReferenceError(AnchorgenError):
    """An `arg` seed names an argument the instruction does not declare."""

    def __init__(self, path: str, instruction: str = None):
        self.path = path
        self.instruction = instruction
        where = f" in instruction '{instruction}'" if instruction else ""
        super().__init__(f"Seed references unknown argument '{path}'{where}")


class ConfigNotFoundError(AnchorgenError):
    """The programs manifest is missing or unreadable."""


class InvalidPathError(AnchorgenError):
    """A file the generator needs does not exist."""
