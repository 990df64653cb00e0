"""Collaborator interfaces: where IDLs come from and where clients go."""

import os
from abc import ABC, abstractmethod
from pathlib import Path

from ..analysis.idl_parser import IDLParser
from ..analysis.models import Idl, ProgramMetadata
from ..config import GeneratorConfig
from ..errors import InvalidPathError
from ..codegen.naming import client_file_name


class IdlSource(ABC):
    """Supplies the parsed IDL for a configured program."""

    @abstractmethod
    def describe(self, program: ProgramMetadata) -> str:
        pass

    @abstractmethod
    def load(self, program: ProgramMetadata) -> Idl:
        pass


class ClientWriter(ABC):
    """Persists generated client code."""

    @abstractmethod
    def write(self, program: ProgramMetadata, code: str) -> str:
        pass


class FileIdlSource(IdlSource):
    """Reads IDLs from `idl_dir/<name>.json` or the program's custom path."""

    def __init__(self, config: GeneratorConfig, parser: IDLParser = None):
        self.config = config
        self.parser = parser or IDLParser()

    def describe(self, program: ProgramMetadata) -> str:
        return self.config.idl_path_for(program)

    def load(self, program: ProgramMetadata) -> Idl:
        path = self.config.idl_path_for(program)
        if not os.path.exists(path):
            raise InvalidPathError(f"IDL file not found for '{program.name}': {path}")
        return self.parser.parse_file(path)


class FileClientWriter(ClientWriter):
    """Writes `<Program>Client.ts` into the configured client directory."""

    def __init__(self, config: GeneratorConfig):
        self.config = config

    def write(self, program: ProgramMetadata, code: str) -> str:
        client_dir = Path(self.config.client_dir)
        client_dir.mkdir(parents=True, exist_ok=True)
        path = client_dir / client_file_name(program.name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(code)
        return str(path)
