"""
Orchestrator: generates clients for every configured program.

Each program is an independent unit of failure. A schema error in one
program is recorded in the report and the batch moves on.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Dict

from ..analysis.models import ProgramMetadata
from ..codegen.client import generate_client
from ..codegen.pda import PdaRegistry
from ..config import GeneratorConfig, load_programs_manifest
from ..errors import AnchorgenError
from .collaborators import IdlSource, ClientWriter, FileIdlSource, FileClientWriter

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Outcome of generating one program's client."""
    program: ProgramMetadata
    success: bool
    idl_source: Optional[str] = None
    output_path: Optional[str] = None
    error: Optional[str] = None
    code: Optional[str] = None
    pda_functions: List[str] = field(default_factory=list)

    @property
    def program_name(self) -> str:
        return self.program.name


@dataclass
class GenerationReport:
    """Aggregate outcome of a batch."""
    results: List[GenerationResult] = field(default_factory=list)
    total_time_ms: float = 0

    @property
    def generated_count(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.results if not r.success)

    @property
    def failures(self) -> List[GenerationResult]:
        return [r for r in self.results if not r.success]

    def to_dict(self) -> Dict:
        """Convert report to dictionary for JSON export."""
        return {
            "generated": self.generated_count,
            "failed": self.failed_count,
            "total_time_ms": self.total_time_ms,
            "results": [
                {
                    "program": r.program_name,
                    "network": r.program.network,
                    "success": r.success,
                    "output_path": r.output_path,
                    "error": r.error,
                    "pda_functions": r.pda_functions,
                }
                for r in self.results
            ],
        }


class ClientGenerator:
    """
    Drives client generation for a batch of programs.

    Handles:
    - Resolving each program's IDL through an IdlSource
    - Generating the client with a fresh PDA registry per program
    - Persisting the code through a ClientWriter
    """

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        source: Optional[IdlSource] = None,
        writer: Optional[ClientWriter] = None,
    ):
        self.config = config or GeneratorConfig()
        self.source = source or FileIdlSource(self.config)
        self.writer = writer or FileClientWriter(self.config)

    def load_programs(self) -> List[ProgramMetadata]:
        """Read configured programs from the manifest."""
        return load_programs_manifest(self.config.programs_file)

    def generate_program(self, program: ProgramMetadata) -> GenerationResult:
        """Generate and write one client. Never raises for generator errors."""
        result = GenerationResult(program=program, success=False)
        try:
            result.idl_source = self.source.describe(program)
            idl = self.source.load(program)

            registry = PdaRegistry()
            code = generate_client(idl, program, self.config, registry)

            result.output_path = self.writer.write(program, code)
            result.code = code
            result.pda_functions = registry.function_names
            result.success = True
        except (AnchorgenError, OSError) as e:
            logger.warning("Client generation failed for %s: %s", program.name, e)
            result.error = str(e)
        return result

    def run(
        self,
        programs: Optional[List[ProgramMetadata]] = None,
        progress_callback: Optional[Callable] = None,
    ) -> GenerationReport:
        """
        Generate clients for all programs.

        Args:
            programs: Programs to generate (defaults to the manifest)
            progress_callback: Called as (index, total, program) before each program

        Returns:
            GenerationReport with one result per program, in order

        Raises:
            ConfigNotFoundError: If programs is None and the manifest is missing
        """
        start_time = time.time()
        if programs is None:
            programs = self.load_programs()

        report = GenerationReport()
        for i, program in enumerate(programs):
            if progress_callback:
                progress_callback(i, len(programs), program)
            report.results.append(self.generate_program(program))

        report.total_time_ms = (time.time() - start_time) * 1000
        logger.info(
            "Generated %d of %d clients", report.generated_count, len(report.results)
        )
        return report
