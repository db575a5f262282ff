"""
Intake Context

Responsibilities:
- Discovers eligible equation source files in a directory
- Reads equation sources and derives output base names

Owns: Source discovery, deterministic ordering, naming
Never: Typesets or writes output files
"""

from eqrender.contexts.intake.sources import (
    EquationSource,
    base_name,
    is_equation_file,
    list_equation_files,
    read_equation_source,
)

__all__ = [
    "EquationSource",
    "base_name",
    "is_equation_file",
    "list_equation_files",
    "read_equation_source",
]
