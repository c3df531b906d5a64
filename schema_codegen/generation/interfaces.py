from pathlib import Path
from typing import Protocol

from schema_codegen.core.model import Model


class ISourceWriter(Protocol):
    def write_to_file(
        self, driver_expression: str, output_dir: str, package: str
    ) -> list[Path]: ...


class ISourceWriterFactory(Protocol):
    def __call__(self, model: Model) -> ISourceWriter: ...
