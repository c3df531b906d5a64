"""File system operations for generated sources."""

from __future__ import annotations

from pathlib import Path

from schema_codegen.core.constants import DEFAULT_OUTPUT_DIR
from schema_codegen.core.exceptions import GenerationError


class OutputManager:
    """Manages file system operations for generated sources.

    This class lays out the package folder structure under an output
    directory and writes generated modules into it.
    """

    def __init__(self, output_dir: Path = Path(DEFAULT_OUTPUT_DIR)) -> None:
        """Initialize the output manager.

        Args:
            output_dir: Place where the package folder structure is put
        """
        self.output_dir = output_dir

    def create_output_structure(self) -> None:
        """Create the base output directory.

        Raises:
            GenerationError: If unable to create the directory
        """
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise GenerationError(str(self.output_dir), e) from e

    def package_dir(self, package: str) -> Path:
        """Get the directory of a dotted package name under the output directory.

        Args:
            package: Dotted package name, e.g. ``app.models``

        Returns:
            Path of the innermost package directory
        """
        return self.output_dir.joinpath(*package.split("."))

    def ensure_package(self, package: str) -> list[Path]:
        """Create every package level with an ``__init__.py``.

        Existing ``__init__.py`` files are left untouched.

        Args:
            package: Dotted package name

        Returns:
            List of ``__init__.py`` paths that were created

        Raises:
            GenerationError: If a directory or file cannot be created
        """
        created: list[Path] = []
        current = self.output_dir
        for part in package.split("."):
            current = current / part
            init_file = current / "__init__.py"
            try:
                current.mkdir(parents=True, exist_ok=True)
                if not init_file.exists():
                    init_file.write_text("", encoding="utf-8")
                    created.append(init_file)
            except OSError as e:
                raise GenerationError(str(init_file), e) from e
        return created

    def write_module(self, package: str, filename: str, source: str) -> Path:
        """Write a generated module into a package.

        Args:
            package: Dotted package name
            filename: Module file name, e.g. ``tables.py``
            source: Module source code

        Returns:
            Path where the file was written

        Raises:
            GenerationError: If unable to write file
        """
        output_path = self.package_dir(package) / filename

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", encoding="utf-8") as f:
                f.write(source)
            return output_path

        except OSError as e:
            raise GenerationError(str(output_path), e) from e
