"""
Schema Code Generator

Entry point for the code generator script.
"""

import sys

from schema_codegen import CodeGenerator


def main() -> None:
    """
    Entry point for the code generator script.

    Creates CodeGenerator instance and runs it on the command-line arguments.
    """
    generator = CodeGenerator()
    generator.run(sys.argv[1:])


if __name__ == "__main__":
    main()
