"""Emit SQLAlchemy Core table definitions for a schema model."""

from __future__ import annotations

import re
from pathlib import Path

from schema_codegen.core.constants import GENERATED_MODULE
from schema_codegen.core.exceptions import GenerationError
from schema_codegen.core.model import Column, ForeignKey, Index, Model, Table
from schema_codegen.io.output_manager import OutputManager
from schema_codegen.logger import logger

# Base type name -> SQLAlchemy type constructor; the second item says whether
# the introspected length/precision arguments are passed on.
_TYPE_MAP: dict[str, tuple[str, bool]] = {
    "INTEGER": ("sa.Integer", False),
    "INT": ("sa.Integer", False),
    "BIGINT": ("sa.BigInteger", False),
    "SMALLINT": ("sa.SmallInteger", False),
    "VARCHAR": ("sa.String", True),
    "NVARCHAR": ("sa.Unicode", True),
    "CHARACTER VARYING": ("sa.String", True),
    "CHAR": ("sa.CHAR", True),
    "TEXT": ("sa.Text", False),
    "CLOB": ("sa.Text", False),
    "BOOLEAN": ("sa.Boolean", False),
    "DATE": ("sa.Date", False),
    "DATETIME": ("sa.DateTime", False),
    "TIMESTAMP": ("sa.DateTime", False),
    "TIMESTAMP WITHOUT TIME ZONE": ("sa.DateTime", False),
    "TIME": ("sa.Time", False),
    "NUMERIC": ("sa.Numeric", True),
    "DECIMAL": ("sa.Numeric", True),
    "FLOAT": ("sa.Float", False),
    "REAL": ("sa.Float", False),
    "DOUBLE PRECISION": ("sa.Float", False),
    "BLOB": ("sa.LargeBinary", False),
    "BYTEA": ("sa.LargeBinary", False),
    "JSON": ("sa.JSON", False),
    "JSONB": ("sa.JSON", False),
    "UUID": ("sa.Uuid", False),
    # MySQL
    "TINYINT": ("sa.SmallInteger", False),
    "MEDIUMINT": ("sa.Integer", False),
    "DOUBLE": ("sa.Float", False),
    "YEAR": ("sa.SmallInteger", False),
    "TINYTEXT": ("sa.Text", False),
    "MEDIUMTEXT": ("sa.Text", False),
    "LONGTEXT": ("sa.Text", False),
    "BINARY": ("sa.LargeBinary", False),
    "VARBINARY": ("sa.LargeBinary", False),
    "TINYBLOB": ("sa.LargeBinary", False),
    "MEDIUMBLOB": ("sa.LargeBinary", False),
    "LONGBLOB": ("sa.LargeBinary", False),
}

# Types that accept a ``collation`` argument.
_COLLATABLE = {"sa.String", "sa.Unicode", "sa.CHAR", "sa.Text"}

NULL_TYPE = "sa.types.NullType()"

_TYPE_PATTERN = re.compile(
    r"^\s*([A-Za-z][A-Za-z ]*?)\s*"
    r"(?:\(([\d\s,]*)\))?"
    r"(?:\s+COLLATE\s+\"?([\w.-]+)\"?)?\s*$",
    re.IGNORECASE,
)
_NUMERIC_MODIFIERS = re.compile(r"\s+(?:UNSIGNED|ZEROFILL)\b", re.IGNORECASE)
_DOTTED_EXPRESSION = re.compile(r"^[A-Za-z_]\w*(\.[A-Za-z_]\w*)*(\(\))?$")


def type_expression(type_name: str) -> str:
    """Translate an introspected type string into a SQLAlchemy type expression.

    MySQL ``UNSIGNED``/``ZEROFILL`` modifiers are dropped and a ``COLLATE``
    clause on a string type becomes its ``collation`` argument.

    Args:
        type_name: Type as reported by the database, e.g. ``VARCHAR(50)``

    Returns:
        Python source for the type, ``NULL_TYPE`` when unknown
    """
    match = _TYPE_PATTERN.match(_NUMERIC_MODIFIERS.sub("", type_name))
    if match is None:
        return NULL_TYPE
    base = " ".join(match.group(1).upper().split())
    args, collation = match.group(2), match.group(3)

    if base == "TIMESTAMP WITH TIME ZONE":
        return "sa.DateTime(timezone=True)"
    if base not in _TYPE_MAP:
        return NULL_TYPE

    constructor, takes_args = _TYPE_MAP[base]
    call_args = []
    if takes_args and args:
        call_args += [a.strip() for a in args.split(",")]
    if collation:
        if constructor not in _COLLATABLE:
            return NULL_TYPE
        call_args.append(f"collation={collation!r}")
    return f"{constructor}({', '.join(call_args)})"


class SourceCodeGenerator:
    """Generates a Python module describing a schema model.

    The module binds the driver expression, one ``sa.MetaData`` and one
    ``sa.Table`` per table of the model, in model order.
    """

    def __init__(self, model: Model) -> None:
        """Initialize the generator.

        Args:
            model: Corrected schema model to render
        """
        self.model = model

    def write_to_file(
        self, driver_expression: str, output_dir: str, package: str
    ) -> list[Path]:
        """Write the generated module into ``package`` under ``output_dir``.

        Args:
            driver_expression: Python expression yielding the database profile
            output_dir: Place where the package folder structure is put
            package: Dotted package name for the generated module

        Returns:
            List of paths that were written

        Raises:
            GenerationError: If the sources cannot be rendered or written
        """
        source = self.render(driver_expression)
        output_manager = OutputManager(Path(output_dir))
        output_manager.create_output_structure()
        written = output_manager.ensure_package(package)
        module_path = output_manager.write_module(package, GENERATED_MODULE, source)
        written.append(module_path)
        logger.info(
            "Wrote %d table(s) for package %s to %s",
            len(self.model.tables),
            package,
            module_path,
        )
        return written

    def render(self, driver_expression: str) -> str:
        """Render the complete module source.

        Raises:
            GenerationError: If the driver expression is not a dotted name or call
        """
        if not _DOTTED_EXPRESSION.match(driver_expression):
            raise GenerationError(
                GENERATED_MODULE,
                ValueError(f"Invalid driver expression '{driver_expression}'"),
            )

        lines = ['"""Schema definitions generated from a live database."""', ""]
        lines.append("import sqlalchemy as sa")
        module = driver_expression.removesuffix("()").rpartition(".")[0]
        if module:
            lines.append(f"import {module}")
        lines += ["", f"DRIVER = {driver_expression}", "", "metadata = sa.MetaData()"]

        used_names: set[str] = set()
        for table in self.model.tables:
            lines += ["", ""]
            lines.append(self._render_table(table, used_names))
        return "\n".join(lines) + "\n"

    def _variable_name(self, table: Table, used_names: set[str]) -> str:
        name = "t_" + re.sub(r"\W", "_", table.name.name)
        if name in used_names and table.name.schema_:
            name = "t_" + re.sub(r"\W", "_", f"{table.name.schema_}_{table.name.name}")
        base, counter = name, 2
        while name in used_names:
            name = f"{base}_{counter}"
            counter += 1
        used_names.add(name)
        return name

    def _render_table(self, table: Table, used_names: set[str]) -> str:
        args = [repr(table.name.name), "metadata"]
        args += [self._render_column(col) for col in table.columns]

        if table.primary_key is not None and table.primary_key.columns:
            pk_args = [repr(col.name) for col in table.primary_key.columns]
            if table.primary_key.name:
                pk_args.append(f"name={table.primary_key.name!r}")
            args.append(f"sa.PrimaryKeyConstraint({', '.join(pk_args)})")

        args += [self._render_foreign_key(fk) for fk in table.foreign_keys]
        args += [self._render_index(table, idx) for idx in table.indices]

        if table.name.schema_:
            args.append(f"schema={table.name.schema_!r}")
        if table.comment:
            args.append(f"comment={table.comment!r}")

        body = "".join(f"    {arg},\n" for arg in args)
        return f"{self._variable_name(table, used_names)} = sa.Table(\n{body})"

    def _render_column(self, column: Column) -> str:
        sa_type = type_expression(column.type)
        if sa_type == NULL_TYPE:
            logger.warning(
                "No SQLAlchemy type for column %s.%s of type '%s', using NullType",
                column.table,
                column.name,
                column.type,
            )
        args = [repr(column.name), sa_type]
        if not column.nullable:
            args.append("nullable=False")
        if column.autoincrement:
            args.append("autoincrement=True")
        if column.default is not None:
            args.append(f"server_default=sa.text({column.default!r})")
        if column.comment:
            args.append(f"comment={column.comment!r}")
        return f"sa.Column({', '.join(args)})"

    def _render_foreign_key(self, fk: ForeignKey) -> str:
        local = [col.name for col in fk.referencing_columns]
        target = fk.referenced_table.dotted()
        remote = [f"{target}.{col.name}" for col in fk.referenced_columns]
        args = [repr(local), repr(remote)]
        if fk.name:
            args.append(f"name={fk.name!r}")
        if fk.on_update:
            args.append(f"onupdate={fk.on_update!r}")
        if fk.on_delete:
            args.append(f"ondelete={fk.on_delete!r}")
        return f"sa.ForeignKeyConstraint({', '.join(args)})"

    def _render_index(self, table: Table, index: Index) -> str:
        column_names = [col.name for col in index.columns]
        name = index.name or f"ix_{table.name.name}_{'_'.join(column_names)}"
        args = [repr(name)] + [repr(c) for c in column_names]
        if index.unique:
            args.append("unique=True")
        return f"sa.Index({', '.join(args)})"
