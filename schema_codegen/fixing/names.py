"""Catalog/schema correction for a single qualified name."""

from __future__ import annotations

from schema_codegen.core.model import QualifiedName


def fix_name(name: QualifiedName) -> QualifiedName:
    """Swap the catalog and schema of a qualified name.

    Some backends report the catalog/schema pair inverted relative to what the
    generated code expects. Applying this twice returns the original name.
    """
    return name.model_copy(update={"schema_": name.catalog, "catalog": name.schema_})
