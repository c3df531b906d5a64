"""Whole-model correction, the entry point of the fixing phase."""

from __future__ import annotations

from schema_codegen.core.config import settings
from schema_codegen.core.model import Model
from schema_codegen.fixing.entities import fix_table
from schema_codegen.logger import logger


def fix_schema(model: Model) -> Model:
    """Apply the table fixer to every table, preserving table order."""
    tables = tuple(fix_table(table) for table in model.tables)
    return model.model_copy(update={"tables": tables})


class SchemaFixer:
    """Applies the catalog/schema swap to an introspected model.

    The swap is a policy: against a backend that already reports names the
    right way round it would corrupt the generated code, so it can be turned
    off. No cross-table validation is performed.
    """

    def __init__(
        self, swap_catalog_schema: bool = settings.swap_catalog_schema
    ) -> None:
        """Initialize the fixer.

        Args:
            swap_catalog_schema: Whether to swap catalog and schema on every name
        """
        self.swap_catalog_schema = swap_catalog_schema

    def fix(self, model: Model) -> Model:
        """Return the corrected model, or the model itself when swapping is disabled."""
        if not self.swap_catalog_schema:
            logger.info(
                "Catalog/schema swap disabled, leaving %d table(s) as introspected",
                len(model.tables),
            )
            return model
        logger.info("Swapping catalog and schema on %d table(s)", len(model.tables))
        return fix_schema(model)
