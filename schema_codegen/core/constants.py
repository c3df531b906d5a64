"""Constants shared by the configuration resolver and the generator."""

# Configuration keys
CODEGEN_PACKAGE_KEY = "codegen.package"

# Defaults
DEFAULT_OUTPUT_DIR = "."
GENERATED_MODULE = "tables.py"

# Schemas never introspected
SYSTEM_SCHEMAS = frozenset({"information_schema", "pg_catalog", "sys"})
