"""CLI command groups registered by crudgen.main."""
