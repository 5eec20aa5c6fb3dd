# ==============================================
# PERSISTENCE
# ==============================================
#
# This package saves finalized schemas so a file sampled once
# can be read again without a new sampling pass.
#
# Modules:
# --------
# - schema_store.py  → Save/load ColumnSchema as JSON
#
# ==============================================

from .schema_store import SchemaStore

__all__ = ["SchemaStore"]
