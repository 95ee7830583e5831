"""p3-query - Query construction and result reconstruction for the BV-BRC data API.

The engine is transport-agnostic: everything talks to an ``IDataTransport``.
``HttpDataTransport`` speaks RQL to the live service; ``InMemoryDataTransport``
serves tables held in memory.
"""

from __future__ import annotations

# ── Adapters ────────────────────────────────────────────────────
from .adapters import HttpDataTransport, InMemoryDataTransport

# ── Schema ──────────────────────────────────────────────────────
from .catalog import CATALOG, build_default_registry
from .clauses import Couplet, FilterClause

# ── Facade ──────────────────────────────────────────────────────
from .client import DataClient, enable_debug_logging
from .config import DEFAULT_API_URL, MAX_BATCH_SIZE, EngineConfig, TransportConfig

# ── Exceptions ──────────────────────────────────────────────────
from .exceptions import (
    ColumnNotFoundError,
    EmptyInputError,
    InvalidSpecificationError,
    P3QueryError,
    TransportError,
    UnknownObjectError,
    WildcardKeyError,
)
from .fasta import protein_fasta

# ── Engine ──────────────────────────────────────────────────────
from .fetch import fetch_data, fetch_data_batch, fetch_data_keyed
from .filters import FilterBuilder, build_filter
from .functions import FieldFunction
from .introspection import list_object_fields
from .operators import FilterOperator
from .options import ColumnOptions, DataOptions
from .ports import IDataTransport, ResultRecord
from .reconstruct import RowReconstructor, process_entries
from .schema import DerivedField, ObjectSchema, RelatedField, SchemaRegistry
from .selection import resolve_select_list, select_clause
from .utils import clean_value, match
from .view import FieldView, IdentityView, MappingView, load_view

__all__ = [
    # Adapters
    "HttpDataTransport",
    "InMemoryDataTransport",
    # Facade
    "DataClient",
    "enable_debug_logging",
    # Config
    "DEFAULT_API_URL",
    "MAX_BATCH_SIZE",
    "EngineConfig",
    "TransportConfig",
    "ColumnOptions",
    "DataOptions",
    # Schema
    "CATALOG",
    "build_default_registry",
    "DerivedField",
    "FieldFunction",
    "ObjectSchema",
    "RelatedField",
    "SchemaRegistry",
    # Clauses and views
    "Couplet",
    "FilterClause",
    "FilterOperator",
    "FieldView",
    "IdentityView",
    "MappingView",
    "load_view",
    # Engine
    "FilterBuilder",
    "build_filter",
    "select_clause",
    "resolve_select_list",
    "RowReconstructor",
    "process_entries",
    "fetch_data",
    "fetch_data_batch",
    "fetch_data_keyed",
    "list_object_fields",
    "protein_fasta",
    "clean_value",
    "match",
    # Ports
    "IDataTransport",
    "ResultRecord",
    # Exceptions
    "P3QueryError",
    "InvalidSpecificationError",
    "UnknownObjectError",
    "WildcardKeyError",
    "ColumnNotFoundError",
    "TransportError",
    "EmptyInputError",
]
