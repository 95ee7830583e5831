"""Protein FASTA export for the coding features of a genome."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from .catalog import build_default_registry
from .clauses import FilterClause
from .fetch import fetch_data

if TYPE_CHECKING:
    from .ports import IDataTransport
    from .schema import SchemaRegistry

logger = logging.getLogger(__name__)

FASTA_COLUMNS = ("patric_id", "product", "aa_sequence")


def protein_fasta(
    transport: IDataTransport,
    genome_id: str,
    out: TextIO | str | Path,
    *,
    registry: SchemaRegistry | None = None,
) -> int:
    """
    Write the protein sequences of a genome's CDS features as FASTA.

    Only features with a ``fig|`` identifier, a product and a sequence are
    written.  ``out`` is an open text stream or a file path.

    Returns:
        The number of records written.
    """
    schema = (registry or build_default_registry()).get("feature")
    filters = [
        FilterClause.eq("genome_id", genome_id),
        FilterClause.eq("feature_type", "CDS"),
    ]
    rows = fetch_data(transport, schema, filters, FASTA_COLUMNS)
    if isinstance(out, str | Path):
        with open(out, "w", encoding="utf-8") as handle:
            return _write_records(rows, handle)
    return _write_records(rows, out)


def _write_records(rows: list[list[object]], out: TextIO) -> int:
    written = 0
    for fid, product, sequence in rows:
        if str(fid).startswith("fig") and product and sequence:
            out.write(f">{fid} {product}\n{sequence}\n")
            written += 1
    logger.info("Wrote %d protein sequence(s)", written)
    return written
