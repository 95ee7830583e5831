from __future__ import annotations

import pytest

from p3_query import DataClient, InMemoryDataTransport, build_default_registry

GENOMES = [
    {
        "genome_id": "83333.1",
        "genome_name": "Escherichia coli str. K-12",
        "genus": "Escherichia",
        "taxon_id": 83333,
        "taxon_lineage_names": ["cellular organisms", "Bacteria", "Escherichia"],
        "genome_length": 4641652,
    },
    {
        "genome_id": "107806.10",
        "genome_name": "Buchnera aphidicola str. APS",
        "genus": "Buchnera",
        "taxon_id": 107806,
        "taxon_lineage_names": ["cellular organisms", "Bacteria", "Buchnera"],
        "genome_length": 655725,
    },
    {
        "genome_id": "118101.4",
        "genome_name": "Buchnera aphidicola str. Bp",
        "genus": "Buchnera",
        "taxon_id": 118101,
        "genome_length": 615980,
    },
]

TAXONOMY = [
    {"taxon_id": 83333, "genetic_code": 11},
    {"taxon_id": 107806, "genetic_code": 11},
]

FEATURES = [
    {
        "patric_id": "fig|83333.1.peg.1",
        "genome_id": "83333.1",
        "feature_type": "CDS",
        "product": "Thr operon leader peptide",
        "aa_sequence_md5": "md5-a",
    },
    {
        "patric_id": "fig|83333.1.peg.2",
        "genome_id": "83333.1",
        "feature_type": "CDS",
        "product": "Aspartokinase (EC 2.7.2.4) / Homoserine dehydrogenase (EC 1.1.1.3)",
        "aa_sequence_md5": "md5-b",
    },
    {
        "patric_id": "fig|83333.1.rna.1",
        "genome_id": "83333.1",
        "feature_type": "tRNA",
        "product": "tRNA-Ile",
    },
    {
        "patric_id": "fig|83333.1.peg.3",
        "genome_id": "83333.1",
        "feature_type": "CDS",
        "product": "hypothetical protein",
    },
]

FEATURE_SEQUENCES = [
    {"md5": "md5-a", "sequence": "MKRISTTITTTITITTGNGAG"},
    {"md5": "md5-b", "sequence": "MRVLKFGGTSVANAERFLRV"},
]

PATHWAYS = [
    {"patric_id": "fig|83333.1.peg.2", "pathway_name": "Lysine biosynthesis"},
    {"patric_id": "fig|83333.1.peg.2", "pathway_name": "Glycine metabolism"},
]


@pytest.fixture
def registry():
    return build_default_registry()


@pytest.fixture
def transport():
    return InMemoryDataTransport(
        {
            "genome": GENOMES,
            "taxonomy": TAXONOMY,
            "genome_feature": FEATURES,
            "feature_sequence": FEATURE_SEQUENCES,
            "pathway": PATHWAYS,
        },
        schemas={
            "genome": {
                "schema": {
                    "fields": [
                        {"name": "genome_id", "type": "string"},
                        {"name": "genome_name", "type": "string"},
                        {"name": "taxon_lineage_names", "multiValued": True},
                    ]
                }
            }
        },
    )


@pytest.fixture
def client(transport, registry):
    return DataClient(transport, registry=registry)
