"""
The BV-BRC (PATRIC) object catalog.

Translates user-friendly object names to physical tables and declares
the default fields, ID field, derived fields and related fields of each.
"""

from __future__ import annotations

from .functions import FieldFunction
from .schema import DerivedField, ObjectSchema, RelatedField, SchemaRegistry

_FEATURE_DERIVED = {
    "function": DerivedField(FieldFunction.IDENTITY, ("product",)),
    "ec": DerivedField(FieldFunction.EC_PARSE, ("product",)),
}

_FEATURE_RELATED = {
    "na_sequence": RelatedField(
        "na_sequence_md5", "feature_sequence", "md5", "sequence"
    ),
    "aa_sequence": RelatedField(
        "aa_sequence_md5", "feature_sequence", "md5", "sequence"
    ),
    "pathway": RelatedField("patric_id", "pathway", "patric_id", "pathway_name"),
    "subsystem": RelatedField(
        "patric_id", "subsystem", "patric_id", "subsystem_name"
    ),
}

_FEATURE_MULTI = frozenset({"ec", "subsystem", "pathway"})


CATALOG: tuple[ObjectSchema, ...] = (
    ObjectSchema(
        name="genome",
        table="genome",
        id_field="genome_id",
        default_fields=(
            "genome_name", "genome_id", "genome_status", "sequences",
            "patric_cds", "isolation_country", "host_name", "disease",
            "collection_year", "completion_date",
        ),
        derived={
            "taxonomy": DerivedField(
                FieldFunction.CONCAT_SEMI, ("taxon_lineage_names",)
            ),
        },
        related={
            "genetic_code": RelatedField(
                "taxon_id", "taxonomy", "taxon_id", "genetic_code"
            ),
        },
    ),
    ObjectSchema(
        name="feature",
        table="genome_feature",
        id_field="patric_id",
        default_fields=(
            "patric_id", "refseq_locus_tag", "gene_id", "plfam_id", "pgfam_id",
            "product",
        ),
        derived=_FEATURE_DERIVED,
        derived_multi=_FEATURE_MULTI,
        related=_FEATURE_RELATED,
    ),
    ObjectSchema(
        name="alt_feature",
        table="genome_feature",
        id_field="feature_id",
        default_fields=("feature_id", "refseq_locus_tag", "gene_id", "product"),
        derived=_FEATURE_DERIVED,
        derived_multi=_FEATURE_MULTI,
        related=_FEATURE_RELATED,
    ),
    ObjectSchema(
        name="family",
        table="protein_family_ref",
        id_field="family_id",
        default_fields=("family_id", "family_type", "family_product"),
    ),
    ObjectSchema(
        name="genome_drug",
        table="genome_amr",
        id_field="id",
        default_fields=("genome_id", "antibiotic", "resistant_phenotype"),
    ),
    ObjectSchema(
        name="contig",
        table="genome_sequence",
        id_field="sequence_id",
        default_fields=(
            "genome_id", "accession", "length", "gc_content", "sequence_type",
            "topology",
        ),
        derived={"md5": DerivedField(FieldFunction.MD5, ("sequence",))},
    ),
    ObjectSchema(
        name="drug",
        table="antibiotics",
        id_field="antibiotic_name",
        default_fields=("cas_id", "antibiotic_name", "canonical_smiles"),
    ),
    ObjectSchema(
        name="taxonomy",
        table="taxonomy",
        id_field="taxon_id",
        default_fields=(
            "taxon_id", "taxon_name", "taxon_rank", "genome_count",
            "genome_length_mean",
        ),
    ),
    ObjectSchema(
        name="experiment",
        table="transcriptomics_experiment",
        id_field="eid",
        default_fields=(
            "eid", "title", "genes", "pmid", "organism", "strain", "mutant",
            "timeseries", "release_date",
        ),
    ),
    ObjectSchema(
        name="sample",
        table="transcriptomics_sample",
        id_field="expid",
        default_fields=(
            "eid", "expid", "genes", "sig_log_ratio", "sig_z_score", "pmid",
            "organism", "strain", "mutant", "condition", "timepoint",
            "release_date",
        ),
    ),
    ObjectSchema(
        name="expression",
        table="transcriptomics_gene",
        id_field="id",
        default_fields=(
            "id", "eid", "genome_id", "patric_id", "refseq_locus_tag",
            "alt_locus_tag", "log_ratio", "z_score",
        ),
    ),
    ObjectSchema(
        name="sequence",
        table="feature_sequence",
        id_field="md5",
        default_fields=("md5", "sequence_type", "sequence"),
    ),
    ObjectSchema(
        name="subsystem",
        table="subsystem_ref",
        id_field="subsystem_id",
        default_fields=(
            "subsystem_id", "subsystem_name", "superclass", "class", "subclass",
        ),
    ),
    ObjectSchema(
        name="subsystemItem",
        table="subsystem",
        id_field="id",
        default_fields=(
            "id", "subsystem_name", "superclass", "class", "subclass",
            "role_name", "active", "patric_id", "gene", "product",
        ),
    ),
    ObjectSchema(
        name="sp_gene",
        table="sp_gene",
        id_field="patric_id",
        default_fields=(
            "evidence", "property", "patric_id", "refseq_locus_tag",
            "source_id", "gene", "product", "pmid", "identity", "e_value",
        ),
    ),
    ObjectSchema(
        name="protein_region",
        table="protein_feature",
        id_field="id",
        default_fields=(
            "patric_id", "refseq_locus_tag", "gene", "product", "source",
            "source_id", "description", "e_value", "evidence",
        ),
    ),
    ObjectSchema(
        name="protein_structure",
        table="protein_structure",
        id_field="pdb_id",
        default_fields=(
            "pdb_id", "title", "organism_name", "patric_id",
            "uniprotkb_accession", "gene", "product", "method", "release_date",
        ),
    ),
    ObjectSchema(
        name="surveillance",
        table="surveillance",
        id_field="sample_identifier",
        default_fields=(
            "sample_identifier", "sample_material", "collector_institution",
            "collection_year", "collection_country", "pathogen_test_type",
            "pathogen_test_result", "type", "subtype", "strain",
            "host_identifier", "host_species", "host_common_name", "host_age",
            "host_health",
        ),
    ),
    ObjectSchema(
        name="serology",
        table="serology",
        id_field="sample_identifier",
        default_fields=(
            "sample_identifier", "host_identifier", "host_type", "host_species",
            "host_common_name", "host_sex", "host_age", "host_age_group",
            "host_health", "collection_date", "test_type", "test_result",
            "serotype",
        ),
    ),
    ObjectSchema(
        name="sf",
        table="sequence_feature",
        id_field="sf_id",
        default_fields=(
            "sf_id", "sf_name", "sf_category", "gene", "length", "start", "end",
            "source_strain",
        ),
    ),
    ObjectSchema(
        name="sfvt",
        table="sequence_feature_vt",
        id_field="id",
        default_fields=(
            "sf_id", "sf_name", "sf_category", "sfvt_id", "sfvt_genome_count",
            "sfvt_sequence",
        ),
    ),
)


def build_default_registry() -> SchemaRegistry:
    """Build a registry holding every object of the BV-BRC catalog."""
    return SchemaRegistry(CATALOG)
