import pytest

from p3_query.adapters.memory import InMemoryDataTransport
from p3_query.clauses import FilterClause
from p3_query.exceptions import InvalidSpecificationError
from p3_query.reconstruct import process_entries
from p3_query.related import build_link_map, collect_link_values
from p3_query.schema import RelatedField

GENETIC_CODE = RelatedField("taxon_id", "taxonomy", "taxon_id", "genetic_code")


def _genomes(*taxa: str) -> list[dict]:
    return [{"genome_id": f"g{i}", "taxon_id": t} for i, t in enumerate(taxa)]


def test_collect_link_values_distinct_and_ordered() -> None:
    records = _genomes("B", "A", "B", "", "C") + [{"genome_id": "x"}]
    assert collect_link_values(records, "taxon_id") == ["B", "A", "C"]


def test_repeated_link_values_cost_one_secondary_query(registry) -> None:
    transport = InMemoryDataTransport(
        {
            "taxonomy": [
                {"taxon_id": "A", "genetic_code": 11},
                {"taxon_id": "B", "genetic_code": 4},
                {"taxon_id": "C", "genetic_code": 25},
            ]
        }
    )
    records = _genomes("A", "A", "B", "C")

    rows = process_entries(
        transport, registry.get("genome"), records, ["genome_id", "genetic_code"]
    )

    assert len(transport.calls) == 1
    call = transport.calls[0]
    assert call.table == "taxonomy"
    assert call.select == ("taxon_id", "genetic_code")
    assert call.clauses == (FilterClause.membership("taxon_id", ["A", "B", "C"]),)
    assert rows == [["g0", 11], ["g1", 11], ["g2", 4], ["g3", 25]]


def test_link_map_chunks_distinct_values() -> None:
    transport = InMemoryDataTransport(
        {"taxonomy": [{"taxon_id": str(i), "genetic_code": 11} for i in range(450)]}
    )
    records = _genomes(*[str(i) for i in range(450)] * 2)

    link_map = build_link_map(transport, GENETIC_CODE, records, chunk_size=200)

    assert [len(call.clauses[0].members()) for call in transport.calls] == [200, 200, 50]
    assert len(link_map) == 450


def test_multi_valued_link_map_collects_lists() -> None:
    transport = InMemoryDataTransport(
        {
            "pathway": [
                {"patric_id": "p1", "pathway_name": "Glycolysis"},
                {"patric_id": "p1", "pathway_name": "TCA cycle"},
                {"patric_id": "p2", "pathway_name": "Glycolysis"},
            ]
        }
    )
    related = RelatedField("patric_id", "pathway", "patric_id", "pathway_name")
    records = [{"patric_id": "p1"}, {"patric_id": "p2"}, {"patric_id": "p3"}]

    link_map = build_link_map(transport, related, records, multi=True)

    assert link_map == {"p1": ["Glycolysis", "TCA cycle"], "p2": ["Glycolysis"]}


def test_no_link_values_no_queries() -> None:
    transport = InMemoryDataTransport()
    assert build_link_map(transport, GENETIC_CODE, [{"genome_id": "g"}]) == {}
    assert transport.calls == []


def test_numeric_link_values_are_compared_as_text() -> None:
    transport = InMemoryDataTransport(
        {"taxonomy": [{"taxon_id": 83333, "genetic_code": 11}]}
    )
    link_map = build_link_map(transport, GENETIC_CODE, [{"taxon_id": 83333}])
    assert link_map == {"83333": 11}


def test_link_map_rejects_oversized_chunks() -> None:
    transport = InMemoryDataTransport(
        {"taxonomy": [{"taxon_id": str(i), "genetic_code": 11} for i in range(300)]}
    )
    records = _genomes(*[str(i) for i in range(300)])

    with pytest.raises(InvalidSpecificationError, match="between 1 and 200"):
        build_link_map(transport, GENETIC_CODE, records, chunk_size=300)
    assert transport.calls == []
