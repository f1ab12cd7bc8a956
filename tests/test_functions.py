"""Tests for the graph text parser, serializer and layout helper."""
import logging
import math

import pytest

from conftest import SCENARIO_TEXT
from graph_model import Edge
from kruskal import kruskal_steps, trace_to_json
from mst_utils.functions import circular_layout, format_graph_text, parse_graph_file, parse_graph_text


def test_parse_scenario() -> None:
    g = parse_graph_text(SCENARIO_TEXT)
    assert g.vertices == {"A": 0, "B": 1, "C": 2, "D": 3}
    assert g.declared_vertices == 4
    assert g.declared_edges == 5
    assert g.edges[0] == Edge("e1", 2, "A", "B")
    assert [e.id for e in g.edges] == ["e1", "e2", "e3", "e4", "e5"]


def test_parse_ignores_line_layout() -> None:
    g = parse_graph_text("3 1 X\nY   Z\n\n  e X Z -7")
    assert g.vertex_names == ["X", "Y", "Z"]
    assert g.edges == [Edge("e", -7, "X", "Z")]


@pytest.mark.parametrize(
    "text, message",
    [
        ("", "vertex count"),
        ("two 1\nA B\n", "vertex count"),
        ("2\n", "edge count"),
        ("-1 0\n", "non-negative"),
        ("3 0\nA B\n", "vertex name #3"),
        ("2 1\nA B\ne1 A B\n", "weight of edge #1"),
        ("2 1\nA B\ne1 A B 2.5\n", "not an integer"),
        ("2 1\nA B\ne1 A B 2\ne2 A B 3\n", "after the declared 1 edges"),
        ("2 0\nA A\n", "Duplicate vertex name"),
        ("2 2\nA B\ne1 A B 1\ne1 B A 2\n", "Duplicate edge id"),
    ],
)
def test_parse_errors(text: str, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        parse_graph_text(text)


def test_non_integer_count_chains_cause() -> None:
    with pytest.raises(ValueError) as excinfo:
        parse_graph_text("x 0")
    assert isinstance(excinfo.value.__cause__, ValueError)


def test_unknown_endpoint_is_kept_and_logged(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="mst_utils.functions"):
        g = parse_graph_text("2 1\nA B\ne1 A Q 3\n")
    assert g.edges == [Edge("e1", 3, "A", "Q")]
    assert "unknown vertex Q" in caplog.text


def test_unknown_endpoint_strict() -> None:
    with pytest.raises(ValueError, match="unknown vertex 'Q'"):
        parse_graph_text("2 1\nA B\ne1 Q B 3\n", strict_endpoints=True)


def test_parse_graph_file(tmp_path) -> None:
    p = tmp_path / "g.txt"
    p.write_text(SCENARIO_TEXT, encoding="utf-8")
    assert parse_graph_file(p).num_edges == 5
    with pytest.raises(ValueError, match="File not found"):
        parse_graph_file(tmp_path / "nope.txt")


def test_format_graph_text_coerces_weights() -> None:
    text = format_graph_text(
        ["A", "B", "C"],
        [("e1", "A", "B", 2.7), ("e2", "B", "C", "x"), ("e3", "C", "A", float("inf")), ("e4", "A", "C", "-4")],
    )
    assert text == "3 4\nA B C\ne1 A B 2\ne2 B C 1\ne3 C A 1\ne4 A C -4\n"


def test_format_graph_text_rejects_bad_tokens() -> None:
    with pytest.raises(ValueError):
        format_graph_text(["A B"], [])
    with pytest.raises(ValueError):
        format_graph_text(["A", "B"], [("", "A", "B", 1)])


def test_formatted_text_gives_same_trace() -> None:
    source = parse_graph_text(SCENARIO_TEXT)
    text = format_graph_text(
        source.vertex_names, [(e.id, e.src, e.dst, e.weight) for e in source.edges]
    )
    assert trace_to_json(kruskal_steps(parse_graph_text(text))) == trace_to_json(kruskal_steps(source))


def test_format_empty_graph() -> None:
    assert format_graph_text([], []) == "0 0\n\n"
    assert parse_graph_text(format_graph_text([], [])).num_vertices == 0


def test_circular_layout() -> None:
    coords = circular_layout(["a", "b", "c", "d"], radius=2.0)
    assert coords["a"] == pytest.approx((0.0, 2.0))
    assert coords["b"] == pytest.approx((2.0, 0.0), abs=1e-9)
    assert coords["c"] == pytest.approx((0.0, -2.0), abs=1e-9)
    for x, y in coords.values():
        assert math.hypot(x, y) == pytest.approx(2.0)
    assert circular_layout([]) == {}
