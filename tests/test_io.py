import json
import math

import numpy as np
import pytest

from simplicial_ph import (
    BoundaryMatrix,
    PersistenceDiagram,
    Simplex,
    calculate_persistence_pairing,
    diagram_to_json,
    load_boundary_matrix,
    load_diagrams,
    load_function,
    load_simplicial_complex,
    save_boundary_matrix,
    save_diagram,
    write_diagrams,
)
from simplicial_ph.diagrams import calculate_persistence_diagram
from simplicial_ph.io import format_diagram, parse_diagram
from simplicial_ph.utils import format_value, to_jsonable, weight_range

INF = math.inf


def _make_diagrams():
    return [
        PersistenceDiagram(0, [(0.0, 1.5), (0.25, INF)]),
        PersistenceDiagram(1, [(1.0, 2.0)]),
    ]


def test_format_value():
    assert format_value(0.5) == "0.5"
    assert format_value(INF) == "inf"
    assert format_value(-INF, "Inf") == "-Inf"


def test_parse_diagram_skips_comments_and_blanks():
    D = parse_diagram("# dimension 1\n\n0 1\n2 inf\n", dimension=1)
    assert D.dimension == 1
    assert D.points == [(0.0, 1.0), (2.0, INF)]


def test_parse_diagram_custom_infinity_token():
    D = parse_diagram("0 Infinity", infinity_token="Infinity")
    assert D.points == [(0.0, INF)]


def test_parse_diagram_rejects_malformed_lines():
    with pytest.raises(ValueError):
        parse_diagram("0 1 2")


def test_format_diagram():
    text = format_diagram(PersistenceDiagram(2, [(0.5, INF)]))
    assert text.splitlines() == ["# dimension 2", "0.5 inf"]


def test_write_and_load_diagrams(tmp_path):
    path = write_diagrams(_make_diagrams(), tmp_path / "out" / "diagrams.txt")
    assert path.exists()
    loaded = load_diagrams(path)
    assert loaded == _make_diagrams()


def test_load_diagrams_without_headers(tmp_path):
    path = tmp_path / "plain.txt"
    path.write_text("0 1\n0 inf\n\n1 2\n", encoding="utf-8")
    loaded = load_diagrams(path)
    assert [D.dimension for D in loaded] == [0, 1]
    assert loaded[0].betti() == 1


def test_diagram_json(tmp_path):
    D = _make_diagrams()[0]
    payload = json.loads(diagram_to_json(D))
    assert payload["dimension"] == 0
    assert payload["betti"] == 1
    assert payload["num_points"] == 2
    assert payload["points"][1] == {"birth": 0.25, "death": "inf"}

    path = save_diagram({"diagrams": _make_diagrams()}, tmp_path / "d.json", infinity_token="Infinity")
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert [d["dimension"] for d in payload["diagrams"]] == [0, 1]
    assert payload["diagrams"][0]["points"][1]["death"] == "Infinity"


def test_to_jsonable_handles_numpy():
    out = to_jsonable({"a": np.float64(1.5), "b": np.int64(3), "c": np.array([1.0, np.inf]), "d": float("nan")})
    assert out == {"a": 1.5, "b": 3, "c": [1.0, "inf"], "d": "nan"}
    json.dumps(out)


def test_boundary_matrix_round_trip(tmp_path):
    M = BoundaryMatrix([[], [], [], [0, 1], [0, 2], [1, 2]])
    path = save_boundary_matrix(M, tmp_path / "triangle.txt")
    assert path.read_text(encoding="utf-8") == "\n\n\n0 1\n0 2\n1 2\n"
    N = load_boundary_matrix(path, representation="set")
    assert N == M
    assert N.representation == "set"
    assert calculate_persistence_pairing(N).as_set() == {(0, None), (1, 3), (2, 4), (5, None)}


def test_load_boundary_matrix_comments_and_errors(tmp_path):
    path = tmp_path / "m.txt"
    path.write_text("# two vertices and an edge\n\n\n0 1\n", encoding="utf-8")
    M = load_boundary_matrix(path)
    assert M.num_columns == 3
    assert M.dimensions() == [0, 0, 1]

    path.write_text("0 x\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_boundary_matrix(path)


def test_load_function(tmp_path):
    path = tmp_path / "f.txt"
    path.write_text("0 3\n1 2  # trailing comment\n", encoding="utf-8")
    M, values = load_function(path)
    assert M.num_columns == 7
    assert values == [0.0, 1.0, 2.0, 2.0, 3.0, 3.0, 3.0]

    D = calculate_persistence_diagram(M, values)
    assert sorted(D.points) == [(0.0, INF), (1.0, 3.0), (2.0, 2.0), (3.0, 3.0)]
    assert sorted(D.remove_diagonal().points) == [(0.0, INF), (1.0, 3.0)]


def test_load_function_requires_values(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_text("# nothing here\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_function(path)


def test_load_simplicial_complex(tmp_path):
    path = tmp_path / "graph.txt"
    path.write_text(
        "# weighted triangle\n"
        "0\n1\n2\n"
        "0 1 : 0.5\n"
        "1,2 : 1.5\n"
        "0 2:2.5\n",
        encoding="utf-8",
    )
    K = load_simplicial_complex(path)
    assert len(K) == 6
    assert K[K.index([1, 2])].data == 1.5
    assert K[K.index(Simplex([0, 2]))].data == 2.5
    assert weight_range(K) == (0.0, 2.5)


def test_load_simplicial_complex_rejects_bad_data(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_text("0 1 : heavy\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_simplicial_complex(path)
