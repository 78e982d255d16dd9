from dagette import edges, task, trace


def _leaf(h):
    return h.ok(None)


def _diamond():
    a = task("a", [], _leaf)
    b = task("b", [a], _leaf)
    c = task("c", [a], _leaf)
    d = task("d", [b, c], _leaf)
    return a, b, c, d


def test_trace_is_topological_and_deduplicated():
    *_, d = _diamond()
    assert trace(d) == ["a", "b", "c", "d"]


def test_trace_linear_chain():
    user = task("fetch-user", [], _leaf)
    streams = task("fetch-streams", [user], _leaf)
    combine = task("combine-data", [streams], _leaf)
    assert trace(combine) == ["fetch-user", "fetch-streams", "combine-data"]


def test_edges_visit_shared_dependency_once():
    *_, d = _diamond()
    assert edges(d) == [("b", "d"), ("a", "b"), ("c", "d"), ("a", "c")]


def test_leaf_has_no_edges():
    assert edges(task("solo", [], _leaf)) == []
    assert trace(task("solo", [], _leaf)) == ["solo"]


def test_duplicate_labels_are_distinct_nodes():
    x1 = task("x", [], _leaf)
    x2 = task("x", [], _leaf)
    root = task("root", [x1, x2], _leaf)
    assert trace(root) == ["x", "x", "root"]
    assert edges(root) == [("x", "root"), ("x", "root")]


def test_traversal_does_not_execute():
    calls = []

    def fn(h):
        calls.append(1)
        return h.ok(1)

    root = task("root", [task("dep", [], fn)], fn)
    trace(root)
    edges(root)
    assert calls == []
