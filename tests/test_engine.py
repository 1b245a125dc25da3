import threading
from pathlib import Path

import pytest

import stache
from stache import (
    CompileFailed,
    MismatchedSectionClose,
    PartialCycle,
    PartialNotFound,
    Renderer,
    Template,
    UnclosedSection,
)


def test_compile_returns_template_and_errors():
    template, errors = stache.compile("Hi {{name}}")
    assert isinstance(template, Template)
    assert errors == []
    assert template.render({"name": "Ann"}) == "Hi Ann"


def test_render_one_shot():
    assert stache.render("{{x}}{{y}}", {"x": "1", "y": "2"}) == ("12", [])


def test_delimiter_switch_round_trip():
    out, errors = stache.render("{{=<% %>=}}<%x%><%={{ }}=%>{{y}}", {"x": "1", "y": "2"})
    assert errors == []
    assert out == "12"


def test_one_shot_reports_errors_and_still_renders():
    out, errors = stache.render("a{{#a}}b{{/c}}d", {"a": True})
    assert out == "ad"
    assert [type(e) for e in errors] == [MismatchedSectionClose]


def test_partials_mapping():
    out, errors = stache.render('"{{>text}}"', {}, partials={"text": "from partial"})
    assert (out, errors) == ('"from partial"', [])


def test_recursive_partial_is_a_compile_error():
    partials = {"node": "{{content}}<{{#nodes}}{{>node}}{{/nodes}}>"}
    _, errors = stache.compile("{{>node}}", partials)
    assert len(errors) == 1
    assert isinstance(errors[0], PartialCycle)
    assert errors[0].chain == ("node", "node")


def test_renderer_loads_from_directory(tmp_path: Path):
    (tmp_path / "footer.mustache.html").write_text("<footer>{{year}}</footer>", encoding="utf-8")
    renderer = Renderer(template_dir=tmp_path)
    assert renderer.render("{{>footer}}", {"year": 2026}) == "<footer>2026</footer>"


def test_renderer_mapping_wins_over_directory(tmp_path: Path):
    (tmp_path / "p.mustache").write_text("disk", encoding="utf-8")
    renderer = Renderer(template_dir=tmp_path, partials={"p": "memory"})
    assert renderer.render("{{>p}}") == "memory"


def test_renderer_raises_compile_failed():
    renderer = Renderer()
    with pytest.raises(CompileFailed) as exc:
        renderer.render("{{#open}}{{>missing}}")
    kinds = [type(e) for e in exc.value.errors]
    assert kinds == [PartialNotFound, UnclosedSection]
    assert "2 error(s)" in str(exc.value)


def test_compiled_template_renders_concurrently():
    template, _ = stache.compile("{{#items}}{{n}};{{/items}}")
    results = {}

    def work(i):
        items = [{"n": i * 10 + j} for j in range(50)]
        results[i] = template.render({"items": items})

    threads = [threading.Thread(target=work, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    for i in range(8):
        assert results[i] == "".join(f"{i * 10 + j};" for j in range(50))


def test_same_text_compiles_to_equal_templates():
    text = "{{#a}}\n{{b}}\n{{/a}}\n{{^a}}none{{/a}}"
    first, _ = stache.compile(text)
    second, _ = stache.compile(text)
    assert first == second
    for data in ({"a": [{"b": 1}, {"b": 2}]}, {"a": False}, {}):
        assert first.render(data) == second.render(data)
