from __future__ import annotations

import json

from odocindex.config import PageConfig
from odocindex.index_model import IndexModel
from odocindex.page import render_index_page, row_keys, write_index_page


def _model() -> IndexModel:
    return IndexModel.build(
        ["Dog", "Cat<T>"],
        methods=[("bark", "Dog", True), ("eat", "Dog", False)],
        fields=[("lives", "Cat<T>", True)],
    )


def test_page_contains_every_row(tmp_path):
    path = write_index_page(_model(), tmp_path / "site")
    html = path.read_text(encoding="utf-8")
    assert path.name == "index.html"
    assert '<input id="search" type="text" placeholder="Search..." value="" />' in html
    assert '<div id="data">' in html
    assert (
        '<p id="c-Dog" class="g" data-name="Dog">[class] '
        '<a href="class/Dog.html" target="_blank">Dog</a></p>'
    ) in html
    assert (
        '<li id="m-eat-c-Dog" class="g" data-name="eat">[method] '
        '<a href="class/Dog.html#m-eat" target="_blank">eat</a> of Dog (inherited)</li>'
    ) in html
    assert "of Cat&lt;T&gt;<br /></li>" in html
    assert 'href="class/Cat&lt;T&gt;.html#f-lives"' in html


def test_page_title_and_branch():
    config = PageConfig(title="odocgen", branch="17.0")
    html, _ = render_index_page(_model(), config)
    assert "<title>odocgen [17.0]</title>" in html
    assert "<h1>odocgen [17.0]</h1>" in html


def test_page_config_changes_links():
    config = PageConfig(class_dir="api", link_target="_self")
    html, engine = render_index_page(_model(), config)
    assert 'href="api/Dog.html#m-bark" target="_self"' in html
    assert engine.class_dir == "api"


def test_initial_query_hides_rows():
    html, engine = render_index_page(_model(), query="ar")
    assert [e.name for e in engine.visible_entries()] == ["bark"]
    assert '<p id="c-Dog" class="g" data-name="Dog" hidden>' in html
    assert 'value="ar"' in html


def test_page_script_addresses_rows_by_key():
    model = _model()
    keys = row_keys(model)
    assert [dom_id for dom_id, _ in keys] == [e.key.dom_id for e in model.iter_entries()]
    assert keys[3] == ["m-eat-c-Dog", "eat"]
    html, _ = render_index_page(model)
    assert "const rowKeys = " + json.dumps(keys) in html
    assert "document.getElementById(id)" in html
    assert "querySelectorAll" not in html


def test_page_script_escapes_closing_tags():
    model = IndexModel.build(["</script>"])
    html, _ = render_index_page(model)
    assert html.count("</script>") == 1
    assert '"c-<\\/script>"' in html


def test_page_config_from_env(monkeypatch):
    monkeypatch.setenv("ODOCINDEX_TITLE", "docs")
    monkeypatch.setenv("ODOCINDEX_BRANCH", "main")
    monkeypatch.setenv("ODOCINDEX_CLASS_DIR", "classes/")
    monkeypatch.delenv("ODOCINDEX_LINK_TARGET", raising=False)
    config = PageConfig.from_env()
    assert config == PageConfig(title="docs", branch="main", class_dir="classes", link_target="_blank")
    assert config.with_overrides(branch=None, title="x").title == "x"
    assert config.with_overrides(branch=None).branch == "main"


def test_cli_class_dir_override_drops_trailing_slash():
    config = PageConfig().with_overrides(class_dir="api/", title=None)
    assert config.class_dir == "api"
    html, _ = render_index_page(_model(), config)
    assert 'href="api/Dog.html#m-bark"' in html
    assert "api//" not in html
