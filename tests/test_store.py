from __future__ import annotations

import json

import pytest

from odocindex.jsliteral import LiteralSyntaxError, ObjectPairs, parse_value
from odocindex.store import (
    IndexFormatError,
    dump_index_json,
    load_index,
    loads_db_js,
    loads_index_json,
)

DB_JS = (
    "'use strict'\n"
    'const globalIndex={classes:["res.partner","res.users",],'
    'methods:{"write":{o:true,c:"res.partner"},"write":{o:false,c:"res.users"},'
    '"_compute_display_name":{o:true,c:"res.users"},},'
    'fields:{"name":{o:true,c:"res.partner"},}\n'
    '};const globalQuoteList=["Read the \\"source\\", Luke","Caf\\u{e9}",]'
)


def test_db_js_keeps_duplicate_member_names():
    bundle = loads_db_js(DB_JS)
    model = bundle.model
    assert model.list_classes() == ["res.partner", "res.users"]
    assert model.list_methods() == [
        ("write", "res.partner", True),
        ("write", "res.users", False),
        ("_compute_display_name", "res.users", True),
    ]
    assert model.list_fields() == [("name", "res.partner", True)]


def test_db_js_exposes_quotes():
    bundle = loads_db_js(DB_JS)
    assert bundle.quotes == ['Read the "source", Luke', "Café"]


def test_db_js_without_index_binding():
    with pytest.raises(IndexFormatError):
        loads_db_js("const globalQuoteList=[]")


def test_db_js_syntax_error_is_format_error():
    with pytest.raises(IndexFormatError):
        loads_db_js("const globalIndex={classes:[")


def test_member_without_owner_is_rejected():
    with pytest.raises(IndexFormatError):
        loads_db_js('const globalIndex={classes:["A"],methods:{"run":{o:true}},fields:{}}')


def test_member_with_non_boolean_flag_is_rejected():
    with pytest.raises(IndexFormatError):
        loads_index_json('{"classes": ["A"], "fields": {"x": {"c": "A", "o": 1}}}')


def test_json_object_form_keeps_duplicates():
    text = '{"classes": ["A", "B"], "methods": {"run": {"c": "A", "o": true}, "run": {"c": "B", "o": false}}}'
    model = loads_index_json(text).model
    assert model.list_methods() == [("run", "A", True), ("run", "B", False)]


def test_json_wrapped_in_global_index_key():
    text = json.dumps({"globalIndex": {"classes": ["A"], "methods": {}, "fields": {}}})
    assert loads_index_json(text).model.list_classes() == ["A"]


def test_load_index_dispatches_on_suffix(tmp_path):
    js = tmp_path / "db.js"
    js.write_text(DB_JS, encoding="utf-8")
    from_js = load_index(js)
    assert from_js.source == str(js)

    out = dump_index_json(from_js.model, tmp_path / "out" / "index.json")
    from_json = load_index(out)
    assert from_json.model == from_js.model


def test_load_index_missing_file(tmp_path):
    with pytest.raises(IndexFormatError):
        load_index(tmp_path / "nope.js")


def test_parse_value_js_literals():
    value = parse_value("{a: [1, 2.5, true, null,], 'b': \"x\\ty\", /* note */ c: false,}")
    assert isinstance(value, ObjectPairs)
    assert value.to_dict() == {"a": [1, 2.5, True, None], "b": "x\ty", "c": False}


def test_parse_value_rejects_trailing_data():
    with pytest.raises(LiteralSyntaxError):
        parse_value("[1] 2")
