import json

import pytest

from CantoDictYomitan.util.config.configuration import DEFAULT_JSON_FIELDS, Source
from CantoDictYomitan.util.yomitan_dict.contracts import MalformedInputError, MissingColumnError
from CantoDictYomitan.util.yomitan_dict.field_decoder import decode_all, decode_row, entry_from_row


def test_decode_row_parses_only_designated_columns():
    row = {"variants": '["例仔"]', "pos": '["noun"]', "chinese": "[例]", "cantodict_id": "42"}
    decoded = decode_row(row, ["variants", "pos", "cantodict_id"])
    assert decoded["variants"] == ["例仔"]
    assert decoded["pos"] == ["noun"]
    assert decoded["cantodict_id"] == 42
    assert decoded["chinese"] == "[例]"
    assert row["variants"] == '["例仔"]'


def test_decode_row_leaves_empty_values():
    decoded = decode_row({"variants": "", "notes": ""}, ["variants", "flag"])
    assert decoded == {"variants": "", "notes": ""}


def test_decode_row_rejects_malformed_json():
    with pytest.raises(MalformedInputError) as exc_info:
        decode_row({"variants": "[unclosed"}, ["variants"], line=7)
    assert exc_info.value.column == "variants"
    assert exc_info.value.line == 7
    assert "line 7" in str(exc_info.value)


@pytest.mark.parametrize("value", ['["a", "b"]', '{"x": [1, 2]}', "[]", '"text"', "12.5"])
def test_decoded_values_survive_reencoding(value):
    decoded = decode_row({"similar": value}, ["similar"])["similar"]
    assert json.loads(json.dumps(decoded)) == decoded == json.loads(value)


def test_entry_from_row_maps_columns():
    row = {
        "entry_type": "compound",
        "cantodict_id": "5",
        "chinese": "例子",
        "jyutping": "lai6 zi2",
        "yale": "laih jí",
        "pinyin": "",
        "pos": '["noun", "measure"]',
        "definition": "example\nsample",
        "notes": "",
        "variants": '["例仔"]',
        "compound_cantodictids": "[9]",
        "sentence_cantodictids": "",
        "google_frequency": "120",
        "dialect": "",
    }
    entry = entry_from_row(row, Source())
    assert entry.kind == "compound"
    assert entry.id == 5
    assert entry.key == "compound,5"
    assert entry.surface_form == "例子"
    assert entry.readings == {"jyutping": "lai6 zi2", "yale": "laih jí", "pinyin": ""}
    assert entry.pos == ["noun", "measure"]
    assert entry.variants == ["例仔"]
    assert entry.compound_refs == [9]
    assert entry.sentence_refs == []
    assert entry.character_refs == []
    assert entry.notes is None
    assert entry.dialect is None
    assert entry.frequency == 120


def test_entry_from_row_requires_list_columns_to_be_lists():
    with pytest.raises(MalformedInputError):
        entry_from_row({"entry_type": "compound", "chinese": "例", "variants": '"例仔"'}, Source())


def test_entry_from_row_requires_kind_and_text():
    with pytest.raises(MissingColumnError) as exc_info:
        entry_from_row({"entry_type": "", "chinese": "例"}, Source(), line=3)
    assert exc_info.value.column == "entry_type"

    with pytest.raises(MissingColumnError):
        entry_from_row({"entry_type": "compound"}, Source())


def test_decode_all_reports_source_line():
    rows = [
        {"entry_type": "compound", "chinese": "例"},
        {"entry_type": "compound", "chinese": "子", "pos": "[bad"},
    ]
    with pytest.raises(MalformedInputError) as exc_info:
        decode_all(rows, Source())
    assert exc_info.value.line == 3


def test_default_json_fields_cover_reference_columns():
    for column in ("compound_cantodictids", "sentence_cantodictids", "variants", "pos", "cantodict_id"):
        assert column in DEFAULT_JSON_FIELDS
