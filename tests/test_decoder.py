import pytest

from icon_catalog.errors import ValidationError
from icon_catalog.schemas.enums import Category, FigmaCategory, IconStatus
from icon_catalog.sync.decoder import decode_row, decode_rows


def make_row(**overrides):
    row = {
        "Row ID": "96cR4kqjHO16pBVCiXg_Ep",
        "Name": "cube",
        "Alias": "",
        "Codepoint": "57818",
        "Status": "Implemented",
        "Search Categories": "Design, Games, Objects",
        "Category": "Design",
        "Tags": "square, box, 3d, volume, blocks",
        "Notes": "",
        "Release": "1.0",
        "Last Updated": "2.0",
        "Deprecated": "",
        "Published": "Y",
    }
    row.update(overrides)
    return row


def test_decodes_full_row():
    decoded = decode_row(make_row())
    record = decoded.record
    assert record.rid == "96cR4kqjHO16pBVCiXg_Ep"
    assert record.name == "cube"
    assert record.alias is None
    assert record.code == 57818
    assert record.status is IconStatus.IMPLEMENTED
    assert record.category is FigmaCategory.DESIGN
    assert record.search_categories == [Category.DESIGN, Category.GAMES, Category.OBJECTS]
    assert record.tags == ["square", "box", "3d", "volume", "blocks"]
    assert record.notes is None
    assert record.released_at == 1.0
    assert record.last_updated_at == 2.0
    assert record.deprecated_at is None
    assert record.published is True
    assert decoded.warnings == []


def test_absent_published_is_false():
    row = make_row()
    del row["Published"]
    assert decode_row(row).record.published is False


def test_unrecognized_status_maps_to_none_sentinel():
    decoded = decode_row(make_row(Status="Archived"))
    assert decoded.record.status is IconStatus.NONE
    assert [w.field for w in decoded.warnings] == ["Status"]


def test_multi_word_figma_category():
    assert decode_row(make_row(Category="Health & Wellness")).record.category is FigmaCategory.HEALTH_AND_WELLNESS
    assert decode_row(make_row(Category="Toys")).record.category is FigmaCategory.UNKNOWN


def test_native_json_cells():
    decoded = decode_row(make_row(
        Codepoint=57818,
        Release=2.1,
        Tags=["square", "box"],
        **{"Search Categories": ["Design", "Toys"]},
    ))
    record = decoded.record
    assert record.code == 57818
    assert record.released_at == 2.1
    assert record.tags == ["square", "box"]
    assert record.search_categories == [Category.DESIGN, Category.UNKNOWN]


def test_bad_optional_fields_degrade_to_defaults():
    decoded = decode_row(make_row(Codepoint="E1DA", Release="v1", Published="maybe"))
    record = decoded.record
    assert record.code is None
    assert record.released_at is None
    assert record.published is False
    assert {w.field for w in decoded.warnings} == {"Codepoint", "Release", "Published"}


@pytest.mark.parametrize("column", ["Row ID", "Name"])
def test_missing_required_field_rejects_row(column):
    row = make_row()
    del row[column]
    with pytest.raises(ValidationError) as exc_info:
        decode_row(row)
    assert exc_info.value.field == column


@pytest.mark.parametrize("column", ["Row ID", "Name"])
def test_blank_required_field_rejects_row(column):
    with pytest.raises(ValidationError):
        decode_row(make_row(**{column: "  "}))


def test_decode_rows_excludes_rejected_rows():
    rows = [
        make_row(),
        make_row(**{"Row ID": "B", "Name": ""}),
        "not a row",
        make_row(**{"Row ID": "C", "Name": "cube-fill", "Status": "Archived"}),
    ]
    batch = decode_rows(rows)
    assert [r.rid for r in batch.records] == ["96cR4kqjHO16pBVCiXg_Ep", "C"]
    assert [index for index, _ in batch.rejected] == [1, 2]
    assert len(batch.warnings) == 1


@pytest.mark.parametrize(
    "code",
    [
        "4294967296",   # não cabe em INTEGER
        57819,          # ímpar
        "57819",
        0x41,           # fora das faixas de uso privado
        0xF8FF + 1,
    ],
)
def test_unusable_codepoint_becomes_none_with_warning(code):
    """Um codepoint que a tabela icons recusaria não pode derrubar o lote inteiro."""
    decoded = decode_row(make_row(Codepoint=code))
    assert decoded.record.code is None
    assert [w.field for w in decoded.warnings] == ["Codepoint"]


@pytest.mark.parametrize("code", [0xE000, 0xF8FE, 0xF0000, 0xFFFFC])
def test_private_use_codepoints_are_kept(code):
    decoded = decode_row(make_row(Codepoint=str(code)))
    assert decoded.record.code == code
    assert decoded.warnings == []


def test_bad_codepoint_does_not_reject_row():
    batch = decode_rows([make_row(Codepoint="4294967296"), make_row(**{"Row ID": "B", "Name": "cube-fill"})])
    assert len(batch.records) == 2
    assert batch.rejected == []
