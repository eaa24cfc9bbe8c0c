"""Tests for config_sheet/table_codec.py and config_sheet/validation.py."""

import pytest

from condition_tracker.catalog import NameAllocator
from condition_tracker.config_sheet import (
    ConditionRow,
    CorrectionReason,
    HtmlTableCodec,
    YamlTableCodec,
    get_table_codec,
)
from condition_tracker.config_sheet.validation import (
    normalize_marker,
    normalize_whitespace,
    validate_rows,
)
from condition_tracker.defaults import BUILTIN_MARKERS, DEFAULT_CONDITIONS
from condition_tracker.errors import SyncFailure
from condition_tracker.models import ConditionDefinition


def to_definitions(rows: list[ConditionRow]) -> list[ConditionDefinition]:
    return validate_rows(rows, NameAllocator()).definitions


@pytest.fixture
def definitions() -> list[ConditionDefinition]:
    return [
        ConditionDefinition(name="Blinded", marker_ref="blue", description=["Can't see.", "Fails <b>sight</b> checks."]),
        ConditionDefinition(name="Cats & Dogs"),
        ConditionDefinition(name="Prone", marker_ref="Prone::99", description=["On the ground."]),
    ]


class TestHtmlTableCodec:

    def test_empty_description_renders_empty_item(self) -> None:
        table = HtmlTableCodec().serialize([ConditionDefinition(name="Prone")])
        assert "<td>Prone</td><td></td><td><ul><li></li></ul></td>" in table

    def test_parse_reads_cells(self, definitions: list[ConditionDefinition]) -> None:
        codec = HtmlTableCodec()
        rows = codec.parse(codec.serialize(definitions))
        assert [r.name for r in rows] == ["Blinded", "Cats & Dogs", "Prone"]
        assert [r.marker_ref for r in rows] == ["blue", "", "Prone::99"]
        assert rows[0].description == ["Can't see.", "Fails <b>sight</b> checks."]
        assert rows[1].description == []

    def test_serialize_is_a_fixed_point(self, definitions: list[ConditionDefinition]) -> None:
        codec = HtmlTableCodec()
        first = codec.serialize(definitions)
        second = codec.serialize(to_definitions(codec.parse(first)))
        third = codec.serialize(to_definitions(codec.parse(second)))
        assert first == second == third

    def test_default_catalog_is_a_fixed_point(self) -> None:
        codec = HtmlTableCodec()
        table = codec.serialize(DEFAULT_CONDITIONS)
        assert codec.serialize(to_definitions(codec.parse(table))) == table

    def test_editor_markup_is_flattened(self) -> None:
        table = (
            "<table><tr><th>Condition</th></tr>"
            "<tr><td><p>Dazed&nbsp;</p></td><td>null</td>"
            "<td><ul><li><p>Reels.</p></li><li><br></li><li>Staggers.</li></ul></td></tr></table>"
        )
        rows = HtmlTableCodec().parse(table)
        assert len(rows) == 1
        assert rows[0].name.strip() == "Dazed"
        assert normalize_marker(rows[0].marker_ref) == ""
        assert rows[0].description == ["Reels.", "Staggers."]

    def test_description_without_list(self) -> None:
        rows = HtmlTableCodec().parse("<table><tr><td>A</td><td></td><td>Just text</td></tr></table>")
        assert rows[0].description == ["Just text"]

    def test_missing_cells_default_blank(self) -> None:
        rows = HtmlTableCodec().parse("<table><tr><td>Alone</td></tr></table>")
        assert rows == [ConditionRow(name="Alone")]

    def test_extract(self) -> None:
        document = "<h1>Config</h1><table><tr><td>A</td></tr></table><p>after</p>"
        assert HtmlTableCodec().extract(document) == "<table><tr><td>A</td></tr></table>"

    @pytest.mark.parametrize("document", ["<h1>No table</h1>", "<table><tr><td>A</td></tr>"])
    def test_extract_failure(self, document: str) -> None:
        with pytest.raises(SyncFailure):
            HtmlTableCodec().extract(document)


class TestYamlTableCodec:

    def test_round_trip(self, definitions: list[ConditionDefinition]) -> None:
        codec = YamlTableCodec()
        block = codec.serialize(definitions)
        assert block.startswith("<pre>")
        assert to_definitions(codec.parse(codec.extract("<h1>x</h1>" + block))) == definitions

    def test_invalid_yaml(self) -> None:
        with pytest.raises(SyncFailure):
            YamlTableCodec().parse("<pre>- name: [unclosed</pre>")

    def test_not_a_list(self) -> None:
        with pytest.raises(SyncFailure):
            YamlTableCodec().parse("<pre>name: Prone</pre>")

    def test_scalar_description(self) -> None:
        rows = YamlTableCodec().parse("<pre>- name: Prone\n  description: On the ground.</pre>")
        assert rows == [ConditionRow(name="Prone", description=["On the ground."])]

    def test_factory(self) -> None:
        assert isinstance(get_table_codec("yaml"), YamlTableCodec)
        assert isinstance(get_table_codec("html"), HtmlTableCodec)
        with pytest.raises(ValueError):
            get_table_codec("csv")


class TestValidation:

    def test_normalize_whitespace(self) -> None:
        assert normalize_whitespace("  Half&nbsp;  Cover ") == "Half Cover"

    @pytest.mark.parametrize("raw", ["", "  ", "null", "NULL", "&nbsp;"])
    def test_blank_markers(self, raw: str) -> None:
        assert normalize_marker(raw) == ""

    def test_duplicate_names_get_suffix(self) -> None:
        result = validate_rows([ConditionRow(name="Blinded"), ConditionRow(name="blinded")], NameAllocator())
        names = [d.name for d in result.definitions]
        assert names == ["Blinded", "blinded 1"]
        assert len({n.lower() for n in names}) == 2
        assert result.corrections[0].reasons == [CorrectionReason.DUPLICATE]
        assert "already exists" in result.corrections[0].message

    def test_suffix_skips_existing_names(self) -> None:
        rows = [ConditionRow(name="Prone 1"), ConditionRow(name="Prone"), ConditionRow(name="PRONE")]
        names = [d.name for d in validate_rows(rows, NameAllocator()).definitions]
        assert names == ["Prone 1", "Prone", "PRONE 2"]

    def test_blank_names_get_placeholder(self) -> None:
        rows = [ConditionRow(name=" "), ConditionRow(name="")]
        result = validate_rows(rows, NameAllocator())
        assert [d.name for d in result.definitions] == ["Condition 1", "Condition 2"]
        assert all(c.reasons == [CorrectionReason.BLANK] for c in result.corrections)

    def test_reserved_characters_stripped(self) -> None:
        result = validate_rows([ConditionRow(name="Half-Cover|x")], NameAllocator())
        assert result.definitions[0].name == "HalfCoverx"
        assert result.corrections[0].reasons == [CorrectionReason.RESERVED_CHARACTERS]

    def test_only_reserved_characters(self) -> None:
        result = validate_rows([ConditionRow(name="--")], NameAllocator())
        assert result.definitions[0].name == "Condition 1"
        assert result.corrections[0].reasons == [
            CorrectionReason.RESERVED_CHARACTERS,
            CorrectionReason.BLANK,
        ]

    def test_valid_rows_have_no_corrections(self) -> None:
        result = validate_rows([ConditionRow(name="Prone", marker_ref="red")], NameAllocator())
        assert result.corrections == []
        assert result.definitions[0].marker_ref == "red"

    def test_unknown_markers_reported_and_kept(self) -> None:
        rows = [ConditionRow(name="A", marker_ref="red"), ConditionRow(name="B", marker_ref="sparkles")]
        result = validate_rows(rows, NameAllocator(), BUILTIN_MARKERS)
        assert result.unknown_markers == ["sparkles"]
        assert result.definitions[1].marker_ref == "sparkles"
