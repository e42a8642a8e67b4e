from openclinica_connector.domain.entities.item_rows import ItemRow
from openclinica_connector.domain.entities.odm import ClinicalData
from openclinica_connector.domain.services.clinical_data_builder import (
    build_clinical_data,
)


def _row(value: str, **overrides: str) -> ItemRow:
    fields = {
        "subject_key": "SS_1",
        "study_event_oid": "E1",
        "study_event_repeat_key": "1",
        "form_oid": "F1",
        "item_group_oid": "G1",
        "item_group_repeat_key": "1",
        "item_oid": "I1",
        "value": value,
    }
    fields.update(overrides)
    return ItemRow(**fields)


class TestBuildClinicalData:
    def test_builds_tree_with_study_attributes(self):
        tree = build_clinical_data([_row("5")], "S_DEMO", "v2")

        assert tree.study_oid == "S_DEMO"
        assert tree.metadata_version_oid == "v2"
        assert tree.item_count() == 1

    def test_later_rows_overwrite_earlier_values(self):
        tree = build_clinical_data([_row("5"), _row("7")], "S_DEMO", "1")

        path = next(tree.iter_items())
        assert tree.item_count() == 1
        assert path.item.value == "7"

    def test_form_status_taken_from_first_row_of_form(self):
        rows = [
            _row("1", form_status="dataentrystarted"),
            _row("2", item_oid="I2", form_status="completed"),
        ]

        tree = build_clinical_data(rows, "S_DEMO", "1")

        assert next(tree.iter_items()).form.form_status == "dataentrystarted"

    def test_extends_existing_tree(self):
        existing = ClinicalData("S_DEMO", "1")
        existing.upsert_item("SS_0", "E1", 1, "F1", "G1", 1, "I1", "x")

        tree = build_clinical_data(
            [_row("5")], "ignored", "ignored", clinical_data=existing
        )

        assert tree is existing
        assert tree.study_oid == "S_DEMO"
        assert [s.subject_key for s in tree.subject_data] == ["SS_0", "SS_1"]

    def test_empty_rows_give_empty_tree(self):
        tree = build_clinical_data([], "S_DEMO", "1")
        assert tree.item_count() == 0
        assert len(tree.subject_data) == 0
