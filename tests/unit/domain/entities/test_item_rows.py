import pytest
from pydantic import ValidationError

from openclinica_connector.domain.entities.item_rows import ItemColumnMapping


class TestItemColumnMapping:
    def test_defaults(self):
        mapping = ItemColumnMapping()

        assert mapping.subject_key == "SubjectKey"
        assert mapping.default_repeat_key == "1"
        assert mapping.required_columns == [
            "SubjectKey",
            "StudyEventOID",
            "FormOID",
            "ItemGroupOID",
            "ItemOID",
            "Value",
        ]
        assert mapping.optional_columns == [
            "StudyEventRepeatKey",
            "ItemGroupRepeatKey",
            "FormStatus",
        ]

    def test_form_status_column_can_be_disabled(self):
        mapping = ItemColumnMapping(form_status=None)
        assert "FormStatus" not in mapping.optional_columns

    def test_column_names_are_stripped(self):
        mapping = ItemColumnMapping(subject_key="  Subject ")
        assert mapping.subject_key == "Subject"

    def test_blank_column_name_rejected(self):
        with pytest.raises(ValidationError):
            ItemColumnMapping(item_oid="   ")

    def test_empty_default_repeat_key_rejected(self):
        with pytest.raises(ValidationError):
            ItemColumnMapping(default_repeat_key="")
