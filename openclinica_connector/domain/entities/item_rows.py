from dataclasses import dataclass

from pydantic import BaseModel, Field, field_validator

from ...constants import Defaults


@dataclass(frozen=True, slots=True)
class ItemRow:
    subject_key: str
    study_event_oid: str
    study_event_repeat_key: str
    form_oid: str
    item_group_oid: str
    item_group_repeat_key: str
    item_oid: str
    value: str
    form_status: str | None = None


class ItemColumnMapping(BaseModel):
    subject_key: str = "SubjectKey"
    study_event_oid: str = "StudyEventOID"
    study_event_repeat_key: str = "StudyEventRepeatKey"
    form_oid: str = "FormOID"
    form_status: str | None = "FormStatus"
    item_group_oid: str = "ItemGroupOID"
    item_group_repeat_key: str = "ItemGroupRepeatKey"
    item_oid: str = "ItemOID"
    value: str = "Value"
    default_repeat_key: str = Field(default=Defaults.REPEAT_KEY, min_length=1)

    @field_validator(
        "subject_key",
        "study_event_oid",
        "study_event_repeat_key",
        "form_oid",
        "item_group_oid",
        "item_group_repeat_key",
        "item_oid",
        "value",
    )
    @classmethod
    def _column_name_not_blank(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("column name must not be blank")
        return cleaned

    @property
    def required_columns(self) -> list[str]:
        return [
            self.subject_key,
            self.study_event_oid,
            self.form_oid,
            self.item_group_oid,
            self.item_oid,
            self.value,
        ]

    @property
    def optional_columns(self) -> list[str]:
        columns = [self.study_event_repeat_key, self.item_group_repeat_key]
        if self.form_status:
            columns.append(self.form_status)
        return columns
