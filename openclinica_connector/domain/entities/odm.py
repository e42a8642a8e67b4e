"""In-memory ODM clinical data tree.

The tree mirrors the ClinicalData section of a CDISC ODM 1.3 document as
OpenClinica imports it:

    ClinicalData -> SubjectData -> StudyEventData -> FormData
                 -> ItemGroupData -> ItemData

Each level keeps its children in an insertion-ordered keyed collection so a
value can be upserted along a key path without duplicating siblings, and so
serialization reproduces the order in which data was supplied.

Repeatable levels (study events and item groups) are keyed by a tuple of the
OID and the repeat key. Repeat keys are normalised to strings, so ``1`` and
``"1"`` address the same node.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

type RepeatKey = int | str
type RepeatedKey = tuple[str, str]


def normalize_repeat_key(repeat_key: RepeatKey) -> str:
    return str(repeat_key)


class OrderedChildren[K, V]:
    """Insertion-ordered keyed collection of child nodes.

    Setting an existing key replaces the value in its original position.
    Iteration yields values, in insertion order.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        super().__init__()
        self._entries: dict[K, V] = {}

    @classmethod
    def from_nodes(
        cls, nodes: Iterable[V], key: Callable[[V], K]
    ) -> OrderedChildren[K, V]:
        children: OrderedChildren[K, V] = cls()
        for node in nodes:
            children.set(key(node), node)
        return children

    def get(self, key: K) -> V | None:
        return self._entries.get(key)

    def set(self, key: K, value: V) -> None:
        self._entries[key] = value

    def keys(self) -> list[K]:
        return list(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[V]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"OrderedChildren({list(self._entries)!r})"


class ItemData:
    __slots__ = ("item_oid", "value")

    def __init__(self, item_oid: str, value: str) -> None:
        super().__init__()
        self.item_oid = item_oid
        self.value = value

    @property
    def key(self) -> str:
        return self.item_oid

    def __repr__(self) -> str:
        return f"ItemData(item_oid={self.item_oid!r}, value={self.value!r})"


class ItemGroupData:
    __slots__ = ("item_data", "item_group_oid", "item_group_repeat_key")

    def __init__(
        self,
        item_group_oid: str,
        item_group_repeat_key: RepeatKey,
        item_data: Iterable[ItemData] = (),
    ) -> None:
        super().__init__()
        self.item_group_oid = item_group_oid
        self.item_group_repeat_key = normalize_repeat_key(item_group_repeat_key)
        self.item_data: OrderedChildren[str, ItemData] = OrderedChildren.from_nodes(
            item_data, key=lambda node: node.key
        )

    @property
    def key(self) -> RepeatedKey:
        return (self.item_group_oid, self.item_group_repeat_key)

    def upsert_item(self, item_oid: str, item_value: str) -> ItemData:
        item = self.item_data.get(item_oid)
        if item is None:
            item = ItemData(item_oid, item_value)
            self.item_data.set(item_oid, item)
        else:
            item.value = item_value
        return item

    def __repr__(self) -> str:
        return (
            f"ItemGroupData(item_group_oid={self.item_group_oid!r}, "
            f"item_group_repeat_key={self.item_group_repeat_key!r}, "
            f"items={len(self.item_data)})"
        )


class FormData:
    """A CRF instance within a study event.

    ``form_status`` is only ever set at construction time. OpenClinica 3.6+
    reads it from the ``OpenClinica:Status`` attribute on import.
    """

    __slots__ = ("form_oid", "form_status", "item_group_data")

    def __init__(
        self,
        form_oid: str,
        item_group_data: Iterable[ItemGroupData] = (),
        form_status: str | None = None,
    ) -> None:
        super().__init__()
        self.form_oid = form_oid
        self.form_status = form_status
        self.item_group_data: OrderedChildren[RepeatedKey, ItemGroupData] = (
            OrderedChildren.from_nodes(item_group_data, key=lambda node: node.key)
        )

    @property
    def key(self) -> str:
        return self.form_oid

    def upsert_item(
        self,
        item_group_oid: str,
        item_group_repeat_key: RepeatKey,
        item_oid: str,
        item_value: str,
    ) -> ItemData:
        key = (item_group_oid, normalize_repeat_key(item_group_repeat_key))
        group = self.item_group_data.get(key)
        if group is None:
            group = ItemGroupData(item_group_oid, item_group_repeat_key)
            self.item_group_data.set(key, group)
        return group.upsert_item(item_oid, item_value)

    def __repr__(self) -> str:
        return (
            f"FormData(form_oid={self.form_oid!r}, "
            f"form_status={self.form_status!r}, "
            f"groups={len(self.item_group_data)})"
        )


class StudyEventData:
    __slots__ = ("form_data", "study_event_oid", "study_event_repeat_key")

    def __init__(
        self,
        study_event_oid: str,
        study_event_repeat_key: RepeatKey,
        form_data: Iterable[FormData] = (),
    ) -> None:
        super().__init__()
        self.study_event_oid = study_event_oid
        self.study_event_repeat_key = normalize_repeat_key(study_event_repeat_key)
        self.form_data: OrderedChildren[str, FormData] = OrderedChildren.from_nodes(
            form_data, key=lambda node: node.key
        )

    @property
    def key(self) -> RepeatedKey:
        return (self.study_event_oid, self.study_event_repeat_key)

    def upsert_item(
        self,
        form_oid: str,
        item_group_oid: str,
        item_group_repeat_key: RepeatKey,
        item_oid: str,
        item_value: str,
        form_status: str | None = None,
    ) -> ItemData:
        form = self.form_data.get(form_oid)
        if form is None:
            form = FormData(form_oid, form_status=form_status)
            self.form_data.set(form_oid, form)
        return form.upsert_item(
            item_group_oid, item_group_repeat_key, item_oid, item_value
        )

    def __repr__(self) -> str:
        return (
            f"StudyEventData(study_event_oid={self.study_event_oid!r}, "
            f"study_event_repeat_key={self.study_event_repeat_key!r}, "
            f"forms={len(self.form_data)})"
        )


class SubjectData:
    __slots__ = ("study_event_data", "subject_key")

    def __init__(
        self, subject_key: str, study_event_data: Iterable[StudyEventData] = ()
    ) -> None:
        super().__init__()
        self.subject_key = subject_key
        self.study_event_data: OrderedChildren[RepeatedKey, StudyEventData] = (
            OrderedChildren.from_nodes(study_event_data, key=lambda node: node.key)
        )

    @property
    def key(self) -> str:
        return self.subject_key

    def upsert_item(
        self,
        study_event_oid: str,
        study_event_repeat_key: RepeatKey,
        form_oid: str,
        item_group_oid: str,
        item_group_repeat_key: RepeatKey,
        item_oid: str,
        item_value: str,
        form_status: str | None = None,
    ) -> ItemData:
        key = (study_event_oid, normalize_repeat_key(study_event_repeat_key))
        event = self.study_event_data.get(key)
        if event is None:
            event = StudyEventData(study_event_oid, study_event_repeat_key)
            self.study_event_data.set(key, event)
        return event.upsert_item(
            form_oid,
            item_group_oid,
            item_group_repeat_key,
            item_oid,
            item_value,
            form_status,
        )

    def __repr__(self) -> str:
        return (
            f"SubjectData(subject_key={self.subject_key!r}, "
            f"events={len(self.study_event_data)})"
        )


class ItemPath:
    """Resolved location of one ItemData leaf, as yielded by iter_items()."""

    __slots__ = ("event", "form", "group", "item", "subject")

    def __init__(
        self,
        subject: SubjectData,
        event: StudyEventData,
        form: FormData,
        group: ItemGroupData,
        item: ItemData,
    ) -> None:
        super().__init__()
        self.subject = subject
        self.event = event
        self.form = form
        self.group = group
        self.item = item

    def as_tuple(self) -> tuple[str, str, str, str, str, str, str]:
        return (
            self.subject.subject_key,
            self.event.study_event_oid,
            self.event.study_event_repeat_key,
            self.form.form_oid,
            self.group.item_group_oid,
            self.group.item_group_repeat_key,
            self.item.item_oid,
        )


class ClinicalData:
    """Root of one clinical data submission for a single study."""

    __slots__ = ("metadata_version_oid", "study_oid", "subject_data")

    def __init__(
        self,
        study_oid: str,
        metadata_version_oid: str,
        subject_data: Iterable[SubjectData] = (),
    ) -> None:
        super().__init__()
        self.study_oid = study_oid
        self.metadata_version_oid = metadata_version_oid
        self.subject_data: OrderedChildren[str, SubjectData] = (
            OrderedChildren.from_nodes(subject_data, key=lambda node: node.key)
        )

    def upsert_item(
        self,
        subject_key: str,
        study_event_oid: str,
        study_event_repeat_key: RepeatKey,
        form_oid: str,
        item_group_oid: str,
        item_group_repeat_key: RepeatKey,
        item_oid: str,
        item_value: str,
        form_status: str | None = None,
    ) -> ItemData:
        """Update or insert an item value along Subject/Event/Form/Group/Item.

        Missing nodes on the path are created. ``form_status`` only applies
        when the form is created by this call.

        Returns:
            The ItemData leaf holding ``item_value``.
        """
        subject = self.subject_data.get(subject_key)
        if subject is None:
            subject = SubjectData(subject_key)
            self.subject_data.set(subject_key, subject)
        return subject.upsert_item(
            study_event_oid,
            study_event_repeat_key,
            form_oid,
            item_group_oid,
            item_group_repeat_key,
            item_oid,
            item_value,
            form_status,
        )

    def iter_items(self) -> Iterator[ItemPath]:
        for subject in self.subject_data:
            for event in subject.study_event_data:
                for form in event.form_data:
                    for group in form.item_group_data:
                        for item in group.item_data:
                            yield ItemPath(subject, event, form, group, item)

    def item_count(self) -> int:
        return sum(1 for _ in self.iter_items())

    def __repr__(self) -> str:
        return (
            f"ClinicalData(study_oid={self.study_oid!r}, "
            f"metadata_version_oid={self.metadata_version_oid!r}, "
            f"subjects={len(self.subject_data)})"
        )
