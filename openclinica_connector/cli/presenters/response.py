"""Rendering of web service responses for the terminal."""

from __future__ import annotations

from copy import deepcopy
from typing import TYPE_CHECKING
from xml.etree import ElementTree as ET

from rich.table import Table

from ...infrastructure.io.xml_utils import local_name

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rich.console import Console

    from ...infrastructure.soap.envelope import SoapResponse


def find_local(element: ET.Element, name: str) -> ET.Element | None:
    for child in element:
        if local_name(child.tag) == name:
            return child
    return None


def findall_local(element: ET.Element, name: str) -> list[ET.Element]:
    return [node for node in element.iter() if local_name(node.tag) == name]


def text_local(element: ET.Element, name: str) -> str:
    child = find_local(element, name)
    if child is None:
        return ""
    return (child.text or "").strip()


class ResponsePresenter:
    pass

    def __init__(self, console: Console, *, verbose: int = 0) -> None:
        super().__init__()
        self.console = console
        self.verbose = verbose

    def present_result(self, response: SoapResponse) -> None:
        result = response.result or "(no result)"
        style = "green" if response.is_success else "red"
        self.console.print(
            f"[bold]{response.operation}[/bold]: [{style}]{result}[/{style}]"
        )
        for message in response.errors:
            self.console.print(f"  [red]✗[/red] {message}")
        if self.verbose >= 2:
            self.present_raw(response)

    def present_raw(self, response: SoapResponse) -> None:
        payload = response.payload
        if payload is None:
            return
        element = deepcopy(payload)
        ET.indent(element)
        self.console.print(
            ET.tostring(element, encoding="unicode"), markup=False, highlight=False
        )

    def present_studies(self, response: SoapResponse) -> None:
        self.present_result(response)
        payload = response.payload
        if payload is None:
            return
        table = Table(title="Studies")
        table.add_column("Identifier", style="cyan")
        table.add_column("OID")
        table.add_column("Name")
        table.add_column("Site")
        for study in findall_local(payload, "study"):
            table.add_row(
                text_local(study, "identifier"),
                text_local(study, "oid"),
                text_local(study, "name"),
                "",
            )
            for site in findall_local(study, "site"):
                table.add_row(
                    text_local(site, "identifier"),
                    text_local(site, "oid"),
                    text_local(site, "name"),
                    "✓",
                )
        self.console.print(table)

    def present_subjects(self, response: SoapResponse) -> None:
        self.present_result(response)
        payload = response.payload
        if payload is None:
            return
        table = Table(title="Study Subjects")
        table.add_column("Label", style="cyan")
        table.add_column("Secondary label")
        table.add_column("Enrollment date")
        table.add_column("Gender")
        table.add_column("Events", justify="right")
        for study_subject in findall_local(payload, "studySubject"):
            subject = find_local(study_subject, "subject")
            events = find_local(study_subject, "events")
            table.add_row(
                text_local(study_subject, "label"),
                text_local(study_subject, "secondaryLabel"),
                text_local(study_subject, "enrollmentDate"),
                text_local(subject, "gender") if subject is not None else "",
                str(len(events)) if events is not None else "0",
            )
        self.console.print(table)

    def present_event_definitions(self, response: SoapResponse) -> None:
        self.present_result(response)
        payload = response.payload
        if payload is None:
            return
        table = Table(title="Study Event Definitions")
        table.add_column("OID", style="cyan")
        table.add_column("Name")
        table.add_column("Repeating")
        table.add_column("Type")
        table.add_column("CRFs", justify="right")
        for definition in findall_local(payload, "studyEventDefinition"):
            table.add_row(
                text_local(definition, "oid"),
                text_local(definition, "name"),
                text_local(definition, "repeating"),
                text_local(definition, "type"),
                str(len(findall_local(definition, "eventDefinitionCrf"))),
            )
        self.console.print(table)

    def present_fields(
        self, response: SoapResponse, names: Sequence[str]
    ) -> None:
        """Print the result followed by the named top-level response fields."""
        self.present_result(response)
        payload = response.payload
        if payload is None:
            return
        for name in names:
            value = text_local(payload, name)
            if value:
                self.console.print(f"  {name}: {value}")

    def present_metadata(self, response: SoapResponse) -> str | None:
        """Print the result and return the ODM metadata document, if any."""
        self.present_result(response)
        payload = response.payload
        if payload is None:
            return None
        odm = find_local(payload, "odm")
        if odm is None:
            return None
        if len(odm) > 0:
            return ET.tostring(odm[0], encoding="unicode")
        return (odm.text or "").strip() or None
