"""
Document reader.

Reads a whole record document: checks the schema version, builds entity
definitions breadth-first (each nested entity inherits from the entity that
contains it), materializes each entity's template library and records, and
returns every record in the order the entities were processed.
"""

import logging
import re
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path

from recordtree.core.names import AttributeNames, ElementKind, ElementNames
from recordtree.core.tree import DocumentElement
from recordtree.core.types import VersionTuple
from recordtree.exceptions import (
    DuplicateElementError,
    ErrorLevel,
    UnknownElementError,
    UnsupportedVersionError,
)
from recordtree.options import DEFAULT_OPTIONS, DocumentOptions
from recordtree.parsing.xml_loader import load_document, load_document_string
from recordtree.records.library import build_template_library
from recordtree.records.reader import RECORDS_POLICY, RecordReader
from recordtree.records.record import Record
from recordtree.schema.entities import GLOBAL_ENTITY, EntityDefinition, parse_declarations

logger = logging.getLogger(__name__)

SCHEMA_VERSION: VersionTuple = (0, 1, 0)

_VERSION_PATTERN = re.compile(r"^(\d+)\.(\d+)(?:\.(\d+))?$")


def parse_version(text: str) -> VersionTuple | None:
    """
    Parse a "major.minor[.patch]" version string.

    Returns:
        Version triple, or None when the text is not a valid version
    """
    match = _VERSION_PATTERN.match(text.strip())
    if match is None:
        return None
    major, minor, patch = match.groups()
    return int(major), int(minor), int(patch or 0)


def is_supported_version(version: VersionTuple) -> bool:
    """A version is supported unless its major.minor is newer than SCHEMA_VERSION."""
    return version[:2] <= SCHEMA_VERSION[:2]


@dataclass
class EntitySections:
    """Singleton child blocks of an Entity element."""

    declarations: DocumentElement | None = None
    templates: DocumentElement | None = None
    records: DocumentElement | None = None
    entities: DocumentElement | None = None


@dataclass
class _PendingEntities:
    element: DocumentElement
    base_entity: EntityDefinition = field(default=GLOBAL_ENTITY)


class DocumentReader:
    """
    Reads every record of one document.

    Entities are processed with an explicit breadth-first queue, so nesting
    depth does not grow the call stack.
    """

    def __init__(self, root: DocumentElement, options: DocumentOptions | None = None):
        """
        Initialize the reader.

        Params:
            root: Document element of a parsed document
            options: Reader options
        """
        self.root = root
        self.options = options or DEFAULT_OPTIONS
        self.entities: list[EntityDefinition] = []

    @property
    def error_level(self) -> ErrorLevel:
        return self.options.error_level

    def read_all(self) -> list[Record]:
        """
        Materialize every record in the document.

        Returns:
            Records in entity processing order, document order within an entity

        Raises:
            InvalidDocumentError: On the first violation found
        """
        self.entities = []
        entities_element = self._scan_document()
        if entities_element is None:
            return []

        records: list[Record] = []
        queue = deque([_PendingEntities(entities_element)])

        while queue:
            pending = queue.popleft()
            for element in pending.element.children:
                if element.kind is not ElementKind.ENTITY:
                    raise element.fail(
                        UnknownElementError,
                        f"Unknown element '{element.name}'.",
                        self.error_level,
                    )

                sections = self._scan_entity(element)
                entity = self._create_entity(element, sections, pending.base_entity)
                self.entities.append(entity)

                if sections.records is not None:
                    records.extend(self._read_records(entity, sections))

                if sections.entities is not None:
                    queue.append(_PendingEntities(sections.entities, entity))

        logger.debug(
            "Read %d records from %d entities", len(records), len(self.entities)
        )
        return records

    def _scan_document(self) -> DocumentElement | None:
        root = self.root
        if root.kind is not ElementKind.DOCUMENT:
            raise root.fail(
                UnknownElementError,
                f"Missing root element '{ElementNames.DOCUMENT}'.",
                self.error_level,
            )

        self._check_version(root)

        entities_element = None
        for element in root.children:
            if element.kind is not ElementKind.ENTITIES:
                raise element.fail(
                    UnknownElementError,
                    f"Unknown element '{element.name}'.",
                    self.error_level,
                )
            if entities_element is not None:
                raise element.fail(
                    DuplicateElementError,
                    f"Element '{element.name}' cannot be defined more than once.",
                    self.error_level,
                )
            entities_element = element
        return entities_element

    def _check_version(self, root: DocumentElement) -> None:
        text = root.get_attribute(AttributeNames.VERSION)
        if text is None:
            if self.options.allow_missing_version:
                return
            raise root.fail(
                UnsupportedVersionError,
                f"Element '{root.name}' must declare a schema version.",
                self.error_level,
            )

        version = parse_version(text)
        if version is None:
            raise root.fail(
                UnsupportedVersionError,
                f"Document version '{text}' is invalid.",
                self.error_level,
                AttributeNames.VERSION,
            )
        if not is_supported_version(version):
            supported = ".".join(str(part) for part in SCHEMA_VERSION)
            raise root.fail(
                UnsupportedVersionError,
                f"Document version '{text}' is not supported. Maximum supported version is '{supported}'.",
                self.error_level,
                AttributeNames.VERSION,
            )

    def _scan_entity(self, element: DocumentElement) -> EntitySections:
        sections = EntitySections()
        slots = {
            ElementKind.DECLARATIONS: "declarations",
            ElementKind.WITH: "templates",
            ElementKind.RECORDS: "records",
            ElementKind.ENTITIES: "entities",
        }

        for child in element.children:
            slot = slots.get(child.kind)
            if slot is None:
                raise child.fail(
                    UnknownElementError,
                    f"Unknown element '{child.name}'.",
                    self.error_level,
                )
            if getattr(sections, slot) is not None:
                raise child.fail(
                    DuplicateElementError,
                    f"Element '{child.name}' cannot be defined more than once.",
                    self.error_level,
                )
            setattr(sections, slot, child)

        return sections

    def _create_entity(
        self,
        element: DocumentElement,
        sections: EntitySections,
        base_entity: EntityDefinition,
    ) -> EntityDefinition:
        name = element.require_attribute(AttributeNames.NAME, self.error_level)

        properties, variables = [], []
        if sections.declarations is not None:
            properties, variables = parse_declarations(
                sections.declarations, self.error_level
            )

        entity = EntityDefinition(
            name,
            base_entity,
            properties,
            variables,
            context=(sections.declarations or element).context(),
            error_level=self.error_level,
        )
        logger.debug(
            "Created entity '%s' (base '%s') with %d properties",
            entity.name,
            base_entity.name,
            len(entity.own_properties),
        )
        return entity

    def _read_records(
        self, entity: EntityDefinition, sections: EntitySections
    ) -> list[Record]:
        templates = None
        if sections.templates is not None:
            templates = build_template_library(sections.templates, entity, self.options)
            logger.debug(
                "Built %d templates for entity '%s'", len(templates), entity.name
            )

        reader = RecordReader(
            sections.records,
            entity,
            RECORDS_POLICY,
            templates=templates,
            options=self.options,
        )
        return reader.read()


def read_document(
    root: DocumentElement, options: DocumentOptions | None = None
) -> list[Record]:
    """Materialize every record of an already parsed document."""
    return DocumentReader(root, options).read_all()


def read_records(path: str | Path, options: DocumentOptions | None = None) -> list[Record]:
    """Load an XML document from disk and materialize its records."""
    return read_document(load_document(path), options)


def read_records_string(text: str, options: DocumentOptions | None = None) -> list[Record]:
    """Parse XML text and materialize its records."""
    return read_document(load_document_string(text), options)
