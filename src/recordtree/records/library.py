"""
Template ("with") library.

An entity may declare a With block next to its Records block. The New
elements inside it are materialized with TEMPLATE_POLICY (ids required and
unique, required properties not enforced) and stored by id. A New element in
the records block whose Id matches a template starts from a clone of that
template instead of an empty record.
"""

from collections.abc import Iterable, Iterator, Mapping

from recordtree.core.tree import DocumentElement
from recordtree.options import DocumentOptions
from recordtree.records.reader import TEMPLATE_POLICY, RecordReader
from recordtree.records.record import Record
from recordtree.schema.entities import EntityDefinition


class TemplateLibrary(Mapping[str, Record]):
    """Id-keyed lookup of template records. Ids are compared exactly."""

    def __init__(self, records: Iterable[Record] = ()):
        self._records: dict[str, Record] = {}
        for record in records:
            if record.id is None:
                raise ValueError("Template records must have an id")
            if record.id in self._records:
                raise ValueError(f"Template id '{record.id}' is already defined")
            self._records[record.id] = record

    def __getitem__(self, record_id: str) -> Record:
        return self._records[record_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def find(self, record_id: str) -> Record | None:
        return self._records.get(record_id)


def build_template_library(
    element: DocumentElement,
    entity: EntityDefinition,
    options: DocumentOptions | None = None,
) -> TemplateLibrary:
    """
    Materialize the template records of a With block.

    Params:
        element: With element that holds the template records
        entity: Entity the templates belong to
        options: Reader options

    Returns:
        Library of template records keyed by id

    Raises:
        MissingIdError: If a template record has no Id
        DuplicateIdError: If two template records share an Id
    """
    reader = RecordReader(element, entity, TEMPLATE_POLICY, options=options)
    return TemplateLibrary(reader.read())
