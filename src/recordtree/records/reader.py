"""
Record materializer.

RecordReader walks a records subtree depth-first and emits one Record per New
element. Container elements (With, Without, Prefix, Postfix) push scoped
operations that apply to every record beneath them; Variable elements bind
lexical variables for the values beneath them.

The same walk builds the template library and the final record list. What
differs between the two is captured by a ReaderPolicy: whether ids are
required and unique, whether template records seed new ones, and whether
required properties are enforced.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from recordtree.core.names import AttributeNames, ElementKind, name_equals
from recordtree.core.tree import DocumentElement
from recordtree.exceptions import (
    DuplicateIdError,
    ErrorLevel,
    InvalidDocumentError,
    MissingIdError,
    OperationError,
    RequiredPropertyError,
    UndefinedPropertyError,
    UnknownElementError,
)
from recordtree.options import DEFAULT_OPTIONS, DocumentOptions
from recordtree.records.operations import Operation, OperationKind, apply_affix
from recordtree.records.record import Record
from recordtree.records.stack import ScopedOperationStack
from recordtree.schema.entities import EntityDefinition
from recordtree.schema.properties import ID_NAME, TAGS_NAME, TAGS_PROPERTY, PropertyDefinition
from recordtree.schema.variables import EMPTY_SCOPE, Variable, substitute

if TYPE_CHECKING:
    from recordtree.records.library import TemplateLibrary

logger = logging.getLogger(__name__)

_OPERATION_KINDS = {
    ElementKind.WITH: OperationKind.WITH,
    ElementKind.WITHOUT: OperationKind.WITHOUT,
    ElementKind.PREFIX: OperationKind.PREFIX,
    ElementKind.POSTFIX: OperationKind.POSTFIX,
}


@dataclass(frozen=True)
class ReaderPolicy:
    """
    Capabilities that distinguish one records pass from another.

    Params:
        name: Label used in log messages
        require_id: Every New element must carry an Id
        unique_ids: Two records may not share an Id
        use_templates: Seed a record from the template library when its Id matches
        check_required_properties: Fail when a required property has no value
    """

    name: str
    require_id: bool = False
    unique_ids: bool = False
    use_templates: bool = True
    check_required_properties: bool = True


RECORDS_POLICY = ReaderPolicy("records")

TEMPLATE_POLICY = ReaderPolicy(
    "templates",
    require_id=True,
    unique_ids=True,
    use_templates=False,
    check_required_properties=False,
)


class RecordReader:
    """
    Depth-first reader of one records (or template library) subtree.

    All walk state (operation stack, variable scope, emitted records) is
    local to a single read() call.
    """

    def __init__(
        self,
        element: DocumentElement,
        entity: EntityDefinition,
        policy: ReaderPolicy = RECORDS_POLICY,
        templates: "TemplateLibrary | None" = None,
        options: DocumentOptions | None = None,
    ):
        """
        Initialize the reader.

        Params:
            element: Records or With element whose children are walked
            entity: Entity every produced record belongs to
            policy: Id, template and required-property policy
            templates: Template records looked up by Id when the policy allows it
            options: Reader options
        """
        self.element = element
        self.entity = entity
        self.policy = policy
        self.templates = templates
        self.options = options or DEFAULT_OPTIONS

        self._stack = ScopedOperationStack()
        self._variables = EMPTY_SCOPE
        self._records: list[Record] = []
        self._ids: set[str] = set()

    @property
    def error_level(self) -> ErrorLevel:
        return self.options.error_level

    def read(self) -> list[Record]:
        """
        Materialize every record in the subtree.

        Returns:
            Records in document order

        Raises:
            InvalidDocumentError: On the first violation in document order
        """
        self._stack = ScopedOperationStack()
        self._variables = EMPTY_SCOPE
        self._records = []
        self._ids = set()

        self._collect(self.element.children)

        logger.debug(
            "Read %d %s for entity '%s'",
            len(self._records),
            self.policy.name,
            self.entity.name,
        )
        return self._records

    def _collect(self, elements: list[DocumentElement]) -> None:
        for element in elements:
            match element.kind:
                case ElementKind.NEW:
                    self._add_record(self._create_record(element), element)
                case ElementKind.WITH | ElementKind.WITHOUT | ElementKind.PREFIX | ElementKind.POSTFIX:
                    if element.has_children:
                        operations = self._create_operations(
                            element, self._stack.next_depth
                        )
                        with self._stack.scope(operations):
                            self._collect(element.children)
                case ElementKind.VARIABLE:
                    if element.has_children:
                        self._collect_with_variable(element)
                case _:
                    raise element.fail(
                        UnknownElementError,
                        f"Unknown element '{element.name}'.",
                        self.error_level,
                    )

    def _collect_with_variable(self, element: DocumentElement) -> None:
        name = element.require_attribute(AttributeNames.NAME, self.error_level)
        value = element.require_attribute(AttributeNames.VALUE, self.error_level)

        outer = self._variables
        self._variables = outer.bind(Variable(name, value))
        try:
            with self._stack.scope():
                self._collect(element.children)
        finally:
            self._variables = outer

    def _create_record(self, element: DocumentElement) -> Record:
        depth = self._stack.next_depth
        record_id = None
        operations: list[Operation] = []

        for attribute_name, raw_value in element.iter_attributes():
            if name_equals(attribute_name, ID_NAME):
                record_id = self._resolve_value(element, attribute_name, raw_value)
            else:
                operations.append(
                    self._create_operation(
                        element, OperationKind.WITH, attribute_name, raw_value, depth
                    )
                )

        record = self._new_record(element, record_id)

        for operation in operations:
            operation.execute(record)

        # Children of a New element apply directly, regardless of nesting
        for child in element.children:
            for operation in self._create_operations(child, depth):
                operation.execute(record)

        self._execute_scoped_operations(record)
        self._finalize(record, element)
        return record

    def _new_record(self, element: DocumentElement, record_id: str | None) -> Record:
        if record_id is None:
            if self.policy.require_id:
                raise element.fail(
                    MissingIdError,
                    f"Element '{element.name}' must define attribute '{ID_NAME}'.",
                    self.error_level,
                )
            return Record(self.entity)

        if self.policy.use_templates and self.templates is not None:
            template = self.templates.find(record_id)
            if template is not None:
                return template.with_entity(self.entity)

        return Record(self.entity, record_id)

    def _add_record(self, record: Record, element: DocumentElement) -> None:
        if self.policy.unique_ids and record.id is not None:
            if record.id in self._ids:
                raise DuplicateIdError(
                    record.id, element.context(ID_NAME), self.error_level
                )
            self._ids.add(record.id)
        self._records.append(record)

    def _execute_scoped_operations(self, record: Record) -> None:
        """
        Apply the active scoped operations, one property at a time.

        With and Without run as they are met. Prefix and Postfix values are
        buffered per kind and flushed after the next With/Without runs and
        again at the end of the property's list.
        """
        for prop, operations in self._stack.active_properties():
            pending: dict[OperationKind, str] = {}

            for operation in operations:
                if operation.kind.is_affix:
                    pending[operation.kind] = pending.get(operation.kind, "") + operation.value
                else:
                    operation.execute(record)
                    self._flush_affixes(record, prop, pending)

            self._flush_affixes(record, prop, pending)

    @staticmethod
    def _flush_affixes(
        record: Record, prop: PropertyDefinition, pending: dict[OperationKind, str]
    ) -> None:
        for kind, text in pending.items():
            apply_affix(record, prop, kind, text)
        pending.clear()

    def _finalize(self, record: Record, element: DocumentElement) -> None:
        for prop in self.entity.all_properties():
            if prop.default_value is not None:
                if not record.contains_property(prop.name):
                    record.set_scalar(prop.name, prop.default_value)
            elif (
                self.policy.check_required_properties
                and prop.is_required
                and not record.contains_property(prop.name)
            ):
                raise RequiredPropertyError(
                    prop.name, element.context(), self.error_level
                )

    def _create_operations(
        self, element: DocumentElement, depth: int
    ) -> list[Operation]:
        kind = _OPERATION_KINDS.get(element.kind)
        if kind is None:
            raise element.fail(
                UnknownElementError,
                f"Operation '{element.name}' is not defined.",
                self.error_level,
            )

        operations = []
        for attribute_name, raw_value in element.iter_attributes():
            if name_equals(attribute_name, ID_NAME):
                raise element.fail(
                    OperationError,
                    f"Operation '{element.name}' cannot be used with property '{ID_NAME}'.",
                    self.error_level,
                    attribute_name,
                )
            operations.append(
                self._create_operation(element, kind, attribute_name, raw_value, depth)
            )
        return operations

    def _create_operation(
        self,
        element: DocumentElement,
        kind: OperationKind,
        attribute_name: str,
        raw_value: str,
        depth: int,
    ) -> Operation:
        prop = self._find_property(element, attribute_name)

        if kind is OperationKind.WITHOUT and not prop.is_collection:
            raise element.fail(
                OperationError,
                f"Operation '{element.name}' cannot be used with non-collection property '{prop.name}'.",
                self.error_level,
                attribute_name,
            )

        value = self._resolve_value(element, attribute_name, raw_value)
        return Operation(kind, prop, value, depth)

    def _find_property(
        self, element: DocumentElement, attribute_name: str
    ) -> PropertyDefinition:
        if name_equals(attribute_name, TAGS_NAME):
            return TAGS_PROPERTY

        prop = self.entity.find_property(attribute_name)
        if prop is None:
            raise element.fail(
                UndefinedPropertyError,
                f"Property '{attribute_name}' is not defined.",
                self.error_level,
                attribute_name,
            )
        return prop

    def _resolve_value(
        self, element: DocumentElement, attribute_name: str, raw_value: str
    ) -> str:
        try:
            return substitute(raw_value, self._lookup_variable)
        except InvalidDocumentError as e:
            raise type(e)(
                e.message, element.context(attribute_name), self.error_level
            ) from e

    def _lookup_variable(self, name: str) -> str | None:
        variable = self._variables.find(name) or self.entity.find_variable(name)
        return variable.value if variable is not None else None
