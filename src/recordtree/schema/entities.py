"""
Entity definitions for record documents.

An entity is a named schema that records are instances of. Entities form a
single-inheritance tree rooted at GLOBAL_ENTITY: property and variable
lookups walk the base-entity chain, and a property declared by an entity may
not shadow one declared by any of its ancestors.
"""

import logging
from collections.abc import Iterator

from recordtree.core.names import AttributeNames, ElementKind, ElementNames, fold_name
from recordtree.core.tree import DocumentElement
from recordtree.exceptions import (
    DuplicateDefinitionError,
    ErrorContext,
    ErrorLevel,
    ReservedNameError,
    SchemaError,
    StructuralError,
    UnknownElementError,
)
from recordtree.schema.properties import (
    DEFAULT_SEPARATORS,
    PropertyDefinition,
    is_reserved_name,
    parse_bool,
    parse_separators,
)
from recordtree.schema.variables import Variable

logger = logging.getLogger(__name__)

GLOBAL_ENTITY_NAME = "Global"


class EntityDefinition:
    """
    Named record schema with an optional base entity.

    Instances are immutable after construction and shared read-only by every
    record produced under them.
    """

    def __init__(
        self,
        name: str,
        base_entity: "EntityDefinition | None" = None,
        properties: list[PropertyDefinition] | None = None,
        variables: list[Variable] | None = None,
        context: ErrorContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the entity and validate its own declarations.

        Params:
            name: Entity name
            base_entity: Parent entity; GLOBAL_ENTITY when omitted (except for the global entity itself)
            properties: Own property definitions in declaration order
            variables: Own variables in declaration order
            context: Location used when reporting declaration errors
            error_level: Detail level for error messages

        Raises:
            DuplicateDefinitionError: If a name is declared twice or collides with an inherited property
        """
        self.name = name
        self.base_entity = base_entity
        self._properties: dict[str, PropertyDefinition] = {}
        self._variables: dict[str, Variable] = {}

        for prop in properties or ():
            key = fold_name(prop.name)
            if key in self._properties:
                raise DuplicateDefinitionError(
                    f"Property '{prop.name}' is already defined.", context, error_level
                )
            if base_entity is not None and base_entity.find_property(prop.name):
                raise DuplicateDefinitionError(
                    f"Property '{prop.name}' is already defined in a base entity of '{name}'.",
                    context,
                    error_level,
                )
            self._properties[key] = prop

        for variable in variables or ():
            key = fold_name(variable.name)
            if key in self._variables:
                raise DuplicateDefinitionError(
                    f"Variable '{variable.name}' is already defined.",
                    context,
                    error_level,
                )
            self._variables[key] = variable

    def __repr__(self) -> str:
        base = self.base_entity.name if self.base_entity else None
        return f"EntityDefinition(name={self.name!r}, base={base!r})"

    @property
    def own_properties(self) -> tuple[PropertyDefinition, ...]:
        return tuple(self._properties.values())

    @property
    def own_variables(self) -> tuple[Variable, ...]:
        return tuple(self._variables.values())

    def base_chain(self) -> Iterator["EntityDefinition"]:
        """Iterate from this entity up to the root, self first."""
        entity: EntityDefinition | None = self
        while entity is not None:
            yield entity
            entity = entity.base_entity

    def all_properties(self) -> Iterator[PropertyDefinition]:
        """Iterate over inherited properties first, then own properties."""
        for entity in reversed(list(self.base_chain())):
            yield from entity._properties.values()

    def find_property(self, name: str) -> PropertyDefinition | None:
        """Find a property by case-insensitive name, walking the base chain."""
        key = fold_name(name)
        for entity in self.base_chain():
            prop = entity._properties.get(key)
            if prop is not None:
                return prop
        return None

    def find_variable(self, name: str) -> Variable | None:
        """Find an entity variable by case-insensitive name, walking the base chain."""
        key = fold_name(name)
        for entity in self.base_chain():
            variable = entity._variables.get(key)
            if variable is not None:
                return variable
        return None


GLOBAL_ENTITY = EntityDefinition(GLOBAL_ENTITY_NAME)

_PROPERTY_ATTRIBUTES = {
    fold_name(name)
    for name in (
        AttributeNames.NAME,
        AttributeNames.IS_COLLECTION,
        AttributeNames.IS_REQUIRED,
        AttributeNames.DEFAULT_VALUE,
        AttributeNames.DESCRIPTION,
        AttributeNames.SEPARATORS,
    )
}


def parse_property(
    element: DocumentElement, error_level: ErrorLevel = ErrorLevel.USER
) -> PropertyDefinition:
    """
    Build a PropertyDefinition from a Property element.

    Params:
        element: Property element
        error_level: Detail level for error messages

    Returns:
        The parsed property definition

    Raises:
        StructuralError: If the element carries an unknown attribute
        MissingAttributeError: If the Name attribute is missing
        ReservedNameError: If the name is Id or Tags
        SchemaError: If a flag is malformed or a collection declares a default value
    """
    for attribute_name, _ in element.iter_attributes():
        if fold_name(attribute_name) not in _PROPERTY_ATTRIBUTES:
            raise element.fail(
                StructuralError,
                f"Unknown attribute '{attribute_name}' on element '{element.name}'.",
                error_level,
                attribute_name,
            )

    name = element.require_attribute(AttributeNames.NAME, error_level)
    if is_reserved_name(name):
        raise element.fail(
            ReservedNameError, f"Property name '{name}' is reserved.", error_level
        )

    def flag(attribute_name: str) -> bool:
        text = element.get_attribute(attribute_name)
        if text is None:
            return False
        try:
            return parse_bool(text)
        except ValueError as e:
            raise element.fail(
                SchemaError, str(e), error_level, attribute_name
            ) from e

    is_collection = flag(AttributeNames.IS_COLLECTION)
    is_required = flag(AttributeNames.IS_REQUIRED)
    default_value = element.get_attribute(AttributeNames.DEFAULT_VALUE)

    if is_collection and default_value is not None:
        raise element.fail(
            SchemaError,
            f"Collection property '{name}' cannot define a default value.",
            error_level,
            AttributeNames.DEFAULT_VALUE,
        )

    separators_text = element.get_attribute(AttributeNames.SEPARATORS)
    separators = DEFAULT_SEPARATORS
    if separators_text is not None:
        try:
            separators = parse_separators(separators_text)
        except ValueError as e:
            raise element.fail(
                SchemaError, str(e), error_level, AttributeNames.SEPARATORS
            ) from e

    return PropertyDefinition(
        name=name,
        is_collection=is_collection,
        is_required=is_required,
        default_value=default_value,
        description=element.get_attribute(AttributeNames.DESCRIPTION),
        separators=separators,
    )


def parse_declarations(
    element: DocumentElement, error_level: ErrorLevel = ErrorLevel.USER
) -> tuple[list[PropertyDefinition], list[Variable]]:
    """
    Parse a Declarations element into property and variable definitions.

    Duplicate names are reported at the second declaration.

    Params:
        element: Declarations element
        error_level: Detail level for error messages

    Returns:
        Tuple of (properties, variables) in declaration order
    """
    properties: list[PropertyDefinition] = []
    variables: list[Variable] = []
    property_names: set[str] = set()
    variable_names: set[str] = set()

    for child in element.children:
        match child.kind:
            case ElementKind.PROPERTY:
                prop = parse_property(child, error_level)
                key = fold_name(prop.name)
                if key in property_names:
                    raise child.fail(
                        DuplicateDefinitionError,
                        f"{ElementNames.PROPERTY} '{prop.name}' is already defined.",
                        error_level,
                    )
                property_names.add(key)
                properties.append(prop)
            case ElementKind.VARIABLE:
                name = child.require_attribute(AttributeNames.NAME, error_level)
                key = fold_name(name)
                if key in variable_names:
                    raise child.fail(
                        DuplicateDefinitionError,
                        f"{ElementNames.VARIABLE} '{name}' is already defined.",
                        error_level,
                    )
                value = child.require_attribute(AttributeNames.VALUE, error_level)
                variable_names.add(key)
                variables.append(Variable(name, value))
            case _:
                raise child.fail(
                    UnknownElementError,
                    f"Unknown element '{child.name}'.",
                    error_level,
                )

    logger.debug(
        "Parsed %d properties and %d variables at %s",
        len(properties),
        len(variables),
        element.location,
    )
    return properties, variables
