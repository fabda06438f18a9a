"""
Property definitions for record entities.

A PropertyDefinition is the static description of one named property:
whether it holds a collection, whether it is required, its default value and
the characters used to split assigned values into collection items.
"""

from attrs import field, frozen

from recordtree.core.names import AttributeNames, name_equals

ID_NAME = AttributeNames.ID
TAGS_NAME = "Tags"

DEFAULT_SEPARATORS = (",",)

# Escapes recognised in the Separators attribute
_SEPARATOR_ESCAPES = {
    "t": "\t",
    "n": "\n",
    "r": "\r",
    "s": " ",
    "\\": "\\",
}


@frozen
class PropertyDefinition:
    """Static description of one named record property."""

    name: str
    is_collection: bool = False
    is_required: bool = False
    default_value: str | None = None
    description: str | None = None
    separators: tuple[str, ...] = field(default=DEFAULT_SEPARATORS, converter=tuple)

    def __attrs_post_init__(self):
        if self.is_collection and self.default_value is not None:
            raise ValueError(
                f"Collection property '{self.name}' cannot define a default value"
            )

    @property
    def is_tags(self) -> bool:
        return self is TAGS_PROPERTY

    def split(self, value: str) -> list[str]:
        """
        Split an assigned value into collection items.

        Empty segments are dropped. A property without separators yields the
        whole value as a single item.

        Params:
            value: Raw value assigned to the property

        Returns:
            Ordered list of items
        """
        if not self.separators:
            return [value]

        items = []
        current = []
        for char in value:
            if char in self.separators:
                if current:
                    items.append("".join(current))
                current = []
            else:
                current.append(char)
        if current:
            items.append("".join(current))
        return items


ID_PROPERTY = PropertyDefinition(ID_NAME)
TAGS_PROPERTY = PropertyDefinition(TAGS_NAME, is_collection=True, separators=(",",))


def is_reserved_name(name: str) -> bool:
    """Check whether a property name is reserved for a built-in property."""
    return name_equals(name, ID_NAME) or name_equals(name, TAGS_NAME)


def parse_separators(text: str) -> tuple[str, ...]:
    """
    Parse a Separators attribute value.

    Every character is a separator. A backslash introduces one of the escapes
    \\t, \\n, \\r, \\s (space) or \\\\ (backslash).

    Params:
        text: Raw attribute value

    Returns:
        Ordered tuple of distinct separator characters

    Raises:
        ValueError: If the value ends with a lone backslash or uses an unknown escape
    """
    separators: list[str] = []
    index = 0
    while index < len(text):
        char = text[index]
        if char == "\\":
            if index + 1 >= len(text):
                raise ValueError("Separators cannot end with an escape character")
            escaped = text[index + 1]
            if escaped not in _SEPARATOR_ESCAPES:
                raise ValueError(f"Unknown separator escape '\\{escaped}'")
            char = _SEPARATOR_ESCAPES[escaped]
            index += 2
        else:
            index += 1
        if char not in separators:
            separators.append(char)
    return tuple(separators)


def parse_bool(text: str) -> bool:
    """
    Parse a boolean attribute value ("true" or "false", any case).

    Raises:
        ValueError: If the value is not a boolean literal
    """
    normalized = text.strip().casefold()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    raise ValueError(f"'{text}' is not a valid boolean value")
