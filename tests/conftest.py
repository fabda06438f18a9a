"""
Shared test fixtures and utilities for the recordtree test suite.
"""

import pytest

from recordtree import read_records_string

DEFAULT_DECLARATIONS = """
<Property Name="Title" IsRequired="true" />
<Property Name="Language" DefaultValue="CSharp" />
<Property Name="Keywords" IsCollection="true" />
<Variable Name="Namespace" Value="System." />
"""


def build_document(
    records: str,
    declarations: str = DEFAULT_DECLARATIONS,
    templates: str | None = None,
    version: str = "0.1.0",
    entity_name: str = "Snippet",
) -> str:
    """Wrap a records block (and optional template block) in a one-entity document."""
    template_block = f"<With>{templates}</With>" if templates is not None else ""
    return f"""<?xml version="1.0" encoding="utf-8"?>
<Document Version="{version}">
  <Entities>
    <Entity Name="{entity_name}">
      <Declarations>{declarations}</Declarations>
      {template_block}
      <Records>{records}</Records>
    </Entity>
  </Entities>
</Document>
"""


@pytest.fixture
def read_snippets():
    """Read records from a one-entity document built around a records block.

    Usage:
        def test_something(read_snippets):
            records = read_snippets('<New Title="a" />')
    """

    def read(records: str, **kwargs):
        options = kwargs.pop("options", None)
        return read_records_string(build_document(records, **kwargs), options)

    return read
