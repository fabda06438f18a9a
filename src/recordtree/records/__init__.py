"""
Record materialization components.

This package provides records, operations, the scoped operation stack and
the readers that walk records and template library subtrees.
"""

from recordtree.records.library import TemplateLibrary, build_template_library
from recordtree.records.operations import (
    Operation,
    OperationKind,
    apply_affix,
    assign_value,
    remove_value,
)
from recordtree.records.reader import (
    RECORDS_POLICY,
    TEMPLATE_POLICY,
    ReaderPolicy,
    RecordReader,
)
from recordtree.records.record import Record
from recordtree.records.stack import ScopedOperationStack

__all__ = [
    "Record",
    "Operation",
    "OperationKind",
    "apply_affix",
    "assign_value",
    "remove_value",
    "ScopedOperationStack",
    "RecordReader",
    "ReaderPolicy",
    "RECORDS_POLICY",
    "TEMPLATE_POLICY",
    "TemplateLibrary",
    "build_template_library",
]
