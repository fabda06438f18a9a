"""
Reader configuration.

DocumentOptions is passed explicitly to every reader; nothing is read from
the environment or from module-level state.
"""

from pydantic import BaseModel, ConfigDict

from recordtree.exceptions import ErrorLevel


class DocumentOptions(BaseModel):
    """
    Options controlling how a document is read.

    Params:
        error_level: Amount of location detail carried by error messages
        allow_missing_version: Accept a Document element without a Version attribute
    """

    model_config = ConfigDict(frozen=True)

    error_level: ErrorLevel = ErrorLevel.USER
    allow_missing_version: bool = False


DEFAULT_OPTIONS = DocumentOptions()
