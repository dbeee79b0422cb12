from .classifier import Classification, ConfigClassifier, ConfigGroup, classify_section
from .defaults import DEFAULT_VERSION, VERSIONS, default_document
from .document import DocumentImportError, UnsupportedValueError, ValueKind, describe_value, section_names, set_path
from .history import HistoryManager
from .store import DocumentStore

__all__ = [
    "Classification",
    "ConfigClassifier",
    "ConfigGroup",
    "classify_section",
    "DEFAULT_VERSION",
    "VERSIONS",
    "default_document",
    "DocumentImportError",
    "UnsupportedValueError",
    "ValueKind",
    "describe_value",
    "section_names",
    "set_path",
    "HistoryManager",
    "DocumentStore",
]
