"""Error hierarchy shared by the whole package."""

from __future__ import annotations


class EpcisKgError(Exception):
    """Base class of every error raised by the package.

    The message is rendered as ``"<prefix>: <detail>"``. When the detail is
    itself an exception it is also recorded as the cause.
    """

    prefix = "Error"

    def __init__(self, detail: object) -> None:
        super().__init__(detail)
        self.detail = detail
        if isinstance(detail, BaseException):
            self.__cause__ = detail

    def __str__(self) -> str:
        return f"{self.prefix}: {self.detail}"


class IoError(EpcisKgError):
    """A file or stream operation failed."""

    prefix = "I/O error"


class ConfigError(EpcisKgError):
    """Configuration could not be read, written or validated."""

    prefix = "Configuration error"


class OntologyError(EpcisKgError):
    """An ontology could not be loaded or reasoned over."""

    prefix = "Ontology error"


class StorageError(EpcisKgError):
    """The triple store reported a failure."""

    prefix = "Storage error"


class QueryError(EpcisKgError):
    """A query was rejected or failed to run."""

    prefix = "Query error"


class ValidationError(EpcisKgError):
    """Input data failed validation."""

    prefix = "Validation error"


class NotImplementedFeatureError(EpcisKgError):
    """A requested feature is not available."""

    prefix = "Not implemented"


class JsonError(EpcisKgError):
    """JSON could not be encoded or decoded."""

    prefix = "JSON error"


class RdfParsingError(EpcisKgError):
    """RDF input could not be parsed."""

    prefix = "RDF parsing error"


class TomlError(EpcisKgError):
    """TOML input could not be parsed."""

    prefix = "TOML parsing error"


class IriParseError(EpcisKgError):
    """A string is not a valid IRI."""

    prefix = "IRI parsing error"


class BlankNodeIdParseError(EpcisKgError):
    """A string is not a valid blank node identifier."""

    prefix = "Blank node ID parsing error"


class GenericError(EpcisKgError):
    """Any other failure."""

    prefix = "Generic error"