import pytest

from epcis_kg.errors import (
    BlankNodeIdParseError,
    ConfigError,
    EpcisKgError,
    GenericError,
    IoError,
    IriParseError,
    JsonError,
    NotImplementedFeatureError,
    OntologyError,
    QueryError,
    RdfParsingError,
    StorageError,
    TomlError,
    ValidationError,
)


def test_io_error_display():
    error = IoError(FileNotFoundError("file not found"))
    assert "I/O error" in str(error)
    assert "file not found" in str(error)


def test_config_error_display():
    assert str(ConfigError("Invalid config")) == "Configuration error: Invalid config"


def test_validation_error_display():
    assert str(ValidationError("Invalid data")) == "Validation error: Invalid data"


def test_error_from_io_keeps_cause():
    io_error = PermissionError("access denied")
    error = IoError(io_error)
    assert isinstance(error, EpcisKgError)
    assert error.__cause__ is io_error
    assert error.detail is io_error


def test_error_from_io_can_be_raised_and_caught_as_base():
    io_error = PermissionError("access denied")
    with pytest.raises(EpcisKgError) as info:
        raise IoError(io_error)
    assert info.value.__cause__ is io_error
    assert str(info.value).startswith("I/O error: ")
    assert "access denied" in str(info.value)


@pytest.mark.parametrize(
    ("cls", "prefix"),
    [
        (OntologyError, "Ontology error"),
        (StorageError, "Storage error"),
        (QueryError, "Query error"),
        (NotImplementedFeatureError, "Not implemented"),
        (JsonError, "JSON error"),
        (RdfParsingError, "RDF parsing error"),
        (TomlError, "TOML parsing error"),
        (IriParseError, "IRI parsing error"),
        (BlankNodeIdParseError, "Blank node ID parsing error"),
        (GenericError, "Generic error"),
    ],
)
def test_prefixes(cls, prefix):
    error = cls("detail")
    assert str(error) == f"{prefix}: detail"
    assert isinstance(error, EpcisKgError)


def test_string_detail_has_no_cause():
    assert ConfigError("x").__cause__ is None