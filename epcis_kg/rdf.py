"""Minimal RDF terms and triples with their N-Triples rendering."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Union

from epcis_kg.errors import BlankNodeIdParseError, IriParseError

_IRI = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:[^\s<>\"{}|^`\\]*$")
_BLANK_ID = re.compile(r"^[A-Za-z0-9_](?:[A-Za-z0-9_\-.]*[A-Za-z0-9_\-])?$")

_ESCAPES = {
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
    '"': '\\"',
    "\\": "\\\\",
}


def _quote(value: str) -> str:
    parts = []
    for char in value:
        if char in _ESCAPES:
            parts.append(_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            parts.append(f"\\u{ord(char):04X}")
        else:
            parts.append(char)
    return '"' + "".join(parts) + '"'


@dataclass(frozen=True)
class NamedNode:
    """An absolute IRI."""

    iri: str

    def __post_init__(self) -> None:
        if not _IRI.match(self.iri):
            raise IriParseError(f"Invalid IRI: {self.iri!r}")

    def __str__(self) -> str:
        return f"<{self.iri}>"


@dataclass(frozen=True)
class BlankNode:
    """A blank node identified by a local label."""

    id: str

    def __post_init__(self) -> None:
        if not _BLANK_ID.match(self.id):
            raise BlankNodeIdParseError(f"Invalid blank node identifier: {self.id!r}")

    def __str__(self) -> str:
        return f"_:{self.id}"


XSD_STRING = NamedNode("http://www.w3.org/2001/XMLSchema#string")


@dataclass(frozen=True)
class Literal:
    """A literal value with a datatype; plain strings are xsd:string."""

    value: str
    datatype: NamedNode = field(default=XSD_STRING)

    def __str__(self) -> str:
        if self.datatype == XSD_STRING:
            return _quote(self.value)
        return f"{_quote(self.value)}^^{self.datatype}"


Subject = Union[NamedNode, BlankNode]
Term = Union[NamedNode, BlankNode, Literal]


@dataclass(frozen=True)
class Triple:
    """A subject, predicate and object statement."""

    subject: Subject
    predicate: NamedNode
    object: Term

    def __str__(self) -> str:
        return f"{self.subject} {self.predicate} {self.object}"