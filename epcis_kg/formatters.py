"""Render triples, events and entities as Turtle, N-Triples or JSON-LD."""

from __future__ import annotations

import json
import math
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from epcis_kg.entities import BusinessEntity, ContactInfo, Location, Product
from epcis_kg.events import EpcisEvent
from epcis_kg.rdf import XSD_STRING, BlankNode, Literal, NamedNode, Term, Triple

_RDF_TYPE = NamedNode("http://www.w3.org/1999/02/22-rdf-syntax-ns#type")
_XSD_DATETIME = "http://www.w3.org/2001/XMLSchema#dateTime"
_XSD_INTEGER = "http://www.w3.org/2001/XMLSchema#integer"

_TURTLE_HEADER = (
    "@prefix rdf: <http://www.w3.org/1999/02/22-rdf-syntax-ns#> .\n"
    "@prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .\n"
    "@prefix xsd: <http://www.w3.org/2001/XMLSchema#> .\n"
    "@prefix epcis: <urn:epcglobal:epcis:> .\n"
    "@prefix cbv: <urn:epcglobal:cbv:> .\n"
    "@prefix ex: <http://example.com/> .\n\n"
)

_JSONLD_CONTEXT = {
    "rdf": "http://www.w3.org/1999/02/22-rdf-syntax-ns#",
    "rdfs": "http://www.w3.org/2000/01/rdf-schema#",
    "xsd": "http://www.w3.org/2001/XMLSchema#",
    "epcis": "urn:epcglobal:epcis:",
    "cbv": "urn:epcglobal:cbv:",
    "ex": "http://example.com/",
}


def _number(value: float) -> str:
    """Shortest plain decimal form of a number, without exponent or trailing '.0'."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if float(value).is_integer():
        return str(int(value))
    text = repr(float(value))
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    return text


def _rfc3339(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    base = moment.strftime("%Y-%m-%dT%H:%M:%S")
    micros = moment.microsecond
    if micros == 0:
        fraction = ""
    elif micros % 1000 == 0:
        fraction = f".{micros // 1000:03}"
    else:
        fraction = f".{micros:06}"
    offset = moment.isoformat()[-6:]
    return f"{base}{fraction}{offset}"


def _line(triple: Triple, obj: str) -> str:
    return f"{triple.subject} {triple.predicate} {obj} .\n"


def _dump_jsonld(graph: list[dict[str, Any]]) -> str:
    document = {"@context": _JSONLD_CONTEXT, "@graph": graph}
    return json.dumps(document, indent=2, sort_keys=True, ensure_ascii=False)


class DataFormatter(ABC):
    """Turns generated data into one serialisation format."""

    @abstractmethod
    def format_triples(self, triples: Iterable[Triple]) -> str:
        """Render a sequence of triples."""

    @abstractmethod
    def format_events(self, events: Iterable[EpcisEvent]) -> str:
        """Render EPCIS events."""

    @abstractmethod
    def format_entities(
        self,
        locations: Sequence[Location],
        products: Sequence[Product],
        entities: Sequence[BusinessEntity],
    ) -> str:
        """Render locations, products and business entities."""


class TurtleFormatter(DataFormatter):
    """Turtle output with the EPCIS, CBV and example prefixes declared."""

    def format_triples(self, triples: Iterable[Triple]) -> str:
        body = "".join(_line(t, self._format_object(t.object)) for t in triples)
        return _TURTLE_HEADER + body

    def format_events(self, events: Iterable[EpcisEvent]) -> str:
        return _TURTLE_HEADER + "".join(_event_turtle(e) for e in events)

    def format_entities(
        self,
        locations: Sequence[Location],
        products: Sequence[Product],
        entities: Sequence[BusinessEntity],
    ) -> str:
        parts = [_TURTLE_HEADER]
        parts.extend(_location_turtle(loc) for loc in locations)
        parts.extend(_product_turtle(p) for p in products)
        parts.extend(_business_entity_turtle(e) for e in entities)
        return "".join(parts)

    @staticmethod
    def _format_object(obj: Term) -> str:
        if isinstance(obj, (NamedNode, BlankNode)):
            return str(obj)
        datatype = obj.datatype.iri
        if datatype == _XSD_DATETIME:
            return f'"{obj.value}"^^xsd:dateTime'
        if datatype == _XSD_INTEGER:
            return f'"{obj.value}"^^xsd:integer'
        return f'"{obj.value}"'


class NTriplesFormatter(DataFormatter):
    """One triple per line with full IRIs."""

    def format_triples(self, triples: Iterable[Triple]) -> str:
        return "".join(_line(t, _ntriples_object(t.object)) for t in triples)

    def format_events(self, events: Iterable[EpcisEvent]) -> str:
        return self.format_triples(t for e in events for t in _event_triples(e))

    def format_entities(
        self,
        locations: Sequence[Location],
        products: Sequence[Product],
        entities: Sequence[BusinessEntity],
    ) -> str:
        triples = [
            *(t for loc in locations for t in _location_triples(loc)),
            *(t for p in products for t in _product_triples(p)),
            *(t for e in entities for t in _business_entity_triples(e)),
        ]
        return self.format_triples(triples)


class JsonLdFormatter(DataFormatter):
    """A JSON-LD document with a shared context and a flat graph."""

    def format_triples(self, triples: Iterable[Triple]) -> str:
        graph = [
            {
                "subject": (
                    t.subject.iri if isinstance(t.subject, NamedNode) else t.subject.id
                ),
                "predicate": t.predicate.iri,
                "object": _jsonld_object(t.object),
            }
            for t in triples
        ]
        return _dump_jsonld(graph)

    def format_events(self, events: Iterable[EpcisEvent]) -> str:
        return _dump_jsonld([_event_jsonld(e) for e in events])

    def format_entities(
        self,
        locations: Sequence[Location],
        products: Sequence[Product],
        entities: Sequence[BusinessEntity],
    ) -> str:
        graph = [
            *(_location_jsonld(loc) for loc in locations),
            *(_product_jsonld(p) for p in products),
            *(_business_entity_jsonld(e) for e in entities),
        ]
        return _dump_jsonld(graph)


def _event_turtle(event: EpcisEvent) -> str:
    read_point = (
        f"    epcis:readPoint <{event.read_point}> ;"
        if event.read_point is not None
        else ""
    )
    biz_location = (
        f"    epcis:bizLocation <{event.biz_location}> ;"
        if event.biz_location is not None
        else ""
    )
    quantity = (
        f"    epcis:quantity {event.quantity}^^xsd:integer"
        if event.quantity is not None
        else ""
    )
    return (
        f"<{event.uri}> rdf:type epcis:ObjectEvent ;\n"
        f'    epcis:eventID "{event.event_id}" ;\n'
        f'    epcis:eventTime "{event.event_time}"^^xsd:dateTime ;\n'
        f'    epcis:recordTime "{event.record_time}"^^xsd:dateTime ;\n'
        f'    epcis:action "{event.action}" ;\n'
        f'    epcis:bizStep "{event.biz_step}" ;\n'
        f'    epcis:disposition "{event.disposition}" ;\n'
        f'    epcis:epcList "{", ".join(event.epc_list)}" ;\n'
        f"{read_point}\n"
        f"{biz_location}\n"
        f"{quantity} .\n"
    )


def _location_turtle(location: Location) -> str:
    address = (
        f'    ex:address "{location.address}" ;\n'
        if location.address is not None
        else ""
    )
    if location.coordinates is not None:
        lat, lon = location.coordinates
        coordinates = f'    ex:coordinates "{_number(lat)}, {_number(lon)}" ;'
    else:
        coordinates = ""
    capacity = (
        f"    ex:capacity {location.capacity}^^xsd:integer"
        if location.capacity is not None
        else ""
    )
    return (
        f"<{location.uri}> rdf:type ex:Location ;\n"
        f'    rdfs:label "{location.name}" ;\n'
        f'    ex:name "{location.name}" ;\n'
        f'    ex:locationType "{location.location_type}" ;\n'
        f"{address}{coordinates}\n"
        f"{capacity} .\n"
    )


def _product_turtle(product: Product) -> str:
    manufactured = (
        f'    ex:manufacturingDate "{_rfc3339(product.manufacturing_date)}"'
        "^^xsd:dateTime ;\n"
        if product.manufacturing_date is not None
        else ""
    )
    expires = (
        f'    ex:expirationDate "{_rfc3339(product.expiration_date)}"'
        "^^xsd:dateTime ;\n"
        if product.expiration_date is not None
        else ""
    )
    weight = (
        f"    ex:weight {_number(product.weight_kg)}^^xsd:decimal"
        if product.weight_kg is not None
        else ""
    )
    return (
        f"<{product.uri}> rdf:type ex:Product ;\n"
        f'    rdfs:label "{product.name}" ;\n'
        f'    ex:name "{product.name}" ;\n'
        f'    ex:epc "{product.epc}" ;\n'
        f'    ex:productType "{product.product_type}" ;\n'
        f'    ex:category "{product.category}" ;\n'
        f'    ex:manufacturer "{product.manufacturer}" ;\n'
        f"{manufactured}{expires}{weight} .\n"
    )


def _business_entity_turtle(entity: BusinessEntity) -> str:
    tax_id = f'    ex:taxId "{entity.tax_id}" ;\n' if entity.tax_id is not None else ""
    contact = (
        _contact_info_turtle(entity.contact_info)
        if entity.contact_info is not None
        else ""
    )
    return (
        f"<{entity.uri}> rdf:type ex:BusinessEntity ;\n"
        f'    rdfs:label "{entity.name}" ;\n'
        f'    ex:name "{entity.name}" ;\n'
        f'    ex:entityType "{entity.entity_type}" ;\n'
        f"{tax_id}{contact} .\n"
    )


def _contact_info_turtle(contact: ContactInfo) -> str:
    fields = (("email", contact.email), ("phone", contact.phone), ("address", contact.address))
    return " ;\n".join(
        f'    ex:{name} "{value}"' for name, value in fields if value is not None
    )


def _ntriples_object(obj: Term) -> str:
    if isinstance(obj, (NamedNode, BlankNode)):
        return str(obj)
    if obj.datatype == XSD_STRING:
        return f'"{obj.value}"'
    return f'"{obj.value}"^^<{obj.datatype.iri}>'


def _jsonld_object(obj: Term) -> dict[str, str]:
    if isinstance(obj, NamedNode):
        return {"@id": obj.iri}
    if isinstance(obj, BlankNode):
        return {"@id": f"_:{obj.id}"}
    if obj.datatype == XSD_STRING:
        return {"@value": obj.value}
    return {"@value": obj.value, "@type": obj.datatype.iri}


def _typed(uri: str, type_iri: str, predicate: str, value: str) -> list[Triple]:
    subject = NamedNode(uri)
    return [
        Triple(subject, _RDF_TYPE, NamedNode(type_iri)),
        Triple(subject, NamedNode(predicate), Literal(value)),
    ]


def _event_triples(event: EpcisEvent) -> list[Triple]:
    return _typed(
        event.uri,
        "urn:epcglobal:epcis:ObjectEvent",
        "urn:epcglobal:epcis:eventTime",
        event.event_time,
    )


def _location_triples(location: Location) -> list[Triple]:
    return _typed(
        location.uri,
        "http://example.com/Location",
        "http://example.com/name",
        location.name,
    )


def _product_triples(product: Product) -> list[Triple]:
    return _typed(
        product.uri,
        "http://example.com/Product",
        "http://example.com/epc",
        product.epc,
    )


def _business_entity_triples(entity: BusinessEntity) -> list[Triple]:
    return _typed(
        entity.uri,
        "http://example.com/BusinessEntity",
        "http://example.com/name",
        entity.name,
    )


def _event_jsonld(event: EpcisEvent) -> dict[str, Any]:
    return {
        "@id": event.uri,
        "@type": "epcis:ObjectEvent",
        "epcis:eventID": event.event_id,
        "epcis:eventTime": {"@value": event.event_time, "@type": "xsd:dateTime"},
        "epcis:action": event.action,
        "epcis:bizStep": event.biz_step,
        "epcis:disposition": event.disposition,
    }


def _location_jsonld(location: Location) -> dict[str, Any]:
    return {
        "@id": location.uri,
        "@type": "ex:Location",
        "rdfs:label": location.name,
        "ex:name": location.name,
        "ex:locationType": location.location_type,
    }


def _product_jsonld(product: Product) -> dict[str, Any]:
    return {
        "@id": product.uri,
        "@type": "ex:Product",
        "rdfs:label": product.name,
        "ex:name": product.name,
        "ex:epc": product.epc,
        "ex:productType": product.product_type,
        "ex:category": product.category,
        "ex:manufacturer": product.manufacturer,
    }


def _business_entity_jsonld(entity: BusinessEntity) -> dict[str, Any]:
    return {
        "@id": entity.uri,
        "@type": "ex:BusinessEntity",
        "rdfs:label": entity.name,
        "ex:name": entity.name,
        "ex:entityType": entity.entity_type,
    }