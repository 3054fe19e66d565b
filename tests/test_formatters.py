import json
from datetime import datetime, timezone

import pytest

from epcis_kg.entities import BusinessEntity, ContactInfo, Location, Product
from epcis_kg.errors import IriParseError
from epcis_kg.events import EpcisEvent, EventType
from epcis_kg.formatters import (
    DataFormatter,
    JsonLdFormatter,
    NTriplesFormatter,
    TurtleFormatter,
)
from epcis_kg.rdf import BlankNode, Literal, NamedNode, Triple

HEADER = (
    "@prefix rdf: <http://www.w3.org/1999/02/22-rdf-syntax-ns#> .\n"
    "@prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .\n"
    "@prefix xsd: <http://www.w3.org/2001/XMLSchema#> .\n"
    "@prefix epcis: <urn:epcglobal:epcis:> .\n"
    "@prefix cbv: <urn:epcglobal:cbv:> .\n"
    "@prefix ex: <http://example.com/> .\n\n"
)
XSD = "http://www.w3.org/2001/XMLSchema#"
RDF_TYPE = "http://www.w3.org/1999/02/22-rdf-syntax-ns#type"


def make_event(**changes):
    values = dict(
        uri="http://example.com/event/1",
        event_type=EventType.OBJECT_EVENT,
        event_time="2024-01-01T00:00:00+00:00",
        record_time="2024-01-01T00:05:00+00:00",
        event_id="MANUF-00000001",
        action="ADD",
        biz_step="urn:epcglobal:cbv:bizstep:manufacturing",
        disposition="urn:epcglobal:cbv:disp:in_progress",
        epc_list=["urn:epc:id:sgtin:0614141.000001.00000001"],
        read_point="http://example.com/location/f/line1",
        biz_location="http://example.com/location/f",
        quantity=1,
    )
    values.update(changes)
    return EpcisEvent(**values)


def make_location(**changes):
    values = dict(
        uri="http://example.com/location/w",
        name="Warehouse 1 - Chicago",
        location_type="Warehouse",
        address="1 Main St, Chicago",
        coordinates=None,
        capacity=10000,
    )
    values.update(changes)
    return Location(**values)


def make_product(**changes):
    values = dict(
        uri="http://example.com/product/p",
        name="Laptop 2 FashionInc",
        epc="urn:epc:id:sgtin:0614141.000001.00000001",
        product_type="Laptop",
        category="Clothing",
        manufacturer="FashionInc",
        manufacturing_date=None,
        expiration_date=None,
        weight_kg=None,
    )
    values.update(changes)
    return Product(**values)


def make_entity(**changes):
    values = dict(
        uri="http://example.com/entity/e",
        name="Retailer 3",
        entity_type="Retailer",
        tax_id=None,
        contact_info=None,
    )
    values.update(changes)
    return BusinessEntity(**values)


def test_data_formatter_is_abstract():
    with pytest.raises(TypeError):
        DataFormatter()


def test_turtle_triples_start_with_header():
    triple = Triple(
        NamedNode("http://example.com/a"),
        NamedNode("http://example.com/p"),
        NamedNode("http://example.com/b"),
    )
    out = TurtleFormatter().format_triples([triple])
    assert out == HEADER + "<http://example.com/a> <http://example.com/p> <http://example.com/b> .\n"


def test_turtle_empty_triples_is_header_only():
    assert TurtleFormatter().format_triples([]) == HEADER


@pytest.mark.parametrize(
    "datatype, expected",
    [
        (XSD + "string", '"v"'),
        (XSD + "dateTime", '"v"^^xsd:dateTime'),
        (XSD + "integer", '"v"^^xsd:integer'),
        (XSD + "decimal", '"v"'),
    ],
)
def test_turtle_literal_objects(datatype, expected):
    triple = Triple(
        NamedNode("http://example.com/a"),
        NamedNode("http://example.com/p"),
        Literal("v", NamedNode(datatype)),
    )
    out = TurtleFormatter().format_triples([triple])
    assert out.endswith(f"<http://example.com/a> <http://example.com/p> {expected} .\n")


def test_turtle_blank_nodes():
    triple = Triple(BlankNode("s1"), NamedNode("http://example.com/p"), BlankNode("o1"))
    out = TurtleFormatter().format_triples([triple])
    assert out.endswith("_:s1 <http://example.com/p> _:o1 .\n")


def test_turtle_event_block():
    event = make_event(epc_list=["epc:a", "epc:b"])
    out = TurtleFormatter().format_events([event])
    expected = (
        "<http://example.com/event/1> rdf:type epcis:ObjectEvent ;\n"
        '    epcis:eventID "MANUF-00000001" ;\n'
        '    epcis:eventTime "2024-01-01T00:00:00+00:00"^^xsd:dateTime ;\n'
        '    epcis:recordTime "2024-01-01T00:05:00+00:00"^^xsd:dateTime ;\n'
        '    epcis:action "ADD" ;\n'
        '    epcis:bizStep "urn:epcglobal:cbv:bizstep:manufacturing" ;\n'
        '    epcis:disposition "urn:epcglobal:cbv:disp:in_progress" ;\n'
        '    epcis:epcList "epc:a, epc:b" ;\n'
        "    epcis:readPoint <http://example.com/location/f/line1> ;\n"
        "    epcis:bizLocation <http://example.com/location/f> ;\n"
        "    epcis:quantity 1^^xsd:integer .\n"
    )
    assert out == HEADER + expected


def test_turtle_event_without_optional_fields():
    event = make_event(read_point=None, biz_location=None, quantity=None)
    out = TurtleFormatter().format_events([event])
    assert "readPoint" not in out
    assert "bizLocation" not in out
    assert out.endswith(
        '    epcis:epcList "urn:epc:id:sgtin:0614141.000001.00000001" ;\n\n\n .\n'
    )


def test_turtle_location_with_coordinates_and_capacity():
    location = make_location(coordinates=(40.0, -74.0))
    out = TurtleFormatter().format_entities([location], [], [])
    block = out[len(HEADER):]
    assert block == (
        "<http://example.com/location/w> rdf:type ex:Location ;\n"
        '    rdfs:label "Warehouse 1 - Chicago" ;\n'
        '    ex:name "Warehouse 1 - Chicago" ;\n'
        '    ex:locationType "Warehouse" ;\n'
        '    ex:address "1 Main St, Chicago" ;\n'
        '    ex:coordinates "40, -74" ;\n'
        "    ex:capacity 10000^^xsd:integer .\n"
    )


def test_turtle_location_fractional_coordinates():
    location = make_location(coordinates=(40.5, -73.25))
    out = TurtleFormatter().format_entities([location], [], [])
    assert '    ex:coordinates "40.5, -73.25" ;\n' in out


def test_turtle_location_without_optionals():
    location = make_location(address=None, coordinates=None, capacity=None)
    out = TurtleFormatter().format_entities([location], [], [])
    assert out.endswith('    ex:locationType "Warehouse" ;\n\n .\n')


def test_turtle_product_block():
    moment = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    product = make_product(manufacturing_date=moment, weight_kg=0.5)
    out = TurtleFormatter().format_entities([], [product], [])
    assert '    ex:manufacturingDate "2024-01-02T03:04:05+00:00"^^xsd:dateTime ;\n' in out
    assert "expirationDate" not in out
    assert out.endswith("    ex:weight 0.5^^xsd:decimal .\n")
    assert '    ex:epc "urn:epc:id:sgtin:0614141.000001.00000001" ;\n' in out


def test_turtle_business_entity_with_contact():
    contact = ContactInfo(email="contact@example.com", phone=None, address="1 Business Ave")
    entity = make_entity(tax_id="TAX-000000003", contact_info=contact)
    out = TurtleFormatter().format_entities([], [], [entity])
    assert out.endswith(
        '    ex:entityType "Retailer" ;\n'
        '    ex:taxId "TAX-000000003" ;\n'
        '    ex:email "contact@example.com" ;\n'
        '    ex:address "1 Business Ave" .\n'
    )


def test_turtle_entities_ordering():
    out = TurtleFormatter().format_entities(
        [make_location()], [make_product()], [make_entity()]
    )
    loc = out.index("rdf:type ex:Location")
    prod = out.index("rdf:type ex:Product")
    ent = out.index("rdf:type ex:BusinessEntity")
    assert loc < prod < ent


def test_ntriples_literal_forms():
    subject = NamedNode("http://example.com/a")
    predicate = NamedNode("http://example.com/p")
    triples = [
        Triple(subject, predicate, Literal("plain")),
        Triple(subject, predicate, Literal("5", NamedNode(XSD + "integer"))),
    ]
    lines = NTriplesFormatter().format_triples(triples).splitlines()
    assert lines == [
        '<http://example.com/a> <http://example.com/p> "plain" .',
        f'<http://example.com/a> <http://example.com/p> "5"^^<{XSD}integer> .',
    ]


def test_ntriples_empty():
    assert NTriplesFormatter().format_triples([]) == ""


def test_ntriples_events():
    out = NTriplesFormatter().format_events([make_event()])
    assert out == (
        f"<http://example.com/event/1> <{RDF_TYPE}> <urn:epcglobal:epcis:ObjectEvent> .\n"
        '<http://example.com/event/1> <urn:epcglobal:epcis:eventTime> "2024-01-01T00:00:00+00:00" .\n'
    )


def test_ntriples_entities_two_lines_each():
    out = NTriplesFormatter().format_entities(
        [make_location()], [make_product()], [make_entity()]
    )
    lines = out.splitlines()
    assert len(lines) == 6
    assert lines[1] == (
        '<http://example.com/location/w> <http://example.com/name> "Warehouse 1 - Chicago" .'
    )
    assert lines[3] == (
        '<http://example.com/product/p> <http://example.com/epc> '
        '"urn:epc:id:sgtin:0614141.000001.00000001" .'
    )
    assert lines[4].endswith("<http://example.com/BusinessEntity> .")


def test_ntriples_invalid_uri_raises():
    with pytest.raises(IriParseError):
        NTriplesFormatter().format_events([make_event(uri="not an iri")])


def test_jsonld_triples():
    triples = [
        Triple(
            NamedNode("http://example.com/a"),
            NamedNode("http://example.com/p"),
            Literal("5", NamedNode(XSD + "integer")),
        ),
        Triple(BlankNode("s1"), NamedNode("http://example.com/p"), BlankNode("o1")),
        Triple(
            NamedNode("http://example.com/a"),
            NamedNode("http://example.com/q"),
            Literal("text"),
        ),
    ]
    doc = json.loads(JsonLdFormatter().format_triples(triples))
    assert doc["@context"]["epcis"] == "urn:epcglobal:epcis:"
    assert doc["@graph"] == [
        {
            "subject": "http://example.com/a",
            "predicate": "http://example.com/p",
            "object": {"@value": "5", "@type": XSD + "integer"},
        },
        {
            "subject": "s1",
            "predicate": "http://example.com/p",
            "object": {"@id": "_:o1"},
        },
        {
            "subject": "http://example.com/a",
            "predicate": "http://example.com/q",
            "object": {"@value": "text"},
        },
    ]


def test_jsonld_pretty_printed_with_sorted_keys():
    out = JsonLdFormatter().format_triples([])
    assert out.startswith('{\n  "@context": {\n')
    assert out.index('"@context"') < out.index('"@graph"')
    assert json.loads(out)["@graph"] == []


def test_jsonld_events():
    doc = json.loads(JsonLdFormatter().format_events([make_event()]))
    assert doc["@graph"] == [
        {
            "@id": "http://example.com/event/1",
            "@type": "epcis:ObjectEvent",
            "epcis:eventID": "MANUF-00000001",
            "epcis:eventTime": {
                "@value": "2024-01-01T00:00:00+00:00",
                "@type": "xsd:dateTime",
            },
            "epcis:action": "ADD",
            "epcis:bizStep": "urn:epcglobal:cbv:bizstep:manufacturing",
            "epcis:disposition": "urn:epcglobal:cbv:disp:in_progress",
        }
    ]


def test_jsonld_entities():
    doc = json.loads(
        JsonLdFormatter().format_entities(
            [make_location()], [make_product()], [make_entity()]
        )
    )
    graph = doc["@graph"]
    assert [node["@type"] for node in graph] == [
        "ex:Location",
        "ex:Product",
        "ex:BusinessEntity",
    ]
    assert graph[0]["rdfs:label"] == graph[0]["ex:name"] == "Warehouse 1 - Chicago"
    assert graph[1]["ex:manufacturer"] == "FashionInc"
    assert graph[2]["ex:entityType"] == "Retailer"
    assert doc["@context"]["ex"] == "http://example.com/"