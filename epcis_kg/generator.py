"""Generator that writes a complete synthetic EPCIS dataset as Turtle."""

from __future__ import annotations

import time
from collections.abc import Iterable, Sequence
from pathlib import Path

from epcis_kg.entities import (
    BusinessEntity,
    BusinessEntityGenerator,
    Location,
    LocationGenerator,
    Product,
    ProductGenerator,
)
from epcis_kg.events import EpcisEvent, EventGenerator
from epcis_kg.formatters import TurtleFormatter
from epcis_kg.generation import DataGenerator, GenerationResult, GeneratorConfig
from epcis_kg.rdf import Literal, NamedNode, Triple

_RDF_TYPE = NamedNode("http://www.w3.org/1999/02/22-rdf-syntax-ns#type")
_OWL_ONTOLOGY = NamedNode("http://www.w3.org/2002/07/owl#Ontology")
_EX = "http://example.com/"
_EPCIS = "urn:epcglobal:epcis:"

_BUSINESS_ENTITY_COUNT = 20


class EpcisDataGenerator(DataGenerator):
    """Builds locations, products and events and saves them as one Turtle file."""

    def __init__(self) -> None:
        self.location_gen = LocationGenerator()
        self.product_gen = ProductGenerator()
        self.business_gen = BusinessEntityGenerator()
        self.event_gen = EventGenerator()

    def generate_dataset(self, config: GeneratorConfig) -> GenerationResult:
        """Generate a dataset of roughly the configured size and write it out."""
        started = time.perf_counter()
        self.validate_config(config)

        output_dir = Path(config.output_path)
        output_dir.mkdir(parents=True, exist_ok=True)

        total_triples = config.scale.triple_count()
        location_count, product_count, event_count = self._distribution(total_triples)

        print(f"Generating dataset with {total_triples} triples:")
        print(f"  - Locations: {location_count}")
        print(f"  - Products: {product_count}")
        print(f"  - Events: {event_count}")

        locations = self.location_gen.generate_supply_chain_network(location_count)
        products = self.product_gen.generate_product_catalog(product_count)
        business_entities = self.business_gen.generate_business_entities(
            _BUSINESS_ENTITY_COUNT
        )
        events = self.event_gen.generate_supply_chain_events(
            products, locations, business_entities, event_count
        )

        triples = [
            *self._ontology_triples(),
            *self._entity_triples(locations, products, business_entities),
            *self._event_triples(events),
        ]

        output_file = output_dir / f"epcis_data_{total_triples}.ttl"
        output_file.write_text(TurtleFormatter().format_triples(triples), encoding="utf-8")

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        return GenerationResult(
            triple_count=len(triples),
            event_count=len(events),
            location_count=len(locations),
            product_count=len(products),
            generation_time_ms=elapsed_ms,
            output_files=[str(output_file)],
        )

    def generate(self, config: GeneratorConfig) -> GenerationResult:
        return self.generate_dataset(config)

    def validate_config(self, config: GeneratorConfig) -> None:
        """Raise ValueError for an empty output path or a zero triple count."""
        path = config.output_path
        if path is None or (isinstance(path, str) and not path):
            raise ValueError("Output path cannot be empty")
        if config.scale.triple_count() == 0:
            raise ValueError("Triple count must be greater than 0")

    @staticmethod
    def _distribution(total_triples: int) -> tuple[int, int, int]:
        # 20% locations, 15% products, 65% events.
        location_triples = int(total_triples * 0.20)
        product_triples = int(total_triples * 0.15)
        event_triples = total_triples - location_triples - product_triples

        # Average triples per entity: ~4 per location, ~5 per product, ~8 per event.
        location_count = location_triples // 4
        product_count = product_triples // 5
        event_count = event_triples // 8
        return max(location_count, 10), max(product_count, 20), max(event_count, 50)

    @staticmethod
    def _ontology_triples() -> list[Triple]:
        return [
            Triple(NamedNode(_EPCIS), _RDF_TYPE, _OWL_ONTOLOGY),
            Triple(NamedNode("urn:epcglobal:cbv:"), _RDF_TYPE, _OWL_ONTOLOGY),
        ]

    @staticmethod
    def _entity_triples(
        locations: Sequence[Location],
        products: Sequence[Product],
        business_entities: Sequence[BusinessEntity],
    ) -> Iterable[Triple]:
        for location in locations:
            subject = NamedNode(location.uri)
            yield Triple(subject, _RDF_TYPE, NamedNode(_EX + "Location"))
            yield Triple(subject, NamedNode(_EX + "name"), Literal(location.name))
            yield Triple(
                subject, NamedNode(_EX + "locationType"), Literal(location.location_type)
            )
        for product in products:
            subject = NamedNode(product.uri)
            yield Triple(subject, _RDF_TYPE, NamedNode(_EX + "Product"))
            yield Triple(subject, NamedNode(_EX + "name"), Literal(product.name))
            yield Triple(subject, NamedNode(_EX + "epc"), Literal(product.epc))

    @staticmethod
    def _event_triples(events: Sequence[EpcisEvent]) -> Iterable[Triple]:
        for event in events:
            subject = NamedNode(event.uri)
            yield Triple(subject, _RDF_TYPE, NamedNode(_EPCIS + "ObjectEvent"))
            yield Triple(
                subject, NamedNode(_EPCIS + "eventTime"), Literal(event.event_time)
            )
            yield Triple(subject, NamedNode(_EPCIS + "action"), Literal(event.action))