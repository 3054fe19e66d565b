# epcis_kg

Building blocks for an EPCIS (Electronic Product Code Information Services)
knowledge graph:

- **Configuration** (`epcis_kg.config`) — `AppConfig` with nested
  `ReasoningConfig`, `SparqlConfig`, `ServerConfig` and `PersistenceConfig`
  sections, loaded from and saved to TOML, with validation of every setting.
- **SPARQL helpers** (`epcis_kg.sparql`) — `determine_query_type` classifies
  a query as `SELECT`, `ASK`, `CONSTRUCT`, `UPDATE` or `UNKNOWN`;
  `SparqlQuery`, `SparqlResponse` and `ErrorResponse` describe request and
  response bodies.
- **RDF terms** (`epcis_kg.rdf`) — `NamedNode`, `BlankNode`, `Literal` and
  `Triple`, each rendered in N-Triples form by `str()`.
- **Synthetic data generation** (`epcis_kg.entities`, `epcis_kg.events`,
  `epcis_kg.generator`) — hierarchical supply-chain locations, product
  catalogues with SGTIN EPC codes, business entities and EPCIS object events
  (manufacturing, logistics, retail, quality control).
- **Formatting** (`epcis_kg.formatters`) — `TurtleFormatter`,
  `NTriplesFormatter` and `JsonLdFormatter` render triples, events and
  entities.

## Errors

`epcis_kg.errors` defines `EpcisKgError` and its subclasses (`IoError`,
`ConfigError`, `QueryError`, `ValidationError`, `IriParseError`,
`BlankNodeIdParseError` and others). Each renders as `"<kind>: <detail>"`,
for example `"Configuration error: Invalid config"`.

Configuration loading and validation raise `ConfigError` (or `IoError` when a
file cannot be read or written); `NamedNode` and `BlankNode` raise
`IriParseError` and `BlankNodeIdParseError` for malformed identifiers. The
data generators raise plain `ValueError` when they are given an unusable
configuration or too few locations of a needed kind.

## Configuration

```python
from epcis_kg.config import AppConfig
from epcis_kg.errors import ConfigError

config = AppConfig.from_file_or_default("config.toml")
config = config.with_overrides(lambda c: setattr(c, "server_port", 9090))

try:
    config.validate()
except ConfigError as exc:
    print(exc)   # e.g. "Configuration error: Invalid log level: ..."

config.to_file("config.toml")
```

Defaults: database path `./data`, port `8080`, log level `info`, the `el`
reasoning profile, and the ontologies `ontologies/epcis2.ttl` and
`ontologies/cbv.ttl`. `validate` accepts the log levels `trace`, `debug`,
`info`, `warn` and `error`, the profiles `el`, `ql` and `rl`, and rejects an
empty database path, port 0 and any zero timeout or save interval.

A TOML file read by `from_file` must contain every field; `with_overrides`
returns a changed copy and leaves the original untouched.

## Classifying SPARQL queries

```python
from epcis_kg.sparql import determine_query_type

determine_query_type("SELECT * WHERE { ?s ?p ?o }")   # "SELECT"
determine_query_type("INSERT DATA { <a> <b> <c> }")   # "UPDATE"
```

The check is a case-insensitive keyword search, tried in the order SELECT,
ASK, CONSTRUCT, then INSERT/DELETE.

## Generating a dataset

```python
from pathlib import Path

from epcis_kg.generation import DataScale, GeneratorConfig
from epcis_kg.generator import EpcisDataGenerator

config = GeneratorConfig(scale=DataScale.custom(2000), output_path=Path("data/generated"))
result = EpcisDataGenerator().generate_dataset(config)

print(result.triple_count, result.event_count, result.output_files)
```

Preset scales are `DataScale.SMALL` (1,000 triples), `MEDIUM` (10,000),
`LARGE` (100,000) and `XLARGE` (1,000,000). The dataset is always written as
Turtle, to `epcis_data_<triples>.ttl` in the output directory, whatever
`GeneratorConfig.output_format` says. The triple budget is split roughly
20 % locations, 15 % products and 65 % events, with at least 10 locations,
20 products and 50 events.

## Formatting entities and events yourself

```python
from epcis_kg.entities import LocationGenerator, ProductGenerator
from epcis_kg.events import EventGenerator
from epcis_kg.formatters import JsonLdFormatter, TurtleFormatter

locations = LocationGenerator().generate_supply_chain_network(20)
products = ProductGenerator().generate_product_catalog(10)
events = EventGenerator().generate_supply_chain_events(products, locations, [], 60)

print(TurtleFormatter().format_events(events))
print(JsonLdFormatter().format_entities(locations, products, []))
```

`EventGenerator.simulate_product_journey` follows one product from factory
through warehouse and distribution centre to a retail store, emitting up to
four events.

## What the package does not do

There is no triple store, no SPARQL query engine, no reasoner and no HTTP
server here, and the package installs no command. `determine_query_type`
only classifies query text, and the SPARQL classes only describe request and
response bodies; the configuration sections for the server, reasoning and
persistence are settings only.

## Running the tests

Install the `test` extra and run pytest from the project directory.