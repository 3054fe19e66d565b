"""EPCIS knowledge graph toolkit: configuration, SPARQL query helpers, RDF terms and synthetic supply-chain data generation."""

__version__ = "0.1.0"