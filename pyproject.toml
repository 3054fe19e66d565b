[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "epcis-kg"
version = "0.1.0"
description = "EPCIS knowledge graph toolkit: configuration, SPARQL query helpers and synthetic supply-chain RDF data generation"
requires-python = ">=3.11"
dependencies = [
    "tomli-w",
]
keywords = ["epcis", "knowledge-graph", "rdf", "sparql", "supply-chain", "turtle", "n-triples", "json-ld"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Information Analysis",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["epcis_kg"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
warn_redundant_casts = true
