"""Settings, results and the common interface of dataset generators."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar


@dataclass(frozen=True)
class DataScale:
    """How many triples a generated dataset should roughly hold."""

    name: str
    count: int

    SMALL: ClassVar[DataScale]
    MEDIUM: ClassVar[DataScale]
    LARGE: ClassVar[DataScale]
    XLARGE: ClassVar[DataScale]

    @classmethod
    def custom(cls, count: int) -> DataScale:
        """A scale with an explicit triple count."""
        if count < 0:
            raise ValueError("Triple count cannot be negative")
        return cls("custom", count)

    def triple_count(self) -> int:
        return self.count


DataScale.SMALL = DataScale("small", 1_000)
DataScale.MEDIUM = DataScale("medium", 10_000)
DataScale.LARGE = DataScale("large", 100_000)
DataScale.XLARGE = DataScale("xlarge", 1_000_000)


class OutputFormat(enum.Enum):
    TURTLE = "turtle"
    NTRIPLES = "n-triples"
    JSONLD = "json-ld"

    def __str__(self) -> str:
        return self.value


@dataclass
class GeneratorConfig:
    scale: DataScale = DataScale.MEDIUM
    output_format: OutputFormat = OutputFormat.TURTLE
    output_path: Path = field(default_factory=lambda: Path("data/generated"))
    custom_counts: tuple[int, int, int] | None = None


@dataclass
class GenerationResult:
    triple_count: int
    event_count: int
    location_count: int
    product_count: int
    generation_time_ms: int
    output_files: list[str] = field(default_factory=list)


class DataGenerator(ABC):
    """Something that writes a dataset according to a GeneratorConfig."""

    @abstractmethod
    def generate(self, config: GeneratorConfig) -> GenerationResult:
        """Generate a dataset and describe what was produced."""

    @abstractmethod
    def validate_config(self, config: GeneratorConfig) -> None:
        """Raise if the configuration cannot be used."""