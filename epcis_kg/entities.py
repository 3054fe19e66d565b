"""Supply chain entities and generators that build sample sets of them."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

_LOCATION_TYPES = (
    "Factory",
    "Warehouse",
    "DistributionCenter",
    "RetailStore",
    "ShippingPort",
    "Airport",
    "CrossDock",
    "ProcessingFacility",
)
_CITY_NAMES = (
    "New York",
    "Los Angeles",
    "Chicago",
    "Houston",
    "Phoenix",
    "Philadelphia",
    "San Antonio",
    "San Diego",
    "Dallas",
    "San Jose",
)
_COUNTRY_NAMES = ("USA", "Canada", "Mexico", "China", "Germany", "Japan", "UK", "France")

_PRODUCT_CATEGORIES = (
    "Electronics",
    "Clothing",
    "Food",
    "Beverages",
    "Pharmaceuticals",
    "Automotive",
    "Furniture",
    "Books",
    "Toys",
    "Sports",
)
_PRODUCT_TYPES = (
    "Smartphone",
    "Laptop",
    "T-Shirt",
    "Jeans",
    "Coffee",
    "Wine",
    "Medicine",
    "CarPart",
    "Chair",
    "Novel",
)
_MANUFACTURERS = (
    "TechCorp",
    "FashionInc",
    "FoodCo",
    "PharmaLtd",
    "AutoGroup",
    "FurnitureWorld",
    "BookHouse",
    "ToyFactory",
    "SportsGear",
)

_ENTITY_TYPES = (
    "Manufacturer",
    "Distributor",
    "Retailer",
    "LogisticsProvider",
    "WarehouseOperator",
)

_CAPACITY = {
    "Warehouse": (10_000, 5_000),
    "DistributionCenter": (50_000, 10_000),
    "RetailStore": (1_000, 500),
    "Factory": (100_000, 20_000),
}

_U32_MASK = 0xFFFFFFFF


@dataclass
class Location:
    uri: str
    name: str
    location_type: str
    address: str | None = None
    coordinates: tuple[float, float] | None = None
    capacity: int | None = None
    parent_location: str | None = None


@dataclass
class Product:
    uri: str
    name: str
    epc: str
    product_type: str
    category: str
    manufacturer: str
    manufacturing_date: datetime | None = None
    expiration_date: datetime | None = None
    weight_kg: float | None = None
    dimensions: tuple[float, float, float] | None = None  # length, width, height


@dataclass
class ContactInfo:
    email: str | None = None
    phone: str | None = None
    address: str | None = None


@dataclass
class BusinessEntity:
    uri: str
    name: str
    entity_type: str
    tax_id: str | None = None
    contact_info: ContactInfo | None = None
    locations: list[str] = field(default_factory=list)


class LocationGenerator:
    """Builds a hierarchical network of supply chain locations."""

    location_types = _LOCATION_TYPES
    city_names = _CITY_NAMES
    country_names = _COUNTRY_NAMES

    def generate_supply_chain_network(self, count: int) -> list[Location]:
        """Distribution centres, warehouses, factories, then retail stores."""
        regional_count = int(max(count * 0.1, 1.0))
        warehouse_count = int(max(count * 0.3, 1.0))
        factory_count = int(max(count * 0.2, 1.0))
        retail_count = count - regional_count - warehouse_count - factory_count
        if retail_count < 0:
            raise ValueError(f"Location count {count} is too small for a network")

        locations = [
            self._generate_location("DistributionCenter", i, None)
            for i in range(regional_count)
        ]
        regional_uris = [loc.uri for loc in locations]
        warehouses = [
            self._generate_location("Warehouse", i, regional_uris[i % regional_count])
            for i in range(warehouse_count)
        ]
        locations.extend(warehouses)
        locations.extend(
            self._generate_location("Factory", i, None) for i in range(factory_count)
        )
        locations.extend(
            self._generate_location(
                "RetailStore", i, warehouses[i % warehouse_count].uri
            )
            for i in range(retail_count)
        )
        return locations

    def _generate_location(
        self, location_type: str, index: int, parent: str | None
    ) -> Location:
        city = self.city_names[index % len(self.city_names)]
        coordinates = (
            (40.0 + index * 0.1, -74.0 + index * 0.1) if index % 3 == 0 else None
        )
        capacity = None
        if location_type in _CAPACITY:
            base, step = _CAPACITY[location_type]
            capacity = (base + index * step) & _U32_MASK
        return Location(
            uri=f"http://example.com/location/{uuid.uuid4()}",
            name=f"{location_type} {index + 1} - {city}",
            location_type=location_type,
            address=f"{index + 1} Main St, {city}",
            coordinates=coordinates,
            capacity=capacity,
            parent_location=parent,
        )


class ProductGenerator:
    """Builds a catalogue of products identified by SGTIN EPC codes."""

    product_categories = _PRODUCT_CATEGORIES
    product_types = _PRODUCT_TYPES
    manufacturers = _MANUFACTURERS

    def generate_product_catalog(self, count: int) -> list[Product]:
        return [self._generate_product(i) for i in range(count)]

    def _generate_product(self, index: int) -> Product:
        category_index = index % len(self.product_categories)
        product_type = self.product_types[index % len(self.product_types)]
        manufacturer = self.manufacturers[index % len(self.manufacturers)]
        now = datetime.now(timezone.utc)

        manufacturing_date = (
            now - timedelta(days=index * 30) if index % 10 != 0 else None
        )
        # Beverages and pharmaceuticals expire.
        expiration_date = (
            now + timedelta(days=365 + index * 10)
            if category_index in (3, 4)
            else None
        )
        return Product(
            uri=f"http://example.com/product/{uuid.uuid4()}",
            name=f"{product_type} {index + 1} {manufacturer}",
            epc=self._epc_code(index),
            product_type=product_type,
            category=self.product_categories[category_index],
            manufacturer=manufacturer,
            manufacturing_date=manufacturing_date,
            expiration_date=expiration_date,
            weight_kg=0.5 + index * 0.1,
            dimensions=(10.0 + index, 5.0 + index * 0.5, 2.0 + index * 0.2),
        )

    @staticmethod
    def _epc_code(index: int) -> str:
        company_prefix = "0614141"
        item_reference = f"{index % 1_000_000:06}"
        serial_number = f"{index % 100_000_000:08}"
        return f"urn:epc:id:sgtin:{company_prefix}.{item_reference}.{serial_number}"


class BusinessEntityGenerator:
    """Builds companies and organisations taking part in the supply chain."""

    entity_types = _ENTITY_TYPES

    def generate_business_entities(self, count: int) -> list[BusinessEntity]:
        return [self._generate_business_entity(i) for i in range(count)]

    def _generate_business_entity(self, index: int) -> BusinessEntity:
        entity_type = self.entity_types[index % len(self.entity_types)]
        contact = ContactInfo(
            email=f"contact@{entity_type.lower()}{index + 1}.com",
            phone=f"+1-555-{index % 1000:03}-{index % 10000:04}",
            address=f"{index + 1} Business Ave, Suite {index + 100}",
        )
        return BusinessEntity(
            uri=f"http://example.com/entity/{uuid.uuid4()}",
            name=f"{entity_type} {index + 1}",
            entity_type=entity_type,
            tax_id=f"TAX-{index + 1:09}",
            contact_info=contact,
            locations=[],
        )