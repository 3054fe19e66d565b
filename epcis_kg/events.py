"""EPCIS events and a generator that simulates supply chain activity."""

from __future__ import annotations

import enum
import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import TypeVar

from epcis_kg.entities import BusinessEntity, Location, Product

_T = TypeVar("_T")

_BIZSTEP = "urn:epcglobal:cbv:bizstep:"
_DISP = "urn:epcglobal:cbv:disp:"

_BUSINESS_STEPS = tuple(
    _BIZSTEP + step
    for step in (
        "commissioning",
        "encoding",
        "manufacturing",
        "testing",
        "quality_control",
        "packing",
        "shipping",
        "receiving",
        "storing",
        "inventory_check",
        "pricing",
        "displaying",
        "selling",
        "customer_pickup",
    )
)
_DISPOSITIONS = tuple(
    _DISP + disp
    for disp in (
        "in_progress",
        "active",
        "inactive",
        "expired",
        "damaged",
        "inspected",
        "certified",
        "in_transit",
        "owned",
        "consigned",
    )
)
_ACTIONS = ("ADD", "OBSERVE", "DELETE")

_MANUFACTURING_STEPS = (
    _BIZSTEP + "manufacturing",
    _BIZSTEP + "testing",
    _BIZSTEP + "quality_control",
    _BIZSTEP + "commissioning",
    _BIZSTEP + "encoding",
)
_RETAIL_STEPS = (
    (_BIZSTEP + "pricing", _DISP + "active", "OBSERVE"),
    (_BIZSTEP + "displaying", _DISP + "active", "OBSERVE"),
    (_BIZSTEP + "selling", _DISP + "sold", "DELETE"),
    (_BIZSTEP + "customer_pickup", _DISP + "owned", "DELETE"),
)


class EventType(enum.Enum):
    OBJECT_EVENT = "ObjectEvent"
    AGGREGATION_EVENT = "AggregationEvent"
    QUANTITY_EVENT = "QuantityEvent"
    TRANSACTION_EVENT = "TransactionEvent"
    TRANSFORMATION_EVENT = "TransformationEvent"


@dataclass
class BusinessTransaction:
    transaction_type: str
    transaction_id: str


@dataclass
class EpcisEvent:
    uri: str
    event_type: EventType
    event_time: str
    record_time: str
    event_id: str
    action: str
    biz_step: str
    disposition: str
    epc_list: list[str] = field(default_factory=list)
    read_point: str | None = None
    biz_location: str | None = None
    quantity: int | None = None
    business_transaction_list: list[BusinessTransaction] = field(default_factory=list)


@dataclass
class JourneyStep:
    from_location: str
    to_location: str
    event_type: EventType
    biz_step: str
    estimated_duration_hours: int


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _cycle(items: Sequence[_T], index: int, what: str) -> _T:
    if not items:
        raise ValueError(f"No {what} available to generate events")
    return items[index % len(items)]


def _of_type(locations: Sequence[Location], location_type: str) -> list[Location]:
    return [loc for loc in locations if loc.location_type == location_type]


def _first_of_type(locations: Sequence[Location], location_type: str) -> Location:
    for loc in locations:
        if loc.location_type == location_type:
            return loc
    raise ValueError(f"No location of type {location_type} found")


class EventGenerator:
    """Generates EPCIS object events for products moving through locations."""

    business_steps = _BUSINESS_STEPS
    dispositions = _DISPOSITIONS
    actions = _ACTIONS

    def generate_supply_chain_events(
        self,
        products: Sequence[Product],
        locations: Sequence[Location],
        business_entities: Sequence[BusinessEntity],
        count: int,
    ) -> list[EpcisEvent]:
        """Manufacturing, logistics, retail and quality control events, in that order."""
        events = self._manufacturing_events(products, locations, count // 4)
        events += self._logistics_events(products, locations, count // 3)
        events += self._retail_events(products, locations, count // 3)
        events += self._quality_control_events(products, locations, count // 12)
        return events

    def _manufacturing_events(
        self, products: Sequence[Product], locations: Sequence[Location], count: int
    ) -> list[EpcisEvent]:
        factories = _of_type(locations, "Factory")
        if not factories:
            return []
        events = []
        for i in range(count):
            product = _cycle(products, i, "products")
            factory = factories[i % len(factories)]
            event_time = _now() - timedelta(days=count - i)
            events.append(
                EpcisEvent(
                    uri=f"http://example.com/event/manufacturing/{uuid.uuid4()}",
                    event_type=EventType.OBJECT_EVENT,
                    event_time=event_time.isoformat(),
                    record_time=(event_time + timedelta(minutes=5)).isoformat(),
                    event_id=f"MANUF-{i + 1:08}",
                    action="ADD",
                    biz_step=_MANUFACTURING_STEPS[i % 5],
                    disposition=_DISP + "in_progress",
                    epc_list=[product.epc],
                    read_point=f"{factory.uri}/line{i % 10 + 1}",
                    biz_location=factory.uri,
                    quantity=1,
                )
            )
        return events

    def _logistics_events(
        self, products: Sequence[Product], locations: Sequence[Location], count: int
    ) -> list[EpcisEvent]:
        warehouses = _of_type(locations, "Warehouse")
        centres = _of_type(locations, "DistributionCenter")
        events = []
        for i in range(count):
            product = _cycle(products, i, "products")
            event_time = _now() - timedelta(days=count // 2 - i)
            if i % 3 == 0 and warehouses:
                factory = _first_of_type(locations, "Factory")
                warehouse = warehouses[i % len(warehouses)]
                origin, target = factory.uri, warehouse.uri
                biz_step = _BIZSTEP + "shipping"
            elif i % 3 == 1 and centres:
                warehouse = _cycle(warehouses, i, "warehouses")
                centre = centres[i % len(centres)]
                origin, target = warehouse.uri, centre.uri
                biz_step = _BIZSTEP + "transporting"
            else:
                source = (
                    _cycle(centres, i, "distribution centers")
                    if centres
                    else _cycle(warehouses, i, "warehouses")
                )
                retail = _first_of_type(locations, "RetailStore")
                origin, target = source.uri, retail.uri
                biz_step = _BIZSTEP + "receiving"
            events.append(
                EpcisEvent(
                    uri=f"http://example.com/event/logistics/{uuid.uuid4()}",
                    event_type=EventType.OBJECT_EVENT,
                    event_time=event_time.isoformat(),
                    record_time=(event_time + timedelta(minutes=10)).isoformat(),
                    event_id=f"LOGIS-{i + 1:08}",
                    action="OBSERVE",
                    biz_step=biz_step,
                    disposition=_DISP + "in_transit",
                    epc_list=[product.epc],
                    read_point=f"{target}/dock{i % 5 + 1}",
                    biz_location=origin,
                    quantity=1,
                    business_transaction_list=[
                        BusinessTransaction(
                            transaction_type="urn:epcglobal:cbv:btt:po",
                            transaction_id=f"PO-{i + 1:08}",
                        )
                    ],
                )
            )
        return events

    def _retail_events(
        self, products: Sequence[Product], locations: Sequence[Location], count: int
    ) -> list[EpcisEvent]:
        stores = _of_type(locations, "RetailStore")
        if not stores:
            return []
        events = []
        for i in range(count):
            product = _cycle(products, i, "products")
            store = stores[i % len(stores)]
            event_time = _now() - timedelta(days=count // 4 - i)
            biz_step, disposition, action = _RETAIL_STEPS[i % 4]
            transactions = (
                [
                    BusinessTransaction(
                        transaction_type="urn:epcglobal:cbv:btt:inv",
                        transaction_id=f"INV-{i + 1:08}",
                    )
                ]
                if action == "DELETE"
                else []
            )
            events.append(
                EpcisEvent(
                    uri=f"http://example.com/event/retail/{uuid.uuid4()}",
                    event_type=EventType.OBJECT_EVENT,
                    event_time=event_time.isoformat(),
                    record_time=(event_time + timedelta(minutes=2)).isoformat(),
                    event_id=f"RETAIL-{i + 1:08}",
                    action=action,
                    biz_step=biz_step,
                    disposition=disposition,
                    epc_list=[product.epc],
                    read_point=f"{store.uri}/shelf{i % 20 + 1}",
                    biz_location=store.uri,
                    quantity=1,
                    business_transaction_list=transactions,
                )
            )
        return events

    def _quality_control_events(
        self, products: Sequence[Product], locations: Sequence[Location], count: int
    ) -> list[EpcisEvent]:
        events = []
        for i in range(count):
            product = _cycle(products, i, "products")
            location = _cycle(locations, i, "locations")
            event_time = _now() - timedelta(days=count // 6 - i)
            if i % 5 == 0:
                biz_step, disposition = _BIZSTEP + "testing", _DISP + "damaged"
            else:
                biz_step, disposition = _BIZSTEP + "quality_control", _DISP + "certified"
            events.append(
                EpcisEvent(
                    uri=f"http://example.com/event/quality/{uuid.uuid4()}",
                    event_type=EventType.OBJECT_EVENT,
                    event_time=event_time.isoformat(),
                    record_time=(event_time + timedelta(minutes=15)).isoformat(),
                    event_id=f"QUAL-{i + 1:08}",
                    action="OBSERVE",
                    biz_step=biz_step,
                    disposition=disposition,
                    epc_list=[product.epc],
                    read_point=f"{location.uri}/qc{i % 3 + 1}",
                    biz_location=location.uri,
                    quantity=1,
                )
            )
        return events

    def simulate_product_journey(
        self,
        product: Product,
        locations: Sequence[Location],
        journey_steps: int,
    ) -> list[EpcisEvent]:
        """Follow one product from factory to retail store, up to ``journey_steps`` stops."""
        factory = _first_of_type(locations, "Factory")
        warehouse = _first_of_type(locations, "Warehouse")
        centre = next(
            (loc for loc in locations if loc.location_type == "DistributionCenter"),
            warehouse,
        )
        retail = _first_of_type(locations, "RetailStore")
        journey = [
            (factory.uri, _BIZSTEP + "manufacturing"),
            (warehouse.uri, _BIZSTEP + "receiving"),
            (centre.uri, _BIZSTEP + "storing"),
            (retail.uri, _BIZSTEP + "displaying"),
        ]

        current_time = _now() - timedelta(days=30)
        events = []
        for i, (location_uri, biz_step) in enumerate(journey[: max(journey_steps, 0)]):
            current_time += timedelta(hours=i * 24)
            events.append(
                EpcisEvent(
                    uri=f"http://example.com/event/journey/{uuid.uuid4()}",
                    event_type=EventType.OBJECT_EVENT,
                    event_time=current_time.isoformat(),
                    record_time=(current_time + timedelta(minutes=5)).isoformat(),
                    event_id=f"JOURNEY-{i + 1:08}-{journey_steps:02}",
                    action="ADD" if i == 0 else "OBSERVE",
                    biz_step=biz_step,
                    disposition=_DISP + "in_progress",
                    epc_list=[product.epc],
                    read_point=f"{location_uri}/step{i + 1}",
                    biz_location=location_uri,
                    quantity=1,
                )
            )
        return events