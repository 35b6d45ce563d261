"""
Vehicle multiplier storage.

Multipliers are kept in a MongoDB collection (one document per vehicle
type) and edited through the admin endpoints. When MONGODB_URI is not
set, an in-memory store is used instead and every lookup falls through
to the default table.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, MongoClient, ReturnDocument
from pymongo.collection import Collection
from dotenv import load_dotenv

from backend.shared.contracts.vehicle import VehicleRate

load_dotenv()


logger = logging.getLogger(__name__)


class VehicleRateStore(ABC):
    """Read/write access to vehicle multipliers."""

    @abstractmethod
    def get(self, vehicle_type: str) -> Optional[VehicleRate]:
        """Return the stored rate for a vehicle type, or None."""

    @abstractmethod
    def list_all(self) -> List[VehicleRate]:
        """Return every stored rate."""

    @abstractmethod
    def upsert(self, vehicle_type: str, multiplier: float) -> VehicleRate:
        """Create or update the multiplier for a vehicle type."""


class InMemoryVehicleRateStore(VehicleRateStore):
    """Process-local store, empty unless seeded."""

    def __init__(self, rates: Optional[Dict[str, float]] = None):
        self._rates: Dict[str, VehicleRate] = {}
        for vehicle_type, multiplier in (rates or {}).items():
            self.upsert(vehicle_type, multiplier)

    def get(self, vehicle_type: str) -> Optional[VehicleRate]:
        return self._rates.get(vehicle_type)

    def list_all(self) -> List[VehicleRate]:
        return list(self._rates.values())

    def upsert(self, vehicle_type: str, multiplier: float) -> VehicleRate:
        existing = self._rates.get(vehicle_type)
        base_rate = existing.baseRate if existing else 50
        rate = VehicleRate(type=vehicle_type, multiplier=multiplier, baseRate=base_rate)
        self._rates[vehicle_type] = rate
        return rate


class MongoVehicleRateStore(VehicleRateStore):
    """Vehicle multipliers persisted in MongoDB."""

    def __init__(self, uri: Optional[str] = None, db_name: Optional[str] = None):
        uri = uri or os.environ.get("MONGODB_URI")
        if not uri:
            raise ValueError("MONGODB_URI environment variable is required")
        db_name = db_name or os.environ.get("MONGODB_DB", "travel_planner")
        self.client = MongoClient(uri, serverSelectionTimeoutMS=8000)
        self.db = self.client[db_name]
        self.rates: Collection = self.db[
            os.environ.get("VEHICLE_PRICES_COLLECTION", "vehicleprices")
        ]
        self._ensure_indexes()

    def _ensure_indexes(self):
        self.rates.create_index([("type", ASCENDING)], unique=True)

    @staticmethod
    def _to_rate(doc: Dict[str, Any]) -> VehicleRate:
        return VehicleRate.model_validate(doc)

    def get(self, vehicle_type: str) -> Optional[VehicleRate]:
        doc = self.rates.find_one({"type": vehicle_type}, {"_id": 0})
        return self._to_rate(doc) if doc else None

    def list_all(self) -> List[VehicleRate]:
        cur = self.rates.find({}, {"_id": 0}).sort("type", ASCENDING)
        return [self._to_rate(doc) for doc in cur]

    def upsert(self, vehicle_type: str, multiplier: float) -> VehicleRate:
        now = datetime.now(timezone.utc)
        doc = self.rates.find_one_and_update(
            {"type": vehicle_type},
            {
                "$set": {"type": vehicle_type, "multiplier": multiplier, "updatedAt": now},
                "$setOnInsert": {"baseRate": 50, "createdAt": now},
            },
            projection={"_id": 0},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return self._to_rate(doc)


_store: Optional[VehicleRateStore] = None


def get_vehicle_rate_store() -> VehicleRateStore:
    """
    Get or create the shared vehicle rate store.

    Uses MongoDB when MONGODB_URI is set, otherwise an in-memory store.
    """
    global _store
    if _store is None:
        if os.environ.get("MONGODB_URI"):
            _store = MongoVehicleRateStore()
            logger.info("[vehicles] Using MongoDB vehicle rate store")
        else:
            _store = InMemoryVehicleRateStore()
            logger.warning(
                "[vehicles] MONGODB_URI not set, using in-memory vehicle rates "
                "(default multipliers apply)"
            )
    return _store
