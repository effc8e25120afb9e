from cityinfo.repositories.base import CityInfoRepository, UpdatePointOfInterestCommand
from cityinfo.repositories.memory import InMemoryCityInfoRepository, InMemoryCityStore
from cityinfo.repositories.sql import SqlAlchemyCityInfoRepository

__all__ = [
    "CityInfoRepository",
    "InMemoryCityInfoRepository",
    "InMemoryCityStore",
    "SqlAlchemyCityInfoRepository",
    "UpdatePointOfInterestCommand",
]
