# Importing both models registers them (and their relationship) on Base.metadata
from cityinfo.models.city import City
from cityinfo.models.point_of_interest import PointOfInterest

__all__ = ["City", "PointOfInterest"]
