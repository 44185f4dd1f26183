# local_careers/geo.py
import math
from typing import Any, Dict, List, Sequence, Tuple, TypeVar

from local_careers.models import Job, JobLocation
from local_careers.utils import parse_finite

EARTH_RADIUS_MILES = 3958.8
DEFAULT_LOCATION_LABEL = "Job location"

J = TypeVar("J", bound=Job)


def distance_in_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance (haversine)."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def filter_by_radius(jobs: Sequence[J], lat: Any = None, lng: Any = None, radius: Any = None) -> List[J]:
    """
    Keep jobs within ``radius`` miles of (lat, lng), boundary included.
    If any of the three is missing or not a finite number the collection is
    returned unfiltered.
    """
    c_lat, c_lng, r = parse_finite(lat), parse_finite(lng), parse_finite(radius)
    if c_lat is None or c_lng is None or r is None:
        return list(jobs)

    return [j for j in jobs if distance_in_miles(c_lat, c_lng, j.latitude, j.longitude) <= r]


def group_by_location(jobs: Sequence[Job]) -> List[JobLocation]:
    groups: Dict[Tuple[float, float, str], JobLocation] = {}
    for job in jobs:
        key = (job.latitude, job.longitude, job.address or "")
        loc = groups.get(key)
        if loc is None:
            loc = groups[key] = JobLocation(
                label=job.address or DEFAULT_LOCATION_LABEL,
                latitude=job.latitude,
                longitude=job.longitude,
            )
        loc.jobs.append(job)
    return list(groups.values())
