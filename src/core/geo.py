"""Geographic proximity checks - Pure functions.

This module decides whether an alert is close enough to the monitored
point to notify about. All functions are pure with no side effects.

The check is deliberately crude: a square box is built around the alert's
point using a flat 111 km per degree for both latitude and longitude. The
box is not wrapped at the poles or the 180th meridian, so it is only valid
for reference points well away from those boundaries.
"""

from dataclasses import dataclass

from src.core.alert import Alert, LatLong


# Distance from the alert's point to the edge of its box, in kilometres
#
#   |--------| ALERT_DISTANCE_KM
#
#   +-----------------+
#   |                 |
#   |                 |
#   |        X        |
#   |                 |
#   |                 |
#   +-----------------+
ALERT_DISTANCE_KM = 30.0

# 0.1 degrees is roughly 11.1 km
KM_PER_DEGREE = 111.0


@dataclass(frozen=True)
class BoundingBox:
    """Geographic bounding box.

    Bounds are half-open: the minimum is inside the box, the maximum is not.

    Attributes:
        min_latitude: Southern boundary
        max_latitude: Northern boundary
        min_longitude: Western boundary
        max_longitude: Eastern boundary
    """
    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float

    @classmethod
    def around(cls, center: LatLong, half_width: float) -> "BoundingBox":
        """Build a square box of +/- half_width degrees around center."""
        latitude, longitude = center
        return cls(
            min_latitude=latitude - half_width,
            max_latitude=latitude + half_width,
            min_longitude=longitude - half_width,
            max_longitude=longitude + half_width,
        )

    def contains(self, latitude: float, longitude: float) -> bool:
        """Check if a point is within this bounding box."""
        return (
            self.min_latitude <= latitude < self.max_latitude
            and self.min_longitude <= longitude < self.max_longitude
        )

    def crosses_boundary(self) -> bool:
        """Check if the box reaches past a pole or the 180th meridian."""
        return (
            self.min_latitude < -90
            or self.max_latitude > 90
            or self.min_longitude < -180
            or self.max_longitude > 180
        )


def degrees_for_distance(distance_km: float) -> float:
    """Convert a distance to degrees using the flat approximation.

    Pure function.
    """
    return distance_km / KM_PER_DEGREE


def is_near(
    reference: LatLong,
    point: LatLong,
    alert_distance_km: float = ALERT_DISTANCE_KM,
) -> bool:
    """Check if reference lies inside the box around point.

    Pure function.

    Args:
        reference: The monitored (latitude, longitude)
        point: The alert's (latitude, longitude)
        alert_distance_km: Half-width of the box in kilometres

    Returns:
        True if reference is within the box
    """
    box = BoundingBox.around(point, degrees_for_distance(alert_distance_km))
    return box.contains(*reference)


def alert_is_near(
    alert: Alert,
    reference: LatLong,
    alert_distance_km: float = ALERT_DISTANCE_KM,
) -> bool:
    """Check if an alert is near the reference point.

    Pure function. An alert without a location is always near, so that an
    alert is never dropped just because the feed left out its point.
    """
    if alert.point is None:
        return True
    return is_near(reference, alert.point, alert_distance_km)


def filter_nearby(
    alerts: list[Alert],
    reference: LatLong,
    alert_distance_km: float = ALERT_DISTANCE_KM,
) -> list[Alert]:
    """Filter alerts to those near the reference point.

    Pure function. Preserves the order of alerts.
    """
    return [a for a in alerts if alert_is_near(a, reference, alert_distance_km)]
