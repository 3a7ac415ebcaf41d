"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field
from pathlib import Path

from src.core.alert import LatLong
from src.core.formatter import ALERT_PAGE_URL
from src.core.geo import ALERT_DISTANCE_KM, BoundingBox, degrees_for_distance


# NOTE: This URL redirects to the actual feed (an S3 object)
FEED_URL = "https://www.qfes.qld.gov.au/data/alerts/bushfireAlert.xml"

# Poll the feed every 5 minutes
POLL_INTERVAL_SECONDS = 5 * 60

DEFAULT_HTTP_ADDRESS = "0.0.0.0"
DEFAULT_HTTP_PORT = 8888


@dataclass(frozen=True)
class Config:
    """Application configuration.

    Built once at startup and never mutated.

    Attributes:
        webhook_url: Chat webhook that receives notifications
        data_path: File recording already-notified alert IDs
        reference_point: (latitude, longitude) being monitored
        alert_distance_km: How far from an alert the point may be
        poll_interval_seconds: How often to poll the feed
        feed_url: Alert feed URL
        alert_page_url: Link included in every notification
        slash_token: Token expected on slash command requests (None disables)
        http_address: Address the HTTP server binds to
        http_port: Port the HTTP server binds to
        revision: Deployed revision shown on the home page
    """
    webhook_url: str
    data_path: Path
    reference_point: LatLong
    alert_distance_km: float = ALERT_DISTANCE_KM
    poll_interval_seconds: int = POLL_INTERVAL_SECONDS
    feed_url: str = FEED_URL
    alert_page_url: str = ALERT_PAGE_URL
    slash_token: str | None = None
    http_address: str = DEFAULT_HTTP_ADDRESS
    http_port: int = DEFAULT_HTTP_PORT
    revision: str = "dev"


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_coordinates(lat: float, lon: float, field_name: str) -> list[ValidationError]:
    """Validate latitude/longitude coordinates.

    Pure function.

    Args:
        lat: Latitude value
        lon: Longitude value
        field_name: Name of the field for error messages

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not -90 <= lat <= 90:
        errors.append(ValidationError(
            field=field_name,
            message=f"Latitude {lat} out of range [-90, 90]",
        ))

    if not -180 <= lon <= 180:
        errors.append(ValidationError(
            field=field_name,
            message=f"Longitude {lon} out of range [-180, 180]",
        ))

    return errors


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    latitude, longitude = config.reference_point
    errors.extend(validate_coordinates(latitude, longitude, "reference_point"))

    if config.alert_distance_km <= 0:
        errors.append(ValidationError(
            field="alert_distance_km",
            message=f"Alert distance must be positive, got {config.alert_distance_km}",
        ))
    else:
        # The proximity box doesn't wrap, so alerts on the far side of a
        # pole or the 180th meridian are never matched.
        box = BoundingBox.around(
            config.reference_point,
            degrees_for_distance(config.alert_distance_km),
        )
        if box.crosses_boundary():
            errors.append(ValidationError(
                field="reference_point",
                message=(
                    "Alert area crosses a pole or the 180th meridian; "
                    "alerts beyond it will not be matched"
                ),
                severity="warning",
            ))

    if config.poll_interval_seconds <= 0:
        errors.append(ValidationError(
            field="poll_interval_seconds",
            message=f"Poll interval must be positive, got {config.poll_interval_seconds}",
        ))

    if not config.webhook_url or config.webhook_url.startswith("${"):
        errors.append(ValidationError(
            field="webhook_url",
            message="Webhook URL not resolved (still contains placeholder)",
        ))

    if config.slash_token is None:
        errors.append(ValidationError(
            field="slash_token",
            message="No slash command token set; slash commands will be rejected",
            severity="warning",
        ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
