"""Library exceptions."""

from __future__ import annotations


class PyParkingZonesError(Exception):
    """Base exception for the library."""

    error_type = "unknown"
    default_error_code: str | None = None

    def __init__(
        self,
        message: str | None = None,
        *,
        error_code: str | None = None,
        detail: str | None = None,
        user_message: str | None = None,
    ) -> None:
        text = message if message is not None else detail
        if text is None:
            super().__init__()
        else:
            super().__init__(text)
        self.error_code = error_code or self.default_error_code
        self.detail = detail if detail is not None else message
        self.user_message = user_message


class ValidationError(PyParkingZonesError):
    """Raised when inputs fail validation."""

    error_type = "validation"
    default_error_code = "validation_error"


class NetworkError(PyParkingZonesError):
    """Raised when network communication fails."""

    error_type = "network"
    default_error_code = "network_error"


class ServiceError(PyParkingZonesError):
    """Raised when an upstream HTTP service answers with an error."""

    error_type = "service"
    default_error_code = "service_error"

    def __init__(self, message: str | None = None, *, status: int | None = None, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.status = status


class PositioningError(PyParkingZonesError):
    """Base class for failures to obtain the current position."""

    error_type = "positioning"


class PositioningUnavailableError(PositioningError):
    """Raised when positioning services are disabled on the platform."""

    default_error_code = "positioning_unavailable"


class PositioningPermissionDeniedError(PositioningError):
    """Raised when positioning authorization is denied or restricted."""

    default_error_code = "positioning_permission_denied"


class PositioningUndeterminedError(PositioningError):
    """Raised when the user has not decided on positioning authorization yet."""

    default_error_code = "positioning_undetermined"


class PositionUnobtainableError(PositioningError):
    """Raised when no position fix could be acquired."""

    default_error_code = "position_unobtainable"


class GeocodingError(PyParkingZonesError):
    """Base class for reverse-geocoding failures."""

    error_type = "geocoding"


class GeocodingProviderError(GeocodingError):
    """Raised when the geocoding provider itself fails."""

    default_error_code = "geocoding_provider_error"

    def __init__(
        self,
        message: str | None = None,
        *,
        cause: BaseException | None = None,
        **kwargs,
    ) -> None:
        super().__init__(message, **kwargs)
        self.cause = cause


class StreetNotFoundError(GeocodingError):
    """Raised when geocoding succeeded but yielded no usable street."""

    default_error_code = "street_not_found"


class CatalogError(PyParkingZonesError):
    """Raised when a zone catalog cannot be loaded or is inconsistent."""

    error_type = "catalog"
    default_error_code = "catalog_error"
