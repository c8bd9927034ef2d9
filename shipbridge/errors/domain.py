"""Typed domain exceptions for the normalization pipeline.

Builders raise :class:`BuildError` synchronously. Parsers raise
:class:`ParseError` and :class:`CarrierBusinessError` internally and
convert them to ``Failure(ApiFailure)`` at their boundary, so neither
escapes to callers. The rate matcher returns :class:`CannotDetermineRate`
inside a Failure rather than raising it.

Usage:
    # In a parser
    try:
        rates = _build_rates(document, shipment)
    except (ParseError, CarrierBusinessError) as e:
        return Failure(ApiFailure.build(e, request, response))
"""


class ShipBridgeError(Exception):
    """Base exception for all domain errors."""

    error_code = "E-4002"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BuildError(ShipBridgeError):
    """Domain input cannot be mapped to a carrier field."""

    error_code = "E-1001"

    def __init__(
        self,
        message: str,
        field: str | None = None,
        package_id: str | None = None,
        item_id: str | None = None,
    ) -> None:
        location = []
        if package_id is not None:
            location.append(f"package '{package_id}'")
        if item_id is not None:
            location.append(f"item '{item_id}'")
        if location:
            message = f"{message} ({', '.join(location)})"
        super().__init__(message)
        self.field = field
        self.package_id = package_id
        self.item_id = item_id


class UnknownCodeError(BuildError):
    """A domain symbol has no entry in the carrier's code table."""

    error_code = "E-1002"

    def __init__(
        self,
        field: str,
        value: object,
        package_id: str | None = None,
        item_id: str | None = None,
    ) -> None:
        super().__init__(
            f"Unknown {field} '{value}'",
            field=field,
            package_id=package_id,
            item_id=item_id,
        )
        self.value = value


class ParseError(ShipBridgeError):
    """Carrier response could not be read into the expected shape."""

    error_code = "E-2001"


class CarrierBusinessError(ShipBridgeError):
    """Carrier explicitly rejected the request."""

    error_code = "E-3001"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        status: int | None = None,
        error_code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.status = status
        if error_code is not None:
            self.error_code = error_code


class CannotDetermineRate(ShipBridgeError):
    """No carrier rate could be correlated with a package."""

    error_code = "E-4001"

    def __init__(self, shipping_method: str, package_id: str | None = None) -> None:
        message = f"Cannot determine rate for shipping method '{shipping_method}'"
        if package_id is not None:
            message = f"{message} and package '{package_id}'"
        super().__init__(message)
        self.shipping_method = shipping_method
        self.package_id = package_id
