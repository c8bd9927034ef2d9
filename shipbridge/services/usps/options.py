"""Option models for USPS rate requests."""

from pydantic import BaseModel, ConfigDict

from shipbridge.models.physical import Package
from shipbridge.services.usps.codes import DEFAULT_FIRST_CLASS_MAIL_TYPE


class RatePackageOptions(BaseModel):
    """Per-package USPS rate options.

    Attributes:
        box_name: Box the package ships in. None means use the package
            container's box name.
        first_class_mail_type: Mail type rated for First-Class services.
        hold_for_pickup: Rate the hold-for-pickup variant of a service.
        commercial_pricing: Prefer commercial over retail prices.
        service: USPS service to rate ("ALL" for every service).
    """

    model_config = ConfigDict(frozen=True)

    package_id: str | None = None
    box_name: str | None = None
    first_class_mail_type: str | None = DEFAULT_FIRST_CLASS_MAIL_TYPE
    hold_for_pickup: bool = False
    commercial_pricing: bool = False
    service: str = "ALL"
    machinable: bool = True


class RateEstimatesOptions(BaseModel):
    """Options for a USPS RateV4 request."""

    model_config = ConfigDict(frozen=True)

    user_id: str = ""
    package_options: tuple[RatePackageOptions, ...] = ()

    def options_for_package(self, package: Package) -> RatePackageOptions:
        """Options for a package, with the box name resolved.

        Packages without explicit options get the defaults.
        """
        options = next(
            (o for o in self.package_options if o.package_id == package.id),
            RatePackageOptions(package_id=package.id),
        )
        if options.box_name is None:
            options = options.model_copy(update={"box_name": package.container.box_name})
        return options
