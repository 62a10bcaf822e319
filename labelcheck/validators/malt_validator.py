"""Malt beverage validator.

Alcohol content is optional on malt beverage labels, and there is no
standard of fill: any container size is accepted.
"""

from labelcheck.validators.base_validator import BaseValidator


class MaltValidator(BaseValidator):
    beverage_type = "malt_beverage"

    mandatory_fields = (
        "brand_name",
        "class_type",
        "net_contents",
        "health_warning",
        "name_and_address",
        "qualifying_phrase",
    )

    optional_fields = (
        "fanciful_name",
        "alcohol_content",
        "country_of_origin",
        "standards_of_fill",
    )
