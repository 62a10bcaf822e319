"""Distilled spirits validator.

Alcohol content is mandatory for spirits labels, and containers must
match one of the authorized standards of fill.
"""

from labelcheck.validators.base_validator import BaseValidator


class SpiritsValidator(BaseValidator):
    beverage_type = "distilled_spirits"

    mandatory_fields = (
        "brand_name",
        "class_type",
        "alcohol_content",
        "net_contents",
        "health_warning",
        "name_and_address",
        "qualifying_phrase",
    )

    optional_fields = (
        "fanciful_name",
        "country_of_origin",
        "age_statement",
        "state_of_distillation",
        "standards_of_fill",
    )

    valid_sizes_ml = (
        50, 100, 187, 200, 250, 331, 350, 355, 375, 475, 500, 570, 700, 710, 720,
        750, 900, 945, 1000, 1500, 1750, 1800, 2000, 3000, 3750,
    )
