"""Wine validator.

Wine labels also need the grape varietal, appellation of origin and the
sulfite declaration.
"""

from labelcheck.validators.base_validator import BaseValidator


class WineValidator(BaseValidator):
    beverage_type = "wine"

    mandatory_fields = (
        "brand_name",
        "class_type",
        "alcohol_content",
        "net_contents",
        "health_warning",
        "name_and_address",
        "qualifying_phrase",
        "grape_varietal",
        "appellation_of_origin",
        "sulfite_declaration",
    )

    optional_fields = (
        "fanciful_name",
        "country_of_origin",
        "vintage_year",
        "standards_of_fill",
    )

    valid_sizes_ml = (
        180, 187, 200, 250, 300, 330, 360, 375, 473, 500, 550, 568, 600, 620, 700,
        720, 750, 1000, 1500, 1800, 2250, 3000,
    )
