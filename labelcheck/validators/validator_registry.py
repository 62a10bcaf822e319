from labelcheck.validators.base_validator import BaseValidator
from labelcheck.validators.malt_validator import MaltValidator
from labelcheck.validators.spirits_validator import SpiritsValidator
from labelcheck.validators.wine_validator import WineValidator

VALIDATOR_REGISTRY: dict[str, BaseValidator] = {
    "distilled_spirits": SpiritsValidator(),
    "wine": WineValidator(),
    "malt_beverage": MaltValidator(),
}

# Short names accepted from forms and API clients.
BEVERAGE_TYPE_ALIASES = {
    "spirits": "distilled_spirits",
    "malt": "malt_beverage",
}


def canonical_beverage_type(name: str) -> str | None:
    """Canonical beverage type for a name or alias, None if unknown."""
    key = name.strip().lower()
    key = BEVERAGE_TYPE_ALIASES.get(key, key)
    return key if key in VALIDATOR_REGISTRY else None


def get_validator(name: str) -> BaseValidator | None:
    beverage_type = canonical_beverage_type(name)
    if beverage_type is None:
        return None
    return VALIDATOR_REGISTRY[beverage_type]


def all_fields() -> list[str]:
    """Ordered union of every beverage type's fields, used when the type is unknown."""
    fields: list[str] = []
    for validator in VALIDATOR_REGISTRY.values():
        for field_name in validator.fields:
            if field_name not in fields:
                fields.append(field_name)
    return fields
