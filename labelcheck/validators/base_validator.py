"""Base validator — field vocabulary and the label-level status decision.

Beverage-specific validators inherit from this and declare which fields
their labels must (mandatory) or may (optional) carry, plus the container
sizes allowed by the standards of fill. The base class turns per-field
comparison statuses into one overall status for the label.
"""

from labelcheck.models.schemas import OverallStatus

# Mismatches here are cosmetic: the label is approved on condition of a fix.
MINOR_DISCREPANCY_FIELDS = frozenset({
    "brand_name",
    "fanciful_name",
    "appellation_of_origin",
    "grape_varietal",
})

# A mismatch or missing value here rejects the label outright.
REJECTION_FIELDS = frozenset({"health_warning"})

CONDITIONAL_DEADLINE_DAYS = 7
CORRECTION_DEADLINE_DAYS = 30


class BaseValidator:
    """Base class for beverage-specific validators.

    Subclasses override the class attributes below.
    """

    beverage_type: str = ""
    mandatory_fields: tuple[str, ...] = ()
    optional_fields: tuple[str, ...] = ()

    # None means any container size is allowed.
    valid_sizes_ml: tuple[int, ...] | None = None

    @property
    def fields(self) -> list[str]:
        """Mandatory fields first, then optional, in declaration order."""
        return [*self.mandatory_fields, *self.optional_fields]

    def is_valid_size(self, size_ml: int) -> bool:
        if self.valid_sizes_ml is None:
            return True
        return size_ml in self.valid_sizes_ml

    def determine_overall_status(
        self,
        item_statuses: list[tuple[str, str]],
        container_size_ml: int | None = None,
    ) -> OverallStatus:
        """Combine (field_name, status) pairs into the label's overall status.

        Steps:
          1. Container size not allowed for this beverage type -> rejected
          2. health_warning mismatched or missing -> rejected
          3. Mandatory field missing, or substantive mismatch -> needs_correction (30 days)
          4. Mismatch on a minor or optional field -> conditionally_approved (7 days)
          5. Otherwise -> approved

        Optional fields that were simply not found do not count against the label.
        """
        if container_size_ml is not None and not self.is_valid_size(container_size_ml):
            return OverallStatus(status="rejected", deadline_days=None)

        mandatory = set(self.mandatory_fields)
        has_rejection = False
        has_substantive_mismatch = False
        has_minor_discrepancy = False

        for field_name, status in item_statuses:
            if status == "match":
                continue

            is_mandatory = field_name in mandatory

            if status == "not_found":
                if not is_mandatory:
                    continue
                if field_name in REJECTION_FIELDS:
                    has_rejection = True
                else:
                    has_substantive_mismatch = True
                continue

            if field_name in REJECTION_FIELDS:
                has_rejection = True
            elif field_name in MINOR_DISCREPANCY_FIELDS:
                has_minor_discrepancy = True
            elif is_mandatory:
                has_substantive_mismatch = True
            else:
                has_minor_discrepancy = True

        if has_rejection:
            return OverallStatus(status="rejected", deadline_days=None)
        if has_substantive_mismatch:
            return OverallStatus(status="needs_correction", deadline_days=CORRECTION_DEADLINE_DAYS)
        if has_minor_discrepancy:
            return OverallStatus(status="conditionally_approved", deadline_days=CONDITIONAL_DEADLINE_DAYS)
        return OverallStatus(status="approved", deadline_days=None)
