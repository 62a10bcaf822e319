# The canonical government health warning statement required on all alcohol labels
# (27 CFR Part 16). "GOVERNMENT WARNING" must be in all caps.
HEALTH_WARNING_PREFIX = "GOVERNMENT WARNING:"

HEALTH_WARNING_SECTION_1 = (
    "(1) According to the Surgeon General, women should not drink alcoholic "
    "beverages during pregnancy because of the risk of birth defects."
)

HEALTH_WARNING_SECTION_2 = (
    "(2) Consumption of alcoholic beverages impairs your ability to drive a car "
    "or operate machinery, and may cause health problems."
)

CANONICAL_WARNING = f"{HEALTH_WARNING_PREFIX} {HEALTH_WARNING_SECTION_1} {HEALTH_WARNING_SECTION_2}"
