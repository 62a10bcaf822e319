from typing import NamedTuple


class ClassTypeCode(NamedTuple):
    code: str
    description: str
    beverage_type: str


# TTB class/type codes used on COLA applications.
CLASS_TYPE_CODES = (
    # Distilled spirits (0-199)
    ClassTypeCode("001", "Neutral Spirits or Alcohol", "distilled_spirits"),
    ClassTypeCode("011", "Vodka", "distilled_spirits"),
    ClassTypeCode("021", "Dry Gin", "distilled_spirits"),
    ClassTypeCode("041", "Blended Whisky", "distilled_spirits"),
    ClassTypeCode("062", "Bourbon Whisky", "distilled_spirits"),
    ClassTypeCode("065", "Rye Whisky", "distilled_spirits"),
    ClassTypeCode("072", "Corn Whisky", "distilled_spirits"),
    ClassTypeCode("081", "Rum", "distilled_spirits"),
    ClassTypeCode("101", "Straight Bourbon Whisky", "distilled_spirits"),
    ClassTypeCode("111", "Brandy", "distilled_spirits"),
    ClassTypeCode("131", "Tequila", "distilled_spirits"),
    ClassTypeCode("141", "Liqueur/Cordial", "distilled_spirits"),
    ClassTypeCode("161", "Scotch Whisky", "distilled_spirits"),
    ClassTypeCode("171", "Irish Whisky", "distilled_spirits"),
    # Wine (200-499)
    ClassTypeCode("201", "Grape Wine — Red", "wine"),
    ClassTypeCode("202", "Grape Wine — White", "wine"),
    ClassTypeCode("203", "Grape Wine — Rosé", "wine"),
    ClassTypeCode("211", "Sparkling Wine", "wine"),
    ClassTypeCode("221", "Champagne", "wine"),
    ClassTypeCode("231", "Dessert Wine", "wine"),
    ClassTypeCode("241", "Fortified Wine", "wine"),
    ClassTypeCode("271", "Sake", "wine"),
    ClassTypeCode("301", "Table Wine", "wine"),
    # Malt beverages (900+)
    ClassTypeCode("901", "Beer", "malt_beverage"),
    ClassTypeCode("902", "Ale", "malt_beverage"),
    ClassTypeCode("903", "Porter", "malt_beverage"),
    ClassTypeCode("904", "Stout", "malt_beverage"),
    ClassTypeCode("911", "Lager", "malt_beverage"),
    ClassTypeCode("921", "Malt Liquor", "malt_beverage"),
    ClassTypeCode("931", "Hard Seltzer", "malt_beverage"),
    ClassTypeCode("941", "Hard Cider", "malt_beverage"),
)

# Designations that show up on labels but are not code-table descriptions
# (American "Whiskey" spelling, style names).
COMMON_CLASS_TYPES = (
    "Kentucky Straight Bourbon Whiskey",
    "Straight Bourbon Whiskey",
    "Bourbon Whiskey",
    "Rye Whiskey",
    "Tennessee Whiskey",
    "Single Malt Whisky",
    "Blended Scotch Whisky",
    "London Dry Gin",
    "Table Wine",
    "Red Wine",
    "White Wine",
    "Sparkling Wine",
    "India Pale Ale",
    "Hard Seltzer",
)


def codes_for_beverage_type(beverage_type: str | None) -> list[ClassTypeCode]:
    """All codes for a beverage type, or every code when the type is unknown."""
    if beverage_type is None:
        return list(CLASS_TYPE_CODES)
    return [code for code in CLASS_TYPE_CODES if code.beverage_type == beverage_type]
