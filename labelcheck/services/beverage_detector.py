"""Beverage type detection from label text, for submissions that do not state one."""

import re

BEVERAGE_TYPE_KEYWORDS: dict[str, tuple[str, ...]] = {
    "distilled_spirits": (
        "whiskey", "whisky", "bourbon", "vodka", "gin", "rum", "tequila",
        "mezcal", "brandy", "cognac", "scotch", "proof", "distilled by",
        "distilled from", "blended whiskey", "straight bourbon", "single malt",
        "rye whiskey", "corn whiskey", "liqueur", "cordial", "absinthe",
        "schnapps", "grappa", "pisco", "soju", "shochu", "baijiu", "aquavit",
        "moonshine",
    ),
    "wine": (
        "wine", "cabernet", "chardonnay", "merlot", "pinot", "sauvignon",
        "riesling", "zinfandel", "syrah", "shiraz", "malbec", "tempranillo",
        "sangiovese", "moscato", "prosecco", "champagne", "vintage", "sulfites",
        "contains sulfites", "appellation", "vineyard", "estate bottled",
        "vinted by", "cellared by", "produced and bottled", "viognier",
        "gewurztraminer", "grenache", "rosé", "rose", "sparkling", "varietal",
        "cuvée", "cuvee", "sommelier", "terroir",
    ),
    "malt_beverage": (
        "ale", "lager", "beer", "stout", "ipa", "porter", "pilsner",
        "brewed by", "brewed with", "brewing", "brewery", "craft beer",
        "wheat beer", "hefeweizen", "pale ale", "amber ale", "brown ale",
        "sour ale", "session ale", "double ipa", "imperial stout",
        "hard seltzer", "hard cider", "malt liquor", "malt beverage",
        "flavored malt", "hops", "barley", "saison", "gose", "kölsch",
        "kolsch", "bock", "dunkel", "märzen", "marzen",
    ),
}


def count_keyword_hits(text: str) -> dict[str, int]:
    """Keyword hits per beverage type.

    Keywords match whole words only, so "gin" does not fire on "origin"
    and "ale" does not fire on "sale".
    """
    lower = text.lower()
    return {
        beverage_type: sum(
            1 for keyword in keywords
            if re.search(rf"(?<!\w){re.escape(keyword)}(?!\w)", lower)
        )
        for beverage_type, keywords in BEVERAGE_TYPE_KEYWORDS.items()
    }


def detect_beverage_type_from_text(text: str) -> str | None:
    """The beverage type with the most keyword hits.

    Returns None when nothing matched or when the top two types tie.
    """
    ranked = sorted(count_keyword_hits(text).items(), key=lambda item: item[1], reverse=True)
    (winner, winner_hits), (_, runner_up_hits) = ranked[0], ranked[1]

    if winner_hits == 0 or winner_hits <= runner_up_hits:
        return None
    return winner
