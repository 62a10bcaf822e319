# Qualifying phrases that precede the bottler/producer name and address on a
# label (27 CFR 5.66, 4.35, 7.66). Compound phrases must stay in the list
# alongside their single forms; lookups search longest first.
QUALIFYING_PHRASES = (
    "Bottled by",
    "Packed by",
    "Distilled by",
    "Blended by",
    "Produced by",
    "Prepared by",
    "Made by",
    "Manufactured by",
    "Imported by",
    "Brewed by",
    "Cellared and Bottled by",
    "Vinted and Bottled by",
    "Prepared and Bottled by",
    "Produced and Bottled by",
    "Distilled and Bottled by",
    "Imported and Bottled by",
    "Brewed and Bottled by",
    "Estate Bottled",
)


def phrases_longest_first() -> list[str]:
    return sorted(QUALIFYING_PHRASES, key=len, reverse=True)
