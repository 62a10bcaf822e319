"""Rule registry — the ordered search cascade used when expected values are known.

Rules are registered here by ID so the classifier can walk them in order
and log which one matched. Order matters: strict rules come first, and
the first rule that returns a SearchHit decides the field.
"""

from labelcheck.rules.text_search_rules import (
    ampersand_substring,
    collapsed_space_substring,
    exact_substring,
    fuzzy_window,
    fuzzy_window_ampersand,
    punctuation_stripped_collapsed_substring,
    punctuation_stripped_substring,
    token_overlap,
)

# Maps rule ID strings to their implementation functions.
# Each function takes a SearchContext and returns None (miss) or a SearchHit.
SEARCH_CASCADE: dict[str, callable] = {
    "EXACT_SUBSTRING": exact_substring,
    "AMPERSAND_SUBSTRING": ampersand_substring,
    "COLLAPSED_SPACE_SUBSTRING": collapsed_space_substring,
    "PUNCTUATION_STRIPPED_SUBSTRING": punctuation_stripped_substring,
    "PUNCTUATION_STRIPPED_COLLAPSED_SUBSTRING": punctuation_stripped_collapsed_substring,
    "FUZZY_WINDOW": fuzzy_window,
    "FUZZY_WINDOW_AMPERSAND": fuzzy_window_ampersand,
    "TOKEN_OVERLAP": token_overlap,
}
