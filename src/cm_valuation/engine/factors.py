"""Narrative factors attached to a prediction.

Descriptive only: the catalogue explains a prediction to the reader and
never feeds back into the score.
"""

from src.cm_common.random_source import RandomSource

FACTOR_CATALOGUE: tuple[str, ...] = (
    "Recent social media engagement trends",
    "Market sentiment analysis",
    "Trading volume patterns",
    "Similar creators performance correlation",
    "Historical price support/resistance levels",
    "Brand partnership announcements",
    "Content release schedule",
    "Fan growth rate",
    "Revenue growth trajectory",
    "Streaming audience retention",
    "Press coverage momentum",
    "Merchandise sales velocity",
    "Tour and live event announcements",
    "Cross-platform follower overlap",
    "Sponsorship renewal cycle",
    "Token holder concentration",
    "Creator posting consistency",
    "Seasonal engagement patterns",
)

MIN_FACTORS = 2
MAX_FACTORS = 4


def draw_factors(rng: RandomSource) -> list[str]:
    """2-4 distinct catalogue entries, sampled without replacement."""
    return rng.sample(FACTOR_CATALOGUE, rng.randint(MIN_FACTORS, MAX_FACTORS))
