"""Simulated domain availability.

There is no registrar lookup: a few well-known names are always taken and any
other name is available with a probability that grows with its length. The
result is advisory only; choosing a domain for an order does not re-check it.
"""

import random

from django.utils import timezone

TAKEN_DOMAINS = frozenset(
    {
        "google.com",
        "facebook.com",
        "amazon.com",
        "microsoft.com",
        "apple.com",
        "peluqueria.es",
        "salon.com",
        "belleza.es",
        "hair.com",
        "style.es",
        "beauty.com",
    }
)

SUGGESTION_EXTENSIONS = (".com", ".es", ".net", ".org")
MAX_SUGGESTIONS = 8


class DomainAvailabilityChecker:
    def __init__(self, rng=None, taken=TAKEN_DOMAINS):
        self.rng = rng or random.Random()
        self.taken = taken

    def is_available(self, label: str, extension: str) -> bool:
        if f"{label}{extension}" in self.taken:
            return False
        if len(label) <= 3:
            return self.rng.random() > 0.8
        if len(label) <= 5:
            return self.rng.random() > 0.6
        return self.rng.random() > 0.3

    def suggestions(self, label: str, extension: str) -> list:
        variations = [
            f"{label}-salon",
            f"{label}-peluqueria",
            f"{label}-hair",
            f"{label}-beauty",
            f"{label}-style",
            f"salon-{label}",
            f"peluqueria-{label}",
            f"mi-{label}",
            f"{label}-pro",
            f"{label}{timezone.now().year}",
            f"{label}-oficial",
        ]
        out = [f"{v}{ext}" for v in variations for ext in SUGGESTION_EXTENSIONS]
        out += [f"{label}{ext}" for ext in SUGGESTION_EXTENSIONS if ext != extension]
        return out[:MAX_SUGGESTIONS]
