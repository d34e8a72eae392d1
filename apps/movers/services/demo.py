"""
Fixed demo dataset for the PPT revision.

Substituted whenever live data is unavailable (no key, every window/path
exhausted, malformed payloads) so the frontend never renders an empty board.
Records use the PPT shape and go through the same normalizer as live data.
"""

from typing import List

from .integrations.pokemon_price_tracker.adapter import parse_cards
from .models import NormalizedCard

DEMO_RECORDS = [
    {"id": "demo-sv3-125", "name": "Charizard ex", "setName": "Obsidian Flames",
     "setCode": "sv3", "cardNumber": "125", "prices": {"market": 62.40}, "previousPrice": 48.00},
    {"id": "demo-sv3pt5-199", "name": "Charizard ex", "setName": "151",
     "setCode": "sv3pt5", "cardNumber": "199", "prices": {"market": 118.00}, "previousPrice": 131.10},
    {"id": "demo-swsh7-215", "name": "Umbreon VMAX", "setName": "Evolving Skies",
     "setCode": "swsh7", "cardNumber": "215", "prices": {"market": 1185.00}, "previousPrice": 1020.00},
    {"id": "demo-sv4pt5-232", "name": "Mew ex", "setName": "Paldean Fates",
     "setCode": "sv4pt5", "cardNumber": "232", "prices": {"market": 14.25}, "previousPrice": 19.00},
    {"id": "demo-sv2-254", "name": "Iono", "setName": "Paldea Evolved",
     "setCode": "sv2", "cardNumber": "254", "prices": {"market": 71.80}, "previousPrice": 60.50},
    {"id": "demo-swsh12pt5-160", "name": "Pikachu VMAX", "setName": "Crown Zenith",
     "setCode": "swsh12pt5", "cardNumber": "160", "prices": {"market": 9.10}, "previousPrice": 7.00},
    {"id": "demo-sv1-245", "name": "Miraidon ex", "setName": "Scarlet & Violet",
     "setCode": "sv1", "cardNumber": "245", "prices": {"market": 22.60}, "previousPrice": 24.10},
    {"id": "demo-base1-4", "name": "Charizard", "setName": "Base",
     "setCode": "base1", "cardNumber": "4", "prices": {"market": 365.00}, "previousPrice": 352.00},
]


def demo_cards() -> List[NormalizedCard]:
    return parse_cards({"data": DEMO_RECORDS})
