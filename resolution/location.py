"""
Free-text nationality / location parsing.

Knowledge-base rows carry strings such as "British (Birmingham)",
"German" or "Detroit, Michigan, United States"; canonical artists want
city, country and region columns.
"""

import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

UNKNOWN = "Unknown"

_PAREN_CITY = re.compile(r"\(([^)]+)\)")


@dataclass(frozen=True)
class Location:
    city: str
    country: str
    region: str


@dataclass(frozen=True)
class _CountryRule:
    keywords: Tuple[str, ...]
    country: str
    region: str
    # City used when neither the text nor the parentheses name one
    default_city: str
    known_cities: Dict[str, str]


_RULES = (
    _CountryRule(
        ("american", "united states", "usa"), "USA", "North America", "USA",
        {"detroit": "Detroit", "nyc": "New York", "new york": "New York", "chicago": "Chicago",
         "los angeles": "Los Angeles", "la": "Los Angeles"},
    ),
    _CountryRule(
        ("german", "germany"), "Germany", "Europe", "Berlin",
        {"cologne": "Cologne", "köln": "Cologne", "berlin": "Berlin", "frankfurt": "Frankfurt",
         "munich": "Munich", "münchen": "Munich", "hamburg": "Hamburg"},
    ),
    _CountryRule(
        ("british", "uk", "united kingdom"), "UK", "Europe", "UK",
        {"birmingham": "Birmingham", "london": "London", "manchester": "Manchester",
         "cornwall": "Cornwall", "glasgow": "Glasgow", "sheffield": "Sheffield"},
    ),
    _CountryRule(
        ("spanish", "spain"), "Spain", "Europe", "Spain",
        {"madrid": "Madrid", "barcelona": "Barcelona"},
    ),
    _CountryRule(
        ("dutch", "netherlands", "holland"), "Netherlands", "Europe", "Amsterdam",
        {"amsterdam": "Amsterdam", "rotterdam": "Rotterdam"},
    ),
    _CountryRule(("italian", "italy"), "Italy", "Europe", "Italy", {}),
    _CountryRule(("french", "france"), "France", "Europe", "Paris", {"paris": "Paris"}),
    _CountryRule(("georgian", "georgia", "tbilisi"), "Georgia", "Europe", "Tbilisi", {}),
    _CountryRule(("japanese", "japan", "tokyo"), "Japan", "Asia", "Tokyo", {}),
    _CountryRule(
        ("canadian", "canada"), "Canada", "North America", "Canada",
        {"montreal": "Montreal", "toronto": "Toronto"},
    ),
    _CountryRule(
        ("australian", "australia"), "Australia", "Oceania", "Australia",
        {"melbourne": "Melbourne", "sydney": "Sydney"},
    ),
    _CountryRule(("belgian", "belgium"), "Belgium", "Europe", "Brussels", {"brussels": "Brussels"}),
    _CountryRule(("portuguese", "portugal"), "Portugal", "Europe", "Lisbon", {"lisbon": "Lisbon"}),
)


def _matches(rule: _CountryRule, text: str) -> bool:
    # Short keywords ("uk", "usa", "la") must match whole words
    for keyword in rule.keywords:
        if len(keyword) <= 3:
            if re.search(rf"\b{re.escape(keyword)}\b", text):
                return True
        elif keyword in text:
            return True
    return False


def _city_for(rule: _CountryRule, text: str, paren_city: Optional[str]) -> str:
    if paren_city:
        return rule.known_cities.get(paren_city.lower(), paren_city)
    for key, city in rule.known_cities.items():
        if len(key) > 3 and key in text:
            return city
    return rule.default_city


def parse_location(raw: Optional[str]) -> Location:
    """Best-effort city/country/region from a nationality string"""
    if not raw or not raw.strip():
        return Location(UNKNOWN, UNKNOWN, UNKNOWN)

    text = raw.lower()
    paren = _PAREN_CITY.search(raw)
    paren_city = paren.group(1).strip() if paren else None

    if "detroit" in text:
        return Location("Detroit", "USA", "North America")

    # Dual nationality ("British/German"): first one wins
    if "/" in text and not paren_city:
        text = text.split("/", 1)[0].strip()

    for rule in _RULES:
        if _matches(rule, text):
            return Location(_city_for(rule, text, paren_city), rule.country, rule.region)

    return Location(raw.strip(), raw.strip(), UNKNOWN)
