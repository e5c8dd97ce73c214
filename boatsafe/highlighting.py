"""
Weather vocabulary highlighting for formatted discussions.

Highlighting is an ordered table of rules. Each rule is a case-insensitive
pattern plus a replacement template; ``apply_rules`` runs them in sequence over
already-wrapped paragraph HTML. A later rule sees the markup inserted by the
earlier ones, so it can match inside it when word boundaries happen to line up.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, List


@dataclass(frozen=True)
class HighlightRule:
    """A single pattern/replacement highlighting rule."""

    name: str
    pattern: str
    template: str
    regex: "re.Pattern[str]" = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "regex", re.compile(self.pattern, re.IGNORECASE))

    def apply(self, markup: str) -> str:
        return self.regex.sub(self.template, markup)


def _words(*terms: str) -> str:
    return r"\b(" + "|".join(terms) + r")\b"


TIME_PERIODS = (
    "TODAY",
    "TONIGHT",
    "TOMORROW",
    "THIS EVENING",
    "THIS MORNING",
    "THIS AFTERNOON",
    "SUNDAY",
    "MONDAY",
    "TUESDAY",
    "WEDNESDAY",
    "THURSDAY",
    "FRIDAY",
    "SATURDAY",
)

WEATHER_SYSTEMS = (
    "LOW PRESSURE",
    "HIGH PRESSURE",
    "FRONT",
    "TROUGH",
    "RIDGE",
    "STORM SYSTEM",
    "WEATHER SYSTEM",
    "CYCLONE",
    "ANTICYCLONE",
)

WEATHER_CONDITIONS = (
    "RAIN",
    "SNOW",
    "THUNDERSTORMS",
    "FOG",
    "WIND",
    "GALE",
    "STORM",
    "CLEAR",
    "CLOUDY",
    "PARTLY CLOUDY",
    "OVERCAST",
    "SHOWERS",
    "DRIZZLE",
    "VISIBILITY",
    "PRECIPITATION",
)

MARINE_CONDITIONS = (
    "SEAS",
    "WAVES",
    "SWELL",
    "CHOPPY",
    "ROUGH",
    "CALM",
    "SURF",
    "BREAKERS",
    "SIGNIFICANT WAVE HEIGHT",
    "COMBINED SEAS",
)

COMPASS_DIRECTIONS = (
    "[NSEW]",
    "NE",
    "NW",
    "SE",
    "SW",
    "NORTH",
    "SOUTH",
    "EAST",
    "WEST",
    "NORTHEAST",
    "NORTHWEST",
    "SOUTHEAST",
    "SOUTHWEST",
)

DEFAULT_RULES: List[HighlightRule] = [
    HighlightRule("time_periods", _words(*TIME_PERIODS), r"<strong>\1</strong>"),
    HighlightRule("weather_systems", _words(*WEATHER_SYSTEMS), r"<strong>\1</strong>"),
    HighlightRule("weather_conditions", _words(*WEATHER_CONDITIONS), r"<em>\1</em>"),
    HighlightRule("marine_conditions", _words(*MARINE_CONDITIONS), r"<em>\1</em>"),
    HighlightRule(
        "wind_directions",
        _words(*COMPASS_DIRECTIONS),
        r'<span class="wind-direction">\1</span>',
    ),
    HighlightRule(
        "measurements",
        r"\b(\d+\s*(?:MPH|KT|KNOTS?|FT|FEET|INCHES?|IN|MILES?|NAUTICAL MILES?))\b",
        r'<span class="weather-measurement">\1</span>',
    ),
    HighlightRule(
        "temperatures",
        r"\b(\d+\s*(?:DEGREES?|°F?|°C?))\b",
        r'<span class="weather-measurement">\1</span>',
    ),
]


def apply_rules(markup: str, rules: Iterable[HighlightRule]) -> str:
    """Apply highlighting rules to markup in order."""
    for rule in rules:
        markup = rule.apply(markup)
    return markup


def highlight(markup: str) -> str:
    """Apply the default weather vocabulary highlighting."""
    return apply_rules(markup, DEFAULT_RULES)
