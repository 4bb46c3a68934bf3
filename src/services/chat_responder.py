"""Keyword-based grow assistant replies."""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class ResponseRule:
    keywords: tuple[str, ...]
    response: str

    def matches(self, text: str) -> bool:
        return any(keyword in text for keyword in self.keywords)


DEFAULT_RULES: tuple[ResponseRule, ...] = (
    ResponseRule(
        (" ph ", "acidity"),
        "Keep hydro and coco runoff between 5.8 and 6.2; soil does best around 6.3 to 6.8. "
        "Calibrate your pen before adjusting.",
    ),
    ResponseRule(
        ("ppm", " ec ", "nutrient", "feed"),
        "Seedlings want roughly 300-500 ppm, veg 600-900 ppm and peak flower 900-1200 ppm "
        "(500 scale). Raise feed in small steps and watch the leaf tips.",
    ),
    ResponseRule(
        ("yellow", "chlorosis"),
        "Lower-leaf yellowing usually points to nitrogen; new growth yellowing points to iron "
        "or a pH lockout. Check root-zone pH first.",
    ),
    ResponseRule(
        ("humidity", "vpd", " rh "),
        "Target a VPD of 0.8-1.2 kPa in veg and 1.2-1.5 kPa in flower; drop RH below 50% "
        "in late flower to protect against bud rot.",
    ),
    ResponseRule(
        ("mold", "mildew", " pm ", "botrytis"),
        "Isolate affected plants, increase airflow, lower humidity and remove infected tissue. "
        "Log the room in your IPM checklist.",
    ),
    ResponseRule(
        ("pest", "mite", "gnat", "thrip", "aphid"),
        "Scout leaf undersides with a loupe, put up sticky cards and start your IPM rotation; "
        "let the top inch of media dry out to break the gnat cycle.",
    ),
    ResponseRule(
        ("light", "ppfd", "dli"),
        "Aim for 400-600 PPFD in veg and 800-1000 PPFD in flower without added CO2. "
        "Raise the fixture if the canopy shows bleaching.",
    ),
    ResponseRule(
        ("temp", "heat", "cold"),
        "Keep lights-on temperatures at 24-28 C and lights-off no more than 5 C lower.",
    ),
    ResponseRule(
        ("harvest", "trichome", "flush"),
        "Check trichomes under magnification: mostly cloudy with some amber is the usual "
        "harvest window.",
    ),
)

_NON_WORD = re.compile(r"[^a-z0-9]+")

FALLBACK_RESPONSE = (
    "Thanks, logged. Share the room, stage, feed ppm and pH readings and I can give a "
    "more specific recommendation."
)


class ChatResponder:
    def __init__(self, rules: tuple[ResponseRule, ...] = DEFAULT_RULES) -> None:
        self._rules = rules

    def respond(self, message: str) -> str:
        text = " " + _NON_WORD.sub(" ", message.lower()) + " "
        for rule in self._rules:
            if rule.matches(text):
                return rule.response
        return FALLBACK_RESPONSE


__all__ = ["ChatResponder", "DEFAULT_RULES", "FALLBACK_RESPONSE", "ResponseRule"]
