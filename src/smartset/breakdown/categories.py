"""Canonical classification of free-text element categories.

Extraction models and users label elements with an open vocabulary
("Arredamento/Attrezzeria", "prop", "Oggetti di scena", "Extras", ...).
``classify`` maps any such label onto ``ElementCategory`` once, when the
element is created, so later views never re-derive categories by substring.
"""

from __future__ import annotations

import re

from smartset.models import ElementCategory

# Labels used by the original Italian breakdown sheets
_ALIASES: dict[str, ElementCategory] = {
    "arredamento/attrezzeria": ElementCategory.PROPS,
    "comparse": ElementCategory.BACKGROUND,
    "veicoli": ElementCategory.VEHICLES,
    "effetti speciali (sfx)": ElementCategory.SFX,
    "effetti visivi (vfx)": ElementCategory.VFX,
    "costumi": ElementCategory.WARDROBE,
    "animali": ElementCategory.ANIMALS,
    "sicurezza": ElementCategory.SECURITY,
    "musica": ElementCategory.MUSIC,
    "suono": ElementCategory.SOUND,
    "macchina da presa": ElementCategory.CAMERA,
    "extras": ElementCategory.BACKGROUND,
}

# Checked in order: the first rule with a keyword at a word start wins. More
# specific labels come before the generic ones they overlap with. Keywords are
# regex fragments; short words end in \b so they only match whole words.
_KEYWORD_RULES: list[tuple[ElementCategory, tuple[str, ...]]] = [
    (ElementCategory.VFX, ("vfx", "visual effect", "effetti visivi", "cgi")),
    (
        ElementCategory.SFX,
        ("sfx", "special effect", "effetti speciali", "pyro", "explosion"),
    ),
    (ElementCategory.STUNT, ("stunt", "controfigur")),
    (
        ElementCategory.BACKGROUND,
        ("background", "extra", "compars", "figurazion", "crowd", "folla"),
    ),
    (
        ElementCategory.CAST,
        ("cast", "character", "personagg", "actor", "attor", "attric", "talent"),
    ),
    (
        ElementCategory.SET_DRESSING,
        ("set dressing", "set dress", "arredament", "furniture"),
    ),
    (ElementCategory.PROPS, ("prop", "attrezz", "oggett")),
    (ElementCategory.WARDROBE, ("wardrobe", "costum", "clothing", "abbigliament")),
    (
        ElementCategory.MAKEUP,
        ("makeup", "make-up", "hair", "trucco", "parrucc", "prosthetic"),
    ),
    (
        ElementCategory.VEHICLES,
        (
            "vehicle",
            "veicol",
            r"cars?\b",
            r"autos?\b",
            "automobil",
            r"motos?\b",
            "motorcycle",
        ),
    ),
    (ElementCategory.ANIMALS, ("animal", "livestock", "wrangler")),
    (ElementCategory.GREENERY, ("greenery", "plant", "piant", "verde")),
    (ElementCategory.SECURITY, ("security", "sicurezz", "police", "polizia")),
    (ElementCategory.MUSIC, ("music", "song", "canzon")),
    (ElementCategory.SOUND, ("sound", "suono", "audio")),
    (ElementCategory.CAMERA, ("camera", "macchina da presa", "lens", "drone")),
]

_COMPILED_RULES = [
    (category, re.compile(r"\b(?:" + "|".join(words) + ")"))
    for category, words in _KEYWORD_RULES
]

_BY_VALUE = {category.value.lower(): category for category in ElementCategory}
_BY_NAME = {category.name.lower(): category for category in ElementCategory}


def classify(raw_category: str | None) -> ElementCategory:
    """Map a free-text category label to the closed category enumeration.

    Args:
        raw_category: Label as produced by the model or typed by a user

    Returns:
        The matching category, ``ElementCategory.OTHER`` when nothing matches
    """
    if not raw_category:
        return ElementCategory.OTHER

    text = " ".join(raw_category.strip().lower().split())
    if not text:
        return ElementCategory.OTHER

    exact = (
        _BY_VALUE.get(text)
        or _BY_NAME.get(text.replace(" ", "_"))
        or _ALIASES.get(text)
    )
    if exact:
        return exact

    for category, pattern in _COMPILED_RULES:
        if pattern.search(text):
            return category
    return ElementCategory.OTHER
