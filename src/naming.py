"""
Identifier case and inflection helpers used by the code generators
"""

import re
from typing import List

_IRREGULAR_PLURALS = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
    "mouse": "mice",
}
_IRREGULAR_SINGULARS = {plural: singular for singular, plural in _IRREGULAR_PLURALS.items()}


def _words(value: str) -> List[str]:
    value = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", value)
    value = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1 \2", value)
    return [w for w in re.split(r"[^A-Za-z0-9]+", value) if w]


def studly(value: str) -> str:
    return "".join(w[:1].upper() + w[1:] for w in _words(value))


def camel(value: str) -> str:
    result = studly(value)
    return result[:1].lower() + result[1:]


def snake(value: str) -> str:
    return "_".join(w.lower() for w in _words(value))


def kebab(value: str) -> str:
    return "-".join(w.lower() for w in _words(value))


def plural(word: str) -> str:
    lower = word.lower()
    if lower in _IRREGULAR_PLURALS:
        return _match_case(word, _IRREGULAR_PLURALS[lower])
    if re.search(r"[^aeiou]y$", lower):
        return word[:-1] + "ies"
    if re.search(r"(s|x|z|ch|sh)$", lower):
        return word + "es"
    return word + "s"


def singular(word: str) -> str:
    lower = word.lower()
    if lower in _IRREGULAR_SINGULARS:
        return _match_case(word, _IRREGULAR_SINGULARS[lower])
    if lower.endswith("ies") and len(word) > 3:
        return word[:-3] + "y"
    if re.search(r"(s|x|z|ch|sh)es$", lower):
        return word[:-2]
    if lower.endswith("s") and not lower.endswith(("ss", "us")):
        return word[:-1]
    return word


def ensure_suffix(name: str, suffix: str) -> str:
    return name if name.endswith(suffix) else name + suffix


def _match_case(original: str, replacement: str) -> str:
    if original[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement
