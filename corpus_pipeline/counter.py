import re
from functools import lru_cache
from typing import Dict, Iterable

from .errors import EmptyTermError
from .types import TermGroup

# \w plus `+`, qui prolonge un mot technique (c++)
_WORD_CHARS = r"\w+"
# Ponctuation fermante absorbée après un terme
_TRAILING_PUNCT = r"""[.,!?:;"')\]}]*"""


@lru_cache(maxsize=4096)
def build_term_pattern(term: str) -> "re.Pattern[str]":
    """
    Motif "mot entier" pour un terme littéral.

    Le terme est mis en minuscules puis échappé: `c++` est cherché tel quel.
    Aucun caractère de mot ne doit toucher le terme, à gauche comme à droite;
    la ponctuation fermante qui suit est absorbée dans la correspondance.
    """
    term = term.lower()
    if not term:
        raise EmptyTermError(term)
    return re.compile(
        rf"(?<![{_WORD_CHARS}]){re.escape(term)}(?![{_WORD_CHARS}]){_TRAILING_PUNCT}"
    )


def count_term(text: str, term: str) -> int:
    """Nombre de correspondances (sans chevauchement) du terme dans tout le texte."""
    return sum(1 for _ in build_term_pattern(term).finditer(text))


def count_occurrences(text: str, groups: Iterable[TermGroup]) -> Dict[str, int]:
    """
    Compte, pour chaque groupe, les occurrences de chacune de ses alternatives.

    `text` doit déjà être en minuscules. Un groupe est un OU logique mais les
    comptes s'additionnent: chaque alternative est cherchée indépendamment, sans
    dédoublonnage entre alternatives.
    """
    results: Dict[str, int] = {}
    for group in groups:
        results[group.label] = sum(count_term(text, term) for term in group.alternatives)
    return results
