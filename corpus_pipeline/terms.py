import logging
from collections import Counter
from pathlib import Path
from typing import List, Union

from .errors import EmptyTermError, TermsFileNotFoundError, TermsReadError
from .types import TermGroup

logger = logging.getLogger(__name__)

TERM_SEPARATOR = "/"


def parse_term_groups(content: str) -> List[TermGroup]:
    """
    Transforme le contenu d'un fichier de termes en groupes ordonnés.

    Une ligne non vide = un groupe. La ligne (sans espaces autour) sert de label
    et de nom de colonne CSV; ses alternatives sont séparées par `/`.
    Les lignes identiques donnent des groupes identiques (pas de dédoublonnage).
    """
    groups: List[TermGroup] = []
    # BOM UTF-8 éventuel (fichiers enregistrés sous Windows)
    content = content.lstrip("\ufeff")
    for line_no, raw in enumerate(content.split("\n"), start=1):
        line = raw.strip()
        if not line:
            continue
        terms = tuple(term.strip() for term in line.split(TERM_SEPARATOR))
        if any(not term for term in terms):
            raise EmptyTermError(line, line_no)
        groups.append(TermGroup(label=line, alternatives=terms))

    duplicates = [label for label, n in Counter(g.label for g in groups).items() if n > 1]
    if duplicates:
        logger.warning("Groupes en double (colonnes CSV dupliquées): %s", ", ".join(duplicates))
    return groups


def load_term_groups(path: Union[str, Path], encoding: str = "utf-8") -> List[TermGroup]:
    p = Path(path)
    try:
        content = p.read_text(encoding=encoding)
    except FileNotFoundError as e:
        raise TermsFileNotFoundError(p) from e
    except (OSError, UnicodeDecodeError) as e:
        raise TermsReadError(p, e) from e

    groups = parse_term_groups(content)
    logger.info("%d groupe(s) de termes chargé(s) depuis %s", len(groups), p)
    return groups
