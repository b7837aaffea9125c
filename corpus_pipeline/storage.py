import logging
import re
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from .errors import (
    FileReadError,
    ManifestNotFoundError,
    ManifestReadError,
    SourceNotFoundError,
    WriteError,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def run_timestamp(now: Optional[datetime] = None) -> str:
    return (now or datetime.now()).strftime("%Y%m%d_%H%M%S")


def find_text_files(path: PathLike) -> List[Path]:
    """
    Retourne les fichiers à traiter:
    - le fichier lui-même si `path` est un fichier
    - les fichiers (triés, un seul niveau) si `path` est un dossier
    - une liste vide sinon
    """
    p = Path(path)
    if p.is_file():
        return [p]
    if p.is_dir():
        try:
            return sorted(child for child in p.iterdir() if child.is_file())
        except OSError as e:
            logger.error("Impossible de lister %s: %s", p, e)
            return []
    return []


def read_normalized_text(path: PathLike, encoding: str = "utf-8") -> str:
    """Lit le fichier entier et le passe en minuscules."""
    p = Path(path)
    try:
        return p.read_text(encoding=encoding).lower()
    except FileNotFoundError as e:
        raise SourceNotFoundError(p) from e
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(p, e) from e


def read_manifest(path: PathLike, encoding: str = "utf-8") -> List[str]:
    """Liste de chemins PDF, un par ligne; lignes vides ignorées."""
    p = Path(path)
    try:
        content = p.read_text(encoding=encoding)
    except FileNotFoundError as e:
        raise ManifestNotFoundError(p) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestReadError(p, e) from e
    content = content.lstrip("\ufeff")
    return [line.strip() for line in content.split("\n") if line.strip()]


def unique_path(candidate: Path) -> Path:
    """`candidate` s'il est libre, sinon `<stem>_1<suffix>`, `<stem>_2<suffix>`..."""
    if not candidate.exists():
        return candidate
    i = 1
    while True:
        alt = candidate.with_name(f"{candidate.stem}_{i}{candidate.suffix}")
        if not alt.exists():
            return alt
        i += 1


def ensure_run_dir(out_root: Path, prefix: str, timestamp: Optional[str] = None) -> Path:
    run_dir = unique_path(out_root / f"{prefix}_{timestamp or run_timestamp()}")
    try:
        run_dir.mkdir(parents=True, exist_ok=False)
    except OSError as e:
        raise WriteError(run_dir, e) from e
    return run_dir


def derive_output_name(pdf_path: str, parts: int = 5) -> str:
    """
    Nom du fichier texte produit pour un PDF: les `parts` derniers segments du
    chemin joints par `-`, sans l'extension `.pdf`, suffixés par `.txt`.

    ex: `/data/a/b/c/d/rapport.PDF` -> `a-b-c-d-rapport.txt`
    """
    segments = pdf_path.replace("\\", "/").split("/")
    base = "-".join(segments[-parts:])
    base = re.sub(r"\.pdf$", "", base, flags=re.IGNORECASE)
    return f"{base}.txt"
