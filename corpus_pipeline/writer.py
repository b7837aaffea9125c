import csv
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .errors import WriteError
from .storage import run_timestamp, unique_path
from .types import FileResult, TermGroup


def write_results_csv(
    out_dir: Path,
    results: Iterable[FileResult],
    groups: List[TermGroup],
    timestamp: Optional[str] = None,
) -> Path:
    """
    Écrit `search_results_<horodatage>.csv` dans `out_dir`.

    En-tête: `Filename` puis un label par groupe, dans l'ordre du fichier de
    termes. Une ligne par fichier traité avec succès.
    """
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise WriteError(out_dir, e) from e
    path = unique_path(out_dir / f"search_results_{timestamp or run_timestamp()}.csv")

    try:
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f, lineterminator="\n")
            writer.writerow(["Filename"] + [g.label for g in groups])
            for result in results:
                writer.writerow([result.basename] + [result.counts[g.label] for g in groups])
    except OSError as e:
        raise WriteError(path, e) from e
    return path


def write_extracted_text(path: Path, text: str) -> Path:
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise WriteError(path, e) from e
    return path


def write_json(path: Path, data: Any) -> Path:
    try:
        path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    except OSError as e:
        raise WriteError(path, e) from e
    return path


def write_status(run_dir: Path, status: Dict) -> Path:
    return write_json(run_dir / "status.json", status)


def write_errors(run_dir: Path, errors: Dict) -> Path:
    return write_json(run_dir / "errors.json", errors)
