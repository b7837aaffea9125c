import logging
import time
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from .config import load_config
from .counter import count_occurrences
from .errors import CorpusError, NoFilesFoundError
from .pdf_service import PdfTextExtractor, TextExtractor
from .storage import derive_output_name, ensure_run_dir, find_text_files, read_manifest, read_normalized_text
from .terms import load_term_groups
from .types import ExtractionReport, FileResult, ProcessConfig, SearchReport, StepResult
from .writer import write_errors, write_extracted_text, write_results_csv, write_status

logger = logging.getLogger(__name__)

# Appelé avant chaque fichier: (index à partir de 1, total, chemin)
ProgressHook = Callable[[int, int, str], None]


def run_term_search(
    input_path: Union[str, Path],
    terms_path: Union[str, Path],
    cfg: Optional[ProcessConfig] = None,
    on_file: Optional[ProgressHook] = None,
) -> SearchReport:
    """
    Orchestrateur de recherche: termes → fichiers → comptage → CSV.

    Étapes:
    1. Chargement des groupes de termes (erreur fatale si impossible).
    2. Résolution des fichiers à traiter (erreur fatale si aucun).
    3. Lecture + passage en minuscules + comptage, fichier par fichier.
       Un échec de lecture n'arrête pas le lot.
    4. Écriture du CSV si au moins un fichier a été traité.
    """
    cfg = cfg or load_config()

    groups = load_term_groups(terms_path, encoding=cfg.encoding)
    files = find_text_files(input_path)
    if not files:
        raise NoFilesFoundError(input_path)

    logger.info("%d fichier(s) à traiter depuis %s", len(files), input_path)
    t_total = time.time()
    results: List[FileResult] = []
    steps: List[StepResult] = []

    for i, path in enumerate(files, start=1):
        if on_file:
            on_file(i, len(files), str(path))
        t0 = time.time()
        try:
            text = read_normalized_text(path, encoding=cfg.encoding)
            counts = count_occurrences(text, groups)
        except CorpusError as e:
            logger.error("Échec: %s → %s", path, e)
            steps.append(StepResult(name=str(path), ok=False, duration_sec=time.time() - t0, error=str(e)))
            continue

        results.append(FileResult(path=str(path), counts=counts))
        steps.append(StepResult(name=str(path), ok=True, duration_sec=time.time() - t0))

    report = SearchReport(files=[str(p) for p in files], results=results, steps=steps)
    if results:
        report.output_csv = str(write_results_csv(cfg.out_root, results, groups))
        logger.info("Résultats écrits dans %s", report.output_csv)
    else:
        logger.warning("Aucun fichier traité avec succès, pas de CSV écrit")

    report.duration_sec = time.time() - t_total
    return report


def run_pdf_extraction(
    manifest_path: Union[str, Path],
    cfg: Optional[ProcessConfig] = None,
    extractor: Optional[TextExtractor] = None,
    on_file: Optional[ProgressHook] = None,
) -> ExtractionReport:
    """
    Orchestrateur d'extraction: liste de PDF → un fichier .txt par PDF.

    Les fichiers sont écrits dans `<out_root>/pdf_extracts_<horodatage>`.
    Un PDF dont le texte extrait est vide compte comme un échec.
    `status.json` récapitule toutes les étapes; `errors.json` n'est écrit
    qu'en cas d'échec.
    """
    cfg = cfg or load_config()
    extractor = extractor or PdfTextExtractor()

    pdf_paths = read_manifest(manifest_path, encoding=cfg.encoding)
    run_dir = ensure_run_dir(cfg.out_root, "pdf_extracts")
    logger.info("%d PDF à traiter → %s", len(pdf_paths), run_dir)

    t_total = time.time()
    steps: List[StepResult] = []
    errors: Dict[str, str] = {}

    for i, pdf_path in enumerate(pdf_paths, start=1):
        if on_file:
            on_file(i, len(pdf_paths), pdf_path)
        t0 = time.time()
        try:
            text = extractor.extract_text(pdf_path)
            if not text:
                raise CorpusError(f"Aucun texte extrait de '{pdf_path}'")
            out_path = write_extracted_text(run_dir / derive_output_name(pdf_path, cfg.path_parts), text)
        except CorpusError as e:
            logger.error("Échec: %s → %s", pdf_path, e)
            steps.append(StepResult(name=pdf_path, ok=False, duration_sec=time.time() - t0, error=str(e)))
            errors[pdf_path] = str(e)
            continue

        steps.append(
            StepResult(
                name=pdf_path,
                ok=True,
                duration_sec=time.time() - t0,
                output_paths={"txt": str(out_path)},
            )
        )

    report = ExtractionReport(output_dir=str(run_dir), steps=steps, duration_sec=time.time() - t_total)
    write_status(
        run_dir,
        {
            "manifest": str(manifest_path),
            "succeeded": report.succeeded,
            "total": report.total,
            "steps": [s.__dict__ for s in steps],
        },
    )
    if errors:
        write_errors(run_dir, errors)
    return report
