import argparse
import logging
import sys
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from .config import load_config
from .errors import CorpusError
from .orchestrator import run_pdf_extraction, run_term_search
from .types import ProcessConfig


class UsageParser(argparse.ArgumentParser):
    """argparse, mais une erreur d'arguments sort avec le code 1."""

    def error(self, message: str):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: erreur: {message}\n")


def _setup(log_level: Optional[str] = None, **overrides) -> ProcessConfig:
    # Charger .env avant toute lecture d'os.getenv
    load_dotenv(find_dotenv(usecwd=True), override=False)
    cfg = load_config(log_level=log_level, **overrides)
    logging.basicConfig(
        level=cfg.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )
    return cfg


def _print_progress(i: int, total: int, path: str) -> None:
    print(f"\n[{i}/{total}] {path}")


def search_main(argv: Optional[List[str]] = None) -> int:
    parser = UsageParser(
        prog="term-search",
        description="Compte les occurrences de groupes de termes dans un fichier texte ou un dossier et écrit un CSV.",
    )
    parser.add_argument("input_path", help="Fichier texte ou dossier de fichiers texte (en minuscules de préférence)")
    parser.add_argument("terms_file", help="Fichier de groupes de termes: un groupe par ligne, alternatives séparées par '/'")
    parser.add_argument("--out-root", required=False, help="Dossier de sortie du CSV (défaut: data)")
    parser.add_argument("--log-level", required=False, help="Niveau de log (défaut via env LOG_LEVEL=INFO)")
    args = parser.parse_args(argv)

    try:
        cfg = _setup(log_level=args.log_level, out_root=args.out_root)
    except ValueError as e:
        parser.error(str(e))
    try:
        report = run_term_search(args.input_path, args.terms_file, cfg, on_file=_print_progress)
    except KeyboardInterrupt:
        print("Interrompu par l'utilisateur.")
        return 130
    except CorpusError as e:
        print(f"Erreur: {e}")
        return 1

    for step in report.steps:
        status = "Terminé" if step.ok else f"Échec ({step.error})"
        print(f"{step.name}: {status} en {step.duration_sec:.2f} s")

    print(f"\n{report.succeeded} fichier(s) traité(s) sur {len(report.files)}, {report.failed} échec(s)")
    print(f"Durée totale: {report.duration_sec:.2f} s")
    if not report.output_csv:
        print("Aucun résultat: aucun fichier n'a pu être traité.")
        return 1
    print(f"Résultats écrits dans '{report.output_csv}'")
    return 0


def extract_main(argv: Optional[List[str]] = None) -> int:
    parser = UsageParser(
        prog="pdf-extract",
        description="Extrait le texte d'une liste de PDF vers un dossier horodaté.",
    )
    parser.add_argument("file_list", help="Fichier texte listant les chemins PDF (un par ligne)")
    parser.add_argument("--out-root", required=False, help="Dossier racine de sortie (défaut: data)")
    parser.add_argument("--path-parts", required=False, type=int, default=None,
                        help="Segments de chemin conservés dans le nom .txt (défaut via env CORPUS_PATH_PARTS=5)")
    parser.add_argument("--log-level", required=False, help="Niveau de log (défaut via env LOG_LEVEL=INFO)")
    args = parser.parse_args(argv)

    try:
        cfg = _setup(log_level=args.log_level, out_root=args.out_root, path_parts=args.path_parts)
    except ValueError as e:
        parser.error(str(e))
    try:
        report = run_pdf_extraction(args.file_list, cfg, on_file=_print_progress)
    except KeyboardInterrupt:
        print("Interrompu par l'utilisateur.")
        return 130
    except CorpusError as e:
        print(f"Erreur: {e}")
        return 1

    print(f"\nTraitement terminé: {report.succeeded} fichier(s) extrait(s) sur {report.total}.")
    print(f"Durée totale: {report.duration_sec:.2f} s")
    print(f"Fichiers de sortie dans: {report.output_dir}")
    return 0


COMMANDS = {"search": search_main, "extract": extract_main}


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or argv[0] not in COMMANDS:
        print(f"Usage: python -m corpus_pipeline.cli {{{'|'.join(COMMANDS)}}} ...")
        return 1
    return COMMANDS[argv[0]](argv[1:])


if __name__ == "__main__":
    sys.exit(main())
