"""Corpus pipeline: recherche de groupes de termes (TXT → CSV) et extraction PDF → TXT.

This package provides:
- Configuration loading utilities (.env + environnement)
- Typed structures for term groups, per-file results and run reports
- Term-group loading and whole-word occurrence counting
- Storage helpers (file enumeration, manifests, timestamped outputs)
- A pypdf-based text extraction service
- Orchestrators for both pipelines and a CLI to run them in batch mode
"""

__all__ = [
    "config",
    "types",
    "errors",
    "terms",
    "counter",
    "storage",
    "writer",
    "pdf_service",
    "orchestrator",
]
