from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple


@dataclass
class ProcessConfig:
    """Configuration de haut niveau pour exécuter les deux pipelines."""
    out_root: Path
    encoding: str = "utf-8"
    path_parts: int = 5      # segments de chemin conservés dans les noms .txt
    log_level: str = "INFO"


@dataclass(frozen=True)
class TermGroup:
    """Un groupe de termes: la ligne d'origine (label) et ses alternatives."""
    label: str
    alternatives: Tuple[str, ...]


@dataclass(frozen=True)
class FileResult:
    path: str
    counts: Dict[str, int]

    @property
    def basename(self) -> str:
        return os.path.basename(self.path)


@dataclass
class StepResult:
    name: str
    ok: bool
    duration_sec: float
    output_paths: Dict[str, str] = field(default_factory=dict)
    error: Optional[str] = None


@dataclass
class SearchReport:
    files: List[str]
    results: List[FileResult]
    steps: List[StepResult]
    output_csv: Optional[str] = None
    duration_sec: float = 0.0

    @property
    def succeeded(self) -> int:
        return sum(1 for s in self.steps if s.ok)

    @property
    def failed(self) -> int:
        return sum(1 for s in self.steps if not s.ok)


@dataclass
class ExtractionReport:
    output_dir: str
    steps: List[StepResult]
    duration_sec: float = 0.0

    @property
    def total(self) -> int:
        return len(self.steps)

    @property
    def succeeded(self) -> int:
        return sum(1 for s in self.steps if s.ok)

    @property
    def failed(self) -> int:
        return self.total - self.succeeded
