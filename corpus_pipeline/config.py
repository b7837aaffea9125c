import os
from pathlib import Path
from typing import Optional

from .types import ProcessConfig


def load_config(
    out_root: Optional[str] = None,
    encoding: Optional[str] = None,
    path_parts: Optional[int] = None,
    log_level: Optional[str] = None,
) -> ProcessConfig:
    """Arguments explicites > variables d'environnement (.env compris) > défauts."""
    root = Path(out_root or os.getenv("CORPUS_OUT_ROOT", "data")).expanduser().resolve()

    cfg = ProcessConfig(
        out_root=root,
        encoding=encoding or os.getenv("CORPUS_ENCODING", "utf-8"),
        path_parts=int(path_parts if path_parts is not None else os.getenv("CORPUS_PATH_PARTS", "5")),
        log_level=(log_level or os.getenv("LOG_LEVEL", "INFO")).upper(),
    )
    if cfg.path_parts < 1:
        raise ValueError(f"CORPUS_PATH_PARTS doit être >= 1 (reçu: {cfg.path_parts})")
    return cfg
