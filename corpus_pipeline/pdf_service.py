import logging
from pathlib import Path

from pypdf import PdfReader

from .errors import PdfExtractionError, SourceNotFoundError

logger = logging.getLogger(__name__)


class TextExtractor:
    def extract_text(self, pdf_path: str) -> str:
        raise NotImplementedError


class PdfTextExtractor(TextExtractor):
    """Extraction de la couche texte d'un PDF via pypdf (pas d'OCR)."""

    def extract_text(self, pdf_path: str) -> str:
        path = Path(pdf_path)
        if not path.is_file():
            raise SourceNotFoundError(path)
        try:
            reader = PdfReader(str(path))
            pages = [page.extract_text() or "" for page in reader.pages]
        except Exception as e:
            raise PdfExtractionError(path, e) from e

        text = "\n".join(pages).strip()
        logger.debug("%s: %d page(s), %d caractères", path.name, len(pages), len(text))
        return text
