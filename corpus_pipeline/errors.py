"""Erreurs levées par les pipelines de recherche de termes et d'extraction PDF.

Familles principales:
- `NotFoundError`: un fichier attendu n'existe pas (fichier de termes, liste de PDF, source)
- `ReadError`: toute autre erreur d'entrée/sortie ou de décodage
- `WriteError`: le dossier ou un fichier de sortie ne peut pas être créé

Les erreurs par fichier sont capturées par l'orchestrateur; les erreurs de
niveau supérieur remontent jusqu'à la CLI, qui sort avec un code non nul.
"""


class CorpusError(Exception):
    pass


class NotFoundError(CorpusError, FileNotFoundError):
    def __init__(self, path, message: str = "Fichier introuvable"):
        self.path = str(path)
        super().__init__(f"{message}: '{self.path}'")


class TermsFileNotFoundError(NotFoundError):
    def __init__(self, path):
        super().__init__(path, "Fichier de termes introuvable")


class ManifestNotFoundError(NotFoundError):
    def __init__(self, path):
        super().__init__(path, "Liste de fichiers introuvable")


class SourceNotFoundError(NotFoundError):
    def __init__(self, path):
        super().__init__(path, "Fichier introuvable")


class ReadError(CorpusError):
    def __init__(self, path, reason):
        self.path = str(path)
        self.reason = str(reason)
        super().__init__(f"Erreur de lecture '{self.path}': {self.reason}")


class TermsReadError(ReadError):
    pass


class ManifestReadError(ReadError):
    pass


class FileReadError(ReadError):
    pass


class PdfExtractionError(ReadError):
    pass


class NoFilesFoundError(CorpusError):
    def __init__(self, path):
        self.path = str(path)
        super().__init__(f"Aucun fichier trouvé: '{self.path}'")


class EmptyTermError(CorpusError, ValueError):
    """Une alternative vide dans un groupe (ex: `a//b`)."""

    def __init__(self, label: str, line_no: int = 0):
        self.label = label
        self.line_no = line_no
        where = f" (ligne {line_no})" if line_no else ""
        super().__init__(f"Terme vide dans le groupe '{label}'{where}")


class WriteError(CorpusError):
    """Écriture impossible dans le dossier de sortie."""

    def __init__(self, path, reason):
        self.path = str(path)
        self.reason = str(reason)
        super().__init__(f"Erreur d'écriture '{self.path}': {self.reason}")
