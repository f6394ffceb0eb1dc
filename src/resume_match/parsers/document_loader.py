import base64
import re
from pathlib import Path

UNSUPPORTED_MESSAGE = "Please upload a .pdf or .txt file."


def document_kind(file_path: str | Path) -> str:
    """Return "pdf" or "txt" for a resume file, rejecting anything else."""
    suffix = Path(file_path).suffix.lower()
    if suffix == ".pdf":
        return "pdf"
    if suffix == ".txt":
        return "txt"
    raise ValueError(f"Unsupported file type: {suffix or '(none)'}. {UNSUPPORTED_MESSAGE}")


def read_text_document(file_path: str | Path) -> str:
    """Read a plain-text resume or job description and tidy its whitespace."""
    raw = Path(file_path).read_text(encoding="utf-8")
    return clean_text(raw)


def encode_pdf(file_path: str | Path) -> str:
    """Base64-encode a PDF for the parse-pdf request."""
    return base64.b64encode(Path(file_path).read_bytes()).decode("ascii")


def clean_text(text: str) -> str:
    """Strip BOM/zero-width artifacts, trailing spaces and runs of blank lines."""
    text = text.lstrip("\ufeff")
    text = re.sub(r"[\u200b\u200c\u200d\u00ad\u2060\ufeff]", "", text)
    text = "\n".join(line.rstrip() for line in text.splitlines())
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()
