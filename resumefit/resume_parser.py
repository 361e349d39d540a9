"""Extract plain text from a resume file.

Supports PDF (via pdftotext or pypdf), DOCX (via stdlib zipfile) and TXT.
PDF output is NFKC-normalized so typographic ligatures (``ﬁ``, ``ﬂ``) reach
the tokenizer as plain letters.
"""
from __future__ import annotations

import asyncio
import re
import shutil
import subprocess
import unicodedata
import zipfile
from pathlib import Path
from xml.etree import ElementTree

from resumefit.errors import UnsupportedDocument
from resumefit.log import get_logger

log = get_logger(__name__)

SUPPORTED_SUFFIXES: tuple[str, ...] = (".pdf", ".docx", ".txt")

_DOCX_NS = "{http://schemas.openxmlformats.org/wordprocessingml/2006/main}"
_PDFTOTEXT_TIMEOUT = 30

# Word boundaries that PDF extraction tends to lose, applied in order.
_SPACING_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"([a-z])([A-Z])"), r"\1 \2"),       # camelCase joins
    (re.compile(r"([a-zA-Z])(\d)"), r"\1 \2"),       # Corp2019
    (re.compile(r"(\d)([a-zA-Z])"), r"\1 \2"),       # 2019led
    (re.compile(r"([.!?,;:])([A-Za-z])"), r"\1 \2"),  # Team,built
)
_MIN_SPACING_LEN = 50
_MIN_SPACE_RATIO = 0.08


def extract_text(path: Path) -> str:
    """Return plain text from a PDF, DOCX, or TXT file."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".txt":
        return path.read_text(encoding="utf-8", errors="ignore")
    if suffix == ".docx":
        return _extract_docx(path)
    if suffix == ".pdf":
        return _extract_pdf(path)
    raise UnsupportedDocument(
        f"Unsupported resume format: {suffix or path.name}. "
        f"Please upload one of: {', '.join(SUPPORTED_SUFFIXES)}."
    )


async def extract_text_async(path: Path) -> str:
    text = await asyncio.to_thread(extract_text, path)
    log.info("Extracted %d characters from %s", len(text), Path(path).name)
    return text.strip()


def _fix_spacing(text: str) -> str:
    """Re-insert spaces when extraction has squashed words together.

    Only kicks in for longer text whose space ratio is abnormally low.
    """
    if len(text) < _MIN_SPACING_LEN:
        return text
    ratio = text.count(" ") / len(text)
    if ratio > _MIN_SPACE_RATIO:
        return text
    log.debug("Low space ratio (%.2f%%), re-inserting word breaks", ratio * 100)
    for pattern, repl in _SPACING_RULES:
        text = pattern.sub(repl, text)
    return text


def _clean_pdf_text(text: str) -> str:
    """Expand compatibility characters (ligatures, full-width forms), then fix spacing."""
    return _fix_spacing(unicodedata.normalize("NFKC", text))


def _run_pdftotext(path: Path) -> str | None:
    if not shutil.which("pdftotext"):
        return None
    try:
        result = subprocess.run(
            ["pdftotext", "-layout", str(path), "-"],
            capture_output=True,
            text=True,
            timeout=_PDFTOTEXT_TIMEOUT,
        )
    except subprocess.TimeoutExpired:
        log.warning("pdftotext timed out on %s; falling back to pypdf", path.name)
        return None
    if result.returncode != 0 or not result.stdout.strip():
        return None
    return result.stdout


def _extract_pdf(path: Path) -> str:
    # pdftotext keeps layout spacing better than pypdf
    text = _run_pdftotext(path)
    if text is not None:
        return _clean_pdf_text(text)

    from pypdf import PdfReader

    reader = PdfReader(str(path))
    return "\n".join(_clean_pdf_text(page.extract_text() or "") for page in reader.pages)


def _extract_docx(path: Path) -> str:
    try:
        with zipfile.ZipFile(path) as zf, zf.open("word/document.xml") as f:
            tree = ElementTree.parse(f)
    except (zipfile.BadZipFile, KeyError) as exc:
        raise UnsupportedDocument(f"Not a valid DOCX file: {path.name}") from exc

    paragraphs = (
        "".join(node.text for node in para.iter(f"{_DOCX_NS}t") if node.text)
        for para in tree.iter(f"{_DOCX_NS}p")
    )
    return "\n".join(p for p in paragraphs if p)
