"""
File ingestion with a pluggable loader system.

Uploaded files are turned into a single plain-text string before they reach
the analysis engine:

1. **Validation**: Size limit and extension checks
2. **Document Loading**: Extensible loader registry (langchain-community loaders)
3. **Text Assembly**: Page contents joined into one string
4. **Encoding Repair**: Optional mojibake fixes with ftfy

Key Functions:
    - extract_text(): Main entry point, path in, text out
    - extract_text_from_bytes(): Same for in-memory uploads
    - load_document(): Load files using registered loaders
    - register_loader(): Add support for a new extension

Failures are reported as IngestError with an IngestErrorCode so front-ends
can show a specific message per failure kind.

Example Workflow:
    >>> text = extract_text("essay.docx")
    >>> result = analyze_text(text)

    >>> try:
    ...     extract_text("scan.tiff")
    ... except IngestError as e:
    ...     print(e.code)
    IngestErrorCode.INVALID_FILE_TYPE
"""

import logging
import tempfile
from enum import Enum
from functools import partial
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import ftfy
from langchain_community.document_loaders import (
    Docx2txtLoader,
    PyPDFLoader,
    TextLoader,
)
from langchain_core.documents import Document

from .config import Config
from .logging_utils import log_error

logger = logging.getLogger(__name__)

# Registry for file loaders - extensible for new file types
_LOADER_REGISTRY: Dict[str, Callable[[str], Any]] = {
    ".txt": partial(TextLoader, encoding="utf-8"),
    ".pdf": PyPDFLoader,
    ".docx": Docx2txtLoader,
}

# Recognised but not readable
_UNSUPPORTED_FORMATS = {".doc"}

PAGE_SEPARATOR = " "


class IngestErrorCode(str, Enum):
    """Reason a file could not be turned into text."""

    INVALID_FILE_TYPE = "INVALID_FILE_TYPE"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    PARSE_ERROR = "PARSE_ERROR"
    UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"


class IngestError(Exception):
    """Raised when a file cannot be ingested."""

    def __init__(self, code: IngestErrorCode, message: str):
        super().__init__(message)
        self.code = code


def register_loader(extension: str, loader_class: Callable[[str], Any]) -> None:
    """Register a new file loader for a specific extension.

    Args:
        extension: File extension (e.g., '.md', '.html')
        loader_class: Loader class that accepts a file path and has ``load()``

    Example:
        >>> from langchain_community.document_loaders import UnstructuredMarkdownLoader
        >>> register_loader('.md', UnstructuredMarkdownLoader)
    """
    _LOADER_REGISTRY[extension.lower()] = loader_class


def get_supported_extensions() -> List[str]:
    """Get list of supported file extensions.

    Returns:
        List of supported file extensions
    """
    return list(_LOADER_REGISTRY.keys())


def load_document(file_path: str) -> List[Document]:
    """Load a document using the appropriate loader.

    Args:
        file_path: Path to the document file.

    Returns:
        List of Document objects (one per PDF page, one for text and Word files).

    Raises:
        IngestError: UNSUPPORTED_FORMAT for legacy ``.doc`` files,
            INVALID_FILE_TYPE for unknown extensions and PARSE_ERROR when the
            loader fails.
    """
    file_path = Path(file_path)
    extension = file_path.suffix.lower()

    if extension in _UNSUPPORTED_FORMATS:
        raise IngestError(
            IngestErrorCode.UNSUPPORTED_FORMAT,
            f"Unsupported format: {extension}. Save the document as .docx",
        )

    if extension not in _LOADER_REGISTRY:
        raise IngestError(
            IngestErrorCode.INVALID_FILE_TYPE,
            f"Unsupported file type: {extension or '(none)'}. "
            f"Supported types: {', '.join(_LOADER_REGISTRY.keys())}",
        )

    try:
        loader_class = _LOADER_REGISTRY[extension]
        loader = loader_class(str(file_path))
        return loader.load()
    except Exception as e:
        log_error(f"Failed to load document {file_path}", e)
        raise IngestError(
            IngestErrorCode.PARSE_ERROR, f"Document loading failed: {e}"
        ) from e


def extract_text(file_path: str, config: Optional[Config] = None) -> str:
    """Extract the plain text of a file.

    Args:
        file_path: Path to a .txt, .pdf or .docx file (or any registered type).
        config: Configuration object, uses defaults if None. Supplies
            ``max_upload_size`` and ``fix_encoding``.

    Returns:
        The document text, pages joined with a single space.

    Raises:
        IngestError: PARSE_ERROR if the file does not exist, FILE_TOO_LARGE if
            it exceeds max_upload_size, or any error raised by load_document().
    """
    if config is None:
        config = Config()

    path = Path(file_path)
    if not path.is_file():
        raise IngestError(IngestErrorCode.PARSE_ERROR, f"File not found: {file_path}")

    size = path.stat().st_size
    if size > config.max_upload_size:
        raise IngestError(
            IngestErrorCode.FILE_TOO_LARGE,
            f"{path.name} is {size} bytes; the limit is {config.max_upload_size}",
        )

    documents = load_document(str(path))
    text = PAGE_SEPARATOR.join(doc.page_content for doc in documents)

    if config.fix_encoding:
        text = ftfy.fix_text(text)

    logger.debug("Extracted %d characters from %s", len(text), path.name)
    return text


def extract_text_from_bytes(
    filename: str, data: bytes, config: Optional[Config] = None
) -> str:
    """Extract text from an in-memory upload.

    The bytes are written to a temporary file named like the upload so the
    extension-based loader lookup works.

    Raises:
        IngestError: As extract_text().
    """
    with tempfile.TemporaryDirectory() as temp_dir:
        file_path = Path(temp_dir) / Path(filename).name
        with open(file_path, "wb") as f:
            f.write(data)
        return extract_text(str(file_path), config)
