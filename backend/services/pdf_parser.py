import io

import pdfplumber


def extract_text(pdf_bytes: bytes) -> str:
    """Extract all text from a PDF file."""
    text, _ = extract_text_and_page_count(pdf_bytes)
    return text


def extract_text_and_page_count(pdf_bytes: bytes) -> tuple[str, int]:
    """Extract text and page count in one pass; the page count feeds the length check."""
    with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
    return "\n".join(pages).strip(), len(pages)
