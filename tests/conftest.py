import fitz  # PyMuPDF
import pytest

from overlap_checker.core.similarity import SimilarityEngine
from overlap_checker.core.session import DetectionSession


CLIMATE_TEXT = "Climate change is a pressing global issue that requires immediate action."


def build_pdf(text=None, with_image=False, password=None) -> bytes:
    """Create a one-page PDF in memory."""
    doc = fitz.open()
    page = doc.new_page()
    if text:
        page.insert_text((72, 72), text)
    if with_image:
        pix = fitz.Pixmap(fitz.csRGB, fitz.IRect(0, 0, 16, 16), False)
        pix.clear_with(200)
        page.insert_image(fitz.Rect(100, 100, 200, 200), pixmap=pix)
    if password:
        data = doc.tobytes(encryption=fitz.PDF_ENCRYPT_AES_256, owner_pw=password, user_pw=password)
    else:
        data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def engine():
    return SimilarityEngine()


@pytest.fixture
def session():
    return DetectionSession()
