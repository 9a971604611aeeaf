import io
import logging
import os
from reportlab.lib.colors import black
from reportlab.lib.pagesizes import letter
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas
from agentchat.config import (
    DOCUMENT_KEYWORDS, DOCUMENT_MARGIN, DOCUMENT_FONT, DOCUMENT_FONT_PATH, DOCUMENT_FONT_SIZE,
)
from agentchat.errors import DocumentError

logger = logging.getLogger(__name__)

# Python codecs for the encodings of the built-in Type 1 fonts
TYPE1_CODECS = {"WinAnsiEncoding": "cp1252", "MacRomanEncoding": "mac_roman"}


def is_document_request(message: str, keywords=DOCUMENT_KEYWORDS) -> bool:
    lowered = message.lower()
    return any(keyword in lowered for keyword in keywords)


def unsupported_characters(font, text):
    """Characters of ``text`` the font has no glyph for."""
    if isinstance(font, TTFont):
        return sorted({c for c in text if c.isprintable() and ord(c) not in font.face.charToGlyph})
    codec = TYPE1_CODECS.get(getattr(font, "encName", None) or getattr(font.encoding, "name", None))
    if codec is None:
        return []
    missing = set()
    for c in text:
        try:
            c.encode(codec)
        except UnicodeEncodeError:
            missing.add(c)
    return sorted(missing)


class PdfBuilder:
    """Renders text onto a single PDF page, top-left aligned at a fixed margin.

    Without an explicit ``font`` the TrueType file at ``font_path`` is
    registered and used, falling back to Helvetica when the file is missing.
    Text the font cannot draw raises ``DocumentError`` instead of producing
    substitute glyphs.
    """

    def __init__(self, pagesize=letter, margin=DOCUMENT_MARGIN, font=None, font_size=DOCUMENT_FONT_SIZE,
                 font_path=DOCUMENT_FONT_PATH):
        self.pagesize = pagesize
        self.margin = margin
        self.font = font
        self.font_size = font_size
        self.font_path = font_path

    def _load_font(self):
        if self.font is None:
            if self.font_path and os.path.exists(self.font_path):
                name = os.path.splitext(os.path.basename(self.font_path))[0]
                if name not in pdfmetrics.getRegisteredFontNames():
                    pdfmetrics.registerFont(TTFont(name, self.font_path))
                self.font = name
            else:
                self.font = DOCUMENT_FONT
        return pdfmetrics.getFont(self.font)

    def render(self, text: str) -> bytes:
        buffer = io.BytesIO()
        lines = text.splitlines() or [""]
        try:
            font = self._load_font()
            missing = unsupported_characters(font, "".join(lines))
            if missing:
                raise DocumentError(f"Font {self.font} cannot draw {''.join(missing[:10])!r}")
            pdf = canvas.Canvas(buffer, pagesize=self.pagesize)
            _, height = self.pagesize
            text_obj = pdf.beginText(self.margin, height - self.margin)
            text_obj.setFont(self.font, self.font_size)
            text_obj.setFillColor(black)
            for line in lines:
                text_obj.textLine(line)
            pdf.drawText(text_obj)
            pdf.showPage()
            pdf.save()
        except DocumentError as e:
            logger.error(f"Error rendering PDF: {e}")
            raise
        except Exception as e:
            logger.error(f"Error rendering PDF: {e}")
            raise DocumentError("Could not render the document") from e
        return buffer.getvalue()
