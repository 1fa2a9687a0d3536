import io
import zipfile
from collections.abc import Callable

import docx
import pytest

WORD_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"

_CONTENT_TYPES = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">'
    '<Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>'
    '<Default Extension="xml" ContentType="application/xml"/>'
    '<Override PartName="/word/document.xml" '
    'ContentType="application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"/>'
    "</Types>"
)
_RELS = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
    '<Relationship Id="rId1" '
    'Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/officeDocument" '
    'Target="word/document.xml"/>'
    "</Relationships>"
)
_ODT_MANIFEST = (
    '<?xml version="1.0" encoding="UTF-8"?>'
    '<manifest:manifest xmlns:manifest="urn:oasis:names:tc:opendocument:xmlns:manifest:1.0">'
    '<manifest:file-entry manifest:full-path="/" '
    'manifest:media-type="application/vnd.oasis.opendocument.text"/>'
    "</manifest:manifest>"
)


def _paragraph(text: str) -> str:
    return f"<w:p><w:r><w:t>{text}</w:t></w:r></w:p>"


def _table_row(*cells: str) -> str:
    body = "".join(f"<w:tc><w:tcPr/>{_paragraph(cell)}</w:tc>" for cell in cells)
    return f"<w:tbl><w:tr>{body}</w:tr></w:tbl>"


def _document_xml(*blocks: str) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f'<w:document xmlns:w="{WORD_NS}"><w:body>{"".join(blocks)}</w:body></w:document>'
    )


def _zip_docx(xml: str) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as archive:
        archive.writestr("[Content_Types].xml", _CONTENT_TYPES)
        archive.writestr("_rels/.rels", _RELS)
        archive.writestr("word/document.xml", xml)
    return buf.getvalue()


def _zip_odt(content: str) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as archive:
        archive.writestr(
            zipfile.ZipInfo("mimetype"),
            "application/vnd.oasis.opendocument.text",
            compress_type=zipfile.ZIP_STORED,
        )
        archive.writestr("content.xml", content, compress_type=zipfile.ZIP_DEFLATED)
        archive.writestr("META-INF/manifest.xml", _ODT_MANIFEST, compress_type=zipfile.ZIP_DEFLATED)
    return buf.getvalue()


@pytest.fixture()
def docx_factory() -> Callable[..., bytes]:
    """Build a minimal DOCX body: each string is a paragraph, each tuple a table row."""

    def _build(*blocks: str | tuple[str, ...]) -> bytes:
        return _zip_docx(
            _document_xml(
                *(_table_row(*b) if isinstance(b, tuple) else _paragraph(b) for b in blocks)
            )
        )

    return _build


@pytest.fixture()
def odt_factory() -> Callable[[str], bytes]:
    """Build a minimal ODT whose content.xml holds *text* in one paragraph."""

    def _build(text: str) -> bytes:
        content = (
            '<?xml version="1.0" encoding="UTF-8"?>'
            '<office:document-content '
            'xmlns:office="urn:oasis:names:tc:opendocument:xmlns:office:1.0" '
            'xmlns:text="urn:oasis:names:tc:opendocument:xmlns:text:1.0">'
            f"<office:body><office:text><text:p>{text}</text:p></office:text></office:body>"
            "</office:document-content>"
        )
        return _zip_odt(content)

    return _build


@pytest.fixture()
def sample_docx_bytes(docx_factory: Callable[..., bytes]) -> bytes:
    """DOCX with one detectable owner name."""
    return docx_factory("نام و نام خانوادگی: علی رضایی")


@pytest.fixture()
def word_template_bytes() -> bytes:
    """A lease contract saved by python-docx, with the national ID in a table."""
    document = docx.Document()
    document.add_paragraph("نام و نام خانوادگی: علی رضایی")
    document.add_paragraph("نام پدر: محمد")
    table = document.add_table(rows=1, cols=2)
    table.cell(0, 0).text = "کد ملی:"
    table.cell(0, 1).text = "0499370899"
    document.add_paragraph("شماره تلفن همراه: 09121234567")
    document.add_paragraph("این قرارداد از تاریخ 1403/01/01 تا 1404/01/01 معتبر است.")
    document.add_paragraph("یک عدد سفته به مبلغ 50,000,000 ریال")
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()
