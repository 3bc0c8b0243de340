"""parsers/epub_parser.py — Parse EPUB (packed or directory) into chapters in spine order."""

import logging
import posixpath
import xml.etree.ElementTree as ET
import zipfile
from pathlib import Path

from bs4 import BeautifulSoup

from models import Book
from parsers.base import build_book

logger = logging.getLogger(__name__)

CONTAINER_NS = "urn:oasis:names:tc:opendocument:xmlns:container"
OPF_NS = "http://www.idpf.org/2007/opf"
DC_NS = "http://purl.org/dc/elements/1.1/"

HTML_MEDIA_TYPES = ("application/xhtml+xml", "text/html")
HTML_SUFFIXES = (".xhtml", ".html", ".htm")
DROPPED_TAGS = ["script", "style", "nav", "header", "footer"]
BLOCK_TAGS = ["p", "div", "section", "article", "h1", "h2", "h3", "h4", "h5", "h6", "li"]


class _EpubSource:
    """Read members by archive path from a packed .epub or an unpacked directory."""

    def __init__(self, epub_path: Path):
        self.path = epub_path
        if epub_path.is_dir():
            self._zip = None
        elif zipfile.is_zipfile(epub_path):
            self._zip = zipfile.ZipFile(epub_path)
        else:
            raise ValueError(f"Invalid EPUB: {epub_path} is not a zip archive or directory")

    def read(self, member: str) -> bytes | None:
        if self._zip is not None:
            try:
                return self._zip.read(member)
            except KeyError:
                return None
        candidate = self.path / member
        return candidate.read_bytes() if candidate.is_file() else None

    def close(self) -> None:
        if self._zip is not None:
            self._zip.close()


def _resolve(base_path: str, href: str) -> str:
    """Resolve href relative to the directory holding base_path, as an archive path."""
    href = href.split("#")[0].lstrip("/")
    return posixpath.normpath(posixpath.join(posixpath.dirname(base_path), href))


def _parse_xml(data: bytes, what: str) -> ET.Element:
    try:
        return ET.fromstring(data)
    except ET.ParseError as e:
        raise ValueError(f"Invalid EPUB: malformed {what} ({e})") from e


def _find_opf_path(source: _EpubSource) -> str:
    container = source.read("META-INF/container.xml")
    if container is None:
        raise ValueError("Invalid EPUB: META-INF/container.xml not found.")
    root = _parse_xml(container, "container.xml")
    rootfile = root.find(f".//{{{CONTAINER_NS}}}rootfile")
    opf_path = rootfile.get("full-path") if rootfile is not None else None
    if not opf_path:
        raise ValueError("Invalid EPUB: OPF path not found in container.xml.")
    return opf_path


def _text_of(root: ET.Element, tag: str) -> str:
    node = root.find(f".//{{{DC_NS}}}{tag}")
    return node.text.strip() if node is not None and node.text else ""


def _spine_documents(opf_root: ET.Element, opf_path: str) -> list[str]:
    """Archive paths of the HTML documents listed in the spine, in reading order."""
    manifest = {}
    for item in opf_root.findall(f".//{{{OPF_NS}}}manifest/{{{OPF_NS}}}item"):
        item_id, href = item.get("id"), item.get("href")
        if item_id and href:
            manifest[item_id] = (_resolve(opf_path, href), item.get("media-type") or "")

    documents = []
    for itemref in opf_root.findall(f".//{{{OPF_NS}}}spine/{{{OPF_NS}}}itemref"):
        entry = manifest.get(itemref.get("idref", ""))
        if entry is None:
            continue
        href, media_type = entry
        if any(m in media_type for m in HTML_MEDIA_TYPES) or href.lower().endswith(HTML_SUFFIXES):
            documents.append(href)
    return documents


def _chapter_title(soup: BeautifulSoup, fallback: str) -> str:
    title = soup.find("title")
    if title and title.get_text(strip=True):
        return title.get_text(strip=True)
    heading = soup.find(["h1", "h2", "h3"])
    if heading and heading.get_text(strip=True):
        return heading.get_text(" ", strip=True)
    return fallback


def extract_readable_text(soup: BeautifulSoup) -> str:
    """Flatten an XHTML document: drop chrome, break lines after block elements."""
    body = soup.body or soup
    for tag in body.find_all(DROPPED_TAGS):
        tag.decompose()
    for br in body.find_all("br"):
        br.replace_with("\n")
    for block in body.find_all(BLOCK_TAGS):
        block.append("\n")
    return body.get_text()


def parse_epub(epub_path: Path) -> Book:
    """Main entry point. Returns a Book with one chapter per readable spine document."""
    epub_path = Path(epub_path)
    if not epub_path.exists():
        raise FileNotFoundError(f"EPUB not found: {epub_path}")

    source = _EpubSource(epub_path)
    try:
        opf_path = _find_opf_path(source)
        opf_bytes = source.read(opf_path)
        if opf_bytes is None:
            raise ValueError(f"Invalid EPUB: OPF file not found at {opf_path}.")
        opf_root = _parse_xml(opf_bytes, opf_path)

        title = _text_of(opf_root, "title") or epub_path.stem
        author = _text_of(opf_root, "creator") or "Unknown"

        sections = []
        for href in _spine_documents(opf_root, opf_path):
            content = source.read(href)
            if content is None:
                logger.warning("Spine item missing from archive: %s", href)
                continue
            soup = BeautifulSoup(content, features="lxml")
            heading = _chapter_title(soup, f"Chapter {len(sections) + 1}")
            sections.append((heading, extract_readable_text(soup)))
    finally:
        source.close()

    book = build_book(title, author, sections, "epub")
    logger.info("Parsed EPUB '%s': %d chapters", book.title, len(book.chapters))
    return book
