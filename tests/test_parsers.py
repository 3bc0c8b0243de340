"""Tests for turning EPUB, Markdown and text files into chapters."""

import zipfile

import pytest

from models import Token
from parsers import parse_file
from parsers.base import clean_text
from rsvp import display_unit, split_at_anchor, tokenize

CONTAINER = """<?xml version="1.0"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="OEBPS/content.opf" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>"""

OPF = """<?xml version="1.0"?>
<package xmlns="http://www.idpf.org/2007/opf" version="3.0">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:title>The Inimitable Jeeves</dc:title>
    <dc:creator>P. G. Wodehouse</dc:creator>
  </metadata>
  <manifest>
    <item id="c2" href="text/ch2.xhtml" media-type="application/xhtml+xml"/>
    <item id="c1" href="text/ch1.xhtml" media-type="application/xhtml+xml"/>
    <item id="blank" href="text/blank.xhtml" media-type="application/xhtml+xml"/>
    <item id="css" href="style.css" media-type="text/css"/>
  </manifest>
  <spine>
    <itemref idref="c1"/>
    <itemref idref="css"/>
    <itemref idref="blank"/>
    <itemref idref="c2"/>
  </spine>
</package>"""

CH1 = """<html xmlns="http://www.w3.org/1999/xhtml"><head><title>Jeeves Exerts</title>
<style>p { color: red; }</style></head>
<body><nav>Contents</nav><p>It was “quite” the thing.</p><p>Next&#160;line<br/>after break</p></body></html>"""

CH2 = """<html xmlns="http://www.w3.org/1999/xhtml"><head></head>
<body><h2>No Wedding Bells</h2><p>Bingo again.</p><script>var x = 1;</script></body></html>"""

BLANK = """<html><head></head><body><div>   </div></body></html>"""


def write_epub(path, members):
    with zipfile.ZipFile(path, "w") as zf:
        for name, content in members.items():
            zf.writestr(name, content)
    return path


@pytest.fixture
def epub_members():
    return {
        "mimetype": "application/epub+zip",
        "META-INF/container.xml": CONTAINER,
        "OEBPS/content.opf": OPF,
        "OEBPS/text/ch1.xhtml": CH1,
        "OEBPS/text/ch2.xhtml": CH2,
        "OEBPS/text/blank.xhtml": BLANK,
        "OEBPS/style.css": "p {}",
    }


class TestEpub:
    """Packed and unpacked EPUB parsing."""

    def test_chapters_follow_spine(self, tmp_path, epub_members):
        book = parse_file(write_epub(tmp_path / "jeeves.epub", epub_members))
        assert book.title == "The Inimitable Jeeves"
        assert book.author == "P. G. Wodehouse"
        assert book.source_format == "epub"
        assert [ch.title for ch in book.chapters] == ["Jeeves Exerts", "No Wedding Bells"]
        assert [ch.index for ch in book.chapters] == [1, 2]

    def test_text_is_flattened(self, tmp_path, epub_members):
        book = parse_file(write_epub(tmp_path / "jeeves.epub", epub_members))
        first, second = book.chapters
        assert 'It was "quite" the thing.' in first.text
        assert "Next line\nafter break" in first.text
        assert "Contents" not in first.text
        assert "color" not in first.text
        assert "var x" not in second.text
        assert "Bingo again." in second.text

    def test_unpacked_directory(self, tmp_path, epub_members):
        root = tmp_path / "jeeves.epub.dir"
        for name, content in epub_members.items():
            target = root / name
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        book = parse_file(root)
        assert len(book.chapters) == 2

    def test_missing_container(self, tmp_path, epub_members):
        del epub_members["META-INF/container.xml"]
        with pytest.raises(ValueError, match="container.xml"):
            parse_file(write_epub(tmp_path / "bad.epub", epub_members))

    def test_not_a_zip(self, tmp_path):
        path = tmp_path / "fake.epub"
        path.write_text("plain text")
        with pytest.raises(ValueError, match="zip"):
            parse_file(path)

    def test_no_readable_chapters(self, tmp_path, epub_members):
        epub_members["OEBPS/text/ch1.xhtml"] = BLANK
        epub_members["OEBPS/text/ch2.xhtml"] = BLANK
        with pytest.raises(ValueError, match="readable chapters"):
            parse_file(write_epub(tmp_path / "empty.epub", epub_members))


class TestMarkdown:
    """Heading-based Markdown splitting."""

    def test_frontmatter_and_headings(self, tmp_path):
        path = tmp_path / "essay.md"
        path.write_text(
            "---\ntitle: An Essay\nauthor: Someone\n---\n"
            "# Opening\nSome **bold** words.\n\n## Detail\nMore [text](http://x).\n"
            "# Closing\nThe end.\n",
            encoding="utf-8",
        )
        book = parse_file(path)
        assert book.title == "An Essay" and book.author == "Someone"
        assert [ch.title for ch in book.chapters] == ["Opening", "Closing"]
        assert "Some bold words." in book.chapters[0].text
        assert "More text." in book.chapters[0].text

    def test_no_headings_is_one_chapter(self, tmp_path):
        path = tmp_path / "my-notes.md"
        path.write_text("Just a paragraph.\n", encoding="utf-8")
        book = parse_file(path)
        assert book.title == "My Notes"
        assert [ch.title for ch in book.chapters] == ["Chapter 1"]


def test_plain_text(tmp_path):
    path = tmp_path / "short_story.txt"
    path.write_text("Once upon a time.\n\n\n\nThe end.", encoding="utf-8")
    book = parse_file(path)
    assert book.source_format == "text"
    assert book.chapters[0].text == "Once upon a time.\n\nThe end."


def test_unsupported_and_missing(tmp_path):
    path = tmp_path / "book.pdf"
    path.write_bytes(b"%PDF")
    with pytest.raises(ValueError, match="Unsupported"):
        parse_file(path)
    with pytest.raises(FileNotFoundError):
        parse_file(tmp_path / "nope.epub")


def test_clean_text_keeps_em_dash():
    assert clean_text("wait—what  now’s   it") == "wait—what now's it"


@pytest.mark.parametrize("name", ["notes.txt", "notes.md"])
def test_byte_order_mark_is_not_part_of_first_word(tmp_path, name):
    path = tmp_path / name
    path.write_bytes("\ufeffof a great day".encode("utf-8"))
    text = parse_file(path).chapters[0].text
    assert text == "of a great day"
    first = tokenize(text)[0]
    assert first == Token("of", 0, 2)
    assert split_at_anchor("of") == ("", "o", "f")
    assert display_unit(tokenize(text), 0).text == "of a"


def test_clean_text_drops_stray_byte_order_marks():
    assert clean_text("one\ufeff two") == "one two"
