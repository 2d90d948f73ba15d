from __future__ import annotations

import pytest

from rss_archive.detect import detect_format, root_name
from rss_archive.exceptions import FeedParseError
from rss_archive.models import FeedFormat


def test_detects_rss_and_atom(rss_xml, atom_xml):
    assert detect_format(rss_xml) is FeedFormat.RSS
    assert detect_format(atom_xml) is FeedFormat.ATOM


def test_namespace_is_stripped(atom_xml):
    assert root_name(atom_xml) == "feed"


def test_unknown_root(html_doc):
    assert root_name(html_doc) == "html"
    assert detect_format(html_doc) is FeedFormat.UNKNOWN


def test_rdf_is_unknown():
    doc = b'<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"/>'
    assert detect_format(doc) is FeedFormat.UNKNOWN


@pytest.mark.parametrize("content", [b"", b"not xml at all", b"<<rss>"])
def test_not_xml_raises(content):
    with pytest.raises(FeedParseError):
        detect_format(content)


@pytest.mark.parametrize(
    "content",
    [
        b"<!doctype html>\n<html><head><meta charset=utf-8></head><body></body></html>",
        b"\n  <HTML><body><br></body></HTML>",
    ],
)
def test_html_that_is_not_xml_reports_html(content):
    assert root_name(content) == "html"
    assert detect_format(content) is FeedFormat.UNKNOWN
