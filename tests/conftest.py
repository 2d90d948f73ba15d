from __future__ import annotations

import pytest


RSS_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Example Blog</title>
    <link>https://example.com/</link>
    <description>Posts about &lt;b&gt;things&lt;/b&gt;</description>
    <lastBuildDate>Mon, 02 Jan 2006 15:04:05 GMT</lastBuildDate>
    <pubDate>Sun, 01 Jan 2006 00:00:00 GMT</pubDate>
    <item>
      <title>First</title>
      <link>https://example.com/1</link>
      <guid isPermaLink="false">urn:example:1</guid>
      <pubDate>Mon, 02 Jan 2006 15:04:05 +0000</pubDate>
    </item>
    <item>
      <title>Second</title>
      <link>https://x/1</link>
      <pubDate>02 Jan 06 15:04:05 GMT</pubDate>
    </item>
    <item>
      <title>Third</title>
      <guid>https://example.com/3</guid>
    </item>
    <item>
      <title>Nothing to identify me</title>
    </item>
  </channel>
</rss>
"""

ATOM_XML = b"""<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Atom Example</title>
  <subtitle>All the news</subtitle>
  <id>urn:uuid:feed-1</id>
  <link rel="self" href="https://atom.example/feed.xml"/>
  <link rel="alternate" href="https://atom.example/"/>
  <updated>2024-03-01T10:00:00Z</updated>
  <entry>
    <title>Entry A</title>
    <id>urn:uuid:a</id>
    <link rel="self" href="https://atom.example/a.xml"/>
    <link rel="alternate" href="https://atom.example/a"/>
    <published>2024-02-28T08:00:00+01:00</published>
    <updated>2024-03-01T09:30:00Z</updated>
  </entry>
  <entry>
    <title>Entry B</title>
    <id>urn:uuid:b</id>
    <link rel="related" href="https://other.example/b"/>
    <updated>2024-02-20T12:00:00Z</updated>
  </entry>
  <entry>
    <title>Entry C</title>
    <id>urn:uuid:c</id>
    <link rel="related" href="https://other.example/c1"/>
    <link rel="enclosure" href="https://other.example/c2"/>
  </entry>
  <entry>
    <title>Entry D</title>
  </entry>
</feed>
"""

HTML_DOC = b"<html><body><p>Not a feed</p></body></html>"


@pytest.fixture
def rss_xml() -> bytes:
    return RSS_XML


@pytest.fixture
def atom_xml() -> bytes:
    return ATOM_XML


@pytest.fixture
def html_doc() -> bytes:
    return HTML_DOC
