"""
HTML row source
Reads a tracker listing table with BeautifulSoup and exposes its rows.
"""
from __future__ import annotations

import re
from typing import List, Optional

from bs4 import BeautifulSoup

from rowsift.extract.row_parser import ROW_ID_RE, TORRENT_ID_RE
from rowsift.extract.types import InlineMarker, MediaCategory, SourceRow, TableHints

DETAILS_LINK_SELECTOR = 'a[href*="torrents.php"], a[href*="torrents2.php"]'
DOWNLOAD_LINK_SELECTOR = 'a[href*="/torrent/"], a[href*="/download/"]'
FLAG_SELECTOR = ".flag, [class*='flag']"
MARKER_SELECTOR = ".ab-seadex-icon, .seadex-icon, [class*='freeleech']"
HEADING_SELECTOR = "#content .thin h2"
LEAF_ROW_SELECTOR = "tr.group_torrent, tr.torrent"
MUSIC_LISTING_PATH = "torrents2.php"
ARROW_PREFIX_RE = re.compile(r"^»\s*")


def _classes(tag) -> tuple:
    return tuple(tag.get("class") or ())


def _heading_text(soup: BeautifulSoup) -> Optional[str]:
    heading = soup.select_one(HEADING_SELECTOR)
    if heading is None:
        return None
    # Only text directly inside the heading; linked names are not type cues.
    parts = [str(node).strip() for node in heading.find_all(string=True, recursive=False)]
    return " ".join(part for part in parts if part)


class HtmlTableSource:
    """Row source over one ``<table>`` of a saved listing page."""

    def __init__(self, html, table_id: Optional[str] = None, page_url: Optional[str] = None):
        self.soup = BeautifulSoup(html, "html.parser")
        self.table = self._find_table(table_id)
        context = MediaCategory.MUSIC if page_url and MUSIC_LISTING_PATH in page_url else None
        self.hints = TableHints(
            identifier=self.table.get("id") if self.table is not None else table_id,
            context=context,
            heading=_heading_text(self.soup),
        )

    def _find_table(self, table_id: Optional[str]):
        if table_id:
            return self.soup.find("table", id=table_id)
        for table in self.soup.find_all("table"):
            if table.select_one(LEAF_ROW_SELECTOR):
                return table
        return self.soup.find("table")

    def rows(self) -> List[SourceRow]:
        if self.table is None:
            return []
        return [self._convert(tr) for tr in self.table.find_all("tr")]

    def _convert(self, tr) -> SourceRow:
        tags = frozenset(_classes(tr))
        element_id = tr.get("id", "")
        cells = tuple(td.get_text().strip() for td in tr.find_all("td", recursive=False))

        if "edition_info" in tags:
            return SourceRow(tags=tags, cells=cells, element_id=element_id, title=tr.get_text().strip())

        if "group" in tags:
            h3 = tr.find("h3")
            title = (h3.get_text().strip() if h3 else "") or tr.get_text().strip()
            first_cell = tr.find("td")
            header_html = first_cell.decode_contents() if first_cell else ""
            return SourceRow(tags=tags, cells=cells, element_id=element_id, title=title, header_html=header_html)

        main = tr.find("td")
        if main is None:
            return SourceRow(tags=tags, cells=cells, element_id=element_id)

        details_anchor = main.select_one(DETAILS_LINK_SELECTOR)
        download_anchor = main.select_one(DOWNLOAD_LINK_SELECTOR)
        link = details_anchor.get("href") if details_anchor else None
        descriptor = ARROW_PREFIX_RE.sub("", details_anchor.get_text().strip()) if details_anchor else ""

        flags = [str(img) for img in main.find_all("img")]
        flags.extend(str(element) for element in main.select(FLAG_SELECTOR))
        markers = tuple(
            InlineMarker(classes=_classes(element), title=element.get("title", ""), text=element.decode_contents())
            for element in main.select(MARKER_SELECTOR)
        )

        return SourceRow(
            tags=tags,
            cells=cells,
            descriptor=descriptor,
            link=link,
            download_link=download_anchor.get("href", "") if download_anchor else "",
            element_id=element_id,
            flags=tuple(flags),
            markers=markers,
            main_html=main.decode_contents(),
            details_html=self._details_html(tr, link or "", element_id),
        )

    def _details_html(self, tr, link: str, element_id: str) -> Optional[str]:
        match = TORRENT_ID_RE.search(link) or ROW_ID_RE.search(element_id)
        if not match:
            return None
        sibling = tr.find_next_sibling("tr")
        if sibling is None or "pad" not in _classes(sibling):
            return None
        if sibling.get("id") != f"torrent_{match.group(1)}":
            return None
        return sibling.decode_contents()
