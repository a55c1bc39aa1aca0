"""Linkbox/Telebox endpoint paths, selectors and defaults."""

from __future__ import annotations

DEFAULT_BASE_URL = "https://www.linkbox.to"

# JSON API (token-authenticated, query-string parameters)
LIST_PATH = "/api/open/file_search"
FILE_INFO_PATH = "/api/open/file_detail"
DOWNLOAD_PATH = "/api/open/get_download_url"

# Web fallback
MY_FILES_PATH = "/admin/myfile"

# Fixed listing page size; also the has-more threshold
PAGE_SIZE = 50

UNKNOWN_FILE_NAME = "Unknown file"

# "My files" listing: class-based layout first, legacy table rows second
LISTING_SELECTORS = ("div.file-item", "table.file-list tr", "table tr[data-id]")
LISTING_NAME_SELECTORS = (".file-name", ".name", "td.name", "a")

# Item page download controls
DOWNLOAD_SELECTORS = (
    "a.download-btn, button.download-btn, a.btn-download, button.btn-download",
    "a[download], [data-download-url]",
)
DOWNLOAD_ATTRS = ("href", "data-download-url")

JSON_HEADERS = {"Accept": "application/json"}
