"""Shared constants for fanfic-finder."""

from __future__ import annotations

# Sentinel used when a listing carries no summary blurb
NO_SUMMARY = "No summary provided."

# Paginator defaults
DEFAULT_PAGE_SIZE = 5
DEFAULT_SUMMARY_LIMIT = 200
ELLIPSIS = "..."
EMBED_COLOR = 0xFF66CC

# Discord hard limits for embed fields
EMBED_FIELD_NAME_LIMIT = 256
EMBED_FIELD_VALUE_LIMIT = 1024

# Archive of Our Own
AO3_ORIGIN = "https://archiveofourown.org"
AO3_SEARCH_URL = AO3_ORIGIN + "/works/search?work_search%5Bquery%5D={query}&page={page}"

# FanFiction.net
FFN_ORIGIN = "https://www.fanfiction.net"
FFN_SEARCH_URL = FFN_ORIGIN + "/search/?keywords={query}&type=story&p={page}"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
)

# Chat notices
OWNER_ONLY_NOTICE = "Only the requester can use these buttons."
