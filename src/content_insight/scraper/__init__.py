"""Source-page scraping for supported social-content platforms.

Sub-modules:
- ``config``             — platform markers, user-agent and size limits
- ``url_classifier``     — validates a URL and maps it to a :class:`Platform`
- ``http_fetcher``       — async httpx-based page fetcher
- ``content_extractor``  — BeautifulSoup selector-table extraction
"""
