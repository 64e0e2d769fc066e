"""Search and filter engine for a legislative bill browser.

Holds the full bill collection for a browsing session and serves filtered,
paginated views of it:

- **Name summarizer**: short human labels derived from raw bill titles
- **Filter predicates**: free-text AND search plus topic / sponsor / status facets
- **Result cache**: memoized filter results keyed by canonical filter state
- **Paginator**: "load more" visible window over the current results
- **Controller**: owns filter state, debounces text input, drives the above
"""
