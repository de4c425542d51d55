"""Source connectors (fetcher + extractor pairs)."""
