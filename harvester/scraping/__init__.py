"""
Crawl engine: fetch, extract, checkpoint, and merge paginated table records.
"""
