"""Metadata keys attached to documents by the built-in stages."""

PAGE_DOCUMENTS = "PageDocuments"
CURRENT_PAGE = "CurrentPage"
TOTAL_PAGES = "TotalPages"
HAS_NEXT_PAGE = "HasNextPage"
HAS_PREVIOUS_PAGE = "HasPreviousPage"

# set by ReadDocuments
SOURCE_FILE = "SourceFile"
