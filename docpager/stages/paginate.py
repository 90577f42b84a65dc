from __future__ import annotations

import typing as t
from dataclasses import dataclass

from docpager import keys
from docpager.document import Document
from docpager.errors import ConfigurationError
from docpager.stages.partition import partition
from docpager.utils import get_logger

if t.TYPE_CHECKING:
    from docpager.pipeline import ExecutionContext, Stage

logger = get_logger(__name__)


@dataclass(frozen=True)
class PageMetadata:
    documents: t.Tuple[Document, ...]
    current_page: int
    total_pages: int

    # page contents hold unhashable documents
    __hash__ = None  # type: ignore[assignment]

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.current_page > 1

    def as_overlay(self) -> t.Dict[str, t.Any]:
        return {
            keys.PAGE_DOCUMENTS: self.documents,
            keys.CURRENT_PAGE: self.current_page,
            keys.TOTAL_PAGES: self.total_pages,
            keys.HAS_NEXT_PAGE: self.has_next_page,
            keys.HAS_PREVIOUS_PAGE: self.has_previous_page,
        }


def build_page_metadata(pages: t.Sequence[t.Tuple[Document, ...]]) -> t.List[PageMetadata]:
    total = len(pages)
    return [PageMetadata(documents=page, current_page=i + 1, total_pages=total) for i, page in enumerate(pages)]


class Paginate:
    """Splits the output of a nested pipeline into pages.

    The stage inputs seed the nested ``stages``; their combined output is cut
    into pages of ``page_size`` documents. Every input document is then cloned
    once per page with the page contents and position attached under the
    ``docpager.keys`` metadata names. When the nested pipeline produces
    nothing, the inputs pass through untouched.

    With 50 posts and ``Paginate(10, Documents("posts"))`` applied to one
    archive template, the result is 5 clones of the template.
    """

    def __init__(self, page_size: int, *stages: "Stage"):
        if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
            raise ConfigurationError(f"page_size must be a positive integer, got {page_size!r}")
        self.page_size = page_size
        self.stages: t.Tuple["Stage", ...] = stages

    def execute(self, inputs: t.Sequence[Document], context: "ExecutionContext") -> t.Sequence[Document]:
        results = context.run(self.stages, inputs)
        pages = list(partition(results, self.page_size))
        if not pages:
            logger.info("paginate: no documents to page, passing through inputs=%d", len(inputs))
            return inputs

        meta = build_page_metadata(pages)
        out = [doc.clone(m.as_overlay()) for doc in inputs for m in meta]
        logger.info(
            "paginate: results=%d pages=%d (size=%d) inputs=%d outputs=%d",
            len(results),
            len(pages),
            self.page_size,
            len(inputs),
            len(out),
        )
        return out
