from __future__ import annotations

import typing as t

from docpager.document import Document
from docpager.utils import get_logger

if t.TYPE_CHECKING:
    from docpager.pipeline import ExecutionContext

logger = get_logger(__name__)


class Documents:
    """Replaces the inputs with the output of an earlier pipeline."""

    def __init__(self, pipeline: str):
        self.pipeline = pipeline

    def execute(self, inputs: t.Sequence[Document], context: "ExecutionContext") -> t.List[Document]:
        docs = context.documents(self.pipeline)
        logger.debug("documents: pipeline=%s docs=%d", self.pipeline, len(docs))
        return list(docs)


class OrderBy:
    """Stable sort on a metadata key. Documents missing the key go last."""

    def __init__(self, key: str, descending: bool = False):
        self.key = key
        self.descending = descending

    def execute(self, inputs: t.Sequence[Document], context: "ExecutionContext") -> t.List[Document]:
        present = [d for d in inputs if self.key in d]
        missing = [d for d in inputs if self.key not in d]
        present = sorted(present, key=lambda d: d[self.key], reverse=self.descending)
        return present + missing
