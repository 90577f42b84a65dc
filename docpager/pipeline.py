from __future__ import annotations

import time
import uuid
import typing as t

from docpager.document import Document
from docpager.errors import ConfigurationError, PipelineNotFoundError
from docpager.utils import get_logger

logger = get_logger(__name__)


@t.runtime_checkable
class Stage(t.Protocol):
    """Anything with ``execute(inputs, context) -> documents`` can be a stage."""

    def execute(self, inputs: t.List[Document], context: "ExecutionContext") -> t.Sequence[Document]:
        ...


def _stage_name(stage: Stage) -> str:
    return type(stage).__name__


class ExecutionContext:
    """Runs stage lists and exposes the outputs of pipelines that already ran."""

    def __init__(self, outputs: t.Optional[t.Mapping[str, t.Sequence[Document]]] = None):
        self._outputs: t.Dict[str, t.List[Document]] = {k: list(v) for k, v in (outputs or {}).items()}

    def run(self, stages: t.Sequence[Stage], documents: t.Sequence[Document]) -> t.List[Document]:
        docs = list(documents)
        for stage in stages:
            docs = list(stage.execute(docs, self))
            logger.debug("stage %s -> docs=%d", _stage_name(stage), len(docs))
        return docs

    def documents(self, pipeline: str) -> t.List[Document]:
        try:
            return self._outputs[pipeline]
        except KeyError:
            raise PipelineNotFoundError(f"Pipeline has not been executed: {pipeline}") from None

    def store(self, pipeline: str, documents: t.Sequence[Document]) -> None:
        self._outputs[pipeline] = list(documents)


class Engine:
    """Ordered collection of named pipelines executed one after another.

    Each pipeline starts from an empty document list; later pipelines can read
    earlier outputs through the shared ``ExecutionContext``.
    """

    def __init__(self):
        self._pipelines: t.Dict[str, t.List[Stage]] = {}

    def add(self, name: str, *stages: Stage) -> "Engine":
        if name in self._pipelines:
            raise ConfigurationError(f"Duplicate pipeline name: {name}")
        self._pipelines[name] = list(stages)
        return self

    @property
    def pipelines(self) -> t.List[str]:
        return list(self._pipelines)

    def execute(self) -> t.Dict[str, t.List[Document]]:
        run_id = uuid.uuid4().hex[:8]
        logger.info("=== engine start id=%s pipelines=%d ===", run_id, len(self._pipelines))
        context = ExecutionContext()
        results: t.Dict[str, t.List[Document]] = {}
        try:
            for name, stages in self._pipelines.items():
                t0 = time.monotonic()
                docs = context.run(stages, [])
                context.store(name, docs)
                results[name] = docs
                logger.info("pipeline %s docs=%d took_ms=%d", name, len(docs), int((time.monotonic() - t0) * 1000))
        finally:
            logger.info("=== engine end id=%s ===", run_id)
        return results
