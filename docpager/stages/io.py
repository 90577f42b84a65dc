from __future__ import annotations

import glob
import json
import os
import typing as t
from pathlib import Path

import yaml

from docpager import keys
from docpager.document import Document
from docpager.errors import ConfigurationError
from docpager.utils import get_logger, load_file, write_json

if t.TYPE_CHECKING:
    from docpager.pipeline import ExecutionContext

logger = get_logger(__name__)


def _parse(path: Path) -> t.Any:
    raw = load_file(str(path))
    if path.suffix.lower() == ".json":
        return json.loads(raw)
    return yaml.safe_load(raw)


def _record_to_document(record: t.Any, path: Path) -> Document:
    if not isinstance(record, dict):
        raise ValueError(f"Expected a mapping in {path}, got {type(record).__name__}")
    meta = dict(record)
    content = meta.pop("content", "")
    meta.setdefault(keys.SOURCE_FILE, str(path))
    return Document(source=str(path), content=str(content or ""), metadata=meta)


class ReadDocuments:
    """Loads documents from JSON or YAML files matching a glob pattern.

    Each file holds one mapping or a list of mappings. ``content`` becomes the
    document body, every other key becomes metadata. Paths are read in sorted
    order; the stage inputs are discarded. Absolute patterns ignore
    ``base_dir``.
    """

    def __init__(self, pattern: str, base_dir: t.Union[str, Path] = "."):
        if not pattern:
            raise ConfigurationError("read stage requires a pattern")
        self.pattern = pattern
        self.base_dir = Path(base_dir)

    def execute(self, inputs: t.Sequence[Document], context: "ExecutionContext") -> t.List[Document]:
        # os.path.join keeps an absolute pattern as-is
        matches = glob.glob(os.path.join(str(self.base_dir), self.pattern))
        paths = sorted(Path(p) for p in matches if os.path.isfile(p))
        docs: t.List[Document] = []
        for path in paths:
            data = _parse(path)
            if data is None:
                continue
            records = data if isinstance(data, list) else [data]
            docs.extend(_record_to_document(r, path) for r in records)
        logger.info("read: pattern=%s files=%d docs=%d", self.pattern, len(paths), len(docs))
        return docs


def _to_jsonable(value: t.Any, depth: int) -> t.Any:
    if isinstance(value, Document):
        return document_to_dict(value, depth + 1)
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v, depth) for v in value]
    if isinstance(value, dict):
        return {str(k): _to_jsonable(v, depth) for k, v in value.items()}
    return value


def document_to_dict(doc: Document, depth: int = 0) -> t.Dict[str, t.Any]:
    """Serializable view of ``doc``.

    Documents nested inside metadata (e.g. page contents) are expanded one
    level; their own page lists are dropped to keep the output flat.
    """
    meta = doc.metadata
    if depth > 0:
        meta = {k: v for k, v in meta.items() if k != keys.PAGE_DOCUMENTS}
    return {
        "source": doc.source,
        "content": doc.content,
        "metadata": {k: _to_jsonable(v, depth) for k, v in meta.items()},
    }


class WriteDocuments:
    """Writes each document to ``out_dir`` as JSON and passes it through.

    ``name`` is a ``str.format`` template filled from the document metadata,
    e.g. ``archive-{CurrentPage}.json``.
    """

    def __init__(self, out_dir: t.Union[str, Path], name: str):
        if not name:
            raise ConfigurationError("write stage requires a name template")
        self.out_dir = Path(out_dir)
        self.name = name

    def execute(self, inputs: t.Sequence[Document], context: "ExecutionContext") -> t.Sequence[Document]:
        written = 0
        for doc in inputs:
            try:
                filename = self.name.format_map(doc.metadata)
            except KeyError as e:
                raise ValueError(f"write: metadata key {e} missing for template {self.name!r} (source={doc.source})") from e
            write_json(os.path.join(str(self.out_dir), filename), document_to_dict(doc))
            written += 1
        logger.info("write: dir=%s files=%d", self.out_dir, written)
        return inputs
