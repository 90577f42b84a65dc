import time
import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional

from docpager.document import Document
from docpager.errors import ConfigurationError
from docpager.pipeline import Engine, Stage
from docpager.stages.documents import Documents, OrderBy
from docpager.stages.io import ReadDocuments, WriteDocuments
from docpager.stages.paginate import Paginate
from docpager.utils import validate_config, get_logger

logger = get_logger(__name__)

def _build_stage(spec: Dict[str, Any], base_dir: Path, out_dir: Path) -> Stage:
    """Instantiate one stage from its config entry."""
    t = spec["type"]
    if t == "read":
        return ReadDocuments(spec["pattern"], base_dir=base_dir)
    elif t == "documents":
        return Documents(spec["pipeline"])
    elif t == "order_by":
        return OrderBy(spec["key"], descending=bool(spec.get("descending", False)))
    elif t == "paginate":
        nested = _build_stages(spec.get("stages") or [], base_dir, out_dir)
        return Paginate(spec["page_size"], *nested)
    elif t == "write":
        return WriteDocuments(out_dir, spec["name"])
    else:
        raise ConfigurationError(f"Unknown stage type: {t}")

def _build_stages(specs: List[Dict[str, Any]], base_dir: Path, out_dir: Path) -> List[Stage]:
    return [_build_stage(s, base_dir, out_dir) for s in specs]

def _override_page_size(stages: List[Dict[str, Any]], page_size: int) -> None:
    for s in stages:
        if s.get("type") == "paginate":
            s["page_size"] = page_size
            _override_page_size(s.get("stages") or [], page_size)

def _apply_overrides(cfg: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> None:
    if not overrides:
        return

    if overrides.get("out_dir") is not None:
        cfg.setdefault("output", {})["dir"] = overrides["out_dir"]

    if overrides.get("page_size") is not None:
        page_size = int(overrides["page_size"])  # type: ignore[arg-type]
        for p in cfg.get("pipelines", []):
            _override_page_size(p.get("stages") or [], page_size)

def build_engine(cfg: Dict[str, Any], base_dir: Path = Path(".")) -> Engine:
    """Assemble an engine from a validated config dict.

    Relative paths (read patterns, output dir) resolve against ``base_dir``.
    """
    out_dir = base_dir / cfg.get("output", {}).get("dir", "out")
    engine = Engine()
    for p in cfg["pipelines"]:
        engine.add(p["name"], *_build_stages(p["stages"], base_dir, out_dir))
    return engine

def _execute_pipeline(cfg: Dict[str, Any], base_dir: Path, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, List[Document]]:
    """Execute the configured pipelines."""
    _apply_overrides(cfg, overrides)
    names = [p["name"] for p in cfg["pipelines"]]
    logger.info("config loaded pipelines=%s", ",".join(names))

    t0 = time.monotonic()
    engine = build_engine(cfg, base_dir)
    logger.info("engine assembled took_ms=%d", int((time.monotonic()-t0)*1000))

    results = engine.execute()
    for name, docs in results.items():
        logger.info("result pipeline=%s docs=%d", name, len(docs))
    return results

def run_once(config_path: str, *, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, List[Document]]:
    """Execute pipelines once with given config file path."""
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f)
        validate_config(cfg)
        base_dir = Path(config_path).resolve().parent
        return _execute_pipeline(cfg, base_dir, {k: v for k, v in (overrides or {}).items() if v is not None})
    except Exception as e:
        logger.error("Run failed: %s", e)
        raise
