import json

import pytest
import yaml

from docpager import keys
from docpager.errors import ConfigurationError
from docpager.orchestrator import run_once


def _write_site(root, n_posts=5, page_size=2):
    posts = root / "posts"
    posts.mkdir()
    for i in range(n_posts):
        (posts / f"post-{i}.yaml").write_text(
            yaml.safe_dump({"title": f"Post {i}", "date": f"2024-01-0{i + 1}", "content": f"body {i}"}),
            encoding="utf-8",
        )
    (root / "archive.json").write_text(json.dumps({"title": "Archive"}), encoding="utf-8")
    cfg = {
        "output": {"dir": "site"},
        "pipelines": [
            {
                "name": "posts",
                "stages": [
                    {"type": "read", "pattern": "posts/*.yaml"},
                    {"type": "order_by", "key": "date", "descending": True},
                ],
            },
            {
                "name": "archive",
                "stages": [
                    {"type": "read", "pattern": "archive.json"},
                    {"type": "paginate", "page_size": page_size, "stages": [{"type": "documents", "pipeline": "posts"}]},
                    {"type": "write", "name": "archive-{CurrentPage}.json"},
                ],
            },
        ],
    }
    path = root / "site.yaml"
    path.write_text(yaml.safe_dump(cfg), encoding="utf-8")
    return path


def test_run_once_writes_one_file_per_page(tmp_path):
    cfg_path = _write_site(tmp_path)
    results = run_once(str(cfg_path))

    assert len(results["posts"]) == 5
    assert results["posts"][0]["title"] == "Post 4"
    assert len(results["archive"]) == 3

    written = sorted(p.name for p in (tmp_path / "site").iterdir())
    assert written == ["archive-1.json", "archive-2.json", "archive-3.json"]

    page2 = json.loads((tmp_path / "site" / "archive-2.json").read_text(encoding="utf-8"))
    meta = page2["metadata"]
    assert meta["title"] == "Archive"
    assert meta[keys.CURRENT_PAGE] == 2
    assert meta[keys.TOTAL_PAGES] == 3
    assert meta[keys.HAS_NEXT_PAGE] is True and meta[keys.HAS_PREVIOUS_PAGE] is True
    assert [d["metadata"]["title"] for d in meta[keys.PAGE_DOCUMENTS]] == ["Post 2", "Post 1"]
    assert page2["content"] == ""


def test_run_once_overrides(tmp_path):
    cfg_path = _write_site(tmp_path)
    results = run_once(str(cfg_path), overrides={"page_size": 5, "out_dir": "alt", "unused": None})
    assert len(results["archive"]) == 1
    assert [p.name for p in (tmp_path / "alt").iterdir()] == ["archive-1.json"]


def test_run_once_passthrough_leaves_template_unpaged(tmp_path):
    cfg_path = _write_site(tmp_path, n_posts=0)
    # the template passes through without CurrentPage, so the write template cannot be filled
    with pytest.raises(ValueError, match="CurrentPage"):
        run_once(str(cfg_path))


def test_invalid_page_size_is_a_configuration_error(tmp_path):
    cfg_path = _write_site(tmp_path, page_size=0)
    with pytest.raises(ConfigurationError):
        run_once(str(cfg_path))


def test_schema_violation_is_a_configuration_error(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text(yaml.safe_dump({"pipelines": [{"name": "x", "stages": [{"type": "nope"}]}]}), encoding="utf-8")
    with pytest.raises(ConfigurationError, match="Config validation error"):
        run_once(str(path))
