"""Docpager package.

Submodules are imported explicitly (``docpager.pipeline``,
``docpager.stages.paginate``, ...). The pipeline, stage and orchestrator
modules configure logging on import through ``docpager.utils.get_logger``.
"""

__all__: list[str] = []
