import os
import tempfile

# logger is configured on first import; keep its file handler out of the repo
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="docpager-logs-"))
