from typing import Any

# Metrics (created once in server.py; None until then)
REQUEST_COUNT: Any = None
REQUEST_LATENCY: Any = None
CITATIONS_VALIDATED: Any = None
