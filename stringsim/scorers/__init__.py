"""
Scorer package export and registration.

Exposes `SCORER_REGISTRY` and `resolve`, and imports the available scorers for
side‑effect registration into the registry.
"""

from .registry import (  # noqa: F401
    DISPLAY_NAMES,
    SCORER_REGISTRY,
    Metric,
    available_metrics,
    normalize_metric_name,
    resolve,
)

# Import modules that register themselves in the registry on import.
from . import edit_distance  # noqa: F401
from . import token_set_ratio  # noqa: F401
from . import tfidf_char_cosine  # noqa: F401
