from __future__ import annotations

from .bio_extractor import BioRecord, extract_bio
from .quotes import QuoteLine, pick_quote_line, split_quote
from .url_validator import RejectReason, UrlVerdict, check_url, validate_url

__version__ = "0.1.0"

__all__ = [
    "BioRecord",
    "QuoteLine",
    "RejectReason",
    "UrlVerdict",
    "__version__",
    "check_url",
    "extract_bio",
    "pick_quote_line",
    "split_quote",
    "validate_url",
]
