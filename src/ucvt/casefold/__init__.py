"""Unicode case folding.

Read-only lookup into a generated hash table of full (C + F) case-fold
mappings. The generator that produces the table lives in
``ucvt.casefold.generator`` and is only needed to refresh it.
"""

from ucvt.casefold._table import UNICODE_VERSION
from ucvt.casefold.lookup import bucket_index, fold, fold_expansion

__all__ = [
    "UNICODE_VERSION",
    "bucket_index",
    "fold",
    "fold_expansion",
]
