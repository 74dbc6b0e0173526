"""Tax estimator factory.

Only the static state table ships today; TAX_ESTIMATOR_ADAPTER is read so a
hosted tax service can be slotted in without touching the resolver.
"""

import os

from storefront.tax.port import TaxEstimator


def build_tax_estimator() -> TaxEstimator:
    adapter = os.environ.get("TAX_ESTIMATOR_ADAPTER", "table")
    if adapter == "table":
        from storefront.tax.table_adapter import TableTaxEstimator

        return TableTaxEstimator()
    raise ValueError(f"Unknown tax estimator adapter: {adapter}")
