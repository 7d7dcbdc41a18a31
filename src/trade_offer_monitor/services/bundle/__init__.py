"""Budget-constrained bundle search."""

from trade_offer_monitor.services.bundle.bundle_optimizer import (
    EMPTY_BUNDLE,
    BundleResult,
    best_bundle,
)

__all__ = ["BundleResult", "EMPTY_BUNDLE", "best_bundle"]
