"""Graft price table - per-quarter ASP reference data"""

from typing import Iterable, List, Optional, Sequence, Set, Tuple
from woundcare_revenue.domain.models import GraftProduct, PriceQuarter, PriceTableValidation
from woundcare_revenue.domain.exceptions import ProductNotFoundError, AmbiguousProductError


def validate_price_table(products: Iterable[GraftProduct]) -> PriceTableValidation:
    """
    Check a quarter's products for configuration errors.

    Every violation is reported, not just the first:
    - Duplicate (manufacturer, product_name, billing_code) keys
    - Non-positive or non-finite unit prices
    """
    errors: List[str] = []
    seen: Set[Tuple[str, str, str]] = set()

    for product in products:
        if product.key in seen:
            errors.append(
                f"Duplicate graft: {product.manufacturer} {product.product_name} ({product.billing_code})"
            )
        seen.add(product.key)

        if not product.unit_price.is_finite() or product.unit_price <= 0:
            errors.append(
                f"Invalid price for {product.manufacturer} {product.product_name}: {product.unit_price}"
            )

    return PriceTableValidation(valid=not errors, errors=errors)


class GraftPriceTable:
    """
    Read-only price table for the current pricing quarter.

    Built once at startup and shared across requests. Archived quarters are
    kept for audit only and never take part in lookups.
    """

    def __init__(
        self,
        year: int,
        quarter: str,
        products: Sequence[GraftProduct],
        history: Sequence[PriceQuarter] = (),
    ):
        self.year = year
        self.quarter = quarter
        self._products: Tuple[GraftProduct, ...] = tuple(products)
        self._history: Tuple[PriceQuarter, ...] = tuple(
            PriceQuarter(q.year, q.quarter, tuple(q.products)) for q in history
        )

    @property
    def quarter_label(self) -> str:
        return f"{self.quarter} {self.year}"

    @property
    def products(self) -> Tuple[GraftProduct, ...]:
        """All products of the current quarter, discontinued ones included"""
        return self._products

    @property
    def history(self) -> Tuple[PriceQuarter, ...]:
        return self._history

    def active_products(self) -> List[GraftProduct]:
        """Products available for selection, in configured order"""
        return [p for p in self._products if p.is_active]

    def validate(self) -> PriceTableValidation:
        return validate_price_table(self._products)

    def find_product(
        self,
        billing_code: str,
        manufacturer: Optional[str] = None,
        product_name: Optional[str] = None,
    ) -> GraftProduct:
        """
        Resolve a selection to exactly one active product.

        Raises:
            ProductNotFoundError: Nothing active matches
            AmbiguousProductError: Billing code alone matches several products
        """
        matches = [
            p
            for p in self.active_products()
            if p.billing_code == billing_code
            and (manufacturer is None or p.manufacturer == manufacturer)
            and (product_name is None or p.product_name == product_name)
        ]

        if not matches:
            raise ProductNotFoundError(f"No active graft product with billing code {billing_code}")
        if len(matches) > 1:
            raise AmbiguousProductError(
                f"Billing code {billing_code} matches {len(matches)} products; "
                "specify manufacturer and product_name"
            )
        return matches[0]

    def select(
        self,
        billing_code: Optional[str],
        manufacturer: Optional[str] = None,
        product_name: Optional[str] = None,
    ) -> Optional[GraftProduct]:
        """Like find_product, but an empty selection yields None for the caller to reject"""
        if not billing_code:
            return None
        return self.find_product(billing_code, manufacturer, product_name)
