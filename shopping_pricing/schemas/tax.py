"""
Tax Schemas for Shopping Pricing
================================

Pydantic models for the tax rate catalog and the item edit dialog preview.

Endpoint Coverage:
------------------
- GET /tax-rates: List the catalog
- GET /tax-rates/{code}: One catalog entry
- GET /tax-rates/category/{category}: Default rate for a product category
- POST /pricing/tax-preview: Base price / tax split for a price and quantity

Rates are percentages (7 means 7%), not fractions.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..services.tax_rates import TaxRateCode, get_tax_rate_by_code


class TaxRateOut(BaseModel):
    """
    Response model for one catalog tax rate.

    Attributes:
        code: Machine code (exempt, general, selective, services)
        name: Short display name
        rate: Percentage
        label: Display label, e.g. "7% - General"
    """
    model_config = ConfigDict(from_attributes=True)

    code: TaxRateCode
    name: str
    rate: float
    label: str


class TaxPreviewRequest(BaseModel):
    """Price and quantity as typed into the item edit dialog."""
    model_config = ConfigDict(allow_inf_nan=False)

    price: float = Field(..., ge=0)
    quantity: float = Field(..., gt=0)
    tax_rate_code: str = TaxRateCode.GENERAL.value
    price_includes_tax: bool = True

    @field_validator("tax_rate_code")
    @classmethod
    def validate_tax_rate_code(cls, v: str) -> str:
        """Reject codes that are not in the catalog."""
        entry = get_tax_rate_by_code(v)
        if entry is None:
            raise ValueError(f"Unknown tax rate code: {v}")
        return entry.code.value


class ItemTaxInfoOut(BaseModel):
    """
    Response model for the tax preview.

    base_price is unrounded; display_base_price is the value to show.
    """
    model_config = ConfigDict(from_attributes=True)

    tax_rate_code: str
    tax_rate: float
    price_includes_tax: bool
    base_price: float
    display_base_price: float
    tax_amount: float
    subtotal: float
