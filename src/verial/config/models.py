"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, verial.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- verial.toml sections ---


class FeesConfig(BaseModel):
    """[fees] section: provider-side platform fee and GST."""

    model_config = {"frozen": True}

    platform_fee_bps: int = Field(default=1000, ge=0, le=10000)
    gst_bps: int = Field(default=1500, ge=0, le=10000)
    plan_fee_bps: dict[str, int] = Field(
        default_factory=lambda: {"starter": 1000, "pro": 800, "elite": 600}
    )


class CustomerFeeConfig(BaseModel):
    """[customer_fee] section: customer-facing service fee."""

    model_config = {"frozen": True}

    bps: int = Field(default=500, ge=0)
    flat_cents: int = Field(default=0, ge=0)
    min_cents: int = Field(default=100, ge=0)
    max_cents: int = Field(default=1500, ge=0)
    legacy_bps: int = Field(default=0, ge=0)


class RankingConfig(BaseModel):
    """[ranking] section: relevance score weights."""

    model_config = {"frozen": True}

    title_match_points: float = 60.0
    description_match_points: float = 40.0
    business_match_points: float = 20.0
    verified_points: float = 10.0
    rating_weight: float = 10.0
    review_weight: float = 10.0
    trust_weight: float = 0.4
    favorite_weight: float = 5.0


class QuotesConfig(BaseModel):
    """[quotes] section: quote score weights."""

    model_config = {"frozen": True}

    rating_weight: float = 0.4
    price_weight: float = 0.2
    availability_weight: float = 0.2
    response_weight: float = 0.2
    default_response_hours: float = 24.0


class RegionsConfig(BaseModel):
    """[regions] section: suburb/region lookup generation."""

    model_config = {"frozen": True}

    suburbs_csv: str = (
        "data-import/lds-nz-suburbs-and-localities-CSV/nz-suburbs-and-localities.csv"
    )
    regions_csv: str = (
        "data-import/statsnz-regional-council-2025-clipped-CSV/regional-council-2025-clipped.csv"
    )
    output_json: str = "data/nz-regions.generated.json"
    region_name_column: str = "REGC2025_V1_00_NAME"
    source_crs: str = "EPSG:4326"
    target_crs: str = (
        "+proj=tmerc +lat_0=0 +lon_0=173 +k=0.9996 +x_0=1600000 +y_0=10000000 "
        "+ellps=GRS80 +towgs84=0,0,0,0,0,0,0 +units=m +no_defs"
    )
    max_attempts: int = Field(default=64, ge=1)
    included_types: list[str] = Field(default_factory=lambda: ["Suburb", "Locality"])
    forced_assignments: dict[str, str] = Field(
        default_factory=lambda: {"Panguru": "Northland"}
    )
    license_note: str = "LINZ data is typically CC BY 4.0; ensure attribution if distributing."

