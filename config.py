"""Configuration for the PC build normalizer."""
import os
from dataclasses import dataclass, field

from thresholds import ThresholdPolicy


@dataclass
class Config:
    # Discount significance (see ThresholdPolicy)
    discount_min_percent: float = 1.0
    discount_min_absolute: float = 50000.0
    round_percent_tolerance: float = 0.1
    round_percent_step: int = 5
    default_discount_source: str = "manual"

    # Display
    language: str = "vi"  # "vi" | "en"

    # Persistence API
    persistence_url: str = field(
        default_factory=lambda: os.environ.get("PC_CONFIG_API_URL", "")
    )
    persistence_token: str = field(
        default_factory=lambda: os.environ.get("PC_CONFIG_API_TOKEN", "")
    )
    persistence_timeout: int = 15  # seconds

    # Output
    results_dir: str = "results"
    logs_dir: str = "logs"

    def threshold_policy(self) -> ThresholdPolicy:
        return ThresholdPolicy(
            min_percent=self.discount_min_percent,
            min_absolute=self.discount_min_absolute,
            round_tolerance=self.round_percent_tolerance,
            round_step=self.round_percent_step,
            default_source=self.default_discount_source,
        )

    def persistence_headers(self) -> dict:
        if not self.persistence_token:
            return {}
        return {"Authorization": f"Bearer {self.persistence_token}"}
