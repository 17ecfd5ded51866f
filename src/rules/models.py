from typing import Literal

from pydantic import BaseModel, Field

from src.core.entities import PaperCardSettings


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class DistributionRules(BaseModel):
    site_base_url: str = "http://localhost:3000"
    card_path_prefix: str = "/card"


class ViewsRules(BaseModel):
    dedupe_window_seconds: int = Field(default=5, ge=0)
    max_device_info_length: int = Field(default=512, gt=0)
    max_card_name_length: int = Field(default=255, gt=0)


class PaperRules(BaseModel):
    default_size: str = "A4"
    default_width: float = 210
    default_height: float = 297
    default_unit: Literal["mm", "in", "px", "pt"] = "mm"
    default_orientation: Literal["portrait", "landscape"] = "portrait"
    default_bleed: float = 0
    default_safe_area: float = 0
    default_dpi: int = Field(default=300, gt=0)

    def to_settings(self) -> PaperCardSettings:
        return PaperCardSettings.model_validate(
            {
                "size": {
                    "name": self.default_size,
                    "width": self.default_width,
                    "height": self.default_height,
                    "unit": self.default_unit,
                },
                "print_settings": {
                    "bleed": self.default_bleed,
                    "safe_area": self.default_safe_area,
                    "resolution": self.default_dpi,
                },
                "layout": {"orientation": self.default_orientation},
            }
        )


class ContactRules(BaseModel):
    placeholder_name: str = "Unnamed Card"
    download_device_label: str = "vCard Generated"


class Rules(BaseModel):
    project: ProjectRules
    distribution: DistributionRules = Field(default_factory=DistributionRules)
    views: ViewsRules = Field(default_factory=ViewsRules)
    paper: PaperRules = Field(default_factory=PaperRules)
    contact: ContactRules = Field(default_factory=ContactRules)
