"""
Configuration management for the foosball scheduler.
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Dict, Literal, Optional

from .generator.repair import MAX_RESTARTS, PASS_FACTOR


class ColumnMap(BaseModel):
    """Column names of the player table."""
    name: str = Field(default="name", description="Column holding player names")
    rating: str = Field(default="elo", description="Column holding player ratings")

    @field_validator('name', 'rating')
    @classmethod
    def validate_not_blank(cls, v):
        if not v.strip():
            raise ValueError("Column names must not be blank")
        return v

    @model_validator(mode='after')
    def validate_distinct(self):
        if self.name == self.rating:
            raise ValueError(f"Name and rating columns must differ: {self.name}")
        return self


class SearchSettings(BaseModel):
    """Parallel search budget."""
    trials: int = Field(default=100_000, ge=1, description="Candidate schedules to sample")
    workers: Optional[int] = Field(default=None, ge=1, description="Parallel workers (default: CPU count)")
    executor: Literal["process", "thread"] = Field(default="process", description="Worker pool type")
    seed: int = Field(default=0, description="Base seed added to every worker seed")


class RepairSettings(BaseModel):
    """Budgets of the conflict-repair generator."""
    max_restarts: int = Field(default=MAX_RESTARTS, ge=0, description="Fresh attempts before falling back")
    pass_factor: int = Field(default=PASS_FACTOR, ge=1, description="Repair passes per player")


class OutputSettings(BaseModel):
    """Output configuration."""
    table_csv: str = Field(default="table.csv", description="Tournament table written for play")
    excel_path: Optional[str] = Field(default=None, description="Optional Excel workbook")
    include_summaries: bool = Field(default=True, description="Include summary sheets")
    sheets: Dict[str, str] = Field(
        default_factory=lambda: {
            "schedule": "Schedule",
            "players": "Players",
            "scores": "Score Distribution",
        },
        description="Sheet names"
    )


class SchedulerConfig(BaseModel):
    """Main configuration for the foosball scheduler."""
    columns: ColumnMap = Field(default_factory=ColumnMap)
    search: SearchSettings = Field(default_factory=SearchSettings)
    repair: RepairSettings = Field(default_factory=RepairSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)


def load_config(config_path: str) -> SchedulerConfig:
    """Load configuration from YAML file."""
    import yaml

    with open(config_path, 'r') as f:
        config_data = yaml.safe_load(f) or {}

    return SchedulerConfig(**config_data)


def save_config(config: SchedulerConfig, config_path: str) -> None:
    """Save configuration to YAML file."""
    import yaml

    with open(config_path, 'w') as f:
        yaml.dump(config.model_dump(), f, default_flow_style=False, indent=2)
