from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SearchOptions(BaseModel):
    """Search budget. Zero (or None) means unlimited for either bound."""

    model_config = ConfigDict(extra="forbid", frozen=True)
    max_depth: int = Field(default=0, ge=0)  # node expansions
    max_cost: float = Field(default=0.0, ge=0)  # running-cost ceiling

    @field_validator("max_depth", "max_cost", mode="before")
    @classmethod
    def _none_to_zero(cls, v):
        return 0 if v is None else v

    @property
    def depth_limited(self) -> bool:
        return self.max_depth > 0

    @property
    def cost_limited(self) -> bool:
        return self.max_cost > 0


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    sample_every: int = Field(default=1, ge=1)


class GridModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    rows: list[str]
    wall: str = "#"
    diagonal: bool = True
    heuristic: Literal["octile", "euclidean"] = "octile"

    @field_validator("rows")
    @classmethod
    def _rectangular(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("grid must have at least one row")
        widths = {len(r) for r in v}
        if len(widths) != 1 or 0 in widths:
            raise ValueError(f"grid rows must be non-empty and equal width, got widths {sorted(widths)}")
        return v


class RunConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    run_id: str = "local"
    start: tuple[int, int]
    goal: tuple[int, int]
    grid: GridModel
    search: SearchOptions = Field(default_factory=SearchOptions)
    log: LogModel = Field(default_factory=LogModel)
