"""Analysis thresholds model.

Every number that shapes a recommendation or a health penalty lives here so
projects can tune them from configuration.
"""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class AnalysisThresholds(BaseModel):
    """Analysis configuration section.

    Attributes:
        coverage_warning: Overall coverage (percent) below which coverage
            reports warn.
        requirements_warning: Requirement coverage (percent) below which
            coverage reports warn.
        components_warning: Component coverage (percent) below which
            coverage reports warn.
        health_improvement: Coverage (percent) below which the health check
            recommends improving coverage.
        cycle_penalty: Health points lost per cycle.
        max_cycle_penalty: Cap on the total cycle penalty.
        unresolved_penalty: Health points lost per unresolved reference.
        max_unresolved_penalty: Cap on the total unresolved-reference penalty.
        max_depth: Recommended maximum dependency depth.
        max_depth_penalty: Cap on the excess-depth penalty.
        max_nodes: Graph size above which complexity is penalized.
        max_nodes_penalty: Cap on the complexity penalty.
        validation_error_penalty: Validation score lost per error.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    coverage_warning: int = Field(default=70, ge=0, le=100)
    requirements_warning: int = Field(default=80, ge=0, le=100)
    components_warning: int = Field(default=90, ge=0, le=100)
    health_improvement: int = Field(default=80, ge=0, le=100)
    cycle_penalty: int = Field(default=5, ge=0)
    max_cycle_penalty: int = Field(default=30, ge=0, le=100)
    unresolved_penalty: int = Field(default=5, ge=0)
    max_unresolved_penalty: int = Field(default=25, ge=0, le=100)
    max_depth: int = Field(default=10, ge=1)
    max_depth_penalty: int = Field(default=20, ge=0, le=100)
    max_nodes: int = Field(default=100, ge=1)
    max_nodes_penalty: int = Field(default=15, ge=0, le=100)
    validation_error_penalty: int = Field(default=10, ge=0, le=100)
