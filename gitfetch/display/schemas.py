from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError
from pydantic import ValidationInfo
from pydantic import ValidatorFunctionWrapHandler
from pydantic import field_validator

DEFAULT_PALETTE = ("#ebedf0", "#9be9a8", "#40c463", "#30a14e", "#216e39")
DEFAULT_BOX = "■"


class LenientModel(BaseModel):
    """Model whose fields fall back to their defaults instead of failing validation."""

    model_config = ConfigDict(extra="ignore")

    @field_validator("*", mode="wrap")
    @classmethod
    def default_on_error(
        cls,
        value: Any,
        handler: ValidatorFunctionWrapHandler,
        info: ValidationInfo,
    ) -> Any:
        try:
            return handler(value)
        except ValidationError:
            field = cls.model_fields[info.field_name]
            return field.get_default(call_default_factory=True)


class SearchItem(LenientModel):
    """Pull request or issue shown under a search bucket."""

    title: str = ""
    repo: str = ""


class SearchBucket(LenientModel):
    """Result of one search query: a total and the first few matches."""

    total_count: int = 0
    items: list[SearchItem] = Field(default_factory=list)

    @field_validator("items", mode="before")
    @classmethod
    def keep_mapping_items(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [item for item in value if isinstance(item, Mapping)]
        return value


class PullRequestSummary(LenientModel):
    awaiting_review: SearchBucket = Field(default_factory=SearchBucket)
    open: SearchBucket = Field(default_factory=SearchBucket)
    mentions: SearchBucket = Field(default_factory=SearchBucket)


class IssueSummary(LenientModel):
    assigned: SearchBucket = Field(default_factory=SearchBucket)
    created: SearchBucket = Field(default_factory=SearchBucket)
    mentions: SearchBucket = Field(default_factory=SearchBucket)


class SummaryPayload(LenientModel):
    """Profile and statistics of one user, already defaulted for rendering."""

    login: str | None = None
    name: str | None = None
    bio: str | None = None
    company: str | None = None
    blog: str | None = None
    total_stars: int = 0
    languages: dict[str, float] = Field(default_factory=dict)
    contribution_graph: list[Any] = Field(default_factory=list)
    pull_requests: PullRequestSummary | None = None
    issues: IssueSummary | None = None

    @field_validator("languages", mode="before")
    @classmethod
    def keep_numeric_languages(cls, value: Any) -> Any:
        if not isinstance(value, Mapping):
            return value
        return {
            name: share
            for name, share in value.items()
            if isinstance(name, str)
            and isinstance(share, int | float)
            and not isinstance(share, bool)
        }

    @property
    def display_name(self) -> str:
        return self.name or self.login or "Unknown"


class VisualOptions(BaseModel):
    """Rendering knobs chosen by the caller."""

    graph_only: bool = False
    spaced: bool = True
    width: int | None = Field(default=None, ge=1)
    height: int | None = None
    no_date: bool = False
    no_achievements: bool = False
    no_languages: bool = False
    no_issues: bool = False
    no_pr: bool = False
    no_account: bool = False
    no_grid: bool = False
    graph_timeline: bool = False
    custom_box: str = DEFAULT_BOX
    palette: tuple[str, str, str, str, str] = DEFAULT_PALETTE

    @field_validator("height")
    @classmethod
    def clamp_height(cls, value: int | None) -> int | None:
        if value is None:
            return None
        return min(7, max(1, value))
