from pydantic import BaseModel, Field


class RenderRules(BaseModel):
    cdn_host: str = "cdn.sanity.io"
    project_id: str | None = None
    dataset: str | None = None
    image_loading: str = Field(default="lazy", pattern=r"^(lazy|eager)$")
    container_class: str | None = None
    # Container tag -> class attribute ("h1": "text-3xl font-bold")
    style_classes: dict[str, str] = Field(default_factory=dict)


class Rules(BaseModel):
    render: RenderRules = Field(default_factory=RenderRules)
