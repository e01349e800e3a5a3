from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Tuple


class Standard(BaseModel):
    """
    Grading standard node.

    Top-level catalog entries are matched by ``name``; their ``standard_data``
    children are the sub-criteria scored against a grain batch.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(
        ...,
        description="Numeric standard identifier"
    )

    key: str = Field(
        default="",
        description="String key of the standard or sub-criterion"
    )

    name: str = Field(
        ...,
        min_length=1,
        description="Display name (join key for top-level standards)"
    )

    shape: Tuple[str, ...] = Field(
        default=(),
        description="Grain shapes the criterion applies to"
    )

    min_length: Optional[float] = Field(
        default=None,
        alias="minLength",
        description="Lower length bound"
    )

    max_length: Optional[float] = Field(
        default=None,
        alias="maxLength",
        description="Upper length bound"
    )

    condition_min: str = Field(
        default="GTE",
        alias="conditionMin",
        description="'GT' for strict lower bound, anything else is inclusive"
    )

    condition_max: str = Field(
        default="LTE",
        alias="conditionMax",
        description="'LT' for strict upper bound, anything else is inclusive"
    )

    value: float = Field(
        default=0.0,
        description="Compliance percentage (0 until scored)"
    )

    standard_data: Tuple["Standard", ...] = Field(
        default=(),
        alias="standardData",
        description="Child sub-criteria"
    )


class Grain(BaseModel):
    """
    One raw grain measurement.
    """

    length: float = Field(
        ...,
        allow_inf_nan=False,
        description="Grain length, same units as standard bounds"
    )

    weight: float = Field(
        default=0.0,
        allow_inf_nan=False,
        description="Grain weight"
    )

    shape: str = Field(
        default="",
        description="Grain shape (e.g. wholegrain, broken)"
    )

    type: str = Field(
        default="",
        description="Grain type (e.g. white, yellow, paddy)"
    )


class RawGrainData(BaseModel):
    """
    Raw submission produced by the grain analyser.
    """

    model_config = ConfigDict(populate_by_name=True)

    request_id: Optional[str] = Field(
        default=None,
        alias="requestID",
        description="Analyser request identifier"
    )

    image_url: Optional[str] = Field(
        default=None,
        alias="imageURL",
        description="Link to the sample image"
    )

    grains: list[Grain] = Field(
        default_factory=list,
        description="Per-grain measurements"
    )


class StandardListResponse(BaseModel):
    """
    Response for the standards catalog endpoint.
    """

    data: list[Standard]
