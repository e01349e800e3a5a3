from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime, timezone
from typing import Optional, List

from app.models.enumerations import SamplingPoint
from app.models.standard import RawGrainData, Standard


class InspectionCreate(BaseModel):
    """
    Create-inspection request submitted by the history page form.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Inspection name"
    )

    standard_name: str = Field(
        ...,
        min_length=1,
        alias="standardName",
        description="Name of the grading standard to score against"
    )

    raw: RawGrainData = Field(
        ...,
        description="Raw grain data uploaded from the analyser"
    )

    note: Optional[str] = Field(
        default=None,
        max_length=2000,
        description="Free-form note"
    )

    price: Optional[float] = Field(
        default=None,
        ge=0,
        le=100000,
        description="Price per unit"
    )

    sampling_point: List[SamplingPoint] = Field(
        default_factory=list,
        alias="samplingPoint",
        description="Where the sample was taken"
    )

    sampling_date: Optional[datetime] = Field(
        default=None,
        alias="samplingDate",
        description="When the sample was taken"
    )

    @field_validator("name", "standard_name")
    @classmethod
    def strip_whitespace(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("sampling_point")
    @classmethod
    def dedupe_sampling_points(cls, value: List[SamplingPoint]) -> List[SamplingPoint]:
        return list(dict.fromkeys(value))


class DefectRiceItem(BaseModel):
    """Percentage of grains of one defect type."""
    name: str
    actual: float


class InspectionResponse(BaseModel):
    """
    Persisted inspection document.
    """

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    inspection_id: str = Field(..., alias="inspectionID")
    name: str
    standard_id: Optional[int] = Field(default=None, alias="standardID")
    standard_name: str = Field(..., alias="standardName")
    standard_data: List[Standard] = Field(default_factory=list, alias="standardData")
    total_sample: int = Field(default=0, alias="totalSample")
    defect_rice: List[DefectRiceItem] = Field(default_factory=list, alias="defectRice")
    note: Optional[str] = None
    price: Optional[float] = None
    sampling_point: List[str] = Field(default_factory=list, alias="samplingPoint")
    sampling_date: Optional[datetime] = Field(default=None, alias="samplingDate")
    image_link: Optional[str] = Field(default=None, alias="imageLink")
    create_date: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        alias="createDate",
    )


class PaginatedInspectionResponse(BaseModel):
    """
    Paginated response for the history list.
    """

    model_config = ConfigDict(populate_by_name=True)

    total: int
    current_page: int = Field(..., alias="currentPage")
    total_pages: int = Field(..., alias="totalPages")
    data: List[InspectionResponse]


class InspectionDeleteRequest(BaseModel):
    """
    Batch delete request.
    """

    model_config = ConfigDict(populate_by_name=True)

    inspection_ids: List[str] = Field(
        ...,
        min_length=1,
        alias="inspectionID",
        description="inspectionIDs to delete"
    )


class InspectionDeleteResponse(BaseModel):
    message: str
    deleted_count: int = Field(..., alias="deletedCount")

    model_config = ConfigDict(populate_by_name=True)


class CompositionItem(BaseModel):
    """One scored criterion as displayed on the result page."""
    name: str
    standard: str
    actual: str


class DefectRiceRow(BaseModel):
    """One defect row as displayed on the result page."""
    name: str
    actual: str


class InspectionResultResponse(BaseModel):
    """
    Result view of an inspection: labels and percentage strings pre-rendered.
    """

    model_config = ConfigDict(populate_by_name=True)

    inspection_id: str = Field(..., alias="inspectionID")
    name: str
    standard: str
    create_date: datetime = Field(..., alias="createDate")
    image_link: Optional[str] = Field(default=None, alias="imageLink")
    total_sample: int = Field(..., alias="totalSample")
    note: Optional[str] = None
    price: Optional[float] = None
    sampling_date: Optional[datetime] = Field(default=None, alias="samplingDate")
    sampling_point: List[str] = Field(default_factory=list, alias="samplingPoint")
    composition: List[CompositionItem]
    defect_rice: List[DefectRiceRow] = Field(..., alias="defectRice")
