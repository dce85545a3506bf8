from fastapi import HTTPException
from utils.core.enums import DataQuality, RegionLabel


class InvalidRegionError(HTTPException):
    """Raised when a region label is not in the region table"""

    def __init__(self, region: str):
        valid = ", ".join(r.value for r in RegionLabel)
        super().__init__(
            status_code=400, detail=f"Invalid region: {region}. Expected one of {valid}"
        )


class InvalidQualityError(HTTPException):
    """Raised when a data quality tier is not one of the known tiers"""

    def __init__(self, quality: str):
        valid = ", ".join(q.value for q in DataQuality)
        super().__init__(
            status_code=400,
            detail=f"Invalid data quality: {quality}. Expected one of {valid}",
        )
