"""Response models for the Markdown to DOCX converter API"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class GoogleDoc(BaseModel):
    """A Markdown document found in the user's Google Drive"""
    id: str
    name: str


class ConvertedFile(BaseModel):
    """Outcome of converting a single document"""
    model_config = ConfigDict(populate_by_name=True)

    original_file_name: str = Field(alias="originalFileName")
    converted_file_name: Optional[str] = Field(default=None, alias="convertedFileName")
    status: str
    error: Optional[str] = None

    @property
    def converted(self) -> bool:
        return self.status == "converted"


class ConversionResult(BaseModel):
    """Summary returned by a conversion run"""
    model_config = ConfigDict(populate_by_name=True)

    total_files: int = Field(alias="totalFiles")
    converted_files: List[ConvertedFile] = Field(default_factory=list, alias="convertedFiles")
    zip_download_link: Optional[str] = Field(default=None, alias="zipDownloadLink")
