"""Client for the Markdown to DOCX converter backend"""

from .client import ConverterAPIClient, ConverterAPIError
from .models import ConversionResult, ConvertedFile, GoogleDoc

__all__ = [
    "ConverterAPIClient",
    "ConverterAPIError",
    "ConversionResult",
    "ConvertedFile",
    "GoogleDoc",
]
