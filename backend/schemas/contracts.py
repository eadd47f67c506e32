from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Optional


class ContractInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    contract_text: Optional[str] = Field(None, alias="contractText")
    role: Any = None


class GenerateInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    description: Optional[str] = None
    role: Any = None
    contract_type: Any = Field(None, alias="contractType")


class AnalysisResult(BaseModel):
    # Keys the model adds beyond the required four are passed through
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    risks: List[str]
    missing_protections: List[str] = Field(alias="missingProtections")
    summary: str
    suggestions: List[str]
    free: bool = True


class ContractTextResult(BaseModel):
    contract: str


class HealthResponse(BaseModel):
    status: str
    version: str
    model: str
    provider: str
    configured: bool
    auth: str


class ErrorResponse(BaseModel):
    error: str
