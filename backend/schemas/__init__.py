from schemas.contracts import (
    ContractInput, GenerateInput, AnalysisResult, ContractTextResult,
    HealthResponse, ErrorResponse
)
