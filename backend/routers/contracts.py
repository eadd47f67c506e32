from fastapi import APIRouter, Depends, Request

from schemas.contracts import ContractInput, GenerateInput, AnalysisResult, ContractTextResult, ErrorResponse
from services.gateway import ContractGateway

router = APIRouter(
    prefix="/api",
    tags=["contracts"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


def get_gateway(request: Request) -> ContractGateway:
    return request.app.state.gateway


# Plain def endpoints: the provider SDK call blocks, so FastAPI runs these in its threadpool

@router.post("/analyze", response_model=AnalysisResult)
def analyze_contract(input: ContractInput, gateway: ContractGateway = Depends(get_gateway)):
    """Analyze a contract for risks and missing protections from one party's side"""
    return gateway.analyze(input.contract_text, input.role)


@router.post("/rewrite", response_model=ContractTextResult)
def rewrite_contract(input: ContractInput, gateway: ContractGateway = Depends(get_gateway)):
    """Rewrite a contract in full, correcting imbalances in favor of the given role"""
    return gateway.rewrite(input.contract_text, input.role)


@router.post("/generate", response_model=ContractTextResult)
def generate_contract(input: GenerateInput, gateway: ContractGateway = Depends(get_gateway)):
    """Draft a complete contract from a plain-language description"""
    return gateway.generate(input.description, input.role, input.contract_type)
