from services.mock.contract import mock_contract_analysis, mock_contract_rewrite, mock_contract_generate
from services.mock.provider import MockProvider

__all__ = [
    "mock_contract_analysis",
    "mock_contract_rewrite",
    "mock_contract_generate",
    "MockProvider",
]
