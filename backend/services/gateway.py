"""Contract assistant operations: analyze, rewrite and generate.

Each operation validates its input, builds a role-specific prompt, makes a
single call to the configured text provider and post-processes the reply.
Nothing is retried; provider failures are mapped onto services.errors.
"""

import json
import logging
from typing import Optional

from pydantic import ValidationError

from config import Settings, MIN_TEXT_LENGTH, MAX_CONTRACT_LENGTH, DEFAULT_CONTRACT_TYPE
from prompts.analysis import ANALYSIS_KEYS, analysis_prompt, analysis_message
from prompts.rewrite import rewrite_prompt, rewrite_message
from prompts.generate import generate_prompt, generate_message
from schemas.contracts import AnalysisResult, ContractTextResult
from services.errors import (
    GatewayError, InvalidInput, MalformedProviderOutput, IncompleteResponse, UnclassifiedProviderError,
)
from services.llm import TextProvider, clean_llm_response

logger = logging.getLogger(__name__)

ANALYSIS_MAX_TOKENS = 4096
CONTRACT_MAX_TOKENS = 8192
ANALYSIS_TEMPERATURE = 0.3


def normalize_role(role) -> str:
    """Anything other than "provider" is treated as the client."""
    return "provider" if role == "provider" else "client"


def validate_text(text, field: str, label: str) -> str:
    if text is not None and not isinstance(text, str):
        raise InvalidInput(f"The {label} must be a string.")
    if not text or len(text.strip()) < MIN_TEXT_LENGTH:
        raise InvalidInput(f"The {label} is too short or missing ({field} needs at least {MIN_TEXT_LENGTH} characters).")
    if len(text) > MAX_CONTRACT_LENGTH:
        raise InvalidInput(f"The {label} is too long (max {MAX_CONTRACT_LENGTH:,} characters).")
    return text


def parse_analysis(response_text: str) -> AnalysisResult:
    try:
        result = json.loads(clean_llm_response(response_text))
    except json.JSONDecodeError as e:
        raise MalformedProviderOutput(str(e)) from e

    if not isinstance(result, dict):
        raise IncompleteResponse(ANALYSIS_KEYS)
    missing = [key for key in ANALYSIS_KEYS if key not in result]
    if missing:
        raise IncompleteResponse(missing)

    result["free"] = True
    try:
        return AnalysisResult(**result)
    except ValidationError as e:
        bad = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        raise IncompleteResponse(bad or ANALYSIS_KEYS) from e


class ContractGateway:
    def __init__(self, settings: Settings, provider: TextProvider):
        self.settings = settings
        self.provider = provider

    def _call(self, operation: str, system_prompt: str, user_message: str, max_output_tokens: int,
              temperature: Optional[float] = None) -> str:
        try:
            return self.provider.generate(system_prompt, user_message, max_output_tokens, temperature)
        except GatewayError as e:
            logger.error("%s failed: %s", operation, e.message)
            raise
        except Exception as e:
            logger.error("%s failed: %s", operation, e)
            raise UnclassifiedProviderError(operation, str(e)) from e

    def analyze(self, contract_text, role=None) -> AnalysisResult:
        """Risk analysis of a contract from the point of view of one party."""
        validate_text(contract_text, "contractText", "contract text")
        role = normalize_role(role)

        response_text = self._call(
            "analysis",
            analysis_prompt(role, self.settings.jurisdiction),
            analysis_message(contract_text),
            ANALYSIS_MAX_TOKENS,
            ANALYSIS_TEMPERATURE,
        )

        try:
            return parse_analysis(response_text)
        except GatewayError as e:
            logger.error("analysis failed: %s", e.message)
            raise

    def rewrite(self, contract_text, role=None) -> ContractTextResult:
        """Full rewrite of a contract with reinforced protection for one party."""
        validate_text(contract_text, "contractText", "contract text")
        role = normalize_role(role)

        response_text = self._call(
            "rewrite",
            rewrite_prompt(self.settings.jurisdiction),
            rewrite_message(contract_text, role),
            CONTRACT_MAX_TOKENS,
        )
        return ContractTextResult(contract=response_text.strip())

    def generate(self, description, role=None, contract_type=None) -> ContractTextResult:
        validate_text(description, "description", "description")
        role = normalize_role(role)
        if not isinstance(contract_type, str) or not contract_type.strip():
            contract_type = DEFAULT_CONTRACT_TYPE

        response_text = self._call(
            "generation",
            generate_prompt(self.settings.jurisdiction),
            generate_message(description, role, contract_type),
            CONTRACT_MAX_TOKENS,
        )
        return ContractTextResult(contract=response_text.strip())
