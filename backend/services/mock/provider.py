import json
import logging
import re

from services.llm import TextProvider
from services.mock.contract import mock_contract_analysis, mock_contract_rewrite, mock_contract_generate

logger = logging.getLogger(__name__)

ANALYZE_MARKER = "Here is the contract to analyze:\n\n"
REWRITE_MARKER = "Here is the contract to rewrite:\n\n"
GENERATE_MARKER = "Description of the situation:\n"


def _role_from_label(message: str, field: str) -> str:
    match = re.search(rf"^{field}: (\w+)", message, re.MULTILINE)
    return "provider" if match and match.group(1) == "provider" else "client"


class MockProvider(TextProvider):
    """Offline provider for MOCK_MODE: answers from keyword heuristics instead of a model."""

    name = "mock"

    @property
    def model(self) -> str:
        return "mock"

    def generate(self, system_prompt, user_message, max_output_tokens, temperature=None):
        if user_message.startswith(ANALYZE_MARKER):
            role = "provider" if "interests of the PROVIDER" in system_prompt else "client"
            result = mock_contract_analysis(user_message[len(ANALYZE_MARKER):], role)
            # Wrapped the way real models often answer
            return f"```json\n{json.dumps(result, indent=2)}\n```"

        if REWRITE_MARKER in user_message:
            role = _role_from_label(user_message, "Role to protect first")
            return mock_contract_rewrite(user_message.split(REWRITE_MARKER, 1)[1], role)

        if GENERATE_MARKER in user_message:
            role = _role_from_label(user_message, "User's role")
            match = re.search(r"^Contract type: (.+)$", user_message, re.MULTILINE)
            contract_type = match.group(1) if match else "Service provision"
            return mock_contract_generate(user_message.split(GENERATE_MARKER, 1)[1], role, contract_type)

        logger.warning("Mock provider received an unrecognized message")
        return ""
