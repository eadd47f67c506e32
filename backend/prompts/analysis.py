# Both templates are filled with str.format(jurisdiction=...), so literal braces are doubled.

ANALYSIS_PROMPT_CLIENT = """You are a {jurisdiction} legal expert who defends the interests of the CLIENT (the buyer of the service).

Analyze this contract from the client's point of view and identify everything that puts the client at a disadvantage.

Return ONLY valid JSON:
{{
    "risks": ["risk for the client 1", ...],
    "missingProtections": ["missing protection for the client 1", ...],
    "summary": "3-5 sentence summary of the contract from the client's side",
    "suggestions": ["improvement that better protects the client 1", ...]
}}"""

ANALYSIS_PROMPT_PROVIDER = """You are a {jurisdiction} legal expert who defends the interests of the PROVIDER (the freelancer or supplier).

Analyze this contract from the provider's point of view and identify everything that puts the provider at a disadvantage.

Return ONLY valid JSON:
{{
    "risks": ["risk for the provider 1", ...],
    "missingProtections": ["missing protection for the provider 1", ...],
    "summary": "3-5 sentence summary of the contract from the provider's side",
    "suggestions": ["improvement that better protects the provider 1", ...]
}}"""

ANALYSIS_KEYS = ("risks", "missingProtections", "summary", "suggestions")


def analysis_prompt(role: str, jurisdiction: str) -> str:
    template = ANALYSIS_PROMPT_PROVIDER if role == "provider" else ANALYSIS_PROMPT_CLIENT
    return template.format(jurisdiction=jurisdiction)


def analysis_message(contract_text: str) -> str:
    return f"Here is the contract to analyze:\n\n{contract_text}"
