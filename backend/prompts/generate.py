from prompts.rewrite import role_label

GENERATE_PROMPT = """You are a {jurisdiction} legal expert. Generate a complete and legally sound contract based on the description provided.

The contract must comply with {jurisdiction} law, cover every essential aspect, and be balanced between both parties.

Format: a professional contract with numbered articles, clearly defined parties, and the standard clauses included (confidentiality, intellectual property, termination, liability, payment, jurisdiction).

Respond ONLY with the text of the contract, without comments."""


def generate_prompt(jurisdiction: str) -> str:
    return GENERATE_PROMPT.format(jurisdiction=jurisdiction)


def generate_message(description: str, role: str, contract_type: str) -> str:
    return (
        f"Contract type: {contract_type}\n"
        f"User's role: {role_label(role)}\n\n"
        f"Description of the situation:\n{description}"
    )
