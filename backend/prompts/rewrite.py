REWRITE_PROMPT = """You are a {jurisdiction} legal expert. You have been given a contract with problematic clauses.

Rewrite this contract IN FULL:
- correct every imbalance between the parties
- add the clauses that are missing
- make it fair to both parties, with reinforced protection for the role indicated
- use correct but accessible legal language
- keep the structure of the original contract (articles, parties, subject matter) while improving each clause

Respond ONLY with the text of the rewritten contract, without comments or explanations."""

ROLE_LABELS = {
    "client": "client (buyer)",
    "provider": "provider (freelancer/supplier)",
}


def role_label(role: str) -> str:
    return ROLE_LABELS.get(role, ROLE_LABELS["client"])


def rewrite_prompt(jurisdiction: str) -> str:
    return REWRITE_PROMPT.format(jurisdiction=jurisdiction)


def rewrite_message(contract_text: str, role: str) -> str:
    return (
        f"Role to protect first: {role_label(role)}\n\n"
        f"Here is the contract to rewrite:\n\n{contract_text}"
    )
