import re


def _party(role: str) -> str:
    return "provider" if role == "provider" else "client"


def mock_contract_analysis(contract_text: str, role: str = "client") -> dict:
    """Generate mock contract analysis from keywords in the text"""
    text_lower = contract_text.lower()
    party = _party(role)

    risks = []
    missing_protections = []
    suggestions = []

    # Liability
    if 'unlimited liability' in text_lower or 'fully liable' in text_lower:
        risks.append(f"Unlimited liability exposes the {party} to damages with no ceiling.")
        suggestions.append("Cap liability at the total amount paid under the contract.")
    elif 'liab' not in text_lower:
        missing_protections.append("No limitation of liability clause.")
        suggestions.append("Add a liability cap and exclude indirect damages.")

    # Payment
    if 'net 90' in text_lower or '90 days' in text_lower:
        risks.append("Payment due 90 days after invoice is a long delay.")
        suggestions.append("Reduce payment terms to 30 days and require a deposit.")
    if 'late payment' not in text_lower and 'penalt' not in text_lower:
        missing_protections.append("No late payment penalties.")

    # Termination
    if 'at any time' in text_lower or 'without notice' in text_lower:
        risks.append("One party can terminate at any time without notice.")
        suggestions.append("Require 30 days' written notice and payment for work already done.")
    elif 'terminat' not in text_lower:
        missing_protections.append("No termination clause.")

    # Intellectual property
    if 'all rights' in text_lower or 'work for hire' in text_lower or 'work made for hire' in text_lower:
        if party == "provider":
            risks.append("All intellectual property is transferred without any additional fee.")
            suggestions.append("Limit the transfer of rights to the deliverables and price it explicitly.")
        else:
            suggestions.append("Make sure the transfer of rights covers every deliverable and future use.")
    elif 'intellectual property' not in text_lower and 'copyright' not in text_lower:
        missing_protections.append("Ownership of intellectual property is not defined.")

    # Exclusivity
    if 'exclusiv' in text_lower or 'non-compete' in text_lower:
        risks.append("Exclusivity or non-compete restrictions limit future business.")
        suggestions.append("Narrow the exclusivity in scope and duration, with compensation.")

    if 'confidential' not in text_lower:
        missing_protections.append("No confidentiality clause.")
    if 'jurisdiction' not in text_lower and 'governing law' not in text_lower:
        missing_protections.append("No governing law or jurisdiction clause.")

    if not suggestions:
        suggestions.append(f"Have the contract reviewed to confirm it protects the {party} as expected.")

    articles = len(re.findall(r'\barticle\b', text_lower))
    summary = (
        f"This contract contains {articles} article(s) and was reviewed from the {party}'s side. "
        f"{len(risks)} risk(s) and {len(missing_protections)} missing protection(s) were found. "
        "This is a mock analysis generated without calling a language model."
    )

    return {
        "risks": risks,
        "missingProtections": missing_protections,
        "summary": summary,
        "suggestions": suggestions,
    }


def mock_contract_rewrite(contract_text: str, role: str = "client") -> str:
    """Return the contract with the mock's standard protective clauses appended"""
    party = _party(role)
    return (
        f"{contract_text.strip()}\n\n"
        "ADDITIONAL CLAUSES\n\n"
        "Limitation of liability: each party's liability is capped at the total amount paid under this contract.\n"
        "Termination: either party may terminate with 30 days' written notice.\n"
        "Confidentiality: each party keeps the other's confidential information secret.\n"
        f"(Mock rewrite prepared with reinforced protection for the {party}.)"
    )


def mock_contract_generate(description: str, role: str = "client", contract_type: str = "Service provision") -> str:
    """Return a skeleton contract built from the description"""
    party = _party(role)
    articles = [
        ("Purpose", description.strip()),
        ("Term", "This contract takes effect on signature for an initial term of twelve months."),
        ("Payment", "Invoices are payable within 30 days. Late payments bear statutory penalties."),
        ("Confidentiality", "Each party keeps the other's confidential information secret."),
        ("Intellectual property", "Rights in the deliverables transfer upon full payment."),
        ("Liability", "Each party's liability is capped at the total amount paid under this contract."),
        ("Termination", "Either party may terminate with 30 days' written notice."),
        ("Jurisdiction", "Any dispute falls under the competent courts of the provider's registered office."),
    ]
    body = "\n\n".join(
        f"Article {i} - {title}\n{text}" for i, (title, text) in enumerate(articles, start=1)
    )
    return (
        f"{contract_type.upper()} AGREEMENT\n\n"
        "Between the Client and the Provider, hereinafter the Parties.\n\n"
        f"{body}\n\n"
        f"(Mock contract drafted for the {party}.)"
    )
