"""Curated reference briefings served without a network call.

These summaries change only when the underlying instruments do; live
search results are appended to them by the server where a topic is given.
"""

from __future__ import annotations

import typing as t

EU_AI_ACT = """\
## EU Artificial Intelligence Act (2024/1689)

Status: in force since 1 August 2024
Full application: 2 August 2026 (phased rollout)
Official text: https://eur-lex.europa.eu/legal-content/EN/TXT/?uri=CELEX:32024R1689

### Timeline
- Aug 2024: Regulation enters into force
- Feb 2025: Prohibited AI practices rules apply
- Aug 2025: General purpose AI (GPAI) and governance rules apply
- Aug 2026: Most provisions fully applicable
- Aug 2027: High-risk AI systems in Annex I fully applicable

### Risk classification
1. Unacceptable risk (prohibited): social scoring, real-time biometric surveillance, \
manipulation of vulnerable groups, AI exploiting subconscious behaviour
2. High risk: biometrics, critical infrastructure, education, employment, essential services, \
law enforcement, migration, justice
3. Limited risk: chatbots (must disclose AI), deepfakes (must be labelled)
4. Minimal risk: most AI applications (voluntary codes of conduct)

### General purpose AI models
- Providers must supply technical documentation and comply with copyright law
- Models with systemic risk (10^25 FLOPs of training compute or more): adversarial testing, \
incident reporting, cybersecurity measures
- Codes of practice drawn up with industry

### Penalties
- Up to EUR 35M or 7% of global annual turnover for prohibited practices
- Up to EUR 15M or 3% for other violations
- Up to EUR 7.5M or 1.5% for supplying incorrect information to authorities

### Key bodies
- EU AI Office (European Commission), which oversees GPAI
- National competent authorities in each member state
- European Artificial Intelligence Board"""

US_AI_POLICY = """\
## US AI Policy Landscape

### Current executive direction (2025)
EO 14179, Removing Barriers to American Leadership in AI (20 Jan 2025)
- Revoked EO 14110 on AI safety
- Directs agencies to develop an AI action plan within 180 days
- Emphasis on American AI leadership and a lighter regulatory burden
- URL: https://www.federalregister.gov/documents/2025/01/23/2025-01953/

### Previous administration (2023)
EO 14110, Safe, Secure, and Trustworthy AI (30 Oct 2023), now revoked
- Required safety test disclosures for frontier models
- Established the NIST AI Safety Institute
- Directed federal agencies to assess AI risks

### Frameworks and standards
NIST AI Risk Management Framework (AI RMF 1.0), Jan 2023
- Voluntary framework: Govern, Map, Measure, Manage
- URL: https://airc.nist.gov/RMF

NIST Generative AI Profile (NIST AI 600-1), Jul 2024
- Risks specific to generative AI
- URL: https://doi.org/10.6028/NIST.AI.600-1

### Congress and the states
- Many AI bills introduced in the 118th and 119th Congress
- No comprehensive federal AI law enacted (as of early 2025)
- State laws passed in California, Texas, Colorado and Utah

### Agency guidance
- FTC: deception and endorsements
- FDA: AI/ML in medical devices
- SEC: AI-related disclosures
- DOD: AI Ethics Principles (2020)"""

GLOBAL_FRAMEWORKS = """\
## Global AI Governance Frameworks

### OECD AI Principles (2019, updated 2024)
- Adopted by 44+ countries
- Inclusive growth, human-centred values, transparency, robustness, accountability
- URL: https://oecd.ai/en/ai-principles

### G7 Hiroshima AI Process (2023)
- International Guiding Principles for AI (11 principles)
- Voluntary Code of Conduct for advanced AI systems
- URL: https://www.meti.go.jp/press/2023/10/20231030002/20231030002-1.pdf

### UN Global Digital Compact (2024)
- Adopted at the Summit of the Future, Sept 2024
- Calls for an international AI governance dialogue and scientific panel
- URL: https://www.un.org/global-digital-compact

### UNESCO Recommendation on the Ethics of AI (2021)
- 193 member states
- Bias, environment, gender, culture
- URL: https://unesdoc.unesco.org/ark:/48223/pf0000381137

### Bletchley Declaration (2023)
- AI Safety Summit, 28 countries including the UK, US, EU and China
- Focus on frontier AI risks
- URL: https://www.gov.uk/government/publications/ai-safety-summit-2023-the-bletchley-declaration

### ISO/IEC standards
- ISO/IEC 42001:2023, AI management systems
- ISO/IEC 23894:2023, AI risk management guidance
- ISO/IEC TR 24027:2021, bias in AI systems

### Regional instruments
| Region | Instrument | Status |
|--------|-----------|--------|
| EU | AI Act (2024/1689) | In force |
| China | Generative AI Measures | In force (2023) |
| UK | Pro-innovation AI regulation | Sector-based |
| Canada | AIDA | Proposed |
| Brazil | AI Bill | In progress |
| Singapore | AI Governance Framework | Voluntary |
| Japan | AI Guidelines for Business | Voluntary |

### Applied examples
- AI hiring platform (EU): EU AI Act + GDPR, document high-risk checks, transparency notices, audit logging.
- Enterprise foundation model (Global): map controls to OECD Principles, the G7 Code and NIST AI RMF; \
publish model cards; run red-team and incident playbooks.
- Sustainability reporting assistant: CSRD/CSDDD + ISSB S1/S2 with provenance, disclosure workflows \
and governance sign-off."""

COMPARISONS: t.Dict[str, str] = {
    "foundation models": """\
## Foundation Models / GPAI: Cross-Framework Comparison

| Framework | Requirements | Enforcement |
|-----------|-------------|-------------|
| EU AI Act (GPAI rules) | Technical docs, copyright compliance, systemic risk assessment for the largest models | \
EU AI Office, fines up to 3% of global turnover |
| G7 Hiroshima Code | Identify and mitigate risks, incident reporting, cybersecurity, transparency | Voluntary |
| US EO 14110 (revoked) | Safety test results shared with government for dual-use models | Revoked Jan 2025 |
| China Interim Measures | Security assessment, content moderation, real-name registration | CAC enforcement |
| UK approach | Sector regulators (Ofcom, ICO, CMA) | No GPAI-specific law |""",
    "transparency": """\
## Transparency Requirements: Cross-Framework Comparison

| Framework | Requirements |
|-----------|-------------|
| EU AI Act | Disclose AI-generated content; chatbots identify as AI; deepfakes labelled |
| OECD Principles | Transparency and explainability as a core principle |
| G7 Code | Labelling AI-generated content, watermarking |
| US NIST AI RMF | Transparency as a trustworthiness characteristic in the Map function |
| UNESCO | Right to explanation, algorithmic transparency |""",
    "prohibited uses": """\
## Prohibited AI Uses: Cross-Framework Comparison

| Framework | Prohibited |
|-----------|-----------|
| EU AI Act | Social scoring, real-time biometric mass surveillance, manipulation exploiting vulnerabilities, \
inferring political or religious beliefs from biometrics, predictive policing |
| China regulations | Content subverting state power, fake news, discrimination |
| US (no federal law) | No blanket prohibitions; sector-specific (e.g. FTC on deceptive AI) |
| UNESCO | Mass surveillance without human rights safeguards |""",
}

GENERIC_COMPARISON = """\
## "{topic}": Cross-Framework Comparison

This topic spans several AI governance frameworks:

- EU AI Act: full text at https://eur-lex.europa.eu/legal-content/EN/TXT/?uri=CELEX:32024R1689
- OECD AI Principles: https://oecd.ai/en/ai-principles (transparency, accountability, robustness, \
human oversight, inclusive growth)
- G7 Hiroshima Code of Conduct: 11 principles including risk assessment, content provenance, cybersecurity
- NIST AI RMF: Govern, Map, Measure, Manage
- UNESCO Recommendation: human rights, cultural diversity, gender equality

Use search_ai_governance with query "{topic}" to find specific documents."""


def comparison_for(topic: str) -> t.Tuple[str, bool]:
    """Return ``(text, curated)`` for ``topic``; unknown topics get a generic overview."""
    curated = COMPARISONS.get(topic.strip().lower())
    if curated is not None:
        return curated, True
    return GENERIC_COMPARISON.format(topic=topic.strip()), False
