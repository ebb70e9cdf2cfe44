"""Prompt template for a single candidate profile.

The issue list, profile schema and sourcing rules defined here are
shared with the comparison prompt so both describe the same shape.
"""

from kandidato.schemas.profile import ISSUES, SOURCE_NOT_FOUND

SYSTEM_MESSAGE = (
    "You are a political data assistant returning JSON only. "
    "Do not hallucinate or make up information. "
    f'If you cannot verify a source, write "{SOURCE_NOT_FOUND}".'
)

PREFERRED_SOURCES = (
    "https://web.senate.gov.ph/lis/leg_sys.aspx, https://web.senate.gov.ph, "
    "Congress.gov.ph, Rappler, Inquirer, GMA News, ABS-CBN, CNN Philippines, "
    "official press releases or public documents"
)

ISSUE_LIST = "\n".join(f"- {issue}" for issue in ISSUES)

PROFILE_SCHEMA = """\
{
  "id": "slugified-full-name",
  "fullName": "Full Candidate Name",
  "party": "Most recent political party",
  "age": 0,
  "senatorBioLink": "https://web.senate.gov.ph/senators/sen_bio/... (omit if none)",
  "background": {
    "educationalBackground": "...",
    "professionalExperience": "...",
    "governmentPositionsHeld": "...",
    "notableAccomplishments": "...",
    "criminalRecords": "...",
    "numberOfLawsAndBillsAuthored": "#"
  },
  "stances": [
    {
      "issue": "Issue Title",
      "position": "Support | Oppose | Neutral",
      "justification": "Brief explanation of the stance",
      "sources": [{ "name": "Source Name", "url": "https://..." }]
    }
  ],
  "laws": [
    {
      "title": "Law Title or Bill Title",
      "role": "Principal author | Co-author | Sponsor",
      "summary": "Short summary of what the bill or law does",
      "status": "Filed | Pending | Enacted",
      "billNumber": "SB 1234 | HB 5678",
      "sources": [{ "name": "Source Name", "url": "https://..." }]
    }
  ],
  "policyFocus": ["Key area 1", "Key area 2", "Key area 3"]
}"""

SOURCING_RULES = f"""\
Source Validity Rules:
- Use real, publicly accessible URLs only. Never invent links.
- If a real URL cannot be confirmed, set the url to exactly "{SOURCE_NOT_FOUND}".
- Prioritize sources from: {PREFERRED_SOURCES}.
- Only list laws and bills the candidate is explicitly known to have authored,
  co-authored, or sponsored. If uncertain or unverified, leave the item out."""

LAWS_RULES = """\
Laws & Bills:
- Include as many publicly recorded items as possible (aim for 8-15).
- Pull from both House and Senate records, including bills that were not enacted.
- For each item give title, role (author/co-author/sponsor), summary,
  bill/law number, current status, and sources."""

OUTPUT_RULES = "Return only valid JSON. No markdown. No commentary. No text outside the JSON object."


def build_profile_prompt(candidate_name: str) -> str:
    """Render the single-candidate instruction prompt.

    ``candidate_name`` is interpolated as-is.
    """
    return f"""\
You are a political data assistant. Provide a detailed, structured JSON response \
containing factual information about the following Philippine senatorial candidate \
for the 2025 elections.

Your response must include:
1. Background information
2. Stances on key social and political issues
3. Laws and bills authored, co-authored, or sponsored
4. Policy focus areas

Social Issues to Cover (one entry in "stances" for each, position is one of \
Support, Oppose or Neutral):
{ISSUE_LIST}

{LAWS_RULES}

{SOURCING_RULES}

Return the response in this exact JSON structure:

{PROFILE_SCHEMA}

{OUTPUT_RULES}

Candidate Name: {candidate_name}
"""
