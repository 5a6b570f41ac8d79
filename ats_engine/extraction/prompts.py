from __future__ import annotations

from ats_engine.ai.prompting import harden_system_prompt, wrap_untrusted

NOT_FOUND = "Not found in document"

ANALYSIS_SYSTEM_PROMPT = harden_system_prompt(
    "You are a resume analysis system. Extract only information that is explicitly present in the "
    "document. Never add names, dates, employers or bullet points that are not in the source text. "
    "If information is missing, say that it is not in the document. Education is often listed near "
    "the bottom of a resume; look for institutions, degree types and graduation dates even outside a "
    "dedicated section."
)

STRUCTURING_SYSTEM_PROMPT = harden_system_prompt(
    "You are a resume formatting specialist. Turn previously extracted resume information into clean, "
    "consistent JSON. Never invent information that was not extracted. Keep bullet points as separate "
    "array items and never merge them into paragraphs. Mark anything missing as "
    f"'{NOT_FOUND}'."
)

SINGLE_PASS_SYSTEM_PROMPT = harden_system_prompt(
    "You are a resume parser. Extract only information that is actually present in the document and "
    f"return it as JSON. Mark missing information as '{NOT_FOUND}'. Accuracy matters more than "
    "completeness."
)

RESUME_SCHEMA = """{
  "personalInfo": {
    "fullName": "name or 'Not found in document'",
    "email": "email or 'Not found in document'",
    "phone": "phone or 'Not found in document'",
    "location": "location or 'Not found in document'",
    "country": "country or 'Not found in document'",
    "city": "city or 'Not found in document'",
    "linkedinUrl": "LinkedIn URL or empty string",
    "portfolioUrl": "portfolio URL or empty string"
  },
  "summary": "summary text or 'Not found in document'",
  "workExperience": [
    {
      "id": "exp-1",
      "company": "company name",
      "position": "job title",
      "location": "job location or 'Not specified'",
      "startDate": "YYYY-MM-DD if found",
      "endDate": "YYYY-MM-DD or null if current",
      "current": true,
      "description": "paragraph description, empty if only bullets exist",
      "achievements": ["bullet 1", "bullet 2"]
    }
  ],
  "education": [
    {
      "id": "edu-1",
      "institution": "school name",
      "degree": "degree type",
      "fieldOfStudy": "field of study",
      "startDate": "start date if found",
      "endDate": "end date or null if current",
      "current": false,
      "description": "education details"
    }
  ],
  "skills": ["skills exactly as written"],
  "technicalSkills": ["technical skills exactly as written"],
  "softSkills": ["soft skills exactly as written"],
  "certifications": [
    {
      "id": "cert-1",
      "name": "certification name",
      "issuer": "issuing organization",
      "date": "issue date if found",
      "expires": false,
      "expiryDate": "expiry date or null"
    }
  ],
  "projects": [
    {
      "id": "proj-1",
      "name": "project name",
      "description": "project description",
      "technologies": ["technology"],
      "startDate": "start date if found",
      "endDate": "end date or null if ongoing",
      "current": false,
      "url": "project URL or null"
    }
  ]
}"""

_SCHEMA_RULES = (
    "RULES:\n"
    f"- For string fields with no information use '{NOT_FOUND}'.\n"
    "- Use an empty array for any section that is missing entirely.\n"
    "- Only include array items that were actually found.\n"
    "- If only a year is given for a date, use YYYY-01-01.\n"
    "- Do not fill gaps with educated guesses.\n"
    "Respond with ONLY the JSON object."
)


def build_analysis_prompt(resume_text: str) -> str:
    """First pass: free-form extraction of what the document actually says."""
    return (
        "Analyze this resume and extract ONLY the information that is actually present.\n\n"
        "- Do not invent or infer anything; never use placeholder names.\n"
        "- If something cannot be found, state NOT FOUND IN DOCUMENT.\n"
        "- Preserve bullet points exactly; never merge them into paragraphs or add new ones.\n"
        "- The text came from a document conversion and may be out of order or oddly labeled; "
        "rely on meaning, not headings.\n\n"
        "Report findings under these headings: PERSON (name, email, phone, location, links), "
        "PROFILE SUMMARY (quote it), WORK HISTORY (company, title, dates, description, bullets), "
        "EDUCATION (institution, degree, field, dates; search the whole document), "
        "SKILLS (exact terms only), PROJECTS, CERTIFICATIONS. "
        "For a missing section write e.g. NO WORK HISTORY FOUND.\n\n"
        f"{wrap_untrusted('RESUME TEXT', resume_text)}"
    )


def build_structuring_prompt(analysis: str) -> str:
    """Second pass: structure first-pass output into the resume schema."""
    return (
        "Structure this previously extracted resume information using ONLY what it contains.\n"
        "Where it says NOT FOUND or similar, use the missing-value conventions below.\n\n"
        f"{wrap_untrusted('EXTRACTED INFORMATION', analysis)}\n\n"
        f"Return JSON in exactly this shape:\n{RESUME_SCHEMA}\n\n"
        f"{_SCHEMA_RULES}"
    )


def build_single_pass_prompt(resume_text: str) -> str:
    return (
        "Parse this resume and extract ONLY information actually present in it. "
        "Do not create work experience entries that are not in the text and report dates as written.\n\n"
        f"{wrap_untrusted('RESUME TEXT', resume_text)}\n\n"
        f"Return JSON in exactly this shape:\n{RESUME_SCHEMA}\n\n"
        f"{_SCHEMA_RULES}"
    )
