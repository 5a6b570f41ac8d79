from __future__ import annotations

from ats_engine.ai.prompting import harden_system_prompt, truncate_text, wrap_untrusted

CATEGORIZATION_SYSTEM_PROMPT = harden_system_prompt(
    "You are an expert ATS system analyst. You extract resume-searchable keywords from job postings "
    "and return them as a single JSON object."
)


def build_categorization_prompt(job_title: str, job_description: str, *, max_chars: int = 2000) -> str:
    title = (job_title or "").strip() or "the advertised"
    return (
        f'Extract and categorize the keywords an ATS would search for in resumes for a "{title}" position.\n\n'
        f"{wrap_untrusted('JOB DESCRIPTION', truncate_text(job_description, max_chars))}\n\n"
        "Return keywords in these categories:\n"
        "1. technicalSkills - technical skills, programming languages, hard skills\n"
        "2. softSkills - interpersonal abilities and character traits\n"
        "3. tools - software, hardware, platforms and specific tools\n"
        "4. methodologies - frameworks, methodologies and processes\n"
        "5. requirements - explicitly stated qualifications\n"
        "6. certificates - required or preferred certifications\n"
        "7. education - degrees and fields of study\n"
        "8. industryTerms - industry-specific terminology and domain knowledge\n"
        "9. jobFunctions - core job functions and responsibilities\n\n"
        "RULES:\n"
        "- Only include terms that could plausibly appear in a candidate's resume.\n"
        "- Do NOT include company names, job titles, locations, benefits or generic phrases.\n"
        '- Do NOT include phrases like "experience with", "knowledge of", "5+ years" or "degree in"; '
        "extract the skill itself.\n"
        "- Keep each keyword concise (1-4 words) and use the exact wording of the job description.\n"
        "- Return at most 10 keywords per category; use an empty array when a category has none.\n\n"
        "Respond with ONLY a JSON object whose keys are exactly: technicalSkills, softSkills, tools, "
        "methodologies, requirements, certificates, education, industryTerms, jobFunctions. "
        "Each value is an array of strings."
    )
