"""All prompt templates for Gemini API calls."""

from models.schemas.labeling import INDUSTRIES, ROLE_LEVELS


def build_supplementary_ats_prompt(
    resume_text: str,
    job_description: str,
    matched_keywords: list[str],
    missing_keywords: list[str],
    match_pct: int,
) -> str:
    """Supplementary ATS pass: alias matches, keyword priorities, weak usages.

    The deterministic engine's results are included so the model only adds
    what exact matching cannot see.
    """
    return f"""You are an expert ATS (Applicant Tracking System) analyst. Your job is to supplement a
deterministic keyword-matching ATS engine with contextual judgment that code-based matching cannot provide.

Provide four types of supplementary analysis:

1. ALIAS MATCHES
Keywords the engine marked as missing that ARE present in the resume under a different form:
abbreviations ("JS" = "JavaScript", "K8s" = "Kubernetes"), alternate spellings ("front-end" = "frontend"),
or terms a recruiter would treat as equivalent ("React.js" = "React").
Only include genuine equivalents. "Python" is not equivalent to "programming".

2. KEYWORD PRIORITIES
Rank every extracted keyword for this specific role:
- "critical": core must-have skills
- "important": strongly preferred or repeated requirements
- "nice_to_have": bonus, soft or preferred-only skills

3. WEAK KEYWORD USAGES
Keywords present in the resume but used weakly: only in a skills list with no supporting experience,
mentioned once in passing, or buried in an unrelated section. Explain the issue and how to strengthen it.

4. ADDITIONAL KEYWORDS
Important skills implied by the job description that the engine did not extract but a recruiter
would look for (tools commonly paired with listed technologies, implied skills, assumed domain knowledge).

JOB DESCRIPTION:
---
{job_description}
---

RESUME:
---
{resume_text}
---

DETERMINISTIC ATS ENGINE RESULTS:
- Match percentage: {match_pct}%
- Matched keywords ({len(matched_keywords)}): {', '.join(matched_keywords) or 'none'}
- Missing keywords ({len(missing_keywords)}): {', '.join(missing_keywords) or 'none'}

Respond with ONLY valid JSON (no markdown, no code fences) in this exact structure:
{{
  "alias_matches": [{{"original": "<missing JD keyword>", "alias_found_in_resume": "<form used in resume>", "reasoning": "<why equivalent>"}}],
  "keyword_priorities": [{{"keyword": "<JD keyword>", "priority": "critical" | "important" | "nice_to_have", "reasoning": "<why>"}}],
  "weak_usages": [{{"keyword": "<keyword>", "current_context": "<how it is used now>", "issue": "<why weak>", "suggested_improvement": "<how to fix>"}}],
  "additional_keywords": [<keywords the engine missed>]
}}"""


def build_labeling_prompt(resume_text: str, job_description: str) -> str:
    """Auto-labeling of a resume + JD pair for the example corpus."""
    return f"""You are an expert HR analyst and resume reviewer. Analyze this resume and job description pair.

Your tasks:
1. Extract key metadata from the job description (title, company, industry, level, skills)
2. Extract key metadata from the resume (experience years, skills)
3. Assess whether this is a quality training example
4. Identify notable patterns worth learning from

Quality criteria for a training example:
- Job description has clear requirements (not too vague)
- Resume has enough content to analyze (not just a list of jobs)
- Both documents are in a similar domain
- There are learnable patterns (good or bad) in how the resume addresses the JD

Pattern types to look for:
- quantification: use of numbers, percentages, metrics
- action_verbs: strong vs weak verb usage
- structure: section organization, bullet format
- keyword_alignment: how well the resume matches JD keywords
- achievement_framing: results-first vs task-first bullets
- specificity: concrete details vs vague statements

JOB DESCRIPTION:
---
{job_description}
---

RESUME:
---
{resume_text}
---

Respond with ONLY valid JSON (no markdown, no code fences) in this exact structure:
{{
  "job_title": "<job title from the JD>",
  "company_name": "<company name if mentioned, otherwise null>",
  "industry": "<one of: {', '.join(INDUSTRIES)}>",
  "role_level": "<one of: {', '.join(ROLE_LEVELS)}>",
  "required_skills": [<key skills required by the JD>],
  "candidate_experience_years": <estimated years of experience, number>,
  "candidate_skills": [<key skills found in the resume>],
  "is_quality_example": <true or false>,
  "quality_reasoning": "<explanation of the quality assessment>",
  "notable_patterns": [
    {{"pattern_type": "<pattern type>", "description": "<what was observed>", "is_positive": <true or false>}}
  ]
}}"""
