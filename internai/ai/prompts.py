from __future__ import annotations

import json
from typing import Any, Sequence

ELIGIBILITY_SYSTEM_PROMPT = (
    "You are a career advisor AI that analyzes job requirements and candidate qualifications.\n"
    "You must respond ONLY with valid JSON, no other text."
)

ANALYZE_SYSTEM_PROMPT = (
    "You are an expert career advisor. Analyze job descriptions and compare them against "
    "candidate profiles. Always respond with valid JSON only."
)

ROADMAP_SYSTEM_PROMPT = (
    "You are an expert career coach. Create detailed, actionable career roadmaps. "
    "Always respond with valid JSON only."
)

CHAT_SYSTEM_PROMPT = """You are an elite AI Career Coach and Architect. Your goal is to provide helpful, professional, and encouraging career advice.

GUIDELINES:
- For general conversation (greetings, small talk), be friendly and concise.
- For career advice, be professional and insightful.
- If the user explicitly asks for a "Roadmap" or "Job Analysis", guide them to use the specific UI buttons for those features.
- Keep responses natural and engaging.
- Be encouraging and supportive."""

_ELIGIBILITY_SCHEMA = """{
    "eligibilityScore": 75,
    "isEligible": true,
    "matchedSkills": ["skill1", "skill2"],
    "missingSkills": ["skill1", "skill2"],
    "requiredSkills": ["all skills needed for this job"],
    "summary": "Brief eligibility analysis",
    "interviewQuestions": [
        {
            "question": "Previously asked interview question",
            "category": "Technical/Behavioral/HR",
            "difficulty": "Easy/Medium/Hard",
            "tips": "How to answer this question"
        }
    ],
    "roadmap": {
        "title": "Path to becoming eligible",
        "duration": "X weeks/months",
        "steps": [
            {
                "phase": "Phase 1: Foundation",
                "skills": ["skill to learn"],
                "tasks": ["specific task to do"],
                "youtubePlaylist": {"name": "Playlist Name", "url": "https://youtube.com/playlist?list=..."},
                "resources": [{"name": "Resource Name", "url": "https://actual-url.com"}],
                "certifications": [
                    {"name": "Certification Name", "provider": "Google/AWS/etc", "url": "https://...", "isFree": true}
                ]
            }
        ]
    }
}"""

NO_SKILLS_TEXT = "No skills listed"


def build_eligibility_prompt(job: dict[str, Any], skills: Sequence[str]) -> str:
    company = job.get("company") or "Not specified"
    skills_text = ", ".join(skills) if skills else NO_SKILLS_TEXT
    asked_by = job.get("company") or "companies in this industry"
    return f"""Analyze if this candidate is eligible for the job position.

JOB DETAILS:
- Title: {job.get("title")}
- Company: {company}
- Description: {job.get("description") or "Not provided"}
- Location: {job.get("location") or "Not specified"}

CANDIDATE'S CURRENT SKILLS:
{skills_text}

Respond with this exact JSON structure:
{_ELIGIBILITY_SCHEMA}

IMPORTANT:
- eligibilityScore: 0-100 based on skill match
- isEligible: true if score >= 70
- If candidate has NO skills listed, set eligibilityScore to 10 and provide comprehensive roadmap
- interviewQuestions: ALWAYS include 5-8 commonly asked interview questions for this company and role. Include a mix of technical, behavioral, and HR questions that {asked_by} typically ask.
- roadmap: ALWAYS include a roadmap, even if the user is eligible. It helps them improve further.
- For EACH phase, include:
  * phase: Clear phase name
  * skills: Array of skills to learn
  * tasks: Array of specific tasks to do
  * certifications: At least one free AND one paid certification from providers like Google, AWS, Microsoft, Coursera, Udemy, LinkedIn Learning"""


def build_analyze_prompt(profile: dict[str, Any], jd_text: str) -> str:
    return f"""
Analyze the following job description and compare it against the user's profile.

USER PROFILE:
{json.dumps(profile, ensure_ascii=False)}

JOB DESCRIPTION:
{jd_text}

Respond with this exact JSON structure:
{{
    "title": "Job Title from JD",
    "company": "Company Name from JD",
    "location": "Location from JD",
    "matchPercentage": 75,
    "matchedSkills": ["skill1", "skill2"],
    "missingSkills": ["skill1", "skill2"],
    "isEligible": true,
    "advice": "Short professional advice for the candidate"
}}"""


def build_roadmap_prompt(dream_job: str, skills: Sequence[str]) -> str:
    return f"""
Create a detailed 6-month career roadmap for a student to become a {dream_job}.
Current User Skills: {", ".join(skills)}

Respond with this exact JSON structure:
{{
    "dreamJob": {json.dumps(dream_job, ensure_ascii=False)},
    "phases": [
        {{
            "month": "Month 1-2: Foundations",
            "topics": ["topic1", "topic2", "topic3"],
            "actionItems": ["action1", "action2", "action3"]
        }},
        {{
            "month": "Month 3-4: Building Skills",
            "topics": ["topic1", "topic2", "topic3"],
            "actionItems": ["action1", "action2", "action3"]
        }},
        {{
            "month": "Month 5-6: Advanced & Job Ready",
            "topics": ["topic1", "topic2", "topic3"],
            "actionItems": ["action1", "action2", "action3"]
        }}
    ],
    "recommendedResources": [
        {{"name": "Resource Name", "url": "https://actual-link-to-resource.com"}}
    ]
}}

IMPORTANT: For recommendedResources, provide 3-5 high-quality links to platforms like freeCodeCamp, Coursera, Udemy, LinkedIn Learning, official documentation (MDN, w3schools) and GitHub repositories with project examples.
"""
