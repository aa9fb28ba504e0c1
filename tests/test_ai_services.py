import json
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from internai.ai.groq_provider import GroqProvider  # noqa: E402
from internai.ai.parsing import parse_json_response  # noqa: E402
from internai.ai.prompts import NO_SKILLS_TEXT  # noqa: E402
from internai.ai.types import AIConfigurationError, AIResponseParseError, ChatMessage  # noqa: E402
from internai.catalog import flatten_bundle, get_resources_for_role  # noqa: E402
from internai.schemas.ai import ChatHistoryItem  # noqa: E402
from internai.schemas.users import UserProfile  # noqa: E402
from internai.services.chat_service import EMPTY_REPLY, build_chat_messages, career_chat  # noqa: E402
from internai.services.eligibility_service import analyze_job_description, evaluate  # noqa: E402
from internai.services.roadmap_service import generate_roadmap  # noqa: E402


class FakeLLM:
    def __init__(self, reply):
        self.reply = reply
        self.calls = []

    def complete(self, messages, *, temperature=0.7, max_tokens=2048, json_mode=False):
        self.calls.append(
            {"messages": list(messages), "temperature": temperature, "max_tokens": max_tokens, "json_mode": json_mode}
        )
        return self.reply


ELIGIBILITY_REPLY = {
    "eligibilityScore": 72,
    "isEligible": False,
    "matchedSkills": ["React", "JavaScript"],
    "missingSkills": ["TypeScript", "react"],
    "requiredSkills": ["React", "JavaScript", "TypeScript"],
    "summary": "Solid frontend basics.",
    "interviewQuestions": [
        {"question": "Explain the virtual DOM.", "category": "Technical", "difficulty": "Easy", "tips": "Be concise"},
        {"category": "HR"},
    ],
    "roadmap": {
        "title": "Path to becoming eligible",
        "duration": "6 weeks",
        "steps": [
            {
                "phase": "Phase 1: Foundation",
                "skills": ["TypeScript"],
                "tasks": ["Port a project to TypeScript"],
                "youtubePlaylist": {"name": "TypeScript Crash Course", "url": "https://youtube.com/playlist?list=..."},
                "resources": [{"name": "TS Handbook", "url": "www.typescriptlang.org/docs"}],
                "certifications": [
                    {"name": "Meta Front-End", "provider": "Coursera", "url": "https://example.com", "isFree": False}
                ],
            }
        ],
    },
}


class ParsingTests(unittest.TestCase):
    def test_plain_json(self):
        self.assertEqual(parse_json_response('{"a": 1}'), {"a": 1})

    def test_prose_wrapped_json(self):
        text = 'Sure! Here you go:\n```json\n{"score": 50, "nested": {"x": [1, 2]}}\n```\nGood luck.'
        self.assertEqual(parse_json_response(text), {"score": 50, "nested": {"x": [1, 2]}})

    def test_no_json_raises(self):
        with self.assertRaises(AIResponseParseError) as ctx:
            parse_json_response("I cannot help with that.")
        self.assertEqual(ctx.exception.status_code, 500)

    def test_broken_json_raises(self):
        with self.assertRaises(AIResponseParseError):
            parse_json_response('{"score": 50,,}')


class EligibilityTests(unittest.TestCase):
    def test_report_is_normalized(self):
        llm = FakeLLM("Result:\n" + json.dumps(ELIGIBILITY_REPLY))
        report = evaluate(llm, ["React", "JavaScript"], {"title": "Frontend Developer Intern", "company": "Acme"})

        self.assertEqual(report.score, 72)
        self.assertTrue(report.isEligible)
        self.assertEqual(report.matchedSkills, ["React", "JavaScript"])
        self.assertEqual(report.missingSkills, ["TypeScript"])
        self.assertEqual(len(report.interviewQuestions), 1)

        step = report.roadmap.steps[0]
        self.assertTrue(step.youtubePlaylist.url.startswith("https://www.youtube.com/results?search_query="))
        self.assertEqual(step.resources[0].url, "https://www.typescriptlang.org/docs")
        self.assertEqual(step.certifications[0].url, "https://www.coursera.org/search?query=Meta%20Front-End")
        self.assertEqual(step.certifications[0].provider, "Coursera")
        self.assertFalse(step.certifications[0].isFree)

        expected = get_resources_for_role("Frontend Developer Intern")
        self.assertEqual(
            [r.name for r in report.curatedResources["youtube"]],
            [r["name"] for r in expected["youtube"]],
        )

        call = llm.calls[0]
        self.assertTrue(call["json_mode"])
        self.assertEqual(call["temperature"], 0.7)
        self.assertEqual(call["max_tokens"], 2048)

    def test_score_is_clamped_and_threshold_applied(self):
        for raw, score, eligible in ((150, 100, True), (-5, 0, False), (69.6, 70, True), (69.4, 69, False), ("n/a", 0, False)):
            llm = FakeLLM(json.dumps({"eligibilityScore": raw, "isEligible": not eligible}))
            report = evaluate(llm, ["Python"], {"title": "Data Scientist"})
            self.assertEqual(report.score, score, raw)
            self.assertEqual(report.isEligible, eligible, raw)

    def test_overflowing_score_is_not_eligible(self):
        for raw in ('{"eligibilityScore": 1e999}', '{"eligibilityScore": -1e999}', '{"eligibilityScore": NaN}'):
            report = evaluate(FakeLLM(raw), ["Python"], {"title": "Data Scientist"})
            self.assertEqual(report.score, 0, raw)
            self.assertFalse(report.isEligible, raw)

    def test_matched_and_missing_are_disjoint(self):
        llm = FakeLLM(json.dumps({"score": 40, "matchedSkills": ["SQL"], "missingSkills": ["sql", "Python", "Python"]}))
        report = evaluate(llm, ["SQL"], {"title": "Data Analyst"})
        self.assertEqual(report.matchedSkills, ["SQL"])
        self.assertEqual(report.missingSkills, ["Python"])
        self.assertIsNone(report.roadmap)

    def test_empty_skills_prompt_mentions_no_skills(self):
        llm = FakeLLM(json.dumps({"eligibilityScore": 10}))
        evaluate(llm, [], {"title": "Backend Developer"})
        prompt = llm.calls[0]["messages"][-1].content
        self.assertIn(NO_SKILLS_TEXT, prompt)
        self.assertIn("set eligibilityScore to 10", prompt)

    def test_unparseable_reply_raises(self):
        with self.assertRaises(AIResponseParseError):
            evaluate(FakeLLM("not json at all"), ["Go"], {"title": "Backend Developer"})


class AnalyzeTests(unittest.TestCase):
    def test_guest_profile_uses_default_skills(self):
        llm = FakeLLM(json.dumps({"title": "SDE Intern", "matchPercentage": 80, "matchedSkills": ["React"]}))
        result = analyze_job_description(llm, None, "We want React developers.")
        self.assertEqual(result.title, "SDE Intern")
        self.assertTrue(result.isEligible)
        prompt = llm.calls[0]["messages"][-1].content
        self.assertIn("Guest User", prompt)
        self.assertIn("Web Technologies", prompt)

    def test_profile_skills_are_sent(self):
        llm = FakeLLM(json.dumps({"matchPercentage": 30}))
        profile = UserProfile(id="u1", name="Ravi", skills=["Rust"])
        result = analyze_job_description(llm, profile, "Need Rust.")
        self.assertFalse(result.isEligible)
        self.assertIn("Rust", llm.calls[0]["messages"][-1].content)


class RoadmapTests(unittest.TestCase):
    def test_curated_resources_replace_model_links(self):
        reply = {
            "dreamJob": "something else",
            "phases": [
                {"month": "Month 1-2: Foundations", "topics": ["HTML"], "actionItems": ["Build a page"]},
                {"topics": ["APIs"]},
                "junk",
            ],
            "recommendedResources": [{"name": "Fake", "url": "https://actual-url.com"}],
        }
        llm = FakeLLM(json.dumps(reply))
        roadmap = generate_roadmap(llm, "  Cloud Engineer ", [])

        self.assertEqual(roadmap.dreamJob, "Cloud Engineer")
        self.assertEqual([p.month for p in roadmap.phases], ["Month 1-2: Foundations", "Phase 2"])
        expected = flatten_bundle(get_resources_for_role("Cloud Engineer"))
        self.assertEqual([r.url for r in roadmap.recommendedResources], [r["url"] for r in expected])
        self.assertIn("Software Development", llm.calls[0]["messages"][-1].content)

    def test_phase_lists_tolerate_scalars(self):
        reply = {
            "phases": [
                {"month": "Month 1", "topics": 5, "actionItems": None},
                {"month": "Month 2", "topics": "Docker", "actionItems": ["Ship a container", ""]},
            ]
        }
        roadmap = generate_roadmap(FakeLLM(json.dumps(reply)), "DevOps Engineer", ["Linux"])

        self.assertEqual(roadmap.phases[0].topics, [])
        self.assertEqual(roadmap.phases[0].actionItems, [])
        self.assertEqual(roadmap.phases[1].topics, ["Docker"])
        self.assertEqual(roadmap.phases[1].actionItems, ["Ship a container"])


class ChatTests(unittest.TestCase):
    def test_history_is_mapped_to_chat_roles(self):
        history = [
            ChatHistoryItem(role="user", parts=[{"text": "Hi"}]),
            ChatHistoryItem(role="model", content="Hello! How can I help?"),
            ChatHistoryItem(role="system", content="ignored"),
        ]
        messages = build_chat_messages("  What should I learn? ", history)
        self.assertEqual([m.role for m in messages], ["system", "user", "assistant", "user"])
        self.assertEqual(messages[1].content, "Hi")
        self.assertEqual(messages[-1].content, "What should I learn?")

    def test_reply_and_sampling(self):
        llm = FakeLLM("  Learn SQL first. ")
        self.assertEqual(career_chat(llm, "Hi"), "Learn SQL first.")
        self.assertEqual(llm.calls[0]["temperature"], 0.8)
        self.assertEqual(llm.calls[0]["max_tokens"], 500)
        self.assertFalse(llm.calls[0]["json_mode"])

    def test_empty_reply_gets_placeholder(self):
        self.assertEqual(career_chat(FakeLLM(""), "Hi"), EMPTY_REPLY)


class GroqProviderTests(unittest.TestCase):
    def test_missing_or_placeholder_key_fails_before_network(self):
        for key in (None, "", "your_groq_api_key_here"):
            provider = GroqProvider(model="llama-3.3-70b-versatile", api_key=key)
            self.assertFalse(provider.is_configured())
            with self.assertRaises(AIConfigurationError) as ctx:
                provider.complete([ChatMessage(role="user", content="hi")])
            self.assertEqual(ctx.exception.status_code, 500)
            self.assertIn("GROQ_API_KEY", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
