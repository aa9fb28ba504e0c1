import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from internai.catalog import (  # noqa: E402
    DEFAULT_ROLE,
    count_questions,
    flatten_bundle,
    get_default_catalog,
    get_default_question_bank,
    get_resources_for_role,
    normalize_query,
    normalize_skills,
    split_skills,
)
from internai.catalog.regions import is_known_state  # noqa: E402
from internai.catalog.resources import match_role  # noqa: E402


class NormalizerTests(unittest.TestCase):
    def test_skills_dedupe_case_insensitively_keeping_first_spelling(self):
        self.assertEqual(normalize_skills([" React ", "react", "Node.js", "", "NODE.JS"]), ["React", "Node.js"])

    def test_split_skills(self):
        self.assertEqual(split_skills("python, SQL,,python "), ["python", "SQL"])

    def test_query_collapses_whitespace(self):
        self.assertEqual(normalize_query("  Data   Science\tIntern "), "data science intern")
        self.assertEqual(normalize_query(None), "")


class ResourceCatalogTests(unittest.TestCase):
    def test_visual_designer_has_google_ux_certificate(self):
        bundle = get_resources_for_role("Visual Designer")
        names = [item["name"] for item in bundle["certifications"]]
        self.assertIn("Google UX Design Certificate", names)

    def test_unknown_role_falls_back_to_default(self):
        catalog = get_default_catalog()
        self.assertEqual(
            catalog.get_resources_for_role("Underwater Basket Weaver"),
            catalog.get_resources_for_role(DEFAULT_ROLE),
        )
        self.assertEqual(get_resources_for_role(None), get_resources_for_role(DEFAULT_ROLE))

    def test_substring_match_is_case_insensitive(self):
        self.assertEqual(
            get_resources_for_role("senior data scientist"),
            get_resources_for_role("Data Scientist"),
        )

    def test_substring_ties_follow_declaration_order(self):
        table = {"Frontend Developer": 1, "Developer": 2, DEFAULT_ROLE: 0}
        self.assertEqual(match_role(table, "developer"), 1)
        self.assertEqual(match_role(table, "Developer"), 2)

    def test_every_bundle_has_all_categories(self):
        catalog = get_default_catalog()
        self.assertEqual(catalog.roles[0], DEFAULT_ROLE)
        for role in catalog.roles:
            bundle = catalog.get_resources_for_role(role)
            self.assertEqual(set(bundle), {"youtube", "courses", "certifications", "documentation"})

    def test_flatten_keeps_category_order(self):
        bundle = get_resources_for_role("Frontend Developer")
        flat = flatten_bundle(bundle)
        self.assertEqual(len(flat), sum(len(items) for items in bundle.values()))
        if bundle["youtube"]:
            self.assertEqual(flat[0], bundle["youtube"][0])


class InterviewQuestionBankTests(unittest.TestCase):
    def test_rounds_are_ordered_and_non_empty(self):
        by_round = get_default_question_bank().get_questions_by_round("Visual Designer")
        self.assertEqual(next(iter(by_round)), "HR Round")
        for items in by_round.values():
            self.assertTrue(items)
        first = by_round["HR Round"][0]
        self.assertEqual(first["type"], "hr")
        self.assertIn("question", first)

    def test_count_matches_round_totals(self):
        by_round = get_default_question_bank().get_questions_by_round("Backend Developer")
        self.assertEqual(count_questions(by_round), sum(len(v) for v in by_round.values()))
        self.assertGreater(count_questions(by_round), 0)

    def test_unknown_role_uses_default_questions(self):
        bank = get_default_question_bank()
        self.assertEqual(bank.get_questions_for_role("Astronaut"), bank.get_questions_for_role(DEFAULT_ROLE))


class RegionTests(unittest.TestCase):
    def test_known_states(self):
        self.assertTrue(is_known_state("Karnataka"))
        self.assertTrue(is_known_state("Delhi"))
        self.assertFalse(is_known_state("Atlantis"))
        self.assertFalse(is_known_state(""))


if __name__ == "__main__":
    unittest.main()
