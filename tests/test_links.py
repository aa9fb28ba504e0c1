import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from internai.catalog.links import fallback_url, is_placeholder_url, sanitize_link  # noqa: E402


class LinkSanitizerTests(unittest.TestCase):
    def test_valid_https_url_is_unchanged(self):
        result = sanitize_link({"name": "React Docs", "url": "https://react.dev"})
        self.assertEqual(result, {"name": "React Docs", "url": "https://react.dev"})

    def test_placeholder_domain_becomes_search_url(self):
        result = sanitize_link({"name": "React Tutorial", "url": "https://actual-url.com"})
        self.assertEqual(
            result["url"],
            "https://www.google.com/search?q=React%20Tutorial+learning+resources",
        )

    def test_node_course_placeholder(self):
        result = sanitize_link({"name": "Node.js Course", "url": "https://actual-url.com"}, "resource")
        self.assertEqual(
            result,
            {"name": "Node.js Course", "url": "https://www.google.com/search?q=Node.js%20Course+learning+resources"},
        )

    def test_example_domain_youtube_type(self):
        result = sanitize_link({"name": "Python Course", "url": "https://example.com/video"}, "youtube")
        self.assertEqual(result["url"], "https://www.youtube.com/results?search_query=Python%20Course+tutorial")

    def test_certification_fallback_uses_coursera(self):
        result = sanitize_link({"name": "AWS Cloud Practitioner", "url": ""}, "certification")
        self.assertEqual(result["url"], "https://www.coursera.org/search?query=AWS%20Cloud%20Practitioner")

    def test_ellipsis_playlist_is_placeholder(self):
        result = sanitize_link(
            {"name": "Node Playlist", "url": "https://youtube.com/playlist?list=..."},
            "youtube",
        )
        self.assertTrue(result["url"].startswith("https://www.youtube.com/results?search_query=Node%20Playlist"))

    def test_missing_protocol_gets_https(self):
        result = sanitize_link({"name": "MDN", "url": "developer.mozilla.org"})
        self.assertEqual(result["url"], "https://developer.mozilla.org")

    def test_http_is_upgraded(self):
        result = sanitize_link({"name": "W3", "url": "http://www.w3schools.com"})
        self.assertEqual(result["url"], "https://www.w3schools.com")

    def test_extra_keys_survive_and_input_is_not_mutated(self):
        original = {"name": "Google Cert", "url": "https://example.com", "provider": "Google", "isFree": True}
        result = sanitize_link(original, "certification")
        self.assertEqual(result["provider"], "Google")
        self.assertTrue(result["isFree"])
        self.assertEqual(original["url"], "https://example.com")

    def test_names_are_encoded_like_uri_components(self):
        self.assertEqual(
            fallback_url("C++ & Go", "resource"),
            "https://www.google.com/search?q=C%2B%2B%20%26%20Go+learning+resources",
        )

    def test_is_placeholder_url(self):
        self.assertTrue(is_placeholder_url(None))
        self.assertTrue(is_placeholder_url("  "))
        self.assertTrue(is_placeholder_url("https://youtube.com/video/123"))
        self.assertFalse(is_placeholder_url("https://www.freecodecamp.org"))

    def test_every_output_is_https(self):
        inputs = [
            {"name": "a", "url": "https://a.dev"},
            {"name": "b", "url": "http://b.dev"},
            {"name": "c", "url": "c.dev"},
            {"name": "d", "url": "https://example.com"},
            {"name": "e"},
        ]
        for item in inputs:
            self.assertTrue(sanitize_link(item)["url"].startswith("https://"), item)


if __name__ == "__main__":
    unittest.main()
