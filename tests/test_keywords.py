import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_engine.features.keywords import (  # noqa: E402
    KeywordSet,
    compile_dictionary,
    extract_keywords,
    extract_profile_keywords,
    stem_token,
    term_key,
)
from ats_engine.normalize.normalize_resume import normalize_resume  # noqa: E402
from ats_engine.taxonomy.local_taxonomy import LocalReferenceDictionary  # noqa: E402
from ats_engine.taxonomy.provider import ReferenceDictionary, ReferenceTerm  # noqa: E402


class HeuristicStemmerTests(unittest.TestCase):
    """Pins the lossy suffix stripper; these are known quirks, not bugs to fix."""

    def test_strips_one_suffix_when_four_characters_remain(self):
        self.assertEqual(stem_token("engineering"), "engineer")
        self.assertEqual(stem_token("engineers"), "engineer")
        self.assertEqual(stem_token("clusters"), "cluster")

    def test_lossy_forms_are_not_lemmas(self):
        # "managed" and "manages" do not collapse to the same stem.
        self.assertEqual(stem_token("managed"), "manag")
        self.assertEqual(stem_token("manages"), "manage")
        self.assertEqual(stem_token("kubernetes"), "kubernete")
        self.assertEqual(stem_token("redis"), "redi")
        self.assertEqual(stem_token("running"), "runn")

    def test_short_stems_and_double_s_are_kept(self):
        self.assertEqual(stem_token("aws"), "aws")
        self.assertEqual(stem_token("used"), "used")
        self.assertEqual(stem_token("class"), "class")
        self.assertEqual(stem_token("business"), "business")

    def test_term_key(self):
        self.assertEqual(term_key("Kubernetes"), "kubernete")
        self.assertEqual(term_key("Node.js"), "node js")
        self.assertEqual(term_key("Machine Learning"), "machine learning")
        self.assertEqual(term_key("  "), "")


class ExtractKeywordsTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.merged = compile_dictionary(LocalReferenceDictionary().merged())

    def test_plain_text_without_dictionary(self):
        keywords = extract_keywords("The engineers managed 3 Kubernetes clusters in 2023")
        self.assertEqual(keywords.keys(), ["engineer", "manag", "kubernete", "cluster"])
        self.assertEqual(keywords.display("kubernete"), "Kubernetes")

    def test_stop_words_are_dropped(self):
        keywords = extract_keywords("Strong experience with Python required")
        self.assertEqual(keywords.keys(), ["python"])

    def test_dictionary_phrases_and_aliases(self):
        keywords = extract_keywords("Built machine learning pipelines with k8s and Node.js", self.merged)
        self.assertEqual(keywords.keys(), ["built", "machine learning", "pipeline", "kubernete", "node js"])
        self.assertEqual(keywords.display("machine learning"), "Machine Learning")
        self.assertEqual(keywords.display("kubernete"), "Kubernetes")
        self.assertEqual(keywords.display("node js"), "Node.js")

    def test_longest_phrase_wins_without_overlap(self):
        dictionary = ReferenceDictionary(
            id="custom",
            label="Custom",
            terms=(
                ReferenceTerm(display="Data", group="g", industry="custom"),
                ReferenceTerm(display="Data Analysis", group="g", industry="custom"),
                ReferenceTerm(display="Data Analysis Pipeline", group="g", industry="custom"),
            ),
        )
        keywords = extract_keywords("data analysis pipeline and data analysis", dictionary)
        self.assertEqual(keywords.keys(), ["data analysis pipeline", "data analysis"])

    def test_phrases_never_span_chunks(self):
        keywords = extract_keywords(["machine", "learning"], self.merged)
        self.assertNotIn("machine learning", keywords)
        self.assertEqual(keywords.keys(), ["machine", "learn"])

    def test_empty_dictionary_degrades_to_plain_tokens(self):
        keywords = extract_keywords("Python and Django", ReferenceDictionary(id="", label=""))
        self.assertEqual(keywords.keys(), ["python", "django"])

    def test_keyword_set_operations(self):
        left = KeywordSet({"python": "Python", "django": "Django"})
        right = KeywordSet({"django": "django", "redi": "Redis"})
        self.assertEqual(left.intersection_keys(right), ["django"])
        self.assertEqual(left.difference_keys(right), ["python"])
        merged = left.union(right)
        self.assertEqual(merged.keys(), ["python", "django", "redi"])
        self.assertEqual(merged.display("django"), "Django")
        self.assertEqual(len(merged), 3)

    def test_profile_keywords_exclude_contact_details(self):
        profile = normalize_resume(
            {
                "personal": {"name": "Django Reinhardt", "email": "someone@python.org", "location": "Paris"},
                "skills": ["Terraform"],
            }
        )
        keywords = extract_profile_keywords(profile, self.merged)
        self.assertEqual(keywords.keys(), ["terraform"])


if __name__ == "__main__":
    unittest.main()
