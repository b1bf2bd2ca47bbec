import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_engine.features.domain_classifier import classify_industry  # noqa: E402
from ats_engine.features.keywords import KeywordSet, compile_dictionary, extract_keywords  # noqa: E402
from ats_engine.taxonomy.local_taxonomy import LocalReferenceDictionary  # noqa: E402


class IndustryClassifierTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.provider = LocalReferenceDictionary()
        cls.merged = compile_dictionary(cls.provider.merged())

    def _keywords(self, text):
        return extract_keywords(text, self.merged)

    def test_sales_resume_classifies_as_sales(self):
        classification = classify_industry(
            self._keywords("Salesforce CRM power user, prospecting and quota attainment"),
            self.provider,
        )
        self.assertEqual(classification.industry, "sales")
        self.assertEqual(classification.source, "detected")
        self.assertEqual(classification.overlap, 4)
        self.assertGreater(classification.confidence, 0.5)

    def test_stated_industry_takes_precedence(self):
        classification = classify_industry(
            self._keywords("Python, Django and Kubernetes"),
            self.provider,
            stated="finance",
        )
        self.assertEqual(classification.industry, "finance")
        self.assertEqual(classification.source, "stated")
        self.assertEqual(classification.overlap, 0)

    def test_unknown_stated_industry_falls_back_to_detection(self):
        classification = classify_industry(
            self._keywords("Python, Django and Kubernetes"),
            self.provider,
            stated="astronomy",
        )
        self.assertEqual(classification.industry, "tech")
        self.assertEqual(classification.source, "detected")

    def test_no_overlap_reports_no_industry(self):
        classification = classify_industry(KeywordSet(), self.provider)
        self.assertIsNone(classification.industry)
        self.assertEqual(classification.source, "none")
        self.assertEqual(classification.confidence, 0.0)


if __name__ == "__main__":
    unittest.main()
