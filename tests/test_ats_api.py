import sys
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_engine.main import app  # noqa: E402


class AtsApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def setUp(self):
        self.resume = {
            "personalInfo": {"fullName": "Sam Lee", "email": "sam@example.com", "phone": "555-123-4567"},
            "professionalSummary": "Backend engineer focused on Python services.",
            "experience": [
                {
                    "jobTitle": "Engineer",
                    "company": "Acme",
                    "description": "- Built Python microservices used by 1.2M users\n- Reduced API latency by 38%",
                }
            ],
            "skills": {"technical": ["Python", "Django", "Docker"]},
        }

    def test_health(self):
        response = self.client.get("/v1/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "healthy", "engineVersion": "3.0"})

    def test_analyze_contract(self):
        response = self.client.post(
            "/v1/ats/analyze",
            json={"resume": self.resume, "jobDescription": "Python, Django, Kafka and Kubernetes"},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertGreaterEqual(body["atsScore"], 0)
        self.assertLessEqual(body["atsScore"], 100)
        self.assertEqual(body["breakdown"]["personalInfo"]["maxScore"], 10)
        self.assertNotIn("findings", body["breakdown"]["experience"])
        self.assertEqual(body["matchPercentage"], 50)
        self.assertEqual(body["missingSkills"], ["Kafka", "Kubernetes"])
        self.assertIn(body["suggestions"][0]["priority"], {"high", "medium", "low"})
        self.assertEqual(body["metadata"]["version"], "3.0")

    def test_analyze_without_job_description(self):
        response = self.client.post("/v1/ats/analyze", json={"resume": self.resume})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertIsNone(body["matchPercentage"])
        self.assertEqual(body["missingSkills"], [])

    def test_empty_resume_scores_zero(self):
        response = self.client.post("/v1/ats/analyze", json={"resume": {}})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["atsScore"], 0)

    def test_non_record_resume_is_rejected(self):
        response = self.client.post("/v1/ats/analyze", json={"resume": ["not", "a", "record"]})
        self.assertEqual(response.status_code, 422)
        self.assertIn("mapping", response.json()["detail"])

    def test_industries(self):
        response = self.client.get("/v1/ats/industries")
        self.assertEqual(response.status_code, 200)
        industries = {item["id"]: item for item in response.json()["industries"]}
        self.assertIn("tech", industries)
        self.assertEqual(industries["tech"]["label"], "Technology")
        self.assertGreater(industries["tech"]["termCount"], 0)


if __name__ == "__main__":
    unittest.main()
