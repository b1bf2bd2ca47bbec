import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_engine import InvalidInputKind, analyze  # noqa: E402
from ats_engine.features.keywords import compile_dictionary, extract_keywords, extract_profile_keywords  # noqa: E402
from ats_engine.normalize.normalize_resume import normalize_resume  # noqa: E402
from ats_engine.scoring.suggestions import PRIORITY_RANK  # noqa: E402
from ats_engine.taxonomy.local_taxonomy import LocalReferenceDictionary  # noqa: E402

JOB_DESCRIPTION = (
    "Python, Django, PostgreSQL, Docker, Kubernetes, Terraform, Redis, GraphQL, "
    "Kafka, Jenkins, Ansible, Prometheus"
)

MATCHING_RESUME = {
    "personal": {"name": "Sam Lee", "email": "sam@example.com"},
    "skills": {
        "technical": [
            "Python", "Django", "PostgreSQL", "Docker", "Kubernetes",
            "Terraform", "Redis", "GraphQL", "React", "TypeScript",
        ]
    },
}

BASIC_RESUME = {
    "personal": {"name": "Jane Doe", "email": "jane@example.com"},
    "skills": {"technical": ["Python", "Django", "PostgreSQL", "Docker", "Git"]},
    "experience": [
        {
            "title": "Backend Developer",
            "company": "Acme",
            "description": "Responsible for internal web services and maintained the deployment pipeline for the team.",
        }
    ],
}

RICH_RESUME = {
    "personalInfo": {
        "fullName": "Alex Morgan",
        "email": "alex.morgan@example.com",
        "phone": "+44 20 7946 0958",
        "location": "London, UK",
        "socialLinks": {"linkedin": "https://linkedin.com/in/alexmorgan"},
    },
    "professionalSummary": (
        "Platform engineer with eight years of experience building cloud infrastructure, "
        "automating delivery pipelines and mentoring engineers across globally distributed product teams."
    ),
    "experience": [
        {
            "jobTitle": "Staff Engineer",
            "company": "Globex",
            "startDate": "2020",
            "current": True,
            "description": "Led the platform group responsible for Kubernetes clusters serving 40 product teams.",
            "achievements": [
                "Reduced cloud spend by 32% through rightsizing",
                "Migrated 120 services to Terraform-managed infrastructure",
            ],
        },
        {
            "jobTitle": "Senior Engineer",
            "company": "Initech",
            "startDate": "2016",
            "endDate": "2020",
            "description": "Built CI/CD pipelines with Jenkins and GitHub Actions for a 60 person engineering org.",
            "achievements": ["Cut deployment time from 2 hours to 15 minutes"],
        },
    ],
    "education": [{"degree": "BEng", "fieldOfStudy": "Computer Engineering", "school": "Imperial College", "endDate": "2016"}],
    "skills": {
        "technical": ["Python", "Go", "Kubernetes", "Terraform", "AWS", "Docker", "Prometheus"],
        "tools": ["Jira", "Grafana"],
        "soft": ["Mentoring", "Communication"],
    },
    "certifications": [{"name": "Certified Kubernetes Administrator", "issuer": "CNCF", "date": "2021"}],
    "additionalDetails": {"awards": ["Engineering excellence award 2022"]},
}


class AnalyzePropertiesTests(unittest.TestCase):
    def test_identical_inputs_give_identical_results(self):
        first = analyze(RICH_RESUME, JOB_DESCRIPTION)
        second = analyze(RICH_RESUME, JOB_DESCRIPTION)
        self.assertEqual(first, second)
        self.assertEqual(first.model_dump_json(by_alias=True), second.model_dump_json(by_alias=True))

    def test_scores_stay_within_bounds(self):
        for resume in ({}, BASIC_RESUME, MATCHING_RESUME, RICH_RESUME):
            result = analyze(resume, JOB_DESCRIPTION)
            self.assertGreaterEqual(result.ats_score, 0)
            self.assertLessEqual(result.ats_score, 100)
            total_max = 0
            for _, category in result.breakdown.items():
                self.assertGreaterEqual(category.score, 0)
                self.assertLessEqual(category.score, category.max_score)
                total_max += category.max_score
            self.assertEqual(total_max, 100)
            self.assertEqual(result.ats_score, sum(category.score for _, category in result.breakdown.items()))

    def test_empty_record_floors_at_zero(self):
        result = analyze({})
        self.assertEqual(result.ats_score, 0)
        self.assertIsNone(result.match_percentage)
        self.assertEqual(result.missing_skills, [])
        self.assertEqual(len(result.breakdown.items()), 6)
        self.assertEqual(len(result.next_steps), 4)

    def test_non_mapping_input_raises(self):
        with self.assertRaises(InvalidInputKind):
            analyze(["not", "a", "resume"])

    def test_blank_job_description_is_not_computed(self):
        result = analyze(MATCHING_RESUME, "   ")
        self.assertIsNone(result.match_percentage)
        self.assertEqual(result.missing_skills, [])
        self.assertIsNone(result.metadata.job_keyword_count)

    def test_missing_skills_are_job_keywords_absent_from_resume(self):
        merged = compile_dictionary(LocalReferenceDictionary().merged())
        for resume in (BASIC_RESUME, MATCHING_RESUME, RICH_RESUME):
            result = analyze(resume, JOB_DESCRIPTION)
            job_keywords = extract_keywords(JOB_DESCRIPTION, merged)
            resume_keywords = extract_profile_keywords(normalize_resume(resume), merged)
            job_displays = {job_keywords.display(key): key for key in job_keywords.keys()}
            for skill in result.missing_skills:
                self.assertIn(skill, job_displays)
                self.assertNotIn(job_displays[skill], resume_keywords)

    def test_suggestions_sorted_and_unique(self):
        for resume in ({}, BASIC_RESUME, MATCHING_RESUME, RICH_RESUME):
            result = analyze(resume, JOB_DESCRIPTION)
            ranks = [PRIORITY_RANK[item.priority] for item in result.suggestions]
            self.assertEqual(ranks, sorted(ranks))
            texts = [item.suggestion for item in result.suggestions]
            self.assertEqual(len(texts), len(set(texts)))
            for priority in ("high", "medium", "low"):
                impacts = [item.impact for item in result.suggestions if item.priority == priority]
                self.assertEqual(impacts, sorted(impacts, reverse=True))

    def test_adding_a_technical_skill_never_lowers_skills_score(self):
        base = analyze(BASIC_RESUME).breakdown.skills.score
        extended = dict(BASIC_RESUME)
        extended["skills"] = {"technical": BASIC_RESUME["skills"]["technical"] + ["Kubernetes"]}
        self.assertGreaterEqual(analyze(extended).breakdown.skills.score, base)


class AnalyzeScenarioTests(unittest.TestCase):
    def test_basic_resume_without_job_description(self):
        result = analyze(BASIC_RESUME)
        self.assertGreaterEqual(result.ats_score, 20)
        self.assertLessEqual(result.ats_score, 60)
        self.assertIn("Quantify your achievements with numbers, percentages, or dollar amounts", result.recommendations)
        self.assertIsNone(result.match_percentage)
        self.assertEqual(result.missing_skills, [])

    def test_eight_of_twelve_job_keywords_matched(self):
        result = analyze(MATCHING_RESUME, JOB_DESCRIPTION)
        self.assertEqual(result.metadata.job_keyword_count, 12)
        self.assertEqual(result.match_percentage, 67)
        self.assertEqual(result.missing_skills, ["Ansible", "Jenkins", "Kafka", "Prometheus"])

        keyword_suggestions = [item for item in result.suggestions if item.category == "keywords"]
        self.assertEqual(
            [(item.suggestion, item.impact, item.priority) for item in keyword_suggestions],
            [
                ("Add missing devops keywords from the job description: Ansible, Jenkins, Prometheus", 25, "medium"),
                ("Add missing data keywords from the job description: Kafka", 8, "medium"),
            ],
        )

    def test_resubmitting_the_same_resume_is_stable(self):
        results = [analyze(MATCHING_RESUME, JOB_DESCRIPTION) for _ in range(3)]
        self.assertTrue(all(result == results[0] for result in results))

    def test_rich_resume_scores_high(self):
        result = analyze(RICH_RESUME)
        self.assertGreaterEqual(result.ats_score, 80)
        self.assertEqual(len(result.next_steps), 2)
        self.assertEqual(result.metadata.detected_industry, "tech")
        self.assertEqual(result.metadata.industry_source, "detected")


class AnalyzeMetadataTests(unittest.TestCase):
    def test_stated_industry_is_reported(self):
        result = analyze(MATCHING_RESUME, industry="Finance")
        self.assertEqual(result.metadata.detected_industry, "finance")
        self.assertEqual(result.metadata.industry_source, "stated")
        self.assertEqual(result.metadata.version, "3.0")

    def test_stated_industry_narrows_skill_overlap(self):
        detected = analyze(MATCHING_RESUME)
        stated = analyze(MATCHING_RESUME, industry="finance")
        self.assertGreater(detected.breakdown.skills.score, stated.breakdown.skills.score)

    def test_wire_shape_uses_camel_case(self):
        payload = analyze(MATCHING_RESUME, JOB_DESCRIPTION).model_dump(by_alias=True)
        self.assertEqual(
            set(payload),
            {
                "atsScore",
                "breakdown",
                "matchPercentage",
                "missingSkills",
                "strengths",
                "recommendations",
                "suggestions",
                "nextSteps",
                "metadata",
            },
        )
        self.assertEqual(
            list(payload["breakdown"]),
            ["personalInfo", "experience", "education", "skills", "structure", "achievements"],
        )
        self.assertEqual(set(payload["breakdown"]["skills"]), {"score", "maxScore", "details"})
        self.assertIn("resumeKeywordCount", payload["metadata"])


if __name__ == "__main__":
    unittest.main()
