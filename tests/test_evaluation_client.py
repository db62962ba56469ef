import json
import unittest

from interview_coach.errors import InvalidInputError, MalformedResponseError
from interview_coach.schemas.interview import (
    CommunicationEvaluation,
    DiscussionEvaluation,
    InterviewMode,
    ProblemSolvingQuestion,
)
from interview_coach.services.evaluation_client import EvaluationClient, build_evaluation, build_question_set
from interview_coach.services.modes import evaluation_mode

from fakes import (
    EVALUATION_PAYLOADS,
    JOB_DESCRIPTION,
    RESUME_TEXT,
    ScriptedAIClient,
    evaluation_json,
    question_payload,
    questions_json,
)


class BuildQuestionSetTests(unittest.TestCase):
    def test_truncates_extra_questions(self):
        payload = json.loads(questions_json("communication", count=7))
        question_set = build_question_set(payload, InterviewMode.COMMUNICATION, 5)
        self.assertEqual(len(question_set), 5)
        self.assertEqual(question_set[4].text, "communication question 5")

    def test_too_few_questions(self):
        payload = json.loads(questions_json("communication", count=4))
        with self.assertRaises(MalformedResponseError):
            build_question_set(payload, InterviewMode.COMMUNICATION, 5)

    def test_missing_questions_list(self):
        with self.assertRaises(MalformedResponseError):
            build_question_set({"items": []}, InterviewMode.COMMUNICATION, 5)

    def test_missing_type_defaults_to_mode(self):
        items = [question_payload("problem_solving", i) for i in range(5)]
        for item in items:
            item.pop("type")
        question_set = build_question_set({"questions": items}, InterviewMode.PROBLEM_SOLVING, 5)
        self.assertIsInstance(question_set[0], ProblemSolvingQuestion)
        self.assertEqual(question_set[0].expected_concepts, ("hashing",))

    def test_mismatched_type(self):
        items = [question_payload("communication", i) for i in range(5)]
        items[2]["type"] = "discussion"
        with self.assertRaises(MalformedResponseError) as ctx:
            build_question_set({"questions": items}, InterviewMode.COMMUNICATION, 5)
        self.assertIn("Question 3", str(ctx.exception))

    def test_difficulty_is_normalized(self):
        items = [question_payload("discussion", i) for i in range(5)]
        items[0]["difficulty"] = " Hard "
        question_set = build_question_set({"questions": items}, InterviewMode.DISCUSSION, 5)
        self.assertEqual(question_set[0].difficulty, "hard")

    def test_unknown_difficulty(self):
        items = [question_payload("discussion", i) for i in range(5)]
        items[1]["difficulty"] = "impossible"
        with self.assertRaises(MalformedResponseError):
            build_question_set({"questions": items}, InterviewMode.DISCUSSION, 5)

    def test_blank_text(self):
        items = [question_payload("discussion", i) for i in range(5)]
        items[0]["text"] = ""
        with self.assertRaises(MalformedResponseError):
            build_question_set({"questions": items}, InterviewMode.DISCUSSION, 5)


class BuildEvaluationTests(unittest.TestCase):
    def test_builds_mode_specific_evaluation(self):
        evaluation = build_evaluation(dict(EVALUATION_PAYLOADS["discussion"]), InterviewMode.DISCUSSION)
        self.assertIsInstance(evaluation, DiscussionEvaluation)
        self.assertEqual(evaluation.key_points_missed, ("cost",))

    def test_mode_in_payload_is_ignored(self):
        payload = {**EVALUATION_PAYLOADS["communication"], "mode": "discussion"}
        evaluation = build_evaluation(payload, InterviewMode.COMMUNICATION)
        self.assertIsInstance(evaluation, CommunicationEvaluation)

    def test_score_bounds(self):
        for bad in (0, 11, "seven", None):
            payload = {**EVALUATION_PAYLOADS["communication"], "overall_score": bad}
            with self.subTest(score=bad), self.assertRaises(MalformedResponseError):
                build_evaluation(payload, InterviewMode.COMMUNICATION)

    def test_score_alias_is_not_accepted(self):
        payload = dict(EVALUATION_PAYLOADS["communication"])
        payload["score"] = payload.pop("overall_score")
        with self.assertRaises(MalformedResponseError):
            build_evaluation(payload, InterviewMode.COMMUNICATION)

    def test_missing_mode_specific_score(self):
        payload = dict(EVALUATION_PAYLOADS["pronunciation"])
        payload.pop("clarity_score")
        with self.assertRaises(MalformedResponseError):
            build_evaluation(payload, InterviewMode.PRONUNCIATION)


class EvaluationClientTests(unittest.IsolatedAsyncioTestCase):
    async def test_generate_questions(self):
        ai = ScriptedAIClient(questions_json("pronunciation"))
        client = EvaluationClient(ai, questions_per_session=5)
        question_set = await client.generate_questions(RESUME_TEXT, JOB_DESCRIPTION, "pronunciation")
        self.assertEqual(len(question_set), 5)
        prompt = ai.calls[0][0]
        self.assertIn("Generate 5 technical pronunciation challenges", prompt)
        self.assertIn(RESUME_TEXT, prompt)

    async def test_generate_questions_rejects_blank_input(self):
        ai = ScriptedAIClient()
        client = EvaluationClient(ai, questions_per_session=5)
        with self.assertRaises(InvalidInputError):
            await client.generate_questions("", JOB_DESCRIPTION, InterviewMode.COMMUNICATION)
        self.assertEqual(ai.calls, [])

    async def test_generate_questions_rejects_unknown_mode(self):
        client = EvaluationClient(ScriptedAIClient(), questions_per_session=5)
        with self.assertRaises(InvalidInputError):
            await client.generate_questions(RESUME_TEXT, JOB_DESCRIPTION, "poetry")

    async def test_evaluate_answer(self):
        ai = ScriptedAIClient(evaluation_json("problem_solving"))
        client = EvaluationClient(ai, questions_per_session=5)
        evaluation = await client.evaluate_answer("Reverse a list", "Two pointers", InterviewMode.PROBLEM_SOLVING)
        self.assertEqual(evaluation.overall_score, 6)
        self.assertEqual(evaluation.mode, "problem_solving")
        self.assertIn("Reverse a list", ai.calls[0][0])

    async def test_evaluate_answer_rejects_blank_answer(self):
        ai = ScriptedAIClient()
        client = EvaluationClient(ai, questions_per_session=5)
        with self.assertRaises(InvalidInputError):
            await client.evaluate_answer("Question", "   ", InterviewMode.COMMUNICATION)
        self.assertEqual(ai.calls, [])

    async def test_uses_configured_session_size(self):
        client = EvaluationClient(ScriptedAIClient())
        self.assertEqual(client.questions_per_session, 5)


class EvaluationModeTests(unittest.TestCase):
    def test_known_mode(self):
        self.assertIs(evaluation_mode(" Discussion "), InterviewMode.DISCUSSION)

    def test_blank_and_unknown_modes_grade_as_communication(self):
        for value in (None, "", "trivia"):
            with self.subTest(mode=value):
                self.assertIs(evaluation_mode(value), InterviewMode.COMMUNICATION)


if __name__ == "__main__":
    unittest.main()
