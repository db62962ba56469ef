import json
import unittest

import httpx

from interview_coach.client import CoachApiClient
from interview_coach.errors import InvalidInputError, MalformedResponseError, UpstreamError
from interview_coach.schemas.interview import DiscussionEvaluation, InterviewMode

from fakes import EVALUATION_PAYLOADS, JOB_DESCRIPTION, RESUME_TEXT, question_payload


class CoachApiClientTests(unittest.IsolatedAsyncioTestCase):
    def _client(self, handler):
        self.requests = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        http = httpx.AsyncClient(transport=httpx.MockTransport(record))
        return CoachApiClient("http://coach.test/api/", http_client=http)

    async def test_generate_questions(self):
        questions = [question_payload("discussion", i) for i in range(5)]
        async with self._client(lambda request: httpx.Response(200, json={"questions": questions})) as client:
            question_set = await client.generate_questions(RESUME_TEXT, JOB_DESCRIPTION, InterviewMode.DISCUSSION)
        self.assertEqual(len(question_set), 5)
        request = self.requests[0]
        self.assertEqual(str(request.url), "http://coach.test/api/interview/start")
        self.assertEqual(json.loads(request.content)["mode"], "discussion")

    async def test_evaluate_answer(self):
        payload = {**EVALUATION_PAYLOADS["discussion"], "mode": "discussion"}
        async with self._client(lambda request: httpx.Response(200, json=payload)) as client:
            evaluation = await client.evaluate_answer("Q", "A", InterviewMode.DISCUSSION)
        self.assertIsInstance(evaluation, DiscussionEvaluation)
        self.assertEqual(evaluation.overall_score, 9)

    async def test_bad_request_maps_to_invalid_input(self):
        response = httpx.Response(400, json={"error": "question and user_answer are required."})
        async with self._client(lambda request: response) as client:
            with self.assertRaises(InvalidInputError) as ctx:
                await client.evaluate_answer("Q", "", InterviewMode.COMMUNICATION)
        self.assertEqual(str(ctx.exception), "question and user_answer are required.")

    async def test_server_error_maps_to_upstream(self):
        async with self._client(lambda request: httpx.Response(500, text="oops")) as client:
            with self.assertRaises(UpstreamError) as ctx:
                await client.generate_questions(RESUME_TEXT, JOB_DESCRIPTION, InterviewMode.COMMUNICATION)
        self.assertEqual(str(ctx.exception), "Failed to start interview")

    async def test_transport_error_maps_to_upstream(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        async with self._client(handler) as client:
            with self.assertRaises(UpstreamError):
                await client.evaluate_answer("Q", "A", InterviewMode.COMMUNICATION)

    async def test_unexpected_shape_is_malformed(self):
        async with self._client(lambda request: httpx.Response(200, json={"overall_score": 5})) as client:
            with self.assertRaises(MalformedResponseError):
                await client.evaluate_answer("Q", "A", InterviewMode.COMMUNICATION)

    async def test_analyze_resume_uploads_multipart(self):
        def handler(request):
            return httpx.Response(400, json={"error": "Only PDF files are supported."})

        async with self._client(handler) as client:
            with self.assertRaises(InvalidInputError):
                await client.analyze_resume("resume.txt", b"text", JOB_DESCRIPTION)
        request = self.requests[0]
        self.assertEqual(str(request.url), "http://coach.test/api/analyze")
        self.assertIn(b'name="job_description"', request.content)


if __name__ == "__main__":
    unittest.main()
