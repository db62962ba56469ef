from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

from interview_coach.ai.factory import get_ai_client
from interview_coach.client import CoachApiClient
from interview_coach.core.config import settings
from interview_coach.schemas.interview import InterviewMode
from interview_coach.services.evaluation_client import EvaluationClient
from interview_coach.session import Phase, SessionController, format_elapsed


def _read_text(value: str) -> str:
    path = Path(value)
    if path.is_file():
        return path.read_text(encoding="utf-8")
    return value


def _print_evaluation(controller: SessionController) -> None:
    evaluation = controller.state.evaluation
    if evaluation is None:
        return
    print(f"\nScore: {evaluation.overall_score}/10 (answered in {format_elapsed(controller.timer.elapsed)})")
    print(evaluation.feedback)
    suggestion = getattr(evaluation, "suggested_answer", None) or getattr(evaluation, "suggested_improvement", None)
    if suggestion:
        print(f"Suggestion: {suggestion}")


def _print_summary(controller: SessionController) -> None:
    summary = controller.state.summary
    if summary is None:
        return
    print("\n=== Session summary ===")
    print(f"Average score: {summary.average_overall_score}/10 ({summary.band})")
    for item in summary.breakdown:
        print(f"  Q{item.index + 1}: {item.overall_score}/10 [{item.band}] {item.question}")


async def _run(args: argparse.Namespace) -> int:
    if args.local:
        backend = EvaluationClient(get_ai_client())
        http_client = None
    else:
        backend = http_client = CoachApiClient(args.api_base_url)

    controller = SessionController(backend)
    try:
        controller.select_mode(args.mode)
        controller.edit_setup(_read_text(args.resume), _read_text(args.job_description))
        await controller.start_session()
        if controller.state.alert:
            print(controller.state.alert)
            return 1

        total = len(controller.state.question_set)
        while controller.state.phase in (Phase.IN_PROGRESS, Phase.FEEDBACK):
            state = controller.state
            if state.phase is Phase.FEEDBACK:
                await asyncio.to_thread(input, "\nPress Enter for the next question...")
                controller.next_question()
                continue

            question = state.current_question
            print(f"\nQuestion {state.current_index + 1} of {total} [{question.difficulty}]")
            print(question.text)
            answer = await asyncio.to_thread(input, "> ")
            if answer.strip() == ":quit":
                controller.finish()
                break
            controller.set_answer(answer)
            await controller.submit_answer()
            if controller.state.alert:
                print(controller.state.alert)
                controller.dismiss_alert()
                continue
            _print_evaluation(controller)

        _print_summary(controller)
        return 0
    finally:
        controller.timer.stop()
        if http_client is not None:
            await http_client.aclose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Run a mock interview session in the terminal.")
    parser.add_argument("--mode", default=InterviewMode.COMMUNICATION.value, choices=InterviewMode.values())
    parser.add_argument("--resume", required=True, help="Resume text or a path to a text file")
    parser.add_argument("--job-description", required=True, help="Job description text or a path to a text file")
    parser.add_argument("--api-base-url", default=settings.api_base_url, help="Interview coach API base URL")
    parser.add_argument(
        "--local",
        action="store_true",
        help="Call the AI provider directly instead of the HTTP API.",
    )
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    raise SystemExit(asyncio.run(_run(args)))


if __name__ == "__main__":
    main()
