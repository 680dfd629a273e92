"""
Terminal interview against a running InternStud API.

    internstud-interview --role "Software Engineer" --type technical
    internstud-interview --job-id 65f0c0ffee --type hr
"""

import argparse
import asyncio
import logging
import sys

from internstud.interview.api_client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, InterviewApiClient
from internstud.interview.question_bank import ROLES
from internstud.interview.simulator import (
    QUESTIONS_PER_INTERVIEW,
    CountdownTimer,
    EmptyAnswerError,
    InterviewSimulator,
    InterviewState,
)
from internstud.schemas.schemas import InterviewType


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Practice a job interview in the terminal")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="InternStud API base URL")
    parser.add_argument("--job-id", help="Announcement to interview for")
    parser.add_argument("--role", choices=ROLES, help="Role when no job is given")
    parser.add_argument("--type", dest="interview_type", choices=[t.value for t in InterviewType])
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT, help="HTTP timeout in seconds")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def choose(prompt, options):
    for i, option in enumerate(options, 1):
        print(f"  {i}. {option}")
    while True:
        picked = input(f"{prompt} [1-{len(options)}]: ").strip()
        if picked.isdigit() and 1 <= int(picked) <= len(options):
            return options[int(picked) - 1]
        print("Invalid choice.")


def format_time(seconds):
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def print_final_feedback(simulator):
    session = simulator.session
    if session.timed_out:
        print("\nTime is up. The interview has ended.")
        return

    feedback = session.final_feedback
    print("\n=== Final Feedback ===")
    print(f"Overall score: {feedback.overall_score}/100")
    if feedback.did_well:
        print("\nYou did well:")
        for item in feedback.did_well:
            print(f"  - {item}")
    if feedback.future_recommendations:
        print("\nRecommendations:")
        for item in feedback.future_recommendations:
            print(f"  - {item}")


async def setup(simulator, args):
    await simulator.load(args.job_id)
    session = simulator.session

    if session.job_details:
        print(f"Interview for: {session.job_details.title} at {session.job_details.company_name}")
    else:
        if args.job_id:
            print("Failed to load job details for the interview. Pick a role instead.")
        simulator.select_role(args.role or choose("Role", ROLES))

    simulator.select_interview_type(
        args.interview_type or choose("Interview type", [t.value for t in InterviewType])
    )


async def run_interview(simulator):
    timer = CountdownTimer(simulator)
    await simulator.start_interview()
    timer.start()
    try:
        while simulator.state is not InterviewState.INTERVIEW_ENDED:
            session = simulator.session

            if simulator.state is InterviewState.WAITING_FOR_ANSWER:
                print(f"\nQuestion {session.current_question_number}/{QUESTIONS_PER_INTERVIEW} "
                      f"(time left {format_time(session.time_left_seconds)})")
                print(session.current_question)
                answer = await asyncio.to_thread(input, "> ")
                if simulator.state is not InterviewState.WAITING_FOR_ANSWER:
                    continue
                simulator.set_answer(answer)
                try:
                    await simulator.submit_answer()
                except EmptyAnswerError as e:
                    print(e)

            elif simulator.state is InterviewState.SHOWING_FEEDBACK:
                print(f"\nFeedback: {session.feedback}")
                await asyncio.to_thread(input, "Press Enter for the next question...")
                if simulator.state is InterviewState.SHOWING_FEEDBACK:
                    await simulator.next_question()

            elif simulator.state is InterviewState.READY_FOR_FINAL_FEEDBACK:
                print(f"\nFeedback: {session.feedback}")
                print("\nGenerating final feedback...")
                await simulator.end_interview()
    finally:
        await timer.stop()

    print_final_feedback(simulator)


async def main_async(args):
    async with InterviewApiClient(args.base_url, timeout=args.timeout) as api:
        simulator = InterviewSimulator(api)
        await setup(simulator, args)
        print("\n=== Starting Interview ===")
        await run_interview(simulator)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s"
    )

    try:
        asyncio.run(main_async(args))
    except KeyboardInterrupt:
        print("\nInterview session cancelled by user")
    except Exception as e:
        logging.error("Fatal error: %s", e)
        print(f"\nA fatal error occurred: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
