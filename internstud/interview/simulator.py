"""
Interview simulator.

Drives one mock interview: pick a role (or a job) and an interview type,
answer five timed questions, get feedback after each and a final summary at
the end. Backend failures never stop the interview; they are replaced by a
question from the static bank, a canned feedback sentence or a zero score.

State flow:

    idle -> roleSelect -> loadingQuestion -> waitingForAnswer
         -> loadingFeedback -> showingFeedback -> loadingQuestion ...
         -> readyForFinalFeedback -> loadingFeedback -> interviewEnded

The countdown ends the interview from any timed state.
"""

import asyncio
import contextlib
import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Optional

from internstud.interview.api_client import InterviewApiClient, InterviewApiError
from internstud.interview.question_bank import (
    GENERAL_ROLE,
    NO_MORE_QUESTIONS,
    infer_role_from_title,
    pick_fallback_question,
)
from internstud.interview.transcript import TranscriptBuffer
from internstud.schemas.schemas import AnswerAnalysis, FinalFeedback, InterviewType, JobDetails

logger = logging.getLogger(__name__)

QUESTIONS_PER_INTERVIEW = 5
TIME_PER_QUESTION = 10 * 60  # seconds


class InterviewState(str, Enum):
    IDLE = "idle"
    ROLE_SELECT = "roleSelect"
    LOADING_QUESTION = "loadingQuestion"
    WAITING_FOR_ANSWER = "waitingForAnswer"
    LOADING_FEEDBACK = "loadingFeedback"
    SHOWING_FEEDBACK = "showingFeedback"
    READY_FOR_FINAL_FEEDBACK = "readyForFinalFeedback"
    INTERVIEW_ENDED = "interviewEnded"


S = InterviewState

TRANSITIONS: Dict[InterviewState, FrozenSet[InterviewState]] = {
    S.IDLE: frozenset({S.ROLE_SELECT, S.LOADING_QUESTION}),
    S.ROLE_SELECT: frozenset({S.ROLE_SELECT, S.LOADING_QUESTION}),
    S.LOADING_QUESTION: frozenset({S.ROLE_SELECT, S.WAITING_FOR_ANSWER}),
    S.WAITING_FOR_ANSWER: frozenset({S.LOADING_FEEDBACK, S.INTERVIEW_ENDED}),
    S.LOADING_FEEDBACK: frozenset({S.SHOWING_FEEDBACK, S.READY_FOR_FINAL_FEEDBACK, S.INTERVIEW_ENDED}),
    S.SHOWING_FEEDBACK: frozenset({S.LOADING_QUESTION, S.INTERVIEW_ENDED}),
    S.READY_FOR_FINAL_FEEDBACK: frozenset({S.LOADING_FEEDBACK}),
    S.INTERVIEW_ENDED: frozenset(),
}

# The countdown only runs in these
TIMED_STATES = frozenset({S.WAITING_FOR_ANSWER, S.LOADING_FEEDBACK, S.SHOWING_FEEDBACK})


class InvalidTransition(Exception):
    """Operation not allowed in the current state."""


class EmptyAnswerError(ValueError):
    """Blank answer submitted."""


def fallback_feedback(answer: str) -> str:
    """Feedback shown when the answer could not be analyzed."""
    length = len(answer.strip())
    feedback = "Thank you for your response."
    if length > 50:
        feedback += " You provided a detailed answer."
    elif length > 10:
        feedback += " Your answer is concise."
    else:
        feedback += " Please try to elaborate more in your response."
    return feedback + " (Feedback from fallback)"


def empty_final_feedback() -> FinalFeedback:
    return FinalFeedback(overall_score=0, did_well=[], future_recommendations=[])


@dataclass
class AnswerRecord:
    question: str
    answer: str
    analysis: Optional[AnswerAnalysis] = None


@dataclass
class InterviewSession:
    """Everything one run of the simulator knows. Never persisted."""
    role: Optional[str] = None
    job_id: Optional[str] = None
    job_details: Optional[JobDetails] = None
    interview_type: Optional[InterviewType] = None
    current_question: str = ""
    current_question_number: int = 0
    questions_asked: List[str] = field(default_factory=list)
    time_left_seconds: int = TIME_PER_QUESTION
    answers: List[AnswerRecord] = field(default_factory=list)
    feedback: str = ""
    final_feedback: Optional[FinalFeedback] = None
    timed_out: bool = False


class InterviewSimulator:
    """
    Single-owner interview session.

    Every backend call is awaited in a loading state. When the reply arrives
    the state is checked again: if the countdown or a reset moved the session
    on in the meantime, the reply is dropped.
    """

    def __init__(self, api: InterviewApiClient, rng: Optional[random.Random] = None):
        self.api = api
        self.rng = rng or random.Random()
        self.state = InterviewState.IDLE
        self.session = InterviewSession()
        self.transcript = TranscriptBuffer()
        self.end_count = 0
        self._generation = 0

    # ------------------------------------------------------------
    # State helpers
    # ------------------------------------------------------------

    def _transition(self, target: InterviewState):
        if target not in TRANSITIONS[self.state]:
            raise InvalidTransition(f"Cannot go from {self.state.value} to {target.value}")
        logger.debug("Interview state %s -> %s", self.state.value, target.value)
        self.state = target
        if target is InterviewState.INTERVIEW_ENDED:
            self.transcript.stop_listening()
            self.end_count += 1

    def _require(self, *states: InterviewState):
        if self.state not in states:
            allowed = ", ".join(s.value for s in states)
            raise InvalidTransition(f"Not allowed in {self.state.value} (needs {allowed})")

    def _is_stale(self, generation: int, expected: InterviewState) -> bool:
        if generation != self._generation or self.state is not expected:
            logger.info("Dropping backend reply: session moved on to %s", self.state.value)
            return True
        return False

    @property
    def effective_role(self) -> str:
        """Selected role, else the role implied by the job title."""
        if self.session.role:
            return self.session.role
        if self.session.job_details:
            return infer_role_from_title(self.session.job_details.title)
        return GENERAL_ROLE

    @property
    def is_last_question(self) -> bool:
        return self.session.current_question_number >= QUESTIONS_PER_INTERVIEW

    # ------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------

    async def load(self, job_id: Optional[str] = None):
        """Open the setup screen, optionally for a specific job."""
        self._require(InterviewState.IDLE, InterviewState.ROLE_SELECT)
        self.session = InterviewSession()
        self.transcript.clear()

        if not job_id:
            self._transition(InterviewState.ROLE_SELECT)
            return

        self.session.job_id = job_id
        self._transition(InterviewState.LOADING_QUESTION)
        generation = self._generation
        try:
            details = await self.api.get_job_details(job_id)
        except InterviewApiError as e:
            logger.warning("Failed to load job details for %s: %s", job_id, e)
            details = None

        if self._is_stale(generation, InterviewState.LOADING_QUESTION):
            return
        if details is None:
            # Manual role selection instead
            self.session.job_id = None
        self.session.job_details = details
        self._transition(InterviewState.ROLE_SELECT)

    def select_role(self, role: str):
        self._require(InterviewState.ROLE_SELECT)
        self.session.role = role

    def select_interview_type(self, interview_type):
        self._require(InterviewState.ROLE_SELECT)
        self.session.interview_type = InterviewType(interview_type)

    async def start_interview(self):
        self._require(InterviewState.ROLE_SELECT)
        session = self.session
        if session.interview_type is None:
            raise ValueError("Please select an interview type.")
        if not session.role and session.job_details is None:
            raise ValueError("Please select a role.")

        session.answers = []
        session.questions_asked = []
        session.final_feedback = None
        session.timed_out = False
        session.current_question_number = 1
        await self._fetch_question()

    # ------------------------------------------------------------
    # Questions and answers
    # ------------------------------------------------------------

    async def _fetch_question(self):
        self._transition(InterviewState.LOADING_QUESTION)
        session = self.session
        session.current_question = ""
        session.feedback = ""
        session.time_left_seconds = TIME_PER_QUESTION
        self.transcript.stop_listening()
        self.transcript.clear()

        generation = self._generation
        job_id = session.job_details.id if session.job_details else None
        question = None
        try:
            generated = await self.api.generate_question(
                session.interview_type.value,
                list(session.questions_asked),
                role=None if job_id else session.role,
                job_id=job_id
            )
            question = generated.question
        except InterviewApiError as e:
            logger.warning("Question generation failed, using the static bank: %s", e)

        if self._is_stale(generation, InterviewState.LOADING_QUESTION):
            return

        if question is not None and question in session.questions_asked:
            logger.warning("Backend repeated a question, using the static bank: %s", question)
            question = None
        if question is None:
            question = pick_fallback_question(self.effective_role, session.questions_asked, self.rng)

        if question != NO_MORE_QUESTIONS:
            session.questions_asked.append(question)
        session.current_question = question
        self._transition(InterviewState.WAITING_FOR_ANSWER)

    def set_answer(self, text: str):
        """Typed answer. Rejected while speech capture is on."""
        self._require(InterviewState.WAITING_FOR_ANSWER)
        self.transcript.set_text(text)

    def start_listening(self):
        self._require(InterviewState.WAITING_FOR_ANSWER)
        self.transcript.start_listening()

    def stop_listening(self):
        self.transcript.stop_listening()

    def feed_transcript(self, transcript: str) -> str:
        return self.transcript.feed(transcript)

    async def submit_answer(self):
        self._require(InterviewState.WAITING_FOR_ANSWER)
        answer = self.transcript.text
        if not answer.strip():
            raise EmptyAnswerError("Please provide an answer before submitting.")

        self.transcript.stop_listening()
        self._transition(InterviewState.LOADING_FEEDBACK)
        session = self.session
        question = session.current_question
        generation = self._generation
        try:
            analysis = await self.api.analyze_answer(question, answer, self.effective_role)
        except InterviewApiError as e:
            logger.warning("Answer analysis failed, using fallback feedback: %s", e)
            analysis = None

        if self._is_stale(generation, InterviewState.LOADING_FEEDBACK):
            return

        session.answers.append(AnswerRecord(question=question, answer=answer, analysis=analysis))
        session.feedback = analysis.detailed_feedback if analysis else fallback_feedback(answer)

        if self.is_last_question:
            self._transition(InterviewState.READY_FOR_FINAL_FEEDBACK)
        else:
            self._transition(InterviewState.SHOWING_FEEDBACK)

    async def next_question(self):
        self._require(InterviewState.SHOWING_FEEDBACK)
        self.session.current_question_number += 1
        await self._fetch_question()

    async def end_interview(self):
        """Request the final summary and close the interview."""
        self._require(InterviewState.READY_FOR_FINAL_FEEDBACK)
        self._transition(InterviewState.LOADING_FEEDBACK)
        generation = self._generation
        answers = [{"question": a.question, "answer": a.answer} for a in self.session.answers]
        try:
            feedback = await self.api.final_feedback(self.effective_role, answers)
        except InterviewApiError as e:
            logger.warning("Final feedback failed: %s", e)
            feedback = empty_final_feedback()

        if self._is_stale(generation, InterviewState.LOADING_FEEDBACK):
            return

        self.session.final_feedback = feedback
        self._transition(InterviewState.INTERVIEW_ENDED)

    # ------------------------------------------------------------
    # Countdown and reset
    # ------------------------------------------------------------

    def tick(self, seconds: int = 1) -> bool:
        """
        Advance the countdown. Returns True when this tick ended the interview.
        No-op outside the timed states.
        """
        if self.state not in TIMED_STATES:
            return False

        session = self.session
        session.time_left_seconds = max(0, session.time_left_seconds - seconds)
        if session.time_left_seconds > 0:
            return False

        logger.info("Time is up on question %s", session.current_question_number)
        session.timed_out = True
        self.transcript.stop_listening()
        self.transcript.clear()
        self._transition(InterviewState.INTERVIEW_ENDED)
        return True

    def reset(self):
        """Back to setup with a clean session. Allowed from every state."""
        self._generation += 1
        self.transcript.stop_listening()
        self.transcript.clear()
        self.session = InterviewSession()
        self.state = InterviewState.ROLE_SELECT


class CountdownTimer:
    """Ticks the simulator once per interval until the interview ends."""

    def __init__(self, simulator: InterviewSimulator, interval: float = 1.0):
        self.simulator = simulator
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self):
        if not self.running:
            self._task = asyncio.create_task(self._run())

    async def _run(self):
        while self.simulator.state is not InterviewState.INTERVIEW_ENDED:
            await asyncio.sleep(self.interval)
            self.simulator.tick(1)

    async def wait(self):
        if self._task is not None:
            await self._task

    async def stop(self):
        if self.running:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
        self._task = None
