"""Enneagram quiz conversation state machine.

Role:
    Advances one user's quiz by exactly one step per inbound message and returns
    the reply text. It owns the step transition rules and delegates normalization,
    classification, result assembly and persistence to collaborators.

Step contracts:
    start:        "1" lists stored results, "2" asks for a name, anything else re-shows the menu.
    ask_name:     stores the trimmed message as the display name.
    q1a/q1b/q2a:  stores normalize_single_digit(message), even when empty.
    q3:           needs three 1-9 digits; fewer re-prompts in place. A miss in the
                  classification table resets to start.
    wing_choice:  "1" picks the left wing, "2" the right; the full result follows.
    confirm_save: "1" stores the result, "2" skips; both reset to start on success.

Global rules:
    - Nothing runs while the classification table is loading; the not-ready reply is
      returned and no session is created or changed.
    - The restart keyword resets the session from any step before step handling.
    - Concurrent messages for the same user are assumed not to happen; sessions are
      not locked.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from .classification_table import ClassificationTable
from .config import DEFAULT_RESTART_KEYWORD
from .content import (
    ASK_NAME,
    INVALID_TYPE_REPLY,
    LIST_FAILED_REPLY,
    LOOKUP_MISS_REPLY,
    MENU,
    NOT_READY_REPLY,
    Q1_1,
    Q1_2,
    Q2_1,
    Q3_FULL,
    Q3_RETRY_NOTICE,
    SAVE_FAILED_REPLY,
    SAVE_PROMPT,
    SAVE_SKIPPED_REPLY,
    SAVED_REPLY,
    WING_RETRY_NOTICE,
)
from .normalizer import KEY_SEPARATOR, extract_choice_digits, normalize_single_digit
from .result_assembler import (
    UnknownPersonalityTypeError,
    assemble_result,
    assemble_wing_prompt,
    format_result_listing,
    wing_descriptor,
)
from .result_store import PersistenceError, ResultStore
from .session_store import QuizSession, QuizStep, SessionStore

logger = logging.getLogger("enneagram.quiz")


# (answer attribute, next step, prompt for the next step)
SINGLE_CHOICE_STEPS = {
    QuizStep.Q1A: ("q1a", QuizStep.Q1B, Q1_2),
    QuizStep.Q1B: ("q1b", QuizStep.Q2A, Q2_1),
    QuizStep.Q2A: ("q2a", QuizStep.Q3, Q3_FULL),
}


class QuizStateMachine:
    """Routes each message through the current user's quiz step."""

    def __init__(
        self,
        sessions: SessionStore,
        table: ClassificationTable,
        results: ResultStore,
        restart_keyword: str = DEFAULT_RESTART_KEYWORD,
        details: Optional[Dict[str, str]] = None,
    ) -> None:
        """Purpose: Wire the state machine to its collaborators.
        Inputs/Outputs: Inputs are the session store, classification table, result
            store, restart keyword and optional wing descriptions; no return value.
        Side Effects / State: Builds the step -> handler dispatch map.
        Failure Modes: None at init.
        Testing Notes: Inject a stub result store to simulate write failures.
        """
        self._sessions = sessions
        self._table = table
        self._results = results
        self._restart_keyword = restart_keyword
        self._details = details
        self._handlers: Dict[QuizStep, Callable[[QuizSession, str], str]] = {
            QuizStep.START: self._handle_start,
            QuizStep.ASK_NAME: self._handle_name,
            QuizStep.Q1A: self._handle_single_choice,
            QuizStep.Q1B: self._handle_single_choice,
            QuizStep.Q2A: self._handle_single_choice,
            QuizStep.Q3: self._handle_ranking,
            QuizStep.WING_CHOICE: self._handle_wing,
            QuizStep.CONFIRM_SAVE: self._handle_save,
        }

    def handle_message(self, user_id: str, message: Optional[str]) -> str:
        """Purpose: Process one inbound message and return the reply text.
        Inputs/Outputs: Inputs are the user id and raw message; output is the reply.
        Side Effects / State: Creates, advances or resets the user's session; may read
            or write the result store.
        Dependencies: SessionStore, ClassificationTable, ResultStore.
        Failure Modes: Every expected failure is answered with reply text.
        Testing Notes: Drive a full quiz and assert each reply and resulting step.
        """
        text = (message or "").strip()
        if not self._table.is_ready:
            logger.info("user=%s rejected reason=table_not_ready", user_id)
            return NOT_READY_REPLY

        if text == self._restart_keyword:
            self._sessions.reset(user_id)
            logger.info("user=%s restart", user_id)
            return MENU

        session = self._sessions.get_or_create(user_id)
        step = session.step
        reply = self._handlers[step](session, text)
        # Terminal handlers replace the session object, so read the step back from the store.
        current = self._sessions.get(user_id) or session
        logger.info("user=%s step=%s next=%s", user_id, step.value, current.step.value)
        return reply

    def _reset(self, session: QuizSession) -> QuizSession:
        return self._sessions.reset(session.user_id)

    def _handle_start(self, session: QuizSession, text: str) -> str:
        if text == "1":
            try:
                results = self._results.list_results()
            except PersistenceError:
                return LIST_FAILED_REPLY
            return format_result_listing(results)
        if text == "2":
            session.step = QuizStep.ASK_NAME
            return ASK_NAME
        return MENU

    def _handle_name(self, session: QuizSession, text: str) -> str:
        session.display_name = text
        session.step = QuizStep.Q1A
        return Q1_1

    def _handle_single_choice(self, session: QuizSession, text: str) -> str:
        # An empty answer is stored as-is and surfaces later as a lookup miss.
        attribute, next_step, prompt = SINGLE_CHOICE_STEPS[session.step]
        setattr(session.answers, attribute, normalize_single_digit(text))
        session.step = next_step
        return prompt

    def _handle_ranking(self, session: QuizSession, text: str) -> str:
        picks = extract_choice_digits(text)
        if len(picks) < 3:
            return Q3_RETRY_NOTICE + "\n\n" + Q3_FULL

        triple = KEY_SEPARATOR.join(picks[:3])
        session.answers.q3 = triple
        answers = session.answers
        row = self._table.lookup(answers.q1a or "", answers.q1b or "", answers.q2a or "", triple)
        if row is None:
            logger.info(
                "user=%s lookup miss answers=%s-%s-%s-%s",
                session.user_id,
                answers.q1a,
                answers.q1b,
                answers.q2a,
                triple,
            )
            self._reset(session)
            return LOOKUP_MISS_REPLY

        session.personality_type = row.personality_type
        session.step = QuizStep.WING_CHOICE
        return assemble_wing_prompt(row.personality_type)

    def _handle_wing(self, session: QuizSession, text: str) -> str:
        personality_type = session.personality_type or ""
        if text not in ("1", "2"):
            return WING_RETRY_NOTICE + "\n" + assemble_wing_prompt(personality_type)

        try:
            wing = wing_descriptor(personality_type)
        except UnknownPersonalityTypeError:
            logger.error("user=%s unknown personality type=%s", session.user_id, personality_type)
            self._reset(session)
            return INVALID_TYPE_REPLY + "\n\n" + MENU

        session.wing_label = wing.left_label if text == "1" else wing.right_label
        session.step = QuizStep.CONFIRM_SAVE
        return assemble_result(personality_type, session.wing_label, self._details)

    def _handle_save(self, session: QuizSession, text: str) -> str:
        if text == "1":
            saved = self._results.insert_result(
                session.user_id,
                session.display_name,
                session.personality_type or "",
                session.wing_label or "",
            )
            if not saved:
                return SAVE_FAILED_REPLY
            self._reset(session)
            return SAVED_REPLY
        if text == "2":
            self._reset(session)
            return SAVE_SKIPPED_REPLY
        return SAVE_PROMPT
