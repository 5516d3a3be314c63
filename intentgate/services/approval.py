"""
Approval - Human-in-the-loop decisions for mutating actions

The pipeline asks; something outside answers. The gate is an injected
capability so the core never imports a UI.

    request_approval(ApprovalRequest) -> ApprovalDecision

Channel contract: a prompt string plus two named choices
("Approve", "Reject"). Exactly one choice comes back, or nothing
(cancelled). Anything other than "Approve" is a rejection, and so is
a timeout.

Gates:
- StaticApprovalGate:   fixed answer (tests, 'auto' and 'deny' modes)
- CallbackApprovalGate: wraps any UI callable, enforces a timeout
- ConsoleApprovalGate:  asks on the terminal through one long-lived reader
"""

import itertools
import logging
import queue
import sys
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, TextIO, Tuple


logger = logging.getLogger(__name__)

APPROVE_CHOICE = "Approve"
REJECT_CHOICE = "Reject"


class ApprovalDecision(Enum):
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass(frozen=True)
class ApprovalRequest:
    tool_name: str
    target: Optional[str]
    intent_id: Optional[str] = None
    choices: Tuple[str, str] = (APPROVE_CHOICE, REJECT_CHOICE)

    @property
    def prompt(self) -> str:
        action = self.tool_name.replace("_", " ")
        target = self.target or "(unknown target)"
        prompt = f"Allow AI to {action} {target}?"
        if self.intent_id:
            prompt += f" [intent {self.intent_id}]"
        return prompt


def decision_from_choice(choice: Optional[str]) -> ApprovalDecision:
    """Map a channel reply to a decision. Cancellation is a rejection."""
    if choice == APPROVE_CHOICE:
        return ApprovalDecision.APPROVED
    return ApprovalDecision.REJECTED


class ApprovalGate:
    """Capability interface."""

    def request_approval(self, request: ApprovalRequest) -> ApprovalDecision:
        raise NotImplementedError


class StaticApprovalGate(ApprovalGate):
    """Answers every request the same way and remembers what it was asked."""

    def __init__(self, decision: ApprovalDecision = ApprovalDecision.APPROVED):
        self.decision = decision
        self.requests = []

    def request_approval(self, request: ApprovalRequest) -> ApprovalDecision:
        self.requests.append(request)
        return self.decision


class CallbackApprovalGate(ApprovalGate):
    """
    Delegates to a UI callable that receives the request and returns
    one of its choices (or None when the dialog is dismissed).

    The callable runs on a daemon thread. If no answer arrives within
    timeout seconds the request is rejected. A reply that arrives later
    lands in that request's own slot and is never seen.
    """

    def __init__(
        self,
        callback: Callable[[ApprovalRequest], Optional[str]],
        timeout: Optional[float] = 300.0
    ):
        self.callback = callback
        self.timeout = timeout

    def request_approval(self, request: ApprovalRequest) -> ApprovalDecision:
        reply = {}

        def ask():
            try:
                reply["choice"] = self.callback(request)
            except Exception as e:
                reply["error"] = e

        worker = threading.Thread(target=ask, name="intentgate-approval", daemon=True)
        worker.start()
        worker.join(self.timeout)

        if worker.is_alive():
            logger.warning("Approval timed out after %ss: %s", self.timeout, request.prompt)
            return ApprovalDecision.REJECTED
        if "error" in reply:
            raise reply["error"]

        decision = decision_from_choice(reply.get("choice"))
        logger.info("Approval %s: %s", decision.value, request.prompt)
        return decision


class ConsoleApprovalGate(ApprovalGate):
    """
    Terminal prompt. Empty or unrecognised input rejects.

    One reader thread owns the input stream for the life of the gate.
    Each line is tagged with the request that was waiting when it
    arrived, and a request only accepts answers carrying its own id.
    An answer typed after its prompt timed out is dropped; it never
    answers the next prompt. End of input rejects every later request.
    """

    def __init__(
        self,
        readline: Optional[Callable[[], str]] = None,
        output: Optional[TextIO] = None,
        timeout: Optional[float] = 300.0
    ):
        self.readline = readline or sys.stdin.readline
        self.output = output
        self.timeout = timeout
        self._answers: queue.Queue = queue.Queue()
        self._lock = threading.Lock()
        self._sequence = itertools.count(1)
        self._pending: Optional[int] = None
        self._closed = False
        self._reader: Optional[threading.Thread] = None

    def request_approval(self, request: ApprovalRequest) -> ApprovalDecision:
        request_id = next(self._sequence)
        with self._lock:
            closed = self._closed
            if not closed:
                self._pending = request_id
                self._start_reader()

        if closed:
            logger.warning("Approval input is closed: %s", request.prompt)
            return ApprovalDecision.REJECTED

        approve, reject = request.choices
        output = self.output or sys.stdout
        output.write(f"{request.prompt} [{approve[0].lower()}/{reject[0].lower()}] ")
        output.flush()

        try:
            answered, line = self._await_answer(request_id)
        finally:
            with self._lock:
                if self._pending == request_id:
                    self._pending = None

        if not answered:
            logger.warning("Approval timed out after %ss: %s", self.timeout, request.prompt)
            return ApprovalDecision.REJECTED

        decision = decision_from_choice(self._parse(line, request))
        logger.info("Approval %s: %s", decision.value, request.prompt)
        return decision

    def _start_reader(self) -> None:
        if self._reader is None:
            self._reader = threading.Thread(
                target=self._read_answers, name="intentgate-console-reader", daemon=True
            )
            self._reader.start()

    def _read_answers(self) -> None:
        """Background thread that tags each input line with the waiting request."""
        while True:
            try:
                line = self.readline()
            except EOFError:
                line = ""

            with self._lock:
                request_id = self._pending
                if not line:
                    self._closed = True

            if request_id is not None:
                self._answers.put((request_id, line or None))
            elif line:
                logger.debug("Dropping approval answer with no prompt waiting: %r", line.strip())

            if not line:
                return

    def _await_answer(self, request_id: int) -> Tuple[bool, Optional[str]]:
        """(True, line) for this request's answer, (False, None) on timeout."""
        deadline = None if self.timeout is None else time.monotonic() + self.timeout

        while True:
            remaining = None
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return False, None

            try:
                answer_id, line = self._answers.get(timeout=remaining)
            except queue.Empty:
                return False, None

            if answer_id == request_id:
                return True, line
            logger.debug("Dropping late answer for approval request %d", answer_id)

    @staticmethod
    def _parse(line: Optional[str], request: ApprovalRequest) -> Optional[str]:
        if line is None:
            return None

        approve, reject = request.choices
        answer = line.strip().lower()
        if answer in (approve.lower(), approve[0].lower()):
            return approve
        if answer in (reject.lower(), reject[0].lower()):
            return reject
        return None
