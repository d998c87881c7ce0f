"""Timed coding challenges.

Per instance:

    NOT_STARTED -> IN_PROGRESS -> SUBMITTED
                               -> TIMED_OUT

The countdown is evaluated against a monotonic clock whenever the instance
is observed, so reaching zero moves it to TIMED_OUT without a background
task. Once TIMED_OUT or SUBMITTED no further submission is accepted.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from skillfriend.backend.errors import ChallengeError
from skillfriend.backend.models import Game

DEFAULT_DURATION_SECONDS = 300
PREVIEW_LINES = 3


class ChallengeState(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    SUBMITTED = "submitted"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class ChallengeProblem:
    """Problem statement plus the code the editor starts with."""

    problem: str
    starter_code: str

    @property
    def preview(self) -> str:
        return "\n".join(self.problem.split("\n")[:PREVIEW_LINES]) + "..."


PROBLEMS: dict[str, ChallengeProblem] = {
    "Python Code Challenge": ChallengeProblem(
        problem="""Write a Python function that finds the maximum element in a list:

def find_max(numbers):
    # Your code here
    pass

# Example: find_max([1, 5, 3, 9, 2]) should return 9""",
        starter_code="""def find_max(numbers):
    # Write your solution here
    if not numbers:
        return None
    return max(numbers)""",
    ),
    "Java Algorithm Race": ChallengeProblem(
        problem="""Write a Java method that reverses a string:

public class Solution {
    public String reverseString(String str) {
        // Your code here
        return "";
    }
}

// Example: reverseString("hello") should return "olleh\"""",
        starter_code="""public String reverseString(String str) {
    // Write your solution here
    return new StringBuilder(str).reverse().toString();
}""",
    ),
    "Frontend Debug Master": ChallengeProblem(
        problem="""Fix the CSS bug in this code to center the text:

<div class="container">
    <p>This text should be centered</p>
</div>

.container {
    width: 100%;
    height: 200px;
    background: #f0f0f0;
    /* Add CSS properties to center the text */
}""",
        starter_code=""".container {
    width: 100%;
    height: 200px;
    background: #f0f0f0;
    display: flex;
    align-items: center;
    justify-content: center;
}""",
    ),
}


def get_problem(game_title: str) -> ChallengeProblem | None:
    return PROBLEMS.get(game_title)


def format_time(seconds: int) -> str:
    """Format seconds as m:ss."""
    mins, secs = divmod(max(0, int(seconds)), 60)
    return f"{mins}:{secs:02d}"


class Challenge:
    """One play-through of a game."""

    def __init__(
        self,
        game: Game,
        duration_seconds: int = DEFAULT_DURATION_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        problem = get_problem(game.title)
        if problem is None:
            raise ChallengeError(
                f"No challenge available for '{game.title}'", code="no_problem"
            )
        self.game = game
        self.problem = problem
        self.duration_seconds = duration_seconds
        self._clock = clock
        self._started_at: float | None = None
        self._state = ChallengeState.NOT_STARTED
        self.code = ""

    @property
    def state(self) -> ChallengeState:
        if self._state is ChallengeState.IN_PROGRESS and self.time_left == 0:
            self._state = ChallengeState.TIMED_OUT
        return self._state

    @property
    def time_left(self) -> int:
        """Whole seconds remaining; full duration before start."""
        if self._started_at is None:
            return self.duration_seconds
        elapsed = self._clock() - self._started_at
        return max(0, self.duration_seconds - int(elapsed))

    @property
    def can_submit(self) -> bool:
        return self.state is ChallengeState.IN_PROGRESS and bool(self.code.strip())

    def start(self) -> None:
        if self.state is not ChallengeState.NOT_STARTED:
            raise ChallengeError("Challenge already started", code="already_started")
        self._started_at = self._clock()
        self._state = ChallengeState.IN_PROGRESS
        self.code = self.problem.starter_code

    def edit(self, code: str) -> None:
        if self.state is not ChallengeState.IN_PROGRESS:
            raise ChallengeError("Challenge is not in progress", code="not_in_progress")
        self.code = code

    def submit(self, code: str | None = None) -> None:
        """Accept the solution. The caller awards points afterwards.

        Raises:
            ChallengeError: Not started, timed out, already submitted, or blank code.
        """
        state = self.state
        if state is ChallengeState.TIMED_OUT:
            raise ChallengeError("Time Up!", code="timed_out")
        if state is ChallengeState.SUBMITTED:
            raise ChallengeError("Solution already submitted", code="already_submitted")
        if state is not ChallengeState.IN_PROGRESS:
            raise ChallengeError("Challenge has not started", code="not_started")
        if code is not None:
            self.code = code
        if not self.code.strip():
            raise ChallengeError("Solution cannot be empty", code="empty_code")
        self._state = ChallengeState.SUBMITTED

    def to_dict(self) -> dict[str, Any]:
        state = self.state
        return {
            "game_id": self.game.id,
            "title": self.game.title,
            "icon": self.game.icon,
            "points_reward": self.game.points_reward,
            "state": state.value,
            "time_left": self.time_left,
            "time_left_display": format_time(self.time_left),
            "problem": self.problem.problem if state is not ChallengeState.NOT_STARTED else None,
            "preview": self.problem.preview,
            "code": self.code,
            "can_submit": self.can_submit,
        }
