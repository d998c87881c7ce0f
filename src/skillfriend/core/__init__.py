"""Client-side state and section logic.

Modules:
- session: per-client auth session (user, profile, demo flag)
- forms: sign-in / sign-up validation
- courses: course listing and enrollment
- games: games, leaderboard, points award
- challenge: timed challenge state machine
- results: FetchResult / MutationResult / Notification
- content: static page copy
"""

__all__ = [
    "session",
    "forms",
    "courses",
    "games",
    "challenge",
    "results",
    "content",
]
