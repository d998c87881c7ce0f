"""Static fixtures served by the demo backend."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def demo_users() -> list[dict[str, Any]]:
    now = _now()
    return [
        {"id": "1", "full_name": "Demo User", "email": "demo@example.com", "points": 150,
         "created_at": now, "updated_at": now},
        {"id": "2", "full_name": "Alice Johnson", "email": "alice@example.com", "points": 320,
         "created_at": now, "updated_at": now},
        {"id": "3", "full_name": "Bob Smith", "email": "bob@example.com", "points": 280,
         "created_at": now, "updated_at": now},
    ]


def demo_courses() -> list[dict[str, Any]]:
    now = _now()
    return [
        {
            "id": "1",
            "title": "React Fundamentals",
            "description": "Learn the basics of React development with hands-on projects.",
            "price": 99.00,
            "image_url": "https://images.unsplash.com/photo-1633356122544-f134324a6cee?w=400&h=250&fit=crop",
            "created_at": now,
        },
        {
            "id": "2",
            "title": "JavaScript Mastery",
            "description": "Master modern JavaScript with ES6+ features and best practices.",
            "price": 149.00,
            "image_url": "https://images.unsplash.com/photo-1627398242454-45a1465c2479?w=400&h=250&fit=crop",
            "created_at": now,
        },
        {
            "id": "3",
            "title": "Full Stack Development",
            "description": "Build complete web applications from frontend to backend.",
            "price": 199.00,
            "image_url": "https://images.unsplash.com/photo-1587620962725-abab7fe55159?w=400&h=250&fit=crop",
            "created_at": now,
        },
    ]


def demo_games() -> list[dict[str, Any]]:
    # Titles match the challenge problem catalog so every demo game is playable
    now = _now()
    return [
        {
            "id": "1",
            "title": "Python Code Challenge",
            "description": "Solve coding problems and earn points!",
            "icon": "💻",
            "points_reward": 100,
            "created_at": now,
        },
        {
            "id": "2",
            "title": "Java Algorithm Race",
            "description": "Race against time to solve algorithms.",
            "icon": "⚡",
            "points_reward": 150,
            "created_at": now,
        },
        {
            "id": "3",
            "title": "Frontend Debug Master",
            "description": "Find and fix bugs in the code.",
            "icon": "🔍",
            "points_reward": 120,
            "created_at": now,
        },
    ]
