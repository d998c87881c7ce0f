"""Static copy for the hero, contact page, navigation and setup notice."""

from __future__ import annotations

from dataclasses import asdict, dataclass

APP_NAME = "Skill Friend"
APP_TAGLINE = "Your AI-Powered Learning Companion"


@dataclass(frozen=True)
class Founder:
    name: str
    email: str
    role: str

    @property
    def mailto(self) -> str:
        return f"mailto:{self.email}"


@dataclass(frozen=True)
class InquiryTopic:
    icon: str
    title: str
    description: str


@dataclass(frozen=True)
class NavItem:
    label: str
    section_id: str


HERO = {
    "section_id": "home",
    "headline": "Your Personal AI Learning Companion",
    "tagline": (
        "Master new skills with AI-powered courses, gamified learning, "
        "and a supportive community."
    ),
    "cta_label": "Explore Courses",
    "cta_target": "courses",
    "image_url": "https://images.unsplash.com/photo-1516321318423-f06f85e504b3?w=600&h=400&fit=crop",
}

FOUNDERS = (
    Founder("M.CHIRU", "chirusai0302@gmail.com", "Founder & CEO"),
    Founder("K.NAVEEN", "naveenkottapalli42@gmail.com", "Co-Founder & CTO"),
    Founder("A.MAHENDRA", "anisettimahendra991@gmail.com", "Co-Founder & COO"),
)

INQUIRY_TOPICS = (
    InquiryTopic("📚", "Course Inquiries",
                 "Questions about our Python, Java, or Frontend Development courses"),
    InquiryTopic("🎮", "Platform Features",
                 "Feedback on our gamified learning experience and coding challenges"),
    InquiryTopic("💼", "Partnerships", "Business partnerships and collaboration opportunities"),
    InquiryTopic("🔧", "Technical Support",
                 "Technical issues, bug reports, and platform assistance"),
)

CONTACT_RESPONSE_TIME = "We typically respond within 24 hours during business days."

NAV_ITEMS = (
    NavItem("Home", "home"),
    NavItem("Courses", "courses"),
    NavItem("Games", "games"),
    NavItem("Leaderboard", "leaderboard"),
)

DEMO_BANNER_TEXT = "Authentication disabled. Set up Supabase to enable full features."

SETUP_TITLE = "Supabase Setup Required"
SETUP_DESCRIPTION = (
    "To enable authentication and database features, please configure your "
    "Supabase credentials."
)
SETUP_STEPS = (
    "Create a Supabase project",
    "Copy the project URL and anon key from Project Settings > API",
    "Set SUPABASE_URL and SUPABASE_ANON_KEY in the environment",
    "Restart the server",
)

NOT_FOUND_MESSAGE = "Oops! Page not found"

ERROR_TITLE = "Something went wrong"
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."
ERROR_HINTS = (
    "Your Supabase configuration is correct",
    "Environment variables are set properly",
    "Database schema is set up correctly",
)


def contact_page() -> dict:
    return {
        "title": "Contact Our Team",
        "subtitle": (
            f"Get in touch with the founders of {APP_NAME}. "
            "We're here to help you on your learning journey."
        ),
        "founders": [{**asdict(f), "mailto": f.mailto} for f in FOUNDERS],
        "topics": [asdict(t) for t in INQUIRY_TOPICS],
        "response_time": CONTACT_RESPONSE_TIME,
    }
