"""Client-side state controllers for mentor discovery and mentorship."""

from mentor_search.controller.mentorship_controller import MentorshipController
from mentor_search.controller.search_controller import MentorSearchController

__all__ = ["MentorSearchController", "MentorshipController"]
