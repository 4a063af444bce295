"""Per-guest course selection rules.

Rules run per guest in submission order and the first failure wins. The
message is shown to the visitor as-is.
"""

from typing import Iterable, List

from app.services.pricing_service import CourseOption, GuestSelection

RULE_NO_GUESTS = "no_guests"
RULE_NAME = "name_required"
RULE_MAIN = "main_required"
RULE_THREE_COURSE = "three_course_incomplete"
RULE_TWO_COURSE = "two_course_incomplete"


class SelectionValidationError(ValueError):
    """A guest's selection breaks a course rule."""

    def __init__(self, message: str, rule: str, guest_name: str = ""):
        super().__init__(message)
        self.message = message
        self.rule = rule
        self.guest_name = guest_name


def validate_guest(selection: GuestSelection) -> None:
    """Check a single guest; raises SelectionValidationError."""
    name = (selection.guest_name or "").strip()
    if not name:
        raise SelectionValidationError("All guests must have a name", RULE_NAME)

    if selection.main_id is None:
        raise SelectionValidationError(
            f"{name} must select a main course", RULE_MAIN, name
        )

    option = CourseOption(selection.course_option)
    if option == CourseOption.THREE_COURSE:
        if selection.starter_id is None or selection.dessert_id is None:
            raise SelectionValidationError(
                f"{name} must select a starter, main, and dessert for 3-course meal",
                RULE_THREE_COURSE,
                name,
            )
    elif selection.starter_id is None and selection.dessert_id is None:
        # Picking both is allowed and still priced as 2-course
        raise SelectionValidationError(
            f"{name} must select either a starter or dessert for 2-course meal",
            RULE_TWO_COURSE,
            name,
        )


def validate_selections(selections: Iterable[GuestSelection]) -> None:
    """Validate every guest of a booking."""
    selections: List[GuestSelection] = list(selections)
    if not selections:
        raise SelectionValidationError("At least one guest is required", RULE_NO_GUESTS)
    for selection in selections:
        validate_guest(selection)
