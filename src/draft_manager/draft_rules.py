"""League settings validation.

The valuation core assumes well-formed settings; hosts run these checks once
when a draft session is configured, before any snapshot reaches the core.
"""

from typing import List, Tuple

from src.draft_manager.config import (
    DRAFT_TYPES,
    NON_POSITION_SLOT_KEYS,
    POSITIONS,
    SCORING_FORMATS,
)
from src.draft_manager.draft_state import DraftSettings


class ValidationError(ValueError):
    """Raised when league settings are malformed."""

    pass


class DraftRules:
    """Validates draft settings supplied by the host."""

    def __init__(self, settings: DraftSettings):
        self.settings = settings

    def check_settings(self) -> Tuple[bool, List[str]]:
        """
        Check every settings field.

        Returns:
            (is_valid, list_of_errors)
        """
        settings = self.settings
        errors = []

        if settings.league_size < 1:
            errors.append(f"league_size must be at least 1 (got {settings.league_size})")
        elif not 1 <= settings.draft_slot <= settings.league_size:
            errors.append(
                f"draft_slot ({settings.draft_slot}) must be in range "
                f"[1, {settings.league_size}]"
            )

        if settings.number_of_rounds < 1:
            errors.append(
                f"number_of_rounds must be at least 1 (got {settings.number_of_rounds})"
            )

        if settings.draft_type not in DRAFT_TYPES:
            errors.append(f"Unknown draft_type: {settings.draft_type!r}")

        if settings.scoring_format not in SCORING_FORMATS:
            errors.append(f"Unknown scoring_format: {settings.scoring_format!r}")
        elif settings.scoring_format == "custom" and settings.custom_scoring is None:
            errors.append("scoring_format 'custom' requires custom_scoring weights")

        for slot, count in settings.roster_slots.items():
            if slot not in POSITIONS and slot not in NON_POSITION_SLOT_KEYS:
                errors.append(f"Unknown roster slot: {slot!r}")
            if not isinstance(count, int) or isinstance(count, bool) or count < 0:
                errors.append(f"Roster slot {slot} must be a non-negative integer (got {count!r})")

        return (len(errors) == 0, errors)

    def validate_settings(self):
        """Raise :class:`ValidationError` listing every problem found."""
        is_valid, errors = self.check_settings()
        if not is_valid:
            raise ValidationError("Invalid draft settings: " + "; ".join(errors))


def validate_settings(settings: DraftSettings):
    """Convenience wrapper around :meth:`DraftRules.validate_settings`."""
    DraftRules(settings).validate_settings()
