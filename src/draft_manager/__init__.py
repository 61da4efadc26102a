from src.draft_manager.draft_rules import DraftRules, ValidationError, validate_settings
from src.draft_manager.draft_state import (
    CustomScoring,
    DraftSettings,
    DraftState,
    Pick,
    Player,
    TeamRoster,
)
from src.draft_manager.roster_needs import RosterNeeds

__all__ = [
    "CustomScoring",
    "DraftRules",
    "DraftSettings",
    "DraftState",
    "Pick",
    "Player",
    "RosterNeeds",
    "TeamRoster",
    "ValidationError",
    "validate_settings",
]
