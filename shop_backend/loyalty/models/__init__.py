from .bonus_entry import BonusEntry
from .loyalty_account import LoyaltyAccount

__all__ = ["BonusEntry", "LoyaltyAccount"]
