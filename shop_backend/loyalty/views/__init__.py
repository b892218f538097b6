from .loyalty import CashbackPreviewView, LoyaltyHistoryView, LoyaltyInfoView

__all__ = ["CashbackPreviewView", "LoyaltyHistoryView", "LoyaltyInfoView"]
