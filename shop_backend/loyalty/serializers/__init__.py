from .loyalty import (
    BonusEntrySerializer,
    CashbackPreviewQuerySerializer,
    CashbackPreviewSerializer,
    LoyaltyInfoSerializer,
)

__all__ = [
    "BonusEntrySerializer",
    "CashbackPreviewQuerySerializer",
    "CashbackPreviewSerializer",
    "LoyaltyInfoSerializer",
]
