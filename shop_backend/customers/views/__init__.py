from .guest_session import GuestSessionCreateView

__all__ = ["GuestSessionCreateView"]
