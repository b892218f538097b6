from .guest_session import GuestSession

__all__ = ["GuestSession"]
