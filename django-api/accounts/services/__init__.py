from accounts.services.authorization import authorize_member

__all__ = ["authorize_member"]
