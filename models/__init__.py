from .user_models import UserAccount, hash_password, verify_password

__all__ = [
    "UserAccount",
    "hash_password",
    "verify_password",
]
