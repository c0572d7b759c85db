"""
User Use Cases
"""

from .load_identity_use_case import LoadIdentityUseCase
from .register_user_use_case import RegisterUserUseCase

__all__ = ["LoadIdentityUseCase", "RegisterUserUseCase"]
