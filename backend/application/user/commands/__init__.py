from .authenticate_user import AuthenticateUserCommand

__all__ = ["AuthenticateUserCommand"]
