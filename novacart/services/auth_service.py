# novacart/services/auth_service.py
import jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from novacart.data.models import Role, UserModel
from novacart.domain.errors import AuthError, ConflictError
from novacart.domain.schemas import TokenPayload
from novacart.repos.user_repo import UserRepo
from novacart.utils.security import create_access_token, decode_access_token, hash_password, verify_password
from novacart.utils.logging import get_logger

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid credentials."
EMAIL_TAKEN = "User with this email already exists."


class AuthService:
    """
    Registration, login and token checks.

    Login failures and token failures each collapse into one message so the
    caller can't tell which check failed.
    """

    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def register(self, name: str, email: str, password: str) -> tuple[UserModel, str]:
        email = normalize_email(email)

        if self.repo.get_by_email(email):
            raise ConflictError(EMAIL_TAKEN)

        user = UserModel(
            name=name.strip(),
            email=email,
            password_hash=hash_password(password),
            role=Role.CUSTOMER,
        )

        try:
            created = self.repo.create_user(user)
        except IntegrityError:
            #same email registered concurrently
            self.repo.rollback()
            raise ConflictError(EMAIL_TAKEN)

        logger.info(f"Registered user {created.id}")
        return created, issue_token(created)

    def login(self, email: str, password: str) -> tuple[UserModel, str]:
        user = self.repo.get_by_email(normalize_email(email))

        if not user or not self._password_matches(password, user):
            raise AuthError(INVALID_CREDENTIALS)

        logger.info(f"User {user.id} logged in")
        return user, issue_token(user)

    @staticmethod
    def authenticate(token: str | None) -> TokenPayload:
        if not token:
            raise AuthError()

        try:
            payload = decode_access_token(token)
        except jwt.PyJWTError as e:
            logger.info(f"Rejected token: {type(e).__name__}")
            raise AuthError() from e

        user_id = payload.get("id")
        role = payload.get("role")
        if not isinstance(user_id, int) or isinstance(user_id, bool) or not isinstance(role, str):
            raise AuthError()

        return TokenPayload(user_id=user_id, role=role)

    @staticmethod
    def _password_matches(password: str, user: UserModel) -> bool:
        try:
            return verify_password(password, user.password_hash)
        except ValueError:
            #unrecognised hash format
            logger.warning(f"Stored password hash for user {user.id} could not be verified")
            return False


def normalize_email(email: str) -> str:
    return email.strip().lower()


def issue_token(user: UserModel) -> str:
    return create_access_token({"id": user.id, "role": role_name(user.role)})


def role_name(role) -> str:
    return role.value if isinstance(role, Role) else str(role)
