import logging

from flask_jwt_extended import create_access_token, create_refresh_token

from storefront.extensions import db
from storefront.enums import UserRole
from storefront.exceptions import ConflictError, NotFoundError
from storefront.models.user import User

logger = logging.getLogger(__name__)


class AuthService:
    """Registration, credential login and token issuance"""

    @staticmethod
    def register_user(name: str, email: str, password: str, role: UserRole = UserRole.CUSTOMER) -> User:
        email = email.strip().lower()
        if User.query.filter_by(email=email).first():
            raise ConflictError("User already exists")

        user = User(email=email, name=name, role=role)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()

        logger.info("Registered user %s with role %s", user.id, role.value)
        return user

    @staticmethod
    def login_user(email: str, password: str) -> dict:
        """Authenticate user and generate tokens"""
        user = User.query.filter_by(email=email.strip().lower()).first()

        if not user or not user.check_password(password):
            raise ValueError("Invalid credentials")

        if not user.is_active:
            raise ValueError("Account is deactivated")

        claims = {"role": user.role.value}
        access_token = create_access_token(identity=user.id, additional_claims=claims)
        refresh_token = create_refresh_token(identity=user.id, additional_claims=claims)

        return {
            "access_token": access_token,
            "refresh_token": refresh_token,
            "user": user.to_dict(),
        }

    @staticmethod
    def get_user_by_id(user_id: str) -> User:
        user = db.session.get(User, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def ensure_admin(email: str, password: str, name: str = "Admin") -> User:
        """Create the admin account, or reset its password and role if it exists"""
        email = email.strip().lower()
        user = User.query.filter_by(email=email).first()
        if user is None:
            user = User(email=email, name=name)
            db.session.add(user)

        user.role = UserRole.ADMIN
        user.is_active = True
        user.set_password(password)
        db.session.commit()
        return user
