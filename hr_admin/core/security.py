# hr_admin/core/security.py
import logging
from dataclasses import dataclass
from typing import Optional, Union

from passlib.context import CryptContext
from pydantic import SecretStr

from hr_admin.core.config import settings
from hr_admin.core.exceptions import CredentialPreparationError

logger = logging.getLogger(__name__)


def build_password_context(rounds: int = settings.BCRYPT_SALT_ROUNDS) -> CryptContext:
    """bcrypt context with the given work factor"""
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


# Password context for hashing
pwd_context = build_password_context()


@dataclass(frozen=True)
class TempCredential:
    """Auth fields written when an HR operator issues a temporary password.

    The permanent password stays unset until the employee changes the
    temporary one.
    """
    temp_password_hash: str
    changed_temp_password: bool = False
    password: Optional[str] = None

    def as_fields(self) -> dict:
        return {
            "temp_password_hash": self.temp_password_hash,
            "changed_temp_password": self.changed_temp_password,
            "password": self.password,
        }


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify that the plain password matches the hashed password"""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str, context: Optional[CryptContext] = None) -> str:
    """Get password hash"""
    return (context or pwd_context).hash(password)


def prepare_temp_credential(
    plaintext: Union[str, SecretStr, None],
    context: Optional[CryptContext] = None,
) -> Optional[TempCredential]:
    """Hash a temporary password and drop the plaintext.

    Returns None when no temporary password was supplied. Hashing failures
    surface as CredentialPreparationError; the plaintext is never used as a
    fallback.
    """
    if isinstance(plaintext, SecretStr):
        plaintext = plaintext.get_secret_value()
    if not plaintext:
        return None

    try:
        hashed = get_password_hash(str(plaintext), context)
    except Exception as e:
        logger.error(f"Temporary password hashing failed: {type(e).__name__}")
        raise CredentialPreparationError("could not prepare credential") from e
    finally:
        del plaintext

    return TempCredential(temp_password_hash=hashed)
