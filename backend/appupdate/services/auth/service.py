# appupdate/services/auth/service.py
from __future__ import annotations

import logging
import uuid

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from appupdate.models.account import USERNAME_MAX_LENGTH, Account
from appupdate.services._shared.base import BaseService
from appupdate.services._shared.errors import (
    AccountNotFoundError,
    InternalServiceError,
    NotFoundError,
    ServiceError,
    TokenError,
    UnauthorizedError,
)
from appupdate.services._shared.ports import (
    PasswordHasher,
    SessionBindingStore,
    TokenCodec,
    TokenPair,
    TokenSlot,
)
from appupdate.services.auth.dto import (
    AccountOut,
    LoginIn,
    LoginOut,
    RefreshIn,
    RegisterIn,
    RegisterOut,
    TokenPairOut,
)
from appupdate.services.captcha.service import CaptchaService

log = logging.getLogger(__name__)

# Same text for "no such user" and "wrong password" so usernames cannot be enumerated.
INVALID_CREDENTIALS = "Incorrect username or password"
STALE_REFRESH = "Refresh token is no longer valid, please log in again"


def _to_account_out(account: Account) -> AccountOut:
    return AccountOut(
        id=str(account.id),
        username=account.username,
        full_name=account.full_name,
        created_at=account.created_at,
        is_deleted=account.is_deleted,
    )


class AuthService(BaseService):
    """
    Authentication lifecycle service (register / login / refresh / whoami).

    Captchas are consumed through :class:`CaptchaService`, passwords checked via
    a :class:`PasswordHasher`, tokens minted by a :class:`TokenCodec`, and the
    single live token pair per account is kept by a :class:`SessionBindingStore`.
    """

    def __init__(
        self,
        *,
        captcha: CaptchaService,
        hasher: PasswordHasher,
        codec: TokenCodec,
        bindings: SessionBindingStore,
    ) -> None:
        """
        Initialize the service with its collaborators.

        :param captcha: One-time captcha validation.
        :param hasher: Password hashing/verification.
        :param codec: Access/refresh token signing.
        :param bindings: Store of the currently bound token pair.
        """
        super().__init__()
        self.captcha = captcha
        self.hasher = hasher
        self.codec = codec
        self.bindings = bindings

    # ------------------------------------------------------------------ #
    # Register
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> RegisterOut:
        """
        Create an account.

        Checks run in a fixed order; cheap input checks come first so that a
        malformed request never consumes the caller's captcha.

        :param dto: Registration input.
        :returns: Created username and a confirmation message.
        :raises ServiceError: On blank/mismatched input or duplicate username.
        :raises CaptchaExpiredOrMissingError: Captcha unknown or expired.
        :raises CaptchaMismatchError: Captcha code wrong.
        :raises InternalServiceError: If hashing or persistence fails.
        """
        username = (dto.username or "").strip()
        if not username:
            raise ServiceError("Username cannot be empty")
        if len(username) > USERNAME_MAX_LENGTH:
            raise ServiceError(f"Username must be at most {USERNAME_MAX_LENGTH} characters")
        if not dto.password:
            raise ServiceError("Password cannot be empty")
        if dto.password != dto.confirm_password:
            raise ServiceError("Passwords do not match")

        self.captcha.validate(dto.captcha_id, dto.captcha_code)

        with self.ro_uow() as uow:
            taken = uow.accounts.exists_by_username(username)
        if taken:
            raise ServiceError(f"Username '{username}' already exists")

        try:
            password_hash = self.hasher.hash(dto.password)
        except Exception as exc:
            raise InternalServiceError("password hashing failed") from exc

        try:
            with self.rw_uow() as uow:
                account = uow.accounts.add(
                    Account(
                        username=username,
                        password_hash=password_hash,
                        full_name=username,
                        access_token="",
                        refresh_token="",
                        is_deleted=False,
                    )
                )
                account_id = account.id
        except IntegrityError as exc:
            # Lost a race against a concurrent registration of the same name
            raise ServiceError(f"Username '{username}' already exists") from exc
        except SQLAlchemyError as exc:
            raise InternalServiceError("failed to create account") from exc

        log.info("account registered", extra={"account_id": str(account_id)})
        return RegisterOut(username=username, create_info=f"User '{username}' created successfully!")

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Authenticate credentials and bind a fresh token pair.

        Binding replaces any earlier pair, so tokens from a previous login stop
        authorizing immediately.

        :param dto: Login input.
        :returns: New token pair and a confirmation message.
        :raises ServiceError: Unknown user, deleted account or wrong password.
        :raises InternalServiceError: If signing or persistence fails.
        """
        self.captcha.validate(dto.captcha_id, dto.captcha_code)

        username = (dto.username or "").strip()
        with self.ro_uow() as uow:
            account = uow.accounts.get_by_username(username) if username else None
            if account is None:
                raise ServiceError(INVALID_CREDENTIALS)
            account_id = str(account.id)
            account_username = account.username
            is_deleted = account.is_deleted
            password_hash = account.password_hash

        if is_deleted:
            log.info("login refused for deleted account", extra={"account_id": account_id})
            raise ServiceError("Account has been deleted")

        if not self.hasher.verify(dto.password or "", password_hash):
            log.info("login refused: bad password", extra={"account_id": account_id})
            raise ServiceError(INVALID_CREDENTIALS)

        pair = self._issue_pair(account_id, account_username)
        try:
            self.bindings.bind(account_id, pair.access_token, pair.refresh_token)
        except AccountNotFoundError as exc:
            # Row vanished between lookup and bind
            raise InternalServiceError("account disappeared during login") from exc

        log.info("login succeeded", extra={"account_id": account_id})
        return LoginOut(
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
            login_info=f"User '{account_username}' logged in successfully!",
        )

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> TokenPairOut:
        """
        Rotate the token pair using the currently bound refresh token.

        :param dto: Account id and the presented refresh token.
        :returns: Brand-new token pair.
        :raises UnauthorizedError: Bad id, stale binding, invalid or expired
            token, or a concurrent rotation won the swap.
        """
        try:
            account_key = uuid.UUID(str(dto.account_id))
        except ValueError as exc:
            raise UnauthorizedError("Invalid account id") from exc
        account_id = str(account_key)

        with self.ro_uow() as uow:
            account = uow.accounts.get(account_key)
            username = account.username if account is not None else None
        if username is None or not self.bindings.is_bound(
            account_id, dto.refresh_token, TokenSlot.REFRESH
        ):
            log.info("refresh refused: stale binding", extra={"account_id": account_id})
            raise UnauthorizedError(STALE_REFRESH)

        try:
            claims = self.codec.decode_refresh(dto.refresh_token)
        except TokenError as exc:
            raise UnauthorizedError(f"Refresh token rejected: {exc}") from exc
        if claims.account_id != account_id:
            raise UnauthorizedError(STALE_REFRESH)

        pair = self._issue_pair(account_id, username)
        if not self.bindings.rebind(
            account_id, dto.refresh_token, pair.access_token, pair.refresh_token
        ):
            log.warning("refresh lost rotation race", extra={"account_id": account_id})
            raise UnauthorizedError(STALE_REFRESH)

        log.info("token pair rotated", extra={"account_id": account_id})
        return TokenPairOut(access_token=pair.access_token, refresh_token=pair.refresh_token)

    # ------------------------------------------------------------------ #
    # Whoami
    # ------------------------------------------------------------------ #

    def whoami(self, account_id: str) -> AccountOut:
        """
        Return the public profile of an account.

        :raises NotFoundError: If the account does not exist.
        """
        with self.ro_uow() as uow:
            account = uow.accounts.get(uuid.UUID(str(account_id)))
            if account is None:
                raise NotFoundError("Account", account_id)
            return _to_account_out(account)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _issue_pair(self, account_id: str, username: str) -> TokenPair:
        try:
            return TokenPair(
                access_token=self.codec.issue_access(account_id, username),
                refresh_token=self.codec.issue_refresh(account_id, username),
            )
        except Exception as exc:
            raise InternalServiceError("token signing failed") from exc
