"""Account endpoints: captcha, registration, login, token refresh and ``/me``."""

from __future__ import annotations

import base64

from flask import Blueprint

from appupdate.api.deps import current_account, json_body, json_response, require_auth, timing
from appupdate.core.security import get_security
from appupdate.schemas import (
    AccountSchema,
    CaptchaResponseSchema,
    LoginResponseSchema,
    LoginSchema,
    RefreshTokenSchema,
    RegisterResponseSchema,
    RegisterSchema,
    TokenPairSchema,
)
from appupdate.services.auth.dto import LoginIn, RefreshIn, RegisterIn

bp = Blueprint("users", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
refresh_schema = RefreshTokenSchema()
captcha_out = CaptchaResponseSchema()
register_out = RegisterResponseSchema()
login_out = LoginResponseSchema()
token_pair_out = TokenPairSchema()
account_out = AccountSchema()


@bp.post("/captcha")
@timing
def captcha():
    """Issue a one-time captcha; the image is a base64-encoded PNG."""

    issued = get_security().captcha.issue()
    body = {
        "captcha_id": issued.captcha_id,
        "captcha_image": base64.b64encode(issued.image_png).decode("ascii"),
    }
    return json_response(captcha_out.dump(body))


@bp.post("/register")
@timing
def register():
    data = register_schema.load(json_body())
    result = get_security().auth.register(RegisterIn(**data))
    return json_response(register_out.dump(result))


@bp.post("/login")
@timing
def login():
    """Authenticate and bind a new token pair, superseding any earlier one."""

    data = login_schema.load(json_body())
    result = get_security().auth.login(LoginIn(**data))
    return json_response(login_out.dump(result))


@bp.post("/refresh_token")
@timing
def refresh_token():
    data = refresh_schema.load(json_body())
    result = get_security().auth.refresh(RefreshIn(**data))
    return json_response(token_pair_out.dump(result))


@bp.post("/me")
@require_auth
@timing
def me():
    """Return the profile of the account owning the bearer token."""

    profile = get_security().auth.whoami(current_account().id)
    return json_response(account_out.dump(profile))
