"""Factory Boy definitions for :class:`appupdate.models.Account` and channels."""

from __future__ import annotations

import factory
from appupdate.infra.security.werkzeug_password_hasher import WerkzeugPasswordHasher
from appupdate.models import Account, AppChannel

from tests.factories import BaseFactory

DEFAULT_PASSWORD = "Passw0rd!"

# Cheap hashing; the real method is exercised by the hasher tests
hasher = WerkzeugPasswordHasher(method="pbkdf2:sha256:1000")


class AccountFactory(BaseFactory):
    """
    Build persisted accounts with no bound tokens.

    Pass ``password="..."`` to choose the plain password.
    """

    class Meta:
        model = Account

    username = factory.Sequence(lambda n: f"user{n}")
    full_name = factory.LazyAttribute(lambda o: o.username)
    password_hash = factory.LazyFunction(lambda: hasher.hash(DEFAULT_PASSWORD))
    access_token = ""
    refresh_token = ""
    is_deleted = False

    @factory.post_generation
    def password(obj, create, extracted, **kwargs):
        if extracted:
            obj.password_hash = hasher.hash(extracted)


class AppChannelFactory(BaseFactory):
    class Meta:
        model = AppChannel

    channel_name = factory.Sequence(lambda n: f"channel-{n}")
    owner_id = factory.LazyFunction(lambda: AccountFactory().id)
    is_deleted = False
