from appupdate.models.account import Account
from appupdate.models.app_channel import AppChannel

__all__ = ["Account", "AppChannel"]
