"""ORM models shared across applications."""

# モデルの循環インポートを避けるため、ここで一括インポート
from .user import ACTIVE_STATUS, Role, User
from .client import Client

__all__ = ["ACTIVE_STATUS", "Client", "Role", "User"]
